from abc import abstractmethod

from services.inventory.domain.entity import Meal
from services.inventory.domain.value_object import MealId
from services.shared.domain import Repository


class MealRepository(Repository[Meal, MealId]):
    """機内食リポジトリのインターフェース"""

    @abstractmethod
    def save(self, meal: Meal) -> None:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, meal_id: MealId) -> Meal | None:
        raise NotImplementedError
