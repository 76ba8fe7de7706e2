from services.inventory.domain.value_object import MealId
from services.shared.domain import Entity, Money


class Meal(Entity[MealId]):
    """機内食（在庫は管理しない）"""

    def __init__(self, id: MealId, name: str, meal_type: str, price: Money) -> None:
        super().__init__(id)
        self._name = name
        self._meal_type = meal_type
        self._price = price

    @property
    def name(self) -> str:
        return self._name

    @property
    def meal_type(self) -> str:
        return self._meal_type

    @property
    def price(self) -> Money:
        return self._price
