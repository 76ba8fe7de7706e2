from abc import abstractmethod

from services.inventory.domain.entity import Car
from services.inventory.domain.value_object import CarId
from services.shared.domain import Repository


class CarRepository(Repository[Car, CarId]):
    """レンタカーリポジトリのインターフェース"""

    @abstractmethod
    def save(self, car: Car) -> None:
        """車両を保存する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, car_id: CarId) -> Car | None:
        """車両IDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def hold(self, car: Car) -> None:
        """車両を貸出中にする（空きの場合のみ）"""
        raise NotImplementedError

    @abstractmethod
    def release(self, car_id: CarId) -> None:
        """車両を空きに戻す"""
        raise NotImplementedError
