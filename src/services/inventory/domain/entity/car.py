from services.inventory.domain.value_object import CarId
from services.shared.domain import Entity, Money


class Car(Entity[CarId]):
    """レンタカー

    is_available は期間を持たない粗い空きフラグ。
    貸出中は期間に関係なく全体が埋まっているものとして扱う。
    """

    def __init__(
        self,
        id: CarId,
        make: str,
        model: str,
        category: str,
        price_per_day: Money,
        is_available: bool = True,
    ) -> None:
        super().__init__(id)
        self._make = make
        self._model = model
        self._category = category
        self._price_per_day = price_per_day
        self._is_available = is_available

    @property
    def make(self) -> str:
        return self._make

    @property
    def model(self) -> str:
        return self._model

    @property
    def category(self) -> str:
        return self._category

    @property
    def price_per_day(self) -> Money:
        return self._price_per_day

    @property
    def is_available(self) -> bool:
        return self._is_available
