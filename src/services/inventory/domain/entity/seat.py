from services.inventory.domain.value_object import FlightId, SeatId
from services.shared.domain import Entity, Money


class Seat(Entity[SeatId]):
    """座席（フライトに属する）"""

    def __init__(
        self,
        id: SeatId,
        flight_id: FlightId,
        seat_number: str,
        seat_class: str,
        price: Money,
        is_available: bool = True,
    ) -> None:
        super().__init__(id)
        self._flight_id = flight_id
        self._seat_number = seat_number
        self._seat_class = seat_class
        self._price = price
        self._is_available = is_available

    @property
    def flight_id(self) -> FlightId:
        return self._flight_id

    @property
    def seat_number(self) -> str:
        return self._seat_number

    @property
    def seat_class(self) -> str:
        return self._seat_class

    @property
    def price(self) -> Money:
        return self._price

    @property
    def is_available(self) -> bool:
        return self._is_available
