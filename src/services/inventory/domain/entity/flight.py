from services.inventory.domain.value_object import FlightId
from services.shared.domain import Entity, IsoDateTime, Money


class Flight(Entity[FlightId]):
    """フライト（在庫マスタ）

    available_seats は予約1件ごとに1減る残席数。
    書き換えは FlightRepository の条件付き更新でのみ行う。
    """

    def __init__(
        self,
        id: FlightId,
        flight_number: str,
        departure_time: IsoDateTime,
        arrival_time: IsoDateTime,
        economy_class_price: Money,
        available_seats: int,
        business_class_price: Money | None = None,
        first_class_price: Money | None = None,
    ) -> None:
        super().__init__(id)
        if available_seats < 0:
            raise ValueError("Available seats cannot be negative")

        self._flight_number = flight_number
        self._departure_time = departure_time
        self._arrival_time = arrival_time
        self._economy_class_price = economy_class_price
        self._business_class_price = business_class_price
        self._first_class_price = first_class_price
        self._available_seats = available_seats

    @property
    def flight_number(self) -> str:
        return self._flight_number

    @property
    def departure_time(self) -> IsoDateTime:
        return self._departure_time

    @property
    def arrival_time(self) -> IsoDateTime:
        return self._arrival_time

    @property
    def economy_class_price(self) -> Money:
        return self._economy_class_price

    @property
    def business_class_price(self) -> Money | None:
        return self._business_class_price

    @property
    def first_class_price(self) -> Money | None:
        return self._first_class_price

    @property
    def available_seats(self) -> int:
        return self._available_seats

    def has_available_seat(self) -> bool:
        return self._available_seats >= 1
