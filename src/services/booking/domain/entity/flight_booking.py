from services.booking.domain.entity.meal_booking import MealBooking
from services.booking.domain.value_object import BookingId, Contact, LineItemId
from services.inventory.domain import FlightId, SeatId
from services.shared.domain import Entity, Money


class FlightBooking(Entity[LineItemId]):
    """フライトの予約明細

    flight_price / seat_price は予約時点の価格スナップショット（座席指定なしなら0）。
    機内食は子明細として保持するが、金額は別の明細として計上する。
    """

    def __init__(
        self,
        id: LineItemId,
        booking_id: BookingId,
        flight_id: FlightId,
        passenger: Contact,
        flight_price: Money,
        seat_price: Money,
        seat_id: SeatId | None = None,
        passenger_passport: str | None = None,
        meal_bookings: list[MealBooking] | None = None,
    ) -> None:
        super().__init__(id)
        self._booking_id = booking_id
        self._flight_id = flight_id
        self._seat_id = seat_id
        self._passenger = passenger
        self._passenger_passport = passenger_passport
        self._flight_price = flight_price
        self._seat_price = seat_price
        self._meal_bookings = list(meal_bookings or [])

    @property
    def booking_id(self) -> BookingId:
        return self._booking_id

    @property
    def flight_id(self) -> FlightId:
        return self._flight_id

    @property
    def seat_id(self) -> SeatId | None:
        return self._seat_id

    @property
    def passenger(self) -> Contact:
        return self._passenger

    @property
    def passenger_passport(self) -> str | None:
        return self._passenger_passport

    @property
    def flight_price(self) -> Money:
        return self._flight_price

    @property
    def seat_price(self) -> Money:
        return self._seat_price

    @property
    def total_price(self) -> Money:
        """航空券 + 座席指定料金"""
        return self._flight_price.add(self._seat_price)

    @property
    def meal_bookings(self) -> list[MealBooking]:
        return list(self._meal_bookings)

    def add_meal_booking(self, meal_booking: MealBooking) -> None:
        if meal_booking.flight_booking_id != self.id:
            raise ValueError("Meal booking belongs to another flight booking")
        self._meal_bookings.append(meal_booking)
