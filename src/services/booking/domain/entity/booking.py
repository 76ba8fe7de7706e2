from services.booking.domain.entity.car_rental import CarRental
from services.booking.domain.entity.flight_booking import FlightBooking
from services.booking.domain.entity.hotel_booking import HotelBooking
from services.booking.domain.enum import BookingStatus, LineItemKind, PaymentStatus
from services.booking.domain.value_object import BookingId, BookingReference
from services.shared.domain import AggregateRoot, Entity, IsoDateTime, Money, UserId
from services.shared.domain.exception import (
    BookingAlreadyCancelledException,
    BookingTerminalStateException,
    BusinessRuleViolationException,
)


class Booking(AggregateRoot[BookingId]):
    """予約（集約ルート）

    フライト・ホテル・レンタカーの明細を束ねる。
    合計金額は確定時に一度だけ明細の合計で設定され、以降は変わらない。
    キャンセルしても金額は減らさず、ステータスだけを変える。
    """

    def __init__(
        self,
        id: BookingId,
        user_id: UserId,
        reference: BookingReference,
        total_amount: Money,
        booked_at: IsoDateTime,
        status: BookingStatus = BookingStatus.PENDING,
        payment_status: PaymentStatus = PaymentStatus.PENDING,
        flight_bookings: list[FlightBooking] | None = None,
        hotel_bookings: list[HotelBooking] | None = None,
        car_rentals: list[CarRental] | None = None,
        finalized: bool = False,
    ) -> None:
        super().__init__(id)
        self._user_id = user_id
        self._reference = reference
        self._total_amount = total_amount
        self._booked_at = booked_at
        self._status = status
        self._payment_status = payment_status
        self._flight_bookings = list(flight_bookings or [])
        self._hotel_bookings = list(hotel_bookings or [])
        self._car_rentals = list(car_rentals or [])
        self._finalized = finalized

    @property
    def user_id(self) -> UserId:
        return self._user_id

    @property
    def reference(self) -> BookingReference:
        return self._reference

    @property
    def total_amount(self) -> Money:
        return self._total_amount

    @property
    def booked_at(self) -> IsoDateTime:
        return self._booked_at

    @property
    def status(self) -> BookingStatus:
        return self._status

    @property
    def payment_status(self) -> PaymentStatus:
        return self._payment_status

    @property
    def flight_bookings(self) -> list[FlightBooking]:
        return list(self._flight_bookings)

    @property
    def hotel_bookings(self) -> list[HotelBooking]:
        return list(self._hotel_bookings)

    @property
    def car_rentals(self) -> list[CarRental]:
        return list(self._car_rentals)

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def is_owned_by(self, user_id: UserId) -> bool:
        return self._user_id == user_id

    def add_flight_booking(self, flight_booking: FlightBooking) -> None:
        self._ensure_open(flight_booking.booking_id)
        self._flight_bookings.append(flight_booking)

    def add_hotel_booking(self, hotel_booking: HotelBooking) -> None:
        self._ensure_open(hotel_booking.booking_id)
        self._hotel_bookings.append(hotel_booking)

    def add_car_rental(self, car_rental: CarRental) -> None:
        self._ensure_open(car_rental.booking_id)
        self._car_rentals.append(car_rental)

    def line_items(self) -> list[tuple[LineItemKind, Entity]]:
        """明細を種類つきで返す（フライト、機内食、ホテル、レンタカーの順）"""
        items: list[tuple[LineItemKind, Entity]] = []
        for flight_booking in self._flight_bookings:
            items.append((LineItemKind.FLIGHT, flight_booking))
            for meal_booking in flight_booking.meal_bookings:
                items.append((LineItemKind.MEAL, meal_booking))
        items.extend((LineItemKind.HOTEL, h) for h in self._hotel_bookings)
        items.extend((LineItemKind.CAR, c) for c in self._car_rentals)
        return items

    def line_items_total(self) -> Money:
        """全明細の合計金額"""
        return Money.total(
            [item.total_price for _, item in self.line_items()],  # type: ignore[attr-defined]
            self._total_amount.currency,
        )

    def finalize(self) -> None:
        """合計金額を確定する"""
        if self._finalized:
            raise BusinessRuleViolationException("Booking total is already finalized")
        self._total_amount = self.line_items_total()
        self._finalized = True

    def cancel(self) -> None:
        """予約をキャンセルする

        支払済みなら返金済みに、それ以外は未払いに戻す。
        """
        if self._status == BookingStatus.CANCELLED:
            raise BookingAlreadyCancelledException("Booking is already cancelled")
        if self._status == BookingStatus.COMPLETED:
            raise BookingTerminalStateException("Cannot cancel a completed booking")

        self._status = BookingStatus.CANCELLED
        if self._payment_status == PaymentStatus.PAID:
            self._payment_status = PaymentStatus.REFUNDED
        else:
            self._payment_status = PaymentStatus.PENDING

    def _ensure_open(self, booking_id: BookingId) -> None:
        if self._finalized:
            raise BusinessRuleViolationException(
                "Cannot add line items to a finalized booking"
            )
        if booking_id != self.id:
            raise ValueError("Line item belongs to another booking")
