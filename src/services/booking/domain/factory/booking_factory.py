from typing import NotRequired, TypedDict

from services.booking.domain.entity import (
    Booking,
    CarRental,
    FlightBooking,
    HotelBooking,
    MealBooking,
)
from services.booking.domain.enum import BookingStatus, PaymentStatus
from services.booking.domain.value_object import (
    BookingId,
    BookingReference,
    Contact,
    LineItemId,
)
from services.inventory.domain import Car, Flight, HotelRoom, Meal, Seat
from services.shared.domain import (
    Currency,
    IsoDateTime,
    Money,
    RentalPeriod,
    StayPeriod,
    UserId,
)


class MealRequest(TypedDict):
    """機内食の注文（数量省略時は1）"""

    meal_id: str
    quantity: NotRequired[int]


class FlightRequest(TypedDict):
    """フライト予約の入力データ構造"""

    flight_id: str
    passenger_name: str
    passenger_email: str
    seat_id: NotRequired[str | None]
    passenger_phone: NotRequired[str | None]
    passenger_passport: NotRequired[str | None]


class HotelRequest(TypedDict):
    """ホテル予約の入力データ構造"""

    hotel_room_id: str
    guest_name: str
    guest_email: str
    check_in_date: str
    check_out_date: str
    number_of_guests: int
    guest_phone: NotRequired[str | None]
    special_requests: NotRequired[str | None]


class CarRequest(TypedDict):
    """レンタカー予約の入力データ構造"""

    car_id: str
    renter_name: str
    renter_email: str
    renter_license: str
    pickup_date: str
    dropoff_date: str
    pickup_location: str
    dropoff_location: str
    renter_phone: NotRequired[str | None]
    additional_drivers: NotRequired[list[str] | None]
    insurance: NotRequired[bool]


class Cart(TypedDict, total=False):
    """1回の予約リクエストで指定される明細の組み合わせ"""

    flight_booking: FlightRequest
    hotel_booking: HotelRequest
    car_rental: CarRequest
    meal_bookings: list[MealRequest]


class BookingFactory:
    """予約と予約明細のファクトリ

    明細の金額はすべてここで在庫マスタからスナップショットする。
    """

    def create_booking(
        self,
        user_id: UserId,
        reference: BookingReference,
        currency: Currency,
        booked_at: IsoDateTime | None = None,
    ) -> Booking:
        """金額0・未確定の予約を生成する"""
        return Booking(
            id=BookingId.generate(),
            user_id=user_id,
            reference=reference,
            total_amount=Money.zero(currency),
            booked_at=booked_at or IsoDateTime.now(),
            status=BookingStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
        )

    def create_flight_booking(
        self,
        booking: Booking,
        flight: Flight,
        seat: Seat | None,
        request: FlightRequest,
    ) -> FlightBooking:
        """エコノミー運賃と座席料金をスナップショットする"""
        currency = flight.economy_class_price.currency
        return FlightBooking(
            id=LineItemId.generate(),
            booking_id=booking.id,
            flight_id=flight.id,
            seat_id=seat.id if seat else None,
            passenger=Contact(
                name=request["passenger_name"],
                email=request["passenger_email"],
                phone=request.get("passenger_phone"),
            ),
            passenger_passport=request.get("passenger_passport"),
            flight_price=flight.economy_class_price,
            seat_price=seat.price if seat else Money.zero(currency),
        )

    def create_meal_booking(
        self, flight_booking: FlightBooking, meal: Meal, quantity: int = 1
    ) -> MealBooking:
        return MealBooking(
            id=LineItemId.generate(),
            flight_booking_id=flight_booking.id,
            meal_id=meal.id,
            quantity=quantity,
            total_price=meal.price.multiply(quantity),
        )

    def create_hotel_booking(
        self,
        booking: Booking,
        room: HotelRoom,
        stay_period: StayPeriod,
        request: HotelRequest,
    ) -> HotelBooking:
        """泊数 × 1泊料金"""
        return HotelBooking(
            id=LineItemId.generate(),
            booking_id=booking.id,
            hotel_room_id=room.id,
            guest=Contact(
                name=request["guest_name"],
                email=request["guest_email"],
                phone=request.get("guest_phone"),
            ),
            stay_period=stay_period,
            number_of_guests=request["number_of_guests"],
            price_per_night=room.price_per_night,
            total_price=room.price_per_night.multiply(stay_period.nights()),
            special_requests=request.get("special_requests"),
        )

    def create_car_rental(
        self,
        booking: Booking,
        car: Car,
        rental_period: RentalPeriod,
        request: CarRequest,
        insurance_daily_rate: Money,
    ) -> CarRental:
        """日数 × 日額 + 保険料（保険加入時のみ、日額固定）"""
        days = rental_period.days()
        insurance = bool(request.get("insurance", False))
        insurance_cost = (
            insurance_daily_rate.multiply(days)
            if insurance
            else Money.zero(car.price_per_day.currency)
        )
        return CarRental(
            id=LineItemId.generate(),
            booking_id=booking.id,
            car_id=car.id,
            renter=Contact(
                name=request["renter_name"],
                email=request["renter_email"],
                phone=request.get("renter_phone"),
            ),
            renter_license=request["renter_license"],
            rental_period=rental_period,
            pickup_location=request["pickup_location"],
            dropoff_location=request["dropoff_location"],
            price_per_day=car.price_per_day,
            insurance=insurance,
            insurance_cost=insurance_cost,
            total_price=car.price_per_day.multiply(days).add(insurance_cost),
            additional_drivers=request.get("additional_drivers"),
        )
