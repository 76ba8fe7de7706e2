from collections.abc import Callable

from aws_lambda_powertools import Logger

from services.booking.domain.entity import Booking
from services.booking.domain.factory import (
    BookingFactory,
    Cart,
    CarRequest,
    FlightRequest,
    HotelRequest,
    MealRequest,
)
from services.booking.domain.repository import BookingUnitOfWork
from services.booking.domain.value_object import BookingReference
from services.booking.settings import BookingSettings
from services.inventory.domain import CarId, FlightId, HotelRoomId, MealId, RoomStay, SeatId
from services.shared.domain import Money, RentalPeriod, StayPeriod, UserId
from services.shared.domain.exception import (
    BookingReferenceConflictException,
    InfrastructureException,
    ResourceNotFoundException,
    ResourceUnavailableException,
)


class CreateBookingService:
    """予約作成のユースケース

    フライト座席・客室・レンタカーを1つの Unit of Work の中で確保し、
    合計金額を確定してまとめてコミットする。
    途中で失敗した場合は予約・明細・在庫の更新がいずれも残らない。
    """

    def __init__(
        self,
        uow_factory: Callable[[], BookingUnitOfWork],
        factory: BookingFactory,
        settings: BookingSettings,
        logger: Logger,
        reference_generator: Callable[[], BookingReference] = BookingReference.generate,
    ) -> None:
        self._uow_factory = uow_factory
        self._factory = factory
        self._settings = settings
        self._logger = logger
        self._reference_generator = reference_generator

    def create(self, user_id: UserId, cart: Cart) -> Booking:
        """予約を作成する

        予約番号の衝突はコミット時に検出されるため、
        番号を振り直してトランザクション全体をやり直す。
        """
        max_attempts = self._settings.reference_max_attempts
        attempt = 1
        while True:
            reference = self._reference_generator()
            try:
                booking = self._reserve(user_id, cart, reference)
            except BookingReferenceConflictException:
                if attempt >= max_attempts:
                    raise
                self._logger.warning(
                    "Booking reference collision, retrying",
                    extra={"booking_reference": str(reference), "attempt": attempt},
                )
                attempt += 1
                continue

            self._logger.info(
                "Booking created",
                extra={
                    "user_id": str(user_id),
                    "booking_id": str(booking.id),
                    "booking_reference": str(booking.reference),
                    "total_amount": str(booking.total_amount.amount),
                    "item_types": [kind.value for kind, _ in booking.line_items()],
                },
            )
            return booking

    def _reserve(
        self, user_id: UserId, cart: Cart, reference: BookingReference
    ) -> Booking:
        with self._uow_factory() as uow:
            booking = self._factory.create_booking(
                user_id, reference, self._settings.currency
            )

            flight_request = cart.get("flight_booking")
            if flight_request:
                self._reserve_flight(
                    uow, booking, flight_request, cart.get("meal_bookings") or []
                )

            hotel_request = cart.get("hotel_booking")
            if hotel_request:
                self._reserve_hotel(uow, booking, hotel_request)

            car_request = cart.get("car_rental")
            if car_request:
                self._reserve_car(uow, booking, car_request)

            booking.finalize()
            uow.bookings.save(booking)
            uow.commit()

        return booking

    def _reserve_flight(
        self,
        uow: BookingUnitOfWork,
        booking: Booking,
        request: FlightRequest,
        meal_requests: list[MealRequest],
    ) -> None:
        """残席を1つ減らし、座席指定があれば座席も押さえる"""
        flight_id = FlightId(request["flight_id"])
        flight = uow.flights.find_by_id(flight_id)
        if flight is None:
            raise ResourceNotFoundException(f"Flight not found: {flight_id}")
        if not flight.has_available_seat():
            raise ResourceUnavailableException("No available seats on this flight")
        self._ensure_currency(flight.economy_class_price, f"Flight {flight.id}")

        seat = None
        if request.get("seat_id"):
            seat = uow.flights.find_seat(flight.id, SeatId(request["seat_id"]))
            if seat is None or not seat.is_available:
                raise ResourceUnavailableException("Selected seat is not available")
            self._ensure_currency(seat.price, f"Seat {seat.id}")
            uow.flights.hold_seat(seat)

        flight_booking = self._factory.create_flight_booking(
            booking, flight, seat, request
        )
        uow.flights.reserve_seat_capacity(flight.id)

        for meal_request in meal_requests:
            meal_id = MealId(meal_request["meal_id"])
            meal = uow.meals.find_by_id(meal_id)
            if meal is None:
                raise ResourceNotFoundException(f"Meal with ID {meal_id} not found")
            self._ensure_currency(meal.price, f"Meal {meal.id}")
            flight_booking.add_meal_booking(
                self._factory.create_meal_booking(
                    flight_booking, meal, meal_request.get("quantity", 1)
                )
            )

        booking.add_flight_booking(flight_booking)

    def _reserve_hotel(
        self, uow: BookingUnitOfWork, booking: Booking, request: HotelRequest
    ) -> None:
        """宿泊期間が既存の滞在枠と重ならない場合のみ客室を押さえる"""
        room = uow.hotel_rooms.find_by_id(HotelRoomId(request["hotel_room_id"]))
        if room is None or not room.is_available:
            raise ResourceUnavailableException("Hotel room not found or not available")
        self._ensure_currency(room.price_per_night, f"Hotel room {room.id}")

        stay_period = StayPeriod(
            check_in=request["check_in_date"], check_out=request["check_out_date"]
        )
        if any(
            stay.conflicts_with(stay_period)
            for stay in uow.hotel_rooms.find_stays(room.id)
        ):
            raise ResourceUnavailableException(
                "Hotel room is already booked for the selected dates"
            )

        hotel_booking = self._factory.create_hotel_booking(
            booking, room, stay_period, request
        )
        uow.hotel_rooms.add_stay(
            room, RoomStay(booking_id=str(booking.id), period=stay_period)
        )
        booking.add_hotel_booking(hotel_booking)

    def _reserve_car(
        self, uow: BookingUnitOfWork, booking: Booking, request: CarRequest
    ) -> None:
        """車両を貸出中にする（期間に関係なく車両単位で押さえる）"""
        car = uow.cars.find_by_id(CarId(request["car_id"]))
        if car is None or not car.is_available:
            raise ResourceUnavailableException("Car not found or not available")
        self._ensure_currency(car.price_per_day, f"Car {car.id}")

        rental_period = RentalPeriod(
            pickup=request["pickup_date"], dropoff=request["dropoff_date"]
        )
        car_rental = self._factory.create_car_rental(
            booking,
            car,
            rental_period,
            request,
            insurance_daily_rate=self._settings.insurance_daily_rate,
        )
        uow.cars.hold(car)
        booking.add_car_rental(car_rental)

    def _ensure_currency(self, price: Money, resource: str) -> None:
        """在庫の価格通貨が予約通貨と異なるのは設定不備として扱う"""
        if price.currency != self._settings.currency:
            raise InfrastructureException(
                f"{resource} is priced in {price.currency}, "
                f"bookings use {self._settings.currency}"
            )
