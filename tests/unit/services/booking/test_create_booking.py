from decimal import Decimal

import pytest

from services.booking.applications.create_booking import CreateBookingService
from services.booking.domain.entity import Booking
from services.booking.domain.enum import BookingStatus, LineItemKind, PaymentStatus
from services.booking.domain.factory import BookingFactory
from services.booking.settings import BookingSettings
from services.inventory.domain import CarId, FlightId, HotelRoomId, SeatId
from services.shared.domain import Currency
from services.shared.domain.exception import (
    BookingReferenceConflictException,
    InfrastructureException,
    InvalidDateRangeException,
    ResourceNotFoundException,
    ResourceUnavailableException,
)


class TestCreateBookingService:
    """CreateBookingService のテスト"""

    def test_flight_with_seat_and_meals(
        self,
        create_booking_service,
        store,
        user_id,
        create_flight,
        create_seat,
        create_meal,
        flight_request,
    ):
        """フライト + 座席 + 機内食2食の合計が明細の合計と一致する"""

        # Arrange
        create_flight(available_seats=10, economy_class_price=Decimal("300.00"))
        create_seat(seat_id="12A", price=Decimal("50.00"))
        create_meal(meal_id="VEG-01", price=Decimal("12.50"))
        cart = {
            "flight_booking": flight_request(seat_id="12A"),
            "meal_bookings": [{"meal_id": "VEG-01", "quantity": 2}],
        }

        # Act
        booking = create_booking_service.create(user_id, cart)

        # Assert
        assert isinstance(booking, Booking)
        assert booking.status == BookingStatus.PENDING
        assert booking.payment_status == PaymentStatus.PENDING
        assert booking.total_amount.amount == Decimal("375.00")
        assert booking.total_amount == booking.line_items_total()
        assert [kind for kind, _ in booking.line_items()] == [
            LineItemKind.FLIGHT,
            LineItemKind.MEAL,
        ]

        assert store.flights[FlightId("FL123")].available_seats == 9
        assert store.seats[(FlightId("FL123"), SeatId("12A"))].is_available is False
        assert store.bookings[booking.id].total_amount.amount == Decimal("375.00")
        assert str(booking.reference) in store.references

    def test_meal_quantity_defaults_to_one(
        self,
        create_booking_service,
        user_id,
        create_flight,
        create_meal,
        flight_request,
    ):
        create_flight(economy_class_price=Decimal("300.00"))
        create_meal(price=Decimal("12.50"))
        cart = {
            "flight_booking": flight_request(),
            "meal_bookings": [{"meal_id": "VEG-01"}],
        }

        booking = create_booking_service.create(user_id, cart)

        meal_booking = booking.flight_bookings[0].meal_bookings[0]
        assert meal_booking.quantity == 1
        assert booking.total_amount.amount == Decimal("312.50")

    def test_meals_without_flight_are_ignored(
        self, create_booking_service, user_id, create_car, create_meal, car_request
    ):
        """フライトなしの機内食注文は明細にならない"""
        create_car(price_per_day=Decimal("40.00"))
        create_meal()
        cart = {
            "car_rental": car_request(),
            "meal_bookings": [{"meal_id": "VEG-01", "quantity": 2}],
        }

        booking = create_booking_service.create(user_id, cart)

        assert [kind for kind, _ in booking.line_items()] == [LineItemKind.CAR]
        assert booking.total_amount.amount == Decimal("120.00")

    def test_flight_not_found(self, create_booking_service, store, user_id, flight_request):
        with pytest.raises(ResourceNotFoundException, match="Flight not found: FL404"):
            create_booking_service.create(
                user_id, {"flight_booking": flight_request(flight_id="FL404")}
            )

        assert store.bookings == {}

    def test_unavailable_seat_leaves_capacity_unchanged(
        self,
        create_booking_service,
        store,
        user_id,
        create_flight,
        create_seat,
        flight_request,
    ):
        """確保済みの座席を指定すると失敗し、残席数は変わらない"""
        create_flight(available_seats=5)
        create_seat(seat_id="12A", is_available=False)

        with pytest.raises(
            ResourceUnavailableException, match="Selected seat is not available"
        ):
            create_booking_service.create(
                user_id, {"flight_booking": flight_request(seat_id="12A")}
            )

        assert store.flights[FlightId("FL123")].available_seats == 5
        assert store.bookings == {}

    def test_seat_of_another_flight_is_unavailable(
        self,
        create_booking_service,
        user_id,
        create_flight,
        create_seat,
        flight_request,
    ):
        create_flight(flight_id="FL123")
        create_flight(flight_id="FL999")
        create_seat(seat_id="1A", flight_id="FL999")

        with pytest.raises(ResourceUnavailableException):
            create_booking_service.create(
                user_id, {"flight_booking": flight_request(seat_id="1A")}
            )

    def test_last_seat_then_sold_out(
        self, create_booking_service, store, user_id, create_flight, flight_request
    ):
        """最後の1席を予約すると残席0になり、次の予約は失敗する"""
        create_flight(available_seats=1)

        create_booking_service.create(user_id, {"flight_booking": flight_request()})
        assert store.flights[FlightId("FL123")].available_seats == 0

        with pytest.raises(
            ResourceUnavailableException, match="No available seats on this flight"
        ):
            create_booking_service.create(user_id, {"flight_booking": flight_request()})

        assert store.flights[FlightId("FL123")].available_seats == 0
        assert len(store.bookings) == 1

    def test_unknown_meal_fails_whole_booking(
        self,
        create_booking_service,
        store,
        user_id,
        create_flight,
        flight_request,
    ):
        create_flight(available_seats=3)

        with pytest.raises(
            ResourceNotFoundException, match="Meal with ID UNKNOWN not found"
        ):
            create_booking_service.create(
                user_id,
                {
                    "flight_booking": flight_request(),
                    "meal_bookings": [{"meal_id": "UNKNOWN"}],
                },
            )

        assert store.flights[FlightId("FL123")].available_seats == 3

    def test_hotel_nights_and_total(
        self, create_booking_service, store, user_id, create_room, hotel_request
    ):
        """2024-09-10 → 2024-09-13 は3泊"""
        create_room(price_per_night=Decimal("120.00"))

        booking = create_booking_service.create(
            user_id, {"hotel_booking": hotel_request()}
        )

        hotel_booking = booking.hotel_bookings[0]
        assert hotel_booking.number_of_nights == 3
        assert hotel_booking.total_price.amount == Decimal("360.00")
        assert booking.total_amount.amount == Decimal("360.00")
        assert len(store.stays[HotelRoomId("ROOM-301")]) == 1

    def test_same_day_stay_is_invalid(
        self, create_booking_service, store, user_id, create_room, hotel_request
    ):
        create_room()

        with pytest.raises(InvalidDateRangeException):
            create_booking_service.create(
                user_id,
                {"hotel_booking": hotel_request(check_in="2024-09-10", check_out="2024-09-10")},
            )

        assert store.stays == {}

    def test_hotel_room_out_of_service(
        self, create_booking_service, user_id, create_room, hotel_request
    ):
        create_room(is_available=False)

        with pytest.raises(
            ResourceUnavailableException, match="Hotel room not found or not available"
        ):
            create_booking_service.create(user_id, {"hotel_booking": hotel_request()})

    def test_overlapping_stay_is_rejected(
        self, create_booking_service, user_id, create_room, hotel_request
    ):
        create_room()
        create_booking_service.create(user_id, {"hotel_booking": hotel_request()})

        with pytest.raises(
            ResourceUnavailableException,
            match="Hotel room is already booked for the selected dates",
        ):
            create_booking_service.create(
                user_id,
                {"hotel_booking": hotel_request(check_in="2024-09-12", check_out="2024-09-15")},
            )

    def test_adjacent_stays_are_allowed(
        self, create_booking_service, store, user_id, create_room, hotel_request
    ):
        """チェックアウト日に次の宿泊者がチェックインできる"""
        create_room()
        create_booking_service.create(user_id, {"hotel_booking": hotel_request()})

        create_booking_service.create(
            user_id,
            {"hotel_booking": hotel_request(check_in="2024-09-13", check_out="2024-09-14")},
        )

        assert len(store.stays[HotelRoomId("ROOM-301")]) == 2

    def test_car_rental_with_insurance(
        self, create_booking_service, store, user_id, create_car, car_request
    ):
        """3日 × 40 + 保険 3日 × 15 = 165"""
        create_car(price_per_day=Decimal("40.00"))

        booking = create_booking_service.create(
            user_id, {"car_rental": car_request(insurance=True)}
        )

        car_rental = booking.car_rentals[0]
        assert car_rental.number_of_days == 3
        assert car_rental.insurance_cost.amount == Decimal("45.00")
        assert car_rental.total_price.amount == Decimal("165.00")
        assert booking.total_amount.amount == Decimal("165.00")
        assert store.cars[CarId("CAR-7")].is_available is False

    def test_car_rental_without_insurance(
        self, create_booking_service, user_id, create_car, car_request
    ):
        create_car(price_per_day=Decimal("40.00"))

        booking = create_booking_service.create(user_id, {"car_rental": car_request()})

        assert booking.car_rentals[0].insurance_cost.amount == Decimal("0.00")
        assert booking.total_amount.amount == Decimal("120.00")

    def test_invalid_rental_period(
        self, create_booking_service, store, user_id, create_car, car_request
    ):
        create_car()

        with pytest.raises(
            InvalidDateRangeException, match="Drop-off date must be after pickup date"
        ):
            create_booking_service.create(
                user_id,
                {"car_rental": car_request(pickup="2024-09-04", dropoff="2024-09-01")},
            )

        assert store.cars[CarId("CAR-7")].is_available is True

    def test_unavailable_car_rolls_back_everything(
        self,
        create_booking_service,
        store,
        user_id,
        create_flight,
        create_seat,
        create_meal,
        create_car,
        flight_request,
        car_request,
    ):
        """フライト + 座席 + 機内食2食 + 貸出中の車両 → 何も残らない"""
        create_flight(available_seats=10)
        create_seat(seat_id="12A")
        create_meal()
        create_car(is_available=False)

        with pytest.raises(
            ResourceUnavailableException, match="Car not found or not available"
        ):
            create_booking_service.create(
                user_id,
                {
                    "flight_booking": flight_request(seat_id="12A"),
                    "meal_bookings": [{"meal_id": "VEG-01", "quantity": 2}],
                    "car_rental": car_request(),
                },
            )

        assert store.flights[FlightId("FL123")].available_seats == 10
        assert store.seats[(FlightId("FL123"), SeatId("12A"))].is_available is True
        assert store.bookings == {}
        assert store.references == set()

    def test_inventory_currency_mismatch(
        self,
        uow_factory,
        mock_logger,
        store,
        user_id,
        create_flight,
        flight_request,
    ):
        """在庫と予約の通貨が食い違うのは設定不備（クライアントエラーではない）"""
        create_flight(available_seats=5)
        service = CreateBookingService(
            uow_factory=uow_factory,
            factory=BookingFactory(),
            settings=BookingSettings(currency=Currency("EUR")),
            logger=mock_logger,
        )

        with pytest.raises(InfrastructureException, match="priced in USD"):
            service.create(user_id, {"flight_booking": flight_request()})

        assert store.flights[FlightId("FL123")].available_seats == 5
        assert store.bookings == {}

    def test_full_trip(
        self,
        create_booking_service,
        user_id,
        create_flight,
        create_seat,
        create_room,
        create_car,
        flight_request,
        hotel_request,
        car_request,
    ):
        create_flight(economy_class_price=Decimal("300.00"))
        create_seat(price=Decimal("50.00"))
        create_room(price_per_night=Decimal("120.00"))
        create_car(price_per_day=Decimal("40.00"))

        booking = create_booking_service.create(
            user_id,
            {
                "flight_booking": flight_request(seat_id="12A"),
                "hotel_booking": hotel_request(),
                "car_rental": car_request(insurance=True),
            },
        )

        # 350 + 360 + 165
        assert booking.total_amount.amount == Decimal("875.00")
        assert [kind for kind, _ in booking.line_items()] == [
            LineItemKind.FLIGHT,
            LineItemKind.HOTEL,
            LineItemKind.CAR,
        ]

    def test_logs_created_booking(
        self, create_booking_service, mock_logger, user_id, create_car, car_request
    ):
        create_car()

        booking = create_booking_service.create(user_id, {"car_rental": car_request()})

        mock_logger.info.assert_called_once()
        message = mock_logger.info.call_args[0][0]
        extra = mock_logger.info.call_args[1]["extra"]
        assert message == "Booking created"
        assert extra["booking_id"] == str(booking.id)
        assert extra["item_types"] == ["car"]


class TestCreateBookingReferenceRetry:
    """予約番号の衝突時のやり直し"""

    def test_retries_with_new_reference(
        self,
        uow_factory,
        settings,
        mock_logger,
        store,
        user_id,
        create_flight,
        flight_request,
        reference_sequence,
    ):
        create_flight(available_seats=5)
        store.references.add("AB1234")
        service = CreateBookingService(
            uow_factory=uow_factory,
            factory=BookingFactory(),
            settings=settings,
            logger=mock_logger,
            reference_generator=reference_sequence("AB1234", "CD5678"),
        )

        booking = service.create(user_id, {"flight_booking": flight_request()})

        assert str(booking.reference) == "CD5678"
        # 1回目の失敗分は反映されていない
        assert store.flights[FlightId("FL123")].available_seats == 4
        assert len(store.bookings) == 1
        mock_logger.warning.assert_called_once()

    def test_gives_up_after_max_attempts(
        self,
        uow_factory,
        mock_logger,
        store,
        user_id,
        create_flight,
        flight_request,
        reference_sequence,
    ):
        create_flight(available_seats=5)
        store.references.update({"AB1234", "CD5678"})
        service = CreateBookingService(
            uow_factory=uow_factory,
            factory=BookingFactory(),
            settings=BookingSettings(reference_max_attempts=2),
            logger=mock_logger,
            reference_generator=reference_sequence("AB1234", "CD5678"),
        )

        with pytest.raises(BookingReferenceConflictException):
            service.create(user_id, {"flight_booking": flight_request()})

        assert store.flights[FlightId("FL123")].available_seats == 5
        assert store.bookings == {}
