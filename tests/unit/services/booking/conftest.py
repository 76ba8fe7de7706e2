import copy
from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal

import pytest

from services.booking.applications.cancel_booking import CancelBookingService
from services.booking.applications.create_booking import CreateBookingService
from services.booking.applications.get_booking import GetBookingService
from services.booking.domain.entity import Booking
from services.booking.domain.enum import BookingStatus
from services.booking.domain.factory import BookingFactory
from services.booking.domain.repository import BookingRepository, BookingUnitOfWork
from services.booking.domain.value_object import BookingId, BookingReference
from services.booking.settings import BookingSettings
from services.inventory.domain import (
    Car,
    CarId,
    CarRepository,
    Flight,
    FlightId,
    FlightRepository,
    HotelRoom,
    HotelRoomId,
    HotelRoomRepository,
    Meal,
    MealId,
    MealRepository,
    RoomStay,
    Seat,
    SeatId,
)
from services.shared.domain import IsoDateTime, Money, UserId
from services.shared.domain.exception import (
    BookingReferenceConflictException,
    InfrastructureException,
    OptimisticLockException,
    ResourceNotFoundException,
    ResourceUnavailableException,
)


@dataclass
class InMemoryStore:
    """コミット済みの状態"""

    flights: dict[FlightId, Flight] = field(default_factory=dict)
    seats: dict[tuple[FlightId, SeatId], Seat] = field(default_factory=dict)
    rooms: dict[HotelRoomId, HotelRoom] = field(default_factory=dict)
    stays: dict[HotelRoomId, list[RoomStay]] = field(default_factory=dict)
    cars: dict[CarId, Car] = field(default_factory=dict)
    meals: dict[MealId, Meal] = field(default_factory=dict)
    bookings: dict[BookingId, Booking] = field(default_factory=dict)
    references: set[str] = field(default_factory=set)


Operation = Callable[[InMemoryStore], None]


class InMemoryBookingUnitOfWork(BookingUnitOfWork):
    """DynamoDB の TransactWriteItems と同じ振る舞いをするテスト用 UoW

    読み込みはコミット済みの状態から行い、書き込みは条件つきの操作として積んでおく。
    commit() で作業用コピーに全操作を適用し、1つでも失敗すれば何も反映しない。
    """

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self.pending: list[Operation] = []
        self.committed_count = 0
        self.rolled_back_count = 0

        self.bookings = InMemoryBookingRepository(self)
        self.flights = InMemoryFlightRepository(self)
        self.hotel_rooms = InMemoryHotelRoomRepository(self)
        self.cars = InMemoryCarRepository(self)
        self.meals = InMemoryMealRepository(self)

    def add(self, operation: Operation) -> None:
        self.pending.append(operation)

    def _commit(self) -> None:
        working = copy.deepcopy(self.store)
        operations, self.pending = self.pending, []
        for operation in operations:
            operation(working)
        self.store.__dict__.update(working.__dict__)
        self.committed_count += 1

    def rollback(self) -> None:
        self.pending.clear()
        self.rolled_back_count += 1


class _InMemoryRepository:
    def __init__(self, uow: InMemoryBookingUnitOfWork) -> None:
        self._uow = uow

    @property
    def _store(self) -> InMemoryStore:
        return self._uow.store


class InMemoryFlightRepository(_InMemoryRepository, FlightRepository):
    def save(self, flight: Flight) -> None:
        self._uow.add(lambda s: s.flights.__setitem__(flight.id, copy.deepcopy(flight)))

    def save_seat(self, seat: Seat) -> None:
        self._uow.add(
            lambda s: s.seats.__setitem__((seat.flight_id, seat.id), copy.deepcopy(seat))
        )

    def find_by_id(self, flight_id: FlightId) -> Flight | None:
        return copy.deepcopy(self._store.flights.get(flight_id))

    def find_seat(self, flight_id: FlightId, seat_id: SeatId) -> Seat | None:
        return copy.deepcopy(self._store.seats.get((flight_id, seat_id)))

    def reserve_seat_capacity(self, flight_id: FlightId) -> None:
        def operation(s: InMemoryStore) -> None:
            flight = s.flights.get(flight_id)
            if flight is None or flight.available_seats < 1:
                raise ResourceUnavailableException("No available seats on this flight")
            flight._available_seats -= 1

        self._uow.add(operation)

    def release_seat_capacity(self, flight_id: FlightId) -> None:
        def operation(s: InMemoryStore) -> None:
            if flight_id not in s.flights:
                raise ResourceNotFoundException(f"Flight not found: {flight_id}")
            s.flights[flight_id]._available_seats += 1

        self._uow.add(operation)

    def hold_seat(self, seat: Seat) -> None:
        def operation(s: InMemoryStore) -> None:
            stored = s.seats.get((seat.flight_id, seat.id))
            if stored is None or not stored.is_available:
                raise ResourceUnavailableException("Selected seat is not available")
            stored._is_available = False

        self._uow.add(operation)

    def release_seat(self, flight_id: FlightId, seat_id: SeatId) -> None:
        def operation(s: InMemoryStore) -> None:
            # 条件付き更新が失敗したときと同じく、トランザクションごと失敗する
            stored = s.seats.get((flight_id, seat_id))
            if stored is None:
                raise InfrastructureException("DynamoDB transaction cancelled")
            stored._is_available = True

        self._uow.add(operation)


class InMemoryHotelRoomRepository(_InMemoryRepository, HotelRoomRepository):
    def save(self, room: HotelRoom) -> None:
        self._uow.add(lambda s: s.rooms.__setitem__(room.id, copy.deepcopy(room)))

    def find_by_id(self, room_id: HotelRoomId) -> HotelRoom | None:
        return copy.deepcopy(self._store.rooms.get(room_id))

    def find_stays(self, room_id: HotelRoomId) -> list[RoomStay]:
        return list(self._store.stays.get(room_id, []))

    def add_stay(self, room: HotelRoom, stay: RoomStay) -> None:
        def operation(s: InMemoryStore) -> None:
            stored = s.rooms[room.id]
            if stored.version != room.version:
                raise ResourceUnavailableException(
                    "Hotel room is already booked for the selected dates"
                )
            stored._version += 1
            s.stays.setdefault(room.id, []).append(stay)

        self._uow.add(operation)

    def remove_stay(self, room_id: HotelRoomId, stay: RoomStay) -> None:
        def operation(s: InMemoryStore) -> None:
            s.stays[room_id] = [x for x in s.stays.get(room_id, []) if x != stay]

        self._uow.add(operation)


class InMemoryCarRepository(_InMemoryRepository, CarRepository):
    def save(self, car: Car) -> None:
        self._uow.add(lambda s: s.cars.__setitem__(car.id, copy.deepcopy(car)))

    def find_by_id(self, car_id: CarId) -> Car | None:
        return copy.deepcopy(self._store.cars.get(car_id))

    def hold(self, car: Car) -> None:
        def operation(s: InMemoryStore) -> None:
            stored = s.cars.get(car.id)
            if stored is None or not stored.is_available:
                raise ResourceUnavailableException("Car not found or not available")
            stored._is_available = False

        self._uow.add(operation)

    def release(self, car_id: CarId) -> None:
        def operation(s: InMemoryStore) -> None:
            if car_id not in s.cars:
                raise InfrastructureException("DynamoDB transaction cancelled")
            s.cars[car_id]._is_available = True

        self._uow.add(operation)


class InMemoryMealRepository(_InMemoryRepository, MealRepository):
    def save(self, meal: Meal) -> None:
        self._uow.add(lambda s: s.meals.__setitem__(meal.id, copy.deepcopy(meal)))

    def find_by_id(self, meal_id: MealId) -> Meal | None:
        return copy.deepcopy(self._store.meals.get(meal_id))


class InMemoryBookingRepository(_InMemoryRepository, BookingRepository):
    def save(self, booking: Booking) -> None:
        snapshot = copy.deepcopy(booking)

        def operation(s: InMemoryStore) -> None:
            reference = str(snapshot.reference)
            if reference in s.references:
                raise BookingReferenceConflictException(
                    f"Booking reference already in use: {reference}"
                )
            s.references.add(reference)
            s.bookings[snapshot.id] = snapshot

        self._uow.add(operation)

    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        return copy.deepcopy(self._store.bookings.get(booking_id))

    def find_by_user(
        self,
        user_id: UserId,
        status: BookingStatus | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Booking]:
        bookings = [
            booking
            for booking in self._store.bookings.values()
            if booking.user_id == user_id and (status is None or booking.status == status)
        ]
        bookings.sort(key=lambda b: b.booked_at.value, reverse=True)
        return copy.deepcopy(bookings[offset : offset + limit])

    def update(self, booking: Booking, expected_status: BookingStatus) -> None:
        snapshot = copy.deepcopy(booking)

        def operation(s: InMemoryStore) -> None:
            stored = s.bookings.get(snapshot.id)
            if stored is None or stored.status != expected_status:
                raise OptimisticLockException(
                    f"Booking status conflict: expected {expected_status.value}"
                )
            s.bookings[snapshot.id] = snapshot

        self._uow.add(operation)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def uow_factory(store):
    """呼び出すたびに新しい UoW を返す（生成した UoW は created に残る）"""

    def _factory() -> InMemoryBookingUnitOfWork:
        uow = InMemoryBookingUnitOfWork(store)
        _factory.created.append(uow)  # type: ignore[attr-defined]
        return uow

    _factory.created = []  # type: ignore[attr-defined]
    return _factory


@pytest.fixture
def settings():
    return BookingSettings(table_name="test-booking-table")


@pytest.fixture
def create_flight(store):
    """Flight を生成して在庫に登録する Factory fixture"""

    def _factory(
        flight_id: str = "FL123",
        available_seats: int = 10,
        economy_class_price: Decimal = Decimal("300.00"),
    ) -> Flight:
        flight = Flight(
            id=FlightId(flight_id),
            flight_number="NH001",
            departure_time=IsoDateTime.from_string("2024-09-10T10:00:00"),
            arrival_time=IsoDateTime.from_string("2024-09-10T14:00:00"),
            economy_class_price=Money.usd(economy_class_price),
            business_class_price=Money.usd(Decimal("900.00")),
            available_seats=available_seats,
        )
        store.flights[flight.id] = flight
        return flight

    return _factory


@pytest.fixture
def create_seat(store):
    """Seat を生成して在庫に登録する Factory fixture"""

    def _factory(
        seat_id: str = "12A",
        flight_id: str = "FL123",
        price: Decimal = Decimal("50.00"),
        is_available: bool = True,
    ) -> Seat:
        seat = Seat(
            id=SeatId(seat_id),
            flight_id=FlightId(flight_id),
            seat_number=seat_id,
            seat_class="economy",
            price=Money.usd(price),
            is_available=is_available,
        )
        store.seats[(seat.flight_id, seat.id)] = seat
        return seat

    return _factory


@pytest.fixture
def create_meal(store):
    def _factory(meal_id: str = "VEG-01", price: Decimal = Decimal("12.50")) -> Meal:
        meal = Meal(
            id=MealId(meal_id),
            name="Vegetarian",
            meal_type="vegetarian",
            price=Money.usd(price),
        )
        store.meals[meal.id] = meal
        return meal

    return _factory


@pytest.fixture
def create_room(store):
    """HotelRoom を生成して在庫に登録する Factory fixture"""

    def _factory(
        room_id: str = "ROOM-301",
        price_per_night: Decimal = Decimal("120.00"),
        is_available: bool = True,
    ) -> HotelRoom:
        room = HotelRoom(
            id=HotelRoomId(room_id),
            hotel_id="HOTEL-1",
            room_number="301",
            room_type="double",
            capacity=2,
            price_per_night=Money.usd(price_per_night),
            is_available=is_available,
        )
        store.rooms[room.id] = room
        return room

    return _factory


@pytest.fixture
def create_car(store):
    """Car を生成して在庫に登録する Factory fixture"""

    def _factory(
        car_id: str = "CAR-7",
        price_per_day: Decimal = Decimal("40.00"),
        is_available: bool = True,
    ) -> Car:
        car = Car(
            id=CarId(car_id),
            make="Toyota",
            model="Corolla",
            category="compact",
            price_per_day=Money.usd(price_per_day),
            is_available=is_available,
        )
        store.cars[car.id] = car
        return car

    return _factory


@pytest.fixture
def flight_request():
    def _factory(flight_id: str = "FL123", seat_id: str | None = None) -> dict:
        request = {
            "flight_id": flight_id,
            "passenger_name": "Taro Yamada",
            "passenger_email": "taro@example.com",
        }
        if seat_id is not None:
            request["seat_id"] = seat_id
        return request

    return _factory


@pytest.fixture
def hotel_request():
    def _factory(
        room_id: str = "ROOM-301",
        check_in: str = "2024-09-10",
        check_out: str = "2024-09-13",
    ) -> dict:
        return {
            "hotel_room_id": room_id,
            "guest_name": "Taro Yamada",
            "guest_email": "taro@example.com",
            "check_in_date": check_in,
            "check_out_date": check_out,
            "number_of_guests": 2,
        }

    return _factory


@pytest.fixture
def car_request():
    def _factory(
        car_id: str = "CAR-7",
        pickup: str = "2024-09-01",
        dropoff: str = "2024-09-04",
        insurance: bool = False,
    ) -> dict:
        return {
            "car_id": car_id,
            "renter_name": "Taro Yamada",
            "renter_email": "taro@example.com",
            "renter_license": "DL-12345",
            "pickup_date": pickup,
            "dropoff_date": dropoff,
            "pickup_location": "NRT",
            "dropoff_location": "HND",
            "insurance": insurance,
        }

    return _factory


@pytest.fixture
def reference_sequence():
    """指定した予約番号を順に返すジェネレータ"""

    def _factory(*references: str) -> Callable[[], BookingReference]:
        iterator = iter(references)
        return lambda: BookingReference(next(iterator))

    return _factory


@pytest.fixture
def create_booking_service(uow_factory, settings, mock_logger):
    return CreateBookingService(
        uow_factory=uow_factory,
        factory=BookingFactory(),
        settings=settings,
        logger=mock_logger,
    )


@pytest.fixture
def cancel_booking_service(uow_factory, mock_logger):
    return CancelBookingService(uow_factory=uow_factory, logger=mock_logger)


@pytest.fixture
def get_booking_service(uow_factory, settings):
    return GetBookingService(uow_factory=uow_factory, settings=settings)
