from services.booking.domain.repository.booking_repository import BookingRepository
from services.inventory.domain import (
    CarRepository,
    FlightRepository,
    HotelRoomRepository,
    MealRepository,
)
from services.shared.domain import UnitOfWork


class BookingUnitOfWork(UnitOfWork):
    """予約・キャンセル1件分のトランザクション

    予約と在庫の書き込みを同じ境界でまとめてコミットする。
    """

    bookings: BookingRepository
    flights: FlightRepository
    hotel_rooms: HotelRoomRepository
    cars: CarRepository
    meals: MealRepository

    def __enter__(self) -> "BookingUnitOfWork":
        super().__enter__()
        return self
