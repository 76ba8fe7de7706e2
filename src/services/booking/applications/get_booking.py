from collections.abc import Callable

from services.booking.domain.entity import Booking
from services.booking.domain.enum import BookingStatus
from services.booking.domain.repository import BookingUnitOfWork
from services.booking.domain.value_object import BookingId
from services.booking.settings import BookingSettings
from services.shared.domain import UserId
from services.shared.domain.exception import ResourceNotFoundException


class GetBookingService:
    """予約参照のユースケース（本人の予約のみ）"""

    def __init__(
        self,
        uow_factory: Callable[[], BookingUnitOfWork],
        settings: BookingSettings,
    ) -> None:
        self._uow_factory = uow_factory
        self._settings = settings

    def get(self, user_id: UserId, booking_id: BookingId) -> Booking:
        """予約を明細つきで取得する"""
        with self._uow_factory() as uow:
            booking = uow.bookings.find_by_id(booking_id)
        if booking is None or not booking.is_owned_by(user_id):
            raise ResourceNotFoundException("Booking not found")
        return booking

    def list(
        self,
        user_id: UserId,
        status: BookingStatus | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Booking]:
        """予約一覧を新しい順に取得する"""
        limit = min(limit or self._settings.page_size, self._settings.max_page_size)
        with self._uow_factory() as uow:
            return uow.bookings.find_by_user(
                user_id, status=status, limit=limit, offset=max(offset, 0)
            )
