from abc import abstractmethod

from services.booking.domain.entity import Booking
from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import BookingId
from services.shared.domain import Repository, UserId


class BookingRepository(Repository[Booking, BookingId]):
    """予約レポジトリのインターフェース"""

    @abstractmethod
    def save(self, booking: Booking) -> None:
        """予約と全明細を保存し、予約番号を確保する

        予約番号が既に使われていれば、コミット時に
        BookingReferenceConflictException が送出される。
        """
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        """予約IDで明細ごと検索する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_user(
        self,
        user_id: UserId,
        status: BookingStatus | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Booking]:
        """利用者の予約を新しい順に検索する（明細は含まない）"""
        raise NotImplementedError

    @abstractmethod
    def update(self, booking: Booking, expected_status: BookingStatus) -> None:
        """予約のステータスを更新する

        保存済みのステータスが expected_status と異なれば、コミット時に
        OptimisticLockException が送出される。
        """
        raise NotImplementedError
