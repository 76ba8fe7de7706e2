import math
from dataclasses import dataclass
from datetime import datetime
from functools import cached_property

from services.shared.domain.exception import InvalidDateRangeException

from .iso_date_time import parse_iso_datetime

SECONDS_PER_DAY = 24 * 60 * 60


def days_between(start: datetime, end: datetime) -> int:
    """2つの日時の差を日単位で切り上げる（2024-09-10 -> 2024-09-13 は 3）"""
    return math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)


def _parse(value: str) -> datetime:
    try:
        return parse_iso_datetime(value)
    except ValueError as e:
        raise ValueError(f"Invalid date format: {value}") from e


@dataclass(frozen=True)
class StayPeriod:
    """滞在期間(チェックイン日 + チェックアウト日)

    半開区間 [check_in, check_out) として扱うため、
    チェックアウト日と次のチェックイン日が同じでも重複しない。
    """

    check_in: str
    check_out: str

    def __post_init__(self) -> None:
        if self.nights() <= 0:
            raise InvalidDateRangeException("Check-out date must be after check-in date")

    @cached_property
    def check_in_at(self) -> datetime:
        return _parse(self.check_in)

    @cached_property
    def check_out_at(self) -> datetime:
        return _parse(self.check_out)

    def nights(self) -> int:
        """宿泊数を計算する"""
        return days_between(self.check_in_at, self.check_out_at)

    def overlaps(self, other: "StayPeriod") -> bool:
        """他の滞在期間と1泊でも重なるか"""
        return (
            self.check_in_at < other.check_out_at
            and other.check_in_at < self.check_out_at
        )


@dataclass(frozen=True)
class RentalPeriod:
    """レンタル期間(ピックアップ日 + 返却日)"""

    pickup: str
    dropoff: str

    def __post_init__(self) -> None:
        if self.days() <= 0:
            raise InvalidDateRangeException("Drop-off date must be after pickup date")

    @cached_property
    def pickup_at(self) -> datetime:
        return _parse(self.pickup)

    @cached_property
    def dropoff_at(self) -> datetime:
        return _parse(self.dropoff)

    def days(self) -> int:
        """レンタル日数を計算する"""
        return days_between(self.pickup_at, self.dropoff_at)
