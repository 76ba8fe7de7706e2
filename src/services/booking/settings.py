from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal

from services.shared.domain import Currency, Money


@dataclass(frozen=True)
class BookingSettings:
    """予約サービスの設定

    Lambda のコールドスタート時に環境変数から一度だけ読み込み、
    各サービス・リポジトリへコンストラクタで渡す。
    """

    table_name: str | None = None
    currency: Currency = field(default_factory=Currency.usd)
    car_insurance_daily_rate: Decimal = Decimal("15.00")
    reference_max_attempts: int = 3
    page_size: int = 10
    max_page_size: int = 100

    def __post_init__(self) -> None:
        if self.reference_max_attempts < 1:
            raise ValueError("BOOKING_REFERENCE_MAX_ATTEMPTS must be at least 1")
        if not 1 <= self.page_size <= self.max_page_size:
            raise ValueError("BOOKINGS_PAGE_SIZE must be between 1 and max page size")

    @property
    def insurance_daily_rate(self) -> Money:
        return Money(self.car_insurance_daily_rate, self.currency)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BookingSettings:
        """環境変数から設定を生成する"""
        env = os.environ if environ is None else environ
        return cls(
            table_name=env.get("TABLE_NAME"),
            currency=Currency(env.get("BOOKING_CURRENCY", "USD")),
            car_insurance_daily_rate=Decimal(env.get("CAR_INSURANCE_DAILY_RATE", "15.00")),
            reference_max_attempts=int(env.get("BOOKING_REFERENCE_MAX_ATTEMPTS", "3")),
            page_size=int(env.get("BOOKINGS_PAGE_SIZE", "10")),
            max_page_size=int(env.get("BOOKINGS_MAX_PAGE_SIZE", "100")),
        )
