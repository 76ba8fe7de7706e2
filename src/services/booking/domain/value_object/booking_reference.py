from __future__ import annotations

import random
import re
import string
from dataclasses import dataclass
from typing import ClassVar

_system_random = random.SystemRandom()


@dataclass(frozen=True)
class BookingReference:
    """予約番号

    英大文字2文字 + 数字4桁の形式。
    例: AB1234, ZK0042
    """

    value: str

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"[A-Z]{2}[0-9]{4}")

    def __post_init__(self) -> None:
        normalized = self.value.upper()
        if not self.PATTERN.fullmatch(normalized):
            raise ValueError(
                f"Invalid booking reference format: {self.value}. "
                "Expected format: AB1234 (2 letters + 4 digits)"
            )
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls, rng: random.Random | None = None) -> BookingReference:
        """ランダムな予約番号を生成する

        一意性はここでは確認しない。重複はコミット時に検出される。
        """
        rng = rng or _system_random
        letters = "".join(rng.choice(string.ascii_uppercase) for _ in range(2))
        digits = "".join(rng.choice(string.digits) for _ in range(4))
        return cls(value=f"{letters}{digits}")
