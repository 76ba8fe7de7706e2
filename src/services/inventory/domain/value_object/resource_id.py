from dataclasses import dataclass


@dataclass(frozen=True)
class ResourceId:
    """在庫マスタのID 基底クラス"""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError(f"{type(self).__name__} cannot be empty")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FlightId(ResourceId):
    """フライトID"""


@dataclass(frozen=True)
class SeatId(ResourceId):
    """座席ID"""


@dataclass(frozen=True)
class HotelRoomId(ResourceId):
    """客室ID"""


@dataclass(frozen=True)
class CarId(ResourceId):
    """レンタカーID"""


@dataclass(frozen=True)
class MealId(ResourceId):
    """機内食ID"""
