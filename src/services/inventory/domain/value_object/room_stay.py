from dataclasses import dataclass

from services.shared.domain import StayPeriod


@dataclass(frozen=True)
class RoomStay:
    """客室の滞在枠（どの予約がいつからいつまで押さえているか）"""

    booking_id: str
    period: StayPeriod

    def conflicts_with(self, period: StayPeriod) -> bool:
        return self.period.overlaps(period)
