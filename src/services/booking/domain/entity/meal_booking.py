from services.booking.domain.value_object import LineItemId
from services.inventory.domain import MealId
from services.shared.domain import Entity, Money


class MealBooking(Entity[LineItemId]):
    """機内食の予約明細（フライト予約に属する）

    total_price は予約時点の単価 × 数量のスナップショット。
    """

    def __init__(
        self,
        id: LineItemId,
        flight_booking_id: LineItemId,
        meal_id: MealId,
        quantity: int,
        total_price: Money,
    ) -> None:
        super().__init__(id)
        if quantity < 1:
            raise ValueError("Meal quantity must be at least 1")

        self._flight_booking_id = flight_booking_id
        self._meal_id = meal_id
        self._quantity = quantity
        self._total_price = total_price

    @property
    def flight_booking_id(self) -> LineItemId:
        return self._flight_booking_id

    @property
    def meal_id(self) -> MealId:
        return self._meal_id

    @property
    def quantity(self) -> int:
        return self._quantity

    @property
    def total_price(self) -> Money:
        return self._total_price
