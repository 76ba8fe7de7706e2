from services.booking.domain.value_object import BookingId, Contact, LineItemId
from services.inventory.domain import CarId
from services.shared.domain import Entity, Money, RentalPeriod


class CarRental(Entity[LineItemId]):
    """レンタカーの予約明細

    total_price = 日数 × 日額 + 保険料
    """

    def __init__(
        self,
        id: LineItemId,
        booking_id: BookingId,
        car_id: CarId,
        renter: Contact,
        renter_license: str,
        rental_period: RentalPeriod,
        pickup_location: str,
        dropoff_location: str,
        price_per_day: Money,
        insurance: bool,
        insurance_cost: Money,
        total_price: Money,
        additional_drivers: list[str] | None = None,
    ) -> None:
        super().__init__(id)
        self._booking_id = booking_id
        self._car_id = car_id
        self._renter = renter
        self._renter_license = renter_license
        self._rental_period = rental_period
        self._pickup_location = pickup_location
        self._dropoff_location = dropoff_location
        self._price_per_day = price_per_day
        self._insurance = insurance
        self._insurance_cost = insurance_cost
        self._total_price = total_price
        self._additional_drivers = list(additional_drivers or [])

    @property
    def booking_id(self) -> BookingId:
        return self._booking_id

    @property
    def car_id(self) -> CarId:
        return self._car_id

    @property
    def renter(self) -> Contact:
        return self._renter

    @property
    def renter_license(self) -> str:
        return self._renter_license

    @property
    def rental_period(self) -> RentalPeriod:
        return self._rental_period

    @property
    def number_of_days(self) -> int:
        return self._rental_period.days()

    @property
    def pickup_location(self) -> str:
        return self._pickup_location

    @property
    def dropoff_location(self) -> str:
        return self._dropoff_location

    @property
    def price_per_day(self) -> Money:
        return self._price_per_day

    @property
    def insurance(self) -> bool:
        return self._insurance

    @property
    def insurance_cost(self) -> Money:
        return self._insurance_cost

    @property
    def total_price(self) -> Money:
        return self._total_price

    @property
    def additional_drivers(self) -> list[str]:
        return list(self._additional_drivers)
