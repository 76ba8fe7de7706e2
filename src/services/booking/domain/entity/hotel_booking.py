from services.booking.domain.value_object import BookingId, Contact, LineItemId
from services.inventory.domain import HotelRoomId
from services.shared.domain import Entity, Money, StayPeriod


class HotelBooking(Entity[LineItemId]):
    """ホテルの予約明細"""

    def __init__(
        self,
        id: LineItemId,
        booking_id: BookingId,
        hotel_room_id: HotelRoomId,
        guest: Contact,
        stay_period: StayPeriod,
        number_of_guests: int,
        price_per_night: Money,
        total_price: Money,
        special_requests: str | None = None,
    ) -> None:
        super().__init__(id)
        if number_of_guests < 1:
            raise ValueError("Number of guests must be at least 1")

        self._booking_id = booking_id
        self._hotel_room_id = hotel_room_id
        self._guest = guest
        self._stay_period = stay_period
        self._number_of_guests = number_of_guests
        self._price_per_night = price_per_night
        self._total_price = total_price
        self._special_requests = special_requests

    @property
    def booking_id(self) -> BookingId:
        return self._booking_id

    @property
    def hotel_room_id(self) -> HotelRoomId:
        return self._hotel_room_id

    @property
    def guest(self) -> Contact:
        return self._guest

    @property
    def stay_period(self) -> StayPeriod:
        return self._stay_period

    @property
    def number_of_nights(self) -> int:
        return self._stay_period.nights()

    @property
    def number_of_guests(self) -> int:
        return self._number_of_guests

    @property
    def price_per_night(self) -> Money:
        return self._price_per_night

    @property
    def total_price(self) -> Money:
        return self._total_price

    @property
    def special_requests(self) -> str | None:
        return self._special_requests
