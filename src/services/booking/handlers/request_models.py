from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from services.booking.domain.enum import BookingStatus
from services.booking.domain.factory import Cart
from services.shared.domain.value_object.iso_date_time import parse_iso_datetime

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CamelModel(BaseModel):
    """キャメルケースの JSON を受け付ける基底モデル"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )


class FlightBookingRequest(CamelModel):
    """フライト予約の入力スキーマ"""

    flight_id: str = Field(..., min_length=1, description="フライトID")
    seat_id: str | None = Field(default=None, min_length=1, description="座席ID")
    passenger_name: str = Field(..., min_length=1, max_length=100)
    passenger_email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254)
    passenger_phone: str | None = Field(default=None, max_length=20)
    passenger_passport: str | None = Field(default=None, max_length=20)


class HotelBookingRequest(CamelModel):
    """ホテル予約の入力スキーマ"""

    hotel_room_id: str = Field(..., min_length=1, description="客室ID")
    guest_name: str = Field(..., min_length=1, max_length=100)
    guest_email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254)
    guest_phone: str | None = Field(default=None, max_length=20)
    check_in_date: str = Field(
        ..., description="チェックイン日（ISO 8601形式）", examples=["2024-09-10"]
    )
    check_out_date: str = Field(
        ..., description="チェックアウト日（ISO 8601形式）", examples=["2024-09-13"]
    )
    number_of_guests: int = Field(..., ge=1, le=10)
    special_requests: str | None = Field(default=None, max_length=500)

    @field_validator("check_in_date", "check_out_date")
    @classmethod
    def check_date_format(cls, v: str) -> str:
        parse_iso_datetime(v)
        return v


class CarRentalRequest(CamelModel):
    """レンタカー予約の入力スキーマ"""

    car_id: str = Field(..., min_length=1, description="レンタカーID")
    renter_name: str = Field(..., min_length=1, max_length=100)
    renter_email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254)
    renter_phone: str | None = Field(default=None, max_length=20)
    renter_license: str = Field(..., min_length=1, max_length=50)
    pickup_date: str = Field(..., examples=["2024-09-01"])
    dropoff_date: str = Field(..., examples=["2024-09-04"])
    pickup_location: str = Field(..., min_length=1, max_length=200)
    dropoff_location: str = Field(..., min_length=1, max_length=200)
    additional_drivers: list[str] = Field(default_factory=list, max_length=5)
    insurance: bool = False

    @field_validator("pickup_date", "dropoff_date")
    @classmethod
    def check_date_format(cls, v: str) -> str:
        parse_iso_datetime(v)
        return v


class MealBookingRequest(CamelModel):
    """機内食の入力スキーマ"""

    meal_id: str = Field(..., min_length=1)
    quantity: int = Field(default=1, ge=1, le=10)


class CreateBookingRequest(CamelModel):
    """予約作成リクエストスキーマ"""

    flight_booking: FlightBookingRequest | None = None
    hotel_booking: HotelBookingRequest | None = None
    car_rental: CarRentalRequest | None = None
    meal_bookings: list[MealBookingRequest] = Field(default_factory=list, max_length=20)

    model_config = ConfigDict(
        **CamelModel.model_config,
        json_schema_extra={
            "examples": [
                {
                    "flightBooking": {
                        "flightId": "FL123",
                        "seatId": "12A",
                        "passengerName": "Taro Yamada",
                        "passengerEmail": "taro@example.com",
                    },
                    "hotelBooking": {
                        "hotelRoomId": "ROOM-301",
                        "guestName": "Taro Yamada",
                        "guestEmail": "taro@example.com",
                        "checkInDate": "2024-09-10",
                        "checkOutDate": "2024-09-13",
                        "numberOfGuests": 2,
                    },
                    "mealBookings": [{"mealId": "VEG-01", "quantity": 2}],
                }
            ]
        }
    )

    @model_validator(mode="after")
    def check_cart(self) -> "CreateBookingRequest":
        """空の予約と、フライトなしの機内食注文は受け付けない"""
        if not (self.flight_booking or self.hotel_booking or self.car_rental):
            raise ValueError(
                "At least one of flightBooking, hotelBooking or carRental is required"
            )
        if self.meal_bookings and self.flight_booking is None:
            raise ValueError("mealBookings require a flightBooking")
        return self

    def to_cart(self) -> Cart:
        """リクエストを予約エンジンの入力に変換する"""
        cart: Cart = {}
        if self.flight_booking is not None:
            cart["flight_booking"] = self.flight_booking.model_dump()  # type: ignore[typeddict-item]
        if self.hotel_booking is not None:
            cart["hotel_booking"] = self.hotel_booking.model_dump()  # type: ignore[typeddict-item]
        if self.car_rental is not None:
            cart["car_rental"] = self.car_rental.model_dump()  # type: ignore[typeddict-item]
        if self.meal_bookings:
            cart["meal_bookings"] = [meal.model_dump() for meal in self.meal_bookings]  # type: ignore[misc]
        return cart


class ListBookingsQuery(CamelModel):
    """予約一覧のクエリパラメータ"""

    status: BookingStatus | None = None
    limit: int | None = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)
