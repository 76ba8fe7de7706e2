from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from services.booking.domain.entity import (
    Booking,
    CarRental,
    FlightBooking,
    HotelBooking,
    MealBooking,
)
from services.booking.domain.enum import LineItemKind
from services.booking.domain.value_object import Contact


class CamelResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BookingSummary(CamelResponse):
    """予約ヘッダのレスポンスモデル"""

    id: str
    booking_reference: str
    total_amount: str
    currency: str
    status: str
    payment_status: str
    booking_date: str


class LineItem(CamelResponse):
    """予約明細のレスポンスモデル"""

    type: str
    item: dict[str, Any]


class BookingCreatedResponse(CamelResponse):
    message: str = "Booking created successfully"
    booking: BookingSummary
    items: list[LineItem]


class CancelledBooking(CamelResponse):
    id: str
    booking_reference: str
    status: str
    payment_status: str


class BookingCancelledResponse(CamelResponse):
    message: str = "Booking cancelled successfully"
    booking: CancelledBooking


class BookingDetailResponse(CamelResponse):
    booking: BookingSummary
    items: list[LineItem]


class Pagination(CamelResponse):
    limit: int
    offset: int


class BookingListResponse(CamelResponse):
    bookings: list[BookingSummary]
    total: int
    pagination: Pagination


def _summary(booking: Booking) -> BookingSummary:
    return BookingSummary(
        id=str(booking.id),
        booking_reference=str(booking.reference),
        total_amount=str(booking.total_amount.amount),
        currency=str(booking.total_amount.currency),
        status=booking.status.value,
        payment_status=booking.payment_status.value,
        booking_date=str(booking.booked_at),
    )


def _contact(contact: Contact) -> dict[str, Any]:
    return {"name": contact.name, "email": contact.email, "phone": contact.phone}


def _flight(item: FlightBooking) -> dict[str, Any]:
    return {
        "id": str(item.id),
        "flightId": str(item.flight_id),
        "seatId": str(item.seat_id) if item.seat_id else None,
        "passenger": _contact(item.passenger),
        "passengerPassport": item.passenger_passport,
        "flightPrice": str(item.flight_price.amount),
        "seatPrice": str(item.seat_price.amount),
        "totalPrice": str(item.total_price.amount),
    }


def _meal(item: MealBooking) -> dict[str, Any]:
    return {
        "id": str(item.id),
        "flightBookingId": str(item.flight_booking_id),
        "mealId": str(item.meal_id),
        "quantity": item.quantity,
        "totalPrice": str(item.total_price.amount),
    }


def _hotel(item: HotelBooking) -> dict[str, Any]:
    return {
        "id": str(item.id),
        "hotelRoomId": str(item.hotel_room_id),
        "guest": _contact(item.guest),
        "checkInDate": item.stay_period.check_in,
        "checkOutDate": item.stay_period.check_out,
        "numberOfNights": item.number_of_nights,
        "numberOfGuests": item.number_of_guests,
        "pricePerNight": str(item.price_per_night.amount),
        "totalPrice": str(item.total_price.amount),
        "specialRequests": item.special_requests,
    }


def _car(item: CarRental) -> dict[str, Any]:
    return {
        "id": str(item.id),
        "carId": str(item.car_id),
        "renter": _contact(item.renter),
        "renterLicense": item.renter_license,
        "pickupDate": item.rental_period.pickup,
        "dropoffDate": item.rental_period.dropoff,
        "numberOfDays": item.number_of_days,
        "pickupLocation": item.pickup_location,
        "dropoffLocation": item.dropoff_location,
        "additionalDrivers": item.additional_drivers,
        "pricePerDay": str(item.price_per_day.amount),
        "insurance": item.insurance,
        "insuranceCost": str(item.insurance_cost.amount),
        "totalPrice": str(item.total_price.amount),
    }


_ITEM_BUILDERS = {
    LineItemKind.FLIGHT: _flight,
    LineItemKind.MEAL: _meal,
    LineItemKind.HOTEL: _hotel,
    LineItemKind.CAR: _car,
}


def _line_items(booking: Booking) -> list[LineItem]:
    return [
        LineItem(type=kind.value, item=_ITEM_BUILDERS[kind](entity))  # type: ignore[operator]
        for kind, entity in booking.line_items()
    ]


def to_created_response(booking: Booking) -> dict:
    """作成した予約をレスポンス辞書に変換する"""
    return BookingCreatedResponse(
        booking=_summary(booking), items=_line_items(booking)
    ).model_dump(by_alias=True)


def to_cancelled_response(booking: Booking) -> dict:
    """キャンセルした予約をレスポンス辞書に変換する"""
    return BookingCancelledResponse(
        booking=CancelledBooking(
            id=str(booking.id),
            booking_reference=str(booking.reference),
            status=booking.status.value,
            payment_status=booking.payment_status.value,
        )
    ).model_dump(by_alias=True)


def to_detail_response(booking: Booking) -> dict:
    return BookingDetailResponse(
        booking=_summary(booking), items=_line_items(booking)
    ).model_dump(by_alias=True)


def to_list_response(bookings: list[Booking], limit: int, offset: int) -> dict:
    return BookingListResponse(
        bookings=[_summary(booking) for booking in bookings],
        total=len(bookings),
        pagination=Pagination(limit=limit, offset=offset),
    ).model_dump(by_alias=True)
