from collections.abc import Callable

from aws_lambda_powertools import Logger

from services.booking.domain.entity import Booking
from services.booking.domain.repository import BookingUnitOfWork
from services.booking.domain.value_object import BookingId
from services.inventory.domain import RoomStay
from services.shared.domain import UserId
from services.shared.domain.exception import ResourceNotFoundException


class CancelBookingService:
    """予約キャンセルのユースケース

    予約時に確保した在庫を戻し、予約ステータスをキャンセル済みにする。
    ステータス更新は読み込んだ時点のステータスを条件にするため、
    同じ予約を同時にキャンセルしても在庫が二重に戻ることはない。
    """

    def __init__(
        self,
        uow_factory: Callable[[], BookingUnitOfWork],
        logger: Logger,
    ) -> None:
        self._uow_factory = uow_factory
        self._logger = logger

    def cancel(self, user_id: UserId, booking_id: BookingId) -> Booking:
        """予約をキャンセルする"""
        with self._uow_factory() as uow:
            booking = uow.bookings.find_by_id(booking_id)
            if booking is None or not booking.is_owned_by(user_id):
                raise ResourceNotFoundException("Booking not found")

            expected_status = booking.status
            booking.cancel()

            for flight_booking in booking.flight_bookings:
                if (
                    flight_booking.seat_id is not None
                    and uow.flights.find_seat(
                        flight_booking.flight_id, flight_booking.seat_id
                    )
                    is not None
                ):
                    uow.flights.release_seat(
                        flight_booking.flight_id, flight_booking.seat_id
                    )
                if uow.flights.find_by_id(flight_booking.flight_id) is not None:
                    uow.flights.release_seat_capacity(flight_booking.flight_id)

            for car_rental in booking.car_rentals:
                if uow.cars.find_by_id(car_rental.car_id) is not None:
                    uow.cars.release(car_rental.car_id)

            for hotel_booking in booking.hotel_bookings:
                uow.hotel_rooms.remove_stay(
                    hotel_booking.hotel_room_id,
                    RoomStay(
                        booking_id=str(booking.id), period=hotel_booking.stay_period
                    ),
                )

            uow.bookings.update(booking, expected_status=expected_status)
            uow.commit()

        self._logger.info(
            "Booking cancelled",
            extra={
                "user_id": str(user_id),
                "booking_id": str(booking.id),
                "booking_reference": str(booking.reference),
                "payment_status": booking.payment_status.value,
            },
        )
        return booking
