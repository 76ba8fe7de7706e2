from .booking_repository import BookingRepository as BookingRepository
from .booking_unit_of_work import BookingUnitOfWork as BookingUnitOfWork
