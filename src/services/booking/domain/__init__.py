from .entity import Booking as Booking
from .entity import CarRental as CarRental
from .entity import FlightBooking as FlightBooking
from .entity import HotelBooking as HotelBooking
from .entity import MealBooking as MealBooking
from .enum import BookingStatus as BookingStatus
from .enum import LineItemKind as LineItemKind
from .enum import PaymentStatus as PaymentStatus
from .factory import BookingFactory as BookingFactory
from .factory import Cart as Cart
from .repository import BookingRepository as BookingRepository
from .repository import BookingUnitOfWork as BookingUnitOfWork
from .value_object import BookingId as BookingId
from .value_object import BookingReference as BookingReference
from .value_object import Contact as Contact
from .value_object import LineItemId as LineItemId
