from .booking_factory import BookingFactory as BookingFactory
from .booking_factory import Cart as Cart
from .booking_factory import CarRequest as CarRequest
from .booking_factory import FlightRequest as FlightRequest
from .booking_factory import HotelRequest as HotelRequest
from .booking_factory import MealRequest as MealRequest
