from .booking import Booking as Booking
from .car_rental import CarRental as CarRental
from .flight_booking import FlightBooking as FlightBooking
from .hotel_booking import HotelBooking as HotelBooking
from .meal_booking import MealBooking as MealBooking
