from .car import Car as Car
from .flight import Flight as Flight
from .hotel_room import HotelRoom as HotelRoom
from .meal import Meal as Meal
from .seat import Seat as Seat
