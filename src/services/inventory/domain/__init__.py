from .entity import Car as Car
from .entity import Flight as Flight
from .entity import HotelRoom as HotelRoom
from .entity import Meal as Meal
from .entity import Seat as Seat
from .repository import CarRepository as CarRepository
from .repository import FlightRepository as FlightRepository
from .repository import HotelRoomRepository as HotelRoomRepository
from .repository import MealRepository as MealRepository
from .value_object import CarId as CarId
from .value_object import FlightId as FlightId
from .value_object import HotelRoomId as HotelRoomId
from .value_object import MealId as MealId
from .value_object import RoomStay as RoomStay
from .value_object import SeatId as SeatId
