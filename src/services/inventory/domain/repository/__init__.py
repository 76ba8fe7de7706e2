from .car_repository import CarRepository as CarRepository
from .flight_repository import FlightRepository as FlightRepository
from .hotel_room_repository import HotelRoomRepository as HotelRoomRepository
from .meal_repository import MealRepository as MealRepository
