from .resource_id import CarId as CarId
from .resource_id import FlightId as FlightId
from .resource_id import HotelRoomId as HotelRoomId
from .resource_id import MealId as MealId
from .resource_id import SeatId as SeatId
from .room_stay import RoomStay as RoomStay
