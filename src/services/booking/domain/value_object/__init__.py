from .booking_id import BookingId as BookingId
from .booking_id import LineItemId as LineItemId
from .booking_reference import BookingReference as BookingReference
from .contact import Contact as Contact
