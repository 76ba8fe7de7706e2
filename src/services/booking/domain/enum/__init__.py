from .booking_status import BookingStatus as BookingStatus
from .line_item_kind import LineItemKind as LineItemKind
from .payment_status import PaymentStatus as PaymentStatus
