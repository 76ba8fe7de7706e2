from .currency import Currency as Currency
from .date_period import RentalPeriod as RentalPeriod
from .date_period import StayPeriod as StayPeriod
from .iso_date_time import IsoDateTime as IsoDateTime
from .money import Money as Money
from .user_id import UserId as UserId
