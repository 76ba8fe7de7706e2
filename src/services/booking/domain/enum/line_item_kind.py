from enum import Enum


class LineItemKind(str, Enum):
    """予約明細の種類"""

    FLIGHT = "flight"
    MEAL = "meal"
    HOTEL = "hotel"
    CAR = "car"
