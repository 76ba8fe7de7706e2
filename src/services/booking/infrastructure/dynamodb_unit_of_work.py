import os
from typing import Any

import boto3

from services.booking.domain.repository import BookingUnitOfWork
from services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from services.inventory.infrastructure.dynamodb_car_repository import (
    DynamoDBCarRepository,
)
from services.inventory.infrastructure.dynamodb_flight_repository import (
    DynamoDBFlightRepository,
)
from services.inventory.infrastructure.dynamodb_hotel_room_repository import (
    DynamoDBHotelRoomRepository,
)
from services.inventory.infrastructure.dynamodb_meal_repository import (
    DynamoDBMealRepository,
)
from services.shared.infrastructure.dynamodb_transaction import DynamoDBTransaction


class DynamoDBBookingUnitOfWork(BookingUnitOfWork):
    """DynamoDBを使用したBookingUnitOfWork の具象実装

    読み込みは各リポジトリが即時に行い、書き込みは共有の
    DynamoDBTransaction に積んで commit() で1回の TransactWriteItems にする。
    """

    def __init__(self, table_name: str | None = None, dynamodb: Any = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = dynamodb or boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)
        # resource の client は Python の型を AttributeValue に変換してくれる
        self.transaction = DynamoDBTransaction(
            self.dynamodb.meta.client, self.table_name
        )

        self.bookings = DynamoDBBookingRepository(self.table, self.transaction)
        self.flights = DynamoDBFlightRepository(self.table, self.transaction)
        self.hotel_rooms = DynamoDBHotelRoomRepository(self.table, self.transaction)
        self.cars = DynamoDBCarRepository(self.table, self.transaction)
        self.meals = DynamoDBMealRepository(self.table, self.transaction)

    def __enter__(self) -> "DynamoDBBookingUnitOfWork":
        self.transaction.clear()
        super().__enter__()
        return self

    def _commit(self) -> None:
        self.transaction.commit()

    def rollback(self) -> None:
        self.transaction.clear()
