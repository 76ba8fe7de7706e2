from decimal import Decimal
from typing import Any

from services.inventory.domain.entity import Car
from services.inventory.domain.repository import CarRepository
from services.inventory.domain.value_object import CarId
from services.shared.domain import Currency, Money
from services.shared.domain.exception import ResourceUnavailableException
from services.shared.infrastructure.dynamodb_transaction import DynamoDBTransaction


def car_key(car_id: CarId) -> dict[str, str]:
    return {"PK": f"CAR#{car_id}", "SK": "CAR"}


class DynamoDBCarRepository(CarRepository):
    """DynamoDBを使用したCarRepository の具象実装"""

    def __init__(self, table: Any, transaction: DynamoDBTransaction) -> None:
        self.table = table
        self.transaction = transaction

    def save(self, car: Car) -> None:
        self.transaction.put(
            {
                **car_key(car.id),
                "entity_type": "CAR",
                "car_id": str(car.id),
                "make": car.make,
                "model": car.model,
                "category": car.category,
                "price_per_day": str(car.price_per_day.amount),
                "currency": str(car.price_per_day.currency),
                "is_available": car.is_available,
            }
        )

    def find_by_id(self, car_id: CarId) -> Car | None:
        """車両IDで検索"""
        response = self.table.get_item(Key=car_key(car_id), ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def hold(self, car: Car) -> None:
        self.transaction.update(
            key=car_key(car.id),
            update_expression="SET is_available = :false",
            condition="is_available = :true",
            values={":true": True, ":false": False},
            on_conflict=lambda: ResourceUnavailableException(
                "Car not found or not available"
            ),
        )

    def release(self, car_id: CarId) -> None:
        self.transaction.update(
            key=car_key(car_id),
            update_expression="SET is_available = :true",
            condition="attribute_exists(PK)",
            values={":true": True},
        )

    def _to_entity(self, item: dict) -> Car:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return Car(
            id=CarId(item["car_id"]),
            make=item["make"],
            model=item["model"],
            category=item["category"],
            price_per_day=Money(
                amount=Decimal(item["price_per_day"]),
                currency=Currency(item["currency"]),
            ),
            is_available=bool(item.get("is_available", True)),
        )
