from decimal import Decimal
from typing import Any

from services.inventory.domain.entity import Meal
from services.inventory.domain.repository import MealRepository
from services.inventory.domain.value_object import MealId
from services.shared.domain import Currency, Money
from services.shared.infrastructure.dynamodb_transaction import DynamoDBTransaction


class DynamoDBMealRepository(MealRepository):
    """DynamoDBを使用したMealRepository の具象実装"""

    def __init__(self, table: Any, transaction: DynamoDBTransaction) -> None:
        self.table = table
        self.transaction = transaction

    def save(self, meal: Meal) -> None:
        self.transaction.put(
            {
                "PK": f"MEAL#{meal.id}",
                "SK": "MEAL",
                "entity_type": "MEAL",
                "meal_id": str(meal.id),
                "name": meal.name,
                "meal_type": meal.meal_type,
                "price": str(meal.price.amount),
                "currency": str(meal.price.currency),
            }
        )

    def find_by_id(self, meal_id: MealId) -> Meal | None:
        response = self.table.get_item(
            Key={"PK": f"MEAL#{meal_id}", "SK": "MEAL"}, ConsistentRead=True
        )
        item = response.get("Item")
        if not item:
            return None
        return Meal(
            id=MealId(item["meal_id"]),
            name=item["name"],
            meal_type=item["meal_type"],
            price=Money(
                amount=Decimal(item["price"]), currency=Currency(item["currency"])
            ),
        )
