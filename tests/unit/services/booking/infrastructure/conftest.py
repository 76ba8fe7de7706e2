from unittest.mock import MagicMock

import pytest

from services.booking.infrastructure.dynamodb_unit_of_work import (
    DynamoDBBookingUnitOfWork,
)


class FakeTable:
    """get_item / query だけを辞書で再現する Table のスタブ"""

    def __init__(self) -> None:
        self.items: dict[tuple[str, str], dict] = {}
        self.query = MagicMock(side_effect=self._query)

    def put(self, item: dict) -> None:
        self.items[(item["PK"], item["SK"])] = item

    def get_item(self, Key: dict, **kwargs) -> dict:
        item = self.items.get((Key["PK"], Key["SK"]))
        return {"Item": item} if item else {}

    def _query(self, **kwargs) -> dict:
        items = [
            item
            for item in self.items.values()
            if _matches(item, kwargs["KeyConditionExpression"])
            and ("FilterExpression" not in kwargs or _matches(item, kwargs["FilterExpression"]))
        ]
        sort_key = "GSI1SK" if kwargs.get("IndexName") == "GSI1" else "SK"
        items.sort(
            key=lambda item: item[sort_key],
            reverse=not kwargs.get("ScanIndexForward", True),
        )
        return {"Items": items}


def _matches(item: dict, condition) -> bool:
    """boto3 の条件オブジェクト（=, begins_with, AND のみ）を評価する"""
    expression = condition.get_expression()
    operator = expression["operator"]
    if operator == "AND":
        return all(_matches(item, value) for value in expression["values"])
    attribute, value = expression["values"]
    actual = item.get(attribute.name)
    if operator == "begins_with":
        return isinstance(actual, str) and actual.startswith(value)
    return actual == value


@pytest.fixture
def table():
    return FakeTable()


@pytest.fixture
def dynamodb(table):
    resource = MagicMock()
    resource.Table.return_value = table
    return resource


@pytest.fixture
def client(dynamodb):
    return dynamodb.meta.client


@pytest.fixture
def dynamodb_uow_factory(dynamodb):
    return lambda: DynamoDBBookingUnitOfWork(table_name="test-table", dynamodb=dynamodb)


@pytest.fixture
def sent_items(client):
    """直近の TransactWriteItems に渡された書き込みを返す"""

    def _sent() -> list[dict]:
        return client.transact_write_items.call_args[1]["TransactItems"]

    return _sent
