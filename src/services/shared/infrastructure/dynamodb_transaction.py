from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from services.shared.domain.exception import (
    InfrastructureException,
    OptimisticLockException,
)

logger = Logger(child=True)

ConflictFactory = Callable[[], Exception]

# TransactWriteItems の上限
MAX_TRANSACT_ITEMS = 100


@dataclass(frozen=True)
class _Operation:
    request: dict[str, Any]
    on_conflict: ConflictFactory | None


class DynamoDBTransaction:
    """TransactWriteItems にまとめて送る書き込みバッファ

    各書き込みには条件式と、条件が満たされなかったときに送出する
    ドメイン例外を紐づけておく。commit() は全件成功か全件失敗のどちらか。
    """

    def __init__(self, client: Any, table_name: str) -> None:
        self._client = client
        self._table_name = table_name
        self._operations: list[_Operation] = []

    def __len__(self) -> int:
        return len(self._operations)

    def put(
        self,
        item: dict[str, Any],
        condition: str | None = None,
        names: dict[str, str] | None = None,
        values: dict[str, Any] | None = None,
        on_conflict: ConflictFactory | None = None,
    ) -> None:
        request: dict[str, Any] = {"TableName": self._table_name, "Item": item}
        self._append("Put", request, condition, names, values, on_conflict)

    def update(
        self,
        key: dict[str, str],
        update_expression: str,
        condition: str | None = None,
        names: dict[str, str] | None = None,
        values: dict[str, Any] | None = None,
        on_conflict: ConflictFactory | None = None,
    ) -> None:
        request: dict[str, Any] = {
            "TableName": self._table_name,
            "Key": key,
            "UpdateExpression": update_expression,
        }
        self._append("Update", request, condition, names, values, on_conflict)

    def delete(
        self,
        key: dict[str, str],
        condition: str | None = None,
        names: dict[str, str] | None = None,
        values: dict[str, Any] | None = None,
        on_conflict: ConflictFactory | None = None,
    ) -> None:
        request: dict[str, Any] = {"TableName": self._table_name, "Key": key}
        self._append("Delete", request, condition, names, values, on_conflict)

    def clear(self) -> None:
        self._operations.clear()

    def commit(self) -> None:
        """バッファした書き込みをアトミックに反映する"""
        operations = self._operations.copy()
        self._operations.clear()
        if not operations:
            return
        if len(operations) > MAX_TRANSACT_ITEMS:
            raise InfrastructureException(
                f"Too many writes in one transaction: {len(operations)}"
            )

        try:
            self._client.transact_write_items(
                TransactItems=[operation.request for operation in operations]
            )
        except ClientError as e:
            if e.response["Error"]["Code"] != "TransactionCanceledException":
                raise InfrastructureException("DynamoDB transaction failed") from e
            raise self._to_domain_exception(operations, e) from e

    def _append(
        self,
        kind: str,
        request: dict[str, Any],
        condition: str | None,
        names: dict[str, str] | None,
        values: dict[str, Any] | None,
        on_conflict: ConflictFactory | None,
    ) -> None:
        if condition is not None:
            request["ConditionExpression"] = condition
        if names:
            request["ExpressionAttributeNames"] = names
        if values:
            request["ExpressionAttributeValues"] = values
        self._operations.append(
            _Operation(request={kind: request}, on_conflict=on_conflict)
        )

    def _to_domain_exception(
        self, operations: list[_Operation], error: ClientError
    ) -> Exception:
        """キャンセル理由を書き込み順に突き合わせて例外を決める"""
        reasons = error.response.get("CancellationReasons", [])
        for operation, reason in zip(operations, reasons):
            code = reason.get("Code")
            if code == "ConditionalCheckFailed" and operation.on_conflict:
                return operation.on_conflict()

        codes = [reason.get("Code") for reason in reasons]
        if "TransactionConflict" in codes:
            return OptimisticLockException("Concurrent update detected, please retry")

        logger.error("DynamoDB transaction cancelled", extra={"reasons": codes})
        return InfrastructureException("DynamoDB transaction cancelled")
