import json

from pydantic import ValidationError

from services.shared.domain.exception import (
    BookingAlreadyCancelledException,
    BookingTerminalStateException,
    DomainException,
    DuplicateResourceException,
    InvalidDateRangeException,
    OptimisticLockException,
    ResourceNotFoundException,
    ResourceUnavailableException,
)

# 上から順に評価する（サブクラスを先に書く）
_STATUS_BY_EXCEPTION: list[tuple[type[Exception], int]] = [
    (ResourceNotFoundException, 404),
    (ResourceUnavailableException, 409),
    (InvalidDateRangeException, 400),
    (BookingAlreadyCancelledException, 409),
    (BookingTerminalStateException, 409),
    (DuplicateResourceException, 409),
    (OptimisticLockException, 409),
    (DomainException, 400),
]


def api_response(status_code: int, body: dict) -> dict:
    """API Gateway REST API (Lambda Proxy) のレスポンス形式を生成する"""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=str),
    }


def error_status(exc: Exception) -> int | None:
    """クライアント起因の例外なら HTTP ステータスを返す。インフラ障害なら None"""
    if isinstance(exc, ValidationError):
        return 400
    for exc_type, status_code in _STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return status_code
    return None


def error_response(exc: Exception) -> dict:
    """例外をエラーレスポンスに変換する

    ドメイン例外はメッセージをそのまま返し、それ以外は詳細を隠す。
    """
    status_code = error_status(exc)
    if status_code is None:
        return api_response(500, {"message": "Internal server error"})
    if isinstance(exc, ValidationError):
        return api_response(
            400,
            {
                "message": "Validation failed",
                "details": exc.errors(include_url=False, include_context=False),
            },
        )
    return api_response(status_code, {"message": str(exc)})
