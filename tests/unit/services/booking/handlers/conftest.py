import json
from dataclasses import dataclass

import pytest


@dataclass
class LambdaContext:
    function_name: str = "test-booking-function"
    memory_limit_in_mb: int = 256
    invoked_function_arn: str = (
        "arn:aws:lambda:us-east-1:123456789012:function:test-booking-function"
    )
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"


@pytest.fixture
def lambda_context():
    return LambdaContext()


@pytest.fixture
def api_event():
    """API Gateway (REST, Cognito オーソライザー) のイベントを生成する Factory fixture"""

    def _factory(
        body: dict | str | None = None,
        path_parameters: dict | None = None,
        query_string_parameters: dict | None = None,
        sub: str | None = "user-123",
        http_method: str = "POST",
        path: str = "/bookings",
    ) -> dict:
        authorizer = {"claims": {"sub": sub}} if sub else {}
        return {
            "resource": path,
            "path": path,
            "httpMethod": http_method,
            "headers": {"Content-Type": "application/json"},
            "pathParameters": path_parameters,
            "queryStringParameters": query_string_parameters,
            "requestContext": {"requestId": "req-1", "authorizer": authorizer},
            "body": body if isinstance(body, str) or body is None else json.dumps(body),
            "isBase64Encoded": False,
        }

    return _factory
