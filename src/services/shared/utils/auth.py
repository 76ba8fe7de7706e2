from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEvent

from services.shared.domain import UserId


def current_user_id(event: APIGatewayProxyEvent) -> UserId | None:
    """Cognito オーソライザーが付与した sub クレームから利用者IDを取り出す"""
    claims = event.request_context.authorizer.claims or {}
    sub = claims.get("sub")
    if not sub:
        return None
    return UserId(sub)
