import json
from functools import partial

import boto3
from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.applications.create_booking import CreateBookingService
from services.booking.domain.factory import BookingFactory
from services.booking.handlers.request_models import CreateBookingRequest
from services.booking.handlers.response_models import to_created_response
from services.booking.infrastructure.dynamodb_unit_of_work import (
    DynamoDBBookingUnitOfWork,
)
from services.booking.settings import BookingSettings
from services.shared.utils import (
    api_response,
    current_user_id,
    error_response,
    error_status,
)

logger = Logger()

settings = BookingSettings.from_env()
dynamodb = boto3.resource("dynamodb")
service = CreateBookingService(
    uow_factory=partial(DynamoDBBookingUnitOfWork, settings.table_name, dynamodb),
    factory=BookingFactory(),
    settings=settings,
    logger=logger,
)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約作成 Lambda Handler

    POST /bookings
    フライト・ホテル・レンタカー（と機内食）をまとめて予約する。
    """

    user_id = current_user_id(event)
    if user_id is None:
        return api_response(401, {"message": "Unauthorized"})
    logger.append_keys(user_id=str(user_id))

    try:
        body = event.json_body if event.body else {}
    except json.JSONDecodeError:
        return api_response(400, {"message": "Request body must be valid JSON"})

    try:
        request = CreateBookingRequest.model_validate(body)
        booking = service.create(user_id, request.to_cart())
        return api_response(201, to_created_response(booking))

    except Exception as e:
        if error_status(e) is None:
            logger.exception("Failed to create booking")
        else:
            logger.info("Booking request rejected", extra={"reason": str(e)})
        return error_response(e)
