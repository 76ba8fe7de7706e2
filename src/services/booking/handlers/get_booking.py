from functools import partial

import boto3
from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.applications.get_booking import GetBookingService
from services.booking.domain.value_object import BookingId
from services.booking.handlers.response_models import to_detail_response
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
service = GetBookingService(
    uow_factory=partial(DynamoDBBookingUnitOfWork, settings.table_name, dynamodb),
    settings=settings,
)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約詳細取得 Lambda Handler"""

    user_id = current_user_id(event)
    if user_id is None:
        return api_response(401, {"message": "Unauthorized"})

    booking_id = (event.path_parameters or {}).get("booking_id")
    if not booking_id:
        return api_response(400, {"message": "booking_id is required"})

    logger.info("Fetching booking details", extra={"booking_id": booking_id})

    try:
        booking = service.get(user_id, BookingId(booking_id))
        return api_response(200, to_detail_response(booking))

    except Exception as e:
        if error_status(e) is None:
            logger.exception("Failed to fetch booking details")
        return error_response(e)
