from functools import partial

import boto3
from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.applications.cancel_booking import CancelBookingService
from services.booking.domain.value_object import BookingId
from services.booking.handlers.response_models import to_cancelled_response
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
service = CancelBookingService(
    uow_factory=partial(DynamoDBBookingUnitOfWork, settings.table_name, dynamodb),
    logger=logger,
)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約キャンセル Lambda Handler

    PATCH /bookings/{booking_id}/cancel
    """

    user_id = current_user_id(event)
    if user_id is None:
        return api_response(401, {"message": "Unauthorized"})
    logger.append_keys(user_id=str(user_id))

    booking_id = (event.path_parameters or {}).get("booking_id")
    if not booking_id:
        return api_response(400, {"message": "booking_id is required"})

    try:
        booking = service.cancel(user_id, BookingId(booking_id))
        return api_response(200, to_cancelled_response(booking))

    except Exception as e:
        if error_status(e) is None:
            logger.exception("Failed to cancel booking", extra={"booking_id": booking_id})
        else:
            logger.info("Cancellation rejected", extra={"reason": str(e)})
        return error_response(e)
