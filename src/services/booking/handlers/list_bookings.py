from functools import partial

import boto3
from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.applications.get_booking import GetBookingService
from services.booking.handlers.request_models import ListBookingsQuery
from services.booking.handlers.response_models import to_list_response
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
    """予約一覧取得 Lambda Handler

    GET /bookings?status=&limit=&offset=
    """

    user_id = current_user_id(event)
    if user_id is None:
        return api_response(401, {"message": "Unauthorized"})

    logger.info("Listing bookings")

    try:
        query = ListBookingsQuery.model_validate(event.query_string_parameters or {})
        limit = min(query.limit or settings.page_size, settings.max_page_size)
        bookings = service.list(
            user_id, status=query.status, limit=limit, offset=query.offset
        )
        return api_response(200, to_list_response(bookings, limit, query.offset))

    except Exception as e:
        if error_status(e) is None:
            logger.exception("Failed to list bookings")
        return error_response(e)
