from aws_cdk import Duration
from aws_cdk import aws_dynamodb as dynamodb
from aws_cdk import aws_lambda as _lambda
from constructs import Construct

from infra.constructs.layers import LAMBDA_RUNTIME

SERVICE_NAME = "booking-service"


class Functions(Construct):
    """Lambda 関数を管理する Construct"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        table: dynamodb.Table,
        common_layer: _lambda.LayerVersion,
        booking_currency: str = "USD",
    ) -> None:
        super().__init__(scope, id)

        self._table = table
        self._common_layer = common_layer
        self._booking_currency = booking_currency

        self.create_booking = self._create_function(
            "CreateBookingLambda",
            "services.booking.handlers.create.lambda_handler",
        )

        self.cancel_booking = self._create_function(
            "CancelBookingLambda",
            "services.booking.handlers.cancel.lambda_handler",
        )

        # 予約・キャンセルは在庫と予約を TransactWriteItems で同時に書き換える
        table.grant_read_write_data(self.create_booking)
        table.grant_read_write_data(self.cancel_booking)

        self.get_booking = self._create_function(
            "GetBookingLambda",
            "services.booking.handlers.get_booking.lambda_handler",
        )

        self.list_bookings = self._create_function(
            "ListBookingsLambda",
            "services.booking.handlers.list_bookings.lambda_handler",
        )

        table.grant_read_data(self.get_booking)
        table.grant_read_data(self.list_bookings)

    @property
    def all_functions(self) -> list[_lambda.Function]:
        return [
            self.create_booking,
            self.cancel_booking,
            self.get_booking,
            self.list_bookings,
        ]

    def _create_function(self, id: str, handler: str) -> _lambda.Function:
        return _lambda.Function(
            self,
            id,
            runtime=LAMBDA_RUNTIME,
            handler=handler,
            code=_lambda.Code.from_asset("src"),
            layers=[self._common_layer],
            timeout=Duration.seconds(10),
            memory_size=256,
            environment={
                "TABLE_NAME": self._table.table_name,
                "BOOKING_CURRENCY": self._booking_currency,
                "POWERTOOLS_SERVICE_NAME": SERVICE_NAME,
                "POWERTOOLS_LOG_LEVEL": "INFO",
            },
        )
