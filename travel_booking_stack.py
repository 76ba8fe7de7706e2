from aws_cdk import CfnOutput, Stack
from constructs import Construct

from infra.constructs import Api, Database, Functions, Layers, Observability


class TravelBookingStack(Stack):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        enable_observability: bool = True,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        database = Database(self, "Database")
        layers = Layers(self, "Layers")

        fns = Functions(
            self,
            "Functions",
            table=database.table,
            common_layer=layers.common_layer,
            booking_currency=self.node.try_get_context("booking_currency") or "USD",
        )

        api = Api(
            self,
            "Api",
            create_booking=fns.create_booking,
            cancel_booking=fns.cancel_booking,
            get_booking=fns.get_booking,
            list_bookings=fns.list_bookings,
        )

        if enable_observability:
            Observability(
                self,
                "Observability",
                functions=fns.all_functions,
            )

        CfnOutput(self, "ApiUrl", value=api.rest_api.url)
        CfnOutput(self, "UserPoolId", value=api.user_pool.user_pool_id)
        CfnOutput(self, "UserPoolClientId", value=api.user_pool_client.user_pool_client_id)
        CfnOutput(self, "TableName", value=database.table.table_name)
