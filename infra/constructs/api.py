from aws_cdk import RemovalPolicy
from aws_cdk import aws_apigateway as apigw
from aws_cdk import aws_cognito as cognito
from aws_cdk import aws_lambda as _lambda
from constructs import Construct


class Api(Construct):
    """API Gateway Construct

    全メソッドを Cognito ユーザープールで認証し、
    Lambda 側ではオーソライザーが付与する sub クレームを利用者IDとして使う。
    """

    def __init__(
        self,
        scope: Construct,
        id: str,
        create_booking: _lambda.Function,
        cancel_booking: _lambda.Function,
        get_booking: _lambda.Function,
        list_bookings: _lambda.Function,
    ) -> None:
        super().__init__(scope, id)

        self.user_pool = cognito.UserPool(
            self,
            "UserPool",
            self_sign_up_enabled=True,
            sign_in_aliases=cognito.SignInAliases(email=True),
            auto_verify=cognito.AutoVerifiedAttrs(email=True),
            removal_policy=RemovalPolicy.DESTROY,
        )
        self.user_pool_client = self.user_pool.add_client(
            "WebClient",
            auth_flows=cognito.AuthFlow(user_password=True, user_srp=True),
        )

        self.rest_api = apigw.RestApi(
            self,
            "BookingRestApi",
            rest_api_name="Travel Booking API",
            deploy_options=apigw.StageOptions(
                stage_name="prod",
                throttling_burst_limit=10,
                throttling_rate_limit=5,
            ),
        )

        authorizer = apigw.CognitoUserPoolsAuthorizer(
            self,
            "CognitoAuthorizer",
            cognito_user_pools=[self.user_pool],
        )
        method_options = {
            "authorizer": authorizer,
            "authorization_type": apigw.AuthorizationType.COGNITO,
        }

        # POST /bookings, GET /bookings
        bookings_resource = self.rest_api.root.add_resource("bookings")
        bookings_resource.add_method(
            "POST", apigw.LambdaIntegration(create_booking), **method_options
        )
        bookings_resource.add_method(
            "GET", apigw.LambdaIntegration(list_bookings), **method_options
        )

        # GET /bookings/{booking_id}
        booking_resource = bookings_resource.add_resource("{booking_id}")
        booking_resource.add_method(
            "GET", apigw.LambdaIntegration(get_booking), **method_options
        )

        # PATCH /bookings/{booking_id}/cancel
        booking_resource.add_resource("cancel").add_method(
            "PATCH", apigw.LambdaIntegration(cancel_booking), **method_options
        )
