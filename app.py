#!/usr/bin/env python3

import aws_cdk as cdk

from travel_booking_stack import TravelBookingStack

app = cdk.App()
TravelBookingStack(
    app,
    "TravelBookingStack",
    enable_observability=app.node.try_get_context("observability") != "false",
)

app.synth()
