from decimal import Decimal
from functools import partial
from typing import Any

from boto3.dynamodb.conditions import Attr, Key

from services.booking.domain.entity import (
    Booking,
    CarRental,
    FlightBooking,
    HotelBooking,
    MealBooking,
)
from services.booking.domain.enum import BookingStatus, PaymentStatus
from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import (
    BookingId,
    BookingReference,
    Contact,
    LineItemId,
)
from services.inventory.domain import CarId, FlightId, HotelRoomId, MealId, SeatId
from services.shared.domain import (
    Currency,
    IsoDateTime,
    Money,
    RentalPeriod,
    StayPeriod,
    UserId,
)
from services.shared.domain.exception import (
    BookingReferenceConflictException,
    DuplicateResourceException,
    OptimisticLockException,
)
from services.shared.infrastructure.dynamodb_transaction import DynamoDBTransaction


def booking_key(booking_id: BookingId) -> dict[str, str]:
    return {"PK": f"BOOKING#{booking_id}", "SK": "BOOKING"}


def _contact_attributes(prefix: str, contact: Contact) -> dict[str, Any]:
    attributes = {f"{prefix}_name": contact.name, f"{prefix}_email": contact.email}
    if contact.phone:
        attributes[f"{prefix}_phone"] = contact.phone
    return attributes


def _contact(prefix: str, item: dict) -> Contact:
    return Contact(
        name=item[f"{prefix}_name"],
        email=item[f"{prefix}_email"],
        phone=item.get(f"{prefix}_phone"),
    )


class DynamoDBBookingRepository(BookingRepository):
    """DynamoDBを使用したBookingRepository の具象実装

    アイテム構成:
        PK=BOOKING#<id>       SK=BOOKING                 予約ヘッダ（GSI1 で利用者別に引ける）
        PK=BOOKING#<id>       SK=FLIGHT#<明細ID>         フライト明細
        PK=BOOKING#<id>       SK=MEAL#<フライト明細ID>#<明細ID>
        PK=BOOKING#<id>       SK=HOTEL#<明細ID>
        PK=BOOKING#<id>       SK=CAR#<明細ID>
        PK=REFERENCE#<予約番号> SK=REFERENCE              予約番号の一意性確保
    """

    def __init__(self, table: Any, transaction: DynamoDBTransaction) -> None:
        self.table = table
        self.transaction = transaction

    def save(self, booking: Booking) -> None:
        """予約をDBに保存する"""
        booking_id = str(booking.id)
        self.transaction.put(
            {
                "PK": f"REFERENCE#{booking.reference}",
                "SK": "REFERENCE",
                "entity_type": "BOOKING_REFERENCE",
                "booking_id": booking_id,
            },
            condition="attribute_not_exists(PK)",
            on_conflict=partial(
                BookingReferenceConflictException,
                f"Booking reference already in use: {booking.reference}",
            ),
        )
        self.transaction.put(
            {
                **booking_key(booking.id),
                "entity_type": "BOOKING",
                "booking_id": booking_id,
                "user_id": str(booking.user_id),
                "booking_reference": str(booking.reference),
                "total_amount": str(booking.total_amount.amount),
                "currency": str(booking.total_amount.currency),
                "status": booking.status.value,
                "payment_status": booking.payment_status.value,
                "booked_at": str(booking.booked_at),
                "GSI1PK": f"USER#{booking.user_id}",
                "GSI1SK": f"BOOKING#{booking.booked_at}#{booking_id}",
            },
            condition="attribute_not_exists(PK)",
            on_conflict=partial(
                DuplicateResourceException, f"Booking already exists: {booking.id}"
            ),
        )

        for flight_booking in booking.flight_bookings:
            self.transaction.put(self._flight_item(flight_booking))
            for meal_booking in flight_booking.meal_bookings:
                self.transaction.put(self._meal_item(booking.id, meal_booking))
        for hotel_booking in booking.hotel_bookings:
            self.transaction.put(self._hotel_item(hotel_booking))
        for car_rental in booking.car_rentals:
            self.transaction.put(self._car_item(car_rental))

    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        """予約IDで検索（明細ごと読み込む）"""
        items: list[dict] = []
        kwargs: dict = {
            "KeyConditionExpression": Key("PK").eq(f"BOOKING#{booking_id}"),
            "ConsistentRead": True,
        }
        while True:
            response = self.table.query(**kwargs)
            items.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            kwargs["ExclusiveStartKey"] = last_key

        header = next((item for item in items if item["SK"] == "BOOKING"), None)
        if header is None:
            return None
        return self._to_entity(header, items)

    def find_by_user(
        self,
        user_id: UserId,
        status: BookingStatus | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Booking]:
        """利用者の予約を新しい順に検索する"""
        wanted = offset + limit
        headers: list[dict] = []
        kwargs: dict = {
            "IndexName": "GSI1",
            "KeyConditionExpression": Key("GSI1PK").eq(f"USER#{user_id}"),
            "ScanIndexForward": False,
        }
        if status is not None:
            kwargs["FilterExpression"] = Attr("status").eq(status.value)

        while len(headers) < wanted:
            response = self.table.query(**kwargs)
            headers.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            kwargs["ExclusiveStartKey"] = last_key

        return [self._to_entity(header, []) for header in headers[offset:wanted]]

    def update(self, booking: Booking, expected_status: BookingStatus) -> None:
        """予約のステータスを更新する"""
        self.transaction.update(
            key=booking_key(booking.id),
            update_expression="SET #status = :status, payment_status = :payment_status",
            condition="#status = :expected",
            names={"#status": "status"},
            values={
                ":status": booking.status.value,
                ":payment_status": booking.payment_status.value,
                ":expected": expected_status.value,
            },
            on_conflict=partial(
                OptimisticLockException,
                f"Booking status conflict: expected {expected_status.value}, "
                f"booking_id={booking.id}",
            ),
        )

    def _flight_item(self, flight_booking: FlightBooking) -> dict:
        item = {
            "PK": f"BOOKING#{flight_booking.booking_id}",
            "SK": f"FLIGHT#{flight_booking.id}",
            "entity_type": "FLIGHT_BOOKING",
            "line_item_id": str(flight_booking.id),
            "flight_id": str(flight_booking.flight_id),
            **_contact_attributes("passenger", flight_booking.passenger),
            "flight_price": str(flight_booking.flight_price.amount),
            "seat_price": str(flight_booking.seat_price.amount),
            "currency": str(flight_booking.flight_price.currency),
        }
        if flight_booking.seat_id is not None:
            item["seat_id"] = str(flight_booking.seat_id)
        if flight_booking.passenger_passport:
            item["passenger_passport"] = flight_booking.passenger_passport
        return item

    def _meal_item(self, booking_id: BookingId, meal_booking: MealBooking) -> dict:
        return {
            "PK": f"BOOKING#{booking_id}",
            "SK": f"MEAL#{meal_booking.flight_booking_id}#{meal_booking.id}",
            "entity_type": "MEAL_BOOKING",
            "line_item_id": str(meal_booking.id),
            "flight_booking_id": str(meal_booking.flight_booking_id),
            "meal_id": str(meal_booking.meal_id),
            "quantity": meal_booking.quantity,
            "total_price": str(meal_booking.total_price.amount),
            "currency": str(meal_booking.total_price.currency),
        }

    def _hotel_item(self, hotel_booking: HotelBooking) -> dict:
        item = {
            "PK": f"BOOKING#{hotel_booking.booking_id}",
            "SK": f"HOTEL#{hotel_booking.id}",
            "entity_type": "HOTEL_BOOKING",
            "line_item_id": str(hotel_booking.id),
            "hotel_room_id": str(hotel_booking.hotel_room_id),
            **_contact_attributes("guest", hotel_booking.guest),
            "check_in_date": hotel_booking.stay_period.check_in,
            "check_out_date": hotel_booking.stay_period.check_out,
            "number_of_guests": hotel_booking.number_of_guests,
            "price_per_night": str(hotel_booking.price_per_night.amount),
            "total_price": str(hotel_booking.total_price.amount),
            "currency": str(hotel_booking.total_price.currency),
        }
        if hotel_booking.special_requests:
            item["special_requests"] = hotel_booking.special_requests
        return item

    def _car_item(self, car_rental: CarRental) -> dict:
        item = {
            "PK": f"BOOKING#{car_rental.booking_id}",
            "SK": f"CAR#{car_rental.id}",
            "entity_type": "CAR_RENTAL",
            "line_item_id": str(car_rental.id),
            "car_id": str(car_rental.car_id),
            **_contact_attributes("renter", car_rental.renter),
            "renter_license": car_rental.renter_license,
            "pickup_date": car_rental.rental_period.pickup,
            "dropoff_date": car_rental.rental_period.dropoff,
            "pickup_location": car_rental.pickup_location,
            "dropoff_location": car_rental.dropoff_location,
            "price_per_day": str(car_rental.price_per_day.amount),
            "insurance": car_rental.insurance,
            "insurance_cost": str(car_rental.insurance_cost.amount),
            "total_price": str(car_rental.total_price.amount),
            "currency": str(car_rental.total_price.currency),
        }
        if car_rental.additional_drivers:
            item["additional_drivers"] = car_rental.additional_drivers
        return item

    def _to_entity(self, header: dict, items: list[dict]) -> Booking:
        """DynamoDB アイテム群を予約集約に組み立てる"""
        booking_id = BookingId(header["booking_id"])
        currency = Currency(header["currency"])

        def money(amount: str) -> Money:
            return Money(amount=Decimal(amount), currency=currency)

        meals_by_flight: dict[str, list[MealBooking]] = {}
        for item in items:
            if item["entity_type"] != "MEAL_BOOKING":
                continue
            meals_by_flight.setdefault(item["flight_booking_id"], []).append(
                MealBooking(
                    id=LineItemId(item["line_item_id"]),
                    flight_booking_id=LineItemId(item["flight_booking_id"]),
                    meal_id=MealId(item["meal_id"]),
                    quantity=int(item["quantity"]),
                    total_price=money(item["total_price"]),
                )
            )

        flight_bookings = [
            FlightBooking(
                id=LineItemId(item["line_item_id"]),
                booking_id=booking_id,
                flight_id=FlightId(item["flight_id"]),
                seat_id=SeatId(item["seat_id"]) if item.get("seat_id") else None,
                passenger=_contact("passenger", item),
                passenger_passport=item.get("passenger_passport"),
                flight_price=money(item["flight_price"]),
                seat_price=money(item["seat_price"]),
                meal_bookings=meals_by_flight.get(item["line_item_id"], []),
            )
            for item in items
            if item["entity_type"] == "FLIGHT_BOOKING"
        ]
        hotel_bookings = [
            HotelBooking(
                id=LineItemId(item["line_item_id"]),
                booking_id=booking_id,
                hotel_room_id=HotelRoomId(item["hotel_room_id"]),
                guest=_contact("guest", item),
                stay_period=StayPeriod(
                    check_in=item["check_in_date"], check_out=item["check_out_date"]
                ),
                number_of_guests=int(item["number_of_guests"]),
                price_per_night=money(item["price_per_night"]),
                total_price=money(item["total_price"]),
                special_requests=item.get("special_requests"),
            )
            for item in items
            if item["entity_type"] == "HOTEL_BOOKING"
        ]
        car_rentals = [
            CarRental(
                id=LineItemId(item["line_item_id"]),
                booking_id=booking_id,
                car_id=CarId(item["car_id"]),
                renter=_contact("renter", item),
                renter_license=item["renter_license"],
                rental_period=RentalPeriod(
                    pickup=item["pickup_date"], dropoff=item["dropoff_date"]
                ),
                pickup_location=item["pickup_location"],
                dropoff_location=item["dropoff_location"],
                additional_drivers=item.get("additional_drivers"),
                price_per_day=money(item["price_per_day"]),
                insurance=bool(item["insurance"]),
                insurance_cost=money(item["insurance_cost"]),
                total_price=money(item["total_price"]),
            )
            for item in items
            if item["entity_type"] == "CAR_RENTAL"
        ]

        return Booking(
            id=booking_id,
            user_id=UserId(header["user_id"]),
            reference=BookingReference(header["booking_reference"]),
            total_amount=money(header["total_amount"]),
            booked_at=IsoDateTime.from_string(header["booked_at"]),
            status=BookingStatus(header["status"]),
            payment_status=PaymentStatus(header["payment_status"]),
            flight_bookings=flight_bookings,
            hotel_bookings=hotel_bookings,
            car_rentals=car_rentals,
            finalized=True,
        )
