from decimal import Decimal
from typing import Any

from services.inventory.domain.entity import Flight, Seat
from services.inventory.domain.repository import FlightRepository
from services.inventory.domain.value_object import FlightId, SeatId
from services.shared.domain import Currency, IsoDateTime, Money
from services.shared.domain.exception import (
    ResourceNotFoundException,
    ResourceUnavailableException,
)
from services.shared.infrastructure.dynamodb_transaction import DynamoDBTransaction


def flight_key(flight_id: FlightId) -> dict[str, str]:
    return {"PK": f"FLIGHT#{flight_id}", "SK": "FLIGHT"}


def seat_key(flight_id: FlightId, seat_id: SeatId) -> dict[str, str]:
    return {"PK": f"FLIGHT#{flight_id}", "SK": f"SEAT#{seat_id}"}


def _money(amount: str | None, currency: str) -> Money | None:
    if amount is None:
        return None
    return Money(amount=Decimal(amount), currency=Currency(currency))


class DynamoDBFlightRepository(FlightRepository):
    """DynamoDBを使用したFlightRepository の具象実装

    フライトと座席は同じパーティション（FLIGHT#id）に置く。
    書き込みはすべて DynamoDBTransaction に積み、UoW のコミットで反映する。
    """

    def __init__(self, table: Any, transaction: DynamoDBTransaction) -> None:
        self.table = table
        self.transaction = transaction

    def save(self, flight: Flight) -> None:
        item = {
            **flight_key(flight.id),
            "entity_type": "FLIGHT",
            "flight_id": str(flight.id),
            "flight_number": flight.flight_number,
            "departure_time": str(flight.departure_time),
            "arrival_time": str(flight.arrival_time),
            "economy_class_price": str(flight.economy_class_price.amount),
            "currency": str(flight.economy_class_price.currency),
            "available_seats": flight.available_seats,
        }
        if flight.business_class_price is not None:
            item["business_class_price"] = str(flight.business_class_price.amount)
        if flight.first_class_price is not None:
            item["first_class_price"] = str(flight.first_class_price.amount)
        self.transaction.put(item)

    def save_seat(self, seat: Seat) -> None:
        """座席を保存する"""
        self.transaction.put(
            {
                **seat_key(seat.flight_id, seat.id),
                "entity_type": "SEAT",
                "seat_id": str(seat.id),
                "flight_id": str(seat.flight_id),
                "seat_number": seat.seat_number,
                "seat_class": seat.seat_class,
                "price": str(seat.price.amount),
                "currency": str(seat.price.currency),
                "is_available": seat.is_available,
            }
        )

    def find_by_id(self, flight_id: FlightId) -> Flight | None:
        """フライトIDで検索"""
        response = self.table.get_item(Key=flight_key(flight_id), ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return None
        return self._to_flight(item)

    def find_seat(self, flight_id: FlightId, seat_id: SeatId) -> Seat | None:
        # キーにフライトIDを含むため、別フライトの座席は見つからない
        response = self.table.get_item(
            Key=seat_key(flight_id, seat_id), ConsistentRead=True
        )
        item = response.get("Item")
        if not item:
            return None
        return self._to_seat(item)

    def reserve_seat_capacity(self, flight_id: FlightId) -> None:
        self.transaction.update(
            key=flight_key(flight_id),
            update_expression="SET available_seats = available_seats - :one",
            condition="attribute_exists(PK) AND available_seats >= :one",
            values={":one": 1},
            on_conflict=lambda: ResourceUnavailableException(
                "No available seats on this flight"
            ),
        )

    def release_seat_capacity(self, flight_id: FlightId) -> None:
        self.transaction.update(
            key=flight_key(flight_id),
            update_expression="SET available_seats = available_seats + :one",
            condition="attribute_exists(PK)",
            values={":one": 1},
            on_conflict=lambda: ResourceNotFoundException(
                f"Flight not found: {flight_id}"
            ),
        )

    def hold_seat(self, seat: Seat) -> None:
        self.transaction.update(
            key=seat_key(seat.flight_id, seat.id),
            update_expression="SET is_available = :false",
            condition="is_available = :true",
            values={":true": True, ":false": False},
            on_conflict=lambda: ResourceUnavailableException(
                "Selected seat is not available"
            ),
        )

    def release_seat(self, flight_id: FlightId, seat_id: SeatId) -> None:
        # 座席が存在しないと条件違反でトランザクション全体が失敗する
        self.transaction.update(
            key=seat_key(flight_id, seat_id),
            update_expression="SET is_available = :true",
            condition="attribute_exists(PK)",
            values={":true": True},
        )

    def _to_flight(self, item: dict) -> Flight:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        currency = item["currency"]
        return Flight(
            id=FlightId(item["flight_id"]),
            flight_number=item["flight_number"],
            departure_time=IsoDateTime.from_string(item["departure_time"]),
            arrival_time=IsoDateTime.from_string(item["arrival_time"]),
            economy_class_price=Money(
                amount=Decimal(item["economy_class_price"]),
                currency=Currency(currency),
            ),
            business_class_price=_money(item.get("business_class_price"), currency),
            first_class_price=_money(item.get("first_class_price"), currency),
            available_seats=int(item["available_seats"]),
        )

    def _to_seat(self, item: dict) -> Seat:
        return Seat(
            id=SeatId(item["seat_id"]),
            flight_id=FlightId(item["flight_id"]),
            seat_number=item["seat_number"],
            seat_class=item["seat_class"],
            price=Money(
                amount=Decimal(item["price"]), currency=Currency(item["currency"])
            ),
            is_available=bool(item.get("is_available", True)),
        )
