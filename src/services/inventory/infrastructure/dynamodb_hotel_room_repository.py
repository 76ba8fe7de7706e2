from decimal import Decimal
from functools import partial
from typing import Any

from boto3.dynamodb.conditions import Key

from services.inventory.domain.entity import HotelRoom
from services.inventory.domain.repository import HotelRoomRepository
from services.inventory.domain.value_object import HotelRoomId, RoomStay
from services.shared.domain import Currency, Money, StayPeriod
from services.shared.domain.exception import ResourceUnavailableException
from services.shared.infrastructure.dynamodb_transaction import DynamoDBTransaction


def room_key(room_id: HotelRoomId) -> dict[str, str]:
    return {"PK": f"ROOM#{room_id}", "SK": "ROOM"}


def stay_key(room_id: HotelRoomId, stay: RoomStay) -> dict[str, str]:
    return {
        "PK": f"ROOM#{room_id}",
        "SK": f"STAY#{stay.period.check_in}#{stay.booking_id}",
    }


class DynamoDBHotelRoomRepository(HotelRoomRepository):
    """DynamoDBを使用したHotelRoomRepository の具象実装

    客室（SK=ROOM）と滞在枠（SK=STAY#チェックイン日#予約ID）を同じパーティションに置く。
    滞在枠の追加は客室の version を条件に進めるため、
    同じ客室への同時予約はどちらか一方だけがコミットできる。
    """

    def __init__(self, table: Any, transaction: DynamoDBTransaction) -> None:
        self.table = table
        self.transaction = transaction

    def save(self, room: HotelRoom) -> None:
        self.transaction.put(
            {
                **room_key(room.id),
                "entity_type": "HOTEL_ROOM",
                "room_id": str(room.id),
                "hotel_id": room.hotel_id,
                "room_number": room.room_number,
                "room_type": room.room_type,
                "capacity": room.capacity,
                "price_per_night": str(room.price_per_night.amount),
                "currency": str(room.price_per_night.currency),
                "is_available": room.is_available,
                "version": room.version,
            }
        )

    def find_by_id(self, room_id: HotelRoomId) -> HotelRoom | None:
        """客室IDで検索"""
        response = self.table.get_item(Key=room_key(room_id), ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def find_stays(self, room_id: HotelRoomId) -> list[RoomStay]:
        """客室に紐づく滞在枠をすべて取得する"""
        stays: list[RoomStay] = []
        kwargs: dict = {
            "KeyConditionExpression": Key("PK").eq(f"ROOM#{room_id}")
            & Key("SK").begins_with("STAY#"),
            "ConsistentRead": True,
        }
        while True:
            response = self.table.query(**kwargs)
            stays.extend(self._to_stay(item) for item in response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return stays
            kwargs["ExclusiveStartKey"] = last_key

    def add_stay(self, room: HotelRoom, stay: RoomStay) -> None:
        conflict = partial(
            ResourceUnavailableException,
            "Hotel room is already booked for the selected dates",
        )
        self.transaction.update(
            key=room_key(room.id),
            update_expression="SET version = if_not_exists(version, :zero) + :one",
            condition="attribute_not_exists(version) OR version = :expected"
            if room.version == 0
            else "version = :expected",
            values={":zero": 0, ":one": 1, ":expected": room.version},
            on_conflict=conflict,
        )
        self.transaction.put(
            {
                **stay_key(room.id, stay),
                "entity_type": "ROOM_STAY",
                "room_id": str(room.id),
                "booking_id": stay.booking_id,
                "check_in": stay.period.check_in,
                "check_out": stay.period.check_out,
            },
            condition="attribute_not_exists(PK)",
            on_conflict=conflict,
        )

    def remove_stay(self, room_id: HotelRoomId, stay: RoomStay) -> None:
        self.transaction.delete(key=stay_key(room_id, stay))

    def _to_entity(self, item: dict) -> HotelRoom:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return HotelRoom(
            id=HotelRoomId(item["room_id"]),
            hotel_id=item["hotel_id"],
            room_number=item["room_number"],
            room_type=item["room_type"],
            capacity=int(item["capacity"]),
            price_per_night=Money(
                amount=Decimal(item["price_per_night"]),
                currency=Currency(item["currency"]),
            ),
            is_available=bool(item.get("is_available", True)),
            version=int(item.get("version", 0)),
        )

    def _to_stay(self, item: dict) -> RoomStay:
        return RoomStay(
            booking_id=item["booking_id"],
            period=StayPeriod(check_in=item["check_in"], check_out=item["check_out"]),
        )
