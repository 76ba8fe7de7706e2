from abc import abstractmethod

from services.inventory.domain.entity import HotelRoom
from services.inventory.domain.value_object import HotelRoomId, RoomStay
from services.shared.domain import Repository


class HotelRoomRepository(Repository[HotelRoom, HotelRoomId]):
    """客室リポジトリのインターフェース"""

    @abstractmethod
    def save(self, room: HotelRoom) -> None:
        """客室を保存する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, room_id: HotelRoomId) -> HotelRoom | None:
        """客室IDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def find_stays(self, room_id: HotelRoomId) -> list[RoomStay]:
        """客室の有効な滞在枠を取得する"""
        raise NotImplementedError

    @abstractmethod
    def add_stay(self, room: HotelRoom, stay: RoomStay) -> None:
        """滞在枠を追加する

        読み込んだ時点の room.version と一致する場合のみ成功する。
        他の予約が先に滞在枠を追加していれば ResourceUnavailableException。
        """
        raise NotImplementedError

    @abstractmethod
    def remove_stay(self, room_id: HotelRoomId, stay: RoomStay) -> None:
        """滞在枠を解放する"""
        raise NotImplementedError
