from services.inventory.domain.value_object import HotelRoomId
from services.shared.domain import Entity, Money


class HotelRoom(Entity[HotelRoomId]):
    """客室

    空き判定は滞在枠（RoomStay）の日付重複で行う。
    is_available は客室を販売停止にするためのフラグとしてのみ残している。
    version は滞在枠を追加するたびに進む楽観ロック用カウンタ。
    """

    def __init__(
        self,
        id: HotelRoomId,
        hotel_id: str,
        room_number: str,
        room_type: str,
        capacity: int,
        price_per_night: Money,
        is_available: bool = True,
        version: int = 0,
    ) -> None:
        super().__init__(id)
        self._hotel_id = hotel_id
        self._room_number = room_number
        self._room_type = room_type
        self._capacity = capacity
        self._price_per_night = price_per_night
        self._is_available = is_available
        self._version = version

    @property
    def hotel_id(self) -> str:
        return self._hotel_id

    @property
    def room_number(self) -> str:
        return self._room_number

    @property
    def room_type(self) -> str:
        return self._room_type

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def price_per_night(self) -> Money:
        return self._price_per_night

    @property
    def is_available(self) -> bool:
        return self._is_available

    @property
    def version(self) -> int:
        return self._version
