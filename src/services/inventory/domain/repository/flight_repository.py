from abc import abstractmethod

from services.inventory.domain.entity import Flight, Seat
from services.inventory.domain.value_object import FlightId, SeatId
from services.shared.domain import Repository


class FlightRepository(Repository[Flight, FlightId]):
    """フライト・座席リポジトリのインターフェース

    在庫の更新はすべて「条件付き更新」として定義する。
    条件を満たさない場合は ResourceUnavailableException を送出する
    （DynamoDB 実装ではコミット時に検出される）。
    """

    @abstractmethod
    def save(self, flight: Flight) -> None:
        """フライトを保存する"""
        raise NotImplementedError

    @abstractmethod
    def save_seat(self, seat: Seat) -> None:
        """座席を保存する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, flight_id: FlightId) -> Flight | None:
        """フライトIDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def find_seat(self, flight_id: FlightId, seat_id: SeatId) -> Seat | None:
        """フライトに属する座席を検索する（別フライトの座席は None）"""
        raise NotImplementedError

    @abstractmethod
    def reserve_seat_capacity(self, flight_id: FlightId) -> None:
        """残席数を1減らす（残席数 > 0 の場合のみ）"""
        raise NotImplementedError

    @abstractmethod
    def release_seat_capacity(self, flight_id: FlightId) -> None:
        """残席数を1戻す"""
        raise NotImplementedError

    @abstractmethod
    def hold_seat(self, seat: Seat) -> None:
        """座席を確保済みにする（空席の場合のみ）"""
        raise NotImplementedError

    @abstractmethod
    def release_seat(self, flight_id: FlightId, seat_id: SeatId) -> None:
        """座席を空席に戻す"""
        raise NotImplementedError
