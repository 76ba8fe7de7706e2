from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType


class UnitOfWork(ABC):
    """Unit of Work 基底クラス

    1リクエスト = 1トランザクション。
    with ブロック内で commit() されなかった書き込みは、例外の有無にかかわらず破棄される。

    使い方:
        with uow:
            flight = uow.flights.find_by_id(flight_id)
            ...
            uow.commit()
    """

    def __enter__(self) -> UnitOfWork:
        self._committed = False
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if not self._committed:
            self.rollback()

    def commit(self) -> None:
        """バッファした書き込みをアトミックに反映する"""
        self._commit()
        self._committed = True

    @abstractmethod
    def _commit(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        """バッファした書き込みを破棄する"""
        raise NotImplementedError
