from typing import TypeVar

from .entity import Entity

ID = TypeVar("ID")


class AggregateRoot(Entity[ID]):
    """AggregateRoot 基底クラス

    - 配下のエンティティ（明細）へのアクセスは必ず集約ルートを経由
    - リポジトリは集約単位で読み書きする
    """
