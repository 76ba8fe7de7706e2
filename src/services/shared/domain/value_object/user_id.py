from dataclasses import dataclass


@dataclass(frozen=True)
class UserId:
    """利用者ID（認証基盤の sub クレーム）

    予約の所有者判定に使う。
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("UserId cannot be empty")

    def __str__(self) -> str:
        return self.value
