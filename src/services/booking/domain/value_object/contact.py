from dataclasses import dataclass


@dataclass(frozen=True)
class Contact:
    """搭乗者・宿泊者・運転者の連絡先"""

    name: str
    email: str
    phone: str | None = None

    def __post_init__(self) -> None:
        if not self.name or len(self.name.strip()) == 0:
            raise ValueError("Contact name cannot be empty")
        if len(self.name) > 100:
            raise ValueError("Contact name is too long (max 100 characters)")
        if "@" not in self.email:
            raise ValueError(f"Invalid email address: {self.email}")

    def __str__(self) -> str:
        return self.name
