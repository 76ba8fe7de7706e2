from enum import Enum


class PaymentStatus(str, Enum):
    """支払ステータス（実際の決済は行わずフラグとしてのみ保持する）"""

    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"
