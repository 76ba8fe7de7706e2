class DomainException(Exception):
    """ドメイン層で発生する基底例外"""

    pass


class ResourceNotFoundException(DomainException):
    """リソースが見つからない場合"""

    pass


class BusinessRuleViolationException(DomainException):
    """ビジネスルールに違反した場合"""

    pass


class ResourceUnavailableException(BusinessRuleViolationException):
    """座席・客室・車両などの在庫が確保できない場合"""

    pass


class InvalidDateRangeException(BusinessRuleViolationException):
    """終了日が開始日以前の場合（チェックアウト <= チェックイン など）"""

    pass


class BookingAlreadyCancelledException(BusinessRuleViolationException):
    """キャンセル済みの予約を再度キャンセルしようとした場合"""

    pass


class BookingTerminalStateException(BusinessRuleViolationException):
    """完了済みなど、状態遷移できない予約を操作しようとした場合"""

    pass


class DuplicateResourceException(DomainException):
    """リソースの重複エラー（条件付き書き込みの失敗時）"""

    pass


class BookingReferenceConflictException(DuplicateResourceException):
    """予約番号の衝突（コミット時に検出）"""

    pass


class OptimisticLockException(DomainException):
    """楽観ロックの競合エラー（ステータスが期待値と異なる場合）"""

    pass


class InfrastructureException(Exception):
    """永続化層・通信層の障害

    呼び出し元には詳細を返さない。
    """

    pass
