"""계산서 원장 예외 정의"""

from decimal import Decimal
from typing import Any, Optional


class BillLedgerError(Exception):
    """계산서 원장 기본 예외"""


class NotFoundError(BillLedgerError, LookupError):
    """id로 찾는 레코드가 존재하지 않는 경우

    Attributes:
        kind: 레코드 종류 ('line_item', 'discount', 'tax', 'bill')
        record_id: 조회에 사용된 id
    """

    def __init__(self, kind: str, record_id: Any, message: Optional[str] = None):
        self.kind = kind
        self.record_id = record_id
        super().__init__(message or f"{kind} '{record_id}'을(를) 찾을 수 없습니다")


class InvalidAmountError(BillLedgerError, ValueError):
    """허용되지 않는 금액이 입력된 경우

    Attributes:
        amount: 거부된 금액
    """

    def __init__(self, amount: Decimal, message: Optional[str] = None):
        self.amount = amount
        super().__init__(message or f"허용되지 않는 금액입니다: {amount}")
