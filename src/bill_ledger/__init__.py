"""계산서 합계 계산 엔진 (할인 누적, 일반세/분류세, 면세)"""

from .core import (
    BillLedger,
    BillTotals,
    DiscountKind,
    DiscountRule,
    InvalidAmountError,
    LineItem,
    NotFoundError,
    RuleCatalog,
    TaxKind,
    TaxRule,
)

__version__ = "0.1.0"

__all__ = [
    'BillLedger',
    'BillTotals',
    'DiscountKind',
    'DiscountRule',
    'InvalidAmountError',
    'LineItem',
    'NotFoundError',
    'RuleCatalog',
    'TaxKind',
    'TaxRule',
]
