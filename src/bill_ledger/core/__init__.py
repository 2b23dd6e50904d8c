"""핵심 비즈니스 로직"""

from .exceptions import BillLedgerError, NotFoundError, InvalidAmountError
from .money import MoneyPolicy, DEFAULT_POLICY
from .records import LineItem, DiscountRule, DiscountKind, TaxRule, TaxKind
from .bill_totals import BillTotals
from .calculations import (
    calculate_subtotal,
    calculate_discount_total,
    calculate_tax_total,
    calculate_totals,
)
from .bill_ledger import BillLedger
from .rule_catalog import RuleCatalog

__all__ = [
    'BillLedgerError',
    'NotFoundError',
    'InvalidAmountError',
    'MoneyPolicy',
    'DEFAULT_POLICY',
    'LineItem',
    'DiscountRule',
    'DiscountKind',
    'TaxRule',
    'TaxKind',
    'BillTotals',
    'calculate_subtotal',
    'calculate_discount_total',
    'calculate_tax_total',
    'calculate_totals',
    'BillLedger',
    'RuleCatalog',
]
