"""계산서 원장 사용 예제"""

from decimal import Decimal
from bill_ledger.core import (
    BillLedger,
    BillTotals,
    DiscountKind,
    DiscountRule,
    LineItem,
    RuleCatalog,
    TaxKind,
    TaxRule,
)
from bill_ledger.logging_config import configure_logging


def print_totals(totals: BillTotals):
    """변경 알림 콜백"""
    print(f"  -> 합계 {totals.post_tax_post_discount} "
          f"(할인 {totals.total_discount_applied}, 세금 {totals.total_tax_applied})")


def example_discount_order():
    """할인 순서에 따라 달라지는 합계"""
    print("=" * 60)
    print("예제 1: 할인 순서 (2달러 → 10% vs 10% → 2달러)")
    print("=" * 60)

    items = [
        LineItem(id="coke", amount=Decimal("1.50"), category="Pop"),
        LineItem(id="pizza", amount=Decimal("5.00"), category="Pizza"),
        LineItem(id="grey_goose", amount=Decimal("50.45"), category="Alcohol"),
        LineItem(id="nestea", amount=Decimal("1.50"), category="Tea", is_tax_exempt=True),
    ]
    two_dollar = DiscountRule(id="two_dollar", amount=Decimal("2.00"), kind=DiscountKind.FLAT_AMOUNT)
    ten_percent = DiscountRule(id="ten_percent", amount=Decimal("0.10"), kind=DiscountKind.PERCENT)

    for order in ([two_dollar, ten_percent], [ten_percent, two_dollar]):
        ledger = BillLedger()
        for item in items:
            ledger.add_line_item(item)
        ledger.set_taxes([
            TaxRule(id="hst", amount=Decimal("0.13")),
            TaxRule(id="alcohol_tax", amount=Decimal("0.10"), category="Alcohol", kind=TaxKind.CATEGORY),
        ])
        ledger.set_discounts(order)

        print(f"\n할인 순서: {' → '.join(d.id for d in order)}")
        print(ledger.totals().get_summary())


def example_catalog_and_toggle():
    """기본 규칙 등록 후 할인 켜고 끄기"""
    print("\n" + "=" * 60)
    print("예제 2: 기본 규칙 + 할인 활성화/비활성화")
    print("=" * 60)

    ledger = RuleCatalog().apply_to(BillLedger())
    ledger.subscribe(print_totals)

    ledger.add_line_item(LineItem(id="coke_large", amount=Decimal("5.00")))

    for discount_id in ("two_dollar", "ten_percent"):
        print(f"\n{discount_id} 활성화")
        discount = ledger.find_registered_discount(discount_id)
        ledger.update_discount(discount.with_enabled(True))

    print("\ntwo_dollar 비활성화")
    ledger.update_discount(ledger.find_registered_discount("two_dollar").with_enabled(False))

    print("\ntwo_dollar 재활성화 (적용 순서 맨 뒤로)")
    ledger.update_discount(ledger.find_registered_discount("two_dollar").with_enabled(True))


def main():
    configure_logging()
    example_discount_order()
    example_catalog_and_toggle()


if __name__ == "__main__":
    main()
