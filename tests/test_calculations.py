"""할인/세금 계산 함수 테스트"""

from decimal import Decimal

from bill_ledger.core import (
    DiscountKind,
    DiscountRule,
    LineItem,
    TaxKind,
    TaxRule,
    calculate_discount_total,
    calculate_subtotal,
    calculate_tax_total,
    calculate_totals,
)


NESTEA = LineItem(id="nestea", amount=Decimal("1.50"), category="Tea", is_tax_exempt=True)
COKE = LineItem(id="coke", amount=Decimal("1.50"), category="Pop")
PIZZA = LineItem(id="pizza", amount=Decimal("5.00"), category="Pizza")

HST = TaxRule(id="hst", amount=Decimal("0.13"))
PST = TaxRule(id="pst", amount=Decimal("0.08"))
POP_TAX = TaxRule(id="pop_tax", amount=Decimal("0.20"), category="Pop", kind=TaxKind.CATEGORY)

TWO_DOLLAR = DiscountRule(id="two_dollar", amount=Decimal("2.00"), kind=DiscountKind.FLAT_AMOUNT)
TEN_PERCENT = DiscountRule(id="ten_percent", amount=Decimal("0.10"), kind=DiscountKind.PERCENT)


class TestSubtotal:
    """소계 계산 테스트"""

    def test_empty_bill(self):
        """품목이 없으면 0.00"""
        assert calculate_subtotal([]) == Decimal("0.00")

    def test_sum_in_order(self):
        """삽입 순서대로 합산"""
        assert calculate_subtotal([NESTEA, COKE, PIZZA]) == Decimal("8.00")


class TestDiscountTotal:
    """할인 누적 테스트"""

    def test_no_discounts(self):
        """할인이 없으면 0.00"""
        assert calculate_discount_total(Decimal("8.00"), []) == Decimal("0.00")

    def test_flat_then_percent(self):
        """금액 할인 후 비율 할인: 8.00 - 2.00 = 6.00, 6.00 - 0.60 = 5.40"""
        total = calculate_discount_total(Decimal("8.00"), [TWO_DOLLAR, TEN_PERCENT])

        assert total == Decimal("2.60")

    def test_percent_then_flat(self):
        """비율 할인 후 금액 할인: 8.00 - 0.80 = 7.20, 7.20 - 2.00 = 5.20"""
        total = calculate_discount_total(Decimal("8.00"), [TEN_PERCENT, TWO_DOLLAR])

        assert total == Decimal("2.80")

    def test_percent_discounts_compound(self):
        """비율 할인은 누적 적용 (10% + 10% != 20%)"""
        second = DiscountRule(id="another_ten", amount=Decimal("0.10"), kind=DiscountKind.PERCENT)

        total = calculate_discount_total(Decimal("100.00"), [TEN_PERCENT, second])

        assert total == Decimal("19.00")

    def test_disabled_discount_skipped(self):
        """비활성 할인은 건너뜀"""
        disabled = TWO_DOLLAR.with_enabled(False)

        total = calculate_discount_total(Decimal("8.00"), [disabled, TEN_PERCENT])

        assert total == Decimal("0.80")

    def test_negative_excursion_reports_whole_subtotal(self):
        """금액이 음수가 되면 소계 전체를 할인으로 보고"""
        total = calculate_discount_total(Decimal("1.50"), [TWO_DOLLAR, TEN_PERCENT])

        assert total == Decimal("1.50")

    def test_negative_excursion_after_percent(self):
        """비율 할인 후 음수가 되어도 소계 전체"""
        total = calculate_discount_total(Decimal("1.50"), [TEN_PERCENT, TWO_DOLLAR])

        assert total == Decimal("1.50")

    def test_exactly_zero_is_not_an_excursion(self):
        """정확히 0이면 음수가 아님"""
        total = calculate_discount_total(Decimal("2.00"), [TWO_DOLLAR])

        assert total == Decimal("2.00")


class TestTaxTotal:
    """세금 누적 테스트"""

    def test_zero_base_not_taxed(self):
        """과세 기준이 0이면 세금 없음"""
        assert calculate_tax_total(Decimal("0.00"), [COKE], [HST, POP_TAX]) == Decimal("0.00")

    def test_negative_base_not_taxed(self):
        """과세 기준이 음수여도 세금 없음"""
        assert calculate_tax_total(Decimal("-1.00"), [COKE], [HST]) == Decimal("0.00")

    def test_flat_tax_on_base(self):
        """일반세는 할인 후 소계 전체에 부과"""
        assert calculate_tax_total(Decimal("5.00"), [PIZZA], [HST]) == Decimal("0.65")

    def test_multiple_flat_taxes_with_exemption(self):
        """여러 일반세와 면세 조정

        일반세: 6.50 × 0.13 = 0.85, 6.50 × 0.08 = 0.52 → 1.37
        면세 조정: 1.50 × 0.13 = 0.20, 1.50 × 0.08 = 0.12 → 0.32
        """
        total = calculate_tax_total(Decimal("6.50"), [NESTEA, PIZZA], [HST, PST])

        assert total == Decimal("1.05")

    def test_category_tax_uses_item_amount(self):
        """분류세는 할인 전 품목 금액 기준"""
        total = calculate_tax_total(Decimal("0.50"), [COKE], [POP_TAX])

        assert total == Decimal("0.30")

    def test_category_tax_skips_exempt_item(self):
        """면세 품목에는 분류세 없음"""
        exempt_pop = LineItem(id="diet", amount=Decimal("1.00"), category="Pop", is_tax_exempt=True)

        total = calculate_tax_total(Decimal("1.00"), [exempt_pop], [POP_TAX])

        assert total == Decimal("0.00")

    def test_disabled_taxes_ignored(self):
        """비활성 세금은 무시"""
        total = calculate_tax_total(
            Decimal("1.50"), [COKE], [HST.with_enabled(False), POP_TAX.with_enabled(False)]
        )

        assert total == Decimal("0.00")

    def test_last_enabled_category_rule_wins(self):
        """같은 분류에 활성 규칙이 여럿이면 마지막 규칙 적용"""
        low = TaxRule(id="pop_low", amount=Decimal("0.05"), category="Pop", kind=TaxKind.CATEGORY)

        assert calculate_tax_total(Decimal("1.50"), [COKE], [POP_TAX, low]) == Decimal("0.08")
        assert calculate_tax_total(Decimal("1.50"), [COKE], [low, POP_TAX]) == Decimal("0.30")
        assert calculate_tax_total(
            Decimal("1.50"), [COKE], [POP_TAX, low.with_enabled(False)]
        ) == Decimal("0.30")

    def test_exemption_larger_than_flat_keeps_only_category_tax(self):
        """면세 조정이 일반세보다 크면 분류세만 남음

        일반세: 1.00 × 0.13 = 0.13, 면세 조정: 1.50 × 0.13 = 0.20
        분류세: 1.50 × 0.20 = 0.30
        """
        total = calculate_tax_total(Decimal("1.00"), [NESTEA, COKE], [HST, POP_TAX])

        assert total == Decimal("0.30")


class TestTotals:
    """합계 스냅샷 테스트"""

    def test_totals_snapshot(self):
        """네 가지 합계를 한 번에 계산"""
        totals = calculate_totals([NESTEA, COKE, PIZZA], [TWO_DOLLAR], [HST, POP_TAX])

        # 8.00 - 2.00 = 6.00
        # 일반세 0.78 - 면세 0.20 = 0.58, 분류세 0.30
        assert totals.pre_tax_pre_discount == Decimal("8.00")
        assert totals.total_discount_applied == Decimal("2.00")
        assert totals.total_tax_applied == Decimal("0.88")
        assert totals.post_tax_post_discount == Decimal("6.88")
        assert totals.post_discount_subtotal == Decimal("6.00")

    def test_to_dict_uses_strings(self):
        """to_dict는 금액을 문자열로"""
        totals = calculate_totals([COKE], [], [])

        assert totals.to_dict() == {
            'pre_tax_pre_discount': '1.50',
            'total_tax_applied': '0.00',
            'total_discount_applied': '0.00',
            'post_tax_post_discount': '1.50',
        }

    def test_summary(self):
        """요약 문자열"""
        totals = calculate_totals([COKE], [], [])

        assert "계산서 합계" in totals.get_summary()
        assert str(totals) == totals.get_summary()
