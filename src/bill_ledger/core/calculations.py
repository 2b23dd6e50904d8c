"""계산서 합계 계산 (할인 누적, 세금 누적)

원장 상태와 무관한 순수 함수들입니다. BillLedger가 현재 컬렉션을
넘겨 호출하며, 결과는 호출할 때마다 새로 계산됩니다.
"""

from decimal import Decimal
from typing import Dict, Iterable, List, Sequence

from .bill_totals import BillTotals
from .money import DEFAULT_POLICY, MoneyPolicy
from .records import DiscountKind, DiscountRule, LineItem, TaxRule


def calculate_subtotal(
    items: Iterable[LineItem],
    policy: MoneyPolicy = DEFAULT_POLICY
) -> Decimal:
    """품목 금액 합계

    삽입 순서대로 왼쪽부터 누적합니다.

    Args:
        items: 품목 목록
        policy: 금액 연산 정책

    Returns:
        소계 (품목이 없으면 0.00)
    """
    subtotal = policy.zero()
    for item in items:
        subtotal = policy.add(subtotal, item.amount)
    return subtotal


def calculate_discount_total(
    subtotal: Decimal,
    discounts: Sequence[DiscountRule],
    policy: MoneyPolicy = DEFAULT_POLICY
) -> Decimal:
    """적용된 할인 합계

    할인은 주어진 순서대로 누적됩니다. 비율 할인은 원래 소계가 아니라
    이미 할인된 금액에 대해 계산되므로 순서가 바뀌면 결과도 바뀝니다.

    진행 중 금액이 음수가 되면 즉시 중단하고 남은 할인은 평가하지 않으며,
    이 경우 소계 전체를 할인 금액으로 보고합니다.

    Args:
        subtotal: 할인 전 소계
        discounts: 적용 순서대로 정렬된 할인 목록
        policy: 금액 연산 정책

    Returns:
        할인 합계
    """
    running = subtotal
    original = subtotal

    for discount in discounts:
        if not discount.is_enabled:
            continue

        if discount.kind is DiscountKind.FLAT_AMOUNT:
            running = policy.subtract(running, discount.amount)
        elif discount.kind is DiscountKind.PERCENT:
            running = policy.subtract(running, policy.multiply(running, discount.amount))

        if running < 0:
            break

    if running < 0:
        return original

    return policy.subtract(original, running)


def build_category_tax_lookup(taxes: Iterable[TaxRule]) -> Dict[str, TaxRule]:
    """분류 → 활성 분류세 조회 테이블

    같은 분류에 활성 규칙이 여럿이면 마지막 규칙이 남습니다.
    """
    lookup: Dict[str, TaxRule] = {}
    for tax in taxes:
        if not tax.is_flat and tax.is_enabled:
            lookup[tax.category] = tax
    return lookup


def calculate_tax_total(
    taxable_base: Decimal,
    items: Sequence[LineItem],
    taxes: Sequence[TaxRule],
    policy: MoneyPolicy = DEFAULT_POLICY
) -> Decimal:
    """적용된 세금 합계

    1. 일반세: 활성 일반세 각각에 대해 세율 × 할인 후 소계
    2. 면세 조정: (면세 품목, 활성 일반세) 쌍마다 세율 × 품목 금액
    3. 분류세: 활성 분류세가 있는 분류의 과세 품목마다 세율 × 품목 금액
    4. 면세 조정이 일반세보다 크면 분류세만, 아니면
       분류세 + (일반세 - 면세 조정)

    면세는 일반세에만 적용됩니다. 분류세는 면세 조정의 대상이 아니며,
    면세 품목은 분류세 계산에서 제외될 뿐입니다.

    Args:
        taxable_base: 할인 후 소계
        items: 품목 목록
        taxes: 등록 순서대로의 세금 목록
        policy: 금액 연산 정책

    Returns:
        세금 합계 (과세 기준이 0 이하이면 0.00)
    """
    if taxable_base <= 0:
        return policy.zero()

    flat_taxes: List[TaxRule] = [tax for tax in taxes if tax.is_flat]

    # 일반세
    flat_tax_total = policy.zero()
    for tax in flat_taxes:
        if tax.is_enabled:
            flat_tax_total = policy.add(
                flat_tax_total, policy.multiply(tax.amount, taxable_base)
            )

    # 면세 품목에 귀속되는 일반세
    exempt_adjustment = policy.zero()
    for item in items:
        if not item.is_tax_exempt:
            continue
        for tax in flat_taxes:
            if tax.is_enabled:
                exempt_adjustment = policy.add(
                    exempt_adjustment, policy.multiply(tax.amount, item.amount)
                )

    # 분류세 (품목 자체 금액 기준)
    category_lookup = build_category_tax_lookup(taxes)
    category_tax_total = policy.zero()
    for item in items:
        tax = category_lookup.get(item.category)
        if tax is not None and not item.is_tax_exempt:
            category_tax_total = policy.add(
                category_tax_total, policy.multiply(tax.amount, item.amount)
            )

    if exempt_adjustment > flat_tax_total:
        return policy.add(policy.zero(), category_tax_total)

    return policy.add(
        category_tax_total, policy.subtract(flat_tax_total, exempt_adjustment)
    )


def calculate_totals(
    items: Sequence[LineItem],
    discounts: Sequence[DiscountRule],
    taxes: Sequence[TaxRule],
    policy: MoneyPolicy = DEFAULT_POLICY
) -> BillTotals:
    """네 가지 합계를 한 번에 계산

    Args:
        items: 품목 목록
        discounts: 적용 순서대로의 할인 목록
        taxes: 세금 목록
        policy: 금액 연산 정책

    Returns:
        BillTotals 스냅샷
    """
    subtotal = calculate_subtotal(items, policy)
    discount_total = calculate_discount_total(subtotal, discounts, policy)
    post_discount = policy.subtract(subtotal, discount_total)
    tax_total = calculate_tax_total(post_discount, items, taxes, policy)

    return BillTotals(
        pre_tax_pre_discount=subtotal,
        total_tax_applied=tax_total,
        total_discount_applied=discount_total,
        post_tax_post_discount=policy.add(post_discount, tax_total),
    )
