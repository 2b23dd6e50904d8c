"""BillLedger: 품목, 할인, 세금을 관리하는 계산서 원장"""

from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import structlog

from .bill_totals import BillTotals
from .calculations import (
    calculate_discount_total,
    calculate_subtotal,
    calculate_tax_total,
    calculate_totals,
)
from .exceptions import InvalidAmountError, NotFoundError
from .money import DEFAULT_POLICY, MoneyPolicy
from .records import DiscountRule, LineItem, TaxRule


logger = structlog.get_logger()

TotalsObserver = Callable[[BillTotals], None]


class BillLedger:
    """계산서 원장

    세 가지 순서 있는 컬렉션(품목, 적용 할인, 세금)을 관리하고
    현재 상태에서 합계를 계산합니다. 합계는 캐시하지 않고 조회할 때마다
    다시 계산합니다.

    변경 연산이 성공하면 등록된 observer에게 새 합계(BillTotals)를
    한 번 알립니다. 실패한 연산은 상태를 바꾸지 않고 알림도 보내지 않습니다.

    할인은 id → DiscountRule 등록 테이블과 적용 순서(id 목록)로 나눠
    관리합니다. 다시 활성화된 할인은 적용 순서의 맨 뒤로 갑니다.

    단일 스레드 사용을 전제로 하며 내부 잠금은 없습니다.

    Example:
        >>> ledger = BillLedger()
        >>> ledger.add_line_item(LineItem(id="coke", amount=Decimal("1.50"), category="Pop"))
        >>> ledger.add_tax(TaxRule(id="hst", amount=Decimal("0.13")))
        >>> ledger.post_tax_post_discount
        Decimal('1.70')
    """

    def __init__(self, policy: MoneyPolicy = DEFAULT_POLICY):
        """BillLedger 초기화

        Args:
            policy: 금액 연산 정책
        """
        self.policy = policy
        self._line_items: List[LineItem] = []
        self._registered_discounts: Dict[str, DiscountRule] = {}
        self._applied_discount_ids: List[str] = []
        self._taxes: List[TaxRule] = []
        self._observers: List[TotalsObserver] = []

    # ------------------------------------------------------------------
    # 알림
    # ------------------------------------------------------------------

    def subscribe(self, observer: TotalsObserver) -> None:
        """변경 알림 구독

        Args:
            observer: BillTotals를 인자로 받는 콜백
        """
        self._observers.append(observer)

    def unsubscribe(self, observer: TotalsObserver) -> None:
        """변경 알림 구독 해제 (구독 중이 아니면 무시)"""
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self) -> None:
        totals = self.totals()
        for observer in list(self._observers):
            observer(totals)

    # ------------------------------------------------------------------
    # 품목
    # ------------------------------------------------------------------

    @property
    def line_items(self) -> Tuple[LineItem, ...]:
        return tuple(self._line_items)

    def add_line_item(self, item: LineItem) -> None:
        """품목 추가

        Args:
            item: 추가할 품목

        Raises:
            InvalidAmountError: 금액이 0 이하이거나 유한한 금액이 아닌 경우
        """
        self._check_representable(item, self._line_items + [item])
        if item.amount <= 0:
            logger.warning("line_item_rejected", item_id=item.id, amount=str(item.amount))
            raise InvalidAmountError(
                item.amount, f"품목 금액은 0보다 커야 합니다: {item.amount}"
            )

        self._line_items.append(item)
        logger.debug("line_item_added", item_id=item.id, amount=str(item.amount))
        self._notify()

    def remove_line_item(self, item: LineItem) -> None:
        """품목 제거

        네 속성이 모두 같은 품목을 전부 제거합니다. 일치하는 품목이
        없어도 오류가 아닙니다.
        """
        before = len(self._line_items)
        self._line_items = [existing for existing in self._line_items if existing != item]
        logger.debug(
            "line_item_removed",
            item_id=item.id,
            removed=before - len(self._line_items)
        )
        self._notify()

    def update_line_item(self, item: LineItem) -> None:
        """품목 교체

        id가 같은 첫 번째 품목을 교체합니다.

        Raises:
            NotFoundError: 같은 id의 품목이 없는 경우
            InvalidAmountError: 유한한 금액이 아닌 경우
        """
        index = self._index_of(self._line_items, item.id)
        if index is None:
            logger.warning("record_not_found", kind="line_item", record_id=item.id)
            raise NotFoundError("line_item", item.id)

        candidate = list(self._line_items)
        candidate[index] = item
        self._check_representable(item, candidate)

        self._line_items[index] = item
        logger.debug("line_item_updated", item_id=item.id, amount=str(item.amount))
        self._notify()

    def _check_representable(self, item: LineItem, candidate: List[LineItem]) -> None:
        """품목 금액과 변경 후 소계가 금액 정책으로 계산 가능한지 확인"""
        if self.policy.is_representable(item.amount) and self.policy.is_representable(
            calculate_subtotal(candidate, self.policy)
        ):
            return
        logger.warning("line_item_rejected", item_id=item.id, amount=str(item.amount))
        raise InvalidAmountError(
            item.amount, f"계산할 수 없는 품목 금액입니다: {item.amount}"
        )

    # ------------------------------------------------------------------
    # 할인
    # ------------------------------------------------------------------

    @property
    def registered_discounts(self) -> Tuple[DiscountRule, ...]:
        return tuple(self._registered_discounts.values())

    @property
    def applied_discounts(self) -> Tuple[DiscountRule, ...]:
        """적용 순서대로의 할인 목록"""
        return tuple(
            self._registered_discounts[discount_id]
            for discount_id in self._applied_discount_ids
        )

    def set_discounts(self, discounts: Iterable[DiscountRule]) -> None:
        """할인 일괄 등록

        모든 할인을 등록하고, 그중 활성화된 할인을 목록 순서대로 적용합니다.
        같은 id가 이미 등록되어 있으면 새 규칙으로 교체됩니다.

        Args:
            discounts: 등록할 할인 목록
        """
        for discount in discounts:
            self._registered_discounts[discount.id] = discount
            self._unapply_discount(discount.id)
            if discount.is_enabled:
                self._applied_discount_ids.append(discount.id)
            logger.debug(
                "discount_registered",
                discount_id=discount.id,
                is_enabled=discount.is_enabled
            )
        self._notify()

    def update_discount(self, discount: DiscountRule) -> None:
        """할인 활성화/비활성화

        비활성화하면 적용 순서에서 제거합니다 (적용 중이 아니면 아무 일도
        하지 않음). 활성화하면 적용 순서의 맨 뒤에 추가하므로, 비율 할인의
        누적 결과가 달라질 수 있습니다.

        Args:
            discount: 새 상태의 할인 규칙
        """
        self._registered_discounts[discount.id] = discount
        self._unapply_discount(discount.id)

        if discount.is_enabled:
            self._applied_discount_ids.append(discount.id)
            logger.debug("discount_enabled", discount_id=discount.id)
        else:
            logger.debug("discount_disabled", discount_id=discount.id)

        self._notify()

    def find_registered_discount(self, discount_id: str) -> DiscountRule:
        """등록된 할인 조회

        Raises:
            NotFoundError: 등록되지 않은 id인 경우
        """
        discount = self._registered_discounts.get(discount_id)
        if discount is None:
            logger.warning("record_not_found", kind="discount", record_id=discount_id)
            raise NotFoundError("discount", discount_id)
        return discount

    def clear_applied_discounts(self) -> None:
        """적용 중인 할인을 모두 해제 (등록 정보는 유지)"""
        self._applied_discount_ids.clear()
        logger.debug("applied_discounts_cleared")
        self._notify()

    def _unapply_discount(self, discount_id: str) -> None:
        if discount_id in self._applied_discount_ids:
            self._applied_discount_ids.remove(discount_id)

    # ------------------------------------------------------------------
    # 세금
    # ------------------------------------------------------------------

    @property
    def taxes(self) -> Tuple[TaxRule, ...]:
        return tuple(self._taxes)

    def add_tax(self, tax: TaxRule) -> None:
        """세금 규칙 추가"""
        self._taxes.append(tax)
        logger.debug("tax_added", tax_id=tax.id, category=tax.category)
        self._notify()

    def set_taxes(self, taxes: Iterable[TaxRule]) -> None:
        """세금 규칙 일괄 추가 (알림은 한 번)"""
        for tax in taxes:
            self._taxes.append(tax)
            logger.debug("tax_added", tax_id=tax.id, category=tax.category)
        self._notify()

    def update_tax(self, tax: TaxRule) -> None:
        """세금 규칙 교체

        id가 같은 첫 번째 규칙을 교체합니다.

        Raises:
            NotFoundError: 같은 id의 규칙이 없는 경우
        """
        index = self._index_of(self._taxes, tax.id)
        if index is None:
            logger.warning("record_not_found", kind="tax", record_id=tax.id)
            raise NotFoundError("tax", tax.id)

        self._taxes[index] = tax
        logger.debug("tax_updated", tax_id=tax.id, is_enabled=tax.is_enabled)
        self._notify()

    def remove_tax(self, tax_id: str) -> None:
        """id가 같은 세금 규칙을 모두 제거 (없어도 오류 아님)"""
        self._taxes = [tax for tax in self._taxes if tax.id != tax_id]
        logger.debug("tax_removed", tax_id=tax_id)
        self._notify()

    def find_tax(self, tax_id: str) -> TaxRule:
        """세금 규칙 조회

        Raises:
            NotFoundError: 같은 id의 규칙이 없는 경우
        """
        index = self._index_of(self._taxes, tax_id)
        if index is None:
            logger.warning("record_not_found", kind="tax", record_id=tax_id)
            raise NotFoundError("tax", tax_id)
        return self._taxes[index]

    def clear_taxes(self) -> None:
        """세금을 모두 제거"""
        self._taxes.clear()
        logger.debug("taxes_cleared")
        self._notify()

    # ------------------------------------------------------------------
    # 합계
    # ------------------------------------------------------------------

    def subtotal(self) -> Decimal:
        """할인 전 소계"""
        return calculate_subtotal(self._line_items, self.policy)

    @property
    def pre_tax_pre_discount(self) -> Decimal:
        return self.subtotal()

    @property
    def total_discount_applied(self) -> Decimal:
        return calculate_discount_total(
            self.subtotal(), self.applied_discounts, self.policy
        )

    @property
    def total_tax_applied(self) -> Decimal:
        post_discount = self.policy.subtract(
            self.pre_tax_pre_discount, self.total_discount_applied
        )
        return calculate_tax_total(post_discount, self._line_items, self._taxes, self.policy)

    @property
    def post_tax_post_discount(self) -> Decimal:
        post_discount = self.policy.subtract(
            self.pre_tax_pre_discount, self.total_discount_applied
        )
        return self.policy.add(post_discount, self.total_tax_applied)

    def totals(self) -> BillTotals:
        """현재 상태의 합계 스냅샷"""
        return calculate_totals(
            self._line_items, self.applied_discounts, self._taxes, self.policy
        )

    @staticmethod
    def _index_of(records, record_id: str) -> Optional[int]:
        for index, record in enumerate(records):
            if record.id == record_id:
                return index
        return None

    def __str__(self) -> str:
        return (
            f"BillLedger(items={len(self._line_items)}, "
            f"discounts={len(self._applied_discount_ids)}/{len(self._registered_discounts)}, "
            f"taxes={len(self._taxes)}, "
            f"total={self.post_tax_post_discount})"
        )
