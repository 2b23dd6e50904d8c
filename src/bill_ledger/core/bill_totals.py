"""BillTotals: 계산서 합계 스냅샷"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict


@dataclass(frozen=True)
class BillTotals:
    """원장의 현재 상태에서 계산한 네 가지 합계

    변경 알림(observer)에 전달되는 값이기도 합니다.

    Attributes:
        pre_tax_pre_discount: 할인, 세금 적용 전 소계
        total_tax_applied: 적용된 세금 합계
        total_discount_applied: 적용된 할인 합계
        post_tax_post_discount: 할인 후 세금 포함 최종 금액
    """

    pre_tax_pre_discount: Decimal
    total_tax_applied: Decimal
    total_discount_applied: Decimal
    post_tax_post_discount: Decimal

    @property
    def post_discount_subtotal(self) -> Decimal:
        """할인 후 세금 전 소계"""
        return self.post_tax_post_discount - self.total_tax_applied

    def to_dict(self) -> Dict[str, str]:
        """딕셔너리로 변환

        Returns:
            금액을 문자열로 담은 딕셔너리
        """
        return {
            'pre_tax_pre_discount': str(self.pre_tax_pre_discount),
            'total_tax_applied': str(self.total_tax_applied),
            'total_discount_applied': str(self.total_discount_applied),
            'post_tax_post_discount': str(self.post_tax_post_discount),
        }

    def get_summary(self) -> str:
        """계산서 요약

        Returns:
            사람이 읽기 쉬운 형태의 요약
        """
        return f"""
=== 계산서 합계 ===

소계:            {self.pre_tax_pre_discount:>12,}
할인:           -{self.total_discount_applied:>12,}
세금:           +{self.total_tax_applied:>12,}
─────────────────────────────
합계:            {self.post_tax_post_discount:>12,}
""".strip()

    def __str__(self) -> str:
        return self.get_summary()
