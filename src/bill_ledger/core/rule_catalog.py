"""RuleCatalog: YAML 파일에서 세금/할인 규칙을 로드"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .bill_ledger import BillLedger
from .exceptions import NotFoundError
from .records import DiscountRule, TaxRule


DEFAULT_RULES_FILE = Path(__file__).resolve().parent.parent / "rules" / "default_rules.yaml"


class RuleCatalog:
    """YAML 파일에 정의된 세금/할인 규칙 모음

    규칙 파일 경로는 인자 > 환경 변수 BILL_LEDGER_RULES_FILE > 패키지 기본
    파일 순으로 결정됩니다.

    Attributes:
        rules_file: 규칙 파일 경로
        rules: 로드된 규칙 딕셔너리
        version: 규칙 버전
    """

    def __init__(self, rules_file: Optional[str] = None):
        """RuleCatalog 초기화

        Args:
            rules_file: 규칙 파일 경로
        """
        self.rules_file = rules_file or os.getenv(
            "BILL_LEDGER_RULES_FILE",
            str(DEFAULT_RULES_FILE)
        )
        self.rules = self._load_rules()
        self.version = self.rules.get('version', 'unknown')
        self._taxes = self._parse_entries('taxes', TaxRule.from_dict)
        self._discounts = self._parse_entries('discounts', DiscountRule.from_dict)

    def _load_rules(self) -> Dict:
        """YAML 파일에서 규칙 로드

        Returns:
            규칙 딕셔너리

        Raises:
            FileNotFoundError: 규칙 파일이 없는 경우
            yaml.YAMLError: YAML 파싱 오류
        """
        rules_path = Path(self.rules_file)

        if not rules_path.exists():
            raise FileNotFoundError(f"규칙 파일을 찾을 수 없습니다: {rules_path}")

        with open(rules_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def _parse_entries(self, section: str, factory) -> List[Any]:
        entries = self.rules.get(section) or []
        parsed = []

        for position, entry in enumerate(entries):
            try:
                parsed.append(factory(entry))
            except (KeyError, TypeError, ValueError, ArithmeticError) as e:
                raise ValueError(
                    f"{section}[{position}] 규칙이 올바르지 않습니다: {entry!r} ({e})"
                ) from e

        return parsed

    def get_taxes(self) -> List[TaxRule]:
        return list(self._taxes)

    def get_discounts(self) -> List[DiscountRule]:
        return list(self._discounts)

    def get_tax(self, tax_id: str) -> TaxRule:
        """세금 규칙 조회

        Raises:
            NotFoundError: 해당 id가 없는 경우
        """
        for tax in self._taxes:
            if tax.id == tax_id:
                return tax
        raise NotFoundError("tax", tax_id)

    def get_discount(self, discount_id: str) -> DiscountRule:
        """할인 규칙 조회

        Raises:
            NotFoundError: 해당 id가 없는 경우
        """
        for discount in self._discounts:
            if discount.id == discount_id:
                return discount
        raise NotFoundError("discount", discount_id)

    def apply_to(self, ledger: BillLedger) -> BillLedger:
        """원장에 세금과 할인을 등록

        Args:
            ledger: 규칙을 등록할 원장

        Returns:
            ledger (메서드 체이닝용)
        """
        ledger.set_taxes(self._taxes)
        ledger.set_discounts(self._discounts)
        return ledger
