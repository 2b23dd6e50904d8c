"""RuleCatalog 테스트"""

import pytest
from decimal import Decimal

from bill_ledger.core import (
    BillLedger,
    DiscountKind,
    LineItem,
    NotFoundError,
    RuleCatalog,
    TaxKind,
)


CUSTOM_RULES = """
version: "test.1"
taxes:
  - id: gst
    name: "GST 5%"
    amount: "0.05"
discounts:
  - id: half_off
    amount: "0.50"
    kind: percent
    is_enabled: true
"""


class TestDefaultCatalog:
    """기본 규칙 파일 테스트"""

    def test_load_rules(self):
        """기본 규칙 파일 로드"""
        catalog = RuleCatalog()

        assert catalog.version == "2019.07"
        assert 'taxes' in catalog.rules
        assert 'discounts' in catalog.rules
        assert len(catalog.get_taxes()) == 3
        assert len(catalog.get_discounts()) == 3

    def test_default_taxes(self):
        """기본 세금 규칙"""
        catalog = RuleCatalog()

        hst = catalog.get_tax("hst")
        assert hst.amount == Decimal("0.13")
        assert hst.is_flat is True
        assert hst.kind is TaxKind.STANDARD

        pop = catalog.get_tax("pop_tax")
        assert pop.category == "Pop"
        assert pop.kind is TaxKind.CATEGORY

    def test_default_discounts_are_disabled(self):
        """기본 할인은 비활성 상태로 등록"""
        catalog = RuleCatalog()

        assert all(not d.is_enabled for d in catalog.get_discounts())
        assert catalog.get_discount("ten_percent").kind is DiscountKind.PERCENT

    def test_missing_rule(self):
        """없는 규칙 조회"""
        catalog = RuleCatalog()

        with pytest.raises(NotFoundError):
            catalog.get_tax("vat")
        with pytest.raises(NotFoundError):
            catalog.get_discount("bogo")

    def test_apply_to_ledger(self):
        """원장에 규칙 등록"""
        ledger = RuleCatalog().apply_to(BillLedger())
        ledger.add_line_item(LineItem(id="coke", amount=Decimal("1.50"), category="Pop"))

        assert len(ledger.taxes) == 3
        assert len(ledger.registered_discounts) == 3
        assert ledger.applied_discounts == ()
        # HST 0.20 + Pop 0.30
        assert ledger.total_tax_applied == Decimal("0.50")
        assert ledger.post_tax_post_discount == Decimal("2.00")


class TestCustomCatalog:
    """사용자 규칙 파일 테스트"""

    def test_load_custom_file(self, tmp_path):
        """경로를 지정한 규칙 파일"""
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text(CUSTOM_RULES, encoding="utf-8")

        catalog = RuleCatalog(str(rules_file))

        assert catalog.version == "test.1"
        assert [t.id for t in catalog.get_taxes()] == ["gst"]
        assert catalog.get_discount("half_off").is_enabled is True

    def test_env_var_override(self, tmp_path, monkeypatch):
        """BILL_LEDGER_RULES_FILE 환경 변수"""
        rules_file = tmp_path / "env_rules.yaml"
        rules_file.write_text(CUSTOM_RULES, encoding="utf-8")
        monkeypatch.setenv("BILL_LEDGER_RULES_FILE", str(rules_file))

        catalog = RuleCatalog()

        assert catalog.version == "test.1"

    def test_enabled_discount_applied(self, tmp_path):
        """활성 할인은 등록과 동시에 적용"""
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text(CUSTOM_RULES, encoding="utf-8")

        ledger = RuleCatalog(str(rules_file)).apply_to(BillLedger())
        ledger.add_line_item(LineItem(id="pizza", amount=Decimal("5.00")))

        # 5.00 × 0.5 = 2.50, 세금 2.50 × 0.05 = 0.13
        assert ledger.total_discount_applied == Decimal("2.50")
        assert ledger.post_tax_post_discount == Decimal("2.63")

    def test_missing_file(self, tmp_path):
        """규칙 파일이 없으면 FileNotFoundError"""
        with pytest.raises(FileNotFoundError, match="규칙 파일을 찾을 수 없습니다"):
            RuleCatalog(str(tmp_path / "missing.yaml"))

    def test_malformed_entry(self, tmp_path):
        """잘못된 규칙은 ValueError"""
        rules_file = tmp_path / "bad.yaml"
        rules_file.write_text(
            "discounts:\n  - id: too_much\n    amount: '1.5'\n    kind: percent\n",
            encoding="utf-8"
        )

        with pytest.raises(ValueError, match=r"discounts\[0\]"):
            RuleCatalog(str(rules_file))

    def test_missing_amount(self, tmp_path):
        """금액이 없는 규칙은 ValueError"""
        rules_file = tmp_path / "bad.yaml"
        rules_file.write_text("taxes:\n  - id: hst\n", encoding="utf-8")

        with pytest.raises(ValueError, match=r"taxes\[0\]"):
            RuleCatalog(str(rules_file))
