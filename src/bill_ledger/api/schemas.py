"""API 요청/응답 스키마 (Pydantic)"""

from pydantic import BaseModel, Field
from typing import Optional, List
from decimal import Decimal

from ..core import (
    BillLedger,
    BillTotals,
    DiscountKind,
    DiscountRule,
    LineItem,
    TaxKind,
    TaxRule,
)


# ============================================================================
# 품목 관련 스키마
# ============================================================================

class LineItemFields(BaseModel):
    """품목 속성 (id 제외)"""
    amount: Decimal = Field(..., description="금액 (0보다 커야 함)")
    category: str = Field(default="", description="분류 (빈 문자열 = 분류 없음)")
    is_tax_exempt: bool = Field(default=False, description="면세 여부")


class LineItemSchema(LineItemFields):
    """품목"""
    id: str = Field(..., description="품목 식별자")

    class Config:
        json_schema_extra = {
            "example": {
                "id": "coke",
                "amount": "1.50",
                "category": "Pop",
                "is_tax_exempt": False
            }
        }

    def to_record(self) -> LineItem:
        return LineItem(
            id=self.id,
            amount=self.amount,
            category=self.category,
            is_tax_exempt=self.is_tax_exempt
        )

    @classmethod
    def from_record(cls, item: LineItem) -> "LineItemSchema":
        return cls(
            id=item.id,
            amount=item.amount,
            category=item.category,
            is_tax_exempt=item.is_tax_exempt
        )


# ============================================================================
# 할인 관련 스키마
# ============================================================================

class DiscountSchema(BaseModel):
    """할인 규칙"""
    id: str = Field(..., description="할인 식별자")
    name: str = Field(default="", description="표시용 이름")
    amount: Decimal = Field(..., description="비율(0~1) 또는 금액")
    kind: DiscountKind = Field(..., description="percent 또는 flat_amount")
    is_enabled: bool = Field(default=True, description="활성화 여부")

    class Config:
        json_schema_extra = {
            "example": {
                "id": "ten_percent",
                "name": "10 Percent Discount",
                "amount": "0.10",
                "kind": "percent",
                "is_enabled": True
            }
        }

    def to_record(self) -> DiscountRule:
        return DiscountRule(
            id=self.id,
            amount=self.amount,
            kind=self.kind,
            is_enabled=self.is_enabled,
            name=self.name
        )

    @classmethod
    def from_record(cls, discount: DiscountRule) -> "DiscountSchema":
        return cls(
            id=discount.id,
            name=discount.name,
            amount=discount.amount,
            kind=discount.kind,
            is_enabled=discount.is_enabled
        )


class SetDiscountsRequest(BaseModel):
    """할인 일괄 등록 요청"""
    discounts: List[DiscountSchema]


class ToggleDiscountRequest(BaseModel):
    """할인 활성화/비활성화 요청"""
    is_enabled: bool = Field(..., description="활성화 여부")


# ============================================================================
# 세금 관련 스키마
# ============================================================================

class TaxFields(BaseModel):
    """세금 규칙 속성 (id 제외)"""
    name: str = Field(default="", description="표시용 이름")
    amount: Decimal = Field(..., description="세율 (예: 0.13)")
    category: str = Field(default="", description="적용 분류 (빈 문자열 = 전체)")
    is_enabled: bool = Field(default=True, description="활성화 여부")
    kind: Optional[TaxKind] = Field(None, description="standard 또는 category (정보용)")

    def to_record(self, tax_id: str) -> TaxRule:
        kind = self.kind
        if kind is None:
            kind = TaxKind.STANDARD if self.category == "" else TaxKind.CATEGORY
        return TaxRule(
            id=tax_id,
            amount=self.amount,
            category=self.category,
            is_enabled=self.is_enabled,
            kind=kind,
            name=self.name
        )


class TaxSchema(TaxFields):
    """세금 규칙"""
    id: str = Field(..., description="세금 식별자")

    class Config:
        json_schema_extra = {
            "example": {
                "id": "hst",
                "name": "Harmonized Tax 13%",
                "amount": "0.13",
                "category": "",
                "is_enabled": True,
                "kind": "standard"
            }
        }

    @classmethod
    def from_record(cls, tax: TaxRule) -> "TaxSchema":
        return cls(
            id=tax.id,
            name=tax.name,
            amount=tax.amount,
            category=tax.category,
            is_enabled=tax.is_enabled,
            kind=tax.kind
        )


# ============================================================================
# 계산서 관련 스키마
# ============================================================================

class CreateBillRequest(BaseModel):
    """계산서 생성 요청"""
    load_catalog: bool = Field(default=False, description="기본 세금/할인 규칙 등록 여부")


class TotalsBreakdownItem(BaseModel):
    """합계 항목"""
    label: str
    amount: Decimal
    description: Optional[str] = None


class TotalsResponse(BaseModel):
    """합계 응답"""
    pre_tax_pre_discount: Decimal
    total_discount_applied: Decimal
    total_tax_applied: Decimal
    post_tax_post_discount: Decimal
    breakdown: List[TotalsBreakdownItem]

    class Config:
        json_schema_extra = {
            "example": {
                "pre_tax_pre_discount": "58.45",
                "total_discount_applied": "7.65",
                "total_tax_applied": "11.45",
                "post_tax_post_discount": "62.25",
                "breakdown": []
            }
        }

    @classmethod
    def from_totals(cls, totals: BillTotals) -> "TotalsResponse":
        breakdown = [
            TotalsBreakdownItem(
                label="소계",
                amount=totals.pre_tax_pre_discount,
                description="할인, 세금 적용 전 품목 합계"
            ),
            TotalsBreakdownItem(
                label="할인",
                amount=totals.total_discount_applied,
                description="적용 순서대로 누적된 할인"
            ),
            TotalsBreakdownItem(
                label="할인 후 소계",
                amount=totals.post_discount_subtotal,
                description="소계 - 할인"
            ),
            TotalsBreakdownItem(
                label="세금",
                amount=totals.total_tax_applied,
                description="일반세 - 면세 조정 + 분류세"
            ),
            TotalsBreakdownItem(
                label="합계",
                amount=totals.post_tax_post_discount,
                description="할인 후 소계 + 세금"
            )
        ]
        return cls(
            pre_tax_pre_discount=totals.pre_tax_pre_discount,
            total_discount_applied=totals.total_discount_applied,
            total_tax_applied=totals.total_tax_applied,
            post_tax_post_discount=totals.post_tax_post_discount,
            breakdown=breakdown
        )


class BillResponse(BaseModel):
    """계산서 응답"""
    bill_id: int
    line_items: List[LineItemSchema]
    registered_discounts: List[DiscountSchema]
    applied_discount_ids: List[str]
    taxes: List[TaxSchema]
    totals: TotalsResponse

    @classmethod
    def from_ledger(cls, bill_id: int, ledger: BillLedger) -> "BillResponse":
        return cls(
            bill_id=bill_id,
            line_items=[LineItemSchema.from_record(item) for item in ledger.line_items],
            registered_discounts=[
                DiscountSchema.from_record(discount)
                for discount in ledger.registered_discounts
            ],
            applied_discount_ids=[discount.id for discount in ledger.applied_discounts],
            taxes=[TaxSchema.from_record(tax) for tax in ledger.taxes],
            totals=TotalsResponse.from_totals(ledger.totals())
        )
