"""계산서 레코드: 품목(LineItem), 할인(DiscountRule), 세금(TaxRule)

모든 레코드는 불변 객체입니다. 상태를 바꾸려면 새 객체를 만들어
원장에 교체 요청을 보냅니다.
"""

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Any, Dict

from .exceptions import InvalidAmountError
from .money import MoneyPolicy


class DiscountKind(Enum):
    """할인 유형"""
    PERCENT = "percent"
    FLAT_AMOUNT = "flat_amount"


class TaxKind(Enum):
    """세금 유형 (정보용, 실제 동작은 category로 결정)"""
    STANDARD = "standard"
    CATEGORY = "category"


@dataclass(frozen=True)
class LineItem:
    """계산서 품목

    동등성은 네 속성(id, amount, category, is_tax_exempt) 전체로 판단합니다.

    Attributes:
        id: 품목 식별자
        amount: 금액 (원장에 추가할 때 0보다 커야 함)
        category: 분류 ("" = 분류 없음)
        is_tax_exempt: 면세 여부

    Example:
        >>> item = LineItem(id="coke", amount=Decimal("1.50"), category="Pop")
    """

    id: str
    amount: Decimal
    category: str = ""
    is_tax_exempt: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'amount', MoneyPolicy.to_decimal(self.amount))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'amount': str(self.amount),
            'category': self.category,
            'is_tax_exempt': self.is_tax_exempt,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LineItem":
        return cls(
            id=str(data['id']),
            amount=data['amount'],
            category=data.get('category', ''),
            is_tax_exempt=bool(data.get('is_tax_exempt', False)),
        )


@dataclass(frozen=True)
class DiscountRule:
    """할인 규칙

    kind가 PERCENT이면 amount는 0~1 사이의 비율, FLAT_AMOUNT이면 금액입니다.
    등록(register)과 적용(apply)은 별개이며, is_enabled가 True일 때만 적용됩니다.

    Attributes:
        id: 할인 식별자
        amount: 비율 또는 금액
        kind: 할인 유형
        is_enabled: 활성화 여부
        name: 표시용 이름
    """

    id: str
    amount: Decimal
    kind: DiscountKind
    is_enabled: bool = True
    name: str = ""

    def __post_init__(self):
        amount = MoneyPolicy.to_decimal(self.amount)
        object.__setattr__(self, 'amount', amount)

        if not amount.is_finite():
            raise InvalidAmountError(amount, f"유한한 금액이어야 합니다: {amount}")
        if amount < 0:
            raise InvalidAmountError(amount, f"할인 금액은 음수일 수 없습니다: {amount}")
        if self.kind is DiscountKind.PERCENT and amount > 1:
            raise InvalidAmountError(amount, f"비율 할인은 0과 1 사이여야 합니다: {amount}")

    def with_enabled(self, is_enabled: bool) -> "DiscountRule":
        """활성화 여부만 바꾼 새 DiscountRule 반환"""
        return replace(self, is_enabled=is_enabled)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'amount': str(self.amount),
            'kind': self.kind.value,
            'is_enabled': self.is_enabled,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DiscountRule":
        return cls(
            id=str(data['id']),
            amount=data['amount'],
            kind=DiscountKind(data['kind']),
            is_enabled=bool(data.get('is_enabled', True)),
            name=data.get('name', ''),
        )


@dataclass(frozen=True)
class TaxRule:
    """세금 규칙

    category가 비어 있으면 할인 후 소계 전체에 부과되는 일반세(flat tax),
    값이 있으면 해당 분류 품목에만 부과되는 분류세(category tax)입니다.

    Attributes:
        id: 세금 식별자
        amount: 세율 (예: 0.13 = 13%)
        category: 적용 분류 ("" = 전체)
        is_enabled: 활성화 여부
        kind: 세금 유형 (정보용)
        name: 표시용 이름
    """

    id: str
    amount: Decimal
    category: str = ""
    is_enabled: bool = True
    kind: TaxKind = TaxKind.STANDARD
    name: str = ""

    def __post_init__(self):
        amount = MoneyPolicy.to_decimal(self.amount)
        object.__setattr__(self, 'amount', amount)

        if not amount.is_finite():
            raise InvalidAmountError(amount, f"유한한 금액이어야 합니다: {amount}")
        if amount < 0:
            raise InvalidAmountError(amount, f"세율은 음수일 수 없습니다: {amount}")

    @property
    def is_flat(self) -> bool:
        return self.category == ""

    def with_enabled(self, is_enabled: bool) -> "TaxRule":
        """활성화 여부만 바꾼 새 TaxRule 반환"""
        return replace(self, is_enabled=is_enabled)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'amount': str(self.amount),
            'category': self.category,
            'is_enabled': self.is_enabled,
            'kind': self.kind.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TaxRule":
        category = data.get('category', '') or ''
        default_kind = TaxKind.STANDARD if category == '' else TaxKind.CATEGORY
        return cls(
            id=str(data['id']),
            amount=data['amount'],
            category=category,
            is_enabled=bool(data.get('is_enabled', True)),
            kind=TaxKind(data['kind']) if 'kind' in data else default_kind,
            name=data.get('name', ''),
        )
