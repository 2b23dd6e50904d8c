"""MoneyPolicy: 고정 소수점 금액 연산 정책"""

from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Union


Number = Union[Decimal, int, float, str]


class MoneyPolicy:
    """모든 덧셈, 뺄셈, 곱셈에 동일하게 적용되는 반올림 정책

    연산 결과는 정확히 계산한 뒤 소수점 둘째 자리로 반올림합니다
    (ROUND_HALF_UP, 0.5는 0에서 먼 쪽으로). 오버플로/언더플로 등
    decimal 시그널은 예외로 올리지 않습니다.

    같은 연산을 같은 순서로 수행하면 항상 같은 Decimal 값이 나옵니다.

    Attributes:
        scale: 소수점 자릿수
        rounding: decimal 반올림 모드
    """

    def __init__(self, scale: int = 2, rounding: str = ROUND_HALF_UP):
        self.scale = scale
        self.rounding = rounding
        self.quantum = Decimal(1).scaleb(-scale)
        self.context = Context(prec=38, rounding=rounding, traps=[])

    @staticmethod
    def to_decimal(value: Number) -> Decimal:
        """입력값을 Decimal로 변환

        float는 str()을 거쳐 변환하므로 1.5와 "1.50"은 같은 값이 됩니다.
        """
        if isinstance(value, Decimal):
            return value
        if isinstance(value, bool):
            raise TypeError("bool은 금액으로 사용할 수 없습니다")
        return Decimal(str(value))

    def round(self, value: Decimal) -> Decimal:
        """정책 자릿수로 반올림"""
        return value.quantize(self.quantum, rounding=self.rounding, context=self.context)

    def is_representable(self, value: Decimal) -> bool:
        """유한하고 정책 자릿수로 반올림할 수 있는 값인지 확인

        Infinity, NaN, 그리고 정밀도(38자리)를 넘어 반올림 결과가 NaN이
        되는 큰 값은 False입니다.
        """
        if not value.is_finite():
            return False
        return not self.round(value).is_nan()

    def zero(self) -> Decimal:
        return self.round(Decimal(0))

    def add(self, a: Decimal, b: Decimal) -> Decimal:
        return self.round(self.context.add(a, b))

    def subtract(self, a: Decimal, b: Decimal) -> Decimal:
        return self.round(self.context.subtract(a, b))

    def multiply(self, a: Decimal, b: Decimal) -> Decimal:
        return self.round(self.context.multiply(a, b))

    def __repr__(self) -> str:
        return f"MoneyPolicy(scale={self.scale}, rounding={self.rounding})"


# 전역 기본 정책 (모든 원장이 공유)
DEFAULT_POLICY = MoneyPolicy()
