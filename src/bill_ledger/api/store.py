"""계산서 저장소 (메모리)"""

from itertools import count
from typing import Dict, Tuple

from ..core import BillLedger, NotFoundError


class BillStore:
    """프로세스 메모리에 계산서 원장을 보관

    영속화는 하지 않습니다. 계산서 id는 1부터 증가합니다.
    """

    def __init__(self):
        self._bills: Dict[int, BillLedger] = {}
        self._ids = count(1)

    def create(self) -> Tuple[int, BillLedger]:
        bill_id = next(self._ids)
        ledger = BillLedger()
        self._bills[bill_id] = ledger
        return bill_id, ledger

    def get(self, bill_id: int) -> BillLedger:
        """계산서 조회

        Raises:
            NotFoundError: 계산서가 없는 경우
        """
        ledger = self._bills.get(bill_id)
        if ledger is None:
            raise NotFoundError("bill", bill_id)
        return ledger

    def delete(self, bill_id: int) -> None:
        if bill_id not in self._bills:
            raise NotFoundError("bill", bill_id)
        del self._bills[bill_id]

    def __len__(self) -> int:
        return len(self._bills)


# 전역 저장소 인스턴스
bill_store = BillStore()


def get_store() -> BillStore:
    """계산서 저장소 의존성

    FastAPI 의존성으로 사용됩니다. 테스트에서는
    app.dependency_overrides로 교체합니다.
    """
    return bill_store
