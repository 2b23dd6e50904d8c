"""계산서 API 라우터"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ...core import NotFoundError, RuleCatalog
from ..schemas import (
    BillResponse,
    CreateBillRequest,
    DiscountSchema,
    LineItemFields,
    LineItemSchema,
    SetDiscountsRequest,
    TaxFields,
    TaxSchema,
    ToggleDiscountRequest,
    TotalsResponse,
)
from ..store import BillStore, get_store

router = APIRouter()


def _to_http_error(error: Exception) -> HTTPException:
    """원장 예외를 HTTP 오류로 변환"""
    if isinstance(error, NotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(error)
        )
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=str(error)
    )


def _load_bill(store: BillStore, bill_id: int):
    try:
        return store.get(bill_id)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"계산서 ID {bill_id}를 찾을 수 없습니다."
        )


@router.post("", response_model=BillResponse, status_code=status.HTTP_201_CREATED)
async def create_bill(
    request: Optional[CreateBillRequest] = None,
    store: BillStore = Depends(get_store)
):
    """계산서 생성

    load_catalog가 true이면 기본 세금/할인 규칙을 등록합니다.
    """
    bill_id, ledger = store.create()

    if request is not None and request.load_catalog:
        try:
            RuleCatalog().apply_to(ledger)
        except (FileNotFoundError, ValueError) as e:
            store.delete(bill_id)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"규칙 로드 실패: {str(e)}"
            )

    return BillResponse.from_ledger(bill_id, ledger)


@router.get("/{bill_id}", response_model=BillResponse)
async def get_bill(bill_id: int, store: BillStore = Depends(get_store)):
    """계산서 조회"""
    ledger = _load_bill(store, bill_id)
    return BillResponse.from_ledger(bill_id, ledger)


@router.delete("/{bill_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bill(bill_id: int, store: BillStore = Depends(get_store)):
    """계산서 삭제"""
    _load_bill(store, bill_id)
    store.delete(bill_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{bill_id}/totals", response_model=TotalsResponse)
async def get_totals(bill_id: int, store: BillStore = Depends(get_store)):
    """합계 조회"""
    ledger = _load_bill(store, bill_id)
    return TotalsResponse.from_totals(ledger.totals())


# ----------------------------------------------------------------------------
# 품목
# ----------------------------------------------------------------------------

@router.post("/{bill_id}/items", response_model=BillResponse)
async def add_line_item(
    bill_id: int,
    item: LineItemSchema,
    store: BillStore = Depends(get_store)
):
    """품목 추가"""
    ledger = _load_bill(store, bill_id)
    try:
        ledger.add_line_item(item.to_record())
    except (NotFoundError, ValueError) as e:
        raise _to_http_error(e)
    return BillResponse.from_ledger(bill_id, ledger)


@router.put("/{bill_id}/items/{item_id}", response_model=BillResponse)
async def update_line_item(
    bill_id: int,
    item_id: str,
    fields: LineItemFields,
    store: BillStore = Depends(get_store)
):
    """품목 교체 (같은 id의 첫 번째 품목)"""
    ledger = _load_bill(store, bill_id)
    item = LineItemSchema(id=item_id, **fields.model_dump())
    try:
        ledger.update_line_item(item.to_record())
    except (NotFoundError, ValueError) as e:
        raise _to_http_error(e)
    return BillResponse.from_ledger(bill_id, ledger)


@router.post("/{bill_id}/items/remove", response_model=BillResponse)
async def remove_line_item(
    bill_id: int,
    item: LineItemSchema,
    store: BillStore = Depends(get_store)
):
    """품목 제거 (모든 속성이 같은 품목 전부)"""
    ledger = _load_bill(store, bill_id)
    ledger.remove_line_item(item.to_record())
    return BillResponse.from_ledger(bill_id, ledger)


# ----------------------------------------------------------------------------
# 할인
# ----------------------------------------------------------------------------

@router.post("/{bill_id}/discounts", response_model=BillResponse)
async def set_discounts(
    bill_id: int,
    request: SetDiscountsRequest,
    store: BillStore = Depends(get_store)
):
    """할인 일괄 등록"""
    ledger = _load_bill(store, bill_id)
    try:
        discounts = [discount.to_record() for discount in request.discounts]
    except ValueError as e:
        raise _to_http_error(e)
    ledger.set_discounts(discounts)
    return BillResponse.from_ledger(bill_id, ledger)


@router.get("/{bill_id}/discounts/{discount_id}", response_model=DiscountSchema)
async def get_discount(
    bill_id: int,
    discount_id: str,
    store: BillStore = Depends(get_store)
):
    """등록된 할인 조회"""
    ledger = _load_bill(store, bill_id)
    try:
        discount = ledger.find_registered_discount(discount_id)
    except NotFoundError as e:
        raise _to_http_error(e)
    return DiscountSchema.from_record(discount)


@router.patch("/{bill_id}/discounts/{discount_id}", response_model=BillResponse)
async def toggle_discount(
    bill_id: int,
    discount_id: str,
    request: ToggleDiscountRequest,
    store: BillStore = Depends(get_store)
):
    """할인 활성화/비활성화

    다시 활성화한 할인은 적용 순서의 맨 뒤에 붙습니다.
    """
    ledger = _load_bill(store, bill_id)
    try:
        discount = ledger.find_registered_discount(discount_id)
    except NotFoundError as e:
        raise _to_http_error(e)
    ledger.update_discount(discount.with_enabled(request.is_enabled))
    return BillResponse.from_ledger(bill_id, ledger)


# ----------------------------------------------------------------------------
# 세금
# ----------------------------------------------------------------------------

@router.post("/{bill_id}/taxes", response_model=BillResponse)
async def add_tax(
    bill_id: int,
    tax: TaxSchema,
    store: BillStore = Depends(get_store)
):
    """세금 규칙 추가"""
    ledger = _load_bill(store, bill_id)
    try:
        ledger.add_tax(tax.to_record(tax.id))
    except ValueError as e:
        raise _to_http_error(e)
    return BillResponse.from_ledger(bill_id, ledger)


@router.get("/{bill_id}/taxes/{tax_id}", response_model=TaxSchema)
async def get_tax(
    bill_id: int,
    tax_id: str,
    store: BillStore = Depends(get_store)
):
    """세금 규칙 조회"""
    ledger = _load_bill(store, bill_id)
    try:
        tax = ledger.find_tax(tax_id)
    except NotFoundError as e:
        raise _to_http_error(e)
    return TaxSchema.from_record(tax)


@router.put("/{bill_id}/taxes/{tax_id}", response_model=BillResponse)
async def update_tax(
    bill_id: int,
    tax_id: str,
    fields: TaxFields,
    store: BillStore = Depends(get_store)
):
    """세금 규칙 교체"""
    ledger = _load_bill(store, bill_id)
    try:
        ledger.update_tax(fields.to_record(tax_id))
    except (NotFoundError, ValueError) as e:
        raise _to_http_error(e)
    return BillResponse.from_ledger(bill_id, ledger)


@router.delete("/{bill_id}/taxes/{tax_id}", response_model=BillResponse)
async def remove_tax(
    bill_id: int,
    tax_id: str,
    store: BillStore = Depends(get_store)
):
    """세금 규칙 제거"""
    ledger = _load_bill(store, bill_id)
    ledger.remove_tax(tax_id)
    return BillResponse.from_ledger(bill_id, ledger)
