from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from petdesk.core.constants import SettlementFilter
from petdesk.core.errors import NotFoundError
from petdesk.dependencies import get_db, require_auth
from petdesk.schemas.receipt import ReceiptRead, SupplierBalance
from petdesk.services import settlement_service

router = APIRouter(prefix="/settlements", tags=["Settlements"])


def _load(db: Session, receipt_id: int):
    try:
        return settlement_service.get_receipt(db, receipt_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.get("", response_model=List[ReceiptRead])
def list_receipts(
    status: SettlementFilter = Query("unpaid", description="unpaid, paid or all"),
    db: Session = Depends(get_db),
):
    receipts = settlement_service.list_receipts(db, status)
    return [settlement_service.serialize_receipt(receipt) for receipt in receipts]


@router.get("/balances", response_model=List[SupplierBalance])
def supplier_balances(db: Session = Depends(get_db)):
    return settlement_service.supplier_balances(db)


@router.get("/{receipt_id}", response_model=ReceiptRead)
def get_receipt(receipt_id: int, db: Session = Depends(get_db)):
    return settlement_service.serialize_receipt(_load(db, receipt_id))


@router.post("/{receipt_id}/pay", response_model=ReceiptRead)
def mark_paid(receipt_id: int, db: Session = Depends(get_db), _auth=Depends(require_auth)):
    receipt = settlement_service.mark_paid(db, _load(db, receipt_id))
    return settlement_service.serialize_receipt(receipt)


@router.delete("/{receipt_id}", status_code=204)
def delete_receipt(receipt_id: int, db: Session = Depends(get_db), _auth=Depends(require_auth)):
    settlement_service.delete_receipt(db, _load(db, receipt_id))


__all__ = ["router"]
