from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from petdesk.core.constants import Language
from petdesk.core.errors import NotFoundError
from petdesk.dependencies import get_db, require_auth
from petdesk.schemas.product import ProductRead
from petdesk.schemas.receipt import ReceiptDraft, ReceiptPreview, ReceiptResult
from petdesk.services.product_service import serialize_product
from petdesk.services.settlement_service import serialize_receipt
from petdesk.services.warehouse_service import build_preview, finalize_receipt, list_stock

router = APIRouter(prefix="/warehouse", tags=["Warehouse"])


def _draft_items(payload: ReceiptDraft):
    return [item.model_dump() for item in payload.items]


@router.get("/stock", response_model=List[ProductRead])
def stock(
    query: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return [serialize_product(product) for product in list_stock(db, query=query, category=category)]


@router.post("/preview", response_model=ReceiptPreview)
def preview_receipt(
    payload: ReceiptDraft,
    language: Language = Query("uk"),
    db: Session = Depends(get_db),
):
    try:
        return build_preview(db, _draft_items(payload), payload.extra_costs, language=language)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/receipts", response_model=ReceiptResult, status_code=201)
def receive_stock(
    payload: ReceiptDraft,
    language: Language = Query("uk"),
    db: Session = Depends(get_db),
    _auth=Depends(require_auth),
):
    try:
        result = finalize_receipt(
            db,
            _draft_items(payload),
            extra_costs=payload.extra_costs,
            supplier_id=payload.supplier_id,
            payment_due_date=payload.payment_due_date,
            language=language,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except (ValueError, SQLAlchemyError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    receipt = result["receipt"]
    return {
        "preview": result["preview"],
        "receipt": serialize_receipt(receipt) if receipt is not None else None,
        "updated_products": result["updated_products"],
    }


__all__ = ["router"]
