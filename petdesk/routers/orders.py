from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from petdesk.core.constants import OrderSource, OrderStatus
from petdesk.core.errors import NotFoundError
from petdesk.dependencies import get_db, require_auth
from petdesk.schemas.order import (
    OrderItemAdd,
    OrderItemUpdate,
    OrderProfit,
    OrderRead,
    OrderUpdate,
    PackagingAdviceRequest,
    PackagingAdviceResponse,
)
from petdesk.services import order_service

router = APIRouter(prefix="/orders", tags=["Orders"])


def _load(db: Session, order_id: int):
    try:
        return order_service.get_order(db, order_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.get("", response_model=List[OrderRead])
def list_orders(
    status: Optional[OrderStatus] = Query(None),
    source: Optional[OrderSource] = Query(None),
    query: Optional[str] = Query(None, description="Order number, customer, phone or TTN fragment"),
    db: Session = Depends(get_db),
):
    return order_service.list_orders(db, status=status, source=source, query=query)


@router.post("", response_model=OrderRead, status_code=201)
def create_order(db: Session = Depends(get_db), _auth=Depends(require_auth)):
    return order_service.create_order(db)


@router.get("/{order_id}", response_model=OrderRead)
def get_order(order_id: int, db: Session = Depends(get_db)):
    return _load(db, order_id)


@router.put("/{order_id}", response_model=OrderRead)
def update_order(
    order_id: int,
    payload: OrderUpdate,
    db: Session = Depends(get_db),
    _auth=Depends(require_auth),
):
    order = _load(db, order_id)
    try:
        return order_service.update_order(db, order, payload.model_dump(exclude_unset=True))
    except SQLAlchemyError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.delete("/{order_id}", status_code=204)
def delete_order(order_id: int, db: Session = Depends(get_db), _auth=Depends(require_auth)):
    order_service.delete_order(db, _load(db, order_id))


@router.post("/{order_id}/items", response_model=OrderRead)
def add_item(
    order_id: int,
    payload: OrderItemAdd,
    db: Session = Depends(get_db),
    _auth=Depends(require_auth),
):
    order = _load(db, order_id)
    try:
        return order_service.add_item(db, order, payload.product_id, payload.language)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.put("/{order_id}/items/{index}", response_model=OrderRead)
def update_item(
    order_id: int,
    index: int,
    payload: OrderItemUpdate,
    db: Session = Depends(get_db),
    _auth=Depends(require_auth),
):
    order = _load(db, order_id)
    try:
        return order_service.update_item(db, order, index, payload.model_dump(exclude_unset=True))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.delete("/{order_id}/items/{index}", response_model=OrderRead)
def remove_item(order_id: int, index: int, db: Session = Depends(get_db), _auth=Depends(require_auth)):
    order = _load(db, order_id)
    try:
        return order_service.remove_item(db, order, index)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post("/{order_id}/ttn", response_model=OrderRead)
def generate_ttn(order_id: int, db: Session = Depends(get_db), _auth=Depends(require_auth)):
    return order_service.assign_ttn(db, _load(db, order_id))


@router.post("/{order_id}/shipping-quote", response_model=OrderRead)
def quote_shipping(order_id: int, db: Session = Depends(get_db), _auth=Depends(require_auth)):
    order = _load(db, order_id)
    try:
        return order_service.quote_shipping_cost(db, order)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/{order_id}/profit", response_model=OrderProfit)
def order_profit(order_id: int, db: Session = Depends(get_db)):
    return order_service.calculate_order_profit(db, _load(db, order_id))


@router.post("/{order_id}/packaging-advice", response_model=PackagingAdviceResponse)
def packaging_advice(
    order_id: int,
    payload: PackagingAdviceRequest,
    db: Session = Depends(get_db),
    _auth=Depends(require_auth),
):
    order = _load(db, order_id)
    return PackagingAdviceResponse(order_id=order.id, advice=order_service.packaging_advice(order, payload.language))


__all__ = ["router"]
