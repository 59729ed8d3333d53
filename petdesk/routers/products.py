from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from openpyxl.utils.exceptions import InvalidFileException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from petdesk.core.errors import NotFoundError
from petdesk.dependencies import get_db, require_auth
from petdesk.schemas.product import (
    DescriptionRequest,
    DescriptionResponse,
    ImportApplyRequest,
    ImportApplyResult,
    ImportPreview,
    ImportRequest,
    MarkupRequest,
    MarkupResponse,
    ProductCreate,
    ProductRead,
    ProductUpdate,
)
from petdesk.services import product_service
from petdesk.services.import_service import apply_import, build_import_preview

router = APIRouter(prefix="/products", tags=["Products"])


def _load(db: Session, product_id: int):
    try:
        return product_service.get_product(db, product_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.get("", response_model=List[ProductRead])
def list_products(
    query: Optional[str] = Query(None, description="Name, SKU or barcode fragment"),
    category: Optional[str] = Query(None, description="Exact category, or 'all'"),
    db: Session = Depends(get_db),
):
    products = product_service.list_products(db, query=query, category=category)
    return [product_service.serialize_product(product) for product in products]


@router.get("/categories", response_model=List[str])
def list_categories(db: Session = Depends(get_db)):
    return product_service.list_categories(db)


@router.get("/search", response_model=List[ProductRead])
def search_products(
    query: str = Query("", description="Name, SKU or barcode fragment"),
    limit: int = Query(5, ge=1, le=50),
    db: Session = Depends(get_db),
):
    products = product_service.search_products(db, query, limit=limit)
    return [product_service.serialize_product(product) for product in products]


@router.post("/markup", response_model=MarkupResponse)
def calculate_markup(payload: MarkupRequest):
    try:
        return product_service.calculate_markup(
            payload.purchase_price,
            price=payload.price,
            markup=payload.markup_percent,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/import/preview", response_model=ImportPreview)
def preview_import(payload: ImportRequest, db: Session = Depends(get_db), _auth=Depends(require_auth)):
    try:
        return build_import_preview(db, payload.path, mapping=payload.mapping, sheet=payload.sheet)
    except (OSError, ValueError, KeyError, InvalidFileException) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/import/apply", response_model=ImportApplyResult)
def apply_product_import(
    payload: ImportApplyRequest,
    db: Session = Depends(get_db),
    _auth=Depends(require_auth),
):
    try:
        return apply_import(db, [row.model_dump(exclude_none=True) for row in payload.rows])
    except (ValueError, SQLAlchemyError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/{product_id}", response_model=ProductRead)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return product_service.serialize_product(_load(db, product_id))


@router.post("", response_model=ProductRead, status_code=201)
def create_product(payload: ProductCreate, db: Session = Depends(get_db), _auth=Depends(require_auth)):
    try:
        product = product_service.create_product(db, payload.model_dump())
    except (ValueError, SQLAlchemyError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return product_service.serialize_product(product)


@router.put("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
    _auth=Depends(require_auth),
):
    product = _load(db, product_id)
    try:
        product = product_service.update_product(db, product, payload.model_dump(exclude_unset=True))
    except (ValueError, SQLAlchemyError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return product_service.serialize_product(product)


@router.delete("/{product_id}", status_code=204)
def delete_product(product_id: int, db: Session = Depends(get_db), _auth=Depends(require_auth)):
    product_service.delete_product(db, _load(db, product_id))


@router.post("/{product_id}/description", response_model=DescriptionResponse)
def generate_description(
    product_id: int,
    payload: DescriptionRequest,
    db: Session = Depends(get_db),
    _auth=Depends(require_auth),
):
    product = _load(db, product_id)
    description = product_service.generate_description(db, product, payload.language, save=payload.save)
    return DescriptionResponse(product_id=product.id, language=payload.language, description=description)


__all__ = ["router"]
