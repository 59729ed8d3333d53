from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from petdesk.core.errors import NotFoundError
from petdesk.dependencies import get_db, require_auth
from petdesk.models.directory import Category, Customer, Supplier
from petdesk.schemas.directory import (
    CategoryBase,
    CategoryNode,
    CategoryRead,
    CategoryUpdate,
    CustomerBase,
    CustomerRead,
    CustomerUpdate,
    SupplierBase,
    SupplierRead,
    SupplierUpdate,
)
from petdesk.services import directory_service

router = APIRouter(prefix="/directories", tags=["Directories"])


def _load(db: Session, model, record_id: int):
    try:
        return directory_service.get_record(db, model, record_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


def _save(action, *args):
    try:
        return action(*args)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except (ValueError, SQLAlchemyError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _register(path: str, model, create_schema, update_schema, read_schema):
    @router.get(path, response_model=List[read_schema], name="list_" + model.__tablename__)
    def list_items(db: Session = Depends(get_db)):
        return directory_service.list_records(db, model)

    @router.post(path, response_model=read_schema, status_code=201, name="create_" + model.__tablename__)
    def create_item(payload: create_schema, db: Session = Depends(get_db), _auth=Depends(require_auth)):
        return _save(directory_service.create_record, db, model, payload.model_dump())

    @router.get(path + "/{record_id}", response_model=read_schema, name="get_" + model.__tablename__)
    def get_item(record_id: int, db: Session = Depends(get_db)):
        return _load(db, model, record_id)

    @router.put(path + "/{record_id}", response_model=read_schema, name="update_" + model.__tablename__)
    def update_item(
        record_id: int,
        payload: update_schema,
        db: Session = Depends(get_db),
        _auth=Depends(require_auth),
    ):
        record = _load(db, model, record_id)
        return _save(directory_service.update_record, db, record, payload.model_dump(exclude_unset=True))

    @router.delete(path + "/{record_id}", status_code=204, name="delete_" + model.__tablename__)
    def delete_item(record_id: int, db: Session = Depends(get_db), _auth=Depends(require_auth)):
        directory_service.delete_record(db, _load(db, model, record_id))


@router.get("/categories/tree", response_model=List[CategoryNode])
def category_tree(db: Session = Depends(get_db)):
    return directory_service.category_tree(db)


_register("/suppliers", Supplier, SupplierBase, SupplierUpdate, SupplierRead)
_register("/customers", Customer, CustomerBase, CustomerUpdate, CustomerRead)
_register("/categories", Category, CategoryBase, CategoryUpdate, CategoryRead)


__all__ = ["router"]
