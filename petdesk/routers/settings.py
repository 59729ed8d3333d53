from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from petdesk.dependencies import get_db, require_auth
from petdesk.schemas.settings import StoreSettingsRead, StoreSettingsUpdate
from petdesk.services.settings_service import (
    get_store_settings,
    serialize_store_settings,
    update_store_settings,
)

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("", response_model=StoreSettingsRead)
def read_settings(db: Session = Depends(get_db)):
    store_settings = get_store_settings(db)
    db.commit()
    return serialize_store_settings(store_settings)


@router.put("", response_model=StoreSettingsRead)
def write_settings(
    payload: StoreSettingsUpdate,
    db: Session = Depends(get_db),
    _auth=Depends(require_auth),
):
    store_settings = update_store_settings(db, payload.model_dump(exclude_unset=True))
    return serialize_store_settings(store_settings)


__all__ = ["router"]
