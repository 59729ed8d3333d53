import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from petdesk.config import get_settings
from petdesk.models.store_settings import StoreSettings

logger = logging.getLogger(__name__)

_KEY_FIELDS = ("nova_poshta_api_key", "rozetka_api_key", "prom_api_key")


def mask_secret(value):
    value = value or ""
    if len(value) <= 4:
        return "*" * len(value)
    return "*" * (len(value) - 4) + value[-4:]


def get_store_settings(db: Session) -> StoreSettings:
    store_settings = db.execute(select(StoreSettings).limit(1)).scalars().first()
    if store_settings is None:
        store_settings = StoreSettings(bank_commission=get_settings().BANK_COMMISSION_PERCENT)
        db.add(store_settings)
        db.flush()
    return store_settings


def get_bank_commission(db: Session) -> float:
    return float(get_store_settings(db).bank_commission or 0.0)


def serialize_store_settings(store_settings: StoreSettings) -> dict:
    data = {"bank_commission": store_settings.bank_commission}
    for field in _KEY_FIELDS:
        data[field] = mask_secret(getattr(store_settings, field))
    return data


def update_store_settings(db: Session, values: dict) -> StoreSettings:
    store_settings = get_store_settings(db)
    for key, value in values.items():
        if value is None:
            continue
        if key == "bank_commission":
            store_settings.bank_commission = float(value)
        elif key in _KEY_FIELDS:
            setattr(store_settings, key, value.strip())
    db.commit()
    db.refresh(store_settings)
    logger.info("Store settings updated: %s", ", ".join(sorted(values)))
    return store_settings


__all__ = [
    "get_bank_commission",
    "get_store_settings",
    "mask_secret",
    "serialize_store_settings",
    "update_store_settings",
]
