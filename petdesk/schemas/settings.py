from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class StoreSettingsRead(BaseModel):
    bank_commission: float
    nova_poshta_api_key: str
    rozetka_api_key: str
    prom_api_key: str

    model_config = ConfigDict(from_attributes=True)


class StoreSettingsUpdate(BaseModel):
    bank_commission: Optional[float] = Field(None, ge=0, le=100)
    nova_poshta_api_key: Optional[str] = None
    rozetka_api_key: Optional[str] = None
    prom_api_key: Optional[str] = None
