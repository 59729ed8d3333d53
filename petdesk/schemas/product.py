from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from petdesk.core.constants import Language


class ProductBase(BaseModel):
    sku: str = Field(min_length=1)
    barcode: Optional[str] = None
    name_ru: str = Field(min_length=1)
    name_uk: str = ""
    description_ru: str = ""
    description_uk: str = ""
    price: float = Field(0.0, ge=0)
    purchase_price: float = Field(0.0, ge=0)
    promotional_price: Optional[float] = Field(None, ge=0)
    stock: int = Field(0, ge=0)
    category: str = ""
    image_url: Optional[str] = None


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    sku: Optional[str] = Field(None, min_length=1)
    barcode: Optional[str] = None
    name_ru: Optional[str] = Field(None, min_length=1)
    name_uk: Optional[str] = None
    description_ru: Optional[str] = None
    description_uk: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    purchase_price: Optional[float] = Field(None, ge=0)
    promotional_price: Optional[float] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    category: Optional[str] = None
    image_url: Optional[str] = None


class ProductRead(ProductBase):
    id: int
    created_at: datetime
    markup_percent: float = 0.0
    effective_price: float = 0.0

    model_config = ConfigDict(from_attributes=True)


class MarkupRequest(BaseModel):
    purchase_price: float = Field(ge=0)
    price: Optional[float] = Field(None, ge=0)
    markup_percent: Optional[float] = None


class MarkupResponse(BaseModel):
    purchase_price: float
    price: float
    markup_percent: float


class DescriptionRequest(BaseModel):
    language: Language = "uk"
    save: bool = False


class DescriptionResponse(BaseModel):
    product_id: int
    language: Language
    description: str


class ImportValues(BaseModel):
    sku: Optional[str] = Field(None, min_length=1)
    name_ru: Optional[str] = None
    name_uk: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    category: Optional[str] = None


class ImportPreviewRow(BaseModel):
    type: Literal["new", "update"]
    sku: str = Field(min_length=1)
    product_id: Optional[int] = None
    values: ImportValues
    changes: List[str] = Field(default_factory=list)
    selected: bool = True


class ImportPreview(BaseModel):
    headers: List[str]
    mapping: dict
    rows: List[ImportPreviewRow]
    errors: List[str] = Field(default_factory=list)


class ImportApplyRequest(BaseModel):
    rows: List[ImportPreviewRow]


class ImportApplyResult(BaseModel):
    inserted: int
    updated: int
    skipped: int


class ImportRequest(BaseModel):
    path: str = Field(min_length=1)
    mapping: Optional[Dict[str, str]] = None
    sheet: Optional[str] = None
