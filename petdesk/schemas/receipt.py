from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ReceiptLineIn(BaseModel):
    product_id: int
    quantity: int = Field(gt=0)
    supplier_unit_price: float = Field(ge=0)


class ReceiptDraft(BaseModel):
    supplier_id: Optional[int] = None
    payment_due_date: Optional[date] = None
    extra_costs: float = Field(0.0, ge=0)
    items: List[ReceiptLineIn] = Field(min_length=1)


class ReceiptItemRead(BaseModel):
    product_id: int
    product_name: str
    quantity: int
    supplier_unit_price: float
    supplier_total_cost: float
    allocated_extra: float
    landed_unit_cost: float
    landed_total_cost: float

    model_config = ConfigDict(from_attributes=True)


class ReceiptPreview(BaseModel):
    items: List[ReceiptItemRead]
    total_supplier_value: float
    extra_costs: float
    total_landed_value: float


class ReceiptRead(BaseModel):
    id: int
    supplier_id: Optional[int] = None
    supplier_name: str
    receipt_date: date
    payment_due_date: date
    total_amount: float
    extra_costs: float
    is_paid: bool
    items_count: int
    is_overdue: bool = False
    items: List[ReceiptItemRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class ReceiptResult(BaseModel):
    preview: ReceiptPreview
    receipt: Optional[ReceiptRead] = None
    updated_products: int


class SupplierBalance(BaseModel):
    supplier_id: Optional[int] = None
    supplier_name: str
    outstanding: float
    overdue: float
    paid: float
    unpaid_receipts: int
    paid_receipts: int
