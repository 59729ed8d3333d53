from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from petdesk.core.constants import (
    DeliveryService,
    Language,
    OrderSource,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)


class OrderItemBase(BaseModel):
    product_id: int
    product_name: str = ""
    quantity: int = Field(1, ge=1)
    price: float = Field(0.0, ge=0)
    discount: float = Field(0.0, ge=0)


class OrderItemRead(OrderItemBase):
    model_config = ConfigDict(from_attributes=True)


class OrderItemUpdate(BaseModel):
    quantity: Optional[int] = Field(None, ge=1)
    price: Optional[float] = Field(None, ge=0)
    discount: Optional[float] = Field(None, ge=0)


class OrderItemAdd(BaseModel):
    product_id: int
    language: Language = "uk"


class OrderUpdate(BaseModel):
    source: Optional[OrderSource] = None
    source_order_number: Optional[str] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    shipping_address: Optional[str] = None
    delivery_city: Optional[str] = None
    delivery_service: Optional[DeliveryService] = None
    delivery_warehouse: Optional[str] = None
    shipping_cost: Optional[float] = Field(None, ge=0)
    ttn: Optional[str] = None
    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None
    payment_method: Optional[PaymentMethod] = None
    order_date: Optional[datetime] = None
    items: Optional[List[OrderItemBase]] = None


class OrderRead(BaseModel):
    id: int
    order_number: str
    source: OrderSource
    source_order_number: Optional[str] = None
    customer_name: str
    customer_phone: Optional[str] = None
    shipping_address: Optional[str] = None
    delivery_city: Optional[str] = None
    delivery_service: Optional[DeliveryService] = None
    delivery_warehouse: Optional[str] = None
    shipping_cost: Optional[float] = None
    ttn: Optional[str] = None
    total: float
    status: OrderStatus
    payment_status: PaymentStatus
    payment_method: PaymentMethod
    order_date: datetime
    items: List[OrderItemRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class OrderProfit(BaseModel):
    order_id: int
    revenue: float
    cost_of_goods: float
    shipping_cost: float
    bank_fee: float
    profit: float
    margin_percent: float


class PackagingAdviceRequest(BaseModel):
    language: Language = "uk"


class PackagingAdviceResponse(BaseModel):
    order_id: int
    advice: str
