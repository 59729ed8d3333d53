from typing import List

from pydantic import BaseModel, Field

from petdesk.core.constants import Language


class CopyRequest(BaseModel):
    product_name: str = ""
    category: str = ""
    language: Language = "uk"


class AnalysisRequest(BaseModel):
    sales_summary: str = Field(min_length=1)


class ParcelItem(BaseModel):
    product_name: str
    quantity: int = Field(1, ge=1)


class ShippingAdviceRequest(BaseModel):
    items: List[ParcelItem] = Field(min_length=1)
    language: Language = "uk"


class AssistantReply(BaseModel):
    text: str
