from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SupplierBase(BaseModel):
    name: str = Field(min_length=1)
    contact_person: str = ""
    phone: str = ""


class SupplierUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    contact_person: Optional[str] = None
    phone: Optional[str] = None


class SupplierRead(SupplierBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class CustomerBase(BaseModel):
    name: str = Field(min_length=1)
    phone: str = ""
    email: Optional[str] = None
    city: Optional[str] = None
    note: Optional[str] = None


class CustomerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    email: Optional[str] = None
    city: Optional[str] = None
    note: Optional[str] = None


class CustomerRead(CustomerBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class CategoryBase(BaseModel):
    name_ru: str = Field(min_length=1)
    name_uk: str = ""
    parent_id: Optional[int] = None


class CategoryUpdate(BaseModel):
    name_ru: Optional[str] = Field(None, min_length=1)
    name_uk: Optional[str] = None
    parent_id: Optional[int] = None


class CategoryRead(CategoryBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class CategoryNode(CategoryRead):
    level: int = 0
    children: List["CategoryNode"] = Field(default_factory=list)
