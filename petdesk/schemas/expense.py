from datetime import date
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from petdesk.core.constants import Period


class ExpenseBase(BaseModel):
    category: str = Field(min_length=1)
    amount: float = Field(ge=0)
    expense_date: Optional[date] = None
    description: str = ""


class ExpenseUpdate(BaseModel):
    category: Optional[str] = Field(None, min_length=1)
    amount: Optional[float] = Field(None, ge=0)
    expense_date: Optional[date] = None
    description: Optional[str] = None


class ExpenseRead(ExpenseBase):
    id: int
    expense_date: date

    model_config = ConfigDict(from_attributes=True)


class ExpenseSummary(BaseModel):
    period: Period
    total: float
    by_category: Dict[str, float] = Field(default_factory=dict)
