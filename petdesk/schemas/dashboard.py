from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from petdesk.core.constants import Period


class DashboardMetrics(BaseModel):
    total_sales: float
    total_orders: int
    average_check: float
    pending_orders: int
    net_profit: float
    accounts_payable: float


class ChartBucket(BaseModel):
    label: str
    start: datetime
    sales: float
    orders: int
    previous_sales: float
    previous_orders: int


class PeriodMetrics(BaseModel):
    period: Period
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    previous_start: Optional[datetime] = None
    previous_end: Optional[datetime] = None
    granularity: str
    total_sales: float
    total_orders: int
    net_profit: float
    accounts_payable: float
    expenses: float
    previous_sales: float
    previous_orders: int
    sales_change_percent: Optional[float] = None
    chart: List[ChartBucket]


class SalesAnalysisRequest(BaseModel):
    period: Period = "month"


class SalesAnalysisResponse(BaseModel):
    period: Period
    summary: str
    analysis: str
