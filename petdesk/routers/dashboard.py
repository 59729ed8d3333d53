from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from petdesk.core.constants import Period
from petdesk.dependencies import get_db, require_auth
from petdesk.schemas.dashboard import (
    DashboardMetrics,
    PeriodMetrics,
    SalesAnalysisRequest,
    SalesAnalysisResponse,
)
from petdesk.services import dashboard_service

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/metrics", response_model=DashboardMetrics)
def global_metrics(db: Session = Depends(get_db)):
    return dashboard_service.global_metrics(db)


@router.get("/period", response_model=PeriodMetrics)
def period_metrics(
    period: Period = Query("month", description="today, tomorrow, week, last_week, month, last_month or all"),
    db: Session = Depends(get_db),
):
    return dashboard_service.period_metrics(db, period)


@router.post("/analysis", response_model=SalesAnalysisResponse)
def analyze_sales(
    payload: SalesAnalysisRequest,
    db: Session = Depends(get_db),
    _auth=Depends(require_auth),
):
    return dashboard_service.analyze_period(db, payload.period)


__all__ = ["router"]
