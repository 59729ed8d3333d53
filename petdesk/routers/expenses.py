from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from petdesk.config import get_settings
from petdesk.core.constants import Period
from petdesk.core.errors import NotFoundError
from petdesk.core.periods import resolve_period
from petdesk.dependencies import get_db, require_auth
from petdesk.schemas.expense import ExpenseBase, ExpenseRead, ExpenseSummary, ExpenseUpdate
from petdesk.services import expense_service

router = APIRouter(prefix="/expenses", tags=["Expenses"])


def _load(db: Session, expense_id: int):
    try:
        return expense_service.get_expense(db, expense_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.get("", response_model=List[ExpenseRead])
def list_expenses(category: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return expense_service.list_expenses(db, category=category)


@router.get("/summary", response_model=ExpenseSummary)
def summarize_expenses(period: Period = Query("month"), db: Session = Depends(get_db)):
    window = resolve_period(period, week_start=get_settings().WEEK_START)
    return expense_service.summarize_expenses(db, window)


@router.post("", response_model=ExpenseRead, status_code=201)
def create_expense(payload: ExpenseBase, db: Session = Depends(get_db), _auth=Depends(require_auth)):
    return expense_service.create_expense(db, payload.model_dump())


@router.get("/{expense_id}", response_model=ExpenseRead)
def get_expense(expense_id: int, db: Session = Depends(get_db)):
    return _load(db, expense_id)


@router.put("/{expense_id}", response_model=ExpenseRead)
def update_expense(
    expense_id: int,
    payload: ExpenseUpdate,
    db: Session = Depends(get_db),
    _auth=Depends(require_auth),
):
    expense = _load(db, expense_id)
    try:
        return expense_service.update_expense(db, expense, payload.model_dump(exclude_unset=True))
    except SQLAlchemyError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.delete("/{expense_id}", status_code=204)
def delete_expense(expense_id: int, db: Session = Depends(get_db), _auth=Depends(require_auth)):
    expense_service.delete_expense(db, _load(db, expense_id))


__all__ = ["router"]
