from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from petdesk.core.errors import NotFoundError
from petdesk.core.periods import PeriodWindow
from petdesk.database.base import writable_values
from petdesk.models.expense import Expense


def list_expenses(db: Session, category=None) -> list[Expense]:
    stmt = select(Expense)
    if category:
        stmt = stmt.where(Expense.category == category)
    return list(db.execute(stmt.order_by(Expense.expense_date.desc(), Expense.id.desc())).scalars().all())


def get_expense(db: Session, expense_id: int) -> Expense:
    expense = db.get(Expense, expense_id)
    if expense is None:
        raise NotFoundError("Expense", expense_id)
    return expense


def create_expense(db: Session, values: dict) -> Expense:
    if values.get("expense_date") is None:
        values["expense_date"] = date.today()
    expense = Expense(**values)
    db.add(expense)
    db.commit()
    db.refresh(expense)
    return expense


def update_expense(db: Session, expense: Expense, values: dict) -> Expense:
    for key, value in writable_values(Expense, values).items():
        setattr(expense, key, value)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(expense)
    return expense


def delete_expense(db: Session, expense: Expense) -> None:
    db.delete(expense)
    db.commit()


def expenses_in_window(db: Session, window: PeriodWindow) -> list[Expense]:
    return [expense for expense in list_expenses(db) if window.contains(expense.expense_date)]


def summarize_expenses(db: Session, window: PeriodWindow) -> dict:
    by_category = {}
    for expense in expenses_in_window(db, window):
        by_category[expense.category] = by_category.get(expense.category, 0.0) + expense.amount
    return {
        "period": window.period,
        "total": sum(by_category.values()),
        "by_category": dict(sorted(by_category.items())),
    }


__all__ = [
    "create_expense",
    "delete_expense",
    "expenses_in_window",
    "get_expense",
    "list_expenses",
    "summarize_expenses",
    "update_expense",
]
