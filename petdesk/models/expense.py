from datetime import date

from sqlalchemy import Column, Date, Float, Index, Integer, String

from petdesk.database.base import Base


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    category = Column(String, nullable=False)
    amount = Column(Float, nullable=False)
    expense_date = Column(Date, nullable=False, default=date.today)
    description = Column(String, nullable=False, default="")

    __table_args__ = (
        Index("idx_expenses_date", "expense_date"),
    )


__all__ = ["Expense"]
