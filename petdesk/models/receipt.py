from datetime import date

from sqlalchemy import Boolean, Column, Date, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from petdesk.database.base import Base


class WarehouseReceipt(Base):
    __tablename__ = "warehouse_receipts"

    id = Column(Integer, primary_key=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id", ondelete="SET NULL"))
    supplier_name = Column(String, nullable=False, default="Unknown")

    receipt_date = Column(Date, nullable=False, default=date.today)
    payment_due_date = Column(Date, nullable=False, default=date.today)

    total_amount = Column(Float, nullable=False, default=0)
    extra_costs = Column(Float, nullable=False, default=0)
    is_paid = Column(Boolean, nullable=False, default=False)
    items_count = Column(Integer, nullable=False, default=0)

    items = relationship(
        "ReceiptItem",
        back_populates="receipt",
        cascade="all, delete-orphan",
        order_by="ReceiptItem.id",
    )

    __table_args__ = (
        Index("idx_receipts_due", "is_paid", "payment_due_date"),
        Index("idx_receipts_supplier", "supplier_id"),
    )


class ReceiptItem(Base):
    __tablename__ = "receipt_items"

    id = Column(Integer, primary_key=True)
    receipt_id = Column(
        Integer,
        ForeignKey("warehouse_receipts.id", ondelete="CASCADE"),
        nullable=False,
    )

    product_id = Column(Integer, nullable=False)
    product_name = Column(String, nullable=False, default="")
    quantity = Column(Integer, nullable=False)
    supplier_unit_price = Column(Float, nullable=False)
    supplier_total_cost = Column(Float, nullable=False)
    allocated_extra = Column(Float, nullable=False, default=0)
    landed_unit_cost = Column(Float, nullable=False)
    landed_total_cost = Column(Float, nullable=False)

    receipt = relationship("WarehouseReceipt", back_populates="items")


__all__ = ["ReceiptItem", "WarehouseReceipt"]
