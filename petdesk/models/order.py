from datetime import datetime

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from petdesk.database.base import Base


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    order_number = Column(String, nullable=False, unique=True)
    source = Column(String, nullable=False, default="manual")
    source_order_number = Column(String)

    customer_name = Column(String, nullable=False, default="")
    customer_phone = Column(String)
    shipping_address = Column(String)
    delivery_city = Column(String)
    delivery_service = Column(String)
    delivery_warehouse = Column(String)
    shipping_cost = Column(Float)
    ttn = Column(String)

    total = Column(Float, nullable=False, default=0)
    status = Column(String, nullable=False, default="new")
    payment_status = Column(String, nullable=False, default="not_paid")
    payment_method = Column(String, nullable=False, default="on_receipt")
    order_date = Column(DateTime, nullable=False, default=datetime.now)

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
    )

    __table_args__ = (
        Index("idx_orders_date", "order_date"),
        Index("idx_orders_status", "status"),
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    product_id = Column(Integer, nullable=False)
    product_name = Column(String, nullable=False, default="")
    quantity = Column(Integer, nullable=False, default=1)
    price = Column(Float, nullable=False, default=0)
    discount = Column(Float, nullable=False, default=0)

    order = relationship("Order", back_populates="items")


__all__ = ["Order", "OrderItem"]
