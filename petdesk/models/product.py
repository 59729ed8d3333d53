from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Index, Integer, String, Text

from petdesk.database.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    sku = Column(String, nullable=False, unique=True)
    barcode = Column(String)

    name_ru = Column(String, nullable=False)
    name_uk = Column(String, nullable=False, default="")
    description_ru = Column(Text, nullable=False, default="")
    description_uk = Column(Text, nullable=False, default="")

    price = Column(Float, nullable=False, default=0)
    purchase_price = Column(Float, nullable=False, default=0)
    promotional_price = Column(Float)
    stock = Column(Integer, nullable=False, default=0)

    category = Column(String, nullable=False, default="")
    image_url = Column(String)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_products_barcode", "barcode"),
        Index("idx_products_category", "category"),
    )


__all__ = ["Product"]
