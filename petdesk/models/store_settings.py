from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Integer, String

from petdesk.database.base import Base


class StoreSettings(Base):
    __tablename__ = "store_settings"

    id = Column(Integer, primary_key=True)
    bank_commission = Column(Float, nullable=False, default=1.5)

    nova_poshta_api_key = Column(String, nullable=False, default="")
    rozetka_api_key = Column(String, nullable=False, default="")
    prom_api_key = Column(String, nullable=False, default="")

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


__all__ = ["StoreSettings"]
