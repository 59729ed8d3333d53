from sqlalchemy import Column, ForeignKey, Integer, String

from petdesk.database.base import Base


class Supplier(Base):
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    contact_person = Column(String, nullable=False, default="")
    phone = Column(String, nullable=False, default="")


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False, default="")
    email = Column(String)
    city = Column(String)
    note = Column(String)


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name_ru = Column(String, nullable=False)
    name_uk = Column(String, nullable=False, default="")
    parent_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"))


__all__ = ["Category", "Customer", "Supplier"]
