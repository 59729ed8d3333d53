import logging

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from petdesk.core.constants import PRODUCT_SEARCH_LIMIT
from petdesk.core.errors import NotFoundError
from petdesk.core.pricing import effective_price, markup_percent, price_from_markup
from petdesk.database.base import writable_values
from petdesk.models.product import Product
from petdesk.services import copywriter_service

logger = logging.getLogger(__name__)

_PRODUCT_FIELDS = (
    "sku",
    "barcode",
    "name_ru",
    "name_uk",
    "description_ru",
    "description_uk",
    "price",
    "purchase_price",
    "promotional_price",
    "stock",
    "category",
    "image_url",
)


def product_name(product: Product, language: str = "uk") -> str:
    if language == "ru":
        return product.name_ru or product.name_uk
    return product.name_uk or product.name_ru


def serialize_product(product: Product) -> dict:
    data = {field: getattr(product, field) for field in _PRODUCT_FIELDS}
    data["id"] = product.id
    data["created_at"] = product.created_at
    data["markup_percent"] = round(markup_percent(product.price, product.purchase_price), 2)
    data["effective_price"] = effective_price(product.price, product.promotional_price)
    return data


def _search_clause(query: str):
    pattern = "%{}%".format(query.lower())
    return or_(
        func.lower(Product.name_ru).like(pattern),
        func.lower(Product.name_uk).like(pattern),
        func.lower(Product.sku).like(pattern),
        Product.barcode.like("%{}%".format(query)),
    )


def list_products(db: Session, query: str | None = None, category: str | None = None) -> list[Product]:
    stmt = select(Product)
    query = (query or "").strip()
    if query:
        stmt = stmt.where(_search_clause(query))
    if category and category != "all":
        stmt = stmt.where(Product.category == category)
    return list(db.execute(stmt.order_by(Product.id.desc())).scalars().all())


def search_products(db: Session, query: str | None, limit: int = PRODUCT_SEARCH_LIMIT) -> list[Product]:
    query = (query or "").strip()
    if not query:
        return []
    stmt = select(Product).where(_search_clause(query)).order_by(Product.name_uk).limit(limit)
    return list(db.execute(stmt).scalars().all())


def list_categories(db: Session) -> list[str]:
    rows = db.execute(
        select(Product.category).where(Product.category != "").distinct().order_by(Product.category)
    ).scalars()
    return list(rows)


def get_product(db: Session, product_id: int) -> Product:
    product = db.get(Product, product_id)
    if product is None:
        raise NotFoundError("Product", product_id)
    return product


def find_by_sku(db: Session, sku: str) -> Product | None:
    return db.execute(select(Product).where(Product.sku == sku)).scalars().first()


def _ensure_unique_sku(db: Session, sku: str, product_id: int | None = None) -> None:
    existing = find_by_sku(db, sku)
    if existing is not None and existing.id != product_id:
        raise ValueError("SKU {} is already used by product {}.".format(sku, existing.id))


def create_product(db: Session, values: dict) -> Product:
    _ensure_unique_sku(db, values["sku"])
    product = Product(**values)
    db.add(product)
    db.commit()
    db.refresh(product)
    logger.info("Product %s created (sku=%s)", product.id, product.sku)
    return product


def update_product(db: Session, product: Product, values: dict) -> Product:
    values = writable_values(Product, values)
    if "sku" in values:
        _ensure_unique_sku(db, values["sku"], product.id)
    for key, value in values.items():
        if key in _PRODUCT_FIELDS:
            setattr(product, key, value)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(product)
    return product


def delete_product(db: Session, product: Product) -> None:
    db.delete(product)
    db.commit()
    logger.info("Product %s deleted", product.id)


def calculate_markup(purchase_price, price=None, markup=None) -> dict:
    """Resolve price and markup from whichever of the two is given.

    A markup wins over a price when both are supplied.
    """
    if markup is not None:
        price = price_from_markup(purchase_price, markup)
    elif price is None:
        raise ValueError("Provide either price or markup_percent.")
    return {
        "purchase_price": float(purchase_price),
        "price": float(price),
        "markup_percent": round(markup_percent(price, purchase_price), 2),
    }


def generate_description(db: Session, product: Product, language: str, *, save: bool = False) -> str:
    """Generate copy for ``product``; only real generated text is ever saved."""
    description = copywriter_service.draft_product_description(
        product_name(product, language),
        product.category,
        language,
    )
    if description is None:
        return copywriter_service.DESCRIPTION_FAILED
    if not description:
        return copywriter_service.DESCRIPTION_EMPTY
    if save:
        setattr(product, "description_{}".format(language), description)
        db.commit()
    return description


__all__ = [
    "calculate_markup",
    "create_product",
    "delete_product",
    "find_by_sku",
    "generate_description",
    "get_product",
    "list_categories",
    "list_products",
    "product_name",
    "search_products",
    "serialize_product",
    "update_product",
]
