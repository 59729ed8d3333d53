import logging
import random
from datetime import datetime

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from petdesk.core.constants import SHIPPING_QUOTE_MAX, SHIPPING_QUOTE_MIN
from petdesk.core.errors import NotFoundError
from petdesk.core.pricing import cost_of_goods, order_profit, order_total
from petdesk.database.base import writable_values
from petdesk.models.order import Order, OrderItem
from petdesk.models.product import Product
from petdesk.services import copywriter_service
from petdesk.services.product_service import get_product, product_name
from petdesk.services.settings_service import get_bank_commission

logger = logging.getLogger(__name__)

_HEADER_FIELDS = (
    "source",
    "source_order_number",
    "customer_name",
    "customer_phone",
    "shipping_address",
    "delivery_city",
    "delivery_service",
    "delivery_warehouse",
    "shipping_cost",
    "ttn",
    "status",
    "payment_status",
    "payment_method",
    "order_date",
)


def generate_order_number(now: datetime | None = None) -> str:
    now = now or datetime.now()
    return "ORD-{}-{:03d}".format(now.strftime("%Y%m%d"), random.randint(0, 999))


def generate_ttn(delivery_service: str | None) -> str:
    prefix = "ROZ" if delivery_service == "rozetka_delivery" else "20"
    return prefix + str(random.randint(0, 99_999_999_999))


def list_orders(db: Session, status=None, source=None, query=None) -> list[Order]:
    stmt = select(Order)
    if status:
        stmt = stmt.where(Order.status == status)
    if source:
        stmt = stmt.where(Order.source == source)
    query = (query or "").strip()
    if query:
        pattern = "%{}%".format(query.lower())
        stmt = stmt.where(
            or_(
                func.lower(Order.order_number).like(pattern),
                func.lower(Order.customer_name).like(pattern),
                func.lower(Order.source_order_number).like(pattern),
                Order.customer_phone.like("%{}%".format(query)),
                Order.ttn.like("%{}%".format(query)),
            )
        )
    return list(db.execute(stmt.order_by(Order.order_date.desc(), Order.id.desc())).scalars().all())


def get_order(db: Session, order_id: int) -> Order:
    order = db.get(Order, order_id)
    if order is None:
        raise NotFoundError("Order", order_id)
    return order


def _unique_order_number(db: Session, now: datetime) -> str:
    for _ in range(20):
        number = generate_order_number(now)
        exists = db.execute(select(Order.id).where(Order.order_number == number)).first()
        if exists is None:
            return number
    raise RuntimeError("Could not allocate a free order number for {}".format(now.date()))


def create_order(db: Session, now: datetime | None = None) -> Order:
    now = now or datetime.now()
    order = Order(
        order_number=_unique_order_number(db, now),
        source="manual",
        customer_name="",
        status="new",
        payment_status="not_paid",
        payment_method="on_receipt",
        order_date=now,
        total=0.0,
    )
    db.add(order)
    db.commit()
    db.refresh(order)
    logger.info("Order %s created", order.order_number)
    return order


def recalculate_total(order: Order) -> float:
    order.total = order_total(order.items)
    return order.total


def _renumber(order: Order) -> None:
    for position, item in enumerate(order.items):
        item.position = position


def update_order(db: Session, order: Order, values: dict) -> Order:
    values = writable_values(Order, values)
    items = values.pop("items", None)
    for key, value in values.items():
        if key in _HEADER_FIELDS:
            setattr(order, key, value)
    if items is not None:
        order.items = [
            OrderItem(
                position=position,
                product_id=item["product_id"],
                product_name=item.get("product_name") or "",
                quantity=item["quantity"],
                price=item["price"],
                discount=item.get("discount") or 0.0,
            )
            for position, item in enumerate(items)
        ]
    recalculate_total(order)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(order)
    return order


def add_item(db: Session, order: Order, product_id: int, language: str = "uk") -> Order:
    product = get_product(db, product_id)
    order.items.append(
        OrderItem(
            position=len(order.items),
            product_id=product.id,
            product_name=product_name(product, language),
            price=product.price,
            quantity=1,
            discount=0.0,
        )
    )
    recalculate_total(order)
    db.commit()
    db.refresh(order)
    return order


def _item_at(order: Order, index: int) -> OrderItem:
    if index < 0 or index >= len(order.items):
        raise NotFoundError("Order item", index)
    return order.items[index]


def update_item(db: Session, order: Order, index: int, values: dict) -> Order:
    item = _item_at(order, index)
    for key in ("quantity", "price", "discount"):
        if values.get(key) is not None:
            setattr(item, key, values[key])
    recalculate_total(order)
    db.commit()
    db.refresh(order)
    return order


def remove_item(db: Session, order: Order, index: int) -> Order:
    item = _item_at(order, index)
    order.items.remove(item)
    _renumber(order)
    recalculate_total(order)
    db.commit()
    db.refresh(order)
    return order


def delete_order(db: Session, order: Order) -> None:
    db.delete(order)
    db.commit()
    logger.info("Order %s deleted", order.order_number)


def assign_ttn(db: Session, order: Order) -> Order:
    order.ttn = generate_ttn(order.delivery_service)
    order.status = "processing"
    db.commit()
    db.refresh(order)
    logger.info("TTN %s issued for order %s", order.ttn, order.order_number)
    return order


def quote_shipping_cost(db: Session, order: Order) -> Order:
    """Look up the carrier charge for the order's waybill and store it as shipping cost.

    The carrier lookup is simulated with a random charge in the carrier's usual range.
    """
    if not order.ttn:
        raise ValueError("Order has no TTN; generate or enter one first.")
    order.shipping_cost = float(random.randint(SHIPPING_QUOTE_MIN, SHIPPING_QUOTE_MAX))
    db.commit()
    db.refresh(order)
    return order


def purchase_prices(db: Session, product_ids) -> dict:
    product_ids = {product_id for product_id in product_ids if product_id is not None}
    if not product_ids:
        return {}
    rows = db.execute(
        select(Product.id, Product.purchase_price).where(Product.id.in_(product_ids))
    ).all()
    return {row.id: row.purchase_price for row in rows}


def calculate_order_profit(db: Session, order: Order, bank_commission: float | None = None) -> dict:
    if bank_commission is None:
        bank_commission = get_bank_commission(db)
    prices = purchase_prices(db, (item.product_id for item in order.items))
    result = order_profit(
        order.total,
        cost_of_goods(order.items, prices),
        shipping_cost=order.shipping_cost,
        bank_commission=bank_commission,
    )
    result["order_id"] = order.id
    return result


def packaging_advice(order: Order, language: str) -> str:
    items = [{"quantity": item.quantity, "product_name": item.product_name} for item in order.items]
    return copywriter_service.get_shipping_advice(items, language)


__all__ = [
    "add_item",
    "assign_ttn",
    "calculate_order_profit",
    "create_order",
    "delete_order",
    "generate_order_number",
    "generate_ttn",
    "get_order",
    "list_orders",
    "packaging_advice",
    "purchase_prices",
    "quote_shipping_cost",
    "recalculate_total",
    "remove_item",
    "update_item",
    "update_order",
]
