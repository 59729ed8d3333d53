import logging
from datetime import date, datetime, time, timedelta

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from petdesk.core.constants import DEFAULT_PRODUCT_IMAGE
from petdesk.core.landed_cost import ReceiptLine, allocate_landed_cost
from petdesk.core.pricing import order_total
from petdesk.models.directory import Category, Customer, Supplier
from petdesk.models.expense import Expense
from petdesk.models.order import Order, OrderItem
from petdesk.models.product import Product
from petdesk.models.receipt import ReceiptItem, WarehouseReceipt
from petdesk.models.store_settings import StoreSettings

logger = logging.getLogger(__name__)

MOCK_SUPPLIERS = (
    {"id": 1, "name": "ZooTrade LLC", "contact_person": "Olena Kovalenko", "phone": "+380501112233"},
    {"id": 2, "name": "PetFood Import", "contact_person": "Andrii Melnyk", "phone": "+380672223344"},
)

MOCK_CUSTOMERS = (
    {"id": 1, "name": "Iryna Shevchenko", "phone": "+380931234567", "email": "iryna@example.com", "city": "Kyiv"},
    {"id": 2, "name": "Taras Bondarenko", "phone": "+380661234567", "city": "Lviv", "note": "Prefers Nova Poshta"},
)

MOCK_CATEGORIES = (
    {"id": 1, "name_ru": "Собаки", "name_uk": "Собаки", "parent_id": None},
    {"id": 2, "name_ru": "Корм", "name_uk": "Корм", "parent_id": 1},
    {"id": 3, "name_ru": "Аксессуары", "name_uk": "Аксесуари", "parent_id": 1},
    {"id": 4, "name_ru": "Кошки", "name_uk": "Коти", "parent_id": None},
)

MOCK_PRODUCTS = (
    {
        "id": 1,
        "sku": "DOG-FOOD-001",
        "barcode": "4820000000011",
        "name_ru": "Корм для собак Премиум 10кг",
        "name_uk": "Корм для собак Преміум 10кг",
        "price": 1200.0,
        "purchase_price": 850.0,
        "stock": 24,
        "category": "Food",
    },
    {
        "id": 2,
        "sku": "DOG-LEASH-002",
        "barcode": "4820000000028",
        "name_ru": "Поводок-рулетка 5м",
        "name_uk": "Повідець-рулетка 5м",
        "price": 450.0,
        "purchase_price": 260.0,
        "promotional_price": 399.0,
        "stock": 15,
        "category": "Accessories",
    },
    {
        "id": 3,
        "sku": "CAT-TOY-003",
        "barcode": "4820000000035",
        "name_ru": "Игрушка для кошек Мышка",
        "name_uk": "Іграшка для котів Мишка",
        "price": 120.0,
        "purchase_price": 55.0,
        "stock": 60,
        "category": "Toys",
    },
    {
        "id": 4,
        "sku": "DOG-BED-004",
        "name_ru": "Лежак для собак M",
        "name_uk": "Лежак для собак M",
        "price": 980.0,
        "purchase_price": 610.0,
        "stock": 6,
        "category": "Accessories",
    },
)


def _mock_orders(now: datetime):
    today = now.date()
    return (
        {
            "order_number": "ORD-{}-101".format(today.strftime("%Y%m%d")),
            "source": "my_dog",
            "customer_name": "Iryna Shevchenko",
            "customer_phone": "+380931234567",
            "delivery_city": "Kyiv",
            "delivery_service": "nova_poshta",
            "delivery_warehouse": "Branch 12",
            "status": "new",
            "payment_status": "not_paid",
            "payment_method": "cod",
            "order_date": datetime.combine(today, time(10, 15)),
            "items": [(1, 1, 1200.0, 0.0), (3, 2, 120.0, 0.0)],
        },
        {
            "order_number": "ORD-{}-102".format((today - timedelta(days=1)).strftime("%Y%m%d")),
            "source": "rozetka",
            "source_order_number": "RZ-558812",
            "customer_name": "Taras Bondarenko",
            "customer_phone": "+380661234567",
            "delivery_city": "Lviv",
            "delivery_service": "rozetka_delivery",
            "ttn": "ROZ4815162342",
            "shipping_cost": 85.0,
            "status": "shipped",
            "payment_status": "paid",
            "payment_method": "card",
            "order_date": datetime.combine(today - timedelta(days=1), time(16, 40)),
            "items": [(2, 1, 450.0, 51.0)],
        },
        {
            "order_number": "ORD-{}-103".format((today - timedelta(days=9)).strftime("%Y%m%d")),
            "source": "prom",
            "customer_name": "Oksana Lysenko",
            "delivery_city": "Odesa",
            "delivery_service": "ukrposhta",
            "shipping_cost": 60.0,
            "status": "delivered",
            "payment_status": "paid",
            "payment_method": "iban",
            "order_date": datetime.combine(today - timedelta(days=9), time(12, 5)),
            "items": [(4, 1, 980.0, 0.0), (1, 2, 1200.0, 50.0)],
        },
        {
            "order_number": "ORD-{}-104".format((today - timedelta(days=3)).strftime("%Y%m%d")),
            "source": "manual",
            "customer_name": "Dmytro Savchuk",
            "status": "canceled",
            "payment_status": "not_paid",
            "payment_method": "cash",
            "order_date": datetime.combine(today - timedelta(days=3), time(9, 0)),
            "items": [(3, 5, 120.0, 0.0)],
        },
    )


def _mock_receipts(today: date):
    return (
        {
            "supplier_id": 1,
            "supplier_name": "ZooTrade LLC",
            "receipt_date": today - timedelta(days=20),
            "payment_due_date": today - timedelta(days=5),
            "extra_costs": 300.0,
            "is_paid": False,
            "items": [(2, 10, 240.0), (4, 5, 580.0)],
        },
        {
            "supplier_id": 2,
            "supplier_name": "PetFood Import",
            "receipt_date": today - timedelta(days=7),
            "payment_due_date": today + timedelta(days=7),
            "extra_costs": 0.0,
            "is_paid": False,
            "items": [(1, 20, 850.0)],
        },
        {
            "supplier_id": 1,
            "supplier_name": "ZooTrade LLC",
            "receipt_date": today - timedelta(days=40),
            "payment_due_date": today - timedelta(days=25),
            "extra_costs": 0.0,
            "is_paid": True,
            "items": [(3, 50, 55.0)],
        },
    )


def _mock_expenses(today: date):
    return (
        {"category": "Rent", "amount": 8000.0, "expense_date": today.replace(day=1), "description": "Warehouse rent"},
        {"category": "Advertising", "amount": 1500.0, "expense_date": today, "description": "Marketplace promotion"},
    )


def _receipt_items(lines, names, extra_costs):
    allocation = allocate_landed_cost([ReceiptLine(qty, price) for _, qty, price in lines], extra_costs)
    items = []
    for (product_id, _, _), line in zip(lines, allocation.lines):
        items.append(
            ReceiptItem(
                product_id=product_id,
                product_name=names[product_id],
                quantity=int(line.quantity),
                supplier_unit_price=line.supplier_unit_price,
                supplier_total_cost=line.supplier_total_cost,
                allocated_extra=line.allocated_extra,
                landed_unit_cost=line.landed_unit_cost,
                landed_total_cost=line.landed_total_cost,
            )
        )
    return items, allocation.total_supplier_value


def has_data(db: Session) -> bool:
    return db.execute(select(Product.id).limit(1)).first() is not None


def clear_data(db: Session) -> None:
    for model in (OrderItem, Order, ReceiptItem, WarehouseReceipt, Expense, Product, Customer, Category, Supplier, StoreSettings):
        db.execute(delete(model))
    db.commit()


def seed_mock_data(db: Session, *, now: datetime | None = None, bank_commission: float = 1.5) -> bool:
    """Fill an empty database with the demo catalog, orders and settlements.

    Returns False without touching anything when products already exist.
    """
    if has_data(db):
        logger.info("Seed skipped: products already exist.")
        return False

    now = now or datetime.now()
    today = now.date()

    db.add(StoreSettings(bank_commission=bank_commission))
    db.add_all(Supplier(**values) for values in MOCK_SUPPLIERS)
    db.add_all(Customer(**values) for values in MOCK_CUSTOMERS)
    db.add_all(Category(**values) for values in MOCK_CATEGORIES)
    db.flush()

    names = {}
    for values in MOCK_PRODUCTS:
        product = Product(description_ru="", description_uk="", image_url=DEFAULT_PRODUCT_IMAGE, **values)
        names[product.id] = product.name_uk
        db.add(product)
    db.flush()

    for values in _mock_orders(now):
        values = dict(values)
        lines = values.pop("items")
        items = [
            OrderItem(
                position=position,
                product_id=product_id,
                product_name=names[product_id],
                quantity=qty,
                price=price,
                discount=discount,
            )
            for position, (product_id, qty, price, discount) in enumerate(lines)
        ]
        db.add(Order(total=order_total(items), items=items, **values))

    for values in _mock_receipts(today):
        values = dict(values)
        lines = values.pop("items")
        items, total_amount = _receipt_items(lines, names, values["extra_costs"])
        db.add(
            WarehouseReceipt(
                total_amount=total_amount,
                items_count=sum(qty for _, qty, _ in lines),
                items=items,
                **values,
            )
        )

    db.add_all(Expense(**values) for values in _mock_expenses(today))
    db.commit()
    logger.info("Seed data created.")
    return True


__all__ = ["clear_data", "has_data", "seed_mock_data"]
