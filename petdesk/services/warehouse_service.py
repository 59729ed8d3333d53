import logging
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from petdesk.core.errors import NotFoundError
from petdesk.core.landed_cost import ReceiptLine, allocate_landed_cost
from petdesk.models.directory import Supplier
from petdesk.models.receipt import ReceiptItem, WarehouseReceipt
from petdesk.services.product_service import get_product, list_products, product_name

logger = logging.getLogger(__name__)


def list_stock(db: Session, query=None, category=None):
    return list_products(db, query=query, category=category)


def _load_products(db: Session, items):
    products = {}
    for item in items:
        product_id = item["product_id"]
        if product_id not in products:
            products[product_id] = get_product(db, product_id)
    return products


def build_preview(db: Session, items, extra_costs=0.0, language="uk") -> dict:
    """Allocate ``extra_costs`` over the draft lines without touching stock."""
    products = _load_products(db, items)
    allocation = allocate_landed_cost(
        [ReceiptLine(item["quantity"], item["supplier_unit_price"]) for item in items],
        extra_costs,
    )
    rows = []
    for item, line in zip(items, allocation.lines):
        rows.append(
            {
                "product_id": item["product_id"],
                "product_name": product_name(products[item["product_id"]], language),
                "quantity": item["quantity"],
                "supplier_unit_price": line.supplier_unit_price,
                "supplier_total_cost": line.supplier_total_cost,
                "allocated_extra": line.allocated_extra,
                "landed_unit_cost": line.landed_unit_cost,
                "landed_total_cost": line.landed_total_cost,
            }
        )
    return {
        "items": rows,
        "total_supplier_value": allocation.total_supplier_value,
        "extra_costs": allocation.extra_costs,
        "total_landed_value": allocation.total_landed_value,
    }


def finalize_receipt(
    db: Session,
    items,
    *,
    extra_costs=0.0,
    supplier_id=None,
    payment_due_date=None,
    today=None,
    language="uk",
) -> dict:
    """Receive a batch into stock at landed cost.

    Every product gains the received quantity and takes the landed unit cost
    (rounded to cents) as its new purchase price. A settlement record is only
    written when the batch names a supplier.
    """
    today = today or date.today()
    supplier = None
    if supplier_id is not None:
        supplier = db.get(Supplier, supplier_id)
        if supplier is None:
            raise NotFoundError("Supplier", supplier_id)

    preview = build_preview(db, items, extra_costs, language=language)
    receipt = None
    try:
        for row in preview["items"]:
            product = get_product(db, row["product_id"])
            product.stock = (product.stock or 0) + row["quantity"]
            product.purchase_price = round(row["landed_unit_cost"], 2)

        if supplier is not None:
            receipt = WarehouseReceipt(
                supplier_id=supplier.id,
                supplier_name=supplier.name,
                receipt_date=today,
                payment_due_date=payment_due_date or today,
                total_amount=preview["total_supplier_value"],
                extra_costs=preview["extra_costs"],
                is_paid=False,
                items_count=sum(row["quantity"] for row in preview["items"]),
                items=[ReceiptItem(**row) for row in preview["items"]],
            )
            db.add(receipt)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    if receipt is not None:
        db.refresh(receipt)
        logger.info(
            "Receipt %s from %s recorded: %.2f due %s",
            receipt.id,
            receipt.supplier_name,
            receipt.total_amount,
            receipt.payment_due_date,
        )
    else:
        logger.info("Stock received without supplier: %d lines", len(preview["items"]))

    return {"preview": preview, "receipt": receipt, "updated_products": len(preview["items"])}


__all__ = ["build_preview", "finalize_receipt", "list_stock"]
