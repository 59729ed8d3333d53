import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from petdesk.core.errors import NotFoundError
from petdesk.models.receipt import WarehouseReceipt

logger = logging.getLogger(__name__)


def is_overdue(receipt: WarehouseReceipt, today: date | None = None) -> bool:
    today = today or date.today()
    return not receipt.is_paid and receipt.payment_due_date < today


def serialize_receipt(receipt: WarehouseReceipt, today: date | None = None) -> dict:
    return {
        "id": receipt.id,
        "supplier_id": receipt.supplier_id,
        "supplier_name": receipt.supplier_name,
        "receipt_date": receipt.receipt_date,
        "payment_due_date": receipt.payment_due_date,
        "total_amount": receipt.total_amount,
        "extra_costs": receipt.extra_costs,
        "is_paid": receipt.is_paid,
        "items_count": receipt.items_count,
        "is_overdue": is_overdue(receipt, today),
        "items": list(receipt.items),
    }


def list_receipts(db: Session, status: str = "unpaid") -> list[WarehouseReceipt]:
    stmt = select(WarehouseReceipt)
    if status == "unpaid":
        stmt = stmt.where(WarehouseReceipt.is_paid.is_(False))
    elif status == "paid":
        stmt = stmt.where(WarehouseReceipt.is_paid.is_(True))
    elif status != "all":
        raise ValueError("Unknown settlement filter: {}".format(status))
    stmt = stmt.order_by(WarehouseReceipt.payment_due_date, WarehouseReceipt.id)
    return list(db.execute(stmt).scalars().all())


def get_receipt(db: Session, receipt_id: int) -> WarehouseReceipt:
    receipt = db.get(WarehouseReceipt, receipt_id)
    if receipt is None:
        raise NotFoundError("Receipt", receipt_id)
    return receipt


def mark_paid(db: Session, receipt: WarehouseReceipt) -> WarehouseReceipt:
    if not receipt.is_paid:
        receipt.is_paid = True
        db.commit()
        db.refresh(receipt)
        logger.info("Receipt %s marked paid (%.2f)", receipt.id, receipt.total_amount)
    return receipt


def delete_receipt(db: Session, receipt: WarehouseReceipt) -> None:
    db.delete(receipt)
    db.commit()
    logger.warning("Receipt %s deleted; supplier %s settlement history changed", receipt.id, receipt.supplier_name)


def accounts_payable(receipts) -> float:
    return sum(receipt.total_amount for receipt in receipts if not receipt.is_paid)


def supplier_balances(db: Session, today: date | None = None) -> list[dict]:
    today = today or date.today()
    balances = {}
    for receipt in list_receipts(db, "all"):
        key = (receipt.supplier_id, receipt.supplier_name)
        entry = balances.setdefault(
            key,
            {
                "supplier_id": receipt.supplier_id,
                "supplier_name": receipt.supplier_name,
                "outstanding": 0.0,
                "overdue": 0.0,
                "paid": 0.0,
                "unpaid_receipts": 0,
                "paid_receipts": 0,
            },
        )
        if receipt.is_paid:
            entry["paid"] += receipt.total_amount
            entry["paid_receipts"] += 1
            continue
        entry["outstanding"] += receipt.total_amount
        entry["unpaid_receipts"] += 1
        if is_overdue(receipt, today):
            entry["overdue"] += receipt.total_amount
    return sorted(balances.values(), key=lambda entry: (-entry["outstanding"], entry["supplier_name"]))


__all__ = [
    "accounts_payable",
    "delete_receipt",
    "get_receipt",
    "is_overdue",
    "list_receipts",
    "mark_paid",
    "serialize_receipt",
    "supplier_balances",
]
