from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from petdesk.config import get_settings
from petdesk.core.constants import NON_REVENUE_ORDER_STATUSES, PENDING_ORDER_STATUSES
from petdesk.core.periods import bucket_series, resolve_period
from petdesk.core.pricing import cost_of_goods, order_profit
from petdesk.models.order import Order
from petdesk.models.receipt import WarehouseReceipt
from petdesk.services import copywriter_service
from petdesk.services.expense_service import expenses_in_window
from petdesk.services.order_service import purchase_prices
from petdesk.services.settings_service import get_bank_commission
from petdesk.services.settlement_service import accounts_payable


def _load_orders(db):
    stmt = select(Order).options(selectinload(Order.items))
    return list(db.execute(stmt).scalars().all())


def _load_receipts(db):
    return list(db.execute(select(WarehouseReceipt)).scalars().all())


def _net_profit(orders, prices, bank_commission):
    net_profit = 0.0
    for order in orders:
        if order.status in NON_REVENUE_ORDER_STATUSES:
            continue
        result = order_profit(
            order.total,
            cost_of_goods(order.items, prices),
            shipping_cost=order.shipping_cost,
            bank_commission=bank_commission,
        )
        net_profit += result["profit"]
    return net_profit


def _prices_for(db, orders):
    return purchase_prices(db, (item.product_id for order in orders for item in order.items))


def global_metrics(db: Session) -> dict:
    orders = _load_orders(db)
    receipts = _load_receipts(db)
    bank_commission = get_bank_commission(db)

    total_sales = sum(order.total for order in orders)
    total_orders = len(orders)
    return {
        "total_sales": total_sales,
        "total_orders": total_orders,
        "average_check": total_sales / total_orders if total_orders else 0.0,
        "pending_orders": sum(1 for order in orders if order.status in PENDING_ORDER_STATUSES),
        "net_profit": _net_profit(orders, _prices_for(db, orders), bank_commission),
        "accounts_payable": accounts_payable(receipts),
    }


def period_metrics(db: Session, period: str = "month", now: datetime | None = None) -> dict:
    """Metrics for one dashboard period, compared with the equal-length range before it.

    Orders are placed in the period by order date, receipts by payment due date.
    """
    window = resolve_period(period, now, week_start=get_settings().WEEK_START)
    orders = _load_orders(db)
    receipts = _load_receipts(db)
    bank_commission = get_bank_commission(db)

    current = [order for order in orders if window.contains(order.order_date)]
    previous = [order for order in orders if window.in_previous(order.order_date)]
    due = [receipt for receipt in receipts if window.contains(receipt.payment_due_date)]

    total_sales = sum(order.total for order in current)
    previous_sales = sum(order.total for order in previous)
    change = None
    if window.bounded and previous_sales > 0:
        change = (total_sales - previous_sales) / previous_sales * 100

    chart = bucket_series(((order.order_date, order.total) for order in orders), window)

    return {
        "period": window.period,
        "start": window.start,
        "end": window.end,
        "previous_start": window.previous_start,
        "previous_end": window.previous_end,
        "granularity": window.granularity,
        "total_sales": total_sales,
        "total_orders": len(current),
        "net_profit": _net_profit(current, _prices_for(db, current), bank_commission),
        "accounts_payable": accounts_payable(due),
        "expenses": sum(expense.amount for expense in expenses_in_window(db, window)),
        "previous_sales": previous_sales,
        "previous_orders": len(previous),
        "sales_change_percent": change,
        "chart": chart,
    }


def build_sales_summary(metrics: dict) -> str:
    parts = [
        "Period: {}".format(metrics["period"]),
        "Revenue: {:.2f} UAH".format(metrics["total_sales"]),
        "Orders: {}".format(metrics["total_orders"]),
        "Estimated net profit: {:.2f} UAH".format(metrics["net_profit"]),
        "Supplier payments due: {:.2f} UAH".format(metrics["accounts_payable"]),
        "Expenses: {:.2f} UAH".format(metrics["expenses"]),
    ]
    if metrics.get("previous_start") is not None:
        parts.append(
            "Previous period revenue: {:.2f} UAH over {} orders".format(
                metrics["previous_sales"],
                metrics["previous_orders"],
            )
        )
    return "; ".join(parts)


def analyze_period(db: Session, period: str = "month", now: datetime | None = None) -> dict:
    metrics = period_metrics(db, period, now)
    summary = build_sales_summary(metrics)
    return {
        "period": metrics["period"],
        "summary": summary,
        "analysis": copywriter_service.analyze_sales_data(summary),
    }


__all__ = ["analyze_period", "build_sales_summary", "global_metrics", "period_metrics"]
