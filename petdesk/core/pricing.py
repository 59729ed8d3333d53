from __future__ import annotations

from typing import Iterable, Mapping, Optional


def markup_percent(price, purchase_price) -> float:
    price = float(price or 0.0)
    purchase_price = float(purchase_price or 0.0)
    if purchase_price <= 0:
        return 0.0
    return (price - purchase_price) / purchase_price * 100


def price_from_markup(purchase_price, markup) -> float:
    purchase_price = float(purchase_price or 0.0)
    if purchase_price <= 0:
        raise ValueError("purchase price must be positive to derive a price from markup")
    return round(purchase_price * (1 + float(markup or 0.0) / 100), 2)


def effective_price(price, promotional_price=None) -> float:
    if promotional_price is not None and promotional_price > 0:
        return float(promotional_price)
    return float(price or 0.0)


def line_total(price, quantity, discount=None) -> float:
    return (float(price or 0.0) - float(discount or 0.0)) * float(quantity or 0)


def order_total(items: Iterable) -> float:
    total = 0.0
    for item in items:
        total += line_total(_get(item, "price"), _get(item, "quantity"), _get(item, "discount"))
    return total


def cost_of_goods(items: Iterable, purchase_prices: Mapping[int, float]) -> float:
    cogs = 0.0
    for item in items:
        cost = purchase_prices.get(_get(item, "product_id")) or 0.0
        cogs += float(cost) * float(_get(item, "quantity") or 0)
    return cogs


def order_profit(
    total,
    cogs,
    *,
    shipping_cost: Optional[float] = None,
    bank_commission: float = 0.0,
) -> dict:
    revenue = float(total or 0.0)
    shipping = float(shipping_cost or 0.0)
    bank_fee = revenue * (float(bank_commission or 0.0) / 100)
    profit = revenue - float(cogs or 0.0) - shipping - bank_fee
    margin = profit / revenue * 100 if revenue > 0 else 0.0
    return {
        "revenue": revenue,
        "cost_of_goods": float(cogs or 0.0),
        "shipping_cost": shipping,
        "bank_fee": bank_fee,
        "profit": profit,
        "margin_percent": margin,
    }


def _get(item, name):
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


__all__ = [
    "cost_of_goods",
    "effective_price",
    "line_total",
    "markup_percent",
    "order_profit",
    "order_total",
    "price_from_markup",
]
