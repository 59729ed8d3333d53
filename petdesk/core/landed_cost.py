from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable


@dataclass(frozen=True)
class ReceiptLine:
    quantity: float
    supplier_unit_price: float


@dataclass(frozen=True)
class AllocatedLine:
    quantity: float
    supplier_unit_price: float
    supplier_total_cost: float
    allocated_extra: float
    landed_total_cost: float
    landed_unit_cost: float


@dataclass
class Allocation:
    lines: list[AllocatedLine] = field(default_factory=list)
    total_supplier_value: float = 0.0
    extra_costs: float = 0.0
    total_landed_value: float = 0.0


def _validate_line(index: int, line: ReceiptLine) -> None:
    if line.quantity is None or line.quantity <= 0:
        raise ValueError("line {}: quantity must be positive".format(index + 1))
    if line.supplier_unit_price is None or line.supplier_unit_price < 0:
        raise ValueError("line {}: supplier unit price must be non-negative".format(index + 1))


def allocate_landed_cost(lines: Iterable[ReceiptLine], extra_costs: float = 0.0) -> Allocation:
    """Spread ``extra_costs`` over receipt lines by their share of supplier value.

    A batch whose supplier value sums to zero gets no allocation at all, so
    every line keeps its supplier cost as landed cost.
    """
    lines = list(lines)
    extra = float(extra_costs or 0.0)
    if extra < 0:
        raise ValueError("extra costs must be non-negative")
    for index, line in enumerate(lines):
        _validate_line(index, line)

    total_supplier = sum(line.quantity * line.supplier_unit_price for line in lines)

    allocated = []
    for line in lines:
        line_total = line.quantity * line.supplier_unit_price
        allocated_extra = extra * (line_total / total_supplier) if total_supplier > 0 else 0.0
        landed_total = line_total + allocated_extra
        allocated.append(
            AllocatedLine(
                quantity=line.quantity,
                supplier_unit_price=line.supplier_unit_price,
                supplier_total_cost=line_total,
                allocated_extra=allocated_extra,
                landed_total_cost=landed_total,
                landed_unit_cost=landed_total / line.quantity,
            )
        )

    return Allocation(
        lines=allocated,
        total_supplier_value=total_supplier,
        extra_costs=extra,
        total_landed_value=sum(item.landed_total_cost for item in allocated),
    )


__all__ = ["AllocatedLine", "Allocation", "ReceiptLine", "allocate_landed_cost"]
