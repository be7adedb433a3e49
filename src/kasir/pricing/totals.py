from __future__ import annotations

from collections.abc import Iterable

from ..currency import format_idr
from ..models import InvoiceLine, PricedLine, TotalsSummary


def line_total(line: InvoiceLine | PricedLine) -> int:
    return line.quantity * line.unit_price


def compute_totals(
    lines: Iterable[InvoiceLine | PricedLine],
    *,
    formatted: bool = False,
    prefix: str | None = None,
) -> TotalsSummary:
    """Fold lines into counts and an amount.

    ``unit_price`` is taken as already adjusted for promotions, so pass
    priced lines when promotions apply.
    """
    distinct = 0
    total_quantity = 0
    total_amount = 0
    for line in lines:
        distinct += 1
        total_quantity += line.quantity
        total_amount += line_total(line)

    return TotalsSummary(
        distinct_line_count=distinct,
        total_quantity=total_quantity,
        total_amount=total_amount,
        formatted_total=format_idr(total_amount, prefix=prefix) if formatted else None,
    )
