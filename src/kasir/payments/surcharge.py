from __future__ import annotations

from ..catalog.loader import PaymentMethod, SurchargeKind
from ..currency import as_fraction, round_half_up
from ..models import PaymentQuote


def apply_surcharge(amount: int, method: PaymentMethod | None) -> tuple[int, int]:
    """Return ``(gross, surcharge)`` for a due amount paid with ``method``.

    Negative catalog fees count as no fee, the same as in settlement.
    """
    if method is None or method.surcharge is None:
        return amount, 0

    rule = method.surcharge
    if rule.kind == SurchargeKind.PERCENT:
        surcharge = round_half_up(amount * max(as_fraction(rule.value), 0) / 100)
    else:
        surcharge = max(0, round_half_up(rule.value))
    return amount + surcharge, surcharge


def quote_payment(due: int, method: PaymentMethod | None) -> PaymentQuote:
    gross, surcharge = apply_surcharge(due, method)
    return PaymentQuote(
        due=due,
        surcharge=surcharge,
        gross=gross,
        method_id=method.id if method else "unknown",
        method_label=method.label if method else "Unknown",
    )
