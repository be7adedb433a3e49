"""Reconcile one or more tenders against an invoice's due amount.

Each entry's ``paid_amount`` is the gross amount the customer handed over
with that method. Entries are applied in order against whatever is still
due, so a card surcharge is only ever computed on the portion of the
invoice that card actually covers.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

import structlog

from ..catalog.loader import DEFAULT_PAYMENT_METHODS, PaymentMethod, SurchargeKind
from ..catalog.lookup import find_method_by_id
from ..currency import as_fraction, round_half_up
from ..models import PaymentEntry, SettlementEntry, SettlementResult

log = structlog.get_logger(__name__)


def settle_payments(
    due: int,
    entries: Iterable[PaymentEntry],
    methods: Sequence[PaymentMethod] = DEFAULT_PAYMENT_METHODS,
) -> SettlementResult:
    remaining = due
    per_entry: list[SettlementEntry] = []

    for entry in entries:
        method = find_method_by_id(entry.method_id, methods)
        if method is None:
            log.debug("payment_method_unresolved", method_id=entry.method_id)
        paid = entry.paid_amount
        applied, surcharge = _allocate(paid, remaining, method)
        remaining = max(0, remaining - applied)

        per_entry.append(
            SettlementEntry(
                method_id=entry.method_id,
                method_label=method.label if method else entry.method_id,
                paid_amount=paid,
                applied_due=applied,
                surcharge=surcharge,
                gross_expected=applied + surcharge,
            )
        )

    total_paid = sum(e.paid_amount for e in per_entry)
    return SettlementResult(
        due=due,
        total_paid=total_paid,
        change=max(0, total_paid - due),
        remaining_due=max(0, due - total_paid),
        per_entry=per_entry,
    )


def _allocate(paid: int, remaining: int, method: PaymentMethod | None) -> tuple[int, int]:
    """Split a gross tender into the due portion it covers and its surcharge."""
    if method is None or method.surcharge is None:
        return max(0, min(remaining, paid)), 0

    rule = method.surcharge
    if rule.kind == SurchargeKind.FIXED:
        fee = max(0, round_half_up(rule.value))
        applied = max(0, min(remaining, max(0, paid - fee)))
        return applied, fee if applied > 0 else 0

    # gross = applied * (1 + pct/100), solved exactly for applied
    pct = max(as_fraction(rule.value), 0)
    possible = math.floor(as_fraction(paid) * 100 / (100 + pct))
    applied = max(0, min(remaining, possible))
    return applied, round_half_up(applied * pct / 100)
