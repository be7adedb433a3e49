from __future__ import annotations

import random
from collections.abc import Sequence
from datetime import datetime

from ..catalog.loader import DEFAULT_PAYMENT_METHODS, PaymentMethod
from ..models import BulkPrintEntry, BulkPrintPlan
from .identifiers import generate_invoice_numbers
from .payments import DEFAULT_CASH_ROUNDING_STEP, generate_random_payments
from .timestamps import (
    DEFAULT_END,
    DEFAULT_MAX_INCREMENT_SECONDS,
    DEFAULT_MIN_INCREMENT_SECONDS,
    DEFAULT_START,
    generate_timestamp_sequence,
)


def generate_mass_print_entries(
    base_invoice: str,
    base_date: datetime,
    count: int,
    *,
    start: str = DEFAULT_START,
    end: str = DEFAULT_END,
    min_increment_seconds: int = DEFAULT_MIN_INCREMENT_SECONDS,
    max_increment_seconds: int = DEFAULT_MAX_INCREMENT_SECONDS,
    rng: random.Random | None = None,
) -> list[BulkPrintEntry]:
    invoices = generate_invoice_numbers(base_invoice, count)
    times = generate_timestamp_sequence(
        base_date,
        count,
        start=start,
        end=end,
        min_increment_seconds=min_increment_seconds,
        max_increment_seconds=max_increment_seconds,
        rng=rng,
    )
    return [BulkPrintEntry(invoice_number=inv, created_at=at) for inv, at in zip(invoices, times)]


def build_print_plan(
    base_invoice: str,
    base_date: datetime,
    count: int,
    due: int,
    *,
    methods: Sequence[PaymentMethod | str] = DEFAULT_PAYMENT_METHODS,
    include_cash: bool = True,
    cash_rounding_step: int = DEFAULT_CASH_ROUNDING_STEP,
    unique_payments: bool = True,
    start: str = DEFAULT_START,
    end: str = DEFAULT_END,
    min_increment_seconds: int = DEFAULT_MIN_INCREMENT_SECONDS,
    max_increment_seconds: int = DEFAULT_MAX_INCREMENT_SECONDS,
    rng: random.Random | None = None,
) -> BulkPrintPlan:
    """Numbers, times and a payment for each copy of a mass print run.

    When unique payments cap the payment list below ``count`` the payments
    repeat in order; ``unique_payments_capped`` reports that it happened.
    """
    entries = generate_mass_print_entries(
        base_invoice,
        base_date,
        count,
        start=start,
        end=end,
        min_increment_seconds=min_increment_seconds,
        max_increment_seconds=max_increment_seconds,
        rng=rng,
    )
    payments = generate_random_payments(
        due,
        count,
        methods=methods,
        include_cash=include_cash,
        cash_rounding_step=cash_rounding_step,
        unique=unique_payments,
        rng=rng,
    )
    if payments:
        entries = [
            entry.model_copy(
                update={
                    "payment_method_id": payments[i % len(payments)].method_id,
                    "paid_amount": payments[i % len(payments)].paid_amount,
                }
            )
            for i, entry in enumerate(entries)
        ]

    return BulkPrintPlan(
        entries=entries,
        requested=max(0, count),
        unique_payments_capped=0 < len(payments) < count,
    )
