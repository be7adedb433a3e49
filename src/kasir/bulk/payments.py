from __future__ import annotations

import random
from collections.abc import Sequence

import structlog

from ..catalog.loader import DEFAULT_PAYMENT_METHODS, PaymentMethod, normalize_payment_method
from ..models import PaymentEntry
from ..payments.surcharge import quote_payment

log = structlog.get_logger(__name__)

CASH_METHOD_ID = "Cash"
DEFAULT_CASH_ROUNDING_STEP = 10_000
MAX_COLLISION_ATTEMPTS = 1000


def round_up(value: int, step: int) -> int:
    if step <= 0:
        return value
    return -(-value // step) * step


def _resolve_methods(methods: Sequence[PaymentMethod | str]) -> list[PaymentMethod]:
    resolved: list[PaymentMethod] = []
    for m in methods:
        if isinstance(m, PaymentMethod):
            resolved.append(m)
            continue
        known = next((d for d in DEFAULT_PAYMENT_METHODS if m in (d.id, d.label)), None)
        resolved.append(known or normalize_payment_method(m))
    return resolved


class _AmountRegistry:
    """Paid amounts already used in one batch."""

    def __init__(self, step: int) -> None:
        self.step = max(1, round(step))
        self.seen: set[int] = set()

    def claim(self, amount: int) -> int:
        current = amount
        attempts = 0
        while current in self.seen and attempts < MAX_COLLISION_ATTEMPTS:
            attempts += 1
            current += self.step
        if current in self.seen:
            log.warning("payment_amount_collision_exhausted", amount=amount, attempts=attempts)
        self.seen.add(current)
        return current


def generate_random_payments(
    due: int,
    count: int,
    *,
    methods: Sequence[PaymentMethod | str] = DEFAULT_PAYMENT_METHODS,
    include_cash: bool = True,
    cash_rounding_step: int = DEFAULT_CASH_ROUNDING_STEP,
    unique: bool = True,
    rng: random.Random | None = None,
) -> list[PaymentEntry]:
    """Plausible payments for ``count`` mass-printed invoices of the same ``due``.

    With ``unique`` each method is used at most once, so the result is capped
    at the pool size. Cash always covers the due amount. Paid amounts within a
    batch never repeat.
    """
    if count <= 0:
        return []

    rng = rng or random
    resolved = _resolve_methods(methods)
    by_id = {m.id: m for m in resolved}

    pool: list[str] = [CASH_METHOD_ID] if include_cash else []
    for method in resolved:
        if method.id not in pool:
            pool.append(method.id)
    if not pool:
        return []

    if unique:
        shuffled = list(pool)
        rng.shuffle(shuffled)
        selected = shuffled[:count]
    else:
        selected = [rng.choice(pool) for _ in range(count)]

    registry = _AmountRegistry(cash_rounding_step)
    jitter_bound = max(1, round(cash_rounding_step / 10))
    out: list[PaymentEntry] = []

    for i, method_id in enumerate(selected):
        if method_id == CASH_METHOD_ID:
            base = round_up(due, cash_rounding_step)
            extra_steps = rng.randint(0, 2)
            candidate = base + extra_steps * cash_rounding_step + i * (cash_rounding_step // 10)
            out.append(PaymentEntry(method_id=CASH_METHOD_ID, paid_amount=registry.claim(candidate)))
            continue

        quote = quote_payment(due, by_id[method_id])
        candidate = quote.gross + rng.randrange(jitter_bound)
        out.append(PaymentEntry(method_id=method_id, paid_amount=registry.claim(candidate)))

    return out
