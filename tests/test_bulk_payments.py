import random

from structlog.testing import capture_logs

from kasir.bulk.payments import CASH_METHOD_ID, _AmountRegistry, generate_random_payments, round_up
from kasir.catalog.loader import PaymentMethod


def test_round_up_to_cash_step() -> None:
    assert round_up(123456, 10000) == 130000
    assert round_up(120000, 10000) == 120000
    assert round_up(123456, 0) == 123456


def test_unique_payments_cap_at_pool_size() -> None:
    payments = generate_random_payments(150000, 10, unique=True, rng=random.Random(4))

    assert len(payments) == 3
    assert {p.method_id for p in payments} == {CASH_METHOD_ID, "master_visa", "bca_card"}
    assert len({p.paid_amount for p in payments}) == 3


def test_cash_always_covers_due_and_amounts_never_repeat() -> None:
    due = 87650
    payments = generate_random_payments(due, 25, methods=[], unique=False, rng=random.Random(8))

    assert len(payments) == 25
    assert all(p.method_id == CASH_METHOD_ID for p in payments)
    assert all(p.paid_amount >= due for p in payments)
    assert len({p.paid_amount for p in payments}) == 25


def test_card_payment_includes_surcharge_plus_jitter() -> None:
    payments = generate_random_payments(
        200000, 1, methods=["master_visa"], include_cash=False, rng=random.Random(0)
    )

    assert len(payments) == 1
    assert payments[0].method_id == "master_visa"
    assert 204000 <= payments[0].paid_amount < 205000


def test_unknown_string_methods_are_surcharge_free() -> None:
    payments = generate_random_payments(
        50000,
        2,
        methods=["Transfer", PaymentMethod(id="debit", label="Debit")],
        include_cash=False,
        cash_rounding_step=1000,
        rng=random.Random(6),
    )

    assert {p.method_id for p in payments} == {"Transfer", "debit"}
    assert all(50000 <= p.paid_amount < 50000 + 100 + 1000 for p in payments)


def test_non_positive_count() -> None:
    assert generate_random_payments(10000, 0) == []


def test_amount_registry_logs_exhausted_collisions(monkeypatch) -> None:
    monkeypatch.setattr("kasir.bulk.payments.MAX_COLLISION_ATTEMPTS", 2)
    registry = _AmountRegistry(1000)
    registry.seen.update({10000, 11000, 12000})

    with capture_logs() as logs:
        claimed = registry.claim(10000)

    assert claimed == 12000
    assert any(e["event"] == "payment_amount_collision_exhausted" and e["attempts"] == 2 for e in logs)
    assert registry.claim(20000) == 20000
