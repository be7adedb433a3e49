from kasir.catalog.loader import PaymentMethod, Surcharge, SurchargeKind, normalize_payment_method
from kasir.models import PaymentEntry
from kasir.payments.settlement import settle_payments
from kasir.payments.surcharge import quote_payment

MASTER_VISA = PaymentMethod(id="master_visa", label="Master Visa", surcharge=Surcharge(SurchargeKind.PERCENT, 2))
QRIS = PaymentMethod(id="qris", label="QRIS", surcharge=Surcharge(SurchargeKind.FIXED, 1500))
METHODS = [MASTER_VISA, QRIS]


def test_quote_percent_surcharge() -> None:
    quote = quote_payment(200000, MASTER_VISA)

    assert quote.surcharge == 4000
    assert quote.gross == 204000
    assert quote.method_label == "Master Visa"


def test_quote_without_surcharge_or_method() -> None:
    quote = quote_payment(75000, None)

    assert quote.gross == 75000
    assert quote.surcharge == 0
    assert quote.method_id == "unknown"
    assert quote_payment(75000, PaymentMethod(id="debit", label="Debit")).gross == 75000


def test_quote_fixed_surcharge_rounds() -> None:
    method = PaymentMethod(id="f", label="F", surcharge=Surcharge(SurchargeKind.FIXED, 1500.4))

    assert quote_payment(10000, method).surcharge == 1500
    assert quote_payment(10000, method).gross == 11500


def test_settle_with_no_entries() -> None:
    result = settle_payments(100000, [], METHODS)

    assert result.total_paid == 0
    assert result.remaining_due == 100000
    assert result.change == 0
    assert result.per_entry == []


def test_settle_cash_overpayment_gives_change() -> None:
    result = settle_payments(100000, [PaymentEntry(method_id="cash", paid_amount=150000)], METHODS)

    assert result.per_entry[0].applied_due == 100000
    assert result.per_entry[0].surcharge == 0
    assert result.per_entry[0].method_label == "cash"
    assert result.change == 50000
    assert result.remaining_due == 0


def test_settle_inverts_percent_quote() -> None:
    quote = quote_payment(200000, MASTER_VISA)

    result = settle_payments(200000, [PaymentEntry(method_id="master_visa", paid_amount=quote.gross)], METHODS)

    entry = result.per_entry[0]
    assert entry.applied_due == 200000
    assert entry.surcharge == 4000
    assert entry.gross_expected == 204000


def test_settle_applies_entries_against_remaining_due() -> None:
    entries = [
        PaymentEntry(method_id="master_visa", paid_amount=102000),
        PaymentEntry(method_id="Cash", paid_amount=250000),
    ]

    result = settle_payments(300000, entries, METHODS)

    card, cash = result.per_entry
    assert card.applied_due == 100000
    assert card.surcharge == 2000
    assert cash.applied_due == 200000
    assert result.total_paid == 352000
    assert result.change == 52000
    assert result.remaining_due == 0


def test_settle_fixed_surcharge_needs_positive_contribution() -> None:
    short = settle_payments(50000, [PaymentEntry(method_id="qris", paid_amount=1000)], METHODS)
    assert short.per_entry[0].applied_due == 0
    assert short.per_entry[0].surcharge == 0
    assert short.remaining_due == 49000

    full = settle_payments(50000, [PaymentEntry(method_id="qris", paid_amount=51500)], METHODS)
    assert full.per_entry[0].applied_due == 50000
    assert full.per_entry[0].surcharge == 1500
    assert full.per_entry[0].gross_expected == 51500


def test_settle_caps_card_at_remaining_due() -> None:
    result = settle_payments(100000, [PaymentEntry(method_id="master_visa", paid_amount=204000)], METHODS)

    entry = result.per_entry[0]
    assert entry.applied_due == 100000
    assert entry.surcharge == 2000
    assert entry.gross_expected == 102000


def test_negative_catalog_surcharge_counts_as_no_fee() -> None:
    for surcharge in ({"type": "fixed", "value": -1500}, {"type": "percent", "value": -2}):
        method = normalize_payment_method({"id": "promo_card", "label": "Promo Card", "surcharge": surcharge})

        quote = quote_payment(100000, method)
        assert quote.surcharge == 0
        assert quote.gross == 100000

        result = settle_payments(100000, [PaymentEntry(method_id="promo_card", paid_amount=quote.gross)], [method])
        assert result.per_entry[0].applied_due == 100000
        assert result.remaining_due == 0
