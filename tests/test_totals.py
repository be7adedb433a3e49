from kasir.models import InvoiceLine
from kasir.pricing.totals import compute_totals


def _lines() -> list[InvoiceLine]:
    return [
        InvoiceLine(label="Susu UHT 1L", quantity=3, unit_price=18500),
        InvoiceLine(label="Keju Cheddar", quantity=1, unit_price=42000),
    ]


def test_compute_totals_counts_lines_and_quantities() -> None:
    totals = compute_totals(_lines())

    assert totals.distinct_line_count == 2
    assert totals.total_quantity == 4
    assert totals.total_amount == 3 * 18500 + 42000
    assert totals.formatted_total is None


def test_compute_totals_is_idempotent_and_formats() -> None:
    lines = _lines()

    first = compute_totals(lines, formatted=True, prefix="Rp ")
    second = compute_totals(lines, formatted=True, prefix="Rp ")

    assert first == second
    assert first.formatted_total == "Rp 97,500"


def test_compute_totals_empty() -> None:
    totals = compute_totals([])

    assert totals.distinct_line_count == 0
    assert totals.total_quantity == 0
    assert totals.total_amount == 0
