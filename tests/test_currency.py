from fractions import Fraction

from kasir.currency import format_idr, parse_idr, round_half_up


def test_format_idr_groups_thousands_and_truncates() -> None:
    assert format_idr(100000) == "100,000"
    assert format_idr(1234567.89) == "1,234,567"
    assert format_idr(999) == "999"
    assert format_idr(0) == "0"


def test_format_idr_sign_prefix_and_bad_input() -> None:
    assert format_idr(-5000) == "-5,000"
    assert format_idr(-5000, allow_negative=False) == "5,000"
    assert format_idr(250000, prefix="Rp ") == "Rp 250,000"
    assert format_idr("Rp 12,500") == "12,500"
    assert format_idr(float("inf")) == ""


def test_parse_idr_never_raises() -> None:
    assert parse_idr("Rp 1,250,000") == 1250000
    assert parse_idr("-4,000") == -4000
    assert parse_idr("") == 0
    assert parse_idr(None) == 0
    assert parse_idr("abc") == 0
    assert parse_idr("12-3") == 0


def test_round_half_up_matches_register_rounding() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(Fraction(1, 2)) == 1
    assert round_half_up(3.4) == 3
    assert round_half_up(849.15) == 849
