"""Unit tests for cell normalization"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from aging_report.domain.normalization import format_amount, normalize_amount, parse_amount, parse_date


@pytest.mark.parametrize(
    "cell, expected",
    [
        (None, Decimal("0")),
        ("", Decimal("0")),
        ("1 234,50", Decimal("1234.50")),
        ("1\u00a0234,50", Decimal("1234.50")),  # NBSP thousands separator
        ("1\u202f234,50", Decimal("1234.50")),  # narrow NBSP
        (" 42 ", Decimal("42")),
        ("-50,25", Decimal("-50.25")),
        (1500, Decimal("1500")),
        (12.5, Decimal("12.5")),
        (Decimal("3.10"), Decimal("3.10")),
    ],
)
def test_parse_amount(cell, expected):
    """Test amount normalization for blank, text and numeric cells"""
    assert parse_amount(cell) == expected


def test_float_amount_uses_shortest_repr():
    """0.1 must not turn into its binary expansion"""
    assert parse_amount(0.1) == Decimal("0.1")


def test_amount_keeps_leading_number_and_flags_leftovers():
    """Test lenient parsing: '12abc' reads as 12 but is not clean"""
    result = normalize_amount("12abc")
    assert result.value == Decimal("12")
    assert result.clean is False


@pytest.mark.parametrize("cell", ["abc", " , ", "--", True, float("nan"), float("inf")])
def test_unparseable_amount_is_zero(cell):
    """Test malformed balance cells fall back to zero without raising"""
    result = normalize_amount(cell)
    assert result.value == Decimal("0")
    assert result.clean is False


def test_blank_amount_is_clean_zero():
    result = normalize_amount("")
    assert result.value == Decimal("0")
    assert result.clean is True


@pytest.mark.parametrize(
    "amount, expected",
    [
        (Decimal("1234.5"), "1 234,50"),
        (Decimal("1234567.891"), "1 234 567,89"),
        (Decimal("0"), "0,00"),
        (Decimal("0.005"), "0,01"),  # half up
        (Decimal("999.999"), "1 000,00"),
        (Decimal("12"), "12,00"),
    ],
)
def test_format_amount(amount, expected):
    """Test two-decimal, comma-decimal, space-thousands display"""
    assert format_amount(amount) == expected


def test_format_amount_large_value():
    assert format_amount(Decimal("1E+30")) == "1 000 000 000 000 000 000 000 000 000 000,00"


@pytest.mark.parametrize("cell", [None, "", "   "])
def test_blank_date_is_unparseable(cell):
    assert parse_date(cell) is None


def test_serial_date():
    """Test spreadsheet serial day counts (45366 = 2024-03-15)"""
    assert parse_date(45366) == date(2024, 3, 15)
    assert parse_date(45366.75) == date(2024, 3, 15)


@pytest.mark.parametrize("cell", [0, -5, float("nan"), 1e20])
def test_bad_serial_date_is_unparseable(cell):
    assert parse_date(cell) is None


def test_native_date_cells():
    """Test datetime/date cells returned by spreadsheet readers"""
    assert parse_date(datetime(2024, 3, 14, 10, 30)) == date(2024, 3, 14)
    assert parse_date(date(2024, 3, 14)) == date(2024, 3, 14)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2024-03-14", date(2024, 3, 14)),
        ("14/03/2024", date(2024, 3, 14)),
        (" 2024-03-14 ", date(2024, 3, 14)),
        ("2024-03-14 08:15:00", date(2024, 3, 14)),
        ("March 14, 2024", date(2024, 3, 14)),
    ],
)
def test_text_dates(text, expected):
    assert parse_date(text) == expected


def test_ambiguous_slash_date_is_month_first():
    """Free-form parsing runs first and reads 03/04/2024 as March 4"""
    assert parse_date("03/04/2024") == date(2024, 3, 4)


def test_missing_components_come_from_default():
    assert parse_date("March 3", default=date(2024, 6, 15)) == date(2024, 3, 3)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2024", date(2024, 6, 15)),
        ("5", date(2024, 6, 5)),
        ("2023", date(2023, 6, 15)),
    ],
)
def test_bare_number_text_is_read_leniently(text, expected):
    """Test numeric text is a partial date filled from the default, not a serial"""
    assert parse_date(text, default=date(2024, 6, 15)) == expected


@pytest.mark.parametrize("text", ["pas de date", "31/02/2024"])
def test_unparseable_text_date(text):
    """Test every strategy failing yields None instead of raising"""
    assert parse_date(text) is None


@pytest.mark.parametrize("cell", ["1e1000000", "1e-1000000", "-1e999999999", 1e300, Decimal("1E+41")])
def test_out_of_scale_amount_is_unparseable(cell):
    """Test amounts no ledger could hold fall back to zero instead of overflowing"""
    result = normalize_amount(cell)

    assert result.value == Decimal("0")
    assert result.clean is False


def test_wide_amount_is_kept_exactly():
    result = normalize_amount("12345678901234567890123456789,01")

    assert result.value == Decimal("12345678901234567890123456789.01")
    assert result.clean is True
    assert format_amount(result.value) == "12 345 678 901 234 567 890 123 456 789,01"
