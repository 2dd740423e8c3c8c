"""Cell normalization - turns loosely formatted spreadsheet cells into typed values

Nothing in this module raises on bad input. Amounts fall back to zero and
dates fall back to None, so a malformed cell excludes its row instead of
aborting the run.
"""

import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Callable, Optional, Tuple

from dateutil import parser as date_parser
from openpyxl.utils.datetime import from_excel

ZERO = Decimal("0")
CENTS = Decimal("0.01")

# Powers of ten beyond this, either way, are not balances
MAX_MAGNITUDE = 40

# Leading decimal number, read the way a lenient float cast reads it
_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class AmountResult:
    """Normalized amount plus whether the source cell parsed without loss"""

    value: Decimal
    clean: bool = True


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _within_bounds(amount: Decimal) -> bool:
    return amount.adjusted() <= MAX_MAGNITUDE and amount.as_tuple().exponent >= -MAX_MAGNITUDE


def normalize_amount(value: Any) -> AmountResult:
    """
    Normalize a balance cell to a Decimal.

    - absent or empty -> 0
    - numeric -> used as is (NaN/inf -> 0)
    - beyond 10**MAX_MAGNITUDE or finer than 10**-MAX_MAGNITUDE -> 0
    - text -> whitespace (including NBSP) removed, comma read as decimal
      separator, longest leading number kept; no number -> 0
    """
    if _is_blank(value):
        return AmountResult(ZERO)

    if _is_number(value):
        if isinstance(value, float):
            if not math.isfinite(value):
                return AmountResult(ZERO, clean=False)
            amount = Decimal(repr(value))
        else:
            amount = Decimal(value)
        if not amount.is_finite() or not _within_bounds(amount):
            return AmountResult(ZERO, clean=False)
        return AmountResult(amount)

    text = _WHITESPACE.sub("", str(value)).replace(",", ".")
    match = _LEADING_NUMBER.match(text)
    if match is None:
        return AmountResult(ZERO, clean=False)

    try:
        amount = Decimal(match.group(0))
    except InvalidOperation:
        return AmountResult(ZERO, clean=False)
    if not _within_bounds(amount):
        return AmountResult(ZERO, clean=False)

    return AmountResult(amount, clean=match.end() == len(text))


def parse_amount(value: Any) -> Decimal:
    """Normalized amount without the cleanliness flag"""
    return normalize_amount(value).value


def format_amount(amount: Decimal) -> str:
    """Two decimals, comma decimal separator, space thousands: 1234.5 -> '1 234,50'"""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        rounded = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    return f"{rounded:,.2f}".replace(",", " ").replace(".", ",")


# Date strategies: each returns a date or None, never raises


def _serial_date(value: Any) -> Optional[date]:
    """Spreadsheet serial day count (1900 date system)"""
    if isinstance(value, Decimal) and not value.is_finite():
        return None
    if value <= 0:
        return None
    try:
        converted = from_excel(float(value))
    except (ValueError, OverflowError, TypeError):
        return None
    return converted.date() if isinstance(converted, datetime) else None


def _free_form(text: str, default: Optional[datetime]) -> Optional[date]:
    # Lenient: bare "2024" is a year and bare "5" a day, the rest comes from default
    try:
        return date_parser.parse(text, default=default).date()
    except (ValueError, OverflowError, TypeError):
        return None


def _fixed_format(fmt: str) -> Callable[[str, Optional[datetime]], Optional[date]]:
    def parse(text: str, default: Optional[datetime]) -> Optional[date]:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            return None

    return parse


TEXT_DATE_STRATEGIES: Tuple[Callable[[str, Optional[datetime]], Optional[date]], ...] = (
    _free_form,
    _fixed_format("%d/%m/%Y"),
    _fixed_format("%Y-%m-%d"),
)


def parse_date(value: Any, default: Optional[date] = None) -> Optional[date]:
    """
    Normalize a last-payment cell to a calendar date.

    Returns None when the cell is absent or cannot be read as a date.
    `default` fills components missing from free-form text (e.g. a bare
    "March 3" takes its year from it).
    """
    if _is_blank(value):
        return None

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if _is_number(value):
        return _serial_date(value)

    fill = datetime(default.year, default.month, default.day) if default else None
    text = str(value).strip()
    for strategy in TEXT_DATE_STRATEGIES:
        parsed = strategy(text, fill)
        if parsed is not None:
            return parsed
    return None
