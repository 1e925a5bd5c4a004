"""
Locale Value Parsing

The exports are produced by a Brazilian bank and accounting office:
- Amounts look like "R$ 39.476,27", "39.476,27", "-1.234,56" or "-"
- Dates look like "05/03/2024" (DD/MM/YYYY)

IMPORTANT: Neither parser raises. A malformed amount becomes zero and a
malformed date becomes None, and the caller decides what to do with
the line.
"""

import re
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional


CURRENCY_MARKER = "R$"

ZERO = Decimal("0")

# Literals the exports use for "nothing"
_ZERO_LITERALS = {"", "-", "0,00"}

# Same shapes a float parser accepts at the start of a string
_NUMERIC_PREFIX = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

# "- 1234" is what is left of "-R$ 1.234" once the marker is gone
_SIGN_GAP = re.compile(r"^([+-])\s+")

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

# Decimal exponents of the largest and smallest non-zero doubles
_MAX_EXPONENT = 308
_MIN_EXPONENT = -324

# Enough digits to quantize any amount in the double range to cents
_FORMAT_PRECISION = 400


def parse_currency(value: Optional[str]) -> Decimal:
    """
    Convert locale-formatted money text to a Decimal.

    "R$ 39.476,27" -> Decimal("39476.27")
    "-1.234,56"    -> Decimal("-1234.56")
    "-", "", None  -> Decimal("0")

    The longest numeric prefix is used, so trailing garbage is ignored;
    text without any numeric prefix is zero.
    """
    if not value:
        return ZERO
    clean_value = value.strip()
    if clean_value in _ZERO_LITERALS:
        return ZERO

    number_str = clean_value.replace(CURRENCY_MARKER, "", 1).strip()
    number_str = _SIGN_GAP.sub(r"\1", number_str)
    # Dots group thousands, the first comma is the decimal point
    number_str = number_str.replace(".", "").replace(",", ".", 1)

    match = _NUMERIC_PREFIX.match(number_str)
    if match is None:
        return ZERO
    result = Decimal(match.group())
    # Outside the double range the amount is infinite or zero as a float
    if result.is_zero() or not _MIN_EXPONENT <= result.adjusted() <= _MAX_EXPONENT:
        return ZERO
    return result


def _leading_int(part: str) -> Optional[int]:
    match = _LEADING_INT.match(part)
    return int(match.group(1)) if match else None


def parse_date(text: Optional[str]) -> Optional[date]:
    """
    Convert "DD/MM/YYYY" text to a date.

    Returns None unless there are exactly three parts that each start
    with an integer. Day and month are not range checked: they roll over
    into the neighbouring month or year ("31/02/2024" is 2 March 2024,
    "00/03/2024" is the last day of February).
    """
    if not text:
        return None
    parts = text.strip().split("/")
    if len(parts) != 3:
        return None

    day, month, year = (_leading_int(part) for part in parts)
    if day is None or month is None or year is None:
        return None

    year_offset, month_zero_based = divmod(month - 1, 12)
    try:
        first_of_month = date(year + year_offset, month_zero_based + 1, 1)
        return first_of_month + timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return None


def format_brl(amount) -> str:
    """
    Render an amount the way the exports write it.

    format_brl(Decimal("-1234.5")) -> "-R$ 1.234,50"
    """
    with localcontext() as ctx:
        ctx.prec = _FORMAT_PRECISION
        quantized = Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    us_style = f"{abs(quantized):,.2f}"
    br_style = us_style.translate(str.maketrans({",": ".", ".": ","}))
    return f"{sign}{CURRENCY_MARKER} {br_style}"
