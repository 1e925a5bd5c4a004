"""Parsing package: locale values and the three CSV exports."""

from condo_finance.parsing.csv_records import (
    DEFAULT_DELIMITER,
    has_header,
    parse_balance_csv,
    parse_dataset,
    parse_expenses_csv,
    parse_funds_csv,
    split_lines,
)
from condo_finance.parsing.values import (
    CURRENCY_MARKER,
    format_brl,
    parse_currency,
    parse_date,
)

__all__ = [
    "CURRENCY_MARKER",
    "DEFAULT_DELIMITER",
    "format_brl",
    "has_header",
    "parse_balance_csv",
    "parse_currency",
    "parse_dataset",
    "parse_date",
    "parse_expenses_csv",
    "parse_funds_csv",
    "split_lines",
]
