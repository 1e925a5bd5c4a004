"""
CSV Record Parsers

One parser per export:
- Expenses:  Categoria;Jan;Fev;...;Dez
- Funds:     DD/MM/YYYY;Fundo;Saldo;Valor Atual
- Balances:  DD/MM/YYYY;Saldo

All three share the same shape: split into non-blank lines, skip the
first line when its first column looks like a header, then turn each
remaining line into a record or drop it.

DESIGN DECISION: These are pure functions over text. A bad line is
skipped and parsing continues; there is no partial-line recovery and no
report of what was skipped.
"""

from typing import Optional

from condo_finance.models.records import (
    AccountBalanceRecord,
    DatasetKind,
    ExpenseRow,
    FundRecord,
)
from condo_finance.parsing.values import parse_currency, parse_date


DEFAULT_DELIMITER = ";"


def split_lines(csv_text: Optional[str]) -> list[str]:
    """Split text into records, dropping blank lines."""
    if not csv_text:
        return []
    return [line for line in csv_text.split("\n") if line.strip()]


def has_header(first_line: str, keyword: str, delimiter: str = DEFAULT_DELIMITER) -> bool:
    """Check whether the first column contains the header keyword (case-insensitive)."""
    first_column = first_line.split(delimiter)[0]
    return keyword.lower() in first_column.lower()


def _data_lines(
    csv_text: Optional[str],
    keyword: str,
    delimiter: str,
) -> list[list[str]]:
    lines = split_lines(csv_text)
    if lines and has_header(lines[0], keyword, delimiter):
        lines = lines[1:]
    return [line.split(delimiter) for line in lines]


def parse_expenses_csv(
    csv_text: Optional[str],
    delimiter: str = DEFAULT_DELIMITER,
    header_keyword: str = DatasetKind.EXPENSES.default_header_keyword,
) -> tuple[ExpenseRow, ...]:
    """
    Parse the monthly expenses export.

    Column 0 is the category, the following columns are the amounts from
    January onwards. Rows are zero-padded to twelve months. Lines with
    fewer than two columns, or a blank category, are dropped.
    """
    rows = []
    for cols in _data_lines(csv_text, header_keyword, delimiter):
        if len(cols) < 2:
            continue
        category = cols[0].strip()
        if not category:
            continue
        rows.append(ExpenseRow(
            category=category,
            values=tuple(parse_currency(col) for col in cols[1:]),
        ))
    return tuple(rows)


def parse_funds_csv(
    csv_text: Optional[str],
    delimiter: str = DEFAULT_DELIMITER,
    header_keyword: str = DatasetKind.FUNDS.default_header_keyword,
) -> tuple[FundRecord, ...]:
    """
    Parse the investment funds export.

    Needs at least four columns and a readable date; anything else is dropped.
    """
    records = []
    for cols in _data_lines(csv_text, header_keyword, delimiter):
        if len(cols) < 4:
            continue
        record_date = parse_date(cols[0])
        if record_date is None:
            continue
        records.append(FundRecord(
            date=record_date,
            fund_name=cols[1].strip(),
            balance=parse_currency(cols[2]),
            current_value=parse_currency(cols[3]),
        ))
    return tuple(records)


def parse_balance_csv(
    csv_text: Optional[str],
    delimiter: str = DEFAULT_DELIMITER,
    header_keyword: str = DatasetKind.BALANCES.default_header_keyword,
) -> tuple[AccountBalanceRecord, ...]:
    """
    Parse the ordinary account balance export.

    Needs at least two columns and a readable date; anything else is dropped.
    """
    records = []
    for cols in _data_lines(csv_text, header_keyword, delimiter):
        if len(cols) < 2:
            continue
        record_date = parse_date(cols[0])
        if record_date is None:
            continue
        records.append(AccountBalanceRecord(
            date=record_date,
            balance=parse_currency(cols[1]),
        ))
    return tuple(records)


PARSERS = {
    DatasetKind.EXPENSES: parse_expenses_csv,
    DatasetKind.FUNDS: parse_funds_csv,
    DatasetKind.BALANCES: parse_balance_csv,
}


def parse_dataset(
    kind: DatasetKind,
    csv_text: Optional[str],
    delimiter: str = DEFAULT_DELIMITER,
    header_keyword: Optional[str] = None,
) -> tuple:
    """Dispatch to the parser for a source kind."""
    parser = PARSERS[kind]
    return parser(
        csv_text,
        delimiter=delimiter,
        header_keyword=header_keyword or kind.default_header_keyword,
    )
