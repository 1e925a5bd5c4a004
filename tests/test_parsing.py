"""
Tests for locale value parsing and the three CSV parsers.

Nothing in here may raise on bad input: malformed amounts become zero,
malformed dates become None, malformed lines are skipped.
"""

import pytest
from datetime import date
from decimal import Decimal

from condo_finance.models import DatasetKind
from condo_finance.parsing import (
    format_brl,
    has_header,
    parse_balance_csv,
    parse_currency,
    parse_dataset,
    parse_date,
    parse_expenses_csv,
    parse_funds_csv,
)


class TestParseCurrency:
    """Tests for parse_currency."""

    @pytest.mark.parametrize("text,expected", [
        ("R$ 39.476,27", Decimal("39476.27")),
        ("39.476,27", Decimal("39476.27")),
        ("-1.234,56", Decimal("-1234.56")),
        ("R$ 1.234.567,89", Decimal("1234567.89")),
        ("  R$ 5,5  ", Decimal("5.5")),
        ("R$12,00", Decimal("12.00")),
    ])
    def test_well_formed_amounts(self, text, expected):
        """Test the shapes found in the exports."""
        assert parse_currency(text) == expected

    def test_matches_float_value(self):
        """Test the result agrees with the float reading of the amount."""
        assert abs(float(parse_currency("R$ 1.000,10")) - 1000.10) < 1e-9

    @pytest.mark.parametrize("text", ["-", "", "0,00", None, "   "])
    def test_zero_literals(self, text):
        """Test the literals the exports use for nothing."""
        assert parse_currency(text) == Decimal("0")

    @pytest.mark.parametrize("text", ["abc", "R$", "R$ n/d", ",", "--"])
    def test_garbage_is_zero(self, text):
        """Test that unparseable text degrades to zero."""
        assert parse_currency(text) == Decimal("0")

    def test_sign_before_currency_marker(self):
        """Test that '-R$ 1.234,56' keeps its sign."""
        assert parse_currency("-R$ 1.234,56") == Decimal("-1234.56")

    def test_numeric_prefix_is_used(self):
        """Test that trailing text after the number is ignored."""
        assert parse_currency("12abc") == Decimal("12")

    def test_carriage_return_is_ignored(self):
        """Test a Windows line ending left on the last field."""
        assert parse_currency("R$ 80,00\r") == Decimal("80.00")

    @pytest.mark.parametrize("text", ["1e1000000", "5e999999", "-1e400", "1e-1000000"])
    def test_exponent_outside_double_range_is_zero(self, text):
        """Test amounts a float would read as infinite or zero."""
        assert parse_currency(text) == Decimal("0")

    def test_large_exponent_in_double_range(self):
        assert parse_currency("1e300") == Decimal("1e300")


class TestParseDate:
    """Tests for parse_date."""

    def test_day_month_year(self):
        """Test that 05/03/2024 is the 5th of March."""
        parsed = parse_date("05/03/2024")
        assert parsed == date(2024, 3, 5)
        assert parsed.month - 1 == 2

    @pytest.mark.parametrize("text", ["05-03-2024", "", None, "05/03", "1/2/3/4", "aa/03/2024"])
    def test_malformed_is_none(self, text):
        """Test that malformed dates are absent, not errors."""
        assert parse_date(text) is None

    @pytest.mark.parametrize("text,expected", [
        ("31/02/2024", date(2024, 3, 2)),
        ("00/03/2024", date(2024, 2, 29)),
        ("01/13/2024", date(2025, 1, 1)),
        ("32/12/2023", date(2024, 1, 1)),
    ])
    def test_out_of_range_rolls_over(self, text, expected):
        """Test that out-of-range day and month roll into the next period."""
        assert parse_date(text) == expected

    def test_surrounding_whitespace(self):
        """Test that padding and a trailing carriage return are tolerated."""
        assert parse_date(" 05/03/2024\r") == date(2024, 3, 5)

    def test_two_digit_year_read_literally(self):
        """Test that '24' is the year 24, not 1924 or 2024."""
        assert parse_date("01/01/24") == date(24, 1, 1)


class TestFormatBrl:
    """Tests for format_brl."""

    def test_positive(self):
        assert format_brl(Decimal("1234.5")) == "R$ 1.234,50"

    def test_negative(self):
        assert format_brl(Decimal("-39476.27")) == "-R$ 39.476,27"

    def test_zero(self):
        assert format_brl(0) == "R$ 0,00"

    def test_amount_beyond_default_precision(self):
        """Test that a 31-digit amount is still rendered in full."""
        formatted = format_brl(Decimal("1e30"))
        assert formatted.startswith("R$ 1.000.000.000")
        assert formatted.endswith(",00")


class TestHeaderDetection:
    """Tests for has_header."""

    def test_keyword_in_first_column(self):
        assert has_header("Categoria;Jan;Fev", "categoria") is True

    def test_case_insensitive(self):
        assert has_header("DATA;SALDO", "data") is True

    def test_keyword_in_other_column_only(self):
        """Test that only the first column is inspected."""
        assert has_header("Total;Categoria", "categoria") is False


class TestParseExpensesCsv:
    """Tests for parse_expenses_csv."""

    def test_header_skipped_and_values_parsed(self, expenses_csv):
        """Test a typical export."""
        rows = parse_expenses_csv(expenses_csv)
        assert [r.category for r in rows] == ["Manutenção", "Limpeza"]
        assert rows[0].values[:3] == (Decimal("200.00"), Decimal("300.00"), Decimal("0"))
        assert rows[1].values[0] == Decimal("1050.50")

    def test_five_columns_padded_to_twelve(self):
        """Test that five monthly amounts become twelve, the rest zero."""
        rows = parse_expenses_csv("Água;1,00;2,00;3,00;4,00;5,00")
        assert len(rows) == 1
        values = rows[0].values
        assert len(values) == 12
        assert values[:5] == tuple(Decimal(str(i)) for i in range(1, 6))
        assert all(v == 0 for v in values[5:])

    def test_columns_past_december_dropped(self):
        """Test that a fourteen-month row keeps twelve values."""
        line = "Água;" + ";".join(f"{i},00" for i in range(1, 15))
        rows = parse_expenses_csv(line)
        assert len(rows[0].values) == 12
        assert rows[0].values[-1] == Decimal("12.00")

    def test_without_header_every_line_is_data(self):
        rows = parse_expenses_csv("Limpeza;1,00\nPortaria;2,00")
        assert len(rows) == 2

    def test_short_and_blank_lines_dropped(self):
        """Test that single-column and blank lines are skipped."""
        text = "Categoria;Jan\n\nSó categoria\n   \nÁgua;10,00\n;5,00\n"
        rows = parse_expenses_csv(text)
        assert [r.category for r in rows] == ["Água"]

    def test_crlf_line_endings(self):
        rows = parse_expenses_csv("Categoria;Jan\r\nÁgua;10,00\r\n")
        assert rows[0].values[0] == Decimal("10.00")

    def test_empty_text(self):
        """Test that empty input gives an empty collection."""
        assert parse_expenses_csv("") == ()
        assert parse_expenses_csv(None) == ()


class TestParseFundsCsv:
    """Tests for parse_funds_csv."""

    def test_typical_export(self, funds_csv):
        records = parse_funds_csv(funds_csv)
        assert len(records) == 2
        first = records[0]
        assert first.date == date(2024, 1, 31)
        assert first.fund_name == "Fundo de Reserva"
        assert first.balance == Decimal("10000.00")
        assert first.current_value == Decimal("10250.75")
        assert records[1].current_value == Decimal("-150.00")

    def test_bad_lines_dropped(self):
        """Test that bad dates and short lines are skipped, the rest kept."""
        text = (
            "Data;Fundo;Saldo;Valor Atual\n"
            "xx;Fundo C;1,00;1,00\n"
            "06/05/2024;Curto;1,00\n"
            "05/05/2024; Fundo A ;R$ 4.900,00;R$ 5.000,00\n"
        )
        records = parse_funds_csv(text)
        assert len(records) == 1
        assert records[0].fund_name == "Fundo A"


class TestParseBalanceCsv:
    """Tests for parse_balance_csv."""

    def test_typical_export(self, balances_csv):
        records = parse_balance_csv(balances_csv)
        assert [r.date for r in records] == [date(2024, 1, 1), date(2024, 2, 1)]
        assert records[1].balance == Decimal("1500.00")

    def test_bad_lines_dropped(self):
        text = "DATA;SALDO\nbad;5,00\n01/03/2024\n15/03/2024;-R$ 20,00\n"
        records = parse_balance_csv(text)
        assert len(records) == 1
        assert records[0].balance == Decimal("-20.00")

    def test_first_line_without_header_is_data(self):
        records = parse_balance_csv("01/01/2024;100,00\n01/02/2024;200,00")
        assert len(records) == 2

    def test_pure_function(self, balances_csv):
        """Test that the same text always yields the same collection."""
        assert parse_balance_csv(balances_csv) == parse_balance_csv(balances_csv)


class TestParseDataset:
    """Tests for the parse_dataset dispatcher."""

    def test_dispatch_with_custom_delimiter(self):
        records = parse_dataset(DatasetKind.BALANCES, "Data|Saldo\n01/01/2024|1.000,00", delimiter="|")
        assert len(records) == 1
        assert records[0].balance == Decimal("1000.00")

    def test_custom_header_keyword(self):
        rows = parse_dataset(DatasetKind.EXPENSES, "Rubrica;Jan\nÁgua;1,00", header_keyword="rubrica")
        assert [r.category for r in rows] == ["Água"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
