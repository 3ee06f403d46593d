"""Tests for rendering commands back to text."""

from datetime import date
from decimal import Decimal

from famzoo_commands.config import FormattingSettings
from famzoo_commands.formatting import CommandFormatter, quote_token
from famzoo_commands.models.command import Command
from famzoo_commands.models.parameter import AmountParameter
from famzoo_commands.models.vocabulary import CommandAction, CommandType


class TestCurrency:
    """Tests for currency formatting."""

    def test_two_places_and_separators(self):
        assert CommandFormatter().format_currency(Decimal("1234.5")) == "$1,234.50"

    def test_negative(self):
        assert CommandFormatter().format_currency(Decimal("-5")) == "-$5.00"

    def test_injected_symbol(self):
        formatter = CommandFormatter(FormattingSettings(currency_symbol="€"))
        assert formatter.format_currency(Decimal("3")) == "€3.00"


class TestCommandFormat:
    """Tests for CommandFormatter.format()."""

    def test_canonical_names(self, parser):
        assert parser.parse("a b").format() == "account balance"
        assert parser.parse("i x dishes").format() == "item complete dishes"

    def test_amount_as_currency(self, parser):
        assert parser.parse("a c 25").format() == "account credit $25.00"

    def test_flags_keep_their_syntax(self, parser):
        command = parser.parse('account credit 25 --note "lunch money" -urgent')
        assert command.format() == 'account credit $25.00 --note "lunch money" -urgent'

    def test_injected_date_format(self, parser):
        formatter = CommandFormatter(FormattingSettings(short_date_format="%Y-%m-%d"))
        command = parser.parse("item due 12/25/24 dishes")
        assert command.format(formatter) == "item due 2024-12-25 dishes"

    def test_unreadable_date_renders_raw(self, parser):
        assert parser.parse("item due someday").format() == "item due someday"

    def test_oversized_amount_renders_raw(self):
        """Test a huge amount shows its token instead of every digit."""
        command = Command(
            type=CommandType.ACCOUNT,
            action=CommandAction.CREDIT,
            parameters=(
                AmountParameter(name="amount", raw_value="1e50000", value=Decimal("1e50000")),
            ),
        )
        assert command.format() == "account credit 1e50000"

    def test_positional_extras_render_bare(self, parser):
        command = parser.parse("list show x y")
        assert command.format() == "list show x y"

    def test_flag_named_like_a_positional_keeps_flag_syntax(self, parser):
        """Test --arg5 is not confused with the positional at that slot."""
        command = parser.parse("list show x --arg5 foo")
        text = command.format()

        assert text == "list show x --arg5 foo"
        reparsed = parser.parse(text)
        assert [p.name for p in reparsed.parameters] == ["arg0", "arg5"]
        assert reparsed.semantic_signature() == command.semantic_signature()

    def test_two_digit_year_wraps_century(self, parser):
        """Test the default short date loses the century outside 1969-2068."""
        command = parser.parse("item due 1960-05-01")
        text = command.format()

        assert text == "item due 05/01/60"
        assert parser.parse(text).parameters[0].value == date(2060, 5, 1)

    def test_four_digit_year_keeps_century(self, parser):
        formatter = CommandFormatter(FormattingSettings(short_date_format="%m/%d/%Y"))
        text = parser.parse("item due 1960-05-01").format(formatter)

        assert text == "item due 05/01/1960"
        assert parser.parse(text).parameters[0].value == date(1960, 5, 1)


class TestQuoteToken:
    """Tests for quote_token()."""

    def test_plain_token_is_unchanged(self):
        assert quote_token("milk") == "milk"

    def test_whitespace_is_quoted(self):
        assert quote_token("buy milk") == '"buy milk"'

    def test_quotes_and_backslashes_are_escaped(self):
        assert quote_token('say "hi"') == '"say \\"hi\\""'
        assert quote_token("a\\b") == '"a\\\\b"'

    def test_empty_token(self):
        assert quote_token("") == '""'
