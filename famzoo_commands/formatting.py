"""
Command Formatting

Renders a Command back to canonical text: the canonical type and action
names followed by each parameter in parse order.

- amounts render as currency ("$25.00")
- dates render in the short date format ("10/20/26")
- everything else renders as its raw token

Extra parameters keep their flag syntax ("--note lunch", "-urgent") and
tokens that would not survive re-tokenizing are double-quoted, so parsing
the output of format() gives back an equivalent command, with these
display losses:
- amounts with more than two decimal places are rounded
- date-times keep only their date
- the default short date has a two-digit year, so dates outside
  1969-2068 come back a century off (1960-05-01 renders "05/01/60" and
  reads back as 2060-05-01); set short_date_format to "%m/%d/%Y" to
  keep the century
"""

import re
from decimal import Decimal
from typing import Optional

from famzoo_commands.config import FormattingSettings
from famzoo_commands.models.command import Command
from famzoo_commands.models.parameter import MAX_AMOUNT_DIGITS, CommandParameter
from famzoo_commands.models.vocabulary import ParameterType


_NEEDS_QUOTING = re.compile(r"""[\s"'\\]""")


class CommandFormatter:
    """Formats commands and values with an explicit FormattingSettings."""

    def __init__(self, settings: Optional[FormattingSettings] = None):
        self._settings = settings or FormattingSettings()

    @property
    def settings(self) -> FormattingSettings:
        return self._settings

    def format_currency(self, amount: Decimal) -> str:
        sign = "-" if amount < 0 else ""
        return f"{sign}{self._settings.currency_symbol}{abs(amount):,.2f}"

    def display_value(self, parameter: CommandParameter) -> str:
        """Display string of a parameter's value, without flag syntax."""
        if parameter.type == ParameterType.AMOUNT and parameter.decimal_value is not None:
            value = parameter.decimal_value
            if value.is_finite() and value.adjusted() < MAX_AMOUNT_DIGITS:
                return self.format_currency(value)
            return parameter.raw_value
        if parameter.type == ParameterType.DATE and parameter.date_value is not None:
            return parameter.date_value.strftime(self._settings.short_date_format)
        return parameter.raw_value

    def render_parameter(
        self,
        parameter: CommandParameter,
        extra_index: Optional[int] = None,
    ) -> str:
        """
        Render one parameter as command text.

        ``extra_index`` is the parameter's position among the optional
        parameters. A text parameter named "arg<extra_index>" is a bare
        positional word; any other optional parameter keeps flag syntax.
        """
        display = quote_token(self.display_value(parameter))

        if parameter.is_required:
            return display
        if (
            parameter.type == ParameterType.TEXT
            and extra_index is not None
            and parameter.name == f"arg{extra_index}"
        ):
            return display
        if parameter.type == ParameterType.BOOLEAN and parameter.bool_value:
            return f"-{parameter.name}"
        return f"--{parameter.name} {display}"

    def format(self, command: Command) -> str:
        parts = [command.type.value, command.action.value]
        extra_index = 0
        for parameter in command.parameters:
            if parameter.is_required:
                parts.append(self.render_parameter(parameter))
            else:
                parts.append(self.render_parameter(parameter, extra_index))
                extra_index += 1
        return " ".join(parts)


def quote_token(value: str) -> str:
    """Quote ``value`` if the tokenizer would otherwise split or alter it."""
    if value and not _NEEDS_QUOTING.search(value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
