"""
Parameter Parser

Turns the tokens after the (type, action) header into typed parameters.

Two phases:

1. REQUIRED: the i-th token binds to the action's i-th required
   parameter type, whatever it looks like. "account credit -5" gives an
   amount of -5, not a flag. Missing tokens simply produce fewer
   parameters; validation reports what is missing.

2. EXTRA: the remaining tokens are read as
   - "--name value"  text flag (value = next token unless it starts with "--")
   - "--name"        boolean flag set to true
   - "-name"         boolean flag set to true
   - anything else   positional text named "arg<N>", where N counts the
                     parameters already produced in this phase

DESIGN DECISION: Coercion never raises.
Bad amounts become zero, bad dates and numbers keep their raw token
with no value. The validator turns those into user-facing errors.
"""

import re
from calendar import monthrange
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

from famzoo_commands.config import FormattingSettings, ParserSettings
from famzoo_commands.models.parameter import (
    AccountParameter,
    AmountParameter,
    BooleanParameter,
    CommandParameter,
    DateParameter,
    MemberParameter,
    NumberParameter,
    TextParameter,
)
from famzoo_commands.models.vocabulary import CommandAction, ParameterType


_DAYS_OFFSET = re.compile(r"^([+-]?\d{1,6})\s+days?$")
_PLAIN_AMOUNT = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")

# Name given to a parameter bound to a required slot
DEFAULT_PARAMETER_NAMES: dict[ParameterType, str] = {
    ParameterType.AMOUNT: "amount",
    ParameterType.TEXT: "text",
    ParameterType.DATE: "date",
    ParameterType.MEMBER: "member",
    ParameterType.ACCOUNT: "account",
    ParameterType.BOOLEAN: "enabled",
    ParameterType.NUMBER: "number",
}


def _add_months(start: date, months: int) -> date:
    """Same day ``months`` later, clamped to the end of shorter months."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, monthrange(year, month)[1])
    return date(year, month, day)


class ParameterParser:
    """
    Coerces tokens into typed CommandParameter values.

    Stateless apart from its configuration; safe to share between threads.
    """

    def __init__(
        self,
        formatting: Optional[FormattingSettings] = None,
        settings: Optional[ParserSettings] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        """
        Args:
            formatting: Currency symbol and date formats to accept.
            settings: Truthy tokens for booleans.
            today: Clock used for relative dates ("tomorrow"). Defaults
                   to date.today.
        """
        self._formatting = formatting or FormattingSettings()
        self._settings = settings or ParserSettings()
        self._today = today or date.today

    # -------------------------------------------------------------------------
    # Coercion rules
    # -------------------------------------------------------------------------

    def parse_amount(self, value: str) -> Optional[Decimal]:
        """
        Exact decimal with currency symbol and thousands separators removed.

        Only plain decimal notation is read: exponents ("1e5"), NaN and
        Infinity are rejected, as is anything above the configured
        max_amount.
        """
        cleaned = value.strip()
        for symbol in {"$", self._formatting.currency_symbol}:
            cleaned = cleaned.replace(symbol, "")
        cleaned = cleaned.replace(",", "")
        if not _PLAIN_AMOUNT.match(cleaned):
            return None
        try:
            amount = Decimal(cleaned)
        except InvalidOperation:
            return None
        if abs(amount) > self._settings.max_amount:
            return None
        return amount

    def parse_date(self, value: str) -> Optional[date]:
        """
        Try short date, short date-time, ISO date, then relative keywords.

        First format that parses wins.
        """
        text = value.strip()

        formats = (
            list(self._formatting.short_date_input_formats)
            + list(self._formatting.short_datetime_formats)
            + [self._formatting.iso_date_format]
        )
        for fmt in formats:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue

        return self.parse_relative_date(text)

    def parse_relative_date(self, value: str) -> Optional[date]:
        """today, tomorrow, yesterday, next week, next month, "<N> days"."""
        lowered = " ".join(value.lower().split())
        today = self._today()

        if lowered == "today":
            return today
        if lowered == "tomorrow":
            return today + timedelta(days=1)
        if lowered == "yesterday":
            return today - timedelta(days=1)
        if lowered == "next week":
            return today + timedelta(weeks=1)
        if lowered == "next month":
            return _add_months(today, 1)

        match = _DAYS_OFFSET.match(lowered)
        if match:
            try:
                return today + timedelta(days=int(match.group(1)))
            except (OverflowError, ValueError):
                return None
        return None

    def parse_boolean(self, value: str) -> bool:
        return value.strip().lower() in self._settings.truthy_tokens

    def parse_number(self, value: str) -> Optional[float]:
        try:
            return float(value)
        except ValueError:
            return None

    def coerce(
        self,
        parameter_type: ParameterType,
        raw: str,
        name: Optional[str] = None,
        is_required: bool = True,
    ) -> CommandParameter:
        """Build the typed parameter for one raw token. Never raises."""
        name = name if name is not None else DEFAULT_PARAMETER_NAMES[parameter_type]

        if parameter_type == ParameterType.AMOUNT:
            amount = self.parse_amount(raw)
            return AmountParameter(
                name=name,
                raw_value=raw,
                is_required=is_required,
                value=amount if amount is not None else Decimal("0"),
            )
        if parameter_type == ParameterType.DATE:
            return DateParameter(
                name=name, raw_value=raw, is_required=is_required, value=self.parse_date(raw)
            )
        if parameter_type == ParameterType.BOOLEAN:
            return BooleanParameter(
                name=name, raw_value=raw, is_required=is_required, value=self.parse_boolean(raw)
            )
        if parameter_type == ParameterType.NUMBER:
            return NumberParameter(
                name=name, raw_value=raw, is_required=is_required, value=self.parse_number(raw)
            )
        if parameter_type == ParameterType.MEMBER:
            return MemberParameter(name=name, raw_value=raw, is_required=is_required, value=raw)
        if parameter_type == ParameterType.ACCOUNT:
            return AccountParameter(name=name, raw_value=raw, is_required=is_required, value=raw)
        return TextParameter(name=name, raw_value=raw, is_required=is_required, value=raw)

    # -------------------------------------------------------------------------
    # Token consumption
    # -------------------------------------------------------------------------

    def parse_parameters(
        self,
        tokens: list[str],
        action: CommandAction,
    ) -> list[CommandParameter]:
        """Parse the tokens that follow the header for ``action``."""
        required = action.required_parameter_types

        parameters = [
            self.coerce(parameter_type, token)
            for parameter_type, token in zip(required, tokens)
        ]

        if len(tokens) > len(required):
            parameters.extend(self.parse_additional_parameters(tokens[len(required):]))

        return parameters

    def parse_additional_parameters(self, tokens: list[str]) -> list[CommandParameter]:
        """Flags and bare positional arguments after the required ones."""
        parameters: list[CommandParameter] = []
        i = 0

        while i < len(tokens):
            token = tokens[i]

            if token.startswith("--"):
                flag_name = token[2:]
                if i + 1 < len(tokens) and not tokens[i + 1].startswith("--"):
                    parameters.append(TextParameter(
                        name=flag_name,
                        raw_value=tokens[i + 1],
                        value=tokens[i + 1],
                        is_required=False,
                    ))
                    i += 2
                    continue
                parameters.append(self._flag(flag_name))
            elif token.startswith("-"):
                parameters.append(self._flag(token[1:]))
            else:
                parameters.append(TextParameter(
                    name=f"arg{len(parameters)}",
                    raw_value=token,
                    value=token,
                    is_required=False,
                ))
            i += 1

        return parameters

    @staticmethod
    def _flag(name: str) -> BooleanParameter:
        return BooleanParameter(name=name, raw_value="true", value=True, is_required=False)
