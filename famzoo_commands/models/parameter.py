"""
Command Parameter Models

A parameter is one typed argument of a command. Each ParameterType has
its own model carrying a strongly typed ``value`` next to the raw token
it was read from, so consumers never have to guess what a value holds.

DESIGN DECISION: Coercion never fails, validation reports.
A malformed amount is stored as zero and a malformed date or number is
stored as None with the raw token kept. validate() on the parameter is
where those problems surface.
"""

from datetime import date
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from famzoo_commands.models.errors import ValidationError
from famzoo_commands.models.vocabulary import ParameterType


class CommandParameter(BaseModel):
    """
    Fields shared by every parameter variant.

    ``is_required`` marks parameters bound positionally to an action's
    required parameter list; flags and extra arguments are optional.
    """

    model_config = ConfigDict(frozen=True)

    type: ParameterType
    name: str
    raw_value: str
    is_required: bool = True

    @property
    def string_value(self) -> str:
        return self.raw_value

    @property
    def decimal_value(self) -> Optional[Decimal]:
        return None

    @property
    def date_value(self) -> Optional[date]:
        return None

    @property
    def bool_value(self) -> bool:
        return False

    @property
    def number_value(self) -> Optional[float]:
        return None

    def validate_value(self) -> list[ValidationError]:
        """Check this parameter's own value. Empty list means valid."""
        return []

    def semantic_key(self) -> tuple:
        """(name, type, value) triple used to compare parsed commands."""
        return (self.name, self.type, getattr(self, "value", self.raw_value))


# Amounts with this many integer digits or more are invalid
MAX_AMOUNT_DIGITS = 15


class AmountParameter(CommandParameter):
    """Money amount. Unparseable input is coerced to zero."""

    type: Literal[ParameterType.AMOUNT] = ParameterType.AMOUNT
    value: Decimal = Decimal("0")

    @property
    def decimal_value(self) -> Optional[Decimal]:
        return self.value

    def validate_value(self) -> list[ValidationError]:
        if not self.value.is_finite() or self.value.adjusted() >= MAX_AMOUNT_DIGITS:
            return [ValidationError.invalid_parameter_format("amount")]
        if self.value <= 0:
            return [ValidationError.invalid_amount()]
        return []


class DateParameter(CommandParameter):
    """Calendar date. None when the raw token could not be read as a date."""

    type: Literal[ParameterType.DATE] = ParameterType.DATE
    value: Optional[date] = None

    @property
    def date_value(self) -> Optional[date]:
        return self.value

    def validate_value(self) -> list[ValidationError]:
        if self.value is None:
            return [ValidationError.invalid_parameter_format("date")]
        return []


class TextParameter(CommandParameter):
    type: Literal[ParameterType.TEXT] = ParameterType.TEXT
    value: str

    def validate_value(self) -> list[ValidationError]:
        if not self.value.strip():
            return [ValidationError.invalid_parameter_format("text")]
        return []


class MemberParameter(CommandParameter):
    type: Literal[ParameterType.MEMBER] = ParameterType.MEMBER
    value: str

    def validate_value(self) -> list[ValidationError]:
        if not self.value.strip():
            return [ValidationError.invalid_parameter_format(self.name)]
        return []


class AccountParameter(CommandParameter):
    type: Literal[ParameterType.ACCOUNT] = ParameterType.ACCOUNT
    value: str

    def validate_value(self) -> list[ValidationError]:
        if not self.value.strip():
            return [ValidationError.invalid_parameter_format(self.name)]
        return []


class BooleanParameter(CommandParameter):
    """Boolean switch. Always valid."""

    type: Literal[ParameterType.BOOLEAN] = ParameterType.BOOLEAN
    value: bool = False

    @property
    def bool_value(self) -> bool:
        return self.value


class NumberParameter(CommandParameter):
    type: Literal[ParameterType.NUMBER] = ParameterType.NUMBER
    value: Optional[float] = None

    @property
    def number_value(self) -> Optional[float]:
        return self.value

    def validate_value(self) -> list[ValidationError]:
        if self.value is None:
            return [ValidationError.invalid_parameter_format("number")]
        return []


# Discriminated union used wherever parameters are stored or serialized
AnyParameter = Annotated[
    Union[
        AmountParameter,
        DateParameter,
        TextParameter,
        MemberParameter,
        AccountParameter,
        BooleanParameter,
        NumberParameter,
    ],
    Field(discriminator="type"),
]
