"""
Command and Response Models

A Command is the structured result of parsing one line of user input.
It is created once per parse and never mutated: anything that "changes"
a command builds a new instance.

A CommandResponse is what dispatch produces, success or failure, exactly
once per executed command.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from famzoo_commands.models.parameter import AnyParameter, CommandParameter
from famzoo_commands.models.vocabulary import CommandAction, CommandType, ParameterType

if TYPE_CHECKING:
    from famzoo_commands.formatting import CommandFormatter


class Command(BaseModel):
    """
    A parsed command.

    Parameters keep parse order. Handlers should look parameters up by
    type or name rather than by index.
    """

    model_config = ConfigDict(frozen=True)

    type: CommandType
    action: CommandAction
    parameters: tuple[AnyParameter, ...] = ()
    raw_text: str = ""

    @property
    def key(self) -> tuple[CommandType, CommandAction]:
        """Dispatch key."""
        return (self.type, self.action)

    def parameters_of_type(self, parameter_type: ParameterType) -> list[CommandParameter]:
        return [p for p in self.parameters if p.type == parameter_type]

    def first_of_type(self, parameter_type: ParameterType) -> Optional[CommandParameter]:
        for parameter in self.parameters:
            if parameter.type == parameter_type:
                return parameter
        return None

    def named(self, name: str) -> Optional[CommandParameter]:
        for parameter in self.parameters:
            if parameter.name == name:
                return parameter
        return None

    def extra_arguments(self) -> list[CommandParameter]:
        """Bare positional tokens that followed the required parameters."""
        optional = [p for p in self.parameters if not p.is_required]
        return [
            p for index, p in enumerate(optional)
            if p.type == ParameterType.TEXT and p.name == f"arg{index}"
        ]

    def with_parameter(self, parameter: CommandParameter) -> "Command":
        """Return a copy with ``parameter`` appended."""
        return self.model_copy(update={"parameters": self.parameters + (parameter,)})

    def semantic_signature(self) -> tuple:
        """Type, action and (name, type, value) of every parameter."""
        return (
            self.type,
            self.action,
            tuple(p.semantic_key() for p in self.parameters),
        )

    def format(self, formatter: Optional["CommandFormatter"] = None) -> str:
        """Render the command back to canonical text."""
        from famzoo_commands.formatting import CommandFormatter

        return (formatter or CommandFormatter()).format(self)


class CommandResponse(BaseModel):
    """Uniform envelope returned by dispatch."""

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    data: Optional[dict[str, Any]] = None

    @classmethod
    def ok(cls, message: str, data: Optional[dict[str, Any]] = None) -> "CommandResponse":
        return cls(success=True, message=message, data=data)

    @classmethod
    def failure(cls, message: str, data: Optional[dict[str, Any]] = None) -> "CommandResponse":
        return cls(success=False, message=message, data=data)

    @classmethod
    def not_implemented(cls, command_type: CommandType, action: CommandAction) -> "CommandResponse":
        return cls(
            success=False,
            message=f"Command not yet implemented: {command_type.value} {action.value}",
        )


class AccountBalanceResponse(CommandResponse):
    """Balance lookup result; balance and account name are mirrored into ``data``."""

    balance: Decimal
    account_name: str = Field(..., min_length=1)

    @classmethod
    def for_account(
        cls,
        account_name: str,
        balance: Decimal,
        message: str,
    ) -> "AccountBalanceResponse":
        return cls(
            success=True,
            message=message,
            balance=balance,
            account_name=account_name,
            data={"balance": balance, "account_name": account_name},
        )
