"""
Validation Error Models

Parse failures and validation failures are reported with the same
vocabulary of error kinds, so a chat client can show one list of
problems whatever stage found them.

DESIGN DECISION: A ValidationResult carries EVERY error found.
Validation never stops at the first problem; the user should be able
to fix everything in one pass.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ValidationErrorKind(str, Enum):
    """
    Kinds of problem a command can have.

    INSUFFICIENT_PERMISSIONS, INVALID_ACCOUNT and INVALID_MEMBER are never
    produced by the parser or validator. They are reserved for the
    permission and data collaborators behind the dispatcher.
    """
    MISSING_REQUIRED_PARAMETER = "missing_required_parameter"
    INVALID_PARAMETER_FORMAT = "invalid_parameter_format"
    INSUFFICIENT_PERMISSIONS = "insufficient_permissions"
    INVALID_ACCOUNT = "invalid_account"
    INVALID_MEMBER = "invalid_member"
    INVALID_AMOUNT = "invalid_amount"
    EMPTY_COMMAND = "empty_command"
    UNKNOWN_COMMAND = "unknown_command"


class ValidationError(BaseModel):
    """A single problem with a command."""

    model_config = ConfigDict(frozen=True)

    kind: ValidationErrorKind
    subject: Optional[str] = Field(
        default=None,
        description="Parameter type or name the error is about"
    )

    @property
    def message(self) -> str:
        """Human-readable description of the error."""
        if self.kind == ValidationErrorKind.MISSING_REQUIRED_PARAMETER:
            return f"Missing required parameter: {self.subject}"
        if self.kind == ValidationErrorKind.INVALID_PARAMETER_FORMAT:
            return f"Invalid format for parameter: {self.subject}"
        if self.kind == ValidationErrorKind.INSUFFICIENT_PERMISSIONS:
            return "Insufficient permissions to execute this command"
        if self.kind == ValidationErrorKind.INVALID_ACCOUNT:
            return "Invalid or unknown account"
        if self.kind == ValidationErrorKind.INVALID_MEMBER:
            return "Invalid or unknown member"
        if self.kind == ValidationErrorKind.INVALID_AMOUNT:
            return "Amount must be greater than zero"
        if self.kind == ValidationErrorKind.EMPTY_COMMAND:
            return "Command cannot be empty"
        return "Unknown command"

    # Constructors mirroring the error kinds

    @classmethod
    def missing_required_parameter(cls, subject: str) -> "ValidationError":
        return cls(kind=ValidationErrorKind.MISSING_REQUIRED_PARAMETER, subject=subject)

    @classmethod
    def invalid_parameter_format(cls, subject: str) -> "ValidationError":
        return cls(kind=ValidationErrorKind.INVALID_PARAMETER_FORMAT, subject=subject)

    @classmethod
    def invalid_amount(cls) -> "ValidationError":
        return cls(kind=ValidationErrorKind.INVALID_AMOUNT, subject="amount")

    @classmethod
    def empty_command(cls) -> "ValidationError":
        return cls(kind=ValidationErrorKind.EMPTY_COMMAND)

    @classmethod
    def unknown_command(cls) -> "ValidationError":
        return cls(kind=ValidationErrorKind.UNKNOWN_COMMAND)


class ValidationResult(BaseModel):
    """Outcome of validating a command: valid only when no errors were found."""

    model_config = ConfigDict(frozen=True)

    errors: tuple[ValidationError, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def messages(self) -> list[str]:
        return [error.message for error in self.errors]

    def has_error(self, kind: ValidationErrorKind) -> bool:
        return any(error.kind == kind for error in self.errors)

    @classmethod
    def valid(cls) -> "ValidationResult":
        return cls()

    @classmethod
    def invalid(cls, *errors: ValidationError) -> "ValidationResult":
        return cls(errors=tuple(errors))
