"""
Command Validation

Validation runs in two passes over a parsed command:

PASS 1 - PARAMETER VALUES:
- every parameter checks its own value
- amounts must be greater than zero
- dates and numbers must have parsed
- text, member and account values must not be blank

PASS 2 - REQUIRED PARAMETERS:
- every type in the action's required list must appear among the
  parameters, wherever it ended up

Both passes always run and every error is kept, so the user sees
all problems at once.

IMPORTANT: Validation NEVER fixes values.
It reports them for the user to correct.
"""

from typing import Optional

from famzoo_commands.models.command import Command
from famzoo_commands.models.errors import ValidationError, ValidationResult
from famzoo_commands.parser import CommandParser


class CommandValidator:
    """Validates parsed commands and raw command text."""

    def __init__(self, parser: Optional[CommandParser] = None):
        """
        Args:
            parser: Used by validate_text(). Created on demand if omitted.
        """
        self._parser = parser

    def _validate_values(self, command: Command) -> list[ValidationError]:
        errors = []
        for parameter in command.parameters:
            errors.extend(parameter.validate_value())
        return errors

    def _validate_required(self, command: Command) -> list[ValidationError]:
        provided = {parameter.type for parameter in command.parameters}
        return [
            ValidationError.missing_required_parameter(required.value)
            for required in command.action.required_parameter_types
            if required not in provided
        ]

    def validate(self, command: Command) -> ValidationResult:
        """Run both passes and return every error found."""
        errors = self._validate_values(command) + self._validate_required(command)
        return ValidationResult(errors=tuple(errors))

    def validate_text(self, text: str) -> ValidationResult:
        """
        Parse and validate in one step.

        Blank input is EMPTY_COMMAND, unparseable input is UNKNOWN_COMMAND,
        otherwise the result of validate().
        """
        if self._parser is None:
            self._parser = CommandParser()

        command, parse_error = self._parser.parse_with_diagnosis(text)
        if command is None:
            return ValidationResult.invalid(parse_error or ValidationError.unknown_command())
        return self.validate(command)

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """
        Generate a short summary of validation results for chat display.
        """
        if result.is_valid:
            return "✅ Command looks good."

        lines = ["❌ Please fix the following:"]
        for error in result.errors:
            lines.append(f"   • {error.message}")
        return "\n".join(lines)
