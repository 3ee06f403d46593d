"""Tests for command validation."""

from decimal import Decimal

from famzoo_commands.models.command import Command
from famzoo_commands.models.errors import ValidationErrorKind
from famzoo_commands.models.parameter import AmountParameter, MemberParameter, TextParameter
from famzoo_commands.models.vocabulary import CommandAction, CommandType
from famzoo_commands.validation import CommandValidator


class TestCommandValidator:
    """Tests for CommandValidator."""

    def test_valid_command(self, parser, validator):
        result = validator.validate(parser.parse('list add "buy milk"'))
        assert result.is_valid
        assert result.error_count == 0

    def test_every_error_is_collected(self, validator):
        """Test validation does not stop at the first problem."""
        command = Command(
            type=CommandType.ACCOUNT,
            action=CommandAction.CREDIT,
            parameters=(
                AmountParameter(name="amount", raw_value="abc", value=Decimal("0")),
                TextParameter(name="note", raw_value=" ", value=" ", is_required=False),
                MemberParameter(name="who", raw_value="", value="", is_required=False),
            ),
        )

        result = validator.validate(command)

        assert [e.kind for e in result.errors] == [
            ValidationErrorKind.INVALID_AMOUNT,
            ValidationErrorKind.INVALID_PARAMETER_FORMAT,
            ValidationErrorKind.INVALID_PARAMETER_FORMAT,
        ]
        assert result.messages[2] == "Invalid format for parameter: who"

    def test_missing_date(self, validator):
        """Test a missing required parameter is reported by type."""
        command = Command(
            type=CommandType.ITEM,
            action=CommandAction.DUE,
            parameters=(),
        )
        result = validator.validate(command)
        assert result.messages == ["Missing required parameter: date"]

    def test_bad_date(self, parser, validator):
        result = validator.validate(parser.parse('item due someday "walk the dog"'))
        assert result.has_error(ValidationErrorKind.INVALID_PARAMETER_FORMAT)
        assert not result.has_error(ValidationErrorKind.MISSING_REQUIRED_PARAMETER)

    def test_validate_text_empty(self, validator):
        result = validator.validate_text("   ")
        assert result.has_error(ValidationErrorKind.EMPTY_COMMAND)
        assert result.messages == ["Command cannot be empty"]

    def test_validate_text_unknown(self, validator):
        result = validator.validate_text("make me a sandwich")
        assert result.has_error(ValidationErrorKind.UNKNOWN_COMMAND)

    def test_validate_text_missing(self, validator):
        result = validator.validate_text("account debit")
        assert result.has_error(ValidationErrorKind.MISSING_REQUIRED_PARAMETER)

    def test_validator_without_parser(self):
        assert CommandValidator().validate_text("a b").is_valid

    def test_summary_when_valid(self, parser, validator):
        result = validator.validate(parser.parse("a b"))
        assert validator.get_user_friendly_summary(result) == "✅ Command looks good."

    def test_summary_lists_every_error(self, validator):
        result = validator.validate_text("account credit -5")
        summary = validator.get_user_friendly_summary(result)

        assert summary.startswith("❌ Please fix the following:")
        assert "• Amount must be greater than zero" in summary
