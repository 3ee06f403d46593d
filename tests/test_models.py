"""
Tests for FamZoo Commands

Test strategy:
1. Unit tests for individual components (models, parser, validator)
2. Async tests for dispatch and the end-to-end flow over in-memory storage
3. No real network calls in tests
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError as PydanticValidationError

from famzoo_commands.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from famzoo_commands.models.command import AccountBalanceResponse, Command, CommandResponse
from famzoo_commands.models.errors import ValidationError, ValidationErrorKind, ValidationResult
from famzoo_commands.models.ledger import (
    AccountType,
    Member,
    MemberRole,
    Permission,
    Transaction,
    TransactionStatus,
    TransactionType,
    compute_balance,
)
from famzoo_commands.models.parameter import (
    AmountParameter,
    BooleanParameter,
    DateParameter,
    TextParameter,
)
from famzoo_commands.models.vocabulary import CommandAction, CommandType, ParameterType


class TestVocabulary:
    """Tests for vocabulary enums."""

    def test_required_parameters(self):
        assert CommandAction.CREDIT.required_parameter_types == (ParameterType.AMOUNT,)
        assert CommandAction.DUE.required_parameter_types == (ParameterType.DATE,)
        assert CommandAction.BALANCE.required_parameter_types == ()
        assert CommandAction.ADD.requires_parameters
        assert not CommandAction.LIST.requires_parameters

    def test_every_action_is_allowed_somewhere(self):
        reachable = {a for t in CommandType for a in t.allowed_actions}
        assert reachable == set(CommandAction)

    def test_display_and_description(self):
        assert CommandType.ACCOUNT.display_name == "Account"
        assert CommandAction.CREDIT.description == "Add money to account"
        assert CommandType.ITEM.abbreviations == ("i",)


class TestValidationErrors:
    """Tests for validation error models."""

    def test_messages(self):
        assert ValidationError.missing_required_parameter("amount").message == (
            "Missing required parameter: amount"
        )
        assert ValidationError.invalid_parameter_format("date").message == (
            "Invalid format for parameter: date"
        )
        assert ValidationError.invalid_amount().message == "Amount must be greater than zero"
        assert ValidationError.empty_command().message == "Command cannot be empty"
        assert ValidationError.unknown_command().message == "Unknown command"

    def test_reserved_kinds_have_messages(self):
        error = ValidationError(kind=ValidationErrorKind.INSUFFICIENT_PERMISSIONS)
        assert "permissions" in error.message.lower()

    def test_result(self):
        assert ValidationResult.valid().is_valid

        result = ValidationResult.invalid(
            ValidationError.invalid_amount(),
            ValidationError.missing_required_parameter("text"),
        )
        assert not result.is_valid
        assert result.error_count == 2
        assert result.has_error(ValidationErrorKind.INVALID_AMOUNT)
        assert not result.has_error(ValidationErrorKind.EMPTY_COMMAND)


class TestParameters:
    """Tests for typed parameter models."""

    def test_amount_accessors(self):
        parameter = AmountParameter(name="amount", raw_value="25.00", value=Decimal("25.00"))
        assert parameter.decimal_value == Decimal("25.00")
        assert parameter.date_value is None
        assert parameter.string_value == "25.00"
        assert parameter.validate_value() == []

    def test_zero_amount_is_invalid(self):
        parameter = AmountParameter(name="amount", raw_value="0", value=Decimal("0"))
        assert parameter.validate_value() == [ValidationError.invalid_amount()]

    def test_blank_text_is_invalid(self):
        parameter = TextParameter(name="text", raw_value="  ", value="  ")
        assert parameter.validate_value() == [ValidationError.invalid_parameter_format("text")]

    def test_boolean_always_valid(self):
        assert BooleanParameter(name="urgent", raw_value="no", value=False).validate_value() == []

    def test_parameters_are_immutable(self):
        parameter = TextParameter(name="text", raw_value="milk", value="milk")
        with pytest.raises(PydanticValidationError):
            parameter.value = "eggs"

    def test_semantic_key(self):
        parameter = DateParameter(name="date", raw_value="12/25/24", value=date(2024, 12, 25))
        assert parameter.semantic_key() == ("date", ParameterType.DATE, date(2024, 12, 25))


class TestCommand:
    """Tests for the Command model."""

    @pytest.fixture
    def command(self) -> Command:
        return Command(
            type=CommandType.ACCOUNT,
            action=CommandAction.CREDIT,
            parameters=(
                AmountParameter(name="amount", raw_value="25", value=Decimal("25")),
                TextParameter(name="note", raw_value="lunch", value="lunch", is_required=False),
                TextParameter(name="arg1", raw_value="Savings", value="Savings", is_required=False),
            ),
            raw_text="account credit 25 --note lunch Savings",
        )

    def test_lookups(self, command):
        assert command.key == (CommandType.ACCOUNT, CommandAction.CREDIT)
        assert command.first_of_type(ParameterType.AMOUNT).decimal_value == Decimal("25")
        assert len(command.parameters_of_type(ParameterType.TEXT)) == 2
        assert command.named("note").string_value == "lunch"
        assert command.named("missing") is None
        assert [p.string_value for p in command.extra_arguments()] == ["Savings"]

    def test_flag_named_arg_is_not_an_extra_argument(self, command):
        flagged = command.with_parameter(
            TextParameter(name="arg7", raw_value="x", value="x", is_required=False)
        )
        assert [p.string_value for p in flagged.extra_arguments()] == ["Savings"]

    def test_with_parameter_returns_new_command(self, command):
        flag = BooleanParameter(name="urgent", raw_value="true", value=True, is_required=False)
        updated = command.with_parameter(flag)

        assert len(updated.parameters) == 4
        assert len(command.parameters) == 3

    def test_json_round_trip(self, command):
        """Test parameters come back as their own variants."""
        restored = Command.model_validate_json(command.model_dump_json())

        assert restored == command
        assert isinstance(restored.parameters[0], AmountParameter)
        assert isinstance(restored.parameters[1], TextParameter)


class TestResponses:
    """Tests for response envelopes."""

    def test_not_implemented_message(self):
        response = CommandResponse.not_implemented(CommandType.SHORTCUT, CommandAction.LIST)
        assert not response.success
        assert response.message == "Command not yet implemented: shortcut list"

    def test_balance_response(self):
        response = AccountBalanceResponse.for_account(
            account_name="John's Spending",
            balance=Decimal("125.50"),
            message="John's Spending: $125.50",
        )
        assert response.success
        assert response.data == {"balance": Decimal("125.50"), "account_name": "John's Spending"}


class TestLedgerModels:
    """Tests for ledger records."""

    def test_account_type_rules(self):
        assert AccountType.SPENDING.can_debit
        assert AccountType.PARENT.can_debit
        assert not AccountType.SAVINGS.can_debit
        assert AccountType.CHORES.can_credit
        assert AccountType.SAVINGS.display_name == "Savings Account"

    def test_member_permissions(self):
        child = Member(first_name="Tommy", last_name="Doe", role=MemberRole.CHILD, family_id="f1")
        parent = Member(first_name="John", last_name="Doe", role=MemberRole.PARENT, family_id="f1")

        assert not child.has_permission(Permission.MANAGE_ALL_ACCOUNTS)
        assert child.has_permission(Permission.CREATE_LISTS)
        assert parent.has_permission(Permission.MANAGE_SETTINGS)

    def test_member_matches(self):
        member = Member(first_name="Sarah", last_name="Doe", role=MemberRole.TEEN, family_id="f1")
        assert member.matches("sarah")
        assert member.matches("Sarah Doe")
        assert not member.matches("John")
        assert member.display_name == "Sarah Doe (Teen)"

    def test_compute_balance_counts_completed_only(self):
        account_id = uuid4()
        transactions = [
            Transaction(account_id=account_id, type=TransactionType.CREDIT, amount=Decimal("100")),
            Transaction(account_id=account_id, type=TransactionType.DEBIT, amount=Decimal("30.25")),
            Transaction(
                account_id=account_id,
                type=TransactionType.CREDIT,
                amount=Decimal("50"),
                status=TransactionStatus.PENDING,
            ),
        ]
        assert compute_balance(transactions) == Decimal("69.75")
        assert compute_balance([]) == Decimal("0")

    def test_transaction_amount_must_be_positive(self):
        with pytest.raises(PydanticValidationError):
            Transaction(account_id=uuid4(), type=TransactionType.DEBIT, amount=Decimal("0"))


class TestAuditModels:
    """Tests for audit event models."""

    def test_audit_event_creation(self):
        event = AuditEvent(
            event_type=AuditEventType.COMMAND_RECEIVED,
            description="Test event",
        )
        assert event.severity == AuditSeverity.INFO
        assert event.event_id is not None
        assert event.timestamp is not None

    def test_builder_dispatch_outcomes(self):
        correlation_id = uuid4()

        ok = AuditEventBuilder.command_dispatched("account", "balance", True, correlation_id)
        failed = AuditEventBuilder.command_dispatched("account", "debit", False, correlation_id)

        assert ok.severity == AuditSeverity.INFO
        assert failed.severity == AuditSeverity.WARNING
        assert ok.correlation_id == correlation_id
        assert ok.command_type == "account"

    def test_to_log_dict(self):
        event = AuditEventBuilder.handler_not_found("shortcut", "list")
        log_dict = event.to_log_dict()

        assert log_dict["event_type"] == "handler_not_found"
        assert log_dict["command_action"] == "list"
        assert log_dict["correlation_id"] is None
