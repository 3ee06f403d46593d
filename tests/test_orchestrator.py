"""Tests for the end-to-end command flow."""

import logging
from decimal import Decimal

import pytest

from famzoo_commands.config import get_settings
from famzoo_commands.models.audit import AuditEventType
from famzoo_commands.orchestrator import CommandFlow, create_app_components
from famzoo_commands.services.transport import CommandURLCodec


@pytest.fixture
def flow(parser, validator, dispatcher, audit_logger) -> CommandFlow:
    return CommandFlow(
        parser=parser,
        validator=validator,
        dispatcher=dispatcher,
        audit_logger=audit_logger,
    )


class TestCommandFlow:
    """Tests for CommandFlow.handle()."""

    @pytest.mark.asyncio
    async def test_happy_path(self, flow, audit_storage):
        response = await flow.handle("account credit 25")

        assert response.success
        assert response.data["balance"] == Decimal("150.50")
        assert [e.event_type for e in audit_storage.events] == [
            AuditEventType.COMMAND_RECEIVED,
            AuditEventType.COMMAND_PARSED,
            AuditEventType.VALIDATION_PASSED,
            AuditEventType.COMMAND_DISPATCHED,
        ]

    @pytest.mark.asyncio
    async def test_events_share_correlation_id(self, flow, audit_storage):
        await flow.handle("a b")

        correlation_ids = {e.correlation_id for e in audit_storage.events}
        assert len(correlation_ids) == 1
        assert None not in correlation_ids

    @pytest.mark.asyncio
    async def test_empty_input(self, flow, audit_storage):
        response = await flow.handle("   ")

        assert not response.success
        assert response.message == "Command cannot be empty"
        assert audit_storage.events[-1].event_type == AuditEventType.PARSE_FAILED

    @pytest.mark.asyncio
    async def test_unknown_input(self, flow):
        response = await flow.handle("pay the rent")

        assert not response.success
        assert response.message == "Unknown command"

    @pytest.mark.asyncio
    async def test_validation_failure_lists_every_error(self, flow, audit_storage):
        response = await flow.handle('account credit 0 --note ""')

        assert not response.success
        assert response.data["errors"] == ["Amount must be greater than zero"]
        assert "❌ Please fix the following:" in response.message
        assert audit_storage.events[-1].event_type == AuditEventType.VALIDATION_FAILED

    @pytest.mark.asyncio
    async def test_missing_parameter_does_not_dispatch(self, flow, storage):
        response = await flow.handle("account debit")

        assert response.data["errors"] == ["Missing required parameter: amount"]
        account = await storage.find_account("John's Spending")
        assert len(await storage.list_transactions(account.id)) == 1

    @pytest.mark.asyncio
    async def test_not_implemented(self, flow):
        response = await flow.handle("member select Sarah")
        assert response.message == "Command not yet implemented: member select"

    def test_suggest(self, flow):
        assert "account" in flow.suggest("acc")
        assert flow.suggest("account d") == ["debit"]


class TestCreateAppComponents:
    """Tests for the component factory."""

    @pytest.mark.asyncio
    async def test_wired_flow_runs(self):
        flow, codec = create_app_components()

        response = await flow.handle("member list")
        assert response.success
        assert isinstance(codec, CommandURLCodec)
        assert codec.scheme == get_settings().app.message_scheme

    @pytest.mark.asyncio
    async def test_without_audit_store(self):
        flow, _ = create_app_components(persist_audit=False)
        response = await flow.handle("account balance")
        assert response.success

    def test_log_level_follows_debug_mode(self, monkeypatch):
        monkeypatch.setenv("DEBUG_MODE", "true")
        create_app_components()
        assert logging.getLogger("famzoo_commands").level == logging.DEBUG

        monkeypatch.setenv("DEBUG_MODE", "false")
        create_app_components()
        assert logging.getLogger("famzoo_commands").level == logging.INFO
