"""
Shared fixtures.

The parser is pinned to a fixed "today" so relative dates are
deterministic. The ledger is the in-memory sample family; no network
or external services are used anywhere in the tests.
"""

from datetime import date

import pytest

from famzoo_commands.audit import AuditLogger
from famzoo_commands.dispatch import CommandDispatcher, HandlerContext
from famzoo_commands.parser import CommandParser, ParameterParser
from famzoo_commands.services.storage import InMemoryAuditStorage, InMemoryLedgerStorage
from famzoo_commands.validation import CommandValidator


# Last day of a leap-year January, to exercise month-end clamping
FIXED_TODAY = date(2024, 1, 31)


@pytest.fixture
def today() -> date:
    return FIXED_TODAY


@pytest.fixture
def parser() -> CommandParser:
    return CommandParser(today=lambda: FIXED_TODAY)


@pytest.fixture
def parameter_parser() -> ParameterParser:
    return ParameterParser(today=lambda: FIXED_TODAY)


@pytest.fixture
def validator(parser) -> CommandValidator:
    return CommandValidator(parser)


@pytest.fixture
def storage() -> InMemoryLedgerStorage:
    return InMemoryLedgerStorage.with_sample_family()


@pytest.fixture
def audit_storage() -> InMemoryAuditStorage:
    return InMemoryAuditStorage()


@pytest.fixture
def audit_logger(audit_storage) -> AuditLogger:
    return AuditLogger(audit_storage)


@pytest.fixture
def dispatcher(storage, audit_logger) -> CommandDispatcher:
    return CommandDispatcher(
        context=HandlerContext(storage=storage),
        audit_logger=audit_logger,
    )
