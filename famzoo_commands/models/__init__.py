"""
Data Models Package

This package contains all Pydantic models and enums used by the command core.
"""

from famzoo_commands.models.vocabulary import (
    CommandAction,
    CommandType,
    ParameterType,
)
from famzoo_commands.models.errors import (
    ValidationError,
    ValidationErrorKind,
    ValidationResult,
)
from famzoo_commands.models.parameter import (
    AccountParameter,
    AmountParameter,
    AnyParameter,
    BooleanParameter,
    CommandParameter,
    DateParameter,
    MemberParameter,
    NumberParameter,
    TextParameter,
)
from famzoo_commands.models.command import (
    AccountBalanceResponse,
    Command,
    CommandResponse,
)
from famzoo_commands.models.ledger import (
    Account,
    AccountType,
    FamilyList,
    ListItem,
    Member,
    MemberRole,
    Permission,
    Transaction,
    TransactionStatus,
    TransactionType,
    compute_balance,
)
from famzoo_commands.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Vocabulary
    "CommandAction",
    "CommandType",
    "ParameterType",
    # Errors
    "ValidationError",
    "ValidationErrorKind",
    "ValidationResult",
    # Parameters
    "AccountParameter",
    "AmountParameter",
    "AnyParameter",
    "BooleanParameter",
    "CommandParameter",
    "DateParameter",
    "MemberParameter",
    "NumberParameter",
    "TextParameter",
    # Commands
    "AccountBalanceResponse",
    "Command",
    "CommandResponse",
    # Ledger
    "Account",
    "AccountType",
    "FamilyList",
    "ListItem",
    "Member",
    "MemberRole",
    "Permission",
    "Transaction",
    "TransactionStatus",
    "TransactionType",
    "compute_balance",
    # Audit
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
