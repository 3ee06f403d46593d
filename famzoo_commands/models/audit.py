"""
Audit Models for FamZoo Commands

Every utterance leaves a trail: received, parsed (or not), validated,
dispatched, and how dispatch ended. Events that belong to the same
utterance share a correlation ID.

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit, one per step of the command lifecycle."""
    # Input
    COMMAND_RECEIVED = "command_received"

    # Parsing
    COMMAND_PARSED = "command_parsed"
    PARSE_FAILED = "parse_failed"

    # Validation
    VALIDATION_PASSED = "validation_passed"
    VALIDATION_FAILED = "validation_failed"

    # Dispatch
    COMMAND_DISPATCHED = "command_dispatched"
    HANDLER_NOT_FOUND = "handler_not_found"
    DISPATCH_FAILED = "dispatch_failed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Correlation - all events for one utterance
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by every event of one utterance"
    )

    # Command context
    command_type: Optional[str] = None
    command_action: Optional[str] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "command_type": self.command_type,
            "command_action": self.command_action,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.command_received(text, correlation_id)
        event = AuditEventBuilder.command_dispatched("account", "balance", True, correlation_id)
    """

    @staticmethod
    def command_received(
        raw_text: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_RECEIVED,
            correlation_id=correlation_id,
            description="Command text received",
            details={"raw_text": raw_text},
            is_user_action=True,
        )

    @staticmethod
    def command_parsed(
        command_type: str,
        command_action: str,
        parameter_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_PARSED,
            correlation_id=correlation_id,
            command_type=command_type,
            command_action=command_action,
            description=f"Parsed {command_type} {command_action}",
            details={"parameter_count": parameter_count},
        )

    @staticmethod
    def parse_failed(
        raw_text: str,
        reason: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PARSE_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Command not recognised: {reason}",
            details={"raw_text": raw_text, "reason": reason},
        )

    @staticmethod
    def validation_passed(
        command_type: str,
        command_action: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_PASSED,
            correlation_id=correlation_id,
            command_type=command_type,
            command_action=command_action,
            description="Validation passed",
        )

    @staticmethod
    def validation_failed(
        command_type: str,
        command_action: str,
        errors: list[dict],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            command_type=command_type,
            command_action=command_action,
            description=f"Validation failed with {len(errors)} errors",
            details={"errors": errors},
        )

    @staticmethod
    def command_dispatched(
        command_type: str,
        command_action: str,
        success: bool,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_DISPATCHED,
            severity=AuditSeverity.INFO if success else AuditSeverity.WARNING,
            correlation_id=correlation_id,
            command_type=command_type,
            command_action=command_action,
            description=f"Dispatched {command_type} {command_action}",
            details={"success": success},
        )

    @staticmethod
    def handler_not_found(
        command_type: str,
        command_action: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HANDLER_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            command_type=command_type,
            command_action=command_action,
            description=f"No handler for {command_type} {command_action}",
        )

    @staticmethod
    def dispatch_failed(
        command_type: str,
        command_action: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DISPATCH_FAILED,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            command_type=command_type,
            command_action=command_action,
            description=f"Handler failed: {command_type} {command_action}",
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
