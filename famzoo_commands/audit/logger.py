"""
Audit Logger

DESIGN DECISION: Every utterance is traced from receipt to response.
This provides:
1. Traceability of what the user typed and what the assistant did
2. Debugging capability for misparsed commands
3. A history the family can review

The audit logger:
- Is async to match the dispatch boundary
- Gracefully handles failures (a broken audit store never breaks a command)
- Uses correlation IDs to group the events of one utterance
"""

from typing import Optional
from uuid import UUID, uuid4

import structlog

from famzoo_commands.models.audit import AuditEvent, AuditEventBuilder
from famzoo_commands.services.storage import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit store, when one is configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger()

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return await self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    async def log_command_received(
        self,
        raw_text: str,
        correlation_id: UUID,
    ) -> None:
        await self.log(AuditEventBuilder.command_received(
            raw_text=raw_text,
            correlation_id=correlation_id,
        ))

    async def log_command_parsed(
        self,
        command_type: str,
        command_action: str,
        parameter_count: int,
        correlation_id: UUID,
    ) -> None:
        await self.log(AuditEventBuilder.command_parsed(
            command_type=command_type,
            command_action=command_action,
            parameter_count=parameter_count,
            correlation_id=correlation_id,
        ))

    async def log_parse_failed(
        self,
        raw_text: str,
        reason: str,
        correlation_id: UUID,
    ) -> None:
        await self.log(AuditEventBuilder.parse_failed(
            raw_text=raw_text,
            reason=reason,
            correlation_id=correlation_id,
        ))

    async def log_validation_passed(
        self,
        command_type: str,
        command_action: str,
        correlation_id: UUID,
    ) -> None:
        await self.log(AuditEventBuilder.validation_passed(
            command_type=command_type,
            command_action=command_action,
            correlation_id=correlation_id,
        ))

    async def log_validation_failed(
        self,
        command_type: str,
        command_action: str,
        errors: list[dict],
        correlation_id: UUID,
    ) -> None:
        await self.log(AuditEventBuilder.validation_failed(
            command_type=command_type,
            command_action=command_action,
            errors=errors,
            correlation_id=correlation_id,
        ))

    async def log_command_dispatched(
        self,
        command_type: str,
        command_action: str,
        success: bool,
        correlation_id: UUID,
    ) -> None:
        await self.log(AuditEventBuilder.command_dispatched(
            command_type=command_type,
            command_action=command_action,
            success=success,
            correlation_id=correlation_id,
        ))

    async def log_handler_not_found(
        self,
        command_type: str,
        command_action: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.handler_not_found(
            command_type=command_type,
            command_action=command_action,
            correlation_id=correlation_id,
        ))

    async def log_dispatch_failed(
        self,
        command_type: str,
        command_action: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.dispatch_failed(
            command_type=command_type,
            command_action=command_action,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        await self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this when a new line of input arrives and pass it through
    parsing, validation and dispatch.
    """
    return uuid4()
