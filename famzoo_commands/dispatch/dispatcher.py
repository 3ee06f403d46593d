"""
Command Dispatcher

The single asynchronous boundary of the command core. execute() looks
the command's (type, action) pair up in a HandlerRegistry and awaits
the handler.

Guarantees:
- always returns a CommandResponse, never raises
- unmapped pairs get "Command not yet implemented: <type> <action>"
- storage and handler errors become failure responses
- nothing is cached between calls; handlers recompute what they report

Retries, timeouts and request coalescing belong to the caller and the
remote ledger client, not here.
"""

from typing import Optional
from uuid import UUID

import structlog

from famzoo_commands.audit import AuditLogger
from famzoo_commands.dispatch.handlers import DEFAULT_HANDLERS
from famzoo_commands.dispatch.registry import HandlerContext, HandlerRegistry
from famzoo_commands.models.command import Command, CommandResponse
from famzoo_commands.services.storage import InMemoryLedgerStorage, StorageError


logger = structlog.get_logger(__name__)


class CommandDispatcher:
    """Executes commands through registered handlers."""

    def __init__(
        self,
        context: Optional[HandlerContext] = None,
        registry: Optional[HandlerRegistry] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Args:
            context: Collaborators passed to handlers. Defaults to an
                     in-memory ledger with sample data.
            registry: Handler table. Defaults to a copy of DEFAULT_HANDLERS.
            audit_logger: Optional audit trail for dispatch outcomes.
        """
        self._context = context or HandlerContext(storage=InMemoryLedgerStorage.with_sample_family())
        self._registry = registry if registry is not None else DEFAULT_HANDLERS.copy()
        self._audit_logger = audit_logger

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    @property
    def context(self) -> HandlerContext:
        return self._context

    async def execute(
        self,
        command: Command,
        correlation_id: Optional[UUID] = None,
    ) -> CommandResponse:
        """Run the handler for ``command`` and return its response."""
        type_name = command.type.value
        action_name = command.action.value

        handler = self._registry.get(command.type, command.action)
        if handler is None:
            if self._audit_logger:
                await self._audit_logger.log_handler_not_found(
                    command_type=type_name,
                    command_action=action_name,
                    correlation_id=correlation_id,
                )
            return CommandResponse.not_implemented(command.type, command.action)

        try:
            response = await handler(command, self._context)
        except StorageError as e:
            logger.warning(
                "dispatch_storage_error",
                command_type=type_name,
                action=action_name,
                error=str(e),
            )
            response = CommandResponse.failure(f"Could not complete {type_name} {action_name}: {e}")
        except Exception as e:
            logger.exception("dispatch_handler_failed", command_type=type_name, action=action_name)
            if self._audit_logger:
                await self._audit_logger.log_dispatch_failed(
                    command_type=type_name,
                    command_action=action_name,
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            return CommandResponse.failure(f"Something went wrong running {type_name} {action_name}")

        if self._audit_logger:
            await self._audit_logger.log_command_dispatched(
                command_type=type_name,
                command_action=action_name,
                success=response.success,
                correlation_id=correlation_id,
            )
        return response
