"""
Main Orchestrator for the Family Command Assistant

Ties the command core together into one end-to-end flow:

    text -> parse -> validate -> dispatch -> response

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing is dispatched unless it parsed and validated cleanly
- Every problem comes back as a failure response, never an exception
- Every step is audited under one correlation ID per utterance
"""

import logging
from typing import Optional
from uuid import UUID

from famzoo_commands.audit import AuditLogger, create_correlation_id
from famzoo_commands.config import get_settings
from famzoo_commands.dispatch import CommandDispatcher, HandlerContext
from famzoo_commands.formatting import CommandFormatter
from famzoo_commands.models.command import CommandResponse
from famzoo_commands.parser import CommandParser, VocabularyRegistry
from famzoo_commands.services.storage import (
    InMemoryAuditStorage,
    InMemoryLedgerStorage,
    LedgerStorageInterface,
)
from famzoo_commands.services.transport import CommandURLCodec
from famzoo_commands.validation import CommandValidator


class CommandFlow:
    """
    Orchestrates one utterance from text to response.

    Flow:
    1. Receive → audit the raw text
    2. Parse → structural failures end here (empty or unknown command)
    3. Validate → every parameter problem is reported at once
    4. Dispatch → the registered handler produces the response
    """

    def __init__(
        self,
        parser: Optional[CommandParser] = None,
        validator: Optional[CommandValidator] = None,
        dispatcher: Optional[CommandDispatcher] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._parser = parser or CommandParser()
        self._validator = validator or CommandValidator(self._parser)
        self._dispatcher = dispatcher or CommandDispatcher(audit_logger=audit_logger)
        self._audit_logger = audit_logger

    @property
    def parser(self) -> CommandParser:
        return self._parser

    @property
    def dispatcher(self) -> CommandDispatcher:
        return self._dispatcher

    async def handle(
        self,
        text: str,
        correlation_id: Optional[UUID] = None,
    ) -> CommandResponse:
        """
        Run one line of user input.

        Returns:
            The handler's response, or a failure response explaining why
            the command did not run. Validation failures carry the
            individual error messages in ``data["errors"]``.
        """
        correlation_id = correlation_id or create_correlation_id()

        if self._audit_logger:
            await self._audit_logger.log_command_received(
                raw_text=text,
                correlation_id=correlation_id,
            )

        # Step 1: Parse
        command, parse_error = self._parser.parse_with_diagnosis(text)
        if command is None:
            if self._audit_logger:
                await self._audit_logger.log_parse_failed(
                    raw_text=text,
                    reason=parse_error.kind.value,
                    correlation_id=correlation_id,
                )
            return CommandResponse.failure(
                parse_error.message,
                data={"errors": [parse_error.message]},
            )

        type_name = command.type.value
        action_name = command.action.value

        if self._audit_logger:
            await self._audit_logger.log_command_parsed(
                command_type=type_name,
                command_action=action_name,
                parameter_count=len(command.parameters),
                correlation_id=correlation_id,
            )

        # Step 2: Validate
        result = self._validator.validate(command)
        if not result.is_valid:
            if self._audit_logger:
                await self._audit_logger.log_validation_failed(
                    command_type=type_name,
                    command_action=action_name,
                    errors=[error.model_dump(mode="json") for error in result.errors],
                    correlation_id=correlation_id,
                )
            return CommandResponse.failure(
                self._validator.get_user_friendly_summary(result),
                data={"errors": result.messages},
            )

        if self._audit_logger:
            await self._audit_logger.log_validation_passed(
                command_type=type_name,
                command_action=action_name,
                correlation_id=correlation_id,
            )

        # Step 3: Dispatch
        return await self._dispatcher.execute(command, correlation_id=correlation_id)

    def suggest(self, text: str) -> list[str]:
        """Completions for partially typed input."""
        return self._parser.suggest_completions(text)


def create_app_components(
    storage: Optional[LedgerStorageInterface] = None,
    persist_audit: bool = True,
) -> tuple[CommandFlow, CommandURLCodec]:
    """
    Factory function to create all application components.

    Args:
        storage: Ledger collaborator. Defaults to an in-memory ledger
                 seeded with a sample family.
        persist_audit: Keep audit events in an in-memory audit store as
                       well as the local log.

    Returns:
        (command_flow, url_codec)
    """
    settings = get_settings()
    logging.getLogger("famzoo_commands").setLevel(
        logging.DEBUG if settings.app.debug_mode else logging.INFO
    )

    audit_logger = AuditLogger(InMemoryAuditStorage() if persist_audit else None)

    parser = CommandParser(
        registry=VocabularyRegistry(strict=settings.parser.strict_vocabulary),
        formatting=settings.formatting,
        settings=settings.parser,
    )
    context = HandlerContext(
        storage=storage or InMemoryLedgerStorage.with_sample_family(),
        formatter=CommandFormatter(settings.formatting),
        settings=settings.app,
    )
    dispatcher = CommandDispatcher(context=context, audit_logger=audit_logger)

    flow = CommandFlow(
        parser=parser,
        validator=CommandValidator(parser),
        dispatcher=dispatcher,
        audit_logger=audit_logger,
    )
    codec = CommandURLCodec(
        scheme=settings.app.message_scheme,
        parameter_parser=parser.parameter_parser,
    )
    return flow, codec
