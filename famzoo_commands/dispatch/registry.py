"""
Handler Registry

Explicit table from (CommandType, CommandAction) to the async handler
that executes it. Handlers are registered with a decorator:

    handlers = HandlerRegistry()

    @handlers.register(CommandType.ACCOUNT, CommandAction.BALANCE)
    async def account_balance(command, context):
        ...

The table is plain data: it can be enumerated, copied and extended.
"""

from dataclasses import dataclass, field
from typing import Awaitable, Callable, Iterator, Optional

import structlog

from famzoo_commands.config import AppSettings
from famzoo_commands.formatting import CommandFormatter
from famzoo_commands.models.command import Command, CommandResponse
from famzoo_commands.models.vocabulary import CommandAction, CommandType
from famzoo_commands.services.storage import LedgerStorageInterface


logger = structlog.get_logger(__name__)


@dataclass
class HandlerContext:
    """Collaborators a handler may use."""

    storage: LedgerStorageInterface
    formatter: CommandFormatter = field(default_factory=CommandFormatter)
    settings: AppSettings = field(default_factory=AppSettings)


Handler = Callable[[Command, HandlerContext], Awaitable[CommandResponse]]
DispatchKey = tuple[CommandType, CommandAction]


class HandlerRegistry:
    """Maps (type, action) pairs to handlers."""

    def __init__(self):
        self._handlers: dict[DispatchKey, Handler] = {}

    def add(self, command_type: CommandType, action: CommandAction, handler: Handler) -> None:
        """
        Register ``handler`` for a pair.

        Raises:
            ValueError: If the type does not allow the action, or the
                        pair already has a handler.
        """
        if action not in command_type.allowed_actions:
            raise ValueError(
                f"{command_type.value} does not allow action {action.value}"
            )
        key = (command_type, action)
        if key in self._handlers:
            raise ValueError(f"Handler already registered for {command_type.value} {action.value}")

        self._handlers[key] = handler
        logger.debug("handler_registered", command_type=command_type.value, action=action.value)

    def register(
        self,
        command_type: CommandType,
        action: CommandAction,
    ) -> Callable[[Handler], Handler]:
        """Decorator form of add()."""

        def decorator(func: Handler) -> Handler:
            self.add(command_type, action, func)
            return func

        return decorator

    def get(self, command_type: CommandType, action: CommandAction) -> Optional[Handler]:
        return self._handlers.get((command_type, action))

    def entries(self) -> Iterator[tuple[DispatchKey, Handler]]:
        """All registered pairs with their handlers, in registration order."""
        return iter(list(self._handlers.items()))

    def keys(self) -> list[DispatchKey]:
        return list(self._handlers)

    def copy(self) -> "HandlerRegistry":
        clone = HandlerRegistry()
        clone._handlers = dict(self._handlers)
        return clone

    def __contains__(self, key: DispatchKey) -> bool:
        return key in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
