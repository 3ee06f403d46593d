"""Command dispatch package."""

from famzoo_commands.dispatch.dispatcher import CommandDispatcher
from famzoo_commands.dispatch.handlers import DEFAULT_HANDLERS
from famzoo_commands.dispatch.registry import Handler, HandlerContext, HandlerRegistry

__all__ = [
    "CommandDispatcher",
    "DEFAULT_HANDLERS",
    "Handler",
    "HandlerContext",
    "HandlerRegistry",
]
