"""Message transport encoding."""

from famzoo_commands.services.transport.url_codec import CommandURLCodec

__all__ = ["CommandURLCodec"]
