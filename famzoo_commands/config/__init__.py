"""Configuration package."""

from famzoo_commands.config.settings import (
    AppSettings,
    FormattingSettings,
    ParserSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "FormattingSettings",
    "ParserSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
