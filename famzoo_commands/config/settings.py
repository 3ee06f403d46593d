"""
Configuration Management for FamZoo Commands

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: Formatting is configuration, not global state.
Currency and date formats live in FormattingSettings and are passed
explicitly to the formatter, the parameter parser and the transport codec.
Nothing in the command core reads process-wide locale or timezone state.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FormattingSettings(BaseSettings):
    """Currency and date formats used to read and render parameters."""

    model_config = SettingsConfigDict(
        env_prefix="FAMZOO_FORMAT_",
        extra="ignore"
    )

    currency_code: str = Field(
        default="USD",
        min_length=3,
        max_length=3,
        description="ISO currency code given to new accounts"
    )
    currency_symbol: str = Field(
        default="$",
        description="Symbol prefixed to rendered amounts and stripped on input"
    )

    # Short date style (US): rendered form and accepted input forms
    short_date_format: str = Field(
        default="%m/%d/%y",
        description="strftime format used to render date parameters"
    )
    short_date_input_formats: list[str] = Field(
        default_factory=lambda: ["%m/%d/%y", "%m/%d/%Y"],
        description="Short-date formats accepted when parsing"
    )
    short_datetime_formats: list[str] = Field(
        default_factory=lambda: [
            "%m/%d/%y %I:%M %p",
            "%m/%d/%y, %I:%M %p",
            "%m/%d/%y %H:%M",
        ],
        description="Short date-time formats accepted when parsing"
    )
    iso_date_format: str = Field(
        default="%Y-%m-%d",
        description="Fallback machine date format"
    )

    @field_validator('currency_code')
    @classmethod
    def normalize_currency_code(cls, v: str) -> str:
        """Currency codes are always upper case."""
        return v.upper()


class ParserSettings(BaseSettings):
    """Parser behaviour."""

    model_config = SettingsConfigDict(
        env_prefix="FAMZOO_PARSER_",
        extra="ignore"
    )

    truthy_tokens: list[str] = Field(
        default_factory=lambda: ["true", "yes", "1", "on", "enable", "enabled"],
        description="Tokens read as boolean true (compared lower-cased)"
    )
    strict_vocabulary: bool = Field(
        default=False,
        description="Raise instead of warn when abbreviations collide"
    )
    max_amount: Decimal = Field(
        default=Decimal("1000000"),
        gt=0,
        description="Largest amount accepted; anything above reads as invalid"
    )

    @field_validator('truthy_tokens')
    @classmethod
    def lowercase_tokens(cls, v: list[str]) -> list[str]:
        return [token.strip().lower() for token in v if token.strip()]


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    debug_mode: bool = Field(
        default=False,
        description="Log at DEBUG level instead of INFO"
    )

    # Transport
    message_scheme: str = Field(
        default="famzoo",
        pattern="^[a-z][a-z0-9+.-]*$",
        description="URL scheme used when commands travel inside messages"
    )

    # Handlers
    default_list_name: str = Field(
        default="To-do",
        min_length=1,
        description="List used when a command does not name one"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Sub-settings are loaded lazily to allow partial configuration

    @property
    def formatting(self) -> FormattingSettings:
        return FormattingSettings()

    @property
    def parser(self) -> ParserSettings:
        return ParserSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with a
    ``<name>_error`` entry for each failure. Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("formatting", "parser", "app"):
        try:
            _ = getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
