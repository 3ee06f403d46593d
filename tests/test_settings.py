"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from famzoo_commands.config import (
    AppSettings,
    FormattingSettings,
    ParserSettings,
    get_settings,
    validate_all_settings,
)


class TestFormattingSettings:
    """Tests for FormattingSettings."""

    def test_defaults(self):
        settings = FormattingSettings()
        assert settings.currency_code == "USD"
        assert settings.currency_symbol == "$"
        assert settings.short_date_format == "%m/%d/%y"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("FAMZOO_FORMAT_CURRENCY_SYMBOL", "£")
        monkeypatch.setenv("FAMZOO_FORMAT_CURRENCY_CODE", "gbp")

        settings = FormattingSettings()
        assert settings.currency_symbol == "£"
        assert settings.currency_code == "GBP"

    def test_currency_code_length(self):
        with pytest.raises(PydanticValidationError):
            FormattingSettings(currency_code="DOLLARS")


class TestParserSettings:
    """Tests for ParserSettings."""

    def test_truthy_tokens_are_normalised(self):
        settings = ParserSettings(truthy_tokens=[" YES ", "", "Y"])
        assert settings.truthy_tokens == ["yes", "y"]

    def test_strict_vocabulary_from_environment(self, monkeypatch):
        monkeypatch.setenv("FAMZOO_PARSER_STRICT_VOCABULARY", "true")
        assert ParserSettings().strict_vocabulary is True


class TestAppSettings:
    """Tests for AppSettings."""

    def test_defaults(self):
        settings = AppSettings()
        assert settings.message_scheme == "famzoo"
        assert settings.default_list_name == "To-do"

    def test_scheme_must_be_a_url_scheme(self):
        with pytest.raises(PydanticValidationError):
            AppSettings(message_scheme="not a scheme")


class TestSettingsRoot:
    """Tests for the cached root settings."""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_validate_all_settings(self):
        assert validate_all_settings() == {"formatting": True, "parser": True, "app": True}

    def test_validate_all_settings_reports_errors(self, monkeypatch):
        monkeypatch.setenv("FAMZOO_FORMAT_CURRENCY_CODE", "TOOLONG")

        results = validate_all_settings()
        assert results["formatting"] is False
        assert "formatting_error" in results
        assert results["app"] is True
