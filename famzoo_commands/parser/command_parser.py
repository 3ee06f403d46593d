"""
Command Parser

Entry point from raw text to Command:

    text -> tokenize -> (type, action) header -> typed parameters -> Command

parse() returns None when the text is not a command at all: fewer than
two tokens, an unknown type or action word, or an action the type does
not allow. Those are structural failures with nothing finer to report.
A recognised command with bad or missing values is still returned;
it is the validator's job to explain what is wrong with it.
"""

from datetime import date
from typing import Callable, Optional

import structlog

from famzoo_commands.config import FormattingSettings, ParserSettings
from famzoo_commands.models.command import Command
from famzoo_commands.models.errors import ValidationError
from famzoo_commands.parser.abbreviations import AbbreviationResolver
from famzoo_commands.parser.parameters import ParameterParser
from famzoo_commands.parser.registry import VocabularyRegistry
from famzoo_commands.parser.tokenizer import tokenize


logger = structlog.get_logger(__name__)


class CommandParser:
    """
    Parses one line of input into a Command.

    Parsing is pure: no state is kept between calls.
    """

    def __init__(
        self,
        registry: Optional[VocabularyRegistry] = None,
        formatting: Optional[FormattingSettings] = None,
        settings: Optional[ParserSettings] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        settings = settings or ParserSettings()
        self._resolver = AbbreviationResolver(
            registry or VocabularyRegistry(strict=settings.strict_vocabulary)
        )
        self._parameter_parser = ParameterParser(
            formatting=formatting,
            settings=settings,
            today=today,
        )

    @property
    def resolver(self) -> AbbreviationResolver:
        return self._resolver

    @property
    def parameter_parser(self) -> ParameterParser:
        return self._parameter_parser

    def parse(self, text: str) -> Optional[Command]:
        """Parse ``text``, or return None if it is not a recognisable command."""
        command, _ = self.parse_with_diagnosis(text)
        return command

    def parse_with_diagnosis(
        self,
        text: str,
    ) -> tuple[Optional[Command], Optional[ValidationError]]:
        """
        Parse ``text`` and say why when it fails.

        Returns (command, None) on success, or (None, error) where the
        error is EMPTY_COMMAND for blank input and UNKNOWN_COMMAND for
        anything else that does not parse.
        """
        trimmed = text.strip()
        if not trimmed:
            return None, ValidationError.empty_command()

        tokens = tokenize(trimmed)
        if not tokens:
            return None, ValidationError.empty_command()

        command_type, action = self._resolver.parse_header(tokens)
        if command_type is None or action is None:
            logger.debug("command_header_unresolved", tokens=tokens[:2])
            return None, ValidationError.unknown_command()

        if not self._resolver.registry.is_allowed(command_type, action):
            logger.debug(
                "command_action_not_allowed",
                command_type=command_type.value,
                action=action.value,
            )
            return None, ValidationError.unknown_command()

        parameters = self._parameter_parser.parse_parameters(tokens[2:], action)

        command = Command(
            type=command_type,
            action=action,
            parameters=tuple(parameters),
            raw_text=trimmed,
        )
        return command, None

    def suggest_completions(self, partial_input: str) -> list[str]:
        return self._resolver.suggest_completions(partial_input)
