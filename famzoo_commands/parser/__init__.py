"""Command parsing package."""

from famzoo_commands.parser.abbreviations import AbbreviationResolver
from famzoo_commands.parser.command_parser import CommandParser
from famzoo_commands.parser.parameters import ParameterParser
from famzoo_commands.parser.registry import (
    VocabularyConfigurationError,
    VocabularyRegistry,
)
from famzoo_commands.parser.tokenizer import tokenize

__all__ = [
    "AbbreviationResolver",
    "CommandParser",
    "ParameterParser",
    "VocabularyConfigurationError",
    "VocabularyRegistry",
    "tokenize",
]
