"""
Abbreviation Resolver

Reads the (type, action) header from the first two tokens and produces
completion suggestions for partially typed input.
"""

from typing import Optional

from famzoo_commands.models.vocabulary import CommandAction, CommandType
from famzoo_commands.parser.registry import VocabularyRegistry


class AbbreviationResolver:
    """Expands abbreviated type/action tokens and suggests completions."""

    def __init__(self, registry: Optional[VocabularyRegistry] = None):
        self._registry = registry or VocabularyRegistry()

    @property
    def registry(self) -> VocabularyRegistry:
        return self._registry

    def expand_type(self, token: str) -> Optional[CommandType]:
        return self._registry.resolve_type(token)

    def expand_action(self, token: str) -> Optional[CommandAction]:
        return self._registry.resolve_action(token)

    def parse_header(
        self,
        tokens: list[str],
    ) -> tuple[Optional[CommandType], Optional[CommandAction]]:
        """
        Resolve the first two tokens as (type, action).

        Either side is None when it does not resolve; both are None when
        there are fewer than two tokens. Whether the action is allowed
        for the type is checked by the caller.
        """
        if len(tokens) < 2:
            return None, None
        return self.expand_type(tokens[0]), self.expand_action(tokens[1])

    def suggest_completions(self, partial_input: str) -> list[str]:
        """
        Suggest what could come next.

        - nothing typed: every canonical type name
        - one word: types, actions and abbreviations with that prefix
        - two words, first a known type: that type's allowed actions
          whose canonical name has the second word as prefix
        - three or more words: nothing (parameters are not completed)
        """
        words = partial_input.split()

        if not words:
            return [t.value for t in CommandType]

        if len(words) == 1:
            return self._registry.suggestions(words[0])

        if len(words) == 2:
            command_type = self.expand_type(words[0])
            if command_type is None:
                return []
            prefix = words[1].lower()
            return [
                action.value
                for action in command_type.allowed_actions
                if action.value.startswith(prefix)
            ]

        return []
