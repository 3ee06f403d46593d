"""
Vocabulary Registry

Central lookup for command types and actions by canonical name or
abbreviation.

Resolution is case-insensitive. A canonical name always wins; otherwise
the abbreviation lists are scanned in enumeration order and the first
declaring entry wins. When two entries declare the same abbreviation
the later one can never be reached through it ("+" resolves to credit,
never to add). The registry does not reorder or drop anything to hide
this; it reports every collision at startup instead.
"""

from collections import defaultdict
from typing import Optional

import structlog

from famzoo_commands.models.vocabulary import CommandAction, CommandType


logger = structlog.get_logger(__name__)


class VocabularyConfigurationError(Exception):
    """The vocabulary tables are inconsistent."""
    pass


class VocabularyRegistry:
    """
    Resolves tokens to CommandType / CommandAction values.

    Lookups are read-only after construction, so one registry can be
    shared freely between threads.
    """

    def __init__(self, strict: bool = False):
        """
        Build lookup tables and check the vocabulary.

        Args:
            strict: Raise VocabularyConfigurationError on abbreviation
                    collisions instead of logging a warning.
        """
        self._types = {t.value: t for t in CommandType}
        self._actions = {a.value: a for a in CommandAction}

        # First declaration wins, matching an in-order scan
        self._type_abbrevs: dict[str, CommandType] = {}
        for command_type in CommandType:
            for abbrev in command_type.abbreviations:
                self._type_abbrevs.setdefault(abbrev.lower(), command_type)

        self._action_abbrevs: dict[str, CommandAction] = {}
        for action in CommandAction:
            for abbrev in action.abbreviations:
                self._action_abbrevs.setdefault(abbrev.lower(), action)

        self._check_reachable_actions()
        self._check_collisions(strict)

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def resolve_type(self, token: str) -> Optional[CommandType]:
        key = token.strip().lower()
        return self._types.get(key) or self._type_abbrevs.get(key)

    def resolve_action(self, token: str) -> Optional[CommandAction]:
        key = token.strip().lower()
        return self._actions.get(key) or self._action_abbrevs.get(key)

    def allowed_actions(self, command_type: CommandType) -> frozenset[CommandAction]:
        return frozenset(command_type.allowed_actions)

    def is_allowed(self, command_type: CommandType, action: CommandAction) -> bool:
        return action in command_type.allowed_actions

    def suggestions(self, prefix: str) -> list[str]:
        """
        Canonical names and abbreviations of all types and actions that
        start with ``prefix`` (lower-cased), de-duplicated and sorted.
        """
        lowered = prefix.lower()
        candidates = set()

        for command_type in CommandType:
            candidates.add(command_type.value)
            candidates.update(command_type.abbreviations)
        for action in CommandAction:
            candidates.add(action.value)
            candidates.update(action.abbreviations)

        return sorted(c for c in candidates if c.startswith(lowered))

    def all_abbreviations(self) -> dict[str, str]:
        """Map of every reachable abbreviation to its canonical name."""
        mapping = {abbrev: t.value for abbrev, t in self._type_abbrevs.items()}
        for abbrev, action in self._action_abbrevs.items():
            mapping.setdefault(abbrev, action.value)
        return mapping

    # -------------------------------------------------------------------------
    # Startup checks
    # -------------------------------------------------------------------------

    @staticmethod
    def find_abbreviation_collisions() -> dict[str, list[str]]:
        """
        Abbreviations declared more than once, across types and actions.

        Returns {abbreviation: ["type:shortcut", "action:select", ...]}
        with declarers in enumeration order. Canonical names shared by a
        type and an action ("list") are not abbreviations and are ignored.
        """
        declared: dict[str, list[str]] = defaultdict(list)
        for command_type in CommandType:
            for abbrev in command_type.abbreviations:
                declared[abbrev.lower()].append(f"type:{command_type.value}")
        for action in CommandAction:
            for abbrev in action.abbreviations:
                declared[abbrev.lower()].append(f"action:{action.value}")

        return {abbrev: owners for abbrev, owners in declared.items() if len(owners) > 1}

    def _check_collisions(self, strict: bool) -> None:
        collisions = self.find_abbreviation_collisions()
        if not collisions:
            return

        if strict:
            raise VocabularyConfigurationError(
                f"Abbreviation collisions in vocabulary: {collisions}"
            )

        for abbrev, owners in collisions.items():
            logger.warning(
                "vocabulary_abbreviation_collision",
                abbreviation=abbrev,
                declared_by=owners,
            )

    @staticmethod
    def _check_reachable_actions() -> None:
        reachable = set()
        for command_type in CommandType:
            reachable.update(command_type.allowed_actions)

        unreachable = [a.value for a in CommandAction if a not in reachable]
        if unreachable:
            raise VocabularyConfigurationError(
                f"Actions not allowed by any type: {unreachable}"
            )
