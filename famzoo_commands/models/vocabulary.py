"""
Command Vocabulary

The nouns (types), verbs (actions) and parameter kinds of the command
language. Every utterance starts with a type token and an action token,
either canonical ("account credit") or abbreviated ("a c").

DESIGN DECISION: The vocabulary is fixed data, declared next to the enums.
The registry in famzoo_commands.parser.registry builds its lookups from
these tables and checks them for collisions at startup.

KNOWN COLLISIONS: "+" is declared by both CREDIT and ADD, so "+" always
resolves to CREDIT (first in enumeration order). "a" and "s" are both a
type abbreviation and an action abbreviation; that only matters for
prefix suggestions, because types and actions are resolved separately.
"""

from enum import Enum


# =============================================================================
# ENUMS
# =============================================================================

class ParameterType(str, Enum):
    """Kinds of value a command parameter can carry."""
    AMOUNT = "amount"
    TEXT = "text"
    DATE = "date"
    MEMBER = "member"
    ACCOUNT = "account"
    BOOLEAN = "boolean"
    NUMBER = "number"


class CommandAction(str, Enum):
    """
    The verb of a command.

    Enumeration order matters: abbreviation lookups scan actions in
    this order and the first match wins.
    """
    # Account actions
    BALANCE = "balance"
    CREDIT = "credit"
    DEBIT = "debit"
    NEW = "new"
    SELECT = "select"

    # List actions
    LIST = "list"
    SHOW = "show"
    CREATE = "create"
    ADD = "add"
    SHARE = "share"

    # Item actions
    COMPLETE = "complete"
    DUE = "due"
    OCCURS = "occurs"

    @property
    def abbreviations(self) -> tuple[str, ...]:
        return _ACTION_ABBREVIATIONS.get(self, ())

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def description(self) -> str:
        return _ACTION_DESCRIPTIONS[self]

    @property
    def required_parameter_types(self) -> tuple[ParameterType, ...]:
        """Required parameters, matched to input tokens by position."""
        return _ACTION_REQUIRED_PARAMETERS.get(self, ())

    @property
    def requires_parameters(self) -> bool:
        return bool(self.required_parameter_types)


class CommandType(str, Enum):
    """
    The noun of a command.

    Each type allows only a subset of actions; "member credit" is not
    a command even though both words are in the vocabulary.
    """
    ACCOUNT = "account"
    LIST = "list"
    MEMBER = "member"
    SHORTCUT = "shortcut"
    ITEM = "item"

    @property
    def abbreviations(self) -> tuple[str, ...]:
        return _TYPE_ABBREVIATIONS.get(self, ())

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def description(self) -> str:
        return _TYPE_DESCRIPTIONS[self]

    @property
    def allowed_actions(self) -> tuple[CommandAction, ...]:
        """Actions this type accepts, in display order."""
        return _ALLOWED_ACTIONS[self]


# =============================================================================
# VOCABULARY TABLES
# =============================================================================

_TYPE_ABBREVIATIONS: dict[CommandType, tuple[str, ...]] = {
    CommandType.ACCOUNT: ("a", "acc"),
    CommandType.LIST: ("l", "lists"),
    CommandType.MEMBER: ("m", "mem"),
    CommandType.SHORTCUT: ("s", "short"),
    CommandType.ITEM: ("i",),
}

_TYPE_DESCRIPTIONS: dict[CommandType, str] = {
    CommandType.ACCOUNT: "Manage FamZoo accounts - check balances, transfer funds",
    CommandType.LIST: "Manage todo lists and shared lists",
    CommandType.MEMBER: "View and manage family members",
    CommandType.SHORTCUT: "Create and manage command shortcuts",
    CommandType.ITEM: "Manage items in lists - add, complete, modify",
}

_ALLOWED_ACTIONS: dict[CommandType, tuple[CommandAction, ...]] = {
    CommandType.ACCOUNT: (
        CommandAction.BALANCE,
        CommandAction.CREDIT,
        CommandAction.DEBIT,
        CommandAction.NEW,
        CommandAction.SELECT,
        CommandAction.LIST,
    ),
    CommandType.LIST: (
        CommandAction.LIST,
        CommandAction.SHOW,
        CommandAction.CREATE,
        CommandAction.ADD,
        CommandAction.SHARE,
        CommandAction.NEW,
    ),
    CommandType.MEMBER: (
        CommandAction.LIST,
        CommandAction.SHOW,
        CommandAction.SELECT,
        CommandAction.BALANCE,
    ),
    CommandType.SHORTCUT: (
        CommandAction.LIST,
        CommandAction.CREATE,
        CommandAction.ADD,
        CommandAction.SHOW,
    ),
    CommandType.ITEM: (
        CommandAction.ADD,
        CommandAction.COMPLETE,
        CommandAction.DUE,
        CommandAction.OCCURS,
        CommandAction.LIST,
    ),
}

_ACTION_ABBREVIATIONS: dict[CommandAction, tuple[str, ...]] = {
    CommandAction.BALANCE: ("b", "bal"),
    CommandAction.CREDIT: ("c", "cre", "+"),
    CommandAction.DEBIT: ("d", "deb", "-"),
    CommandAction.SELECT: ("sel", "s"),
    CommandAction.LIST: ("ls",),
    CommandAction.SHOW: ("sh",),
    CommandAction.CREATE: ("cr", "mk", "make"),
    CommandAction.ADD: ("+", "a"),
    CommandAction.COMPLETE: ("done", "finish", "x"),
}

_ACTION_DESCRIPTIONS: dict[CommandAction, str] = {
    CommandAction.BALANCE: "Show account balance",
    CommandAction.CREDIT: "Add money to account",
    CommandAction.DEBIT: "Remove money from account",
    CommandAction.NEW: "Create new item",
    CommandAction.SELECT: "Select/switch to item",
    CommandAction.LIST: "List items",
    CommandAction.SHOW: "Show details",
    CommandAction.CREATE: "Create new item",
    CommandAction.ADD: "Add item to list",
    CommandAction.SHARE: "Share with others",
    CommandAction.COMPLETE: "Mark as complete",
    CommandAction.DUE: "Set due date",
    CommandAction.OCCURS: "Set recurring schedule",
}

_ACTION_REQUIRED_PARAMETERS: dict[CommandAction, tuple[ParameterType, ...]] = {
    CommandAction.CREDIT: (ParameterType.AMOUNT,),
    CommandAction.DEBIT: (ParameterType.AMOUNT,),
    CommandAction.ADD: (ParameterType.TEXT,),
    CommandAction.DUE: (ParameterType.DATE,),
    CommandAction.OCCURS: (ParameterType.TEXT,),
    CommandAction.NEW: (ParameterType.TEXT,),
    CommandAction.CREATE: (ParameterType.TEXT,),
}
