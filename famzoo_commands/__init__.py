"""
FamZoo Commands - Source Package

The command language behind the family-finance chat assistant.
Short utterances such as ``account balance``, ``a b`` or
``account credit 25.00 --note "lunch"`` are tokenized, resolved against
a fixed vocabulary, typed, validated and dispatched to handlers.

DESIGN PRINCIPLES:
1. Parsing is total: bad values are kept and reported by validation
2. Validation collects every problem, never just the first
3. Commands are immutable once built
4. Dispatch never raises: failures come back as responses
5. Storage and transport are collaborators, not part of the core
"""

from famzoo_commands.parser import CommandParser, tokenize
from famzoo_commands.validation import CommandValidator

__version__ = "1.0.0"
__author__ = "FamZoo Commands Team"

__all__ = ["CommandParser", "CommandValidator", "tokenize"]
