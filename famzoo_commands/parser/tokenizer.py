"""
Tokenizer

Splits one line of input into shell-like tokens:

    tokenize(' a "b c" d')   -> ['a', 'b c', 'd']
    tokenize('a\\ b')        -> ['a b']

Rules:
- space, tab and newline separate tokens, except inside quotes
- single or double quotes group; a quote of the other kind inside
  a quoted run is literal ("don't" stays one token)
- backslash escapes the next character unconditionally, inside quotes too
- an unterminated quote closes silently at end of input
- a trailing lone backslash is dropped
- empty tokens are dropped, so "" on its own produces nothing
"""

_WHITESPACE = frozenset(" \t\n")
_QUOTES = frozenset("\"'")


def tokenize(raw: str) -> list[str]:
    tokens: list[str] = []
    current: list[str] = []
    quote_char = None
    escape_next = False

    for char in raw:
        if escape_next:
            current.append(char)
            escape_next = False
        elif char == "\\":
            escape_next = True
        elif quote_char is not None:
            if char == quote_char:
                quote_char = None
            else:
                current.append(char)
        elif char in _QUOTES:
            quote_char = char
        elif char in _WHITESPACE:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)

    if current:
        tokens.append("".join(current))

    return tokens
