"""Quote handling for string and symbol literals."""

from __future__ import annotations

import re

# Symbols that print without quotes, e.g. :foo, :foo?, :@ivar, :<=>
SIMPLE_SYMBOL_PATTERN = re.compile(
    r"(?:[A-Za-z_][A-Za-z0-9_]*[?!=]?"
    r"|@@?[A-Za-z_][A-Za-z0-9_]*"
    r"|\$[A-Za-z_][A-Za-z0-9_]*"
    r"|\[\]=?|\*\*|<=>|===?|=~|!=|!~|<<|<=|>>|>=|[+\-~]@"
    r"|[!<>+\-*/%&|^~`])\Z"
)

LINE_BREAK_PATTERN = re.compile(r"\r?\n")

INSPECT_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\x1b": "\\e",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\v": "\\v",
}


def normalize(content: str, enclosing: str) -> str:
    """Rewrite the body of a quoted literal for the ``enclosing`` quote.

    Escape sequences are kept as written; a bare quote matching the
    enclosing quote gets a backslash.
    """

    def replace(match: re.Match[str]) -> str:
        escaped, quote = match.groups()
        if quote is None:
            return "\\" + escaped
        if quote == enclosing:
            return "\\" + quote
        return quote

    return re.sub(r"\\([\s\S])|(['\"])", replace, content)


def choose_quote(source: str) -> str:
    """Pick the quote for a literal whose source text is ``source``.

    Literals with escape sequences keep their quote since the escapes mean
    different things in single and double quotes; the rest use ``"``.
    """
    if "\\" in source:
        return source[0]
    return '"'


def split_lines(content: str) -> list[str]:
    return LINE_BREAK_PATTERN.split(content)


def split_literal_lines(content: str) -> list[str]:
    """Split a literal body on ``\\n``; a ``\\r`` before it stays on its line."""
    return content.split("\n")


def inspect_string(value: str) -> str:
    """Double-quoted representation of a decoded string value."""
    parts = ['"']
    for char in value:
        if char in INSPECT_ESCAPES:
            parts.append(INSPECT_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            parts.append(f"\\u{ord(char):04X}")
        else:
            parts.append(char)
    parts.append('"')
    return "".join(parts)


def inspect_symbol(name: str) -> str:
    """Canonical symbol literal: ``:foo`` when possible, else ``:"..."``."""
    if SIMPLE_SYMBOL_PATTERN.match(name):
        return ":" + name
    return ":" + inspect_string(name)
