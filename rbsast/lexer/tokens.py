"""Token definitions for RBS lexer."""

from enum import Enum, auto
from typing import Any

import attrs


class TokenType(Enum):
    """Token types for RBS lexer."""

    # Literals
    INTEGER = auto()
    STRING = auto()
    SYMBOL = auto()

    # Names
    IDENTIFIER = auto()
    CONSTANT = auto()
    INTERFACE_NAME = auto()
    QUOTED_IDENTIFIER = auto()
    IVAR = auto()
    CVAR = auto()
    GVAR = auto()

    # Keywords
    ALIAS = auto()
    ATTR_ACCESSOR = auto()
    ATTR_READER = auto()
    ATTR_WRITER = auto()
    BOOL = auto()
    BOT = auto()
    CLASS = auto()
    DEF = auto()
    END = auto()
    EXTEND = auto()
    FALSE = auto()
    IN = auto()
    INCLUDE = auto()
    INSTANCE = auto()
    INTERFACE = auto()
    MODULE = auto()
    NIL = auto()
    OUT = auto()
    PREPEND = auto()
    PRIVATE = auto()
    PUBLIC = auto()
    SELF = auto()
    SINGLETON = auto()
    TOP = auto()
    TRUE = auto()
    TYPE = auto()
    UNCHECKED = auto()
    UNTYPED = auto()
    VOID = auto()

    # Operators
    ARROW = auto()
    FAT_ARROW = auto()
    PIPE = auto()
    AMPERSAND = auto()
    QUESTION = auto()
    STAR = auto()
    DOUBLE_STAR = auto()
    CARET = auto()
    LT = auto()
    EQ = auto()
    DOT = auto()
    ELLIPSIS = auto()
    OPERATOR = auto()

    # Delimiters
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    COMMA = auto()
    COLON = auto()
    DOUBLE_COLON = auto()

    # Special
    ANNOTATION = auto()
    COMMENT = auto()
    EOF = auto()


@attrs.define
class Token:
    """Token representation.

    ``position`` is the character offset of the first character; the token
    covers ``source[position:position + length]``.
    """

    type: TokenType
    value: Any
    line: int
    column: int
    length: int = 1
    position: int = 0
    end_line: int = 0
    end_column: int = 0

    @property
    def end_position(self) -> int:
        return self.position + self.length
