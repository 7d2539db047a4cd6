"""Exception hierarchy for rbsast."""

from __future__ import annotations


class RBSError(Exception):
    """Base class for all rbsast errors."""


class RBSSyntaxError(RBSError):
    """Source text is not valid RBS.

    Raised by the lexer and the parser; carries the 1-based position of the
    offending input.
    """

    kind = "Syntax"

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"{self.kind} error at {line}:{column}: {message}")
        self.message = message
        self.line = line
        self.column = column


class ConfigurationError(RBSError):
    """Formatting options are missing, unknown or out of range."""


class FormatterError(RBSError):
    """The declaration tree handed to the formatter breaks its contract."""


class UnsupportedNodeError(FormatterError):
    """The formatter has no rendering for an object in the tree."""

    def __init__(self, node: object) -> None:
        super().__init__(f"Cannot format node of type {type(node).__name__}")
        self.node = node


class MalformedNodeError(FormatterError):
    """A known node kind carries a value the formatter cannot render."""

    def __init__(self, node: object, detail: str) -> None:
        super().__init__(f"Malformed {type(node).__name__}: {detail}")
        self.node = node
