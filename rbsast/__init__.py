"""RBS AST - A Python library for parsing and formatting RBS signatures."""

from rbsast.codegen import FormattingConfig, RBSFormatter, TreePrinter, format_source
from rbsast.errors import (
    ConfigurationError,
    FormatterError,
    MalformedNodeError,
    RBSError,
    RBSSyntaxError,
    UnsupportedNodeError,
)
from rbsast.lexer import Lexer, LexerError
from rbsast.parser import Parser, ParserError, parse
from rbsast.version import (
    RBS_SYNTAX_VERSION,
    RBSAST_VERSION,
    RBSAST_VERSION_MAJOR,
    RBSAST_VERSION_MINOR,
    RBSAST_VERSION_PATCH,
    get_version_info,
    get_version_string,
)
from rbsast.visitor import ASTVisitor, BaseVisitor

__version__ = RBSAST_VERSION
__all__ = [
    "RBSAST_VERSION",
    "RBSAST_VERSION_MAJOR",
    "RBSAST_VERSION_MINOR",
    "RBSAST_VERSION_PATCH",
    "RBS_SYNTAX_VERSION",
    "ASTVisitor",
    "BaseVisitor",
    "ConfigurationError",
    "FormatterError",
    "FormattingConfig",
    "Lexer",
    "LexerError",
    "MalformedNodeError",
    "Parser",
    "ParserError",
    "RBSError",
    "RBSFormatter",
    "RBSSyntaxError",
    "TreePrinter",
    "UnsupportedNodeError",
    "format_source",
    "get_version_info",
    "get_version_string",
    "parse",
]
