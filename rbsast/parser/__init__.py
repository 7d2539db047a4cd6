"""RBS parser module."""

from rbsast.parser.parser import Parser, ParserError, parse

__all__ = ["Parser", "ParserError", "parse"]
