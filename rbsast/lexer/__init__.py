"""RBS lexer module."""

from rbsast.lexer.lexer import Lexer, LexerError
from rbsast.lexer.tokens import Token, TokenType

__all__ = ["Lexer", "LexerError", "Token", "TokenType"]
