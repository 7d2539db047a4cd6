"""RBS lexer implementation."""

from __future__ import annotations

import re

from rbsast.errors import RBSSyntaxError
from rbsast.lexer.tokens import Token, TokenType


class LexerError(RBSSyntaxError):
    """Lexer error exception."""

    kind = "Lexer"


ANNOTATION_DELIMITERS = {"{": "}", "(": ")", "[": "]", "<": ">", "|": "|"}

# Operator method names usable as symbols, longest first.
SYMBOL_OPERATORS = (
    "[]=",
    "<=>",
    "===",
    "[]",
    "**",
    "==",
    "=~",
    "!=",
    "!~",
    "<<",
    "<=",
    ">>",
    ">=",
    "+@",
    "-@",
    "~@",
    "!",
    "<",
    ">",
    "+",
    "-",
    "*",
    "/",
    "%",
    "&",
    "|",
    "^",
    "~",
    "`",
)

SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "s": " ",
    "e": "\x1b",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}

ESCAPE_PATTERN = re.compile(
    r"\\(?:u\{([0-9a-fA-F ]+)\}|u([0-9a-fA-F]{4})|x([0-9a-fA-F]{1,2})|([0-7]{1,3})|(.))",
    re.DOTALL,
)


def unescape_double_quoted(body: str) -> str:
    """Decode the escape sequences of a double-quoted literal body."""

    def replace(match: re.Match[str]) -> str:
        braced, unicode, hexa, octal, char = match.groups()
        if braced is not None:
            return "".join(chr(int(code, 16)) for code in braced.split())
        if unicode is not None:
            return chr(int(unicode, 16))
        if hexa is not None:
            return chr(int(hexa, 16))
        if octal is not None:
            return chr(int(octal, 8))
        return SIMPLE_ESCAPES.get(char, char)

    return ESCAPE_PATTERN.sub(replace, body)


def unescape_single_quoted(body: str) -> str:
    """Decode a single-quoted literal body; only ``\\\\`` and ``\\'`` escape."""
    return re.sub(r"\\([\\'])", r"\1", body)


class Lexer:
    """RBS lexer for tokenizing signature files.

    Comments are not part of the token stream; they are collected in
    ``comments`` so the parser can attach them to declarations.
    """

    KEYWORDS = {
        "alias": TokenType.ALIAS,
        "attr_accessor": TokenType.ATTR_ACCESSOR,
        "attr_reader": TokenType.ATTR_READER,
        "attr_writer": TokenType.ATTR_WRITER,
        "bool": TokenType.BOOL,
        "bot": TokenType.BOT,
        "class": TokenType.CLASS,
        "def": TokenType.DEF,
        "end": TokenType.END,
        "extend": TokenType.EXTEND,
        "false": TokenType.FALSE,
        "in": TokenType.IN,
        "include": TokenType.INCLUDE,
        "instance": TokenType.INSTANCE,
        "interface": TokenType.INTERFACE,
        "module": TokenType.MODULE,
        "nil": TokenType.NIL,
        "out": TokenType.OUT,
        "prepend": TokenType.PREPEND,
        "private": TokenType.PRIVATE,
        "public": TokenType.PUBLIC,
        "self": TokenType.SELF,
        "singleton": TokenType.SINGLETON,
        "top": TokenType.TOP,
        "true": TokenType.TRUE,
        "type": TokenType.TYPE,
        "unchecked": TokenType.UNCHECKED,
        "untyped": TokenType.UNTYPED,
        "void": TokenType.VOID,
    }

    PUNCTUATION = {
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        "{": TokenType.LBRACE,
        "}": TokenType.RBRACE,
        "[": TokenType.LBRACKET,
        "]": TokenType.RBRACKET,
        ",": TokenType.COMMA,
        "|": TokenType.PIPE,
        "&": TokenType.AMPERSAND,
        "?": TokenType.QUESTION,
        "^": TokenType.CARET,
        "<": TokenType.LT,
        "=": TokenType.EQ,
        ".": TokenType.DOT,
        "*": TokenType.STAR,
        ":": TokenType.COLON,
    }

    MULTI_CHAR_PUNCTUATION = (
        ("...", TokenType.ELLIPSIS),
        ("->", TokenType.ARROW),
        ("=>", TokenType.FAT_ARROW),
        ("**", TokenType.DOUBLE_STAR),
        ("::", TokenType.DOUBLE_COLON),
    )

    OPERATOR_CHARS = "+-~!%/>=<`@"

    def __init__(self, text: str) -> None:
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []
        self.comments: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the input text and return list of tokens."""
        while self.position < len(self.text):
            self._skip_whitespace_and_comments()

            if self.position >= len(self.text):
                break

            self.tokens.append(self._next_token())

        self.tokens.append(
            Token(
                TokenType.EOF,
                None,
                self.line,
                self.column,
                0,
                self.position,
                self.line,
                self.column,
            )
        )
        return self.tokens

    def _current_char(self) -> str | None:
        """Get current character."""
        if self.position < len(self.text):
            return self.text[self.position]
        return None

    def _peek_char(self, offset: int = 1) -> str | None:
        """Peek at character at offset."""
        pos = self.position + offset
        if pos < len(self.text):
            return self.text[pos]
        return None

    def _previous_char(self) -> str | None:
        if self.position > 0:
            return self.text[self.position - 1]
        return None

    def _advance(self, count: int = 1) -> None:
        """Advance position and update line/column."""
        for _ in range(count):
            if self.position >= len(self.text):
                return
            if self.text[self.position] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.position += 1

    def _make_token(
        self,
        token_type: TokenType,
        value: object,
        start: int,
        start_line: int,
        start_column: int,
    ) -> Token:
        return Token(
            token_type,
            value,
            start_line,
            start_column,
            self.position - start,
            start,
            self.line,
            self.column,
        )

    def _skip_whitespace_and_comments(self) -> None:
        """Skip whitespace, collecting comments as they are passed."""
        while self.position < len(self.text):
            char = self._current_char()

            if char in " \t\r\n\f\v":
                self._advance()
            elif char == "#":
                self._read_comment()
            else:
                break

    def _read_comment(self) -> None:
        start = self.position
        start_line = self.line
        start_column = self.column

        while self._current_char() is not None and self._current_char() != "\n":
            self._advance()

        # "# text" keeps "text"; the marker and one space are dropped
        value = self.text[start + 1 : self.position].rstrip("\r")
        if value.startswith(" "):
            value = value[1:]
        self.comments.append(
            self._make_token(TokenType.COMMENT, value, start, start_line, start_column)
        )

    def _next_token(self) -> Token:
        """Get next token."""
        start = self.position
        start_line = self.line
        start_column = self.column
        char = self._current_char()

        if char == "%" and self._peek_char() == "a" and self._peek_char(2) in ANNOTATION_DELIMITERS:
            return self._read_annotation()

        if char in "\"'":
            value = self._read_quoted(char)
            return self._make_token(TokenType.STRING, value, start, start_line, start_column)

        if char == "`" and self._has_closing_backtick():
            return self._read_quoted_identifier()

        if char.isdigit() or (char in "+-" and (self._peek_char() or "").isdigit()):
            return self._read_integer()

        if char.isalpha() or char == "_":
            return self._read_identifier()

        if char == "@":
            if self._peek_char() == "@" and self._is_name_start(self._peek_char(2)):
                return self._read_variable(TokenType.CVAR, 2)
            if self._is_name_start(self._peek_char()):
                return self._read_variable(TokenType.IVAR, 1)

        if char == "$" and self._is_name_start(self._peek_char()):
            return self._read_variable(TokenType.GVAR, 1)

        if char == ":" and self._is_symbol_start():
            return self._read_symbol()

        for text, token_type in self.MULTI_CHAR_PUNCTUATION:
            if self.text.startswith(text, self.position):
                self._advance(len(text))
                return self._make_token(token_type, text, start, start_line, start_column)

        token_type = self.PUNCTUATION.get(char)
        if token_type is not None:
            self._advance()
            return self._make_token(token_type, char, start, start_line, start_column)

        # Operator method names such as `def +:` or `def !~:` are re-read by
        # the parser from the source text, so a single character is enough.
        if char in self.OPERATOR_CHARS:
            self._advance()
            return self._make_token(TokenType.OPERATOR, char, start, start_line, start_column)

        msg = f"Unexpected character: {char}"
        raise LexerError(msg, self.line, self.column)

    @staticmethod
    def _is_name_start(char: str | None) -> bool:
        return char is not None and (char.isalpha() or char == "_")

    def _is_symbol_start(self) -> bool:
        """Check whether the ``:`` at the current position begins a symbol.

        ``foo: T`` and ``Foo::Bar`` use plain colons; a symbol needs a symbol
        character right after the colon and must not follow a name.
        """
        following = self._peek_char()
        if following is None or following == ":":
            return False
        previous = self._previous_char()
        if previous is not None and (previous.isalnum() or previous in "_)]?!=`"):
            return False
        if self._is_name_start(following) or following in "\"'@$":
            return True
        rest = self.text[self.position + 1 :]
        return rest.startswith(SYMBOL_OPERATORS)

    def _read_symbol(self) -> Token:
        start = self.position
        start_line = self.line
        start_column = self.column

        self._advance()  # skip :
        char = self._current_char()

        if char in "\"'":
            value = self._read_quoted(char)
            return self._make_token(TokenType.SYMBOL, value, start, start_line, start_column)

        if char in "@$":
            name_start = self.position
            while self._current_char() in ("@", "$"):
                self._advance()
            self._read_name_chars()
            value = self.text[name_start : self.position]
            return self._make_token(TokenType.SYMBOL, value, start, start_line, start_column)

        if self._is_name_start(char):
            name_start = self.position
            self._read_name_chars()
            suffix = self._current_char()
            if suffix in ("?", "!"):
                self._advance()
            elif suffix == "=" and self._peek_char() not in ("=", ">", "~"):
                self._advance()
            value = self.text[name_start : self.position]
            return self._make_token(TokenType.SYMBOL, value, start, start_line, start_column)

        for operator in SYMBOL_OPERATORS:
            if self.text.startswith(operator, self.position):
                self._advance(len(operator))
                return self._make_token(
                    TokenType.SYMBOL, operator, start, start_line, start_column
                )

        msg = "Invalid symbol literal"
        raise LexerError(msg, start_line, start_column)

    def _read_name_chars(self) -> None:
        while self._current_char() is not None and (
            self._current_char().isalnum() or self._current_char() == "_"
        ):
            self._advance()

    def _read_quoted(self, quote: str) -> str:
        """Read a quoted literal and return its decoded value."""
        start_line = self.line
        start_column = self.column
        self._advance()  # skip opening quote
        body_start = self.position

        while self._current_char() is not None and self._current_char() != quote:
            if self._current_char() == "\\":
                self._advance()
            self._advance()

        if self._current_char() is None:
            msg = "Unterminated string"
            raise LexerError(msg, start_line, start_column)

        body = self.text[body_start : self.position]
        self._advance()  # skip closing quote

        if quote == '"':
            return unescape_double_quoted(body)
        return unescape_single_quoted(body)

    def _has_closing_backtick(self) -> bool:
        """A lone backtick is the ``def `: ...`` operator method name."""
        end = self.text.find("`", self.position + 1)
        if end <= self.position + 1:
            return False
        return "\n" not in self.text[self.position + 1 : end]

    def _read_quoted_identifier(self) -> Token:
        start = self.position
        start_line = self.line
        start_column = self.column
        self._advance()  # skip `
        name_start = self.position

        while self._current_char() != "`":
            self._advance()

        value = self.text[name_start : self.position]
        self._advance()  # skip closing `
        return self._make_token(
            TokenType.QUOTED_IDENTIFIER, value, start, start_line, start_column
        )

    def _read_annotation(self) -> Token:
        """Read ``%a{...}`` and the other delimiter forms."""
        start = self.position
        start_line = self.line
        start_column = self.column

        self._advance(2)  # skip %a
        closing = ANNOTATION_DELIMITERS[self._current_char()]
        self._advance()
        body_start = self.position

        while self._current_char() is not None and self._current_char() != closing:
            self._advance()

        if self._current_char() is None:
            msg = "Unterminated annotation"
            raise LexerError(msg, start_line, start_column)

        value = self.text[body_start : self.position].strip()
        self._advance()  # skip closing delimiter
        return self._make_token(TokenType.ANNOTATION, value, start, start_line, start_column)

    def _read_integer(self) -> Token:
        """Read an integer literal with optional sign and ``_`` separators."""
        start = self.position
        start_line = self.line
        start_column = self.column

        if self._current_char() in "+-":
            self._advance()

        while self._current_char() is not None and (
            self._current_char().isdigit() or self._current_char() == "_"
        ):
            self._advance()

        value = int(self.text[start : self.position].replace("_", ""))
        return self._make_token(TokenType.INTEGER, value, start, start_line, start_column)

    def _read_identifier(self) -> Token:
        """Read identifier or keyword."""
        start = self.position
        start_line = self.line
        start_column = self.column

        self._read_name_chars()
        value = self.text[start : self.position]

        token_type = self.KEYWORDS.get(value)
        if token_type is None:
            if value[0].isupper():
                token_type = TokenType.CONSTANT
            elif value[0] == "_" and value[1:2].isupper():
                token_type = TokenType.INTERFACE_NAME
            else:
                token_type = TokenType.IDENTIFIER

        return self._make_token(token_type, value, start, start_line, start_column)

    def _read_variable(self, token_type: TokenType, sigil_length: int) -> Token:
        """Read ``@ivar``, ``@@cvar`` or ``$gvar``."""
        start = self.position
        start_line = self.line
        start_column = self.column

        self._advance(sigil_length)
        self._read_name_chars()

        value = self.text[start : self.position]
        return self._make_token(token_type, value, start, start_line, start_column)
