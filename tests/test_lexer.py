"""Tests for the RBS lexer."""

import pytest

from rbsast.errors import RBSSyntaxError
from rbsast.lexer import Lexer, LexerError, TokenType
from rbsast.lexer.lexer import unescape_double_quoted, unescape_single_quoted


def token_types(text: str) -> list[TokenType]:
    return [token.type for token in Lexer(text).tokenize()]


def single_token(text: str):
    tokens = Lexer(text).tokenize()
    assert len(tokens) == 2, tokens
    return tokens[0]


class TestTokens:
    """Test basic tokenization."""

    def test_class_header(self) -> None:
        """Test keywords, constants and punctuation."""
        assert token_types("class Foo < Bar") == [
            TokenType.CLASS,
            TokenType.CONSTANT,
            TokenType.LT,
            TokenType.CONSTANT,
            TokenType.EOF,
        ]

    def test_names(self) -> None:
        """Test the different kinds of names."""
        assert single_token("Foo").type == TokenType.CONSTANT
        assert single_token("_Each").type == TokenType.INTERFACE_NAME
        assert single_token("_foo").type == TokenType.IDENTIFIER
        assert single_token("foo_bar").type == TokenType.IDENTIFIER
        assert single_token("untyped").type == TokenType.UNTYPED

    def test_multi_character_punctuation(self) -> None:
        """Test arrows, double star, double colon and ellipsis."""
        assert token_types("-> => ** :: ...") == [
            TokenType.ARROW,
            TokenType.FAT_ARROW,
            TokenType.DOUBLE_STAR,
            TokenType.DOUBLE_COLON,
            TokenType.ELLIPSIS,
            TokenType.EOF,
        ]

    def test_variables(self) -> None:
        """Test instance, class and global variables."""
        tokens = Lexer("@foo @@bar $baz").tokenize()
        assert [(t.type, t.value) for t in tokens[:-1]] == [
            (TokenType.IVAR, "@foo"),
            (TokenType.CVAR, "@@bar"),
            (TokenType.GVAR, "$baz"),
        ]

    def test_positions(self) -> None:
        """Test token line, column and offsets."""
        tokens = Lexer("Foo: Integer\n  Bar").tokenize()
        integer, bar = tokens[2], tokens[3]

        assert (integer.line, integer.column) == (1, 6)
        assert (integer.position, integer.length, integer.end_position) == (5, 7, 12)
        assert (bar.line, bar.column) == (2, 3)

    def test_eof_token(self) -> None:
        """Test that an empty input has only the end token."""
        assert token_types("") == [TokenType.EOF]
        assert token_types("   \n\t") == [TokenType.EOF]


class TestLiterals:
    """Test literal tokens."""

    @pytest.mark.parametrize(
        ("text", "value"),
        [("42", 42), ("1_000", 1000), ("-5", -5), ("+1", 1)],
    )
    def test_integer(self, text: str, value: int) -> None:
        """Test integer literals."""
        token = single_token(text)
        assert token.type == TokenType.INTEGER
        assert token.value == value

    @pytest.mark.parametrize(
        ("text", "value"),
        [
            ('"foo"', "foo"),
            ('"a\\nb"', "a\nb"),
            ('"tab\\there"', "tab\there"),
            ('"\\u00e9"', "é"),
            ('"\\x41"', "A"),
            ('"quote \\" inside"', 'quote " inside'),
            ("'foo'", "foo"),
            ("'it\\'s'", "it's"),
            ("'a\\nb'", "a\\nb"),
        ],
    )
    def test_string(self, text: str, value: str) -> None:
        """Test string literals and their decoded values."""
        token = single_token(text)
        assert token.type == TokenType.STRING
        assert token.value == value

    @pytest.mark.parametrize(
        ("text", "value"),
        [
            (":foo", "foo"),
            (":foo?", "foo?"),
            (":foo!", "foo!"),
            (":foo=", "foo="),
            (":@ivar", "@ivar"),
            (":+", "+"),
            (":[]=", "[]="),
            (":<=>", "<=>"),
            (':"foo bar"', "foo bar"),
        ],
    )
    def test_symbol(self, text: str, value: str) -> None:
        """Test symbol literals."""
        token = single_token(text)
        assert token.type == TokenType.SYMBOL
        assert token.value == value

    def test_colon_after_name_is_not_a_symbol(self) -> None:
        """Test that `name: type` uses a plain colon."""
        assert token_types("foo:bar") == [
            TokenType.IDENTIFIER,
            TokenType.COLON,
            TokenType.IDENTIFIER,
            TokenType.EOF,
        ]

    def test_symbol_after_colon(self) -> None:
        """Test a symbol type after a declaration colon."""
        tokens = Lexer("T: :foo").tokenize()
        assert [t.type for t in tokens] == [
            TokenType.CONSTANT,
            TokenType.COLON,
            TokenType.SYMBOL,
            TokenType.EOF,
        ]

    def test_unescape_helpers(self) -> None:
        """Test escape decoding."""
        assert unescape_double_quoted("\\s\\e\\101\\u{1F33C}") == " \x1bA🌼"
        assert unescape_single_quoted("a\\\\b\\'c\\n") == "a\\b'c\\n"


class TestAnnotationsAndComments:
    """Test annotations, comments and quoted names."""

    @pytest.mark.parametrize(
        "text", ["%a{pure}", "%a(pure)", "%a[pure]", "%a<pure>", "%a|pure|", "%a{  pure  }"]
    )
    def test_annotation(self, text: str) -> None:
        """Test every annotation delimiter."""
        token = single_token(text)
        assert token.type == TokenType.ANNOTATION
        assert token.value == "pure"

    def test_comments_are_collected(self) -> None:
        """Test that comments leave the token stream."""
        lexer = Lexer("# hello\n#  indented\n#\nFoo: Integer # trailing")
        tokens = lexer.tokenize()

        assert [t.type for t in tokens] == [
            TokenType.CONSTANT,
            TokenType.COLON,
            TokenType.CONSTANT,
            TokenType.EOF,
        ]
        assert [c.value for c in lexer.comments] == ["hello", " indented", "", "trailing"]
        assert [c.line for c in lexer.comments] == [1, 2, 3, 4]

    def test_quoted_identifier(self) -> None:
        """Test backquoted names."""
        token = single_token("`class`")
        assert token.type == TokenType.QUOTED_IDENTIFIER
        assert token.value == "class"

    def test_lone_backtick_is_an_operator(self) -> None:
        """Test the backtick method name."""
        assert token_types("def `: (String) -> String")[:3] == [
            TokenType.DEF,
            TokenType.OPERATOR,
            TokenType.COLON,
        ]


class TestErrors:
    """Test lexer errors."""

    def test_unexpected_character(self) -> None:
        """Test an unknown character."""
        with pytest.raises(LexerError) as exc_info:
            Lexer("Foo: ;").tokenize()

        error = exc_info.value
        assert isinstance(error, RBSSyntaxError)
        assert (error.line, error.column) == (1, 6)
        assert str(error) == "Lexer error at 1:6: Unexpected character: ;"

    def test_unterminated_string(self) -> None:
        """Test a string without its closing quote."""
        with pytest.raises(LexerError, match="Unterminated string"):
            Lexer('T: "abc').tokenize()

    def test_unterminated_annotation(self) -> None:
        """Test an annotation without its closing delimiter."""
        with pytest.raises(LexerError, match="Unterminated annotation"):
            Lexer("%a{pure").tokenize()
