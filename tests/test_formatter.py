"""Tests for the RBS formatter."""

import pytest

from rbsast.ast.base import Root, TypeName
from rbsast.ast.declarations import ClassDeclaration, ConstantDeclaration, Declaration
from rbsast.ast.members import AliasMember, MemberKind, MethodDefinitionMember
from rbsast.ast.types import LiteralKind, LiteralType
from rbsast.codegen import FormattingConfig, RBSFormatter, format_source
from rbsast.errors import MalformedNodeError, RBSSyntaxError, UnsupportedNodeError
from rbsast.parser import parse


def assert_format(expected: str, original: str | None = None, config=None) -> None:
    """Check the formatted text and that formatting it again changes nothing."""
    if original is None:
        original = expected

    formatted = format_source(original, config)
    assert formatted == expected.rstrip("\n") + "\n"
    assert format_source(formatted, config) == formatted


def in_class(line: str) -> str:
    return f"class T\n  {line}\nend"


class TestDeclarations:
    """Test top-level declarations."""

    @pytest.mark.parametrize(
        "source",
        [
            "class Foo\nend",
            "class Foo < Bar\nend",
            "class Foo < Bar[Integer]\nend",
            "class Foo[A, B]\nend",
            "class Foo[A < B]\nend",
            "class Foo[U < singleton(::Hash), V < W[X, Y]]\nend",
            "class Foo[unchecked in A, unchecked out B, in C, out D, unchecked E, unchecked F, G, H]\nend",
            "class Foo[out T] < Array[T]\nend",
            "interface _Foo\nend",
            "interface _Foo[A, B]\nend",
            "interface _Foo[A < B]\nend",
            "interface _Foo[U < singleton(::Hash), V < W[X, Y]]\nend",
            "module Foo\nend",
            "module Foo[A, B]\nend",
            "module Foo : A\nend",
            "module Foo : A, _B[Integer]\nend",
            "type foo = Bar",
            "type list[T] = [T, list[T]]",
            "type Foo::bar = Integer",
            "Foo: String",
            "::Foo::Bar: Integer",
            "$foo: String",
        ],
    )
    def test_declaration(self, source: str) -> None:
        """Test that canonical declarations format to themselves."""
        assert_format(source)

    def test_declarations_are_separated_by_one_blank_line(self) -> None:
        """Test declaration separation."""
        assert_format(
            "class A\nend\n\nclass B\nend\n\nC: Integer",
            "class A\nend\nclass B\nend\n\n\n\n\nC: Integer",
        )

    def test_nested_declarations(self) -> None:
        """Test declarations inside class and module bodies."""
        assert_format(
            "module Outer\n"
            "  class Inner < Base\n"
            "    VERSION: String\n"
            "  end\n"
            "\n"
            "  interface _Each\n"
            "    def each: { (Integer) -> void } -> void\n"
            "  end\n"
            "\n"
            "  type t = Integer\n"
            "end"
        )

    def test_empty_source(self) -> None:
        """Test that an empty file formats to a single newline."""
        assert format_source("") == "\n"
        assert format_source("\n\n  \n") == "\n"

    def test_class_with_annotation_that_cannot_use_braces(self) -> None:
        """Test that annotation text containing braces keeps its delimiters."""
        assert_format("%a<This is {an} annotation.>\nclass Foo\nend")

    def test_annotation_delimiters_are_normalized(self) -> None:
        """Test that other delimiters become braces."""
        assert_format("%a{pure}\nclass Foo\nend", "%a(pure)\nclass Foo\nend")
        assert_format("%a{pure}\nclass Foo\nend", "%a[ pure ]\nclass Foo\nend")


class TestTypes:
    """Test type expressions."""

    @pytest.mark.parametrize(
        "type_",
        [
            # Base types
            "untyped",
            "bool",
            "bot",
            "class",
            "instance",
            "nil",
            "self",
            "top",
            "void",
            # Names
            "Integer",
            "::Integer",
            "Foo::Bar",
            "Array[Integer]",
            "Hash[Symbol, untyped]",
            "_Each[Integer]",
            "foo",
            "Foo::bar",
            "singleton(Foo)",
            "singleton(::Foo::Bar)",
            # Literals
            "1",
            "-5",
            '"foo"',
            ":foo",
            ":foo?",
            ":foo=",
            ":+",
            ":[]=",
            ':"foo bar"',
            "true",
            "false",
            # Optionals, unions and intersections
            "Integer?",
            "(Integer | String)?",
            "(1 | 2)?",
            "1 | 2",
            "A & B",
            "A & B | C",
            "(A | B) & C",
            "(A & B)?",
            "Array[Integer | String]",
            "((A | B) & C)?",
            "A & (B | C)",
            "Array[(A | B)?, C | D]",
            # Tuples and records
            "[Integer, String]",
            "[ ]",
            "{ id: Integer, name: String }",
            "{ type: String }",
            '{ "foo" => Integer }',
            "{ 1 => String }",
            '{ :"foo bar" => Integer }',
            '{ "🌼" => Integer }',
            '{ "日本語" => Integer }',
            "{ }",
            "[(A | B)?, C | D]",
            "[A | B, C?]",
            "{ a: (A | B)?, b: C | D }",
            # Procs
            "^-> void",
            "^(Integer) -> String",
            "^(Integer x, ?String y) -> bool",
            "^{ -> void } -> void",
            "^(Integer) ?{ (String) -> void } -> bool",
            "(^-> void)?",
            "^-> (Integer | String)",
            "^-> (A | B) | C",
            "[^-> (A | B), C | D]",
        ],
    )
    def test_type(self, type_: str) -> None:
        """Test that canonical types format to themselves."""
        assert_format(f"T: {type_}")

    @pytest.mark.parametrize(
        ("original", "expected"),
        [
            ("+1", "1"),
            ("1_000", "1000"),
            (":foo ?", ":foo?"),
            ("(Integer)", "Integer"),
            ("((Integer | String))", "Integer | String"),
            ("[]", "[ ]"),
            ("{ :foo => Integer }", "{ foo: Integer }"),
            ("{id:Integer}", "{ id: Integer }"),
            ("Array[ Integer ]", "Array[Integer]"),
            ("(Integer?)?", "(Integer?)?"),
        ],
    )
    def test_canonical_form(self, original: str, expected: str) -> None:
        """Test that equivalent spellings print one way."""
        assert_format(f"T: {expected}", f"T: {original}")

    def test_proc_drops_empty_parameter_list(self) -> None:
        """Test that a proc without parameters omits the parentheses."""
        assert_format("T: ^-> void", "T: ^() -> void")

    def test_block_drops_empty_parameter_list(self) -> None:
        """Test that a block without parameters omits the parentheses."""
        assert_format("T: ^{ -> void } -> void", "T: ^{ () -> void } -> void")

    def test_long_union_breaks(self) -> None:
        """Test that a union wider than the line breaks between members."""
        config = FormattingConfig(max_width=20)
        assert_format("T: Integer\n| String\n| Symbol", "T: Integer | String | Symbol", config)


class TestStrings:
    """Test string literal quoting."""

    def test_double_quotes(self) -> None:
        """Test that double quotes are kept."""
        assert_format('T: "foo"')

    def test_single_quotes(self) -> None:
        """Test that single quotes become double quotes."""
        assert_format('T: "foo"', "T: 'foo'")

    def test_keeps_quote_when_there_is_an_escape_sequence(self) -> None:
        """Test that escapes keep their original quote."""
        assert_format('T: "super \\a duper"')
        assert_format("T: 'it\\'s'")

    def test_maintains_escape_sequences_double_quotes(self) -> None:
        """Test double-quoted escapes."""
        assert_format('T: "escape sequences \\a\\b\\e\\f\\n\\r"')

    def test_maintains_escape_sequences_single_quotes(self) -> None:
        """Test single-quoted escapes."""
        assert_format("T: 'escape sequences \\a\\b\\e\\f\\n\\r'")

    def test_double_quote_inside_single_quotes_is_escaped(self) -> None:
        """Test that switching quotes escapes the new quote character."""
        assert_format('T: "say \\"hi\\""', "T: 'say \"hi\"'")

    def test_single_quote_inside_double_quotes(self) -> None:
        """Test that a single quote needs no escape in double quotes."""
        assert_format("T: \"it's\"")

    def test_multiline_string_is_kept_verbatim(self) -> None:
        """Test that lines of a string literal are not indented."""
        assert_format('class T\n  A: "first\nsecond  \n third"\nend')

    def test_multiline_string_keeps_crlf(self) -> None:
        """Test that a CRLF line break inside a string literal is kept."""
        assert_format('T: "a\r\nb"')
        assert parse(format_source('T: "a\r\nb"')).declarations[0].type.value == "a\r\nb"


class TestMembers:
    """Test class body members."""

    @pytest.mark.parametrize(
        "member",
        [
            "alias foo bar",
            "alias self.foo self.bar",
            "alias + add",
            "alias foo? bar!",
            "attr_reader foo: Foo",
            "attr_writer foo: Foo",
            "attr_accessor foo: Foo",
            "attr_reader self.foo: Foo",
            "attr_accessor foo(@bar): Foo",
            "attr_reader foo(): Foo",
            "attr_reader type: String",
            "public attr_accessor foo: Foo",
            "private attr_reader foo: Foo",
            "@foo: String",
            "self.@foo: String",
            "@@foo: String",
            "include Foo",
            "include Foo[Integer]",
            "include _Foo",
            "extend Foo",
            "prepend Foo",
            "public",
            "private",
        ],
    )
    def test_member(self, member: str) -> None:
        """Test that canonical members format to themselves."""
        assert_format(in_class(member))

    def test_visibility_marker_on_its_own_line(self) -> None:
        """Test that a bare visibility marker does not bind the next member."""
        assert_format("class T\n  private\n  def foo: -> void\nend")

    def test_indent_size(self) -> None:
        """Test that the body indentation follows the configuration."""
        config = FormattingConfig(indent_size=4)
        assert_format("class T\n    @a: Integer\nend", "class T\n  @a: Integer\nend", config)


class TestMethods:
    """Test method definitions and signatures."""

    @pytest.mark.parametrize(
        "method",
        [
            "def t: (T t) -> void",
            "def t: (Integer) -> String",
            "private def t: (T t) -> void",
            "public def t: -> void",
            "def self.t: -> void",
            "def self?.t: -> void",
            "def t: -> void",
            "def t: (Integer) -> (String | Integer)",
            "def t: (Integer) -> (String & _Each[Integer])",
            "def t: (Integer) -> String?",
            "def t: { (Integer) -> void } -> void",
            "def t: ?{ -> void } -> void",
            "def t: (Integer) { (String) -> void } -> bool",
            "def t: [A] (A a) -> A",
            "def t: [unchecked out A < Integer] -> A",
            "def t: %a{pure} -> void",
            "def []: (Integer) -> String",
            "def []=: (Integer, String) -> String",
            "def <=>: (untyped) -> Integer",
            "def ==: (untyped) -> bool",
            "def +: (Integer) -> Integer",
            "def -@: -> Integer",
            "def !: -> bool",
            "def foo?: -> bool",
            "def foo!: -> void",
            "def foo=: (Integer) -> Integer",
            "def `class`: -> void",
            "def `end`: -> void",
            "def t: (Integer `type`) -> void",
            "def t: (type: String) -> void",
            "def t: (A a, ?B b, *C c, D d, e: E, ?f: F, **G g) -> void",
        ],
    )
    def test_method(self, method: str) -> None:
        """Test that canonical method definitions format to themselves."""
        assert_format(in_class(method))

    def test_empty_parameter_list_is_dropped(self) -> None:
        """Test that `()` is left out of method signatures."""
        assert_format(in_class("def t: -> void"), in_class("def t: () -> void"))
        assert_format(
            in_class("def t: { -> void } -> void"), in_class("def t: () { () -> void } -> void")
        )

    def test_parameters_are_reordered(self) -> None:
        """Test that keyword parameters print required first."""
        assert_format(
            in_class("def t: (a: Integer, b: String, ?c: bool) -> void"),
            in_class("def t: (a: Integer, ?c: bool, b: String) -> void"),
        )

    def test_overloads_align_under_the_colon(self) -> None:
        """Test that overloads print one per line."""
        assert_format(
            "class T\n  def t: (A) -> B\n       | (C) -> D\n       | ...\nend",
            in_class("def t: (A) -> B | (C) -> D | ..."),
        )

    def test_overloads_of_singleton_method(self) -> None:
        """Test overload alignment after a longer prefix."""
        assert_format(
            "class T\n"
            "  private def self.fetch: (Integer) -> String\n"
            "                        | (Integer, String) -> String\n"
            "end"
        )

    def test_overloading_only(self) -> None:
        """Test a method that only extends existing overloads."""
        assert_format(in_class("def t: ..."))

    def test_single_overload_with_ellipsis(self) -> None:
        """Test that `...` counts as an overload entry."""
        assert_format(
            "class T\n  def t: -> void\n       | ...\nend",
            in_class("def t: () -> void | ..."),
        )

    def test_overload_annotations_stay_inline(self) -> None:
        """Test per-overload annotations."""
        assert_format(
            "class T\n  def t: %a{pure} -> Integer\n       | %a{implicitly-returns-nil} (Integer) -> String?\nend"
        )

    def test_long_parameter_list_breaks(self) -> None:
        """Test that parameters go one per line when they do not fit."""
        assert_format(
            "class Foo\n"
            "  def foo: (\n"
            "    Integer aaaaaaaaaaaaaaaaaaaa,\n"
            "    String bbbbbbbbbbbbbbbbbbbbbbbb,\n"
            "    Symbol cccccccccccccccccccccccc\n"
            "  ) -> void\n"
            "end",
            "class Foo\n"
            "  def foo: (Integer aaaaaaaaaaaaaaaaaaaa, String bbbbbbbbbbbbbbbbbbbbbbbb, "
            "Symbol cccccccccccccccccccccccc) -> void\n"
            "end",
        )


class TestBlankLines:
    """Test blank line preservation between members."""

    def test_multiple_empty_lines_collapse_to_one(self) -> None:
        """Test that a run of blank lines becomes one."""
        assert_format(
            "class Foo\n  A: 1\n  B: 2\n\n  C: 3\nend",
            "class Foo\n  A: 1\n  B: 2\n\n\n  C: 3\nend",
        )

    def test_five_empty_lines_collapse_to_one(self) -> None:
        """Test a larger gap."""
        assert_format(
            "class Foo\n  A: 1\n\n  B: 2\nend",
            "class Foo\n  A: 1\n\n\n\n\n\n  B: 2\nend",
        )

    def test_no_blank_line_is_added(self) -> None:
        """Test that adjacent members stay adjacent."""
        assert_format("class Foo\n  def a: -> void\n  def b: -> void\nend")

    def test_blank_line_before_commented_member(self) -> None:
        """Test that the gap is measured up to the comment."""
        assert_format("class Foo\n  def a: -> void\n\n  # Docs for b.\n  def b: -> void\nend")

    def test_no_blank_line_before_adjacent_commented_member(self) -> None:
        """Test that a comment directly below a member does not open a gap."""
        assert_format("class Foo\n  def a: -> void\n  # doc\n  def b: -> void\nend")

    def test_no_blank_line_before_adjacent_annotated_member(self) -> None:
        """Test that an annotation directly below a member does not open a gap."""
        assert_format("class Foo\n  def a: -> void\n  %a{pure}\n  def b: -> void\nend")

    def test_blank_line_after_multiline_member(self) -> None:
        """Test that the gap is measured from the last line of a member."""
        assert_format("class Foo\n  def a: (A) -> B\n       | (C) -> D\n  def b: -> void\nend")


class TestComments:
    """Test comment and annotation placement."""

    @pytest.mark.parametrize(
        "declaration",
        [
            "type foo = Bar",
            "class Foo\nend",
            "Foo: String",
            "$foo: String",
            "interface _Foo\nend",
            "module Foo\nend",
        ],
    )
    def test_declaration_with_comment(self, declaration: str) -> None:
        """Test comments above declarations."""
        assert_format(f"# This is a comment\n{declaration}")

    @pytest.mark.parametrize(
        "member",
        [
            "alias foo bar",
            "attr_accessor foo: Foo",
            "attr_reader foo: Foo",
            "attr_writer foo: Foo",
            "self.@foo: String",
            "@@foo: String",
            "extend Foo",
            "include Foo",
            "@foo: String",
            "def t: (T t) -> void",
            "prepend Foo",
            "private def t: (T t) -> void",
            "public attr_accessor foo: Foo",
        ],
    )
    def test_member_with_comment(self, member: str) -> None:
        """Test comments above members."""
        assert_format(f"class T\n  # This is a comment\n  {member}\nend")

    @pytest.mark.parametrize(
        "declaration",
        ["type foo = Bar", "class Foo\nend", "interface _Foo\nend", "module Foo\nend"],
    )
    def test_declaration_with_annotation(self, declaration: str) -> None:
        """Test annotations above declarations."""
        assert_format(f"%a{{This is an annotation.}}\n{declaration}")

    @pytest.mark.parametrize(
        "member",
        [
            "alias foo bar",
            "attr_accessor foo: Foo",
            "attr_reader foo: Foo",
            "attr_writer foo: Foo",
            "extend Foo",
            "include Foo",
            "def t: (T t) -> void",
            "prepend Foo",
            "private def t: (T t) -> void",
            "public attr_accessor foo: Foo",
        ],
    )
    def test_member_with_annotation(self, member: str) -> None:
        """Test annotations above members."""
        assert_format(f"class T\n  %a{{This is an annotation.}}\n  {member}\nend")

    def test_comment_above_annotation(self) -> None:
        """Test a comment followed by an annotation."""
        assert_format("# Docs.\n%a{deprecated}\nclass Foo\nend")

    def test_multiline_comment(self) -> None:
        """Test that each comment line gets its own marker."""
        assert_format("# line one\n#\n# line three\nclass Foo\nend")

    def test_comment_is_reindented(self) -> None:
        """Test that comments follow the member indentation."""
        assert_format(
            "class Foo\n  # Docs.\n  def a: -> void\nend",
            "class Foo\n      # Docs.\n  def a: -> void\nend",
        )

    def test_detached_comment_is_dropped(self) -> None:
        """Test that a comment separated by a blank line is not printed."""
        assert_format("class Foo\nend", "# Orphan.\n\nclass Foo\nend")

    def test_trailing_comment_is_dropped(self) -> None:
        """Test that a comment after code on the same line is not printed."""
        assert_format("class Foo\n  def a: -> void\nend", "class Foo\n  def a: -> void # a\nend")


class TestIdempotence:
    """Test that formatted output is stable."""

    SOURCE = """\
# A collection of things.
%a{deprecated}
class Collection[unchecked out Elem < _Each[untyped]] < Base
  include Enumerable[Elem]
  extend _Builder

  @items: Array[Elem]
  self.@count: Integer
  @@registry: Hash[Symbol, Collection[untyped]]

  attr_reader size: Integer
  attr_accessor name(@label): String?

  # Iterates.
  def each: () { (Elem) -> void } -> self
          | () -> Enumerator[Elem, self]

  def self.build: [T] (*T items, ?strict: bool) -> Collection[T]
  def fetch: (Integer index, ?Elem default) -> Elem?
           | %a{implicitly-returns-nil} (Integer) -> Elem?
           | ...

  private

  alias size? empty?

  def `class`: () -> singleton(Collection)
  def []: (Integer) -> (Elem | nil)
  def to_h: () -> { items: Array[Elem], "count" => Integer, 1 => true }
  def callback: () -> ^(Integer, ?String) ?{ -> void } -> (bool & Comparable)
end

module Util : _Each[Integer], Kernel
  type ints = Array[Integer] | [Integer, Integer] | nil
end

interface _Builder[in T]
  def build: (T) -> void
end

$verbose: bool
VERSION: String
"""

    def test_idempotent(self) -> None:
        """Test that formatting twice gives the same text."""
        once = format_source(self.SOURCE)
        assert format_source(once) == once

    def test_output_ends_with_single_newline(self) -> None:
        """Test the file terminator."""
        formatted = format_source(self.SOURCE)
        assert formatted.endswith("end\n\n$verbose: bool\n\nVERSION: String\n")


class TestErrors:
    """Test error propagation."""

    def test_syntax_error_propagates(self) -> None:
        """Test that parse errors reach the caller."""
        with pytest.raises(RBSSyntaxError) as exc_info:
            format_source("class Foo")
        assert exc_info.value.line == 1

    def test_unsupported_node(self) -> None:
        """Test that an object without a rendering is rejected."""
        with pytest.raises(UnsupportedNodeError):
            RBSFormatter("").format(Root(declarations=[Declaration()]))

        with pytest.raises(UnsupportedNodeError):
            RBSFormatter("").format(Root(declarations=["class Foo"]))

    def test_singleton_instance_alias_is_malformed(self) -> None:
        """Test that `self?.` aliases are rejected."""
        alias = AliasMember(new_name="a", old_name="b", kind=MemberKind.SINGLETON_INSTANCE)
        root = Root(declarations=[ClassDeclaration(name=TypeName("Foo"), members=[alias])])

        with pytest.raises(MalformedNodeError):
            RBSFormatter("").format(root)

    def test_method_without_overloads_is_malformed(self) -> None:
        """Test that a method needs at least one overload."""
        method = MethodDefinitionMember(name="foo", overloads=[])
        root = Root(declarations=[ClassDeclaration(name=TypeName("Foo"), members=[method])])

        with pytest.raises(MalformedNodeError):
            RBSFormatter("").format(root)

    def test_unknown_literal_kind_is_malformed(self) -> None:
        """Test that a literal needs a known kind."""
        literal = LiteralType(kind="regexp", value="a")
        root = Root(declarations=[ConstantDeclaration(name=TypeName("T"), type=literal)])

        with pytest.raises(MalformedNodeError):
            RBSFormatter("").format(root)


class TestFormatter:
    """Test the formatter object."""

    def test_literal_without_location(self) -> None:
        """Test that synthesized string literals print from their value."""
        literal = LiteralType(kind=LiteralKind.STRING, value='a"b')
        root = Root(declarations=[ConstantDeclaration(name=TypeName("T"), type=literal)])

        assert RBSFormatter("").format(root) == 'T: "a\\"b"\n'

    def test_formatter_is_reusable(self) -> None:
        """Test that format() starts from a fresh layout each time."""
        source = "class Foo\n  def foo: -> void\nend"
        formatter = RBSFormatter(source)
        root = parse(source)

        assert formatter.format(root) == formatter.format(root) == source + "\n"
