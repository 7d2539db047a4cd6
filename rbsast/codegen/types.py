"""Type expression output and the parenthesization policy."""

from __future__ import annotations

import re
from enum import Enum
from typing import TYPE_CHECKING, Any

from rbsast.ast.types import (
    AliasType,
    BaseType,
    ClassInstanceType,
    ClassSingletonType,
    FunctionParam,
    InterfaceType,
    IntersectionType,
    LiteralKind,
    LiteralType,
    OptionalType,
    ProcType,
    RecordField,
    RecordType,
    TupleType,
    UnionType,
    VariableType,
)
from rbsast.codegen import quotes
from rbsast.errors import MalformedNodeError
from rbsast.lexer.lexer import Lexer

if TYPE_CHECKING:
    from rbsast.ast.base import NameAndArgs
    from rbsast.codegen.layout import Layout

RESERVED_WORDS = frozenset(Lexer.KEYWORDS)

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")


class Parens(Enum):
    """Whether a compound type must be wrapped in parentheses.

    ``FORCE`` applies where a bare union, intersection or proc would be
    misread: under ``?``, inside ``&`` and after ``->``.
    """

    BARE = "bare"
    FORCE = "force"


def quote_name(name: str, allow_reserved: bool = False) -> str:
    """Backquote a name that is not a plain identifier.

    Reserved words are backquoted too unless ``allow_reserved`` is set, as it
    is for keyword parameter names where `type:` reads unambiguously.
    """
    reserved = name in RESERVED_WORDS and not allow_reserved
    if reserved or not IDENTIFIER_PATTERN.match(name):
        return f"`{name}`"
    return name


class TypeFormatter:
    """Print type expressions."""

    layout: Layout
    source: str

    def visit_base_type(self, node: BaseType, parens: Parens = Parens.BARE) -> None:
        self.layout.text(node.kind.value)

    def visit_variable_type(self, node: VariableType, parens: Parens = Parens.BARE) -> None:
        self.layout.text(node.name)

    def visit_class_instance_type(
        self, node: ClassInstanceType, parens: Parens = Parens.BARE
    ) -> None:
        self.print_name_and_args(node)

    def visit_interface_type(self, node: InterfaceType, parens: Parens = Parens.BARE) -> None:
        self.print_name_and_args(node)

    def visit_alias_type(self, node: AliasType, parens: Parens = Parens.BARE) -> None:
        self.print_name_and_args(node)

    def visit_class_singleton_type(
        self, node: ClassSingletonType, parens: Parens = Parens.BARE
    ) -> None:
        self.layout.text("singleton(")
        self.visit(node.name)
        self.layout.text(")")

    def visit_optional_type(self, node: OptionalType, parens: Parens = Parens.BARE) -> None:
        if isinstance(node.type, OptionalType):
            # `T??` does not parse
            self.layout.text("(")
            self.visit(node.type, Parens.FORCE)
            self.layout.text(")")
        else:
            self.visit(node.type, Parens.FORCE)
        self.layout.text("?")

    def visit_union_type(self, node: UnionType, parens: Parens = Parens.BARE) -> None:
        def separator() -> None:
            self.layout.breakable()
            self.layout.text("| ")

        if parens is Parens.FORCE:
            self.layout.text("(")
        with self.layout.group():
            self.layout.seplist(node.types, lambda type_: self.visit(type_, parens), separator)
        if parens is Parens.FORCE:
            self.layout.text(")")

    def visit_intersection_type(
        self, node: IntersectionType, parens: Parens = Parens.BARE
    ) -> None:
        def separator() -> None:
            self.layout.breakable()
            self.layout.text("& ")

        if parens is Parens.FORCE:
            self.layout.text("(")
        with self.layout.group():
            self.layout.seplist(
                node.types, lambda type_: self.visit(type_, Parens.FORCE), separator
            )
        if parens is Parens.FORCE:
            self.layout.text(")")

    def visit_tuple_type(self, node: TupleType, parens: Parens = Parens.BARE) -> None:
        # `[]` would read as an empty type argument list
        if not node.types:
            self.layout.text("[ ]")
            return

        with self.layout.group():
            self.layout.text("[")
            self.layout.seplist(
                node.types,
                lambda type_: self.visit(type_, Parens.BARE),
                lambda: self.layout.text(", "),
            )
            self.layout.text("]")

    def visit_record_type(self, node: RecordType, parens: Parens = Parens.BARE) -> None:
        if not node.fields:
            self.layout.text("{ }")
            return

        with self.layout.group():
            self.layout.text("{")
            with self.layout.indent():
                self.layout.breakable()
                self.layout.seplist(node.fields, self.visit)
            self.layout.breakable()
            self.layout.text("}")

    def visit_record_field(self, node: RecordField, *args: Any) -> None:
        key = node.key
        if key.kind is LiteralKind.SYMBOL and IDENTIFIER_PATTERN.match(key.value):
            self.layout.text(f"{key.value}: ")
        else:
            self.visit(key)
            self.layout.text(" => ")
        self.visit(node.type, Parens.BARE)

    def visit_literal_type(self, node: LiteralType, parens: Parens = Parens.BARE) -> None:
        if node.kind is LiteralKind.STRING:
            self.print_string_literal(node)
        elif node.kind is LiteralKind.SYMBOL:
            self.layout.text(quotes.inspect_symbol(node.value))
        elif node.kind is LiteralKind.INTEGER:
            self.layout.text(str(int(node.value)))
        elif node.kind is LiteralKind.TRUE:
            self.layout.text("true")
        elif node.kind is LiteralKind.FALSE:
            self.layout.text("false")
        else:
            raise MalformedNodeError(node, f"unknown literal kind {node.kind!r}")

    def print_string_literal(self, node: LiteralType) -> None:
        """Print a string literal from its source text.

        Re-printing the decoded value would rewrite its escape sequences, so
        the original text is normalized instead.
        """
        if node.location is None:
            self.layout.text(quotes.inspect_string(node.value))
            return

        source = self.source[node.location.range]
        quote = quotes.choose_quote(source)
        content = quotes.normalize(source[1:-1], quote)

        self.layout.text(quote)
        self.layout.seplist(
            quotes.split_literal_lines(content),
            self.layout.text,
            lambda: self.layout.breakable("", force=True, indent=False),
        )
        self.layout.text(quote)

    def visit_proc_type(self, node: ProcType, parens: Parens = Parens.BARE) -> None:
        with self.layout.group():
            if parens is Parens.FORCE:
                self.layout.text("(")
            self.layout.text("^")
            self.print_signature(node.type, [], node.block)
            if parens is Parens.FORCE:
                self.layout.text(")")

    def visit_function_param(self, node: FunctionParam, *args: Any) -> None:
        self.visit(node.type, Parens.BARE)
        if node.name is not None:
            self.layout.text(" ")
            self.layout.text(quote_name(node.name))

    def print_name_and_args(self, node: NameAndArgs | ClassInstanceType) -> None:
        """Print ``Name`` or ``Name[Arg, ...]``."""
        with self.layout.group():
            self.visit(node.name)
            if node.args:
                self.layout.text("[")
                self.layout.seplist(
                    node.args,
                    lambda arg: self.visit(arg, Parens.BARE),
                    lambda: self.layout.text(", "),
                )
                self.layout.text("]")
