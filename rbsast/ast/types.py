"""Type expression AST nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from rbsast.ast.base import ASTNode, TypeName


@dataclass
class Type(ASTNode):
    """Base class for all type expressions."""

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_type(self, *args)


class BaseTypeKind(Enum):
    """Keyword types. The value is the keyword as written in source."""

    ANY = "untyped"
    BOOL = "bool"
    BOTTOM = "bot"
    CLASS = "class"
    INSTANCE = "instance"
    NIL = "nil"
    SELF = "self"
    TOP = "top"
    VOID = "void"


@dataclass
class BaseType(Type):
    """untyped, bool, bot, class, instance, nil, self, top or void."""

    kind: BaseTypeKind

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_base_type(self, *args)

    def __str__(self) -> str:
        return self.kind.value


@dataclass
class VariableType(Type):
    """A reference to a type parameter in scope."""

    name: str

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_variable_type(self, *args)


@dataclass
class ClassInstanceType(Type):
    """Foo, ::Foo::Bar, Array[String]."""

    name: TypeName
    args: list[Type] = field(default_factory=list)

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_class_instance_type(self, *args)


@dataclass
class InterfaceType(Type):
    """_Each[String]."""

    name: TypeName
    args: list[Type] = field(default_factory=list)

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_interface_type(self, *args)


@dataclass
class AliasType(Type):
    """A reference to a type alias, e.g. ``json`` or ``::foo::bar[A]``."""

    name: TypeName
    args: list[Type] = field(default_factory=list)

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_alias_type(self, *args)


@dataclass
class ClassSingletonType(Type):
    """singleton(Foo)."""

    name: TypeName

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_class_singleton_type(self, *args)


@dataclass
class OptionalType(Type):
    """Foo?."""

    type: Type

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_optional_type(self, *args)


@dataclass
class UnionType(Type):
    """A | B."""

    types: list[Type]

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_union_type(self, *args)


@dataclass
class IntersectionType(Type):
    """A & B."""

    types: list[Type]

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_intersection_type(self, *args)


@dataclass
class TupleType(Type):
    """[A, B]; ``[ ]`` when empty."""

    types: list[Type] = field(default_factory=list)

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_tuple_type(self, *args)


class LiteralKind(Enum):
    """Kinds of literal values."""

    INTEGER = "integer"
    STRING = "string"
    SYMBOL = "symbol"
    TRUE = "true"
    FALSE = "false"


@dataclass
class LiteralType(Type):
    """1, "foo", :foo, true or false.

    ``value`` is the decoded value: an ``int`` for integers, the unescaped
    text for strings and the name for symbols.
    """

    kind: LiteralKind
    value: Any

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_literal_type(self, *args)


@dataclass
class RecordField(ASTNode):
    """One ``key: type`` or ``key => type`` entry of a record."""

    key: LiteralType
    type: Type

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_record_field(self, *args)


@dataclass
class RecordType(Type):
    """{ foo: String, "bar" => Integer }."""

    fields: list[RecordField] = field(default_factory=list)

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_record_type(self, *args)


@dataclass
class FunctionParam(ASTNode):
    """A parameter type with an optional name, e.g. ``Integer count``."""

    type: Type
    name: str | None = None

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_function_param(self, *args)


@dataclass
class Function(ASTNode):
    """The parameter lists and return type of a callable."""

    return_type: Type
    required_positionals: list[FunctionParam] = field(default_factory=list)
    optional_positionals: list[FunctionParam] = field(default_factory=list)
    rest_positionals: FunctionParam | None = None
    trailing_positionals: list[FunctionParam] = field(default_factory=list)
    required_keywords: dict[str, FunctionParam] = field(default_factory=dict)
    optional_keywords: dict[str, FunctionParam] = field(default_factory=dict)
    rest_keywords: FunctionParam | None = None

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_function(self, *args)

    @property
    def has_params(self) -> bool:
        return bool(
            self.required_positionals
            or self.optional_positionals
            or self.rest_positionals
            or self.trailing_positionals
            or self.required_keywords
            or self.optional_keywords
            or self.rest_keywords
        )


@dataclass
class Block(ASTNode):
    """A block clause ``{ (A) -> B }``; optional when written ``?{ ... }``."""

    type: Function
    required: bool = True

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_block(self, *args)


@dataclass
class ProcType(Type):
    """^(A) { (B) -> C } -> D."""

    type: Function
    block: Block | None = None

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_proc_type(self, *args)


class Variance(Enum):
    """Variance of a type parameter."""

    INVARIANT = "invariant"
    COVARIANT = "covariant"
    CONTRAVARIANT = "contravariant"


@dataclass
class TypeParam(ASTNode):
    """A generic parameter: ``unchecked out T < Comparable``."""

    name: str
    variance: Variance = Variance.INVARIANT
    unchecked: bool = False
    upper_bound: Type | None = None

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_type_param(self, *args)
