"""Declaration AST nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from rbsast.ast.base import Decorated, NameAndArgs, TypeName

if TYPE_CHECKING:
    from rbsast.ast.members import Member
    from rbsast.ast.types import Type, TypeParam


@dataclass
class Declaration(Decorated):
    """Base class for declarations."""

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_declaration(self, *args)


@dataclass
class ClassDeclaration(Declaration):
    """class Foo[T] < Bar[T] ... end"""

    name: TypeName
    type_params: list[TypeParam] = field(default_factory=list)
    super_class: NameAndArgs | None = None
    members: list[Member | Declaration] = field(default_factory=list)

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_class_declaration(self, *args)


@dataclass
class ModuleDeclaration(Declaration):
    """module Foo[T] : _Each[T] ... end"""

    name: TypeName
    type_params: list[TypeParam] = field(default_factory=list)
    self_types: list[NameAndArgs] = field(default_factory=list)
    members: list[Member | Declaration] = field(default_factory=list)

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_module_declaration(self, *args)


@dataclass
class InterfaceDeclaration(Declaration):
    """interface _Foo[T] ... end"""

    name: TypeName
    type_params: list[TypeParam] = field(default_factory=list)
    members: list[Member] = field(default_factory=list)

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_interface_declaration(self, *args)


@dataclass
class ConstantDeclaration(Declaration):
    """Foo: String"""

    name: TypeName
    type: Type

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_constant_declaration(self, *args)


@dataclass
class GlobalDeclaration(Declaration):
    """$foo: String. ``name`` includes the dollar sign."""

    name: str
    type: Type

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_global_declaration(self, *args)


@dataclass
class TypeAliasDeclaration(Declaration):
    """type foo[T] = Array[T]"""

    name: TypeName
    type: Type
    type_params: list[TypeParam] = field(default_factory=list)

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_type_alias_declaration(self, *args)
