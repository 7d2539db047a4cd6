"""Member AST nodes found in class, module and interface bodies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Literal

from rbsast.ast.base import Annotation, ASTNode, Decorated, TypeName

if TYPE_CHECKING:
    from rbsast.ast.types import Block, Function, Type, TypeParam


class MemberKind(Enum):
    """Receiver of a method, alias or attribute."""

    INSTANCE = "instance"
    SINGLETON = "singleton"
    SINGLETON_INSTANCE = "singleton_instance"


class Visibility(Enum):
    """Visibility prefix of a method or attribute."""

    PUBLIC = "public"
    PRIVATE = "private"


@dataclass
class Member(Decorated):
    """Base class for members."""

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_member(self, *args)


@dataclass
class AliasMember(Member):
    """alias foo bar / alias self.foo self.bar"""

    new_name: str
    old_name: str
    kind: MemberKind = MemberKind.INSTANCE

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_alias_member(self, *args)


@dataclass
class AttributeMember(Member):
    """Shared shape of attr_reader, attr_writer and attr_accessor.

    ``ivar_name`` is ``None`` for the implied instance variable, ``False``
    when written ``name()`` and the variable name otherwise.
    """

    name: str
    type: Type
    ivar_name: str | Literal[False] | None = None
    kind: MemberKind = MemberKind.INSTANCE
    visibility: Visibility | None = None

    keyword = "attr"

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_member(self, *args)


@dataclass
class AttrReaderMember(AttributeMember):
    keyword = "attr_reader"

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_attr_reader_member(self, *args)


@dataclass
class AttrWriterMember(AttributeMember):
    keyword = "attr_writer"

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_attr_writer_member(self, *args)


@dataclass
class AttrAccessorMember(AttributeMember):
    keyword = "attr_accessor"

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_attr_accessor_member(self, *args)


@dataclass
class InstanceVariableMember(Member):
    """@foo: String"""

    name: str
    type: Type

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_instance_variable_member(self, *args)


@dataclass
class ClassInstanceVariableMember(Member):
    """self.@foo: String"""

    name: str
    type: Type

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_class_instance_variable_member(self, *args)


@dataclass
class ClassVariableMember(Member):
    """@@foo: String"""

    name: str
    type: Type

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_class_variable_member(self, *args)


@dataclass
class MixinMember(Member):
    """Shared shape of include, extend and prepend."""

    name: TypeName
    args: list[Type] = field(default_factory=list)

    keyword = "mixin"

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_member(self, *args)


@dataclass
class IncludeMember(MixinMember):
    keyword = "include"

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_include_member(self, *args)


@dataclass
class ExtendMember(MixinMember):
    keyword = "extend"

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_extend_member(self, *args)


@dataclass
class PrependMember(MixinMember):
    keyword = "prepend"

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_prepend_member(self, *args)


@dataclass
class PublicMember(Member):
    """A bare ``public`` line."""

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_public_member(self, *args)


@dataclass
class PrivateMember(Member):
    """A bare ``private`` line."""

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_private_member(self, *args)


@dataclass
class MethodType(ASTNode):
    """One signature: ``[T] (T arg) { () -> void } -> T``."""

    type: Function
    type_params: list[TypeParam] = field(default_factory=list)
    block: Block | None = None

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_method_type(self, *args)


@dataclass
class MethodOverload(ASTNode):
    """A method type together with the annotations written before it."""

    method_type: MethodType
    annotations: list[Annotation] = field(default_factory=list)

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_method_overload(self, *args)


@dataclass
class MethodDefinitionMember(Member):
    """def foo: (A) -> B | (C) -> D | ...

    ``overloading`` is set when the list ends with ``...``.
    """

    name: str
    overloads: list[MethodOverload] = field(default_factory=list)
    kind: MemberKind = MemberKind.INSTANCE
    overloading: bool = False
    visibility: Visibility | None = None

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_method_definition_member(self, *args)
