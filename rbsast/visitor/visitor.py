"""Visitor pattern implementation for AST traversal."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from rbsast.ast.base import ASTNode, NameAndArgs, Root, TypeName
from rbsast.ast.declarations import (
    ClassDeclaration,
    ConstantDeclaration,
    Declaration,
    GlobalDeclaration,
    InterfaceDeclaration,
    ModuleDeclaration,
    TypeAliasDeclaration,
)
from rbsast.ast.members import (
    AliasMember,
    AttrAccessorMember,
    AttrReaderMember,
    AttrWriterMember,
    ClassInstanceVariableMember,
    ClassVariableMember,
    ExtendMember,
    IncludeMember,
    InstanceVariableMember,
    Member,
    MethodDefinitionMember,
    MethodOverload,
    MethodType,
    PrependMember,
    PrivateMember,
    PublicMember,
)
from rbsast.ast.types import (
    AliasType,
    BaseType,
    Block,
    ClassInstanceType,
    ClassSingletonType,
    Function,
    FunctionParam,
    InterfaceType,
    IntersectionType,
    LiteralType,
    OptionalType,
    ProcType,
    RecordField,
    RecordType,
    TupleType,
    Type,
    TypeParam,
    UnionType,
    VariableType,
)
from rbsast.errors import UnsupportedNodeError

T = TypeVar("T")


class ASTVisitor(ABC, Generic[T]):
    """Base visitor class for traversing AST nodes.

    Extra positional arguments given to :meth:`visit` are handed on to the
    ``visit_*`` method, which lets a visitor thread state through a subtree
    without storing it on ``self``.
    """

    def visit(self, node: ASTNode, *args: Any) -> T:
        """Visit a node by calling its accept method."""
        if not isinstance(node, ASTNode):
            raise UnsupportedNodeError(node)
        return node.accept(self, *args)

    # Abstract node classes have no rendering of their own.
    def visit_declaration(self, node: Declaration, *args: Any) -> T:
        raise UnsupportedNodeError(node)

    def visit_member(self, node: Member, *args: Any) -> T:
        raise UnsupportedNodeError(node)

    def visit_type(self, node: Type, *args: Any) -> T:
        raise UnsupportedNodeError(node)

    # Base nodes
    @abstractmethod
    def visit_root(self, node: Root, *args: Any) -> T:
        """Visit Root node."""

    @abstractmethod
    def visit_type_name(self, node: TypeName, *args: Any) -> T:
        """Visit TypeName node."""

    @abstractmethod
    def visit_name_and_args(self, node: NameAndArgs, *args: Any) -> T:
        """Visit NameAndArgs node."""

    @abstractmethod
    def visit_type_param(self, node: TypeParam, *args: Any) -> T:
        """Visit TypeParam node."""

    # Declarations
    @abstractmethod
    def visit_class_declaration(self, node: ClassDeclaration, *args: Any) -> T:
        """Visit ClassDeclaration node."""

    @abstractmethod
    def visit_module_declaration(self, node: ModuleDeclaration, *args: Any) -> T:
        """Visit ModuleDeclaration node."""

    @abstractmethod
    def visit_interface_declaration(self, node: InterfaceDeclaration, *args: Any) -> T:
        """Visit InterfaceDeclaration node."""

    @abstractmethod
    def visit_constant_declaration(self, node: ConstantDeclaration, *args: Any) -> T:
        """Visit ConstantDeclaration node."""

    @abstractmethod
    def visit_global_declaration(self, node: GlobalDeclaration, *args: Any) -> T:
        """Visit GlobalDeclaration node."""

    @abstractmethod
    def visit_type_alias_declaration(self, node: TypeAliasDeclaration, *args: Any) -> T:
        """Visit TypeAliasDeclaration node."""

    # Members
    @abstractmethod
    def visit_alias_member(self, node: AliasMember, *args: Any) -> T:
        """Visit AliasMember node."""

    @abstractmethod
    def visit_attr_reader_member(self, node: AttrReaderMember, *args: Any) -> T:
        """Visit AttrReaderMember node."""

    @abstractmethod
    def visit_attr_writer_member(self, node: AttrWriterMember, *args: Any) -> T:
        """Visit AttrWriterMember node."""

    @abstractmethod
    def visit_attr_accessor_member(self, node: AttrAccessorMember, *args: Any) -> T:
        """Visit AttrAccessorMember node."""

    @abstractmethod
    def visit_instance_variable_member(self, node: InstanceVariableMember, *args: Any) -> T:
        """Visit InstanceVariableMember node."""

    @abstractmethod
    def visit_class_instance_variable_member(
        self, node: ClassInstanceVariableMember, *args: Any
    ) -> T:
        """Visit ClassInstanceVariableMember node."""

    @abstractmethod
    def visit_class_variable_member(self, node: ClassVariableMember, *args: Any) -> T:
        """Visit ClassVariableMember node."""

    @abstractmethod
    def visit_include_member(self, node: IncludeMember, *args: Any) -> T:
        """Visit IncludeMember node."""

    @abstractmethod
    def visit_extend_member(self, node: ExtendMember, *args: Any) -> T:
        """Visit ExtendMember node."""

    @abstractmethod
    def visit_prepend_member(self, node: PrependMember, *args: Any) -> T:
        """Visit PrependMember node."""

    @abstractmethod
    def visit_public_member(self, node: PublicMember, *args: Any) -> T:
        """Visit PublicMember node."""

    @abstractmethod
    def visit_private_member(self, node: PrivateMember, *args: Any) -> T:
        """Visit PrivateMember node."""

    @abstractmethod
    def visit_method_definition_member(self, node: MethodDefinitionMember, *args: Any) -> T:
        """Visit MethodDefinitionMember node."""

    @abstractmethod
    def visit_method_overload(self, node: MethodOverload, *args: Any) -> T:
        """Visit MethodOverload node."""

    @abstractmethod
    def visit_method_type(self, node: MethodType, *args: Any) -> T:
        """Visit MethodType node."""

    # Types
    @abstractmethod
    def visit_base_type(self, node: BaseType, *args: Any) -> T:
        """Visit BaseType node."""

    @abstractmethod
    def visit_variable_type(self, node: VariableType, *args: Any) -> T:
        """Visit VariableType node."""

    @abstractmethod
    def visit_class_instance_type(self, node: ClassInstanceType, *args: Any) -> T:
        """Visit ClassInstanceType node."""

    @abstractmethod
    def visit_interface_type(self, node: InterfaceType, *args: Any) -> T:
        """Visit InterfaceType node."""

    @abstractmethod
    def visit_alias_type(self, node: AliasType, *args: Any) -> T:
        """Visit AliasType node."""

    @abstractmethod
    def visit_class_singleton_type(self, node: ClassSingletonType, *args: Any) -> T:
        """Visit ClassSingletonType node."""

    @abstractmethod
    def visit_optional_type(self, node: OptionalType, *args: Any) -> T:
        """Visit OptionalType node."""

    @abstractmethod
    def visit_union_type(self, node: UnionType, *args: Any) -> T:
        """Visit UnionType node."""

    @abstractmethod
    def visit_intersection_type(self, node: IntersectionType, *args: Any) -> T:
        """Visit IntersectionType node."""

    @abstractmethod
    def visit_tuple_type(self, node: TupleType, *args: Any) -> T:
        """Visit TupleType node."""

    @abstractmethod
    def visit_record_type(self, node: RecordType, *args: Any) -> T:
        """Visit RecordType node."""

    @abstractmethod
    def visit_record_field(self, node: RecordField, *args: Any) -> T:
        """Visit RecordField node."""

    @abstractmethod
    def visit_literal_type(self, node: LiteralType, *args: Any) -> T:
        """Visit LiteralType node."""

    @abstractmethod
    def visit_proc_type(self, node: ProcType, *args: Any) -> T:
        """Visit ProcType node."""

    @abstractmethod
    def visit_function(self, node: Function, *args: Any) -> T:
        """Visit Function node."""

    @abstractmethod
    def visit_function_param(self, node: FunctionParam, *args: Any) -> T:
        """Visit FunctionParam node."""

    @abstractmethod
    def visit_block(self, node: Block, *args: Any) -> T:
        """Visit Block node."""


class BaseVisitor(ASTVisitor[None]):
    """Visitor that walks every child node and does nothing else.

    Subclasses override the ``visit_*`` methods they care about and call
    :meth:`generic_visit` to keep descending.
    """

    def generic_visit(self, node: ASTNode) -> None:
        for child in node.children():
            self.visit(child)

    def visit_root(self, node: Root, *args: Any) -> None:
        self.generic_visit(node)

    def visit_type_name(self, node: TypeName, *args: Any) -> None:
        pass

    def visit_name_and_args(self, node: NameAndArgs, *args: Any) -> None:
        self.generic_visit(node)

    def visit_type_param(self, node: TypeParam, *args: Any) -> None:
        self.generic_visit(node)

    def visit_class_declaration(self, node: ClassDeclaration, *args: Any) -> None:
        self.generic_visit(node)

    def visit_module_declaration(self, node: ModuleDeclaration, *args: Any) -> None:
        self.generic_visit(node)

    def visit_interface_declaration(self, node: InterfaceDeclaration, *args: Any) -> None:
        self.generic_visit(node)

    def visit_constant_declaration(self, node: ConstantDeclaration, *args: Any) -> None:
        self.generic_visit(node)

    def visit_global_declaration(self, node: GlobalDeclaration, *args: Any) -> None:
        self.generic_visit(node)

    def visit_type_alias_declaration(self, node: TypeAliasDeclaration, *args: Any) -> None:
        self.generic_visit(node)

    def visit_alias_member(self, node: AliasMember, *args: Any) -> None:
        pass

    def visit_attr_reader_member(self, node: AttrReaderMember, *args: Any) -> None:
        self.generic_visit(node)

    def visit_attr_writer_member(self, node: AttrWriterMember, *args: Any) -> None:
        self.generic_visit(node)

    def visit_attr_accessor_member(self, node: AttrAccessorMember, *args: Any) -> None:
        self.generic_visit(node)

    def visit_instance_variable_member(self, node: InstanceVariableMember, *args: Any) -> None:
        self.generic_visit(node)

    def visit_class_instance_variable_member(
        self, node: ClassInstanceVariableMember, *args: Any
    ) -> None:
        self.generic_visit(node)

    def visit_class_variable_member(self, node: ClassVariableMember, *args: Any) -> None:
        self.generic_visit(node)

    def visit_include_member(self, node: IncludeMember, *args: Any) -> None:
        self.generic_visit(node)

    def visit_extend_member(self, node: ExtendMember, *args: Any) -> None:
        self.generic_visit(node)

    def visit_prepend_member(self, node: PrependMember, *args: Any) -> None:
        self.generic_visit(node)

    def visit_public_member(self, node: PublicMember, *args: Any) -> None:
        pass

    def visit_private_member(self, node: PrivateMember, *args: Any) -> None:
        pass

    def visit_method_definition_member(self, node: MethodDefinitionMember, *args: Any) -> None:
        self.generic_visit(node)

    def visit_method_overload(self, node: MethodOverload, *args: Any) -> None:
        self.generic_visit(node)

    def visit_method_type(self, node: MethodType, *args: Any) -> None:
        self.generic_visit(node)

    def visit_base_type(self, node: BaseType, *args: Any) -> None:
        pass

    def visit_variable_type(self, node: VariableType, *args: Any) -> None:
        pass

    def visit_class_instance_type(self, node: ClassInstanceType, *args: Any) -> None:
        self.generic_visit(node)

    def visit_interface_type(self, node: InterfaceType, *args: Any) -> None:
        self.generic_visit(node)

    def visit_alias_type(self, node: AliasType, *args: Any) -> None:
        self.generic_visit(node)

    def visit_class_singleton_type(self, node: ClassSingletonType, *args: Any) -> None:
        self.generic_visit(node)

    def visit_optional_type(self, node: OptionalType, *args: Any) -> None:
        self.generic_visit(node)

    def visit_union_type(self, node: UnionType, *args: Any) -> None:
        self.generic_visit(node)

    def visit_intersection_type(self, node: IntersectionType, *args: Any) -> None:
        self.generic_visit(node)

    def visit_tuple_type(self, node: TupleType, *args: Any) -> None:
        self.generic_visit(node)

    def visit_record_type(self, node: RecordType, *args: Any) -> None:
        self.generic_visit(node)

    def visit_record_field(self, node: RecordField, *args: Any) -> None:
        self.generic_visit(node)

    def visit_literal_type(self, node: LiteralType, *args: Any) -> None:
        pass

    def visit_proc_type(self, node: ProcType, *args: Any) -> None:
        self.generic_visit(node)

    def visit_function(self, node: Function, *args: Any) -> None:
        self.generic_visit(node)

    def visit_function_param(self, node: FunctionParam, *args: Any) -> None:
        self.generic_visit(node)

    def visit_block(self, node: Block, *args: Any) -> None:
        self.generic_visit(node)
