"""S-expression dump of an RBS tree, for debugging and the ``parse`` command."""

from __future__ import annotations

from enum import Enum
from typing import Any

from rbsast.ast.base import ASTNode, Decorated, NameAndArgs, Root, TypeName
from rbsast.ast.declarations import (
    ClassDeclaration,
    ConstantDeclaration,
    GlobalDeclaration,
    InterfaceDeclaration,
    ModuleDeclaration,
    TypeAliasDeclaration,
)
from rbsast.ast.members import (
    AliasMember,
    AttrAccessorMember,
    AttributeMember,
    AttrReaderMember,
    AttrWriterMember,
    ClassInstanceVariableMember,
    ClassVariableMember,
    ExtendMember,
    IncludeMember,
    InstanceVariableMember,
    MemberKind,
    MethodDefinitionMember,
    MethodOverload,
    MethodType,
    MixinMember,
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
    TypeParam,
    UnionType,
    Variance,
    VariableType,
)
from rbsast.codegen.layout import Layout
from rbsast.codegen.quotes import inspect_string
from rbsast.visitor import ASTVisitor


class TreePrinter(ASTVisitor[None]):
    """Print a tree as nested ``(kind field=value ...)`` forms.

    Example::

        (root declarations=[(class name=(type-name "Foo"))])
    """

    def __init__(self, indent_size: int = 2) -> None:
        self.indent_size = indent_size
        self.layout = Layout(indent_size)

    def print(self, node: ASTNode, max_width: int = 80) -> str:
        self.layout = Layout(self.indent_size)
        self.visit(node)
        self.layout.force_break()
        return self.layout.render(max_width)

    def _node(
        self,
        label: str,
        node: ASTNode,
        fields: list[tuple[str, Any]],
        flags: list[str] | None = None,
    ) -> None:
        """Print one form; ``None`` fields and empty lists are left out."""
        with self.layout.group():
            self.layout.text(f"({label}")
            with self.layout.indent():
                if isinstance(node, Decorated):
                    self._decorations(node)
                for flag in flags or []:
                    self.layout.breakable()
                    self.layout.text(flag)
                for name, value in fields:
                    if value is None or (isinstance(value, list | dict) and not value):
                        continue
                    self.layout.breakable()
                    self.layout.text(f"{name}=")
                    self._value(value)
            self.layout.text(")")

    def _decorations(self, node: Decorated) -> None:
        if node.comment is not None:
            self.layout.breakable()
            self.layout.text(f"comment={inspect_string(node.comment.string)}")
        if node.annotations:
            self.layout.breakable()
            self.layout.text("annotations=")
            self._list([inspect_string(a.string) for a in node.annotations])

    def _value(self, value: Any) -> None:
        if isinstance(value, ASTNode):
            self.visit(value)
        elif isinstance(value, dict):
            self._list([(key, param) for key, param in value.items()])
        elif isinstance(value, list):
            self._list(value)
        elif isinstance(value, bool):
            self.layout.text("true" if value else "false")
        elif isinstance(value, Enum):
            self.layout.text(str(value.value))
        elif isinstance(value, str):
            self.layout.text(inspect_string(value))
        else:
            self.layout.text(str(value))

    def _list(self, items: list[Any]) -> None:
        def item(value: Any) -> None:
            if isinstance(value, tuple):
                key, param = value
                self.layout.text(f"{key}: ")
                self._value(param)
            else:
                self._value(value)

        with self.layout.group():
            self.layout.text("[")
            with self.layout.indent():
                self.layout.breakable("")
                self.layout.seplist(items, item, self.layout.breakable)
            self.layout.breakable("")
            self.layout.text("]")

    def visit_root(self, node: Root, *args: Any) -> None:
        self._node("root", node, [("declarations", node.declarations)])

    def visit_type_name(self, node: TypeName, *args: Any) -> None:
        self.layout.text(f"(type-name {inspect_string(str(node))})")

    def visit_name_and_args(self, node: NameAndArgs, *args: Any) -> None:
        self._node("name", node, [("name", node.name), ("args", node.args)])

    def visit_type_param(self, node: TypeParam, *args: Any) -> None:
        flags = ["unchecked"] if node.unchecked else []
        if node.variance is not Variance.INVARIANT:
            flags.append(node.variance.value)
        self._node(
            "type-param",
            node,
            [("name", node.name), ("upper_bound", node.upper_bound)],
            flags,
        )

    # Declarations

    def visit_class_declaration(self, node: ClassDeclaration, *args: Any) -> None:
        self._node(
            "class",
            node,
            [
                ("name", node.name),
                ("type_params", node.type_params),
                ("super_class", node.super_class),
                ("members", node.members),
            ],
        )

    def visit_module_declaration(self, node: ModuleDeclaration, *args: Any) -> None:
        self._node(
            "module",
            node,
            [
                ("name", node.name),
                ("type_params", node.type_params),
                ("self_types", node.self_types),
                ("members", node.members),
            ],
        )

    def visit_interface_declaration(self, node: InterfaceDeclaration, *args: Any) -> None:
        self._node(
            "interface",
            node,
            [("name", node.name), ("type_params", node.type_params), ("members", node.members)],
        )

    def visit_constant_declaration(self, node: ConstantDeclaration, *args: Any) -> None:
        self._node("constant", node, [("name", node.name), ("type", node.type)])

    def visit_global_declaration(self, node: GlobalDeclaration, *args: Any) -> None:
        self._node("global", node, [("name", node.name), ("type", node.type)])

    def visit_type_alias_declaration(self, node: TypeAliasDeclaration, *args: Any) -> None:
        self._node(
            "type-alias",
            node,
            [("name", node.name), ("type_params", node.type_params), ("type", node.type)],
        )

    # Members

    @staticmethod
    def _kind_flags(kind: MemberKind) -> list[str]:
        if kind is MemberKind.INSTANCE:
            return []
        return [kind.value.replace("_", "-")]

    def visit_alias_member(self, node: AliasMember, *args: Any) -> None:
        self._node(
            "alias",
            node,
            [("new_name", node.new_name), ("old_name", node.old_name)],
            self._kind_flags(node.kind),
        )

    def _attribute(self, node: AttributeMember) -> None:
        flags = self._kind_flags(node.kind)
        if node.visibility is not None:
            flags.insert(0, node.visibility.value)
        self._node(
            node.keyword.replace("_", "-"),
            node,
            [("name", node.name), ("ivar_name", node.ivar_name), ("type", node.type)],
            flags,
        )

    def visit_attr_reader_member(self, node: AttrReaderMember, *args: Any) -> None:
        self._attribute(node)

    def visit_attr_writer_member(self, node: AttrWriterMember, *args: Any) -> None:
        self._attribute(node)

    def visit_attr_accessor_member(self, node: AttrAccessorMember, *args: Any) -> None:
        self._attribute(node)

    def visit_instance_variable_member(self, node: InstanceVariableMember, *args: Any) -> None:
        self._node("instance-variable", node, [("name", node.name), ("type", node.type)])

    def visit_class_instance_variable_member(
        self, node: ClassInstanceVariableMember, *args: Any
    ) -> None:
        self._node("class-instance-variable", node, [("name", node.name), ("type", node.type)])

    def visit_class_variable_member(self, node: ClassVariableMember, *args: Any) -> None:
        self._node("class-variable", node, [("name", node.name), ("type", node.type)])

    def _mixin(self, node: MixinMember) -> None:
        self._node(node.keyword, node, [("name", node.name), ("args", node.args)])

    def visit_include_member(self, node: IncludeMember, *args: Any) -> None:
        self._mixin(node)

    def visit_extend_member(self, node: ExtendMember, *args: Any) -> None:
        self._mixin(node)

    def visit_prepend_member(self, node: PrependMember, *args: Any) -> None:
        self._mixin(node)

    def visit_public_member(self, node: PublicMember, *args: Any) -> None:
        self._node("public", node, [])

    def visit_private_member(self, node: PrivateMember, *args: Any) -> None:
        self._node("private", node, [])

    def visit_method_definition_member(self, node: MethodDefinitionMember, *args: Any) -> None:
        flags = self._kind_flags(node.kind)
        if node.visibility is not None:
            flags.insert(0, node.visibility.value)
        if node.overloading:
            flags.append("overloading")
        self._node(
            "method-definition",
            node,
            [("name", node.name), ("overloads", node.overloads)],
            flags,
        )

    def visit_method_overload(self, node: MethodOverload, *args: Any) -> None:
        self._node(
            "overload",
            node,
            [
                ("annotations", [a.string for a in node.annotations]),
                ("method_type", node.method_type),
            ],
        )

    def visit_method_type(self, node: MethodType, *args: Any) -> None:
        self._node(
            "method-type",
            node,
            [("type_params", node.type_params), ("type", node.type), ("block", node.block)],
        )

    # Types

    def visit_base_type(self, node: BaseType, *args: Any) -> None:
        self.layout.text(f"({node.kind.value})")

    def visit_variable_type(self, node: VariableType, *args: Any) -> None:
        self._node("variable", node, [("name", node.name)])

    def visit_class_instance_type(self, node: ClassInstanceType, *args: Any) -> None:
        self._node("class-instance", node, [("name", node.name), ("args", node.args)])

    def visit_interface_type(self, node: InterfaceType, *args: Any) -> None:
        self._node("interface", node, [("name", node.name), ("args", node.args)])

    def visit_alias_type(self, node: AliasType, *args: Any) -> None:
        self._node("alias", node, [("name", node.name), ("args", node.args)])

    def visit_class_singleton_type(self, node: ClassSingletonType, *args: Any) -> None:
        self._node("class-singleton", node, [("name", node.name)])

    def visit_optional_type(self, node: OptionalType, *args: Any) -> None:
        self._node("optional", node, [("type", node.type)])

    def visit_union_type(self, node: UnionType, *args: Any) -> None:
        self._node("union", node, [("types", node.types)])

    def visit_intersection_type(self, node: IntersectionType, *args: Any) -> None:
        self._node("intersection", node, [("types", node.types)])

    def visit_tuple_type(self, node: TupleType, *args: Any) -> None:
        self._node("tuple", node, [("types", node.types)])

    def visit_record_type(self, node: RecordType, *args: Any) -> None:
        self._node("record", node, [("fields", node.fields)])

    def visit_record_field(self, node: RecordField, *args: Any) -> None:
        self._node("field", node, [("key", node.key), ("type", node.type)])

    def visit_literal_type(self, node: LiteralType, *args: Any) -> None:
        self._node("literal", node, [("value", node.value)], [node.kind.value])

    def visit_proc_type(self, node: ProcType, *args: Any) -> None:
        self._node("proc", node, [("type", node.type), ("block", node.block)])

    def visit_function(self, node: Function, *args: Any) -> None:
        self._node(
            "function",
            node,
            [
                ("required_positionals", node.required_positionals),
                ("optional_positionals", node.optional_positionals),
                ("rest_positionals", node.rest_positionals),
                ("trailing_positionals", node.trailing_positionals),
                ("required_keywords", node.required_keywords),
                ("optional_keywords", node.optional_keywords),
                ("rest_keywords", node.rest_keywords),
                ("return_type", node.return_type),
            ],
        )

    def visit_function_param(self, node: FunctionParam, *args: Any) -> None:
        self._node("param", node, [("type", node.type), ("name", node.name)])

    def visit_block(self, node: Block, *args: Any) -> None:
        flags = [] if node.required else ["optional"]
        self._node("block", node, [("type", node.type)], flags)
