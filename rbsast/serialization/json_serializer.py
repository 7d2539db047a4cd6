"""JSON serialization for RBS AST."""

from __future__ import annotations

import json
from dataclasses import fields
from enum import Enum
from pathlib import Path
from typing import Any

from rbsast.ast.base import Annotation, ASTNode, Comment, NameAndArgs, Root, TypeName
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
    AttrReaderMember,
    AttrWriterMember,
    ClassInstanceVariableMember,
    ClassVariableMember,
    ExtendMember,
    IncludeMember,
    InstanceVariableMember,
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
    TypeParam,
    UnionType,
    VariableType,
)
from rbsast.version import RBS_SYNTAX_VERSION, RBSAST_VERSION
from rbsast.visitor import ASTVisitor, NodeCounter


class JsonSerializer(ASTVisitor[dict[str, Any]]):
    """JSON serializer for RBS AST with metadata.

    Every node becomes a mapping with a ``type`` key naming its class and one
    key per field. A field itself called ``type`` is written as ``type_``.
    Comments and annotations are kept as plain strings.
    """

    def __init__(self, include_metadata: bool = True, include_locations: bool = False) -> None:
        self.include_metadata = include_metadata
        self.include_locations = include_locations

    def serialize(self, ast: Root, output_path: str | Path | None = None) -> str:
        """Serialize AST to JSON format."""
        serialized = self._serialize_with_metadata(ast)
        json_str = json.dumps(serialized, indent=2, ensure_ascii=False)

        if output_path:
            with Path(output_path).open("w", encoding="utf-8") as f:
                f.write(json_str)

        return json_str

    def _serialize_with_metadata(self, ast: Root) -> dict[str, Any]:
        """Serialize with metadata."""
        result = {"ast": self.visit(ast)}

        if self.include_metadata:
            result["metadata"] = {
                "format": "rbsast-json",
                "version": RBSAST_VERSION,
                "rbs_version": RBS_SYNTAX_VERSION,
                "ast_type": "Root",
                "declarations_count": len(ast.declarations),
                "node_counts": NodeCounter().count(ast),
            }

        return result

    def _node(self, node: ASTNode) -> dict[str, Any]:
        """Serialize the fields of ``node`` that carry information."""
        result: dict[str, Any] = {"type": type(node).__name__}

        for field in fields(node):
            value = getattr(node, field.name)
            if field.name == "location":
                if self.include_locations and value is not None:
                    result["location"] = {
                        "start": [value.start_line, value.start_column],
                        "end": [value.end_line, value.end_column],
                    }
                continue
            if value is None or (field.name == "annotations" and not value):
                continue
            key = "type_" if field.name == "type" else field.name
            result[key] = self._value(value)

        return result

    def _value(self, value: Any) -> Any:
        if isinstance(value, ASTNode):
            return self.visit(value)
        if isinstance(value, list):
            return [self._value(item) for item in value]
        if isinstance(value, dict):
            return {key: self._value(item) for key, item in value.items()}
        if isinstance(value, Comment | Annotation):
            return value.string
        if isinstance(value, Enum):
            return value.value
        return value

    def visit_root(self, node: Root, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_type_name(self, node: TypeName, *args: Any) -> dict[str, Any]:
        result = self._node(node)
        result["full_name"] = str(node)
        return result

    def visit_name_and_args(self, node: NameAndArgs, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_type_param(self, node: TypeParam, *args: Any) -> dict[str, Any]:
        return self._node(node)

    # Declarations
    def visit_class_declaration(self, node: ClassDeclaration, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_module_declaration(self, node: ModuleDeclaration, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_interface_declaration(
        self, node: InterfaceDeclaration, *args: Any
    ) -> dict[str, Any]:
        return self._node(node)

    def visit_constant_declaration(self, node: ConstantDeclaration, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_global_declaration(self, node: GlobalDeclaration, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_type_alias_declaration(
        self, node: TypeAliasDeclaration, *args: Any
    ) -> dict[str, Any]:
        return self._node(node)

    # Members
    def visit_alias_member(self, node: AliasMember, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_attr_reader_member(self, node: AttrReaderMember, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_attr_writer_member(self, node: AttrWriterMember, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_attr_accessor_member(self, node: AttrAccessorMember, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_instance_variable_member(
        self, node: InstanceVariableMember, *args: Any
    ) -> dict[str, Any]:
        return self._node(node)

    def visit_class_instance_variable_member(
        self, node: ClassInstanceVariableMember, *args: Any
    ) -> dict[str, Any]:
        return self._node(node)

    def visit_class_variable_member(self, node: ClassVariableMember, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_include_member(self, node: IncludeMember, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_extend_member(self, node: ExtendMember, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_prepend_member(self, node: PrependMember, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_public_member(self, node: PublicMember, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_private_member(self, node: PrivateMember, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_method_definition_member(
        self, node: MethodDefinitionMember, *args: Any
    ) -> dict[str, Any]:
        return self._node(node)

    def visit_method_overload(self, node: MethodOverload, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_method_type(self, node: MethodType, *args: Any) -> dict[str, Any]:
        return self._node(node)

    # Types
    def visit_base_type(self, node: BaseType, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_variable_type(self, node: VariableType, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_class_instance_type(self, node: ClassInstanceType, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_interface_type(self, node: InterfaceType, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_alias_type(self, node: AliasType, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_class_singleton_type(self, node: ClassSingletonType, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_optional_type(self, node: OptionalType, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_union_type(self, node: UnionType, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_intersection_type(self, node: IntersectionType, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_tuple_type(self, node: TupleType, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_record_type(self, node: RecordType, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_record_field(self, node: RecordField, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_literal_type(self, node: LiteralType, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_proc_type(self, node: ProcType, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_function(self, node: Function, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_function_param(self, node: FunctionParam, *args: Any) -> dict[str, Any]:
        return self._node(node)

    def visit_block(self, node: Block, *args: Any) -> dict[str, Any]:
        return self._node(node)
