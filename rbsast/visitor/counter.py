"""Node counting over a parsed signature file."""

from __future__ import annotations

from collections import Counter
from typing import Any

from rbsast.ast.base import Root
from rbsast.ast.declarations import (
    ClassDeclaration,
    ConstantDeclaration,
    GlobalDeclaration,
    InterfaceDeclaration,
    ModuleDeclaration,
    TypeAliasDeclaration,
)
from rbsast.ast.members import MethodDefinitionMember, MethodOverload
from rbsast.visitor.visitor import BaseVisitor


class NodeCounter(BaseVisitor):
    """Count declarations, methods and overloads in a tree."""

    def __init__(self) -> None:
        self.counts: Counter[str] = Counter()

    def count(self, root: Root) -> dict[str, int]:
        self.counts = Counter()
        self.visit(root)
        return dict(self.counts)

    def visit_class_declaration(self, node: ClassDeclaration, *args: Any) -> None:
        self.counts["classes"] += 1
        self.generic_visit(node)

    def visit_module_declaration(self, node: ModuleDeclaration, *args: Any) -> None:
        self.counts["modules"] += 1
        self.generic_visit(node)

    def visit_interface_declaration(self, node: InterfaceDeclaration, *args: Any) -> None:
        self.counts["interfaces"] += 1
        self.generic_visit(node)

    def visit_constant_declaration(self, node: ConstantDeclaration, *args: Any) -> None:
        self.counts["constants"] += 1

    def visit_global_declaration(self, node: GlobalDeclaration, *args: Any) -> None:
        self.counts["globals"] += 1

    def visit_type_alias_declaration(self, node: TypeAliasDeclaration, *args: Any) -> None:
        self.counts["type_aliases"] += 1

    def visit_method_definition_member(self, node: MethodDefinitionMember, *args: Any) -> None:
        self.counts["methods"] += 1
        self.generic_visit(node)

    def visit_method_overload(self, node: MethodOverload, *args: Any) -> None:
        self.counts["overloads"] += 1
