"""Top-level and nested declarations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rbsast.ast.types import Variance
from rbsast.codegen.types import Parens

if TYPE_CHECKING:
    from rbsast.ast.declarations import (
        ClassDeclaration,
        ConstantDeclaration,
        GlobalDeclaration,
        InterfaceDeclaration,
        ModuleDeclaration,
        TypeAliasDeclaration,
    )
    from rbsast.ast.types import TypeParam
    from rbsast.codegen.layout import Layout

VARIANCE_KEYWORDS = {
    Variance.INVARIANT: None,
    Variance.COVARIANT: "out",
    Variance.CONTRAVARIANT: "in",
}


class DeclarationFormatter:
    """Print declarations."""

    layout: Layout

    def visit_class_declaration(self, node: ClassDeclaration, *args: Any) -> None:
        self.print_leading(node)

        with self.layout.group():
            self.layout.text("class ")
            self.visit(node.name)
            self.print_type_params(node.type_params)

            if node.super_class is not None:
                self.layout.text(" < ")
                self.visit(node.super_class)

            with self.layout.indent():
                self.print_members(node)
            self.layout.force_break()
            self.layout.text("end")

    def visit_module_declaration(self, node: ModuleDeclaration, *args: Any) -> None:
        self.print_leading(node)

        with self.layout.group():
            self.layout.text("module ")
            self.visit(node.name)
            self.print_type_params(node.type_params)

            if node.self_types:
                self.layout.text(" : ")
                self.layout.seplist(
                    node.self_types, self.visit, lambda: self.layout.text(", ")
                )

            with self.layout.indent():
                self.print_members(node)
            self.layout.force_break()
            self.layout.text("end")

    def visit_interface_declaration(self, node: InterfaceDeclaration, *args: Any) -> None:
        self.print_leading(node)

        with self.layout.group():
            self.layout.text("interface ")
            self.visit(node.name)
            self.print_type_params(node.type_params)

            with self.layout.indent():
                self.print_members(node)
            self.layout.force_break()
            self.layout.text("end")

    def visit_constant_declaration(self, node: ConstantDeclaration, *args: Any) -> None:
        self.print_leading(node)

        with self.layout.group():
            self.visit(node.name)
            self.layout.text(": ")
            self.visit(node.type, Parens.BARE)

    def visit_global_declaration(self, node: GlobalDeclaration, *args: Any) -> None:
        self.print_leading(node)

        with self.layout.group():
            self.layout.text(f"{node.name}: ")
            self.visit(node.type, Parens.BARE)

    def visit_type_alias_declaration(self, node: TypeAliasDeclaration, *args: Any) -> None:
        self.print_leading(node)

        with self.layout.group():
            self.layout.text("type ")
            self.visit(node.name)
            self.print_type_params(node.type_params)
            self.layout.text(" =")
            with self.layout.group(), self.layout.indent():
                self.layout.breakable()
                self.visit(node.type, Parens.BARE)

    def print_type_params(self, params: list[TypeParam]) -> None:
        """Print ``[unchecked out T < Bound, ...]``; nothing when empty."""
        if not params:
            return

        self.layout.text("[")
        self.layout.seplist(params, self.visit, lambda: self.layout.text(", "))
        self.layout.text("]")

    def visit_type_param(self, node: TypeParam, *args: Any) -> None:
        parts = []
        if node.unchecked:
            parts.append("unchecked")
        if VARIANCE_KEYWORDS[node.variance]:
            parts.append(VARIANCE_KEYWORDS[node.variance])
        parts.append(node.name)
        self.layout.text(" ".join(parts))

        if node.upper_bound is not None:
            self.layout.text(" < ")
            self.visit(node.upper_bound, Parens.BARE)
