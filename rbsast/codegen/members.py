"""Class, module and interface body members."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rbsast.ast.members import MemberKind
from rbsast.codegen.types import RESERVED_WORDS, Parens, quote_name
from rbsast.errors import MalformedNodeError
from rbsast.parser.parser import METHOD_NAME_PATTERN

if TYPE_CHECKING:
    from rbsast.ast.declarations import ClassDeclaration, InterfaceDeclaration, ModuleDeclaration
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
        MethodDefinitionMember,
        MixinMember,
        PrependMember,
        PrivateMember,
        PublicMember,
    )
    from rbsast.codegen.layout import Layout


def method_name(name: str, quote_reserved: bool = True) -> str:
    """Render a method name, backquoting it where it would not re-parse."""
    if quote_reserved and name in RESERVED_WORDS:
        return f"`{name}`"
    if METHOD_NAME_PATTERN.fullmatch(name):
        return name
    return f"`{name}`"


class MemberFormatter:
    """Print body members and the blank lines between them."""

    layout: Layout

    def print_members(
        self, node: ClassDeclaration | ModuleDeclaration | InterfaceDeclaration
    ) -> None:
        """Print each member on its own line.

        One blank line is kept where the source had at least one between the
        end of a member and the comment or annotation leading the next.
        """
        last_line = None

        for member in node.members:
            self.layout.force_break()
            if last_line is not None and member.lead_line - last_line >= 2:
                self.layout.force_break()

            self.visit(member)
            last_line = member.location.end_line if member.location else None

    def visit_alias_member(self, node: AliasMember, *args: Any) -> None:
        self.print_leading(node)

        if node.kind is MemberKind.SINGLETON:
            self.layout.text(
                f"alias self.{method_name(node.new_name, False)}"
                f" self.{method_name(node.old_name, False)}"
            )
        elif node.kind is MemberKind.INSTANCE:
            self.layout.text(
                f"alias {method_name(node.new_name, False)} {method_name(node.old_name, False)}"
            )
        else:
            raise MalformedNodeError(node, f"alias cannot have kind {node.kind.value}")

    def visit_attr_reader_member(self, node: AttrReaderMember, *args: Any) -> None:
        self.print_attribute(node)

    def visit_attr_writer_member(self, node: AttrWriterMember, *args: Any) -> None:
        self.print_attribute(node)

    def visit_attr_accessor_member(self, node: AttrAccessorMember, *args: Any) -> None:
        self.print_attribute(node)

    def print_attribute(self, node: AttributeMember) -> None:
        self.print_leading(node)

        with self.layout.group():
            if node.visibility is not None:
                self.layout.text(f"{node.visibility.value} ")
            self.layout.text(f"{node.keyword} ")

            if node.kind is MemberKind.SINGLETON:
                self.layout.text("self.")
            elif node.kind is not MemberKind.INSTANCE:
                raise MalformedNodeError(node, f"attribute cannot have kind {node.kind.value}")

            self.layout.text(quote_name(node.name, allow_reserved=True))

            if node.ivar_name is False:
                self.layout.text("()")
            elif node.ivar_name:
                self.layout.text(f"({node.ivar_name})")

            self.layout.text(": ")
            self.visit(node.type, Parens.BARE)

    def visit_instance_variable_member(self, node: InstanceVariableMember, *args: Any) -> None:
        self.print_variable(node.name, node)

    def visit_class_instance_variable_member(
        self, node: ClassInstanceVariableMember, *args: Any
    ) -> None:
        self.print_variable(f"self.{node.name}", node)

    def visit_class_variable_member(self, node: ClassVariableMember, *args: Any) -> None:
        self.print_variable(node.name, node)

    def print_variable(
        self,
        name: str,
        node: InstanceVariableMember | ClassInstanceVariableMember | ClassVariableMember,
    ) -> None:
        self.print_leading(node)
        with self.layout.group():
            self.layout.text(f"{name}: ")
            self.visit(node.type, Parens.BARE)

    def visit_include_member(self, node: IncludeMember, *args: Any) -> None:
        self.print_mixin(node)

    def visit_extend_member(self, node: ExtendMember, *args: Any) -> None:
        self.print_mixin(node)

    def visit_prepend_member(self, node: PrependMember, *args: Any) -> None:
        self.print_mixin(node)

    def print_mixin(self, node: MixinMember) -> None:
        self.print_leading(node)
        with self.layout.group():
            self.layout.text(f"{node.keyword} ")
            self.print_name_and_args(node)

    def visit_public_member(self, node: PublicMember, *args: Any) -> None:
        self.print_leading(node)
        self.layout.text("public")

    def visit_private_member(self, node: PrivateMember, *args: Any) -> None:
        self.print_leading(node)
        self.layout.text("private")

    def visit_method_definition_member(self, node: MethodDefinitionMember, *args: Any) -> None:
        """Print ``def name: overloads``.

        With more than one entry every overload goes on its own line and the
        ``|`` of each continuation line sits under the colon::

            def fetch: (Integer) -> String
                     | (Integer, String) -> String
                     | ...
        """
        self.print_leading(node)

        prefix = ""
        if node.visibility is not None:
            prefix += f"{node.visibility.value} "
        prefix += "def "
        if node.kind is MemberKind.SINGLETON:
            prefix += "self."
        elif node.kind is MemberKind.SINGLETON_INSTANCE:
            prefix += "self?."
        prefix += method_name(node.name)

        entries = [lambda overload=overload: self.visit(overload) for overload in node.overloads]
        if node.overloading:
            entries.append(lambda: self.layout.text("..."))
        if not entries:
            raise MalformedNodeError(node, "method has no overloads")

        def separator() -> None:
            self.layout.force_break()
            self.layout.text("| ")

        with self.layout.group():
            self.layout.text(f"{prefix}: ")
            if len(entries) == 1:
                entries[0]()
            else:
                with self.layout.nest(len(prefix)):
                    self.layout.seplist(entries, lambda entry: entry(), separator)
