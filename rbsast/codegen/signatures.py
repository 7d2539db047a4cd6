"""Method, block and proc signatures."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rbsast.codegen.types import Parens, quote_name

if TYPE_CHECKING:
    from rbsast.ast.members import MethodOverload, MethodType
    from rbsast.ast.types import Block, Function, FunctionParam, TypeParam
    from rbsast.codegen.layout import Layout


class SignatureAssembler:
    """Print ``[T] (params) { block } -> return`` shapes."""

    layout: Layout

    def visit_method_overload(self, node: MethodOverload, *args: Any) -> None:
        for annotation in node.annotations:
            self.print_annotation(annotation)
            self.layout.text(" ")
        self.visit(node.method_type)

    def visit_method_type(self, node: MethodType, *args: Any) -> None:
        self.print_signature(node.type, node.type_params, node.block)

    def visit_function(self, node: Function, *args: Any) -> None:
        self.print_signature(node, [], None)

    def visit_block(self, node: Block, *args: Any) -> None:
        if not node.required:
            self.layout.text("?")
        self.layout.text("{")
        with self.layout.indent():
            self.layout.breakable()
            self.visit(node.type)
        self.layout.breakable()
        self.layout.text("}")

    def print_signature(
        self,
        function: Function,
        type_params: list[TypeParam],
        block: Block | None,
    ) -> None:
        """Print one signature.

        The parameter list is left out entirely when it is empty, so a proc
        without parameters prints as ``^-> void``.
        """
        with self.layout.group():
            if type_params:
                self.print_type_params(type_params)
                self.layout.text(" ")

            params = self._collect_params(function)
            if params:
                self.layout.text("(")
                with self.layout.indent():
                    self.layout.breakable("")
                    self.layout.seplist(params, lambda print_param: print_param())
                self.layout.breakable("")
                self.layout.text(") ")

            if block is not None:
                self.visit(block)
                self.layout.text(" ")

            self.layout.text("-> ")
            self.visit(function.return_type, Parens.FORCE)

    def _collect_params(self, function: Function) -> list[Callable[[], None]]:
        """Return one printer per parameter, in canonical order."""
        params: list[Callable[[], None]] = []

        def prefixed(prefix: str, param: FunctionParam) -> Callable[[], None]:
            def print_param() -> None:
                self.layout.text(prefix)
                self.visit(param)

            return print_param

        params.extend(prefixed("", param) for param in function.required_positionals)
        params.extend(prefixed("?", param) for param in function.optional_positionals)
        if function.rest_positionals is not None:
            params.append(prefixed("*", function.rest_positionals))
        params.extend(prefixed("", param) for param in function.trailing_positionals)
        params.extend(
            prefixed(f"{quote_name(name, allow_reserved=True)}: ", param)
            for name, param in function.required_keywords.items()
        )
        params.extend(
            prefixed(f"?{quote_name(name, allow_reserved=True)}: ", param)
            for name, param in function.optional_keywords.items()
        )
        if function.rest_keywords is not None:
            params.append(prefixed("**", function.rest_keywords))

        return params
