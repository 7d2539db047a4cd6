"""RBS source formatter."""

from __future__ import annotations

import logging
import time
from typing import Any

from rbsast.ast.base import NameAndArgs, Root, TypeName
from rbsast.codegen.comments import CommentEmitter
from rbsast.codegen.declarations import DeclarationFormatter
from rbsast.codegen.formatting import FormattingConfig
from rbsast.codegen.layout import Layout
from rbsast.codegen.members import MemberFormatter
from rbsast.codegen.signatures import SignatureAssembler
from rbsast.codegen.types import TypeFormatter
from rbsast.parser import Parser
from rbsast.visitor import ASTVisitor

logger = logging.getLogger(__name__)


class RBSFormatter(
    DeclarationFormatter,
    MemberFormatter,
    SignatureAssembler,
    TypeFormatter,
    CommentEmitter,
    ASTVisitor[None],
):
    """Format a parsed RBS tree back into canonical source text.

    ``source`` must be the text the tree was parsed from: string literals
    and some annotations are re-read from it by location.
    """

    def __init__(self, source: str, config: FormattingConfig | None = None) -> None:
        self.source = source
        self.config = config or FormattingConfig()
        self.layout = Layout(self.config.indent_size)

    def format(self, node: Root) -> str:
        """Format ``node`` and return the rendered text."""
        self.layout = Layout(self.config.indent_size)
        self.visit(node)
        return self.layout.render(self.config.max_width)

    def visit_root(self, node: Root, *args: Any) -> None:
        """Separate declarations by one blank line and end with a newline."""

        def separator() -> None:
            self.layout.force_break()
            self.layout.force_break()

        self.layout.seplist(node.declarations, self.visit, separator)
        self.layout.force_break()

    def visit_type_name(self, node: TypeName, *args: Any) -> None:
        self.layout.text(str(node))

    def visit_name_and_args(self, node: NameAndArgs, *args: Any) -> None:
        self.print_name_and_args(node)


def format_source(source: str, config: FormattingConfig | None = None) -> str:
    """Parse ``source`` and return it formatted.

    Raises :class:`~rbsast.errors.RBSSyntaxError` when the source does not
    parse; nothing is returned in that case.
    """
    started = time.perf_counter()
    root = Parser(source).parse()
    result = RBSFormatter(source, config).format(root)
    logger.debug(
        "Formatted %d declarations in %.2f ms",
        len(root.declarations),
        (time.perf_counter() - started) * 1000,
    )
    return result
