"""Comment and annotation output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rbsast.codegen.quotes import split_lines

if TYPE_CHECKING:
    from rbsast.ast.base import Annotation, Decorated
    from rbsast.codegen.layout import Layout


class CommentEmitter:
    """Print the comment and annotations written above a node."""

    layout: Layout
    source: str

    def print_comment(self, node: Decorated) -> None:
        """Print each comment line as ``# line`` followed by a line break."""
        if node.comment is None:
            return

        self.layout.seplist(
            split_lines(node.comment.string),
            lambda line: self.layout.text(f"# {line}"),
            self.layout.force_break,
        )
        self.layout.force_break()

    def print_annotations(self, node: Decorated) -> None:
        """Print each annotation on its own line."""
        for annotation in node.annotations:
            self.print_annotation(annotation)
            self.layout.force_break()

    def print_annotation(self, annotation: Annotation) -> None:
        # Braces inside the text would need escaping, so reuse the source.
        if ("{" in annotation.string or "}" in annotation.string) and (
            annotation.location is not None
        ):
            self.layout.text(self.source[annotation.location.range])
        else:
            self.layout.text(f"%a{{{annotation.string}}}")

    def print_leading(self, node: Decorated) -> None:
        self.print_comment(node)
        self.print_annotations(node)
