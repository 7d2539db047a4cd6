"""Code generation module for RBS AST."""

from rbsast.codegen.formatter import RBSFormatter, format_source
from rbsast.codegen.formatting import FormattingConfig
from rbsast.codegen.layout import Layout
from rbsast.codegen.tree_printer import TreePrinter
from rbsast.codegen.types import Parens

__all__ = [
    "FormattingConfig",
    "Layout",
    "Parens",
    "RBSFormatter",
    "TreePrinter",
    "format_source",
]
