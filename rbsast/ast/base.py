"""Base AST node classes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rbsast.ast.declarations import Declaration
    from rbsast.ast.types import Type


@dataclass(frozen=True)
class Location:
    """Source range of a node.

    Lines and columns are 1-based; ``start_pos``/``end_pos`` are character
    offsets into the source text, usable as a slice.
    """

    start_line: int
    start_column: int
    end_line: int
    end_column: int
    start_pos: int
    end_pos: int

    @property
    def range(self) -> slice:
        return slice(self.start_pos, self.end_pos)


@dataclass
class Comment:
    """A block of consecutive ``#`` lines, without the markers."""

    string: str
    location: Location | None = None


@dataclass
class Annotation:
    """An ``%a{...}`` annotation; ``string`` is the text between delimiters."""

    string: str
    location: Location | None = None


@dataclass
class ASTNode(ABC):
    """Base class for all AST nodes."""

    location: Location | None = field(default=None, init=False, compare=False)

    @abstractmethod
    def accept(self, visitor: Any, *args: Any) -> Any:
        """Accept a visitor for the visitor pattern."""

    def children(self) -> list[ASTNode]:
        """Return child nodes."""
        from dataclasses import fields

        children = []
        for f in fields(self):
            if f.name == "location":
                continue
            value = getattr(self, f.name)
            if isinstance(value, ASTNode):
                children.append(value)
            elif isinstance(value, list):
                children.extend(v for v in value if isinstance(v, ASTNode))
            elif isinstance(value, dict):
                children.extend(v for v in value.values() if isinstance(v, ASTNode))
        return children


@dataclass
class Decorated(ASTNode):
    """A node that may carry a leading comment and annotations."""

    comment: Comment | None = field(default=None, init=False, compare=False)
    annotations: list[Annotation] = field(default_factory=list, init=False, compare=False)

    @property
    def lead_line(self) -> int:
        """First source line occupied by this node, its comment included."""
        if self.comment is not None and self.comment.location is not None:
            return self.comment.location.start_line
        if self.annotations and self.annotations[0].location is not None:
            return self.annotations[0].location.start_line
        return self.location.start_line if self.location else 0


@dataclass
class TypeName(ASTNode):
    """A possibly namespaced name, e.g. ``::Foo::Bar`` or ``Foo::_Each``."""

    name: str
    namespace: list[str] = field(default_factory=list)
    absolute: bool = False

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_type_name(self, *args)

    def __str__(self) -> str:
        prefix = "::" if self.absolute else ""
        return prefix + "".join(f"{part}::" for part in self.namespace) + self.name

    @property
    def is_interface(self) -> bool:
        return self.name.startswith("_") and self.name[1:2].isupper()

    @property
    def is_class(self) -> bool:
        return self.name[:1].isupper()


@dataclass
class Root(ASTNode):
    """Root node holding every top-level declaration of a file."""

    declarations: list[Declaration] = field(default_factory=list)

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_root(self, *args)


@dataclass
class NameAndArgs(ASTNode):
    """A class or interface reference with generic arguments.

    Used for superclasses, module self-types and include/extend/prepend.
    """

    name: TypeName
    args: list[Type] = field(default_factory=list)

    def accept(self, visitor: Any, *args: Any) -> Any:
        return visitor.visit_name_and_args(self, *args)
