"""Line-fitting document printer.

Formatting visitors describe output as a tree of :class:`Text`,
:class:`Group`, :class:`Indent` and :class:`Breakable` nodes through the
:class:`Layout` builder, then call :meth:`Layout.render`. A group is printed
flat (every breakable becomes its separator) when it fits in the remaining
width, otherwise each of its own breakables becomes a newline.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from enum import Enum
from typing import Any, TypeVar

import attrs

T = TypeVar("T")


@attrs.define
class Text:
    value: str

    @property
    def width(self) -> int:
        return len(self.value)


@attrs.define
class Group:
    contents: list[Any] = attrs.field(factory=list)
    broken: bool = False


@attrs.define
class Indent:
    width: int
    contents: list[Any] = attrs.field(factory=list)


@attrs.define
class Breakable:
    """A point where the printer may start a new line.

    ``indent=False`` starts the new line at column zero regardless of the
    enclosing indentation and leaves the current line untrimmed, for text
    that must come out verbatim.
    """

    separator: str = " "
    force: bool = False
    indent: bool = True


Doc = Text | Group | Indent | Breakable


class Mode(Enum):
    BREAK = "break"
    FLAT = "flat"


class Layout:
    """Builder and printer for a layout document."""

    def __init__(self, indent_size: int = 2) -> None:
        self.indent_size = indent_size
        self.root = Group()
        self._targets: list[list[Doc]] = [self.root.contents]
        self._groups: list[Group] = [self.root]

    @property
    def _target(self) -> list[Doc]:
        return self._targets[-1]

    def text(self, value: str) -> None:
        self._target.append(Text(value))

    @contextmanager
    def group(self) -> Iterator[Group]:
        group = Group()
        self._target.append(group)
        self._targets.append(group.contents)
        self._groups.append(group)
        try:
            yield group
        finally:
            self._groups.pop()
            self._targets.pop()

    @contextmanager
    def nest(self, width: int) -> Iterator[Indent]:
        """Indent every line started inside the block by ``width`` columns."""
        indent = Indent(width)
        self._target.append(indent)
        self._targets.append(indent.contents)
        try:
            yield indent
        finally:
            self._targets.pop()

    @contextmanager
    def indent(self) -> Iterator[Indent]:
        with self.nest(self.indent_size) as indent:
            yield indent

    def breakable(self, separator: str = " ", force: bool = False, indent: bool = True) -> None:
        self._target.append(Breakable(separator, force, indent))
        if force:
            # Every group that is still open now spans more than one line.
            for group in self._groups:
                group.broken = True

    def force_break(self) -> None:
        self.breakable("", force=True)

    def seplist(
        self,
        items: Iterable[T],
        body: Callable[[T], Any],
        separator: Callable[[], Any] | None = None,
    ) -> None:
        """Call ``body`` for each item with ``separator`` between them.

        The default separator is a comma followed by a breakable space.
        """
        for index, item in enumerate(items):
            if index > 0:
                if separator is None:
                    self.text(",")
                    self.breakable()
                else:
                    separator()
            body(item)

    def render(self, max_width: int = 80) -> str:
        """Print the document, fitting lines into ``max_width`` columns."""
        buffer: list[str] = []
        position = 0
        commands: list[tuple[int, Mode, Doc]] = [(0, Mode.BREAK, self.root)]

        while commands:
            indent, mode, doc = commands.pop()

            if isinstance(doc, Text):
                buffer.append(doc.value)
                position += doc.width
            elif isinstance(doc, Group):
                if mode is Mode.FLAT and not doc.broken:
                    group_mode = Mode.FLAT
                elif not doc.broken and self._fits(
                    doc.contents, commands, max_width - position
                ):
                    group_mode = Mode.FLAT
                else:
                    group_mode = Mode.BREAK
                commands.extend((indent, group_mode, part) for part in reversed(doc.contents))
            elif isinstance(doc, Indent):
                commands.extend(
                    (indent + doc.width, mode, part) for part in reversed(doc.contents)
                )
            elif mode is Mode.FLAT and not doc.force:
                buffer.append(doc.separator)
                position += len(doc.separator)
            elif doc.indent:
                _trim(buffer)
                buffer.append("\n" + " " * indent)
                position = indent
            else:
                buffer.append("\n")
                position = 0

        return "".join(buffer)

    @staticmethod
    def _fits(
        contents: list[Doc],
        rest: list[tuple[int, Mode, Doc]],
        width: int,
    ) -> bool:
        """Check whether ``contents`` printed flat fit in ``width`` columns.

        When the contents run out the check continues into the commands that
        follow, up to the next line break they will produce.
        """
        remaining = width
        pending: list[tuple[Mode, Doc]] = [(Mode.FLAT, part) for part in reversed(contents)]
        rest_index = len(rest)

        while remaining >= 0:
            if not pending:
                if rest_index == 0:
                    return True
                rest_index -= 1
                _, mode, doc = rest[rest_index]
                pending.append((mode, doc))
                continue

            mode, doc = pending.pop()
            if isinstance(doc, Text):
                remaining -= doc.width
            elif isinstance(doc, Group):
                group_mode = Mode.BREAK if doc.broken else mode
                pending.extend((group_mode, part) for part in reversed(doc.contents))
            elif isinstance(doc, Indent):
                pending.extend((mode, part) for part in reversed(doc.contents))
            elif mode is Mode.FLAT and not doc.force:
                remaining -= len(doc.separator)
            else:
                return True

        return False


def _trim(buffer: list[str]) -> None:
    """Remove trailing spaces and tabs before a newline."""
    while buffer:
        trimmed = buffer[-1].rstrip(" \t")
        if trimmed:
            buffer[-1] = trimmed
            return
        buffer.pop()
