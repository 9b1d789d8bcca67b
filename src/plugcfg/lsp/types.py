"""Type definitions shared by the plugin configuration language features."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple


class _StrEnum(str, Enum):
    """String-valued enum that behaves like str at runtime."""

    def __str__(self) -> str:
        return str(self.value)


class NodeKind(_StrEnum):
    """Kinds of nodes in a parsed configuration line."""

    CONFIG = "Config"  # Top node spanning the whole line
    PLUGIN_CLASS = "PluginClass"
    ARG = "Arg"
    ARG_NAME = "ArgName"
    VALUE = "Value"
    STRING = "String"
    INT = "Int"
    BOOLEAN = "Boolean"
    BARE_VALUE = "BareValue"


VALUE_KINDS = frozenset(
    {NodeKind.VALUE, NodeKind.STRING, NodeKind.INT, NodeKind.BOOLEAN, NodeKind.BARE_VALUE}
)


class CompletionMode(_StrEnum):
    """What kind of suggestions a cursor position asks for."""

    PLUGIN_NAME = "plugin-name"
    ARGUMENT_NAME = "argument-name"
    SUPPRESSED = "suppressed"


class CompletionKind(_StrEnum):
    """Kind categorizes completion items."""

    PLUGIN = "plugin"
    ARGUMENT = "argument"


class Severity(_StrEnum):
    """Diagnostic severity."""

    WARNING = "warning"
    ERROR = "error"


class TextRange(NamedTuple):
    """Half-open ``[start, end)`` span of document offsets."""

    start: int
    end: int


@dataclass(eq=False)
class ParseNode:
    """A node of a parsed configuration line.

    Offsets are absolute document offsets, ``end`` exclusive. Children are in
    document order and ``parent`` is None only for the top node.
    """

    kind: NodeKind
    start: int
    end: int
    children: list[ParseNode] = field(default_factory=list)
    parent: ParseNode | None = field(default=None, repr=False)

    def add_child(self, child: ParseNode) -> ParseNode:
        child.parent = self
        self.children.append(child)
        return child

    @property
    def span(self) -> TextRange:
        return TextRange(self.start, self.end)


class CompletionContext(NamedTuple):
    """Completion context at a cursor position.

    ``target`` is the PluginClass/ArgName node around the cursor, if any.
    ``replace_range`` is None when there is nothing before the cursor to
    overwrite.
    """

    mode: CompletionMode
    replace_range: TextRange | None = None
    target: ParseNode | None = None
    plugin: ParseNode | None = None  # First PluginClass of the line

    @property
    def suppressed(self) -> bool:
        return self.mode == CompletionMode.SUPPRESSED
