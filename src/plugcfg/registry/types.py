from __future__ import annotations

from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Literal, NamedTuple, TypeAlias, TypedDict


class ArgType(str, Enum):
    """Declared type of a plugin argument."""

    STRING = "string"
    INT = "int"
    BOOLEAN = "boolean"

    def __str__(self) -> str:
        return str(self.value)


class ArgumentDef(NamedTuple):
    type: ArgType
    description: str | None = None
    multivalued: bool = False


class PluginDef(NamedTuple):
    name: str  # Dotted class name
    arguments: dict[str, ArgumentDef]  # Canonical key -> definition, declaration order
    description: str | None = None


# Raw registry document shapes (JSON)


class RawArgumentDef(TypedDict, total=False):
    type: Literal["string", "int", "boolean"]
    description: str
    multivalued: bool


class RawPluginDef(TypedDict, total=False):
    name: str
    description: str
    arguments: dict[str, RawArgumentDef]


RawRegistry: TypeAlias = dict[str, list[RawPluginDef]]

PluginLookup: TypeAlias = PluginDef | None | Awaitable[PluginDef | None]
PluginResolver: TypeAlias = Callable[[str, str | None], PluginLookup]
