"""In-memory plugin registry grouped by scope key."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from plugcfg.registry.types import PluginDef

__all__ = [
    "BROKER_PREFIX",
    "PluginRegistry",
    "format_scope_label",
]

BROKER_PREFIX = "iipax.generic.plugin.broker."


def format_scope_label(key: str) -> str:
    """Format a scope key for display by trimming the broker prefix."""
    return key[len(BROKER_PREFIX) :] if key.startswith(BROKER_PREFIX) else key


class PluginRegistry:
    """Plugin definitions grouped under scope keys, in registry order."""

    def __init__(self, scopes: Mapping[str, Iterable[PluginDef]]) -> None:
        self._by_scope: dict[str, dict[str, PluginDef]] = {}
        self._scope_of: dict[str, str] = {}
        for scope, plugins in scopes.items():
            by_name = self._by_scope.setdefault(scope, {})
            for plugin in plugins:
                by_name[plugin.name] = plugin
                # First scope declaring a plugin owns it
                self._scope_of.setdefault(plugin.name, scope)

    def scope_keys(self) -> list[str]:
        return list(self._by_scope)

    def plugins(self, scope: str | None = None) -> list[PluginDef]:
        """List plugins of one scope, or of every scope when scope is None."""
        if scope is not None:
            return list(self._by_scope.get(scope, {}).values())
        seen: dict[str, PluginDef] = {}
        for by_name in self._by_scope.values():
            for name, plugin in by_name.items():
                seen.setdefault(name, plugin)
        return list(seen.values())

    def find_scope(self, plugin_name: str) -> str | None:
        return self._scope_of.get(plugin_name)

    def get(self, plugin_name: str, scope: str | None = None) -> PluginDef | None:
        """Look up a plugin by exact name, within scope or its owning scope."""
        if scope is None:
            scope = self.find_scope(plugin_name)
            if scope is None:
                return None
        return self._by_scope.get(scope, {}).get(plugin_name)

    def __contains__(self, scope: object) -> bool:
        return scope in self._by_scope

    def __len__(self) -> int:
        return len(self._scope_of)
