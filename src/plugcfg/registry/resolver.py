from __future__ import annotations

import asyncio
import inspect
import re

from plugcfg.logging import get_logger
from plugcfg.registry.catalog import PluginRegistry
from plugcfg.registry.types import PluginDef, PluginResolver

__all__ = [
    "PluginResolver",
    "RegistryResolver",
    "is_valid_plugin_class_name",
    "make_static_resolver",
    "resolve_plugin",
]

_PLUGIN_CLASS_PATTERN = re.compile(r"[A-Za-z_]\w*(\.\w+)*")


def is_valid_plugin_class_name(plugin_name: str) -> bool:
    """Check whether plugin_name is a dotted identifier."""
    return _PLUGIN_CLASS_PATTERN.fullmatch(plugin_name) is not None


async def resolve_plugin(
    resolver: PluginResolver, plugin_name: str, scope: str | None = None
) -> PluginDef | None:
    """
    Look up plugin_name through resolver.

    Malformed names are never looked up. Works with both synchronous and
    asynchronous resolvers.
    """
    if not is_valid_plugin_class_name(plugin_name):
        return None
    result = resolver(plugin_name, scope)
    if inspect.isawaitable(result):
        return await result
    return result


def make_static_resolver(registry: PluginRegistry) -> PluginResolver:
    """Create a synchronous resolver that reads straight from registry."""

    def resolver(plugin_name: str, scope: str | None = None) -> PluginDef | None:
        return registry.get(plugin_name, scope)

    return resolver


class RegistryResolver:
    """Asynchronous resolver simulating a remote registry lookup.

    Successful lookups are cached per ``(scope, name)`` for the lifetime of
    the resolver; misses are not cached. Lookup failures are logged and
    reported as "not found".
    """

    def __init__(self, registry: PluginRegistry, *, latency_ms: int = 50) -> None:
        self._registry = registry
        self._latency_s = max(latency_ms, 0) / 1000
        self._cache: dict[tuple[str, str], PluginDef] = {}
        self._logger = get_logger("registry.resolver")

    async def __call__(
        self, plugin_name: str, scope: str | None = None
    ) -> PluginDef | None:
        if not is_valid_plugin_class_name(plugin_name):
            return None

        resolved_scope = scope if scope is not None else self._registry.find_scope(plugin_name)
        cache_key = (resolved_scope or "", plugin_name)
        cached = self._cache.get(cache_key)
        if cached is not None:
            self._logger.debug("Plugin cache hit for %s", plugin_name)
            return cached

        self._logger.debug("Plugin cache miss for %s (scope %s)", plugin_name, resolved_scope)
        try:
            plugin = self._lookup(plugin_name, resolved_scope)
            await asyncio.sleep(self._latency_s)
        except Exception:
            self._logger.warning("Plugin lookup failed for %s", plugin_name, exc_info=True)
            return None

        if plugin is not None:
            self._cache[cache_key] = plugin
        return plugin

    def _lookup(self, plugin_name: str, scope: str | None) -> PluginDef | None:
        if scope is None:
            return None
        return self._registry.get(plugin_name, scope)
