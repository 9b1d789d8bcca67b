"""Plugin registry: definitions, loading and resolvers."""

from plugcfg.registry.catalog import PluginRegistry, format_scope_label
from plugcfg.registry.loader import (
    RegistryFormatError,
    load_default_registry,
    load_registry,
)
from plugcfg.registry.resolver import (
    RegistryResolver,
    is_valid_plugin_class_name,
    make_static_resolver,
    resolve_plugin,
)
from plugcfg.registry.types import ArgType, ArgumentDef, PluginDef, PluginResolver

__all__ = [
    "ArgType",
    "ArgumentDef",
    "PluginDef",
    "PluginRegistry",
    "PluginResolver",
    "RegistryFormatError",
    "RegistryResolver",
    "format_scope_label",
    "is_valid_plugin_class_name",
    "load_default_registry",
    "load_registry",
    "make_static_resolver",
    "resolve_plugin",
]
