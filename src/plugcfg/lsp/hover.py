"""Hover help for plugin configuration lines.

Shows the registry description of the plugin or argument under the cursor.
"""

from __future__ import annotations

from plugcfg.lsp.completion_context import find_name_node
from plugcfg.lsp.tree import first_of_kind, read_text
from plugcfg.lsp.types import NodeKind, ParseNode
from plugcfg.registry.resolver import resolve_plugin
from plugcfg.registry.types import ArgumentDef, PluginDef, PluginResolver


async def get_hover_help(
    tree: ParseNode,
    document: str,
    offset: int,
    resolver: PluginResolver,
    *,
    scope: str | None = None,
) -> str | None:
    """
    Get hover help text at the given cursor position.

    Args:
        tree: Parsed line containing offset.
        document: The full document text.
        offset: Cursor offset.
        resolver: Plugin lookup.
        scope: Optional scope key passed to the resolver.

    Returns:
        Markdown help text, or None if the cursor is not on a known name.
    """
    node = find_name_node(tree, offset)
    if node is None:
        return None

    plugin = first_of_kind(tree, NodeKind.PLUGIN_CLASS)
    if plugin is None:
        return None
    if node.kind == NodeKind.PLUGIN_CLASS and node is not plugin:
        return None

    plugin_def = await resolve_plugin(resolver, read_text(plugin, document), scope)
    if plugin_def is None:
        return None

    if node is plugin:
        return _plugin_help(plugin_def)

    typed_name = read_text(node, document).lower()
    for key, arg_def in plugin_def.arguments.items():
        if key.lower() == typed_name:
            return _argument_help(key, arg_def)
    return None


def _plugin_help(plugin_def: PluginDef) -> str:
    lines = [f"**{plugin_def.name}**"]
    if plugin_def.description:
        lines.extend(["", plugin_def.description])
    if plugin_def.arguments:
        lines.extend(["", "Arguments: " + ", ".join(f"`{key}`" for key in plugin_def.arguments)])
    return "\n".join(lines)


def _argument_help(key: str, arg_def: ArgumentDef) -> str:
    header = f"**{key}**: `{arg_def.type}`"
    if arg_def.multivalued:
        header += " (may be repeated)"
    if arg_def.description:
        return f"{header}\n\n{arg_def.description}"
    return header
