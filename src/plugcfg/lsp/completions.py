"""Completion logic for plugin configuration lines.

Routes completion requests based on CompletionContext mode and builds
completion items from the plugin registry.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from typing import NamedTuple

from plugcfg.lsp.completion_context import plugin_name_of
from plugcfg.lsp.tree import child_of_kind, iter_nodes, read_text
from plugcfg.lsp.types import CompletionContext, CompletionKind, CompletionMode, NodeKind, ParseNode
from plugcfg.registry.resolver import resolve_plugin
from plugcfg.registry.types import PluginDef, PluginResolver


class CompletionItem(NamedTuple):
    """A completion suggestion."""

    label: str  # Display text
    kind: CompletionKind
    insert_text: str  # Text that replaces the context's replace range
    detail: str | None = None  # Short info, e.g. the argument type
    documentation: str | None = None  # Long description


async def build_suggestions(
    ctx: CompletionContext,
    tree: ParseNode,
    document: str,
    *,
    plugins: Sequence[PluginDef],
    resolver: PluginResolver,
    scope: str | None = None,
) -> list[CompletionItem]:
    """
    Get completion items for a completion context.

    Routes on mode:
    - PLUGIN_NAME: every known plugin, in registry order
    - ARGUMENT_NAME: arguments of the line's plugin not yet used
    - SUPPRESSED: no items

    Args:
        ctx: Context from resolve_context.
        tree: The parsed line the context was resolved on.
        document: The full document text.
        plugins: Known plugins offered in plugin-name mode.
        resolver: Plugin lookup used in argument-name mode.
        scope: Optional scope key passed to the resolver.

    Returns:
        List of CompletionItem; empty when nothing applies.
    """
    if ctx.mode == CompletionMode.PLUGIN_NAME:
        return build_plugin_items(plugins)

    if ctx.mode == CompletionMode.ARGUMENT_NAME:
        plugin_name = plugin_name_of(ctx, document)
        if plugin_name is None:
            return []
        plugin_def = await resolve_plugin(resolver, plugin_name, scope)
        if plugin_def is None:
            return []
        return build_argument_items(plugin_def, collect_used_arguments(tree, document))

    return []


def build_plugin_items(plugins: Iterable[PluginDef]) -> list[CompletionItem]:
    """One item per plugin; picking one also inserts the separating space."""
    return [
        CompletionItem(
            label=plugin.name,
            kind=CompletionKind.PLUGIN,
            insert_text=plugin.name + " ",
            detail="Plugin",
            documentation=plugin.description,
        )
        for plugin in plugins
    ]


def collect_used_arguments(tree: ParseNode, document: str) -> list[str]:
    """Return the names of all arguments on the line, as typed."""
    used: list[str] = []
    for node in iter_nodes(tree):
        if node.kind != NodeKind.ARG:
            continue
        name = child_of_kind(node, NodeKind.ARG_NAME)
        if name is not None:
            used.append(read_text(name, document))
    return used


def build_argument_items(
    plugin_def: PluginDef, used_arguments: Iterable[str]
) -> list[CompletionItem]:
    """
    Build argument items in declaration order.

    Arguments already on the line (compared case-insensitively) are left out
    unless they are multivalued.
    """
    used_counts = Counter(name.lower() for name in used_arguments)

    items: list[CompletionItem] = []
    for key, arg_def in plugin_def.arguments.items():
        if not arg_def.multivalued and used_counts[key.lower()]:
            continue
        items.append(
            CompletionItem(
                label=key,
                kind=CompletionKind.ARGUMENT,
                insert_text=key + "=",
                detail=str(arg_def.type),
                documentation=arg_def.description,
            )
        )
    return items
