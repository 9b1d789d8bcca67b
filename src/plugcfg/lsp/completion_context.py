"""Completion context determination for plugin configuration lines.

Decides, for a parsed line and a cursor offset, whether suggestions are
offered at all, whether they are plugin names or argument names, and which
text a picked suggestion replaces.
"""

from __future__ import annotations

import re

from plugcfg.lsp.tree import (
    BIASES,
    child_of_kind,
    first_of_kind,
    is_value_node,
    nearest_enclosing,
    read_text,
    resolve_inner,
    value_child,
)
from plugcfg.lsp.types import (
    CompletionContext,
    CompletionMode,
    NodeKind,
    ParseNode,
    TextRange,
)

PLUGIN_PREFIX_PATTERN = re.compile(r"[A-Za-z0-9_.]*\Z")
ARGUMENT_PREFIX_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")

_VALUE_CHARACTER = re.compile(r"[^=\s]")
_NON_WHITESPACE = re.compile(r"\S")

_SUPPRESSED = CompletionContext(mode=CompletionMode.SUPPRESSED)


def resolve_context(tree: ParseNode, offset: int, document: str) -> CompletionContext:
    """
    Get the completion context at offset.

    Args:
        tree: Parsed line containing the cursor.
        offset: Cursor offset, in the same coordinates as the tree.
        document: The full document text.

    Returns:
        CompletionContext; SUPPRESSED while the cursor is editing a value.
    """
    if is_inside_value(tree, offset) or in_argument_value_zone(tree, document, offset):
        return _SUPPRESSED

    plugin = first_of_kind(tree, NodeKind.PLUGIN_CLASS)
    if plugin is None or offset <= plugin.end:
        mode = CompletionMode.PLUGIN_NAME
    else:
        mode = CompletionMode.ARGUMENT_NAME

    target = find_name_node(tree, offset)
    if target is not None and target.kind == NodeKind.PLUGIN_CLASS and target is not plugin:
        # Only the first plugin class of a line counts
        target = None

    if target is not None:
        use_plugin_pattern = target.kind == NodeKind.PLUGIN_CLASS
    else:
        use_plugin_pattern = mode == CompletionMode.PLUGIN_NAME
    pattern = PLUGIN_PREFIX_PATTERN if use_plugin_pattern else ARGUMENT_PREFIX_PATTERN

    return CompletionContext(
        mode=mode,
        replace_range=match_before(document, offset, pattern),
        target=target,
        plugin=plugin,
    )


def is_inside_value(tree: ParseNode, offset: int) -> bool:
    """
    Check whether offset lies strictly inside a value token.

    Positions at a value's edges do not count, so typing can continue with a
    new argument right after a value.
    """
    for bias in BIASES:
        node = resolve_inner(tree, offset, bias)
        if is_value_node(node) and node.start < offset < node.end:
            return True
    return False


def in_argument_value_zone(tree: ParseNode, document: str, offset: int) -> bool:
    """
    Check whether offset is in the value part of an argument.

    Everything after an argument name counts as value space (so suggestions
    close once ``=`` is typed), except trailing whitespace before any value
    was entered and whitespace following a complete value.
    """
    arg = nearest_enclosing(tree, offset, lambda node: node.kind == NodeKind.ARG)
    if arg is None:
        return False

    name = child_of_kind(arg, NodeKind.ARG_NAME)
    if name is None:
        return True

    value = value_child(arg)
    after_name = document[name.end : offset]

    if value is None and not _VALUE_CHARACTER.search(after_name) and after_name[-1:].isspace():
        return False

    if value is not None and offset > value.end:
        return _NON_WHITESPACE.search(document[value.end : offset]) is not None

    return offset > name.end


def find_name_node(tree: ParseNode, offset: int) -> ParseNode | None:
    """Find the PluginClass or ArgName node around offset."""
    return nearest_enclosing(
        tree,
        offset,
        lambda node: node.kind in (NodeKind.PLUGIN_CLASS, NodeKind.ARG_NAME),
    )


def match_before(document: str, offset: int, pattern: re.Pattern[str]) -> TextRange | None:
    """
    Match pattern against the text ending at offset.

    Returns:
        The matched range, or None when the match is empty.
    """
    match = pattern.search(document, 0, offset)
    if match is None or match.start() == match.end():
        return None
    return TextRange(match.start(), offset)


def plugin_name_of(context: CompletionContext, document: str) -> str | None:
    """Return the text of the line's plugin class, if any."""
    if context.plugin is None:
        return None
    return read_text(context.plugin, document)
