"""Validator for plugin configuration lines.

Takes a parsed line plus a plugin resolver and returns issues with spans.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable, Sequence
from typing import NamedTuple

from plugcfg.lsp.diagnostics import codes
from plugcfg.lsp.diagnostics.diagnostic_issue import DiagnosticIssue
from plugcfg.lsp.diagnostics.matching import close_names, with_hint
from plugcfg.lsp.tree import child_of_kind, iter_nodes, read_text, value_child
from plugcfg.lsp.types import NodeKind, ParseNode
from plugcfg.registry.resolver import is_valid_plugin_class_name, resolve_plugin
from plugcfg.registry.types import ArgType, ArgumentDef, PluginResolver

_INT_VALUE = re.compile(r"-?[0-9]+")
_BOOLEAN_VALUE = re.compile(r"true|false", re.IGNORECASE)


class _ArgOccurrence(NamedTuple):
    name: ParseNode
    value: ParseNode | None


def _issue(message: str, start: int, end: int, code: str) -> DiagnosticIssue:
    return DiagnosticIssue(
        message=message,
        start=start,
        end=end,
        code=code,
        severity=codes.severity_for(code),
    )


def _collect(tree: ParseNode) -> tuple[ParseNode | None, list[_ArgOccurrence]]:
    """Collect the first plugin class and every named argument in one pass."""
    plugin: ParseNode | None = None
    args: list[_ArgOccurrence] = []
    for node in iter_nodes(tree):
        if node.kind == NodeKind.PLUGIN_CLASS and plugin is None:
            plugin = node
        elif node.kind == NodeKind.ARG:
            name = child_of_kind(node, NodeKind.ARG_NAME)
            if name is not None:
                args.append(_ArgOccurrence(name, value_child(node)))
    return plugin, args


def value_matches_type(value_text: str, arg_type: ArgType) -> bool:
    """Check a literal value against a declared argument type."""
    if arg_type == ArgType.INT:
        return _INT_VALUE.fullmatch(value_text) is not None
    if arg_type == ArgType.BOOLEAN:
        return _BOOLEAN_VALUE.fullmatch(value_text) is not None
    return True


def _type_issue(
    canonical: str, arg_def: ArgumentDef, occurrence: _ArgOccurrence, document: str
) -> DiagnosticIssue | None:
    value = occurrence.value
    value_text = read_text(value, document) if value is not None else ""
    if value_matches_type(value_text, arg_def.type):
        return None

    if arg_def.type == ArgType.INT:
        message, code = f"Argument '{canonical}' must be an integer.", codes.INVALID_INT
    else:
        message, code = f"Argument '{canonical}' must be a boolean.", codes.INVALID_BOOLEAN

    # Without a value, point at the position right after the name
    if value is not None:
        start, end = value.start, value.end
    else:
        start = end = occurrence.name.end
    return _issue(message, start, end, code)


async def validate_line(
    tree: ParseNode,
    document: str,
    resolver: PluginResolver,
    *,
    scope: str | None = None,
    known_plugins: Sequence[str] = (),
) -> list[DiagnosticIssue]:
    """
    Validate a configuration line and return diagnostic issues.

    Args:
        tree: The parsed line.
        document: The full document text.
        resolver: Plugin lookup.
        scope: Optional scope key passed to the resolver.
        known_plugins: Plugin names used for hints on unknown plugins.

    Returns:
        Issues in document order; a plugin-level issue ends validation.
    """
    plugin, args = _collect(tree)
    if plugin is None:
        return []

    plugin_name = read_text(plugin, document)
    if not is_valid_plugin_class_name(plugin_name):
        return []

    plugin_def = await resolve_plugin(resolver, plugin_name, scope)
    if plugin_def is None:
        message = with_hint(
            f"Unknown plugin: {plugin_name} (not found in registry).",
            close_names(plugin_name, known_plugins),
        )
        return [_issue(message, plugin.start, plugin.end, codes.UNKNOWN_PLUGIN)]

    canonical_keys = {key.lower(): key for key in plugin_def.arguments}
    seen_counts: Counter[str] = Counter()
    issues: list[DiagnosticIssue] = []

    for occurrence in args:
        typed_name = read_text(occurrence.name, document)
        canonical = canonical_keys.get(typed_name.lower())

        if canonical is None:
            message = with_hint(
                f"Unknown argument '{typed_name}' for plugin {plugin_name}.",
                close_names(typed_name, plugin_def.arguments),
            )
            issues.append(
                _issue(message, occurrence.name.start, occurrence.name.end, codes.UNKNOWN_ARGUMENT)
            )
            continue

        arg_def = plugin_def.arguments[canonical]
        seen_counts[canonical] += 1
        if seen_counts[canonical] > 1 and not arg_def.multivalued:
            issues.append(
                _issue(
                    f"Argument '{canonical}' may only be specified once.",
                    occurrence.name.start,
                    occurrence.name.end,
                    codes.DUPLICATE_ARGUMENT,
                )
            )

        type_issue = _type_issue(canonical, arg_def, occurrence, document)
        if type_issue is not None:
            issues.append(type_issue)

    return issues


async def validate_document(
    trees: Iterable[ParseNode],
    document: str,
    resolver: PluginResolver,
    *,
    scope: str | None = None,
    known_plugins: Sequence[str] = (),
) -> list[DiagnosticIssue]:
    """Validate every parsed line of a document, in line order."""
    issues: list[DiagnosticIssue] = []
    for tree in trees:
        issues.extend(
            await validate_line(
                tree, document, resolver, scope=scope, known_plugins=known_plugins
            )
        )
    return issues
