"""Navigation helpers over parsed configuration lines.

All helpers are read-only; trees are treated as immutable snapshots.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from plugcfg.lsp.types import VALUE_KINDS, NodeKind, ParseNode

NodePredicate = Callable[[ParseNode], bool]

# Resolution sides: -1 enters nodes ending at the position, 1 nodes starting there.
BIASES = (-1, 1)


def read_text(node: ParseNode, document: str) -> str:
    """Return the document text spanned by node."""
    return document[node.start : node.end]


def iter_nodes(root: ParseNode) -> Iterator[ParseNode]:
    """Yield every node under root (root included) in pre-order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def for_each_node(root: ParseNode, visit: Callable[[ParseNode], None]) -> None:
    """Call visit on every node under root in pre-order."""
    for node in iter_nodes(root):
        visit(node)


def first_of_kind(root: ParseNode, kind: NodeKind) -> ParseNode | None:
    """Return the first node of kind in document order."""
    return next((node for node in iter_nodes(root) if node.kind == kind), None)


def child_of_kind(node: ParseNode, kind: NodeKind) -> ParseNode | None:
    """Return the first direct child of kind."""
    return next((child for child in node.children if child.kind == kind), None)


def is_value_node(node: ParseNode | None) -> bool:
    return node is not None and node.kind in VALUE_KINDS


def value_child(arg: ParseNode) -> ParseNode | None:
    """Return the value-kind child of an Arg node."""
    return next((child for child in arg.children if is_value_node(child)), None)


def ancestors(node: ParseNode | None) -> Iterator[ParseNode]:
    """Yield node and then each of its parents up to the top node."""
    while node is not None:
        yield node
        node = node.parent


def _covers(node: ParseNode, pos: int, bias: int) -> bool:
    if bias < 0:
        return node.start < pos <= node.end
    return node.start <= pos < node.end


def resolve_inner(root: ParseNode, pos: int, bias: int) -> ParseNode:
    """
    Return the innermost node around pos.

    With a negative bias a node ending exactly at pos qualifies, with a
    positive bias a node starting exactly at pos does. Falls back to root.
    """
    node = root
    while True:
        child = next((c for c in node.children if _covers(c, pos, bias)), None)
        if child is None:
            return node
        node = child


def nearest_enclosing(
    root: ParseNode, pos: int, predicate: NodePredicate
) -> ParseNode | None:
    """
    Find the closest node matching predicate around pos.

    Walks up from the node resolved before pos, then from the node resolved
    after pos; the first match wins.
    """
    for bias in BIASES:
        for node in ancestors(resolve_inner(root, pos, bias)):
            if predicate(node):
                return node
    return None
