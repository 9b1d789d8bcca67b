"""Line parser for plugin configuration expressions.

A line holds one expression: a dotted plugin class name followed by
whitespace-separated ``Key=Value`` arguments, e.g.::

    com.example.MailPushPlugin SmtpHost=10.0.0.1 SmtpPort=25 Attachment=1

Produces a ParseNode tree with absolute document offsets.
"""

from __future__ import annotations

import re

from plugcfg.lsp.types import NodeKind, ParseNode

_INT_PATTERN = re.compile(r"-?[0-9]+")
_BOOLEAN_PATTERN = re.compile(r"(?:true|false)", re.IGNORECASE)
_LINE_BREAK = re.compile(r"\r\n|\r|\n")

_WHITESPACE = " \t"


def _scan_token_end(line: str, i: int) -> int:
    """
    Return the end of the token starting at i.

    Whitespace ends a token unless it sits inside double quotes; a backslash
    inside quotes escapes the next character.
    """
    n = len(line)
    in_quotes = False
    while i < n:
        char = line[i]
        if in_quotes:
            if char == "\\" and i + 1 < n:
                i += 2
                continue
            if char == '"':
                in_quotes = False
        elif char in _WHITESPACE:
            break
        elif char == '"':
            in_quotes = True
        i += 1
    return i


def _string_end(line: str, start: int, limit: int) -> int:
    """Return the end of a quoted string starting at start (past closing quote)."""
    i = start + 1
    while i < limit:
        if line[i] == "\\" and i + 1 < limit:
            i += 2
            continue
        if line[i] == '"':
            return i + 1
        i += 1
    # Unterminated: runs to the end of the token
    return limit


def classify_value(text: str) -> NodeKind:
    """Return the value node kind for a literal value text."""
    if text.startswith('"'):
        return NodeKind.STRING
    if _INT_PATTERN.fullmatch(text):
        return NodeKind.INT
    if _BOOLEAN_PATTERN.fullmatch(text):
        return NodeKind.BOOLEAN
    return NodeKind.BARE_VALUE


def _build_arg(line: str, start: int, end: int, offset: int) -> ParseNode:
    arg = ParseNode(NodeKind.ARG, offset + start, offset + end)
    equals = line.find("=", start, end)
    name_end = end if equals == -1 else equals

    if name_end > start:
        arg.add_child(ParseNode(NodeKind.ARG_NAME, offset + start, offset + name_end))

    if equals == -1 or equals + 1 >= end:
        return arg

    value_start = equals + 1
    value_text = line[value_start:end]
    kind = classify_value(value_text)
    value_end = _string_end(line, value_start, end) if kind == NodeKind.STRING else end
    arg.add_child(ParseNode(kind, offset + value_start, offset + value_end))
    return arg


def parse_config_line(line: str, line_start: int = 0) -> ParseNode:
    """
    Parse a single configuration line.

    Args:
        line: The line text, without its line terminator.
        line_start: Offset of the line in the enclosing document.

    Returns:
        A ``Config`` node spanning the line. Its children are an optional
        leading PluginClass followed by Arg nodes in document order.
    """
    root = ParseNode(NodeKind.CONFIG, line_start, line_start + len(line))
    i = 0
    n = len(line)
    first = True

    while i < n:
        while i < n and line[i] in _WHITESPACE:
            i += 1
        if i >= n:
            break

        token_start = i
        i = _scan_token_end(line, i)

        if first and "=" not in line[token_start:i]:
            root.add_child(
                ParseNode(NodeKind.PLUGIN_CLASS, line_start + token_start, line_start + i)
            )
        else:
            root.add_child(_build_arg(line, token_start, i, line_start))
        first = False

    return root


def _iter_lines(source: str) -> list[tuple[str, int]]:
    # Only \r\n, \r and \n end a line, as in LSP positions.
    lines: list[tuple[str, int]] = []
    offset = 0
    for match in _LINE_BREAK.finditer(source):
        lines.append((source[offset : match.start()], offset))
        offset = match.end()
    lines.append((source[offset:], offset))
    return lines


def parse_document(source: str) -> list[ParseNode]:
    """Parse every line of a document; one expression per line."""
    return [parse_config_line(text, start) for text, start in _iter_lines(source)]


def line_tree_at(source: str, offset: int) -> ParseNode:
    """Return the parsed tree of the line containing offset."""
    chosen = ("", 0)
    for text, start in _iter_lines(source):
        if start > offset:
            break
        chosen = (text, start)
    return parse_config_line(*chosen)
