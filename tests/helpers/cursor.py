"""Cursor marker helpers for test fixtures.

Lets fixtures mark the cursor inline instead of counting offsets:

    >>> extract_cursor_offset(text_with_cursor="pkg.Demo Ga<CURSOR>")
    ('pkg.Demo Ga', 11)
"""

from __future__ import annotations

from lsprotocol.types import Position

CURSOR_MARKER = "<CURSOR>"


def extract_cursor_offset(
    *,
    text_with_cursor: str,
    marker: str = CURSOR_MARKER,
) -> tuple[str, int]:
    """
    Remove the cursor marker and return the text plus the marker's offset.

    Raises:
        ValueError: If the marker does not appear exactly once.
    """
    count = text_with_cursor.count(marker)
    if count != 1:
        raise ValueError(
            f"Expected exactly one cursor marker '{marker}', found {count}"
        )
    offset = text_with_cursor.index(marker)
    return text_with_cursor.replace(marker, "", 1), offset


def extract_cursor(
    *,
    text_with_cursor: str,
    marker: str = CURSOR_MARKER,
) -> tuple[str, Position]:
    """Like extract_cursor_offset, but return an LSP Position."""
    text, offset = extract_cursor_offset(text_with_cursor=text_with_cursor, marker=marker)
    before = text[:offset]
    line = before.count("\n")
    character = offset - (before.rfind("\n") + 1)
    return text, Position(line=line, character=character)
