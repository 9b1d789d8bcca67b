"""Name matching helpers for "Did you mean" hints."""

from __future__ import annotations

import difflib
from collections.abc import Iterable

# difflib ratio below which a candidate is considered noise
_CLOSE_MATCH_CUTOFF = 0.6


def close_names(text: str, candidates: Iterable[str], *, limit: int = 3) -> list[str]:
    """
    Get candidate names resembling text, compared case-insensitively.

    Prefix matches come first, followed by difflib close matches. Exact
    (case-insensitive) matches are never suggested.

    Args:
        text: The name as typed.
        candidates: Canonical names to pick from.
        limit: Maximum number of suggestions.

    Returns:
        Canonical names, best first.
    """
    by_lower: dict[str, str] = {}
    for candidate in candidates:
        by_lower.setdefault(candidate.lower(), candidate)

    text_lower = text.lower()
    if not text_lower:
        return []
    ordered: list[str] = [
        lower for lower in by_lower if lower.startswith(text_lower) and lower != text_lower
    ]

    close = difflib.get_close_matches(
        text_lower, list(by_lower), n=limit, cutoff=_CLOSE_MATCH_CUTOFF
    )
    ordered.extend(lower for lower in close if lower != text_lower and lower not in ordered)

    return [by_lower[lower] for lower in ordered[:limit]]


def with_hint(message: str, suggestions: list[str]) -> str:
    """Append a "Did you mean" hint listing suggestions to message."""
    if not suggestions:
        return message
    return f"{message} Did you mean {', '.join(repr(s) for s in suggestions)}?"
