"""Request generation tracking for asynchronous results.

Every request that awaits a plugin lookup takes a token first. Before its
result is applied the token is checked; a newer request for the same
document, or a document edit, makes the older result stale.
"""

from __future__ import annotations

import itertools
from typing import NamedTuple


class RequestToken(NamedTuple):
    uri: str
    generation: int
    version: int | None  # Document version the request was computed for


class GenerationTracker:
    """Hands out increasing generations and remembers the latest per document.

    Channels keep unrelated request streams (completion, diagnostics) from
    invalidating each other.
    """

    def __init__(self) -> None:
        self._latest: dict[tuple[str, str], int] = {}
        self._counter = itertools.count(1)

    def begin(self, uri: str, version: int | None, channel: str = "default") -> RequestToken:
        generation = next(self._counter)
        self._latest[(channel, uri)] = generation
        return RequestToken(uri=uri, generation=generation, version=version)

    def is_current(
        self,
        token: RequestToken,
        current_version: int | None,
        channel: str = "default",
    ) -> bool:
        """Check that no newer request started and the document did not change."""
        if self._latest.get((channel, token.uri)) != token.generation:
            return False
        return token.version is None or token.version == current_version

    def forget(self, uri: str) -> None:
        for key in [key for key in self._latest if key[1] == uri]:
            del self._latest[key]
