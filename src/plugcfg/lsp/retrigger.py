"""Reopens the suggestion popup while the user types.

After each edit of a focused document the completion context is resolved
again; when the cursor sits on a completable name the host is asked to show
suggestions. The controller never edits text or moves the selection, so
continued typing is never interrupted.
"""

from __future__ import annotations

import logging
from typing import Protocol

from plugcfg.logging import get_logger
from plugcfg.lsp.completion_context import resolve_context
from plugcfg.lsp.types import CompletionContext, ParseNode


class SuggestHost(Protocol):
    """Editor capabilities the controller relies on."""

    def has_focus(self, uri: str) -> bool: ...

    def open_suggestions(self, uri: str, offset: int, context: CompletionContext) -> None: ...


class RetriggerController:
    """Decides whether to reopen suggestions after a document change."""

    def __init__(self, host: SuggestHost, logger: logging.Logger | None = None) -> None:
        self._host = host
        self._logger = logger if logger is not None else get_logger("lsp.retrigger")

    def on_document_change(
        self, uri: str, tree: ParseNode, document: str, cursor: int
    ) -> bool:
        """
        Handle a document change.

        Args:
            uri: The changed document.
            tree: Parsed line containing the cursor, after the change.
            document: Document text after the change.
            cursor: Cursor offset after the change.

        Returns:
            True if suggestions were requested from the host.
        """
        if not self._host.has_focus(uri):
            return False

        ctx = resolve_context(tree, cursor, document)
        if ctx.suppressed or ctx.target is None:
            self._logger.debug("No retrigger at %d (mode=%s)", cursor, ctx.mode)
            return False

        self._logger.debug("Retriggering suggestions at %d (mode=%s)", cursor, ctx.mode)
        self._host.open_suggestions(uri, cursor, ctx)
        return True
