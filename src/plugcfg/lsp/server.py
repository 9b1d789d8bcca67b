"""Plugin configuration LSP server using pygls 2.0.

Provides completion, hover and diagnostics for plugin configuration lines,
plus proactive suggestion retriggering while the user types.
"""

from __future__ import annotations

import logging

from lsprotocol import types
from pygls.lsp.server import LanguageServer
from pygls.workspace import TextDocument

from plugcfg.logging import get_logger
from plugcfg.lsp.adapter import (
    offset_to_position as _offset_to_position,
    position_to_offset as _position_to_offset,
    to_lsp_completion_item as _to_lsp_completion_item,
    to_lsp_diagnostic as _to_lsp_diagnostic,
)
from plugcfg.lsp.completion_context import resolve_context
from plugcfg.lsp.completions import build_suggestions
from plugcfg.lsp.diagnostics import DebounceManager, validate_document
from plugcfg.lsp.error_handling import wrap_handler
from plugcfg.lsp.hover import get_hover_help
from plugcfg.lsp.parser import line_tree_at, parse_document
from plugcfg.lsp.retrigger import RetriggerController
from plugcfg.lsp.staleness import GenerationTracker
from plugcfg.lsp.types import CompletionContext
from plugcfg.registry.catalog import PluginRegistry
from plugcfg.registry.resolver import make_static_resolver
from plugcfg.registry.types import PluginResolver

TRIGGER_SUGGEST_NOTIFICATION = "$/plugcfg/triggerSuggest"

_COMPLETION_CHANNEL = "completion"
_DIAGNOSTICS_CHANNEL = "diagnostics"


def _cursor_after_change(
    document: TextDocument, change: types.TextDocumentContentChangeEvent
) -> int | None:
    """
    Derive the cursor offset after a content change.

    The cursor is assumed to sit at the end of the inserted text. Full
    document replacements carry no position and yield None.
    """
    change_range = getattr(change, "range", None)
    if change_range is None:
        return None
    return _position_to_offset(document, change_range.start) + len(change.text)


class _LspSuggestHost:
    """Retrigger host backed by the LSP client.

    A document has focus while it is open and being edited by the client.
    Suggestions are requested with a notification carrying only a position.
    """

    def __init__(self, server: LanguageServer, logger: logging.Logger, enabled: bool) -> None:
        self._server = server
        self._logger = logger
        self._enabled = enabled
        self._focused: set[str] = set()

    def focus(self, uri: str) -> None:
        self._focused.add(uri)

    def blur(self, uri: str) -> None:
        self._focused.discard(uri)

    def has_focus(self, uri: str) -> bool:
        return self._enabled and uri in self._focused

    def open_suggestions(self, uri: str, offset: int, context: CompletionContext) -> None:
        document = self._server.workspace.get_text_document(uri)
        position = _offset_to_position(document, offset)
        try:
            self._server.protocol.notify(
                TRIGGER_SUGGEST_NOTIFICATION,
                {
                    "uri": uri,
                    "position": {"line": position.line, "character": position.character},
                    "mode": str(context.mode),
                },
            )
        except Exception:
            self._logger.debug("Could not send %s", TRIGGER_SUGGEST_NOTIFICATION, exc_info=True)


def create_server(
    *,
    registry: PluginRegistry,
    resolver: PluginResolver | None = None,
    scope: str | None = None,
    debounce_ms: int = 400,
    retrigger: bool = True,
    logger: logging.Logger | None = None,
) -> LanguageServer:
    """
    Create and configure the LSP server.

    Args:
        registry: Known plugins, offered as plugin-name completions.
        resolver: Plugin lookup for arguments; defaults to a synchronous
            lookup in registry.
        scope: Optional scope key restricting lookups and plugin completions.
        debounce_ms: Debounce delay in milliseconds for diagnostics.
        retrigger: Whether to ask the client to reopen suggestions on edits.
        logger: Optional logger. If None, uses the plugcfg.lsp logger.

    Returns:
        Configured LanguageServer instance.
    """
    if logger is None:
        logger = get_logger("lsp")
    if resolver is None:
        resolver = make_static_resolver(registry)

    server = LanguageServer("plugcfg-lsp", "v0.1.0")
    debounce_manager = DebounceManager(logger=logger)
    generations = GenerationTracker()
    suggest_host = _LspSuggestHost(server, logger, enabled=retrigger)
    retrigger_controller = RetriggerController(suggest_host, logger=logger)

    known_plugins = registry.plugins(scope)
    known_plugin_names = [plugin.name for plugin in known_plugins]

    def _empty_completion_list() -> types.CompletionList:
        return types.CompletionList(is_incomplete=False, items=[])

    @server.feature(
        types.TEXT_DOCUMENT_COMPLETION,
        types.CompletionOptions(
            trigger_characters=[" ", "."],
            resolve_provider=False,
        ),
    )
    @wrap_handler(
        logger=logger,
        feature_name="textDocument/completion",
        default_factory=_empty_completion_list,
    )
    async def completion(params: types.CompletionParams) -> types.CompletionList:
        """Handle textDocument/completion requests."""
        uri = params.text_document.uri
        document = server.workspace.get_text_document(uri)
        source = document.source
        offset = _position_to_offset(document, params.position)

        tree = line_tree_at(source, offset)
        ctx = resolve_context(tree, offset, source)
        logger.debug("Completion context at %d: mode=%s", offset, ctx.mode)

        token = generations.begin(uri, document.version, channel=_COMPLETION_CHANNEL)
        items = await build_suggestions(
            ctx, tree, source, plugins=known_plugins, resolver=resolver, scope=scope
        )

        current = server.workspace.get_text_document(uri)
        if not generations.is_current(token, current.version, channel=_COMPLETION_CHANNEL):
            logger.debug("Dropping stale completion result for %s", uri)
            return types.CompletionList(is_incomplete=True, items=[])

        lsp_items = [
            _to_lsp_completion_item(item, document, offset, ctx.replace_range, index)
            for index, item in enumerate(items)
        ]
        logger.debug("Returning %d completion items", len(lsp_items))
        return types.CompletionList(is_incomplete=False, items=lsp_items)

    @server.feature(types.TEXT_DOCUMENT_HOVER)
    @wrap_handler(
        logger=logger,
        feature_name="textDocument/hover",
        default_factory=lambda: None,
    )
    async def hover(params: types.HoverParams) -> types.Hover | None:
        """Handle textDocument/hover requests."""
        document = server.workspace.get_text_document(params.text_document.uri)
        source = document.source
        offset = _position_to_offset(document, params.position)

        help_text = await get_hover_help(
            line_tree_at(source, offset), source, offset, resolver, scope=scope
        )
        if help_text is None:
            return None
        return types.Hover(
            contents=types.MarkupContent(kind=types.MarkupKind.Markdown, value=help_text)
        )

    async def publish_document_diagnostics(uri: str, document_version: int | None) -> None:
        """Validate a document and publish its diagnostics, unless stale."""
        document = server.workspace.get_text_document(uri)
        if document is None:
            return

        if document_version is not None and document.version != document_version:
            logger.debug(
                "Skipping diagnostics for %s: version mismatch (expected %s, got %s)",
                uri,
                document_version,
                document.version,
            )
            return

        token = generations.begin(uri, document_version, channel=_DIAGNOSTICS_CHANNEL)
        try:
            source = document.source
            issues = await validate_document(
                parse_document(source),
                source,
                resolver,
                scope=scope,
                known_plugins=known_plugin_names,
            )

            latest = server.workspace.get_text_document(uri)
            if not generations.is_current(token, latest.version, channel=_DIAGNOSTICS_CHANNEL):
                logger.debug("Dropping stale diagnostics for %s", uri)
                return

            server.text_document_publish_diagnostics(
                types.PublishDiagnosticsParams(
                    uri=uri,
                    diagnostics=[_to_lsp_diagnostic(issue, document) for issue in issues],
                    version=document_version,
                )
            )
            logger.debug(
                "Published %d diagnostics for %s (version %s)",
                len(issues),
                uri,
                document_version,
            )
        except Exception:
            logger.exception("Error publishing diagnostics for %s", uri)

    async def schedule_diagnostics(uri: str, document_version: int | None) -> None:
        await debounce_manager.schedule(
            uri,
            lambda: publish_document_diagnostics(uri, document_version),
            delay_ms=debounce_ms,
        )

    @server.feature(types.TEXT_DOCUMENT_DID_OPEN)
    @wrap_handler(
        logger=logger,
        feature_name="textDocument/didOpen",
        default_factory=lambda: None,
    )
    async def did_open(params: types.DidOpenTextDocumentParams) -> None:
        """Handle textDocument/didOpen by scheduling diagnostics."""
        uri = params.text_document.uri
        document = server.workspace.get_text_document(uri)
        if document is None:
            return

        logger.debug("Document opened: %s (version %s)", uri, document.version)
        suggest_host.focus(uri)
        await schedule_diagnostics(uri, document.version)

    @server.feature(types.TEXT_DOCUMENT_DID_CHANGE)
    @wrap_handler(
        logger=logger,
        feature_name="textDocument/didChange",
        default_factory=lambda: None,
    )
    async def did_change(params: types.DidChangeTextDocumentParams) -> None:
        """Handle textDocument/didChange: retrigger suggestions, debounce diagnostics."""
        uri = params.text_document.uri
        document = server.workspace.get_text_document(uri)
        if document is None:
            return

        logger.debug("Document changed: %s (version %s)", uri, document.version)
        suggest_host.focus(uri)

        if params.content_changes:
            cursor = _cursor_after_change(document, params.content_changes[-1])
            if cursor is not None:
                source = document.source
                retrigger_controller.on_document_change(
                    uri, line_tree_at(source, cursor), source, cursor
                )

        await schedule_diagnostics(uri, document.version)

    @server.feature(types.TEXT_DOCUMENT_DID_CLOSE)
    @wrap_handler(
        logger=logger,
        feature_name="textDocument/didClose",
        default_factory=lambda: None,
    )
    async def did_close(params: types.DidCloseTextDocumentParams) -> None:
        """Handle textDocument/didClose by clearing diagnostics."""
        uri = params.text_document.uri
        logger.debug("Document closed: %s", uri)

        suggest_host.blur(uri)
        generations.forget(uri)
        server.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(uri=uri, diagnostics=[], version=None)
        )
        await debounce_manager.cancel(uri)

    @server.feature(types.SHUTDOWN)
    @wrap_handler(
        logger=logger,
        feature_name="shutdown",
        default_factory=lambda: None,
    )
    async def shutdown(params: None) -> None:
        """Handle shutdown by cancelling pending diagnostics."""
        logger.debug("Shutting down; cancelling pending diagnostics")
        await debounce_manager.cancel_all()

    return server
