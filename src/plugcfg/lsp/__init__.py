"""Language features for plugin configuration lines."""

from plugcfg.lsp.completion_context import resolve_context
from plugcfg.lsp.completions import CompletionItem, build_suggestions
from plugcfg.lsp.parser import parse_config_line
from plugcfg.lsp.types import (
    CompletionContext,
    CompletionMode,
    NodeKind,
    ParseNode,
    TextRange,
)

__all__ = [
    "CompletionContext",
    "CompletionItem",
    "CompletionMode",
    "NodeKind",
    "ParseNode",
    "TextRange",
    "build_suggestions",
    "parse_config_line",
    "resolve_context",
]
