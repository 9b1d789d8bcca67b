"""Diagnostics for plugin configuration lines."""

from plugcfg.lsp.diagnostics.debounce import DebounceManager
from plugcfg.lsp.diagnostics.diagnostic_issue import DiagnosticIssue
from plugcfg.lsp.diagnostics.validator import validate_document, validate_line

__all__ = [
    "DebounceManager",
    "DiagnosticIssue",
    "validate_document",
    "validate_line",
]
