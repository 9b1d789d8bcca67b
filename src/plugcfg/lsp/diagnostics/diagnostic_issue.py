"""Diagnostic issue type for configuration line validation."""

from __future__ import annotations

from typing import NamedTuple

from plugcfg.lsp.types import Severity, TextRange


class DiagnosticIssue(NamedTuple):
    """A diagnostic issue on a configuration line."""

    message: str
    start: int  # Start offset in the document
    end: int  # End offset in the document (exclusive)
    code: str  # Diagnostic code (e.g., "plugcfg/unknown-argument")
    severity: Severity

    @property
    def range(self) -> TextRange:
        return TextRange(self.start, self.end)
