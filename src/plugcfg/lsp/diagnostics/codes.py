"""Diagnostic code constants and severity mappings."""

from plugcfg.lsp.types import Severity

UNKNOWN_PLUGIN = "plugcfg/unknown-plugin"
UNKNOWN_ARGUMENT = "plugcfg/unknown-argument"
DUPLICATE_ARGUMENT = "plugcfg/duplicate-argument"
INVALID_INT = "plugcfg/invalid-int"
INVALID_BOOLEAN = "plugcfg/invalid-boolean"

DIAGNOSTIC_SEVERITY: dict[str, Severity] = {
    INVALID_INT: Severity.ERROR,
    INVALID_BOOLEAN: Severity.ERROR,
}

DEFAULT_SEVERITY: Severity = Severity.WARNING


def severity_for(code: str) -> Severity:
    return DIAGNOSTIC_SEVERITY.get(code, DEFAULT_SEVERITY)
