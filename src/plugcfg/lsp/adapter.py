"""Conversion between internal types and LSP protocol types."""

from __future__ import annotations

from lsprotocol import types
from pygls.workspace import TextDocument

from plugcfg.lsp.completions import CompletionItem as InternalCompletionItem
from plugcfg.lsp.diagnostics.diagnostic_issue import DiagnosticIssue
from plugcfg.lsp.types import CompletionKind, Severity, TextRange

__all__ = [
    "TRIGGER_SUGGEST_COMMAND",
    "completion_kind_to_lsp",
    "offset_to_position",
    "position_to_offset",
    "severity_to_lsp",
    "to_lsp_completion_item",
    "to_lsp_diagnostic",
]

_COMPLETION_KIND_TO_LSP: dict[CompletionKind, types.CompletionItemKind] = {
    CompletionKind.PLUGIN: types.CompletionItemKind.Class,
    CompletionKind.ARGUMENT: types.CompletionItemKind.Property,
}

_SEVERITY_TO_LSP: dict[Severity, types.DiagnosticSeverity] = {
    Severity.WARNING: types.DiagnosticSeverity.Warning,
    Severity.ERROR: types.DiagnosticSeverity.Error,
}

# Reopens the client's suggestion widget once an item was inserted
TRIGGER_SUGGEST_COMMAND = types.Command(
    title="Trigger Suggest", command="editor.action.triggerSuggest"
)


def position_to_offset(document: TextDocument, position: types.Position) -> int:
    """
    Convert LSP Position (line, character) to document offset.

    Lines past the end clamp to the document end, characters past the end
    of a line clamp to the line end.
    """
    lines = document.lines
    offset = 0

    for i in range(min(position.line, len(lines))):
        offset += len(lines[i])

    if position.line < len(lines):
        line = lines[position.line].rstrip("\r\n")
        offset += min(position.character, len(line))

    return offset


def offset_to_position(document: TextDocument, offset: int) -> types.Position:
    """Convert a document offset to an LSP Position, clamped to the document."""
    remaining = max(offset, 0)
    lines = document.lines

    for line_number, line in enumerate(lines):
        content_length = len(line.rstrip("\r\n"))
        if remaining <= content_length:
            return types.Position(line=line_number, character=remaining)
        if remaining < len(line):
            # Inside the line terminator
            return types.Position(line=line_number, character=content_length)
        remaining -= len(line)

    if not lines:
        return types.Position(line=0, character=0)
    last = lines[-1]
    if last.endswith(("\n", "\r")):
        return types.Position(line=len(lines), character=0)
    return types.Position(line=len(lines) - 1, character=len(last))


def completion_kind_to_lsp(kind: CompletionKind) -> types.CompletionItemKind:
    return _COMPLETION_KIND_TO_LSP.get(kind, types.CompletionItemKind.Text)


def severity_to_lsp(severity: Severity) -> types.DiagnosticSeverity:
    return _SEVERITY_TO_LSP.get(severity, types.DiagnosticSeverity.Warning)


def to_lsp_completion_item(
    item: InternalCompletionItem,
    document: TextDocument,
    cursor: int,
    replace_range: TextRange | None,
    sort_index: int = 0,
) -> types.CompletionItem:
    """
    Convert internal CompletionItem to LSP CompletionItem.

    The text edit overwrites replace_range, or inserts at the cursor when
    there is nothing to replace. sort_index keeps the server's ordering.
    """
    start = replace_range.start if replace_range is not None else cursor
    edit_range = types.Range(
        start=offset_to_position(document, start),
        end=offset_to_position(document, cursor),
    )

    documentation = None
    if item.documentation:
        documentation = types.MarkupContent(
            kind=types.MarkupKind.Markdown, value=item.documentation
        )

    return types.CompletionItem(
        label=item.label,
        kind=completion_kind_to_lsp(item.kind),
        detail=item.detail,
        documentation=documentation,
        sort_text=f"{sort_index:04d}",
        filter_text=item.label,
        text_edit=types.TextEdit(range=edit_range, new_text=item.insert_text),
        command=TRIGGER_SUGGEST_COMMAND if item.kind == CompletionKind.PLUGIN else None,
    )


def to_lsp_diagnostic(issue: DiagnosticIssue, document: TextDocument) -> types.Diagnostic:
    return types.Diagnostic(
        range=types.Range(
            start=offset_to_position(document, issue.start),
            end=offset_to_position(document, issue.end),
        ),
        message=issue.message,
        severity=severity_to_lsp(issue.severity),
        source="plugcfg",
        code=issue.code,
    )
