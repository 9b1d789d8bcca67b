"""Tests for "Did you mean" name matching."""

from __future__ import annotations

from plugcfg.lsp.diagnostics import codes
from plugcfg.lsp.diagnostics.matching import close_names, with_hint
from plugcfg.lsp.types import Severity

ARGUMENTS = ["SmtpHost", "SmtpPort", "Attachment"]


class TestCloseNames:
    """Tests for close_names."""

    def test_prefix_matches_first(self) -> None:
        """Names starting with the text come before fuzzy matches."""
        assert close_names("smtp", ARGUMENTS) == ["SmtpHost", "SmtpPort"]

    def test_typo(self) -> None:
        """A single-letter typo finds the intended name."""
        assert close_names("Atachment", ARGUMENTS) == ["Attachment"]

    def test_returns_canonical_case(self) -> None:
        """Matching ignores case but returns declared names."""
        assert close_names("ATTACHMEN", ARGUMENTS) == ["Attachment"]

    def test_exact_match_is_not_suggested(self) -> None:
        """The text itself is never a suggestion."""
        assert "SmtpHost" not in close_names("smtphost", ARGUMENTS)

    def test_nothing_close(self) -> None:
        assert close_names("Verbose", ARGUMENTS) == []

    def test_empty_text(self) -> None:
        assert close_names("", ARGUMENTS) == []

    def test_limit(self) -> None:
        """At most limit names are returned."""
        assert close_names("a", ["a1", "a2", "a3", "a4"], limit=2) == ["a1", "a2"]


class TestWithHint:
    """Tests for with_hint."""

    def test_no_suggestions(self) -> None:
        """Without suggestions the message is unchanged."""
        assert with_hint("Unknown argument 'X'.", []) == "Unknown argument 'X'."

    def test_suggestions(self) -> None:
        """Suggestions are appended as a hint."""
        assert (
            with_hint("Unknown argument 'Smtp'.", ["SmtpHost", "SmtpPort"])
            == "Unknown argument 'Smtp'. Did you mean 'SmtpHost', 'SmtpPort'?"
        )


class TestSeverity:
    """Tests for code severities."""

    def test_type_errors_are_errors(self) -> None:
        """Invalid values are errors."""
        assert codes.severity_for(codes.INVALID_INT) == Severity.ERROR
        assert codes.severity_for(codes.INVALID_BOOLEAN) == Severity.ERROR

    def test_other_codes_are_warnings(self) -> None:
        """Unknown and duplicate names are warnings."""
        assert codes.severity_for(codes.UNKNOWN_PLUGIN) == Severity.WARNING
        assert codes.severity_for(codes.DUPLICATE_ARGUMENT) == Severity.WARNING
        assert codes.severity_for("plugcfg/other") == Severity.WARNING
