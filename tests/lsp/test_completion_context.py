"""Tests for completion context resolution."""

from __future__ import annotations

import pytest

from tests.helpers.cursor import extract_cursor_offset
from plugcfg.lsp.completion_context import (
    ARGUMENT_PREFIX_PATTERN,
    PLUGIN_PREFIX_PATTERN,
    in_argument_value_zone,
    is_inside_value,
    match_before,
    plugin_name_of,
    resolve_context,
)
from plugcfg.lsp.parser import line_tree_at, parse_config_line
from plugcfg.lsp.tree import first_of_kind
from plugcfg.lsp.types import (
    CompletionContext,
    CompletionMode,
    NodeKind,
    ParseNode,
    TextRange,
)


def _context(marked: str) -> tuple[CompletionContext, str]:
    """Resolve the context at the cursor marker of marked text."""
    document, offset = extract_cursor_offset(text_with_cursor=marked)
    return resolve_context(line_tree_at(document, offset), offset, document), document


def _arg(start: int, end: int, name: tuple[int, int], value: tuple[int, int] | None = None) -> ParseNode:
    """Build a Config tree holding one Arg, for shapes the parser never produces."""
    root = ParseNode(NodeKind.CONFIG, 0, end)
    arg = root.add_child(ParseNode(NodeKind.ARG, start, end))
    arg.add_child(ParseNode(NodeKind.ARG_NAME, *name))
    if value is not None:
        arg.add_child(ParseNode(NodeKind.BARE_VALUE, *value))
    return root


class TestPluginNameMode:
    """Cursor on or before the plugin class."""

    def test_empty_line(self) -> None:
        """An empty line asks for a plugin with nothing to replace."""
        ctx, _ = _context("<CURSOR>")
        assert ctx.mode == CompletionMode.PLUGIN_NAME
        assert ctx.replace_range is None
        assert ctx.target is None
        assert ctx.plugin is None

    def test_partial_plugin_name(self) -> None:
        """Dots belong to the plugin prefix."""
        ctx, document = _context("pkg.De<CURSOR>")
        assert ctx.mode == CompletionMode.PLUGIN_NAME
        assert ctx.replace_range == TextRange(0, 6)
        assert ctx.target is not None
        assert ctx.target.kind == NodeKind.PLUGIN_CLASS
        assert document[ctx.replace_range.start : ctx.replace_range.end] == "pkg.De"

    def test_end_of_plugin_name(self) -> None:
        """The cursor at the end of the plugin still edits the plugin."""
        ctx, _ = _context("pkg.Demo<CURSOR> Alpha=1")
        assert ctx.mode == CompletionMode.PLUGIN_NAME
        assert ctx.replace_range == TextRange(0, 8)

    def test_start_of_plugin_name(self) -> None:
        """At the start of the plugin there is no prefix yet."""
        ctx, _ = _context("<CURSOR>pkg.Demo")
        assert ctx.mode == CompletionMode.PLUGIN_NAME
        assert ctx.replace_range is None
        assert ctx.target is not None
        assert ctx.target.kind == NodeKind.PLUGIN_CLASS

    def test_prefix_stops_at_line_start(self) -> None:
        """The prefix never reaches into the previous line."""
        ctx, _ = _context("a.B X=1\npkg.D<CURSOR>")
        assert ctx.mode == CompletionMode.PLUGIN_NAME
        assert ctx.replace_range == TextRange(8, 13)

    def test_line_without_plugin(self) -> None:
        """A line of arguments only still asks for a plugin name."""
        ctx, _ = _context("Alpha=1 <CURSOR>")
        assert ctx.mode == CompletionMode.PLUGIN_NAME
        assert ctx.plugin is None


class TestArgumentNameMode:
    """Cursor after the plugin class."""

    def test_after_plugin_and_space(self) -> None:
        ctx, document = _context("pkg.Demo <CURSOR>")
        assert ctx.mode == CompletionMode.ARGUMENT_NAME
        assert ctx.replace_range is None
        assert ctx.target is None
        assert plugin_name_of(ctx, document) == "pkg.Demo"

    def test_partial_argument_name(self) -> None:
        """The typed part of the name is replaced."""
        ctx, document = _context("pkg.Demo Ga<CURSOR>")
        assert ctx.mode == CompletionMode.ARGUMENT_NAME
        assert ctx.replace_range == TextRange(9, 11)
        assert ctx.target is not None
        assert ctx.target.kind == NodeKind.ARG_NAME
        assert document[ctx.replace_range.start : ctx.replace_range.end] == "Ga"

    def test_after_argument_without_value_and_space(self) -> None:
        """'Alpha= ' leaves the value zone once whitespace follows."""
        ctx, _ = _context("pkg.Demo Alpha= <CURSOR>")
        assert ctx.mode == CompletionMode.ARGUMENT_NAME
        assert ctx.replace_range is None

    def test_after_complete_value_and_space(self) -> None:
        """Whitespace after a value starts a new argument."""
        ctx, _ = _context("pkg.Demo Beta=123 <CURSOR>")
        assert ctx.mode == CompletionMode.ARGUMENT_NAME

    def test_between_arguments(self) -> None:
        """Names can be completed in the middle of a line."""
        ctx, _ = _context("pkg.Demo Alpha=1 Ga<CURSOR> Beta=2")
        assert ctx.mode == CompletionMode.ARGUMENT_NAME
        assert ctx.replace_range == TextRange(17, 19)

    def test_argument_prefix_needs_identifier_start(self) -> None:
        """A leading digit is not a name prefix."""
        ctx, _ = _context("pkg.Demo 9<CURSOR>")
        assert ctx.mode == CompletionMode.ARGUMENT_NAME
        assert ctx.replace_range is None

    def test_plugin_name_of_without_plugin(self) -> None:
        assert plugin_name_of(CompletionContext(mode=CompletionMode.ARGUMENT_NAME), "") is None


class TestSuppressed:
    """Positions where no suggestions are offered."""

    @pytest.mark.parametrize(
        "marked",
        [
            "pkg.Demo Alpha=<CURSOR>",
            "pkg.Demo Alpha=a<CURSOR>",
            "pkg.Demo Beta=1<CURSOR>23",
            "pkg.Demo Beta=123<CURSOR>",
            "pkg.Demo Gamma=tr<CURSOR>ue",
            "pkg.Demo Alpha=a<CURSOR>b",
            'pkg.Demo Alpha="a <CURSOR>b"',
            "pkg.Demo =<CURSOR>",
        ],
    )
    def test_value_positions(self, marked: str) -> None:
        """Cursors in or right after a value offer nothing."""
        ctx, _ = _context(marked)
        assert ctx.mode == CompletionMode.SUPPRESSED
        assert ctx.suppressed
        assert ctx.replace_range is None

    def test_is_inside_value_edges(self) -> None:
        """Value edges are not inside the value."""
        line = "pkg.Demo Beta=123"
        tree = parse_config_line(line)
        assert not is_inside_value(tree, 14)
        assert is_inside_value(tree, 15)
        assert is_inside_value(tree, 16)
        assert not is_inside_value(tree, 17)

    def test_is_inside_boolean_value_edges(self) -> None:
        """A Boolean value is suppressed strictly between its edges."""
        tree = parse_config_line("pkg.Demo Gamma=true")
        boolean = first_of_kind(tree, NodeKind.BOOLEAN)
        assert boolean is not None
        assert (boolean.start, boolean.end) == (15, 19)
        assert not is_inside_value(tree, 15)
        assert all(is_inside_value(tree, offset) for offset in (16, 17, 18))
        assert not is_inside_value(tree, 19)


class TestArgumentValueZone:
    """Tests for in_argument_value_zone, including whitespace inside an Arg."""

    def test_outside_any_argument(self) -> None:
        """Whitespace after the plugin is not a value."""
        line = "pkg.Demo "
        assert not in_argument_value_zone(parse_config_line(line), line, 9)

    def test_argument_without_name(self) -> None:
        """'=x' without a name is still a value."""
        line = "pkg.Demo =x"
        assert in_argument_value_zone(parse_config_line(line), line, 10)

    def test_on_argument_name(self) -> None:
        """The end of a name is not a value."""
        line = "pkg.Demo Alpha"
        assert not in_argument_value_zone(parse_config_line(line), line, 14)

    def test_after_equals(self) -> None:
        """Right after '=' a value is expected."""
        line = "pkg.Demo Alpha="
        assert in_argument_value_zone(parse_config_line(line), line, 15)

    def test_trailing_whitespace_without_value(self) -> None:
        """Whitespace inside an argument with no value leaves the zone."""
        document = "pkg.Demo Alpha  "
        tree = _arg(9, 16, name=(9, 14))
        assert not in_argument_value_zone(tree, document, 16)

    def test_trailing_equals_and_whitespace_without_value(self) -> None:
        document = "pkg.Demo Alpha= "
        tree = _arg(9, 16, name=(9, 14))
        assert not in_argument_value_zone(tree, document, 16)

    def test_whitespace_after_complete_value(self) -> None:
        """Whitespace after a finished value leaves the zone."""
        document = "pkg.Demo Alpha=12  "
        tree = _arg(9, 19, name=(9, 14), value=(15, 17))
        assert not in_argument_value_zone(tree, document, 19)

    def test_text_after_value_within_argument(self) -> None:
        """Text after the whitespace stays in the zone."""
        document = "pkg.Demo Alpha=12  x"
        tree = _arg(9, 20, name=(9, 14), value=(15, 17))
        assert in_argument_value_zone(tree, document, 20)


class TestMatchBefore:
    """Tests for prefix matching before the cursor."""

    def test_plugin_pattern(self) -> None:
        assert match_before("x com.ex", 8, PLUGIN_PREFIX_PATTERN) == TextRange(2, 8)

    def test_argument_pattern_excludes_dots(self) -> None:
        """Argument prefixes stop at a dot."""
        assert match_before("a.Smtp", 6, ARGUMENT_PREFIX_PATTERN) == TextRange(2, 6)

    def test_empty_match_is_none(self) -> None:
        """An empty prefix gives no range."""
        assert match_before("pkg.Demo ", 9, PLUGIN_PREFIX_PATTERN) is None

    def test_ignores_text_after_offset(self) -> None:
        """Only text before the cursor is matched."""
        assert match_before("Alpha=1", 3, ARGUMENT_PREFIX_PATTERN) == TextRange(0, 3)
