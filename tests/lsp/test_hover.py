"""Tests for hover help."""

from __future__ import annotations

import pytest

from tests.helpers.cursor import extract_cursor_offset
from tests.helpers.plugins import MAIL_PLUGIN
from plugcfg.lsp.hover import get_hover_help
from plugcfg.lsp.parser import line_tree_at
from plugcfg.registry.types import PluginResolver


async def _hover(marked: str, resolver: PluginResolver) -> str | None:
    document, offset = extract_cursor_offset(text_with_cursor=marked)
    return await get_hover_help(line_tree_at(document, offset), document, offset, resolver)


class TestGetHoverHelp:
    """Tests for get_hover_help."""

    @pytest.mark.asyncio
    async def test_plugin_help(self, resolver: PluginResolver) -> None:
        """Hovering the plugin shows its description and arguments."""
        help_text = await _hover("pkg.De<CURSOR>mo Alpha=1", resolver)
        assert help_text == (
            "**pkg.Demo**\n"
            "\n"
            "Demo plugin for completion tests\n"
            "\n"
            "Arguments: `Alpha`, `Beta`, `Gamma`"
        )

    @pytest.mark.asyncio
    async def test_argument_help(self, resolver: PluginResolver) -> None:
        """Hovering an argument name shows its type and description."""
        help_text = await _hover(f"{MAIL_PLUGIN} Smtp<CURSOR>Port=25", resolver)
        assert help_text == "**SmtpPort**: `int`\n\nSMTP port"

    @pytest.mark.asyncio
    async def test_argument_help_ignores_case(self, resolver: PluginResolver) -> None:
        """Argument names are matched regardless of case."""
        help_text = await _hover("pkg.Demo be<CURSOR>ta=1", resolver)
        assert help_text == "**Beta**: `int`"

    @pytest.mark.asyncio
    async def test_multivalued_argument(self, resolver: PluginResolver) -> None:
        help_text = await _hover(f"{MAIL_PLUGIN} Attachment<CURSOR>=a", resolver)
        assert help_text == "**Attachment**: `string` (may be repeated)"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "marked",
        [
            "<CURSOR>",
            "pkg.Demo <CURSOR> ",
            "pkg.Demo Beta=1<CURSOR>2",
            "pkg.Demo Nope<CURSOR>=1",
            "pkg.Missing<CURSOR> Alpha=1",
            "Alpha<CURSOR>=1",
        ],
    )
    async def test_no_help(self, marked: str, resolver: PluginResolver) -> None:
        """Whitespace and unknown names have no help."""
        assert await _hover(marked, resolver) is None
