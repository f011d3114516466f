"""Unit tests for TUI theme module.

Tests the Colors constants, the Styles markup helpers and the mapping from
the theme configuration to table cell styles.
"""

from __future__ import annotations

import pytest
from rich.style import Style
from rich.text import Text

from kube_column_browser.browser.render import CellStyles
from kube_column_browser.integrations.kubernetes.config import ThemeConfig
from kube_column_browser.tui.theme import Colors, Styles, cell_styles


class TestColors:
    """Tests for Colors class constants."""

    @pytest.mark.unit
    def test_error_color(self) -> None:
        """ERROR color is defined."""
        assert Colors.ERROR == "$error"

    @pytest.mark.unit
    def test_text_muted_color(self) -> None:
        """TEXT_MUTED color is defined."""
        assert Colors.TEXT_MUTED == "$text-muted"

    @pytest.mark.unit
    def test_surface_color(self) -> None:
        """SURFACE color is defined."""
        assert Colors.SURFACE == "$surface"


class TestStyles:
    """Tests for Styles helper methods."""

    @pytest.mark.unit
    def test_error_style(self) -> None:
        """error() wraps text in red markup."""
        assert Styles.error("boom") == "[red]boom[/red]"

    @pytest.mark.unit
    def test_muted_style(self) -> None:
        """muted() wraps text in dim markup."""
        assert Styles.muted("loading...") == "[dim]loading...[/dim]"

    @pytest.mark.unit
    def test_bold_style(self) -> None:
        """bold() wraps text in bold markup."""
        assert Styles.bold("default") == "[bold]default[/bold]"

    @pytest.mark.unit
    def test_brackets_are_escaped(self) -> None:
        """Text that looks like markup is shown literally."""
        markup = Styles.error("Error from server [Forbidden]")
        assert Text.from_markup(markup).plain == "Error from server [Forbidden]"


class TestCellStyles:
    """Tests for cell_styles."""

    @pytest.mark.unit
    def test_default_theme_matches_render_defaults(self) -> None:
        """The default theme produces the renderer's default styles."""
        assert cell_styles(ThemeConfig()) == CellStyles()

    @pytest.mark.unit
    def test_custom_theme(self) -> None:
        """Each theme entry is parsed into its cell style."""
        theme = ThemeConfig(
            normal="dim",
            selected_item="underline",
            active_column="on blue",
            active_selected="reverse",
        )

        styles = cell_styles(theme)

        assert styles.normal == Style(dim=True)
        assert styles.selected_item == Style(underline=True)
        assert styles.active_column == Style.parse("on blue")
        assert styles.active_selected == Style(reverse=True)

    @pytest.mark.unit
    def test_none_is_null_style(self) -> None:
        """The 'none' style yields an empty style that adds no spans."""
        assert not cell_styles(ThemeConfig()).normal
