"""Theme constants and style utilities for TUI components.

Usage:
    from kube_column_browser.tui.theme import Colors, Styles, cell_styles

    DEFAULT_CSS = f'''
    #status-bar {{ color: {Colors.TEXT_MUTED}; }}
    '''

    styled_text = Styles.error("kubectl failed")
    styles = cell_styles(config.theme)
"""

from __future__ import annotations

from rich.markup import escape
from rich.style import Style

from kube_column_browser.browser.render import CellStyles
from kube_column_browser.integrations.kubernetes.config import ThemeConfig


class Colors:
    """Color constants for TUI theming (Textual CSS variables)."""

    ERROR = "$error"
    TEXT_MUTED = "$text-muted"
    SURFACE = "$surface"


class Styles:
    """Style helper functions for Rich markup.

    Text is markup-escaped, so kubectl output containing brackets is shown
    literally.
    """

    @staticmethod
    def error(text: str) -> str:
        """Style text as error (red)."""
        return f"[red]{escape(text)}[/red]"

    @staticmethod
    def muted(text: str) -> str:
        """Style text as muted (dim)."""
        return f"[dim]{escape(text)}[/dim]"

    @staticmethod
    def bold(text: str) -> str:
        """Style text as bold."""
        return f"[bold]{escape(text)}[/bold]"


def cell_styles(theme: ThemeConfig) -> CellStyles:
    """Build the table cell styles from a validated theme config."""
    return CellStyles(
        normal=Style.parse(theme.normal),
        selected_item=Style.parse(theme.selected_item),
        active_column=Style.parse(theme.active_column),
        active_selected=Style.parse(theme.active_selected),
    )
