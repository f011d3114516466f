"""Terminal User Interface for kube-column-browser.

This package provides the Textual application that drives the column
browser: it owns the navigation state, runs kubectl in background workers
and renders the column table.

Usage:
    from kube_column_browser.tui import Colors, Styles
    from kube_column_browser.tui.apps.browser import ColumnBrowserApp
"""

from kube_column_browser.tui.theme import Colors, Styles, cell_styles

__all__ = [
    "Colors",
    "Styles",
    "cell_styles",
]
