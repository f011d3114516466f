"""Custom widgets for the column browser TUI."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.text import Text
from textual.widget import Widget

from kube_column_browser.browser.render import CellStyles, render_table

if TYPE_CHECKING:
    from rich.console import RenderableType

    from kube_column_browser.browser.state import NavigationState

LOADING_MESSAGE = "Querying namespaces..."


class ColumnTable(Widget):
    """Widget rendering the navigation state as a multi-column table.

    Re-renders from the shared state on every refresh, sized to the
    widget's own region. Shows a loading message until the first column
    has been loaded.
    """

    DEFAULT_CSS = """
    ColumnTable {
        width: 1fr;
        height: 1fr;
    }
    """

    def __init__(
        self,
        state: NavigationState,
        styles: CellStyles | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the column table.

        Args:
            state: Navigation state to render. Owned by the app.
            styles: Cell styles for the table.
            **kwargs: Additional widget arguments.
        """
        super().__init__(**kwargs)
        self._state = state
        self._styles = styles or CellStyles()

    def lines(self) -> list[Text]:
        """Render the table lines for the current widget size."""
        return render_table(self._state, self.size.height, self.size.width, self._styles)

    def render(self) -> RenderableType:
        """Render the table, or the loading message before any data arrives."""
        lines = self.lines()
        if not lines:
            return Text(LOADING_MESSAGE, style="dim")
        return Text("\n", no_wrap=True, overflow="crop").join(lines)
