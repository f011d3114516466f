"""Main Textual application for column-based Kubernetes browsing.

The app is the driver of the browser core: it maps key presses to
navigation operations, issues kubectl requests for columns that need a
refresh, feeds finished results into the result pipeline and re-renders
the column table.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Label

from kube_column_browser.browser.pipeline import apply_result
from kube_column_browser.browser.state import (
    COLUMN_ORDER,
    ColumnKind,
    Direction,
    NavigationState,
)
from kube_column_browser.integrations.kubernetes.exceptions import KubernetesError
from kube_column_browser.logging import get_logger
from kube_column_browser.tui.apps.browser.widgets import ColumnTable
from kube_column_browser.tui.theme import Colors, Styles, cell_styles

if TYPE_CHECKING:
    from kube_column_browser.browser.commands import CommandRequest, CommandResult
    from kube_column_browser.browser.render import CellStyles
    from kube_column_browser.integrations.kubernetes.kubectl_client import KubectlClient

logger = get_logger(__name__)

# A request is identified by the column it populates and that column's generation
RequestKey = tuple[ColumnKind, int]


class ColumnBrowserApp(App[None]):
    """TUI application browsing namespaces, resource types, resources and details.

    Args:
        client: kubectl client used to run column queries.
        styles: Cell styles; defaults to the client's configured theme.
    """

    TITLE = "Kubernetes Column Browser"

    DEFAULT_CSS = f"""
    #status-bar {{
        height: 1;
        padding: 0 1;
        background: {Colors.SURFACE};
        color: {Colors.TEXT_MUTED};
    }}

    #status-bar.error {{
        color: {Colors.ERROR};
    }}
    """

    BINDINGS = [
        Binding("left", "cursor_left", "Left", show=False),
        Binding("right", "cursor_right", "Right", show=False),
        Binding("up", "select_up", "Up", show=False),
        Binding("down", "select_down", "Down", show=False),
        Binding("enter", "details", "Details", show=True),
        Binding("r", "reload", "Reload", show=True),
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(self, client: KubectlClient, styles: CellStyles | None = None) -> None:
        """Initialize the column browser app.

        Args:
            client: kubectl client for cluster queries.
            styles: Optional cell styles overriding the configured theme.
        """
        super().__init__()
        self._client = client
        self._styles = styles or cell_styles(client.config.theme)
        self.state = NavigationState()
        self.last_error: KubernetesError | None = None
        self._in_flight: set[RequestKey] = set()
        self._failed: set[RequestKey] = set()

    def compose(self) -> ComposeResult:
        """Compose the app layout."""
        yield Header()
        yield ColumnTable(self.state, self._styles, id="column-table")
        yield Label("", id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Issue the initial namespace query."""
        self._dispatch_refreshes()
        self._update_view()

    # =========================================================================
    # Actions
    # =========================================================================

    def action_cursor_left(self) -> None:
        """Move the column cursor left."""
        self.state.move_cursor(Direction.LEFT)
        self._after_input()

    def action_cursor_right(self) -> None:
        """Move the column cursor right."""
        self.state.move_cursor(Direction.RIGHT)
        self._after_input()

    def action_select_up(self) -> None:
        """Select the previous item in the cursor's column."""
        self.state.select_adjacent(Direction.UP)
        self._after_input()

    def action_select_down(self) -> None:
        """Select the next item in the cursor's column."""
        self.state.select_adjacent(Direction.DOWN)
        self._after_input()

    def action_details(self) -> None:
        """Load details for the selected resource."""
        self._forget_failures(ColumnKind.RESOURCE_DETAIL)
        self.state.request_details()
        self._after_input()

    def action_reload(self) -> None:
        """Reload the column under the cursor."""
        kind = self.state.cursor
        self._forget_failures(kind)
        self.state.reload(kind)
        self._after_input()

    # =========================================================================
    # Command handling
    # =========================================================================

    def _after_input(self) -> None:
        self._dispatch_refreshes()
        self._update_view()

    def _forget_failures(self, kind: ColumnKind) -> None:
        """Allow a failed query for ``kind`` to be issued again."""
        self._failed = {key for key in self._failed if key[0] != kind}

    def _dispatch_refreshes(self) -> None:
        """Issue one request per pending column not already in flight.

        A request that failed is not retried until the user asks for it
        again, so an unreachable cluster does not spin in a retry loop.
        """
        pending = self.state.pending_refreshes()
        for kind in COLUMN_ORDER:
            if kind not in pending:
                continue
            key = (kind, self.state.column(kind).generation)
            if key in self._in_flight or key in self._failed:
                continue
            request = self._client.build_request(self.state, kind)
            if request is None:
                continue
            self._in_flight.add(key)
            logger.debug("command_issued", tag=request.tag.value, generation=request.generation)
            self._run_command(request)

    @work(thread=True)
    def _run_command(self, request: CommandRequest) -> None:
        """Run a kubectl request in a background thread."""
        result = self._client.run(request)
        self.call_from_thread(self.handle_result, request, result)

    def handle_result(self, request: CommandRequest, result: CommandResult) -> None:
        """Feed a finished command into the pipeline and refresh the view.

        Args:
            request: The request the result belongs to.
            result: Raw command result.
        """
        key = (request.kind, request.generation)
        self._in_flight.discard(key)
        try:
            changed = apply_result(self.state, result)
        except KubernetesError as e:
            logger.warning("command_failed", tag=request.tag.value, error=str(e))
            self._failed.add(key)
            self.last_error = e
            self.notify(escape(str(e)), title="kubectl failed", severity="error")
        else:
            if changed:
                self.last_error = None
        self._dispatch_refreshes()
        self._update_view()

    # =========================================================================
    # View
    # =========================================================================

    @property
    def pending_requests(self) -> int:
        """Number of kubectl requests still running."""
        return len(self._in_flight)

    def status_text(self) -> str:
        """Status line markup: last error, or the current selection path."""
        if self.last_error is not None:
            return Styles.error(f"Error: {self.last_error}")

        parts = []
        for kind in COLUMN_ORDER[:-1]:
            value = self.state.selected_value(kind)
            if value is None:
                break
            parts.append(Styles.bold(value) if kind == self.state.cursor else escape(value))
        status = " / ".join(parts)
        if self.pending_requests:
            status = f"{status} {Styles.muted('loading...')}".strip()
        return status

    def _update_view(self) -> None:
        status_bar = self.query_one("#status-bar", Label)
        status_bar.update(self.status_text())
        status_bar.set_class(self.last_error is not None, "error")
        self.query_one("#column-table", ColumnTable).refresh()
