"""Table layout for the column browser.

Projects a NavigationState snapshot onto a fixed viewport as a list of
styled Rich ``Text`` lines: one vertical list per loaded column, each with
its own scroll window, joined left to right into rectangular rows.

Usage:
    from kube_column_browser.browser.render import CellStyles, render_table

    lines = render_table(state, rows=24, cols=80, styles=CellStyles())
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.cells import cell_len, set_cell_size
from rich.style import Style
from rich.text import Text

from kube_column_browser.browser.state import Column, NavigationState

# Rows reserved outside the item window: the header and one spare row
RESERVED_ROWS = 2

# Blank cells on each side of a column's content
CELL_PADDING = 1


@dataclass(frozen=True)
class CellStyles:
    """The four mutually exclusive cell styles.

    Attributes:
        normal: Cell outside the cursor column, not selected.
        selected_item: Selected cell outside the cursor column.
        active_column: Unselected cell in the cursor column.
        active_selected: Selected cell in the cursor column.
    """

    normal: Style = field(default_factory=Style.null)
    selected_item: Style = field(default_factory=lambda: Style.parse("bold on color(243)"))
    active_column: Style = field(default_factory=lambda: Style.parse("bold on color(233)"))
    active_selected: Style = field(default_factory=lambda: Style.parse("bold on color(243)"))

    def pick(self, active: bool, selected: bool) -> Style:
        """Return the style for a cell in the given state."""
        if active and selected:
            return self.active_selected
        if active:
            return self.active_column
        if selected:
            return self.selected_item
        return self.normal


@dataclass
class _ColumnView:
    """Visible slice of a column prepared for row assembly."""

    header: str
    items: list[str]
    selected: int | None
    active: bool
    width: int = 0


def scroll_offset(selected: int, count: int, rows: int) -> int:
    """Return the index of the first visible item.

    When the list does not fit in ``rows - 2`` body rows, the window is
    centered on the selection and clamped to the end of the list. In very
    short viewports centering would leave the selection past the window,
    so the window is moved forward until the selection is its last row.
    """
    body = max(rows - RESERVED_ROWS, 0)
    if count <= body:
        return 0
    offset = min(max(selected - rows // 2, 0), count - body)
    if body > 0:
        offset = max(offset, selected - body + 1)
    return offset


def _clamp_selection(column: Column) -> int | None:
    if not column.items or column.selected is None:
        return None
    return min(max(column.selected, 0), len(column.items) - 1)


def _visible_column(column: Column, rows: int, active: bool) -> _ColumnView:
    items = column.items or []
    selected = _clamp_selection(column)
    body = max(rows - RESERVED_ROWS, 0)

    offset = scroll_offset(selected or 0, len(items), rows)
    window = items[offset : offset + body]
    window_selected = None
    if selected is not None and offset <= selected < offset + len(window):
        window_selected = selected - offset

    view = _ColumnView(
        header=column.kind.label,
        items=window,
        selected=window_selected,
        active=active,
    )
    view.width = max(cell_len(text) for text in [view.header, *window]) + 2 * CELL_PADDING
    return view


def _append_cell(line: Text, content: str, width: int, style: Style) -> None:
    """Append one padded cell as a single styled span.

    The span ends exactly at the cell boundary, so the style never runs
    into the next cell.
    """
    if width <= 0:
        return
    cell = set_cell_size(" " * CELL_PADDING + content, width)
    line.append(cell, style=style)


def render_table(
    state: NavigationState,
    rows: int,
    cols: int,
    styles: CellStyles | None = None,
) -> list[Text]:
    """Render the loaded columns of ``state`` into at most ``rows`` lines.

    Args:
        state: Navigation state snapshot. It is never modified.
        rows: Viewport height in terminal rows.
        cols: Viewport width in terminal cells.
        styles: Cell styles; defaults to ``CellStyles()``.

    Returns:
        Styled lines, none wider than ``cols``. Empty when no column has
        been loaded yet.
    """
    if rows <= 0 or cols <= 0:
        return []

    styles = styles or CellStyles()
    views = [
        _visible_column(column, rows, active=column.kind == state.cursor)
        for column in state.columns
        if column.loaded
    ]
    if not views:
        return []

    # Rightmost column absorbs the remaining width instead of its own
    used = sum(view.width for view in views[:-1])
    views[-1].width = max(cols - used, 0)

    height = max(len(view.items) for view in views) + 1
    lines = [Text() for _ in range(height)]

    for view in views:
        _append_cell(lines[0], view.header, view.width, styles.pick(view.active, False))
        for index, item in enumerate(view.items):
            style = styles.pick(view.active, index == view.selected)
            _append_cell(lines[index + 1], item, view.width, style)
        for line in lines[len(view.items) + 1 :]:
            line.append(" " * view.width)

    for line in lines:
        if line.cell_len > cols:
            line.truncate(cols, overflow="crop")
    return lines[:rows]
