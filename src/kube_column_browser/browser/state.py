"""Navigation state for the column browser.

Holds the four drill-down columns (namespaces, resource types, resources and
resource details), the column cursor and the per-column refresh flags. All
operations are total: invalid preconditions degrade to no-ops.

Usage:
    from kube_column_browser.browser.state import ColumnKind, Direction, NavigationState

    state = NavigationState()
    state.commit(ColumnKind.NAMESPACE, ["default", "kube-system"])
    state.select_adjacent(Direction.DOWN)
    state.pending_refreshes()  # {ColumnKind.RESOURCE_TYPE}
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ColumnKind(Enum):
    """The four levels of the drill-down chain."""

    NAMESPACE = "Namespaces"
    RESOURCE_TYPE = "Resource Types"
    RESOURCE = "Resources"
    RESOURCE_DETAIL = "Details"

    @property
    def label(self) -> str:
        """Header label shown above the column."""
        return self.value


# Drill-down order; "next" and "previous" are index lookups in this list
COLUMN_ORDER = list(ColumnKind)


class Direction(Enum):
    """Navigation directions for cursor and selection moves."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


def next_kind(kind: ColumnKind) -> ColumnKind | None:
    """Return the column downstream of ``kind``, or None for the last one."""
    index = COLUMN_ORDER.index(kind)
    if index + 1 < len(COLUMN_ORDER):
        return COLUMN_ORDER[index + 1]
    return None


@dataclass
class Column:
    """A single column of the browser.

    Attributes:
        kind: Which level of the chain this column holds.
        items: Loaded item strings, or None when not yet loaded.
        selected: Index of the selected item, None when nothing is selected.
        needs_refresh: Whether a command should be issued to (re)load items.
        generation: Bumped on every invalidation; results requested for an
            older generation are stale.
    """

    kind: ColumnKind
    items: list[str] | None = None
    selected: int | None = None
    needs_refresh: bool = False
    generation: int = 0

    @property
    def loaded(self) -> bool:
        """Whether the column holds a result (possibly empty)."""
        return self.items is not None

    @property
    def selected_value(self) -> str | None:
        """Text of the selected item, if any."""
        if not self.items or self.selected is None:
            return None
        if 0 <= self.selected < len(self.items):
            return self.items[self.selected]
        return None

    def clear(self) -> None:
        """Drop items and selection, marking the contents stale."""
        self.items = None
        self.selected = None
        self.needs_refresh = False
        self.generation += 1


class NavigationState:
    """Single source of truth for the columns, cursor and refresh flags.

    The namespace column starts flagged for refresh so the first render pass
    issues the namespace query.
    """

    def __init__(self) -> None:
        self._columns = {kind: Column(kind) for kind in COLUMN_ORDER}
        self._columns[ColumnKind.NAMESPACE].needs_refresh = True
        self.cursor = ColumnKind.NAMESPACE

    def column(self, kind: ColumnKind) -> Column:
        """Return the column for ``kind``."""
        return self._columns[kind]

    @property
    def columns(self) -> list[Column]:
        """All columns in drill-down order."""
        return [self._columns[kind] for kind in COLUMN_ORDER]

    @property
    def has_data(self) -> bool:
        """Whether any column has been loaded."""
        return any(column.loaded for column in self._columns.values())

    def move_cursor(self, direction: Direction) -> None:
        """Move the cursor one column left or right, clamped at both ends."""
        index = COLUMN_ORDER.index(self.cursor)
        if direction == Direction.LEFT:
            index = max(index - 1, 0)
        elif direction == Direction.RIGHT:
            index = min(index + 1, len(COLUMN_ORDER) - 1)
        self.cursor = COLUMN_ORDER[index]

    def select_adjacent(self, direction: Direction) -> None:
        """Move the selection of the cursor's column up or down with wraparound.

        Selecting in any column but the details invalidates the next column.
        Empty or unloaded columns are left alone.
        """
        column = self._columns[self.cursor]
        if not column.items:
            return

        count = len(column.items)
        current = column.selected if column.selected is not None else 0
        current = min(max(current, 0), count - 1)
        if direction == Direction.UP:
            column.selected = (current - 1) % count
        elif direction == Direction.DOWN:
            column.selected = (current + 1) % count
        else:
            return

        downstream = next_kind(column.kind)
        if downstream is not None:
            self._invalidate(downstream)

    def request_details(self) -> None:
        """Load details for the selected resource and move the cursor onto them.

        Only acts when the cursor is on the resource column and every
        upstream column has a selection.
        """
        if self.cursor != ColumnKind.RESOURCE:
            return
        upstream = (ColumnKind.NAMESPACE, ColumnKind.RESOURCE_TYPE, ColumnKind.RESOURCE)
        if any(self.selected_value(kind) is None for kind in upstream):
            return

        self._columns[ColumnKind.RESOURCE_DETAIL].needs_refresh = True
        self.cursor = ColumnKind.RESOURCE_DETAIL

    def selected_value(self, kind: ColumnKind) -> str | None:
        """Return the selected item text of a column."""
        return self._columns[kind].selected_value

    def pending_refreshes(self) -> set[ColumnKind]:
        """Return the columns that need a command issued."""
        return {kind for kind, column in self._columns.items() if column.needs_refresh}

    def reload(self, kind: ColumnKind) -> None:
        """Flag a column for refresh without clearing what it shows.

        The first column can always be reloaded; the others only once their
        upstream column has a selection to query with.
        """
        index = COLUMN_ORDER.index(kind)
        if index > 0 and self.selected_value(COLUMN_ORDER[index - 1]) is None:
            return
        self._columns[kind].needs_refresh = True

    def is_current(self, kind: ColumnKind, generation: int) -> bool:
        """Whether ``generation`` is still the column's current generation."""
        return self._columns[kind].generation == generation

    def commit(self, kind: ColumnKind, items: list[str]) -> None:
        """Store a loaded list into a column.

        Selects the first item, clears the column's refresh flag and, when
        there is something selected, invalidates the next column so it is
        loaded for the new selection.
        """
        column = self._columns[kind]
        column.items = list(items)
        column.selected = 0 if items else None
        column.needs_refresh = False

        downstream = next_kind(kind)
        if downstream is None:
            return
        if items:
            self._invalidate(downstream)
        else:
            self._clear_from(downstream)

    def _invalidate(self, kind: ColumnKind) -> None:
        """Clear ``kind`` and everything below it, then flag ``kind``."""
        self._clear_from(kind)
        self._columns[kind].needs_refresh = True

    def _clear_from(self, kind: ColumnKind) -> None:
        for downstream in COLUMN_ORDER[COLUMN_ORDER.index(kind) :]:
            self._columns[downstream].clear()
