"""Core of the column browser: navigation state, result pipeline and renderer.

Usage:
    from kube_column_browser.browser import NavigationState, apply_result, render_table
"""

from kube_column_browser.browser.commands import CommandRequest, CommandResult, CommandTag
from kube_column_browser.browser.pipeline import apply_result
from kube_column_browser.browser.render import CellStyles, render_table
from kube_column_browser.browser.state import (
    COLUMN_ORDER,
    Column,
    ColumnKind,
    Direction,
    NavigationState,
)

__all__ = [
    "COLUMN_ORDER",
    "CellStyles",
    "Column",
    "ColumnKind",
    "CommandRequest",
    "CommandResult",
    "CommandTag",
    "Direction",
    "NavigationState",
    "apply_result",
    "render_table",
]
