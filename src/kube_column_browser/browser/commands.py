"""Command request and result types exchanged with the kubectl client.

A request carries the tag of the column it populates and the generation of
that column at the time it was issued; the result echoes both back.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from kube_column_browser.browser.state import ColumnKind


class CommandTag(Enum):
    """Correlates an outstanding command with the column it will populate."""

    QUERY_NAMESPACES = "query-namespaces"
    QUERY_RESOURCE_TYPES = "query-resource-types"
    QUERY_RESOURCES = "query-resources"
    QUERY_RESOURCE_DETAILS = "query-resource-details"

    @classmethod
    def parse(cls, value: str) -> CommandTag | None:
        """Return the tag for ``value``, or None for a foreign tag."""
        try:
            return cls(value)
        except ValueError:
            return None


class SplitMode(Enum):
    """How command output is tokenized."""

    WHITESPACE = "whitespace"
    LINES = "lines"


TAG_FOR_COLUMN: dict[ColumnKind, CommandTag] = {
    ColumnKind.NAMESPACE: CommandTag.QUERY_NAMESPACES,
    ColumnKind.RESOURCE_TYPE: CommandTag.QUERY_RESOURCE_TYPES,
    ColumnKind.RESOURCE: CommandTag.QUERY_RESOURCES,
    ColumnKind.RESOURCE_DETAIL: CommandTag.QUERY_RESOURCE_DETAILS,
}

COLUMN_FOR_TAG: dict[CommandTag, ColumnKind] = {tag: kind for kind, tag in TAG_FOR_COLUMN.items()}

# Listing queries print one space-joined line of names (jsonpath output);
# the details query prints YAML.
SPLIT_MODES: dict[CommandTag, SplitMode] = {
    CommandTag.QUERY_NAMESPACES: SplitMode.WHITESPACE,
    CommandTag.QUERY_RESOURCE_TYPES: SplitMode.WHITESPACE,
    CommandTag.QUERY_RESOURCES: SplitMode.WHITESPACE,
    CommandTag.QUERY_RESOURCE_DETAILS: SplitMode.LINES,
}


@dataclass(frozen=True)
class CommandRequest:
    """A request to run kubectl with ``args`` for the column behind ``tag``."""

    tag: CommandTag
    args: tuple[str, ...]
    generation: int

    @property
    def kind(self) -> ColumnKind:
        """Column this request populates."""
        return COLUMN_FOR_TAG[self.tag]


@dataclass(frozen=True)
class CommandResult:
    """Raw outcome of a finished command.

    Attributes:
        tag: Opaque tag string; unknown values are dropped by the pipeline.
        exit_code: Process exit code, None when the runner did not report one.
        stdout: Captured standard output bytes.
        stderr: Captured standard error bytes.
        generation: Column generation the request was issued for, or None to
            apply the result regardless of intervening selection changes.
    """

    tag: str
    exit_code: int | None
    stdout: bytes
    stderr: bytes
    generation: int | None = None
