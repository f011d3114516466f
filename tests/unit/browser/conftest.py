"""Fixtures for browser core tests."""

from __future__ import annotations

import pytest

from kube_column_browser.browser.state import ColumnKind, NavigationState


@pytest.fixture
def empty_state() -> NavigationState:
    """Freshly created navigation state."""
    return NavigationState()


@pytest.fixture
def loaded_state() -> NavigationState:
    """State with namespaces, resource types and resources loaded.

    Selections: ns-a / Pod / web-0, cursor on the namespace column.
    """
    state = NavigationState()
    state.commit(ColumnKind.NAMESPACE, ["ns-a", "ns-b", "ns-c"])
    state.commit(ColumnKind.RESOURCE_TYPE, ["Pod", "Service"])
    state.commit(ColumnKind.RESOURCE, ["web-0", "web-1", "web-2"])
    return state
