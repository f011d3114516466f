"""Shared fixtures for TUI integration tests.

Provides a fake kubectl client serving a small canned cluster, and an app
factory wiring it into the column browser.
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol
from unittest.mock import patch

import pytest
from textual.pilot import Pilot

from kube_column_browser.browser.commands import CommandRequest, CommandResult, CommandTag
from kube_column_browser.integrations.kubernetes.config import BrowserConfig
from kube_column_browser.integrations.kubernetes.kubectl_client import KubectlClient
from kube_column_browser.tui.apps.browser.app import ColumnBrowserApp

# Responses are keyed by (tag, namespace, resource argument)
ResponseKey = tuple[CommandTag, str | None, str | None]


@dataclass(frozen=True)
class Failure:
    """A canned failed kubectl invocation."""

    exit_code: int
    stderr: bytes


class FakeKubectlClient(KubectlClient):
    """KubectlClient answering from a dictionary instead of running kubectl.

    Requests are still built by the real client, so argument construction
    is exercised end to end. A key listed in ``gates`` blocks until its
    event is set.
    """

    def __init__(
        self,
        responses: dict[ResponseKey, bytes | Failure],
        config: BrowserConfig | None = None,
    ) -> None:
        with patch("shutil.which", return_value="/usr/local/bin/kubectl"):
            super().__init__(config or BrowserConfig(resource_kinds=["Pod", "Service"]))
        self.responses = responses
        self.gates: dict[ResponseKey, threading.Event] = {}
        self.calls: list[ResponseKey] = []

    @staticmethod
    def key_for(request: CommandRequest) -> ResponseKey:
        args = list(request.args)
        namespace = args[args.index("--namespace") + 1] if "--namespace" in args else None
        if request.tag in (CommandTag.QUERY_NAMESPACES, CommandTag.QUERY_RESOURCE_TYPES):
            return (request.tag, namespace, None)
        return (request.tag, namespace, args[1])

    def calls_for(self, key: ResponseKey) -> int:
        return self.calls.count(key)

    def run(self, request: CommandRequest) -> CommandResult:
        key = self.key_for(request)
        self.calls.append(key)
        if key in self.gates:
            self.gates[key].wait(timeout=5)

        response = self.responses.get(key, b"")
        if isinstance(response, Failure):
            return CommandResult(
                tag=request.tag.value,
                exit_code=response.exit_code,
                stdout=b"",
                stderr=response.stderr,
                generation=request.generation,
            )
        return CommandResult(
            tag=request.tag.value,
            exit_code=0,
            stdout=response,
            stderr=b"",
            generation=request.generation,
        )


class AppFactory(Protocol):
    """Protocol for the app_factory fixture."""

    def __call__(
        self,
        responses: dict[ResponseKey, bytes | Failure] | None = None,
    ) -> ColumnBrowserApp: ...


# ============================================================================
# Cluster Fixtures
# ============================================================================


@pytest.fixture
def cluster_responses() -> dict[ResponseKey, bytes | Failure]:
    """Two namespaces with a handful of resources."""
    return {
        (CommandTag.QUERY_NAMESPACES, None, None): b"default kube-system",
        (CommandTag.QUERY_RESOURCE_TYPES, "default", None): b"Pod Pod Service",
        (CommandTag.QUERY_RESOURCE_TYPES, "kube-system", None): b"ConfigMap",
        (CommandTag.QUERY_RESOURCES, "default", "Pod"): b"web-0 web-1",
        (CommandTag.QUERY_RESOURCES, "default", "Service"): b"web",
        (CommandTag.QUERY_RESOURCES, "kube-system", "ConfigMap"): b"coredns",
        (CommandTag.QUERY_RESOURCE_DETAILS, "default", "Pod/web-0"): (
            b"kind: Pod\nmetadata:\n  name: web-0\n"
        ),
        (CommandTag.QUERY_RESOURCE_DETAILS, "default", "Pod/web-1"): (
            b"kind: Pod\nmetadata:\n  name: web-1\n"
        ),
        (CommandTag.QUERY_RESOURCE_DETAILS, "default", "Service/web"): (
            b"kind: Service\nmetadata:\n  name: web\n"
        ),
        (CommandTag.QUERY_RESOURCE_DETAILS, "kube-system", "ConfigMap/coredns"): (
            b"kind: ConfigMap\nmetadata:\n  name: coredns\n"
        ),
    }


@pytest.fixture
def app_factory(cluster_responses: dict[ResponseKey, bytes | Failure]) -> AppFactory:
    """Create a ColumnBrowserApp backed by a FakeKubectlClient."""

    def factory(
        responses: dict[ResponseKey, bytes | Failure] | None = None,
    ) -> ColumnBrowserApp:
        merged = {**cluster_responses, **(responses or {})}
        return ColumnBrowserApp(client=FakeKubectlClient(merged))

    return factory


# ============================================================================
# Helpers
# ============================================================================


async def wait_until(
    pilot: Pilot[None],
    predicate: Callable[[], bool],
    timeout: float = 5.0,
) -> None:
    """Let the app process events until ``predicate`` holds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not reached before timeout")
        await pilot.pause(0.01)


async def settle(app: ColumnBrowserApp, pilot: Pilot[None]) -> None:
    """Wait until no kubectl request is outstanding."""
    await wait_until(pilot, lambda: app.pending_requests == 0)
    await pilot.pause()
