"""kubectl CLI wrapper for the column browser.

Builds the argument list for each column query and runs kubectl via
subprocess, returning raw results for the result pipeline.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import structlog

from kube_column_browser.browser.commands import (
    TAG_FOR_COLUMN,
    CommandRequest,
    CommandResult,
    CommandTag,
)
from kube_column_browser.browser.state import ColumnKind, NavigationState
from kube_column_browser.integrations.kubernetes.config import (
    DEFAULT_RESOURCE_KINDS,
    BrowserConfig,
)
from kube_column_browser.integrations.kubernetes.exceptions import KubectlNotFoundError

logger = structlog.get_logger()

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

NAMES_JSONPATH = "jsonpath={.items[*].metadata.name}"
KINDS_JSONPATH = "jsonpath={.items[*].kind}"

# Conventional exit status for a command killed by a timeout
TIMEOUT_EXIT_CODE = 124


# ---------------------------------------------------------------------------
# Argument construction
# ---------------------------------------------------------------------------


def build_arguments(
    tag: CommandTag,
    *,
    context: str | None = None,
    namespace: str | None = None,
    resource_type: str | None = None,
    resource: str | None = None,
    resource_kinds: str | None = None,
) -> list[str] | None:
    """Build kubectl arguments (without the binary) for a query.

    Returns:
        The argument list, or None when a value the query needs is missing.
    """
    context_args = ["--context", context] if context else []

    if tag == CommandTag.QUERY_NAMESPACES:
        return ["get", "namespaces", *context_args, "--output", NAMES_JSONPATH]

    if namespace is None:
        return None

    if tag == CommandTag.QUERY_RESOURCE_TYPES:
        kinds = resource_kinds or ",".join(DEFAULT_RESOURCE_KINDS)
        return [
            "get",
            kinds,
            *context_args,
            "--namespace",
            namespace,
            "--output",
            KINDS_JSONPATH,
        ]

    if resource_type is None:
        return None

    if tag == CommandTag.QUERY_RESOURCES:
        return [
            "get",
            resource_type,
            *context_args,
            "--namespace",
            namespace,
            "--output",
            NAMES_JSONPATH,
        ]

    if resource is None:
        return None

    return [
        "get",
        f"{resource_type}/{resource}",
        *context_args,
        "--namespace",
        namespace,
        "--output",
        "yaml",
    ]


def build_request(
    state: NavigationState,
    kind: ColumnKind,
    config: BrowserConfig,
) -> CommandRequest | None:
    """Build the request that refreshes ``kind`` for the current selections.

    Returns:
        The request, or None when an upstream selection is missing.
    """
    tag = TAG_FOR_COLUMN[kind]
    args = build_arguments(
        tag,
        context=config.context,
        namespace=state.selected_value(ColumnKind.NAMESPACE),
        resource_type=state.selected_value(ColumnKind.RESOURCE_TYPE),
        resource=state.selected_value(ColumnKind.RESOURCE),
        resource_kinds=config.resource_kinds_query,
    )
    if args is None:
        return None
    return CommandRequest(tag=tag, args=tuple(args), generation=state.column(kind).generation)


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class KubectlClient:
    """Client for running kubectl queries.

    Wraps kubectl binary execution and returns raw results; decoding and
    validation belong to the result pipeline.
    """

    def __init__(self, config: BrowserConfig | None = None) -> None:
        """Initialize kubectl client.

        Args:
            config: Browser configuration. ``kubectl_path`` selects an
                explicit binary; otherwise PATH is searched.

        Raises:
            KubectlNotFoundError: If binary not found.
        """
        self.config = config or BrowserConfig()
        self._binary = self._find_binary(self.config.kubectl_path)
        self._log = logger.bind(binary=self._binary, context=self.config.context)
        self._log.debug("kubectl_client_initialized")

    @property
    def binary(self) -> str:
        """Resolved path of the kubectl binary."""
        return self._binary

    @staticmethod
    def _find_binary(binary_path: str | None) -> str:
        """Locate kubectl binary.

        Args:
            binary_path: Explicit path or None to search PATH.

        Returns:
            Path to kubectl binary.

        Raises:
            KubectlNotFoundError: If not found.
        """
        if binary_path:
            path = Path(binary_path).expanduser()
            if not path.exists():
                raise KubectlNotFoundError(binary_path)
            return str(path.resolve())

        found = shutil.which("kubectl")
        if not found:
            raise KubectlNotFoundError()

        return found

    def build_request(self, state: NavigationState, kind: ColumnKind) -> CommandRequest | None:
        """Build the refresh request for ``kind`` with this client's config."""
        return build_request(state, kind, self.config)

    def run(self, request: CommandRequest) -> CommandResult:
        """Run a request and capture its raw output.

        A command that exceeds the configured timeout is reported as a
        failed result rather than raised.
        """
        cmd = [self._binary, *request.args]
        self._log.debug("running_kubectl", tag=request.tag.value, args=list(request.args))

        try:
            completed = subprocess.run(
                cmd,
                capture_output=True,
                check=False,
                timeout=self.config.timeout,
            )
        except subprocess.TimeoutExpired:
            self._log.error("kubectl_timeout", tag=request.tag.value, timeout=self.config.timeout)
            return CommandResult(
                tag=request.tag.value,
                exit_code=TIMEOUT_EXIT_CODE,
                stdout=b"",
                stderr=f"kubectl timed out after {self.config.timeout} seconds".encode(),
                generation=request.generation,
            )
        except OSError as e:
            self._log.error("kubectl_exec_failed", tag=request.tag.value, error=str(e))
            return CommandResult(
                tag=request.tag.value,
                exit_code=127,
                stdout=b"",
                stderr=f"Failed to run kubectl: {e}".encode(),
                generation=request.generation,
            )

        if completed.returncode != 0:
            self._log.warning(
                "kubectl_failed",
                tag=request.tag.value,
                returncode=completed.returncode,
            )
        else:
            self._log.debug("kubectl_success", tag=request.tag.value)

        return CommandResult(
            tag=request.tag.value,
            exit_code=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
            generation=request.generation,
        )
