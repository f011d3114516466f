"""Kubernetes integration custom exceptions."""

from __future__ import annotations


class KubernetesError(Exception):
    """Base exception for kubectl-backed operations.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str) -> None:
        """Initialize KubernetesError.

        Args:
            message: Human-readable error message.
        """
        super().__init__(message)
        self.message = message


class CommandFailedError(KubernetesError):
    """Raised when kubectl exits with a non-zero exit code.

    The column the command was meant to populate keeps its previous
    contents.
    """

    def __init__(self, stderr_text: str, exit_code: int | None = None) -> None:
        """Initialize CommandFailedError.

        Args:
            stderr_text: Decoded standard error of the failed command.
            exit_code: The exit code reported for the command.
        """
        message = stderr_text.strip() or f"kubectl exited with code {exit_code}"
        super().__init__(message=message)
        self.stderr_text = stderr_text
        self.exit_code = exit_code


class OutputNotTextError(KubernetesError):
    """Raised when kubectl output cannot be decoded as UTF-8 text."""

    def __init__(self, decode_error: str) -> None:
        """Initialize OutputNotTextError.

        Args:
            decode_error: Description of the decoding failure.
        """
        super().__init__(message=f"Error parsing stdout: {decode_error}")
        self.decode_error = decode_error


class KubectlNotFoundError(KubernetesError):
    """Raised when the kubectl binary is not found."""

    def __init__(self, binary_path: str | None = None) -> None:
        if binary_path:
            message = f"kubectl binary not found at {binary_path}"
        else:
            message = (
                "kubectl binary not found in PATH. "
                "Install from: https://kubernetes.io/docs/tasks/tools/"
            )
        super().__init__(message=message)
        self.binary_path = binary_path


class ConfigError(KubernetesError):
    """Raised when the browser configuration cannot be loaded or validated."""

    def __init__(self, message: str, path: str | None = None) -> None:
        if path:
            message = f"{message} ({path})"
        super().__init__(message=message)
        self.path = path
