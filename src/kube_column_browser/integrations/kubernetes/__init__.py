"""Kubernetes integration - kubectl configuration models and errors."""

from kube_column_browser.integrations.kubernetes.config import (
    DEFAULT_RESOURCE_KINDS,
    BrowserConfig,
    ThemeConfig,
    load_config,
)
from kube_column_browser.integrations.kubernetes.exceptions import (
    CommandFailedError,
    ConfigError,
    KubectlNotFoundError,
    KubernetesError,
    OutputNotTextError,
)

__all__ = [
    "DEFAULT_RESOURCE_KINDS",
    "BrowserConfig",
    "CommandFailedError",
    "ConfigError",
    "KubectlNotFoundError",
    "KubernetesError",
    "OutputNotTextError",
    "ThemeConfig",
    "load_config",
]
