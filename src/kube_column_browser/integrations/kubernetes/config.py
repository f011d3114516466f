"""Browser configuration models."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from rich.errors import StyleSyntaxError
from rich.style import Style

from kube_column_browser.integrations.kubernetes.exceptions import ConfigError

logger = structlog.get_logger()

# XDG-compliant config location
CONFIG_DIR = Path.home() / ".config" / "kcb"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

# Kinds queried for the resource type column. "all" only covers a subset of
# the namespaced kinds, so the common ones are listed explicitly.
DEFAULT_RESOURCE_KINDS = [
    "all",
    "ConfigMap",
    "Endpoints",
    "LimitRange",
    "PersistentVolumeClaim",
    "PersistentVolume",
    "Pod",
    "ReplicationController",
    "ResourceQuota",
    "Secret",
    "Service",
    "ServiceAccount",
]


class ThemeConfig(BaseModel):
    """Cell styles for the column table, as Rich style definitions."""

    model_config = ConfigDict(extra="forbid")

    normal: str = "none"
    selected_item: str = "bold on color(243)"
    active_column: str = "bold on color(233)"
    active_selected: str = "bold on color(243)"

    @field_validator("normal", "selected_item", "active_column", "active_selected")
    @classmethod
    def validate_style(cls, v: str) -> str:
        """Validate the value parses as a Rich style."""
        try:
            Style.parse(v)
        except StyleSyntaxError as e:
            raise ValueError(f"invalid style {v!r}: {e}") from e
        return v


class BrowserConfig(BaseModel):
    """Complete browser configuration."""

    model_config = ConfigDict(extra="forbid")

    context: str | None = None
    kubectl_path: str | None = None
    timeout: int = 30
    resource_kinds: list[str] = Field(default_factory=lambda: list(DEFAULT_RESOURCE_KINDS))
    theme: ThemeConfig = ThemeConfig()

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("resource_kinds")
    @classmethod
    def validate_resource_kinds(cls, v: list[str]) -> list[str]:
        """Validate at least one non-blank kind is configured."""
        kinds = [kind.strip() for kind in v if kind.strip()]
        if not kinds:
            raise ValueError("resource_kinds must not be empty")
        return kinds

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> BrowserConfig:
        """Create configuration with environment variable overrides.

        Environment variables take precedence over base_config values.

        Supported environment variables:
            KCB_CONTEXT: Kubernetes context passed to kubectl
            KCB_KUBECTL: Path to the kubectl binary
            KCB_TIMEOUT: Per-command timeout in seconds
        """
        config_dict = base_config.copy() if base_config else {}

        if context := os.environ.get("KCB_CONTEXT"):
            config_dict["context"] = context

        if kubectl := os.environ.get("KCB_KUBECTL"):
            config_dict["kubectl_path"] = kubectl

        if timeout := os.environ.get("KCB_TIMEOUT"):
            config_dict["timeout"] = timeout

        return cls.model_validate(config_dict)

    @property
    def resource_kinds_query(self) -> str:
        """Comma-joined kinds as passed to ``kubectl get``."""
        return ",".join(self.resource_kinds)


def load_config(path: Path | None = None) -> BrowserConfig:
    """Load configuration from a YAML file with environment overrides.

    Args:
        path: Config file to read. Defaults to ``~/.config/kcb/config.yaml``;
            a missing default file yields the built-in defaults.

    Returns:
        Validated browser configuration.

    Raises:
        ConfigError: If the file is unreadable, not YAML, or fails validation.
    """
    config_path = path or CONFIG_FILE
    base: dict[str, Any] = {}

    if config_path.exists():
        try:
            loaded = yaml.safe_load(config_path.read_text())
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read config: {e}", path=str(config_path)) from e
        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigError("Config root must be a mapping", path=str(config_path))
        base = loaded or {}
        logger.debug("config_loaded", path=str(config_path))
    elif path is not None:
        raise ConfigError("Config file not found", path=str(config_path))

    try:
        return BrowserConfig.from_env(base)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}", path=str(config_path)) from e
