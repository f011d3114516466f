"""Shared pytest fixtures for kube_column_browser tests."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir() -> Generator[Path]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_config_file(temp_dir: Path) -> Path:
    """Config file overriding the context, timeout, kinds and one theme style."""
    config_path = temp_dir / "config.yaml"
    config_path.write_text(
        """
context: staging
timeout: 15
resource_kinds:
  - Pod
  - Service
theme:
  selected_item: "bold on blue"
"""
    )
    return config_path


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep KCB_ variables from the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("KCB_"):
            monkeypatch.delenv(key, raising=False)
