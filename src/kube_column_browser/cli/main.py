"""Main CLI entry point using Typer."""

from __future__ import annotations

from pathlib import Path

import structlog
import typer
from rich.console import Console
from rich.table import Table

from kube_column_browser import __version__
from kube_column_browser.integrations.kubernetes.config import (
    CONFIG_FILE,
    BrowserConfig,
    load_config,
)
from kube_column_browser.integrations.kubernetes.exceptions import KubernetesError
from kube_column_browser.logging.config import configure_logging

app = typer.Typer(
    name="kcb",
    help="Browse Kubernetes namespaces, resource types and resources in columns.",
    add_completion=True,
)

console = Console()
logger = structlog.get_logger()

# Commands that take over the terminal and must not get console logging
TUI_COMMANDS = frozenset({"browse"})


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"kcb version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode.",
    ),
    log_file: Path | None = typer.Option(
        None,
        "--log-file",
        help="Write the log file here instead of ~/.local/state/kcb/kcb.log.",
    ),
) -> None:
    """kcb - column-based Kubernetes resource browser."""
    configure_logging(
        verbose=verbose,
        debug=debug,
        console=ctx.invoked_subcommand not in TUI_COMMANDS,
        log_file=log_file,
    )


def _resolve_config(
    config_path: Path | None,
    context: str | None,
    kubectl: str | None,
) -> BrowserConfig:
    """Load configuration and apply command line overrides."""
    config = load_config(config_path)
    overrides: dict[str, str] = {}
    if context:
        overrides["context"] = context
    if kubectl:
        overrides["kubectl_path"] = kubectl
    if overrides:
        config = config.model_copy(update=overrides)
    return config


@app.command()
def browse(
    context: str | None = typer.Option(
        None,
        "--context",
        "-c",
        help="Kubernetes context to browse (defaults to kubectl's current context).",
    ),
    kubectl: str | None = typer.Option(
        None,
        "--kubectl",
        help="Path to the kubectl binary.",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help=f"Configuration file (default: {CONFIG_FILE}).",
    ),
) -> None:
    """Open the interactive column browser."""
    from kube_column_browser.integrations.kubernetes.kubectl_client import KubectlClient
    from kube_column_browser.tui.apps.browser import ColumnBrowserApp

    try:
        config = _resolve_config(config_path, context, kubectl)
        client = KubectlClient(config)
    except KubernetesError as e:
        logger.error("browse_startup_failed", error=str(e))
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    logger.info("browser_starting", context=config.context, kubectl=client.binary)
    ColumnBrowserApp(client=client).run()


@app.command("config")
def show_config(
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help=f"Configuration file (default: {CONFIG_FILE}).",
    ),
) -> None:
    """Show the effective configuration."""
    try:
        config = load_config(config_path)
    except KubernetesError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    table = Table(title="kcb Configuration")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value")

    table.add_row("Config file", str(config_path or CONFIG_FILE))
    table.add_row("Context", config.context or "(current)")
    table.add_row("kubectl", config.kubectl_path or "(PATH)")
    table.add_row("Timeout", f"{config.timeout}s")
    table.add_row("Resource kinds", config.resource_kinds_query)
    for name, style in config.theme.model_dump().items():
        table.add_row(f"Theme: {name}", style)

    console.print(table)


if __name__ == "__main__":
    app()
