"""Structured logging configuration using structlog.

structlog events are routed through stdlib logging so that a single set of
handlers serves both structlog and third-party loggers (textual, asyncio).
The browser owns the terminal while it runs, so the console handler is
optional and the rotating JSON file is the durable record.
"""

from __future__ import annotations

import glob
import logging
import sys
from datetime import datetime, timedelta
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog

# Log file configuration
LOG_DIR = Path.home() / ".local" / "state" / "kcb"
LOG_FILE = LOG_DIR / "kcb.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5
RETENTION_DAYS = 30

# Marks handlers installed here so reconfiguring replaces instead of stacking
_HANDLER_MARKER = "_kcb_handler"


def _log_level(verbose: bool, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _is_rotation_of(path: Path, log_file: Path) -> bool:
    """Whether ``path`` is ``log_file`` or one of its numbered backups."""
    if path.name == log_file.name:
        return True
    prefix = f"{log_file.name}."
    return path.name.startswith(prefix) and path.name[len(prefix) :].isdigit()


def _cleanup_old_logs(log_file: Path) -> None:
    """Delete rotations of ``log_file`` older than RETENTION_DAYS."""
    if not log_file.parent.exists():
        return
    cutoff = datetime.now() - timedelta(days=RETENTION_DAYS)
    for path in log_file.parent.glob(f"{glob.escape(log_file.name)}*"):
        if not _is_rotation_of(path, log_file):
            continue
        try:
            if datetime.fromtimestamp(path.stat().st_mtime) < cutoff:
                path.unlink()
        except OSError:
            pass  # Ignore errors during cleanup


def _file_handler(log_file: Path) -> logging.Handler:
    """Create the rotating JSON file handler, pruning stale rotations first."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    _cleanup_old_logs(log_file)

    handler = RotatingFileHandler(log_file, maxBytes=MAX_LOG_SIZE, backupCount=BACKUP_COUNT)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=_shared_processors(),
        )
    )
    return handler


def _console_handler(log_level: int, json_output: bool, debug: bool) -> logging.Handler:
    """Create the stderr handler, human-readable unless JSON is requested."""
    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=debug),
        )

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=_shared_processors(),
        )
    )
    return handler


def _install(root: logging.Logger, handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_MARKER, True)
    root.addHandler(handler)


def configure_logging(
    verbose: bool = False,
    debug: bool = False,
    json_output: bool = False,
    console: bool = True,
    log_file: Path | None = None,
) -> None:
    """Configure structured logging for the application.

    File logs default to ~/.local/state/kcb/kcb.log with rotation
    (10MB max, 5 backups) and retention cleanup (30 days). Calling this
    again replaces the handlers from the previous call.

    Args:
        verbose: Enable verbose (INFO level) output.
        debug: Enable debug mode (DEBUG level).
        json_output: Output console logs in JSON format.
        console: Attach the stderr handler. The browser turns this off so
            log lines never draw over the screen.
        log_file: Write the file log here instead of the default location.
    """
    log_level = _log_level(verbose, debug)

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Let handlers filter
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root_logger.removeHandler(handler)
            handler.close()

    if console:
        _install(root_logger, _console_handler(log_level, json_output, debug))
    _install(root_logger, _file_handler(log_file or LOG_FILE))


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """Get a configured logger with optional initial context.

    Args:
        name: Logger name. If None, uses the calling module's name.
        **initial_context: Initial context variables to bind to the logger.

    Returns:
        A bound structlog logger.
    """
    logger: structlog.BoundLogger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
