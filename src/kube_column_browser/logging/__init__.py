"""Logging configuration for kube_column_browser."""

from kube_column_browser.logging.config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
