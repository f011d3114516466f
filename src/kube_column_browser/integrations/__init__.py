"""Integrations with external tools used by the browser."""
