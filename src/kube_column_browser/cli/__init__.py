"""Command line interface for kube-column-browser."""
