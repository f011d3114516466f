"""TUI applications package.

Available applications:
- browser: Column-based Kubernetes resource browser
"""
