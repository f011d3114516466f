"""Kubernetes Column Browser TUI application.

Usage:
    from kube_column_browser.tui.apps.browser import ColumnBrowserApp

    app = ColumnBrowserApp(client=client)
    app.run()
"""

from kube_column_browser.tui.apps.browser.app import ColumnBrowserApp

__all__ = ["ColumnBrowserApp"]
