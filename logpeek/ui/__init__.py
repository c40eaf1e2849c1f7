# Terminal UI package
from .app import LogViewerApp, SearchScreen, ZoomScreen

__all__ = [
    "LogViewerApp",
    "SearchScreen",
    "ZoomScreen",
]
