# Rendering package
from .colorizer import DEBUG_THEME, ERROR_THEME, STANDARD_THEME, JsonScanner, Theme, colorize
from .renderer import render_expanded, render_list, render_packed, theme_for, visible_window

__all__ = [
    "DEBUG_THEME",
    "ERROR_THEME",
    "STANDARD_THEME",
    "JsonScanner",
    "Theme",
    "colorize",
    "render_expanded",
    "render_list",
    "render_packed",
    "theme_for",
    "visible_window",
]
