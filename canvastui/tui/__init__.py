"""
Terminal front end.

- view: Draws a ViewState onto an asciimatics Screen
- app: Event loop and background fetch
- browser: Default-browser hand-off
"""

from .app import CanvasApp, FetchResult, key_name
from .browser import open_url
from .view import render

__all__ = ["CanvasApp", "FetchResult", "key_name", "open_url", "render"]
