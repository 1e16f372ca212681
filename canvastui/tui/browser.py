"""Hand an assignment URL to the system's default web browser."""

from __future__ import annotations

import webbrowser

from loguru import logger


def open_url(url: str) -> bool:
    """
    Open url in the default browser.

    Returns:
        True if a browser accepted the URL
    """
    if not url:
        return False
    try:
        opened = webbrowser.open(url, new=2)
    except webbrowser.Error as e:
        logger.warning("Could not open {}: {}", url, e)
        return False
    if not opened:
        logger.warning("No browser available to open {}", url)
    return opened
