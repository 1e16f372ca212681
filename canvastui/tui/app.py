"""
Interactive assignment viewer.

Runs the asciimatics event loop on the main thread while the Canvas fetch
happens on a background thread. Fetch results travel back over a queue and
are applied between keypresses, so ViewState is only ever touched by the
UI thread.

Usage:
    app = CanvasApp.from_settings(get_settings().require())
    app.run()
"""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass
from typing import Callable

from asciimatics.exceptions import ResizeScreenError
from asciimatics.screen import Screen
from loguru import logger

from canvastui.canvas.client import CanvasApiError, CanvasClient
from canvastui.config import Settings
from canvastui.core.actions import Action, ViewState, action_for_key
from canvastui.core.calendar import Calendar

from . import browser
from .view import render

# Seconds to block waiting for a key before polling the fetch queue
POLL_INTERVAL = 0.1

SPECIAL_KEYS = {
    Screen.KEY_UP: "up",
    Screen.KEY_DOWN: "down",
    Screen.KEY_LEFT: "left",
    Screen.KEY_RIGHT: "right",
    Screen.KEY_ESCAPE: "esc",
    10: "enter",
    13: "enter",
}


def key_name(code: int | None) -> str | None:
    """Translate an asciimatics key code into a KEYMAP key name."""
    if code is None:
        return None
    if code in SPECIAL_KEYS:
        return SPECIAL_KEYS[code]
    if 32 <= code < 0x110000:
        return chr(code)
    return None


@dataclass
class FetchResult:
    """Outcome of one background fetch."""

    calendar: Calendar | None = None
    error: str | None = None


class CanvasApp:
    """Owns the view state, the fetch worker and the terminal loop."""

    def __init__(
        self,
        client_factory: Callable[[], CanvasClient],
        opener: Callable[[str], bool] = browser.open_url,
    ):
        self.client_factory = client_factory
        self.opener = opener
        self.state = ViewState()
        self.results: queue.Queue[FetchResult] = queue.Queue()
        self._fetch_thread: threading.Thread | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> CanvasApp:
        return cls(
            client_factory=lambda: CanvasClient(
                settings.canvas_url, settings.canvas_access_token
            )
        )

    # =========================================================================
    # Fetching
    # =========================================================================

    @property
    def is_fetching(self) -> bool:
        return self._fetch_thread is not None and self._fetch_thread.is_alive()

    def fetch(self) -> FetchResult:
        """Fetch the calendar, converting API failures into a message."""
        try:
            with self.client_factory() as client:
                calendar = client.fetch_calendar()
        except CanvasApiError as e:
            logger.warning("Fetch failed: {}", e)
            return FetchResult(error=str(e))
        except Exception as e:
            logger.exception("Unexpected error while fetching assignments")
            return FetchResult(error=f"Unexpected error: {e}")
        logger.info(
            "Loaded {} assignments over {} days", calendar.event_count, len(calendar.dates)
        )
        return FetchResult(calendar=calendar)

    def start_fetch(self) -> bool:
        """Start a background fetch unless one is already running."""
        if self.is_fetching:
            return False
        self._fetch_thread = threading.Thread(
            target=lambda: self.results.put(self.fetch()),
            name="canvas-fetch",
            daemon=True,
        )
        self._fetch_thread.start()
        return True

    def drain_results(self) -> bool:
        """Apply finished fetches to the view state. Returns True if any."""
        changed = False
        while True:
            try:
                result = self.results.get_nowait()
            except queue.Empty:
                return changed
            if result.calendar is not None:
                self.state.load(result.calendar)
            else:
                self.state.fail(result.error or "Unknown error")
            self.state.notice = None
            changed = True

    # =========================================================================
    # Input
    # =========================================================================

    def handle(self, action: Action) -> bool:
        """Apply an action, performing its side effects. Returns True to redraw."""
        dirty = self.state.update(action)

        if action is Action.OPEN_URL:
            event = self.state.selected_event()
            if event is None:
                return dirty
            if self.opener(event.html_url):
                self.state.notice = f"Opened {event.title}"
            else:
                self.state.notice = f"Could not open a browser for {event.html_url}"
        elif action is Action.REFRESH:
            if self.start_fetch():
                self.state.begin_refresh()

        return dirty

    def handle_key(self, code: int | None) -> bool:
        return self.handle(action_for_key(key_name(code)))

    # =========================================================================
    # Terminal loop
    # =========================================================================

    def _loop(self, screen: Screen) -> None:
        render(screen, self.state)
        while not self.state.should_quit:
            if screen.has_resized():
                raise ResizeScreenError("Screen resized")

            dirty = self.drain_results()
            code = screen.get_key()
            while code is not None:
                dirty = self.handle_key(code) or dirty
                if self.state.should_quit:
                    return
                code = screen.get_key()

            if dirty:
                render(screen, self.state)
            else:
                screen.wait_for_input(POLL_INTERVAL)

    def run(self) -> None:
        """Fetch in the background and run the viewer until the user quits."""
        self.start_fetch()
        while True:
            try:
                Screen.wrapper(self._loop, catch_interrupt=True)
                return
            except ResizeScreenError:
                logger.debug("Terminal resized, rebuilding screen")
