"""
View state and key handling for the assignment viewer.

Keys are mapped to Actions, and Actions are applied to a ViewState.
Nothing here touches the terminal, the network or the browser; the tui
package performs those side effects around ViewState.update().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .calendar import Calendar, CalendarEvent


class Action(str, Enum):
    """Everything a keypress can ask the viewer to do."""

    QUIT = "quit"
    NEXT_EVENT = "next_event"
    PREV_EVENT = "prev_event"
    NEXT_DATE = "next_date"
    PREV_DATE = "prev_date"
    OPEN_URL = "open_url"
    REFRESH = "refresh"
    NONE = "none"


class Status(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


# Named keys ("up", "enter", ...) are produced by the terminal layer
KEYMAP: dict[str, Action] = {
    "q": Action.QUIT,
    "esc": Action.QUIT,
    "j": Action.NEXT_EVENT,
    "down": Action.NEXT_EVENT,
    "k": Action.PREV_EVENT,
    "up": Action.PREV_EVENT,
    "l": Action.NEXT_DATE,
    "right": Action.NEXT_DATE,
    "h": Action.PREV_DATE,
    "left": Action.PREV_DATE,
    "o": Action.OPEN_URL,
    "enter": Action.OPEN_URL,
    "r": Action.REFRESH,
}

KEY_HELP = "h/l day  j/k assignment  o open  r refresh  q quit"


def action_for_key(key: str | None) -> Action:
    """Map a key name to its Action; unknown keys do nothing."""
    if not key:
        return Action.NONE
    return KEYMAP.get(key, Action.NONE)


@dataclass
class ViewState:
    """What the viewer is showing and where the cursor is."""

    calendar: Calendar = field(default_factory=Calendar)
    status: Status = Status.LOADING
    error: str | None = None
    notice: str | None = None
    should_quit: bool = False

    def load(self, calendar: Calendar) -> None:
        """Show a freshly fetched calendar, starting from its first day."""
        calendar.current_date_index = 0
        self.calendar = calendar
        self.status = Status.READY
        self.error = None

    def fail(self, message: str) -> None:
        """Record a fetch failure; the last good calendar is kept."""
        self.error = message
        if self.calendar.is_empty:
            self.status = Status.ERROR

    def begin_refresh(self) -> None:
        self.notice = "Refreshing..."
        if self.calendar.is_empty:
            self.status = Status.LOADING
            self.error = None

    def selected_event(self) -> CalendarEvent | None:
        current = self.calendar.current_date
        return current.selected_event if current else None

    def update(self, action: Action) -> bool:
        """
        Apply an action.

        Returns:
            True if the screen needs redrawing
        """
        if action is Action.QUIT:
            self.should_quit = True
            return False
        if action is Action.NONE:
            return False

        self.notice = None
        current = self.calendar.current_date

        if action is Action.NEXT_EVENT and current:
            current.select_next()
        elif action is Action.PREV_EVENT and current:
            current.select_previous()
        elif action is Action.NEXT_DATE:
            self.calendar.next_date()
        elif action is Action.PREV_DATE:
            self.calendar.previous_date()

        # OPEN_URL and REFRESH are side effects handled by the caller
        return True
