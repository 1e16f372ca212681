"""
Core Module - the assignment index and view state.

Components:
- calendar: Day-bucketed index built from planner items
- actions: Key mapping and view-state transitions
"""

from canvastui.core.actions import KEYMAP, Action, Status, ViewState, action_for_key
from canvastui.core.calendar import (
    Calendar,
    CalendarDate,
    CalendarEvent,
    build_calendar,
    short_course_name,
)

__all__ = [
    "Calendar",
    "CalendarDate",
    "CalendarEvent",
    "build_calendar",
    "short_course_name",
    "Action",
    "Status",
    "ViewState",
    "KEYMAP",
    "action_for_key",
]
