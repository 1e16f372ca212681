"""
Day-bucketed assignment index.

Turns the flat list of planner items returned by Canvas into an ordered
sequence of days, each holding the events due on that (local) date.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone, tzinfo
from typing import Any, Iterable
from urllib.parse import urljoin

from loguru import logger
from pydantic import ValidationError

from canvastui.canvas.models import PlannerItem

HEADER_COLUMNS = ("Course", "Assignment", "Due")
DUE_FORMAT = "%H:%M"
SUBMITTED_MARK = "✓"


def short_course_name(context_name: str) -> str:
    """
    Shorten a Canvas course name to its first two words.

    "CS 101 Intro to Programming" -> "CS-101"
    """
    return "-".join(context_name.split()[:2])


@dataclass
class CalendarEvent:
    """A single assignment shown as one table row."""

    course_name: str
    due_at: datetime
    title: str
    html_url: str
    submitted: bool = False

    @property
    def due_label(self) -> str:
        label = self.due_at.strftime(DUE_FORMAT)
        return f"{label} {SUBMITTED_MARK}" if self.submitted else label


@dataclass
class CalendarDate:
    """All events due on one local calendar day, plus the row selection."""

    day: date
    events: list[CalendarEvent] = field(default_factory=list)
    selected: int = 0

    @property
    def label(self) -> str:
        return f"{self.day:%A %b} {self.day.day}"

    def select_next(self) -> None:
        self.selected = min(self.selected + 1, max(len(self.events) - 1, 0))

    def select_previous(self) -> None:
        self.selected = max(self.selected - 1, 0)

    @property
    def selected_event(self) -> CalendarEvent | None:
        if 0 <= self.selected < len(self.events):
            return self.events[self.selected]
        return None


@dataclass
class Calendar:
    """Ordered days with at least one event, and the day currently shown."""

    dates: list[CalendarDate] = field(default_factory=list)
    current_date_index: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.dates

    @property
    def current_date(self) -> CalendarDate | None:
        if 0 <= self.current_date_index < len(self.dates):
            return self.dates[self.current_date_index]
        return None

    @property
    def event_count(self) -> int:
        return sum(len(d.events) for d in self.dates)

    def next_date(self) -> None:
        self.current_date_index = min(
            self.current_date_index + 1, max(len(self.dates) - 1, 0)
        )

    def previous_date(self) -> None:
        self.current_date_index = max(self.current_date_index - 1, 0)

    def column_widths(self) -> tuple[int, int, int]:
        """
        Widths for the Course, Assignment and Due columns.

        Computed across every day so the table does not jump while paging.
        """
        course = len(HEADER_COLUMNS[0])
        title = len(HEADER_COLUMNS[1])
        due = len(HEADER_COLUMNS[2])
        for calendar_date in self.dates:
            for event in calendar_date.events:
                course = max(course, len(event.course_name))
                title = max(title, len(event.title))
                due = max(due, len(event.due_label))
        return course + 1, title, due


def build_calendar(
    items: Iterable[dict[str, Any]],
    base_url: str = "",
    tz: tzinfo | None = None,
) -> Calendar:
    """
    Bucket raw planner items into a Calendar.

    Args:
        items: Planner item dicts in API order
        base_url: Canvas root used to absolutize relative html_url values
        tz: Zone whose calendar days are used (defaults to local time)

    Returns:
        Calendar with days ascending and events in API order within a day
    """
    buckets: dict[date, list[CalendarEvent]] = {}
    skipped = 0

    for raw in items:
        try:
            item = PlannerItem.model_validate(raw)
        except ValidationError as e:
            logger.debug("Skipping malformed planner item: {}", e)
            skipped += 1
            continue

        due_at = item.plannable.due_at
        if due_at is None:
            skipped += 1
            continue
        if due_at.tzinfo is None:
            due_at = due_at.replace(tzinfo=timezone.utc)
        local_due = due_at.astimezone(tz)

        buckets.setdefault(local_due.date(), []).append(
            CalendarEvent(
                course_name=short_course_name(item.context_name),
                due_at=local_due,
                title=item.plannable.title,
                html_url=urljoin(f"{base_url.rstrip('/')}/", item.html_url)
                if base_url
                else item.html_url,
                submitted=item.submitted,
            )
        )

    if skipped:
        logger.debug("Skipped {} planner items without a usable due date", skipped)

    return Calendar(
        dates=[CalendarDate(day=day, events=events) for day, events in sorted(buckets.items())]
    )
