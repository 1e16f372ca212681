"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from datetime import timezone
from pathlib import Path

import pytest
from asciimatics.screen import Screen
from loguru import logger

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from canvastui.config import get_settings  # noqa: E402
from canvastui.core.calendar import build_calendar  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate tests from the developer's Canvas credentials."""
    monkeypatch.delenv("CANVAS_URL", raising=False)
    monkeypatch.delenv("CANVAS_ACCESS_TOKEN", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def canvas_env(monkeypatch):
    """Provide a complete pair of Canvas credentials."""
    monkeypatch.setenv("CANVAS_URL", "https://school.instructure.com")
    monkeypatch.setenv("CANVAS_ACCESS_TOKEN", "test-token")
    get_settings.cache_clear()


def make_item(
    title,
    due_at,
    course="CS 101 Intro to Programming",
    submitted=False,
    html_url="/courses/1/assignments/1",
):
    """Build a planner item shaped like Canvas' /api/v1/planner/items rows."""
    return {
        "context_type": "Course",
        "course_id": 1,
        "plannable_type": "assignment",
        "context_name": course,
        "html_url": html_url,
        "submissions": {
            "submitted": submitted,
            "excused": False,
            "graded": False,
            "late": False,
            "missing": False,
        },
        "plannable": {
            "id": 1,
            "title": title,
            "due_at": due_at,
            "points_possible": 10.0,
        },
    }


@pytest.fixture
def sample_items():
    """Four assignments over three UTC days, in the order Canvas returns them."""
    return [
        make_item("Lab 1", "2025-03-03T12:00:00Z", html_url="/courses/1/assignments/11"),
        make_item(
            "Essay Draft",
            "2025-03-03T15:30:00Z",
            course="ENGL 200 Composition",
            submitted=True,
            html_url="/courses/2/assignments/21",
        ),
        make_item("Quiz 2", "2025-03-05T09:00:00Z", html_url="/courses/1/assignments/12"),
        make_item(
            "Problem Set 4",
            "2025-03-04T23:59:00Z",
            course="MATH 221 Linear Algebra",
            html_url="https://school.instructure.com/courses/3/assignments/31",
        ),
    ]


@pytest.fixture
def sample_calendar(sample_items):
    """The sample items bucketed by UTC day."""
    return build_calendar(
        sample_items, base_url="https://school.instructure.com", tz=timezone.utc
    )


@pytest.fixture
def planner_item():
    """Factory for single planner items."""
    return make_item


class FakeScreen:
    """
    Just enough of asciimatics.screen.Screen for render() and the event loop.

    `keys` is consumed one code per get_key() call; a None entry ends the
    current tick. Once the script runs out every call returns "q".
    """

    def __init__(self, width=80, height=24, keys=(), resized=False):
        self.width = width
        self.height = height
        self.keys = list(keys)
        self.resized = resized
        self.refreshed = 0
        self.waits = 0
        self.clear_buffer(Screen.COLOUR_WHITE, Screen.A_NORMAL, Screen.COLOUR_BLACK)

    def clear_buffer(self, fg, attr, bg):
        self.cells = [[(" ", fg, attr) for _ in range(self.width)] for _ in range(self.height)]

    def print_at(self, text, x, y, colour=7, attr=0, bg=0, transparent=False):
        for offset, char in enumerate(text):
            if 0 <= x + offset < self.width and 0 <= y < self.height:
                self.cells[y][x + offset] = (char, colour, attr)

    def refresh(self):
        self.refreshed += 1

    def has_resized(self):
        return self.resized

    def get_key(self):
        if not self.keys:
            return ord("q")
        return self.keys.pop(0)

    def wait_for_input(self, timeout):
        self.waits += 1

    def line(self, y):
        return "".join(cell[0] for cell in self.cells[y])

    @property
    def text(self):
        return "\n".join(self.line(y) for y in range(self.height))

    def find(self, needle):
        for y in range(self.height):
            x = self.line(y).find(needle)
            if x >= 0:
                return x, y
        raise AssertionError(f"{needle!r} not on screen:\n{self.text}")

    def style_of(self, needle):
        x, y = self.find(needle)
        _, colour, attr = self.cells[y][x]
        return colour, attr


@pytest.fixture
def screen_factory():
    """Build fake terminals of a given size and key script."""
    return FakeScreen


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop sinks the CLI adds so they never outlive the test's streams."""
    yield
    logger.remove()
