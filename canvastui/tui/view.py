"""
Full-screen rendering of the assignment viewer.

Draws a ViewState onto an asciimatics Screen: a thick frame titled
" CanvasTUI ", the day heading, the Course/Assignment/Due table for the
current day and a footer with the day position and key help.
"""

from __future__ import annotations

from asciimatics.screen import Screen

from canvastui.core.actions import KEY_HELP, Status, ViewState
from canvastui.core.calendar import HEADER_COLUMNS, CalendarDate

TITLE = " CanvasTUI "
ELLIPSIS = "…"

# Thick box drawing
FRAME = {
    "tl": "┏",
    "tr": "┓",
    "bl": "┗",
    "br": "┛",
    "h": "━",
    "v": "┃",
}

COLOURS = {
    "frame": Screen.COLOUR_BLUE,
    "heading": Screen.COLOUR_MAGENTA,
    "submitted": Screen.COLOUR_GREEN,
    "pending": Screen.COLOUR_WHITE,
    "error": Screen.COLOUR_RED,
    "notice": Screen.COLOUR_YELLOW,
    "dim": Screen.COLOUR_CYAN,
}

# Rows taken by frame, heading, table header and footer
CHROME_ROWS = 5
PADDING_X = 2


def truncate(text: str, width: int) -> str:
    """Clip text to width, marking the cut with an ellipsis."""
    if width <= 0:
        return ""
    if len(text) <= width:
        return text
    return text[: width - 1] + ELLIPSIS


def draw_frame(screen: Screen) -> None:
    width, height = screen.width, screen.height
    if width < 2 or height < 2:
        return
    colour = COLOURS["frame"]
    screen.print_at(FRAME["tl"] + FRAME["h"] * (width - 2) + FRAME["tr"], 0, 0, colour=colour)
    for y in range(1, height - 1):
        screen.print_at(FRAME["v"], 0, y, colour=colour)
        screen.print_at(FRAME["v"], width - 1, y, colour=colour)
    screen.print_at(FRAME["bl"] + FRAME["h"] * (width - 2) + FRAME["br"], 0, height - 1, colour=colour)

    title = truncate(TITLE, width - 2)
    screen.print_at(title, max((width - len(title)) // 2, 1), 0, colour=colour, attr=Screen.A_BOLD)


def layout_columns(widths: tuple[int, int, int], inner_width: int) -> tuple[int, int, int]:
    """Fit the natural column widths into the space inside the frame."""
    course, title, due = widths
    due = min(due, inner_width)
    course = min(course, max(inner_width - due - 1, 0))
    title = max(inner_width - course - due - 1, 0)
    return course, title, due


def format_row(cells: tuple[str, str, str], columns: tuple[int, int, int]) -> str:
    course_w, title_w, due_w = columns
    course, title, due = cells
    return (
        f"{truncate(course, course_w):<{course_w}}"
        f"{truncate(title, title_w):<{title_w}} "
        f"{truncate(due, due_w):<{due_w}}"
    )


def visible_window(selected: int, total: int, rows: int) -> range:
    """Indices of the rows to draw so that the selection stays on screen."""
    if rows <= 0:
        return range(0)
    start = min(max(selected - rows + 1, 0), max(total - rows, 0))
    return range(start, min(start + rows, total))


def draw_message(screen: Screen, lines: list[str], colour: int) -> None:
    inner_width = screen.width - 2 * PADDING_X
    for offset, line in enumerate(lines):
        y = 1 + offset
        if y >= screen.height - 1:
            break
        screen.print_at(truncate(line, inner_width), PADDING_X, y, colour=colour)


def draw_date(screen: Screen, state: ViewState, calendar_date: CalendarDate) -> None:
    inner_width = screen.width - 2 * PADDING_X
    calendar = state.calendar

    screen.print_at(
        truncate(calendar_date.label, inner_width),
        PADDING_X,
        1,
        colour=COLOURS["heading"],
        attr=Screen.A_BOLD,
    )
    position = f"day {calendar.current_date_index + 1}/{len(calendar.dates)}"
    if len(calendar_date.label) + len(position) + 1 < inner_width:
        screen.print_at(
            position, PADDING_X + inner_width - len(position), 1, colour=COLOURS["dim"]
        )

    columns = layout_columns(calendar.column_widths(), inner_width)
    screen.print_at(format_row(HEADER_COLUMNS, columns), PADDING_X, 2, colour=COLOURS["heading"])

    rows = screen.height - CHROME_ROWS
    for line, index in enumerate(
        visible_window(calendar_date.selected, len(calendar_date.events), rows)
    ):
        event = calendar_date.events[index]
        colour = COLOURS["submitted"] if event.submitted else COLOURS["pending"]
        attr = Screen.A_REVERSE if index == calendar_date.selected else Screen.A_NORMAL
        screen.print_at(
            format_row((event.course_name, event.title, event.due_label), columns),
            PADDING_X,
            3 + line,
            colour=colour,
            attr=attr,
        )


def draw_footer(screen: Screen, state: ViewState) -> None:
    inner_width = screen.width - 2 * PADDING_X
    y = screen.height - 2
    if y <= 2:
        return
    if state.notice:
        screen.print_at(truncate(state.notice, inner_width), PADDING_X, y, colour=COLOURS["notice"])
    elif state.error and state.status is Status.READY:
        # Refresh failed but an older calendar is still on screen
        screen.print_at(truncate(state.error, inner_width), PADDING_X, y, colour=COLOURS["error"])
    else:
        screen.print_at(truncate(KEY_HELP, inner_width), PADDING_X, y, colour=COLOURS["dim"])


def render(screen: Screen, state: ViewState) -> None:
    """Draw the whole view and flip it to the terminal."""
    screen.clear_buffer(Screen.COLOUR_WHITE, Screen.A_NORMAL, Screen.COLOUR_BLACK)
    draw_frame(screen)

    if state.status is Status.LOADING:
        draw_message(screen, ["Waiting for data..."], COLOURS["pending"])
    elif state.status is Status.ERROR:
        draw_message(
            screen,
            [state.error or "Failed to load assignments.", "", "Press r to retry or q to quit."],
            COLOURS["error"],
        )
    elif state.calendar.current_date is None:
        draw_message(screen, ["No upcoming assignments."], COLOURS["pending"])
    else:
        draw_date(screen, state, state.calendar.current_date)

    draw_footer(screen, state)
    screen.refresh()
