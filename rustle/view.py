"""Drawing of the diary screen onto a curses window."""

from __future__ import annotations

import calendar
import curses
from datetime import date
from typing import Any

from rustle.model import ActiveWindow, ModelState
from rustle.textarea import TextArea

MENU_LISTING_HEIGHT = 2

POPUP_X = 10
POPUP_WIDTH = 20
POPUP_HEIGHT = 4

CALENDAR_X = 5
CALENDAR_WIDTH = 30
CALENDAR_HEIGHT = 12

EDITBOX_TITLE = "textArea"

PLAIN = "plain"
HEADER = "header"
TODAY = "today"
SELECTED = "selected"

_SQUARE = ("┌", "┐", "└", "┘", "─", "│")
_ROUNDED = ("╭", "╮", "╰", "╯", "─", "│")

_TAG_ATTRS = {
    PLAIN: curses.A_NORMAL,
    HEADER: curses.A_BOLD,
    TODAY: curses.A_UNDERLINE,
    SELECTED: curses.A_BOLD | curses.A_REVERSE,
}

Segment = tuple[str, str]


def menu_title(model: ModelState) -> str:
    """Title of the menu box: the selected date and the number of entries."""
    return f"{model.selected_date_formatted()} - {len(model.listings)} entries"


def menu_limit(height: int) -> int:
    """How many listings fit in a menu column of the given height."""
    if height < MENU_LISTING_HEIGHT:
        raise ValueError(f"menu height {height} is too small")
    return height // MENU_LISTING_HEIGHT - 1


def popup_origin(model: ModelState) -> tuple[int, int]:
    """Column and row of the filename popup, just below the last listing."""
    return POPUP_X, MENU_LISTING_HEIGHT * (len(model.listings) + 1)


def calendar_lines(selected: date, today: date) -> list[list[Segment]]:
    """Month view of ``selected`` as lines of (text, tag) segments.

    The first line is the month header; each following line is one week,
    starting on Sunday. The selected day is tagged ``SELECTED`` and today,
    when it falls in the same month, ``TODAY``.
    """
    month_calendar = calendar.Calendar(firstweekday=calendar.SUNDAY)
    lines: list[list[Segment]] = [
        [(f"{calendar.month_name[selected.month]} {selected.year}", HEADER)]
    ]
    same_month = (today.year, today.month) == (selected.year, selected.month)
    for week in month_calendar.monthdayscalendar(selected.year, selected.month):
        row: list[Segment] = []
        for position, day in enumerate(week):
            if position:
                row.append((" ", PLAIN))
            if day == 0:
                row.append(("  ", PLAIN))
                continue
            if day == selected.day:
                tag = SELECTED
            elif same_month and day == today.day:
                tag = TODAY
            else:
                tag = PLAIN
            row.append((f"{day:>2}", tag))
        lines.append(row)
    return lines


def _put(screen: Any, y: int, x: int, text: str, attr: int = 0) -> None:
    height, width = screen.getmaxyx()
    if not 0 <= y < height or x >= width:
        return
    if x < 0:
        text = text[-x:]
        x = 0
    text = text[: width - x]
    if not text:
        return
    try:
        screen.addstr(y, x, text, attr)
    except curses.error:
        # Writing the bottom-right cell moves the cursor off screen.
        pass


def _fill(screen: Any, top: int, left: int, height: int, width: int, attr: int = 0) -> None:
    if width <= 0:
        return
    for y in range(top, top + height):
        _put(screen, y, left, " " * width, attr)


def _box(
    screen: Any,
    top: int,
    left: int,
    height: int,
    width: int,
    chars: tuple[str, ...],
    attr: int = 0,
    title: str = "",
) -> None:
    if height < 2 or width < 2:
        return
    tl, tr, bl, br, horizontal, vertical = chars
    _put(screen, top, left, tl + horizontal * (width - 2) + tr, attr)
    for y in range(top + 1, top + height - 1):
        _put(screen, y, left, vertical, attr)
        _put(screen, y, left + width - 1, vertical, attr)
    _put(screen, top + height - 1, left, bl + horizontal * (width - 2) + br, attr)
    if title:
        _put(screen, top, left + 1, title[: width - 2], attr)


def _draw_textarea(
    screen: Any, area: TextArea, top: int, left: int, height: int, width: int
) -> None:
    if height <= 0 or width <= 0:
        return
    row, col = area.cursor
    first_row = max(0, row - height + 1)
    first_col = max(0, col - width + 1)
    for offset, line in enumerate(area.lines[first_row : first_row + height]):
        _put(screen, top + offset, left, line[first_col : first_col + width])
    line = area.lines[row]
    under_cursor = line[col] if col < len(line) else " "
    _put(screen, top + row - first_row, left + col - first_col, under_cursor, curses.A_REVERSE)


def _draw_menu(screen: Any, model: ModelState, height: int, width: int) -> None:
    inner_top, inner_left = 1, 1
    inner_height, inner_width = height - 2, max(0, width - 2)
    for idx, listing in enumerate(model.listings[: menu_limit(height)]):
        top = inner_top + idx * MENU_LISTING_HEIGHT
        rows = min(MENU_LISTING_HEIGHT, inner_top + inner_height - top)
        if rows <= 0:
            break
        attr = curses.A_REVERSE if idx == model.selected_file_idx else curses.A_NORMAL
        if attr:
            _fill(screen, top, inner_left, rows, inner_width, attr)
        text = listing.filename[:inner_width]
        _put(screen, top, inner_left + max(0, (inner_width - len(text)) // 2), text, attr)
    focus = curses.A_BOLD if model.active_window is ActiveWindow.MENU else curses.A_NORMAL
    _box(screen, 0, 0, height, width, _SQUARE, focus, menu_title(model))


def _draw_popup(screen: Any, model: ModelState) -> None:
    x, y = popup_origin(model)
    _fill(screen, y, x, POPUP_HEIGHT, POPUP_WIDTH)
    _box(screen, y, x, POPUP_HEIGHT, POPUP_WIDTH, _ROUNDED, curses.A_BOLD)
    _draw_textarea(screen, model.popup, y + 1, x + 1, POPUP_HEIGHT - 2, POPUP_WIDTH - 2)


def _draw_calendar(screen: Any, model: ModelState, height: int) -> None:
    top = height - CALENDAR_HEIGHT
    _fill(screen, top, CALENDAR_X, CALENDAR_HEIGHT, CALENDAR_WIDTH)
    _box(screen, top, CALENDAR_X, CALENDAR_HEIGHT, CALENDAR_WIDTH, _ROUNDED)
    inner_width = CALENDAR_WIDTH - 2
    lines = calendar_lines(model.selected_date, model.today or model.selected_date)
    for offset, segments in enumerate(lines[: CALENDAR_HEIGHT - 2]):
        length = sum(len(text) for text, _ in segments)
        column = CALENDAR_X + 1 + max(0, (inner_width - length) // 2)
        for text, tag in segments:
            _put(screen, top + 1 + offset, column, text, _TAG_ATTRS[tag])
            column += len(text)


def render(model: ModelState, screen: Any) -> None:
    """Draw the whole interface for ``model`` onto ``screen``."""
    height, width = screen.getmaxyx()
    menu_width = width // 3
    edit_width = width - menu_width

    screen.erase()
    _draw_menu(screen, model, height, menu_width)

    focus = curses.A_BOLD if model.active_window is ActiveWindow.EDIT_BOX else curses.A_NORMAL
    _box(screen, 0, menu_width, height, edit_width, _SQUARE, focus, EDITBOX_TITLE)
    _draw_textarea(screen, model.editbox, 1, menu_width + 1, height - 2, edit_width - 2)

    if model.active_window is ActiveWindow.TEXT_POPUP:
        _draw_popup(screen, model)
    if model.calendar_enabled:
        _draw_calendar(screen, model, height)