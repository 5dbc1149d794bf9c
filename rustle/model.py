"""Application state for the diary: dates, entry listings and edit buffers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from enum import Enum, auto
from pathlib import Path
from typing import TextIO

from rustle.textarea import Input, TextArea

log = logging.getLogger(__name__)

ENTRIES_DIR = "entries"


class RunningState(Enum):
    RUNNING = auto()
    DONE = auto()


class ActiveWindow(Enum):
    MENU = auto()
    EDIT_BOX = auto()
    TEXT_POPUP = auto()


@dataclass
class MenuListing:
    """One entry file shown in the menu."""

    path: Path
    filename: str


def _format_date(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def _split_lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


@dataclass
class ModelState:
    """Everything the interface shows and edits."""

    root: Path = field(default_factory=Path.cwd)
    today: date | None = None
    running_state: RunningState = RunningState.RUNNING
    active_window: ActiveWindow = ActiveWindow.MENU
    calendar_enabled: bool = False
    selected_file_idx: int = 0
    listings: list[MenuListing] = field(default_factory=list)
    editbox: TextArea = field(default_factory=TextArea)
    popup: TextArea = field(default_factory=TextArea)

    def __init__(self, root: str | Path | None = None, today: date | None = None) -> None:
        self.root = Path(root) if root is not None else Path.cwd()
        self.today = today if today is not None else datetime.now(timezone.utc).date()
        self.selected_date: date = self.today
        self.running_state = RunningState.RUNNING
        self.active_window = ActiveWindow.MENU
        self.calendar_enabled = False
        self.selected_file_idx = 0
        self.listings = []
        self.editbox = TextArea()
        self.popup = TextArea()

    @property
    def day_dir(self) -> Path:
        """Directory holding the entries of the selected date."""
        return self.root / ENTRIES_DIR / self.selected_date_formatted()

    def done(self) -> bool:
        return self.running_state is RunningState.DONE

    def terminate(self) -> None:
        self.running_state = RunningState.DONE

    def switch_window(self, window: ActiveWindow) -> None:
        self.active_window = window

    def selected_listing(self) -> MenuListing | None:
        """The currently selected listing, if the index points at one."""
        if 0 <= self.selected_file_idx < len(self.listings):
            return self.listings[self.selected_file_idx]
        return None

    def clear_editbox(self) -> None:
        self.editbox = TextArea()

    def clear_popup_textarea(self) -> None:
        self.popup = TextArea()

    def select_next_listing(self) -> None:
        self.update_selected_by_index(self.selected_file_idx + 1)

    def select_prev_listing(self) -> None:
        self.update_selected_by_index(self.selected_file_idx - 1)

    def update_selected_by_index(self, new_idx: int) -> None:
        """Select a listing by position and load its contents into the edit box.

        Out-of-range indices and unreadable files leave the selection unchanged.
        """
        if not 0 <= new_idx < len(self.listings):
            return
        try:
            content = self.listings[new_idx].path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return
        self.selected_file_idx = new_idx
        self.editbox = TextArea(_split_lines(content))

    def update_selected_by_name(self, filename: str) -> None:
        for idx, listing in enumerate(self.listings):
            if listing.filename == filename:
                self.update_selected_by_index(idx)
                return

    def refresh_menu(self) -> None:
        """Reload the listings for the selected date from disk."""
        try:
            entries = sorted(self.day_dir.iterdir(), key=lambda p: p.name)
        except OSError:
            self.listings = []
            self.clear_editbox()
            return
        self.listings = [MenuListing(path=p, filename=p.name) for p in entries]
        log.info("Refreshed; current menu state: %r", self.listings)
        if self.selected_listing() is not None:
            self.update_selected_by_index(self.selected_file_idx)

    def popup_text(self) -> str:
        """First line of the filename popup."""
        return self.popup.lines[0]

    def write_editbox_to_file(self, file: TextIO) -> None:
        """Write every edit-box line, each followed by a newline, and flush."""
        file.write("".join(line + "\n" for line in self.editbox.lines))
        file.flush()

    def save_selected_file(self) -> None:
        listing = self.selected_listing()
        if listing is None:
            raise LookupError("no entry is selected")
        try:
            handle = listing.path.open("w", encoding="utf-8", newline="")
        except OSError:
            return
        with handle:
            self.write_editbox_to_file(handle)

    def selected_date_formatted(self) -> str:
        return _format_date(self.selected_date)

    def save_new_file(self) -> None:
        """Create an entry named after the popup text in the selected day."""
        file_path = self.day_dir / self.popup_text()
        file_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            handle = file_path.open("w", encoding="utf-8", newline="")
        except OSError:
            log.info("Failed to create file")
            return
        filename = file_path.name
        with handle:
            self.listings.append(MenuListing(path=file_path, filename=filename))
            # Only carry the edit box over when nothing is selected, so
            # contents never leak from one entry into another.
            if self.selected_listing() is None:
                self.write_editbox_to_file(handle)
        self.refresh_menu()
        self.update_selected_by_name(filename)

    def input_editbox(self, event: Input) -> None:
        self.editbox.input(event)

    def input_popup(self, event: Input) -> None:
        self.popup.input(event)

    def select_prev_day(self) -> None:
        self._update_date(-1)

    def select_next_day(self) -> None:
        self._update_date(1)

    def select_next_week(self) -> None:
        self._update_date(7)

    def select_prev_week(self) -> None:
        self._update_date(-7)

    def _update_date(self, offset_in_days: int) -> None:
        try:
            result = self.selected_date + timedelta(days=offset_in_days)
        except OverflowError:
            return
        if result.month != self.selected_date.month:
            return
        self.selected_date = result
        self.calendar_enabled = True
        self.refresh_menu()
        self.update_selected_by_index(0)

    def toggle_calendar(self) -> None:
        self.calendar_enabled = not self.calendar_enabled