"""Event loop, key handling and command-line entry point."""

from __future__ import annotations

import argparse
import curses
import logging
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Any

from rustle.model import ActiveWindow, ModelState
from rustle.textarea import Input, Key
from rustle.view import render

POLL_MS = 250
ESC_DELAY_MS = 25
DEFAULT_LOG_FILE = "test.log"


class MessageKind(Enum):
    SWITCH_WINDOWS = auto()
    OPEN_FILENAME_EDITBOX = auto()
    CREATE_FILE = auto()
    SAVE_FILE = auto()
    LEFT = auto()
    RIGHT = auto()
    DOWN = auto()
    UP = auto()
    SAVE = auto()
    QUIT = auto()
    TOGGLE_CALENDAR = auto()
    ENTER = auto()
    OTHER = auto()


@dataclass(frozen=True)
class Message:
    """An action for ``update``; window switches carry their target."""

    kind: MessageKind
    window: ActiveWindow | None = None

    def __post_init__(self) -> None:
        if (self.kind is MessageKind.SWITCH_WINDOWS) != (self.window is not None):
            raise ValueError("a target window goes with window switches only")


_NAMED_CHARS = {
    "\t": Key.TAB,
    "\n": Key.ENTER,
    "\r": Key.ENTER,
    "\x1b": Key.ESC,
    "\x7f": Key.BACKSPACE,
    "\b": Key.BACKSPACE,
}

_NAMED_CODES = {
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    curses.KEY_HOME: Key.HOME,
    curses.KEY_END: Key.END,
    curses.KEY_BACKSPACE: Key.BACKSPACE,
    curses.KEY_DC: Key.DELETE,
    curses.KEY_ENTER: Key.ENTER,
}


def decode_key(code: str | int) -> Input:
    """Turn a curses key code (``get_wch`` or ``getch`` result) into an Input."""
    if isinstance(code, int):
        if code in _NAMED_CODES:
            return Input(key=_NAMED_CODES[code])
        if not 0 <= code < 256:
            return Input()
        code = chr(code)
    if code in _NAMED_CHARS:
        return Input(key=_NAMED_CHARS[code])
    if len(code) != 1:
        return Input()
    ordinal = ord(code)
    if ordinal < 32:
        if 1 <= ordinal <= 26:
            return Input(key=Key.CHAR, char=chr(ordinal + 96), ctrl=True)
        return Input()
    return Input(key=Key.CHAR, char=code)


def _is_char(event: Input, char: str, ctrl: bool | None = None) -> bool:
    if event.key is not Key.CHAR or event.char != char:
        return False
    return ctrl is None or event.ctrl == ctrl


def handle_key(model: ModelState, event: Input) -> Message | None:
    """Interpret a key press for the active window.

    Keys that are not commands go to the focused text buffer.
    """
    window = model.active_window
    if window is ActiveWindow.EDIT_BOX:
        if event.key is Key.TAB:
            return Message(MessageKind.SWITCH_WINDOWS, ActiveWindow.MENU)
        if _is_char(event, "s", ctrl=True):
            return Message(MessageKind.SAVE_FILE)
        if _is_char(event, "n", ctrl=True):
            return Message(MessageKind.OPEN_FILENAME_EDITBOX)
        model.input_editbox(event)
        return None

    if window is ActiveWindow.TEXT_POPUP:
        if event.key is Key.ESC:
            return Message(MessageKind.SWITCH_WINDOWS, ActiveWindow.MENU)
        if event.key is Key.ENTER:
            return Message(MessageKind.CREATE_FILE)
        model.input_popup(event)
        return None

    if _is_char(event, "q"):
        return Message(MessageKind.QUIT)
    if _is_char(event, "c"):
        return Message(MessageKind.TOGGLE_CALENDAR)
    if _is_char(event, "n", ctrl=True):
        return Message(MessageKind.OPEN_FILENAME_EDITBOX)
    if event.key is Key.TAB:
        return Message(MessageKind.SWITCH_WINDOWS, ActiveWindow.EDIT_BOX)
    arrows = {
        Key.UP: MessageKind.UP,
        Key.DOWN: MessageKind.DOWN,
        Key.LEFT: MessageKind.LEFT,
        Key.RIGHT: MessageKind.RIGHT,
        Key.ENTER: MessageKind.ENTER,
    }
    kind = arrows.get(event.key)
    return Message(kind) if kind is not None else None


def update(model: ModelState, msg: Message) -> Message | None:
    """Apply a message to the model; return a follow-up message, if any."""
    match msg.kind:
        case MessageKind.QUIT:
            model.terminate()
        case MessageKind.SWITCH_WINDOWS:
            model.switch_window(msg.window)
        case MessageKind.TOGGLE_CALENDAR:
            model.toggle_calendar()
        case MessageKind.OPEN_FILENAME_EDITBOX:
            model.switch_window(ActiveWindow.TEXT_POPUP)
        case MessageKind.CREATE_FILE:
            model.save_new_file()
            model.refresh_menu()
            model.switch_window(ActiveWindow.EDIT_BOX)
        case MessageKind.SAVE_FILE:
            if model.selected_listing() is None:
                return Message(MessageKind.OPEN_FILENAME_EDITBOX)
            model.save_selected_file()
        case MessageKind.UP:
            if model.calendar_enabled:
                model.select_prev_week()
            elif model.active_window is ActiveWindow.MENU:
                model.select_prev_listing()
        case MessageKind.DOWN:
            if model.calendar_enabled:
                model.select_next_week()
            elif model.active_window is ActiveWindow.MENU:
                model.select_next_listing()
        case MessageKind.LEFT:
            if model.calendar_enabled:
                model.select_prev_day()
        case MessageKind.RIGHT:
            if model.calendar_enabled:
                model.select_next_day()
        case MessageKind.ENTER:
            if model.calendar_enabled:
                model.toggle_calendar()
    return None


def _event_loop(screen: Any, model: ModelState) -> None:
    curses.raw()
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    try:
        curses.set_escdelay(ESC_DELAY_MS)
    except curses.error:
        pass
    screen.keypad(True)
    screen.timeout(POLL_MS)

    model.refresh_menu()
    while not model.done():
        render(model, screen)
        screen.refresh()
        try:
            code = screen.get_wch()
        except curses.error:
            continue
        msg = handle_key(model, decode_key(code))
        while msg is not None:
            msg = update(model, msg)


def run(root: str | Path | None = None) -> None:
    """Run the diary interface until the user quits.

    The terminal is restored even if the loop raises.
    """
    curses.wrapper(_event_loop, ModelState(root))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="rustle", description="Terminal diary with entries organised by date."
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="directory that holds the 'entries' folder (default: current directory)",
    )
    parser.add_argument(
        "--log-file", default=DEFAULT_LOG_FILE, help="file that receives the log"
    )
    args = parser.parse_args(argv)
    logging.basicConfig(filename=args.log_file, level=logging.INFO)
    try:
        run(args.root)
    except Exception as exc:  # report and exit cleanly, like the terminal session
        print(exc)
    return 0