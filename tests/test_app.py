import curses
from datetime import date, timedelta

import pytest

from rustle.app import Message, MessageKind, decode_key, handle_key, main, update
from rustle.model import ActiveWindow, ModelState
from rustle.textarea import Input, Key

DAY = date(2024, 3, 15)


def char(c, ctrl=False):
    return Input(key=Key.CHAR, char=c, ctrl=ctrl)


@pytest.fixture
def empty(tmp_path):
    state = ModelState(root=tmp_path, today=DAY)
    state.refresh_menu()
    return state


@pytest.fixture
def filled(tmp_path):
    day_dir = tmp_path / "entries" / "2024-03-15"
    day_dir.mkdir(parents=True)
    (day_dir / "a.txt").write_text("alpha\n")
    (day_dir / "b.txt").write_text("beta\n")
    state = ModelState(root=tmp_path, today=DAY)
    state.refresh_menu()
    return state


@pytest.mark.parametrize(
    "code, expected",
    [
        ("a", Input(key=Key.CHAR, char="a")),
        ("\x13", Input(key=Key.CHAR, char="s", ctrl=True)),
        ("\x0e", Input(key=Key.CHAR, char="n", ctrl=True)),
        ("\t", Input(key=Key.TAB)),
        ("\n", Input(key=Key.ENTER)),
        ("\x1b", Input(key=Key.ESC)),
        ("\x7f", Input(key=Key.BACKSPACE)),
        (curses.KEY_UP, Input(key=Key.UP)),
        (curses.KEY_LEFT, Input(key=Key.LEFT)),
        (curses.KEY_DC, Input(key=Key.DELETE)),
        (ord("q"), Input(key=Key.CHAR, char="q")),
        (curses.KEY_RESIZE, Input()),
    ],
)
def test_decode_key(code, expected):
    assert decode_key(code) == expected


def test_message_switch_requires_window():
    with pytest.raises(ValueError):
        Message(MessageKind.SWITCH_WINDOWS)
    with pytest.raises(ValueError):
        Message(MessageKind.QUIT, ActiveWindow.MENU)


@pytest.mark.parametrize(
    "event, expected",
    [
        (char("q"), Message(MessageKind.QUIT)),
        (char("c"), Message(MessageKind.TOGGLE_CALENDAR)),
        (char("n", ctrl=True), Message(MessageKind.OPEN_FILENAME_EDITBOX)),
        (Input(key=Key.TAB), Message(MessageKind.SWITCH_WINDOWS, ActiveWindow.EDIT_BOX)),
        (Input(key=Key.UP), Message(MessageKind.UP)),
        (Input(key=Key.DOWN), Message(MessageKind.DOWN)),
        (Input(key=Key.LEFT), Message(MessageKind.LEFT)),
        (Input(key=Key.RIGHT), Message(MessageKind.RIGHT)),
        (Input(key=Key.ENTER), Message(MessageKind.ENTER)),
        (char("x"), None),
        (char("n"), None),
    ],
)
def test_handle_key_menu(empty, event, expected):
    assert handle_key(empty, event) == expected


def test_handle_key_menu_ignores_text(empty):
    handle_key(empty, char("x"))
    assert empty.editbox.text() == ""


@pytest.mark.parametrize(
    "event, expected",
    [
        (Input(key=Key.TAB), Message(MessageKind.SWITCH_WINDOWS, ActiveWindow.MENU)),
        (char("s", ctrl=True), Message(MessageKind.SAVE_FILE)),
        (char("n", ctrl=True), Message(MessageKind.OPEN_FILENAME_EDITBOX)),
    ],
)
def test_handle_key_editbox_commands(empty, event, expected):
    empty.switch_window(ActiveWindow.EDIT_BOX)
    assert handle_key(empty, event) == expected


def test_handle_key_editbox_types(empty):
    empty.switch_window(ActiveWindow.EDIT_BOX)
    assert handle_key(empty, char("q")) is None
    assert handle_key(empty, char("c")) is None
    assert empty.editbox.text() == "qc"


def test_handle_key_popup(empty):
    empty.switch_window(ActiveWindow.TEXT_POPUP)
    assert handle_key(empty, Input(key=Key.ESC)) == Message(
        MessageKind.SWITCH_WINDOWS, ActiveWindow.MENU
    )
    assert handle_key(empty, Input(key=Key.ENTER)) == Message(MessageKind.CREATE_FILE)
    assert handle_key(empty, char("a")) is None
    assert empty.popup_text() == "a"


def test_update_quit(empty):
    assert update(empty, Message(MessageKind.QUIT)) is None
    assert empty.done()


def test_update_switch_and_popup(empty):
    update(empty, Message(MessageKind.SWITCH_WINDOWS, ActiveWindow.EDIT_BOX))
    assert empty.active_window is ActiveWindow.EDIT_BOX
    update(empty, Message(MessageKind.OPEN_FILENAME_EDITBOX))
    assert empty.active_window is ActiveWindow.TEXT_POPUP


def test_update_toggle_calendar(empty):
    update(empty, Message(MessageKind.TOGGLE_CALENDAR))
    assert empty.calendar_enabled
    update(empty, Message(MessageKind.TOGGLE_CALENDAR))
    assert not empty.calendar_enabled


def test_update_save_without_selection_asks_for_name(empty):
    follow_up = update(empty, Message(MessageKind.SAVE_FILE))
    assert follow_up == Message(MessageKind.OPEN_FILENAME_EDITBOX)
    update(empty, follow_up)
    assert empty.active_window is ActiveWindow.TEXT_POPUP


def test_update_save_selected_writes_file(filled):
    filled.switch_window(ActiveWindow.EDIT_BOX)
    handle_key(filled, char("!"))
    assert update(filled, Message(MessageKind.SAVE_FILE)) is None
    assert filled.listings[0].path.read_text() == "!alpha\n"


def test_update_create_file(empty):
    empty.switch_window(ActiveWindow.TEXT_POPUP)
    for c in "note":
        handle_key(empty, char(c))
    msg = handle_key(empty, Input(key=Key.ENTER))
    assert update(empty, msg) is None
    assert empty.active_window is ActiveWindow.EDIT_BOX
    assert [listing.filename for listing in empty.listings] == ["note"]
    assert (empty.day_dir / "note").exists()


def test_update_up_down_move_listing_in_menu(filled):
    update(filled, Message(MessageKind.DOWN))
    assert filled.selected_listing().filename == "b.txt"
    assert filled.editbox.text() == "beta"
    update(filled, Message(MessageKind.UP))
    assert filled.selected_listing().filename == "a.txt"


def test_update_up_down_ignored_outside_menu(filled):
    filled.switch_window(ActiveWindow.EDIT_BOX)
    update(filled, Message(MessageKind.DOWN))
    assert filled.selected_file_idx == 0


def test_update_arrows_move_date_with_calendar(empty):
    empty.toggle_calendar()
    update(empty, Message(MessageKind.UP))
    assert empty.selected_date == DAY - timedelta(days=7)
    update(empty, Message(MessageKind.DOWN))
    assert empty.selected_date == DAY
    update(empty, Message(MessageKind.RIGHT))
    assert empty.selected_date == DAY + timedelta(days=1)
    update(empty, Message(MessageKind.LEFT))
    assert empty.selected_date == DAY


def test_update_left_right_ignored_without_calendar(empty):
    update(empty, Message(MessageKind.LEFT))
    update(empty, Message(MessageKind.RIGHT))
    assert empty.selected_date == DAY


def test_update_enter_closes_calendar_only(empty):
    update(empty, Message(MessageKind.ENTER))
    assert not empty.calendar_enabled
    empty.toggle_calendar()
    update(empty, Message(MessageKind.ENTER))
    assert not empty.calendar_enabled


def test_update_other_does_nothing(empty):
    assert update(empty, Message(MessageKind.OTHER)) is None
    assert not empty.done()
    assert empty.active_window is ActiveWindow.MENU


def test_main_rejects_unknown_option():
    with pytest.raises(SystemExit) as info:
        main(["--no-such-option"])
    assert info.value.code == 2