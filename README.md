# rustle

A small diary for the terminal. Entries are plain text files kept under
`entries/<YYYY-MM-DD>/`, so each day has its own list of notes. The
interface is drawn with the standard `curses` module, so it runs on
POSIX terminals.

## Install

    pip install .

For the tests:

    pip install ".[test]"
    pytest

## Run

    rustle [--root DIR] [--log-file FILE]

- `--root DIR` — directory that holds the `entries` folder (default: the
  current directory).
- `--log-file FILE` — file that receives the log (default: `test.log`).

The selected date starts as today's date in UTC. The screen is split in
two: the selected day's entries (sorted by file name) on the left and an
editor showing the selected entry on the right. The menu title reads
`<date> - <n> entries`.

### Keys in the menu

| Key      | Action                                         |
|----------|------------------------------------------------|
| `q`      | quit                                           |
| `c`      | show or hide the calendar                      |
| `Ctrl-N` | name and create a new entry                    |
| `Tab`    | move to the editor                             |
| Up/Down  | select the previous/next entry                 |

While the calendar is shown, Left/Right move the selected date by a day
and Up/Down by a week; a move that would leave the current month is
ignored. After a move the first entry of the new day is selected.
`Enter` closes the calendar. The calendar shows the month with weeks
starting on Sunday, the selected day highlighted and today underlined.

### Keys in the editor

| Key      | Action                                         |
|----------|------------------------------------------------|
| `Tab`    | back to the menu                               |
| `Ctrl-S` | save the entry (asks for a name if none)       |
| `Ctrl-N` | name and create a new entry                    |

Other keys edit the text: printable characters, `Enter`, `Backspace`,
`Delete`, the arrow keys, `Home`/`End`, and `Ctrl-A`/`Ctrl-E` (line
start/end), `Ctrl-B`/`Ctrl-F`/`Ctrl-P` (cursor movement), `Ctrl-D`
(delete) and `Ctrl-K` (delete to end of line). A saved file holds every
line followed by a newline.

### Naming a new entry

Type the file name and press `Enter` to create it under the selected
day; `Esc` returns to the menu. If no entry was selected, the text
already in the editor is written into the new file; otherwise the new
file starts empty.

## Library use

The state behind the interface can be driven directly, without a
terminal:

    from datetime import date
    from rustle.model import ModelState

    model = ModelState("notes", date(2024, 3, 14))
    model.refresh_menu()
    print(model.selected_date_formatted(), model.selected_listing())

- `rustle.model.ModelState` holds the selected date, the listings, the
  edit box and the filename popup, with methods such as `refresh_menu`,
  `update_selected_by_index`, `save_selected_file`, `save_new_file` and
  `select_next_day`.
- `rustle.textarea.TextArea` is the line buffer behind both text boxes;
  feed it `rustle.textarea.Input` events and read `lines` or `text()`.
- `rustle.app.handle_key` and `rustle.app.update` turn key presses into
  `Message`s and apply them to a model; `decode_key` turns a curses key
  code into an `Input`.
- `rustle.view.render` draws a model onto a curses window;
  `calendar_lines`, `menu_title`, `menu_limit` and `popup_origin` give
  the pieces it draws.

## Limitations

- Entries cannot be deleted or renamed from the interface.
- Edits are kept only until another entry or day is selected; there is
  no prompt about unsaved changes.
- The menu shows only as many entries as fit in the window; there is no
  scrolling.