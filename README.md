# tilekit

tilekit holds the logic of a tag-based tiling desktop as plain Python objects:
the client, monitor and focus handling of a tiling window manager, a set of
gap-aware layouts, the matching and editing engine of a keyboard-driven menu,
a parser for status-bar text with inline drawing codes, and `stest`, a filter
that prints the files that pass a set of tests.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `tilekit.model`: `Client`, `Monitor`, `Layout`, `Rule`, `SizeHints` and
  `Settings`, plus `intersect` and `apply_size_hints`, which applies size
  hints (base size, increments, aspect ratio, minimum and maximum) to a
  requested geometry and reports whether it changed. `SizeHints.from_hints`
  builds hints from the optional fields of a normal-hints property.
- `tilekit.wm`: `WindowManager`, which keeps clients on monitors and handles
  rules (`apply_rules`), `manage`/`unmanage`, the focus stack (`focus`,
  `focus_stack`), tags and views (`view`, `toggle_view`, `tag`, `toggle_tag`),
  `inc_nmaster`, `set_mfact`, `set_layout`, `toggle_floating`, `toggle_bar`,
  `zoom`, `rect_to_monitor`, gap control (`set_gaps`, `inc_gaps`,
  `inc_inner_gaps`, `inc_outer_gaps`, `toggle_gaps`, `default_gaps`),
  `spawn` to start a command in a new session, and `quit`.
- `tilekit.layouts`: the arrange functions `tile`, `monocle`, `bstack`,
  `bstackhoriz`, `centeredmaster`, `centeredfloatingmaster`, `deck`,
  `fibonacci`, `spiral`, `dwindle`, `grid`, `gaplessgrid`, `horizgrid` and
  `nrowgrid`, each called as `layout(wm, monitor)`, and `get_gaps`, which
  returns the effective gaps and tiled-client count.
- `tilekit.statusbar`: `parse_status` splits status text into `TextRun`,
  `SetForeground`, `SetBackground`, `ResetColors`, `Rect` and `Advance`
  pieces; `status_width` measures it with a caller-supplied text-width
  function.
- `tilekit.menu`: `Menu`, the input line and item list of a dynamic menu,
  with `match_items`, `cistrstr`, `read_items` and `parse_args` on their own.
- `tilekit.stest`: the file filter described below.
- `tilekit.errors`: `FatalError` and `format_fatal`.

## A window manager session

`Settings` comes with the stock appearance values and two rules: windows whose
class contains `Gimp` float, and `Firefox` goes to tag 9. Its default layout
list holds only the floating layout, so pass the layouts you want:

```python
from tilekit.layouts import monocle, tile
from tilekit.model import Client, Layout, Settings
from tilekit.wm import WindowManager

settings = Settings(layouts=[Layout("[]=", tile), Layout("[M]", monocle), Layout("><>")])
wm = WindowManager(1920, 1080, 20, settings)

term = wm.manage(Client(), "St", "st")
editor = wm.manage(Client(), "St", "st")

wm.inc_nmaster(+1)     # two clients in the master area
wm.set_mfact(0.05)     # widen the master area
wm.view(1 << 1)        # switch to the second tag
wm.toggle_gaps()
print(term.x, term.y, term.w, term.h)
```

## The menu engine

Items matching every space-separated word of the input are listed with exact
matches first, then those starting with the first word, then the rest.

```python
import io
from tilekit.menu import Key, Menu, MenuOptions, read_items

items = read_items(io.StringIO("firefox\nfoot\nfile-roller\n"))
menu = Menu(items, MenuOptions(), len, 800, 20)
menu.insert("fo")
print([item.text for item in menu.visible()])
outcome = menu.keypress(Key.RETURN)
print(outcome.output, outcome.exit_status)
```

`Menu.keypress` takes a `Key`, a one-character key name, or `None` for
composed text, with `ctrl`, `alt` and `shift` flags, and returns an `Outcome`
telling the caller what to print, whether to exit and with what status, which
selection to paste, and whether to redraw.

## Status text

Codes sit between two `^` characters: `c#rrggbb` sets the foreground,
`b#rrggbb` the background, `d` restores the default colours, `rX,Y,W,H` draws
a rectangle and `fN` moves the pen forward N pixels.

```python
from tilekit.statusbar import parse_status
parse_status("^c#ff0000^warn^d^ ok")
```

## stest

`stest` prints each path, given as arguments or read one per line from
standard input, that passes every test selected by its flags:

```
stest [-abcdefghlpqrsuvwx] [-n file] [-o file] [file...]
```

| flag | passes if the file |
|------|--------------------|
| `-a` | may be hidden (otherwise names starting with `.` are skipped) |
| `-b` | is a block special file |
| `-c` | is a character special file |
| `-d` | is a directory |
| `-e` | exists |
| `-f` | is a regular file |
| `-g` | has its set-group-id bit set |
| `-h` | is a symbolic link |
| `-n file` | is newer than `file` |
| `-o file` | is older than `file` |
| `-p` | is a named pipe |
| `-r` | is readable |
| `-s` | is not empty |
| `-u` | has its set-user-id bit set |
| `-w` | is writable |
| `-x` | is executable |

`-l` tests the entries of each directory argument instead of the directory
itself, `-v` inverts the result, and `-q` prints nothing and exits at the first
match. The exit status is 0 when something matched, 1 when nothing did and 2 on
a usage error. For example, to list the executables on your `PATH`:

```
echo "$PATH" | tr ':' '\n' | xargs stest -flx
```

## What tilekit does not do

- It does not connect to a display server. Nothing opens windows, grabs keys
  or draws; the window manager and the menu are state objects that a front end
  must feed with events and render itself.
- There is no window-manager command and no menu command; `stest` is the only
  program installed.
- There is no key-binding table or ready-made configuration beyond the
  defaults in `Settings` and `MenuOptions`: a front end maps keys to
  `WindowManager` methods and to `Menu.keypress` itself.