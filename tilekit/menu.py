"""Interactive menu state: item matching, input editing and keyboard handling.

The menu filters a list of items by the text typed so far. Items that
equal the input come first, then items starting with the first word, then
the other matches. The state here has no display of its own: callers
measure text with a ``text_width`` function and draw what ``visible``
returns.
"""

import re
from dataclasses import dataclass, field
from enum import Enum, auto

from .errors import FatalError

__all__ = [
    "Item",
    "MenuOptions",
    "Key",
    "Outcome",
    "Menu",
    "cistrstr",
    "match_items",
    "read_items",
    "parse_args",
]

BUFSIZ = 8192
VERSION = "5.4"
USAGE = (
    "usage: menu [-bfiv] [-l lines] [-p prompt] [-fn font] [-m monitor]\n"
    "             [-nb color] [-nf color] [-sb color] [-sf color] [-w windowid]"
)

DEFAULT_FONT = "monospace:size=10"
DEFAULT_COLORS = {
    "norm": ("#bbbbbb", "#222222"),
    "sel": ("#eeeeee", "#005577"),
    "out": ("#000000", "#00ffff"),
}
WORD_DELIMITERS = " "

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


def _ascii_lower(text):
    return text.translate(_ASCII_LOWER)


def _atoi(text):
    found = _ATOI.match(text)
    return int(found.group(1)) if found else 0


def _byte_len(text):
    return len(text.encode("utf-8", "surrogateescape"))


@dataclass
class Item:
    """One line of input; ``out`` marks items already printed."""

    text: str
    out: bool = False


def _default_colors():
    return {scheme: list(pair) for scheme, pair in DEFAULT_COLORS.items()}


@dataclass
class MenuOptions:
    """Settings taken from the command line."""

    topbar: bool = True
    fast: bool = False
    case_insensitive: bool = False
    lines: int = 0
    monitor: int = -1
    prompt: str | None = None
    font: str = DEFAULT_FONT
    colors: dict = field(default_factory=_default_colors)
    embed: str | None = None
    word_delimiters: str = WORD_DELIMITERS
    show_version: bool = False


class Key(Enum):
    """Named keys understood by ``Menu.keypress``."""

    HOME = auto()
    END = auto()
    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()
    PRIOR = auto()
    NEXT = auto()
    DELETE = auto()
    BACKSPACE = auto()
    ESCAPE = auto()
    TAB = auto()
    RETURN = auto()


@dataclass
class Outcome:
    """What a key press asks of the caller.

    ``output`` is a line to print, ``exit_status`` a request to quit with
    that status, ``paste`` the selection to fetch (``"primary"`` or
    ``"clipboard"``), and ``redraw`` whether the menu changed.
    """

    output: str | None = None
    exit_status: int | None = None
    paste: str | None = None
    redraw: bool = True


def cistrstr(haystack, needle):
    """Index of ``needle`` in ``haystack`` ignoring ASCII case, or None."""
    if not needle:
        return 0
    pos = _ascii_lower(haystack).find(_ascii_lower(needle))
    return None if pos < 0 else pos


def match_items(items, text, case_insensitive=False):
    """Items containing every word of ``text``: exact, prefix, then others."""
    tokens = [token for token in text.split(" ") if token]
    if case_insensitive:
        fold = _ascii_lower

        def contains(haystack, needle):
            return cistrstr(haystack, needle) is not None
    else:
        def fold(value):
            return value

        def contains(haystack, needle):
            return needle in haystack

    exact, prefix, substring = [], [], []
    folded_text = fold(text)
    first = fold(tokens[0]) if tokens else ""
    for item in items:
        if not all(contains(item.text, token) for token in tokens):
            continue
        folded = fold(item.text)
        if not tokens or folded == folded_text:
            exact.append(item)
        elif folded.startswith(first):
            prefix.append(item)
        else:
            substring.append(item)
    return exact + prefix + substring


def read_items(stream):
    """Read one item per line, dropping the trailing newline."""
    return [Item(line[:-1] if line.endswith("\n") else line) for line in stream]


_COLOR_OPTIONS = {
    "-nb": ("norm", 1),
    "-nf": ("norm", 0),
    "-sb": ("sel", 1),
    "-sf": ("sel", 0),
    "-ob": ("out", 1),
    "-of": ("out", 0),
}


def parse_args(argv):
    """Parse command-line options; raise FatalError with the usage text."""
    options = MenuOptions()
    args = list(argv)
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "-v":
            options.show_version = True
            return options
        if arg == "-b":
            options.topbar = False
        elif arg == "-f":
            options.fast = True
        elif arg == "-i":
            options.case_insensitive = True
        elif i + 1 == len(args):
            raise FatalError(USAGE)
        else:
            value = args[i + 1]
            if arg == "-l":
                options.lines = _atoi(value)
            elif arg == "-m":
                options.monitor = _atoi(value)
            elif arg == "-p":
                options.prompt = value
            elif arg == "-fn":
                options.font = value
            elif arg in _COLOR_OPTIONS:
                scheme, slot = _COLOR_OPTIONS[arg]
                options.colors[scheme][slot] = value
            elif arg == "-w":
                options.embed = value
            else:
                raise FatalError(USAGE)
            i += 1
        i += 1
    return options


_CTRL_KEYS = {
    "a": Key.HOME,
    "b": Key.LEFT,
    "c": Key.ESCAPE,
    "d": Key.DELETE,
    "e": Key.END,
    "f": Key.RIGHT,
    "g": Key.ESCAPE,
    "h": Key.BACKSPACE,
    "i": Key.TAB,
    "n": Key.DOWN,
    "p": Key.UP,
}
_CTRL_RETURN = frozenset("jJmM")
_ALT_KEYS = {
    "g": Key.HOME,
    "G": Key.END,
    "h": Key.UP,
    "j": Key.NEXT,
    "k": Key.PRIOR,
    "l": Key.DOWN,
}


def _is_control(char):
    code = ord(char)
    return code < 32 or code == 127


class Menu:
    """Input text, cursor, matches and the page of matches on show."""

    def __init__(self, items, options=None, text_width=len, width=640, bar_height=22):
        self.items = list(items)
        self.options = options if options is not None else MenuOptions()
        self.text_width = text_width
        self.width = width
        self.bar_height = bar_height
        self.lrpad = max(bar_height - 2, 0)
        lines = self.options.lines
        if lines < 0:
            lines = len(self.items)
        self.lines = min(lines, len(self.items))
        self.height = (self.lines + 1) * bar_height
        prompt = self.options.prompt
        self.prompt_width = self._textw(prompt) - self.lrpad // 4 if prompt else 0
        self.input_width = width // 3
        self.text = ""
        self.cursor = 0
        self.matches = []
        self.curr = self.sel = self.prev = self.next = None
        self.match()

    @property
    def selection(self):
        """The selected item, or None."""
        return None if self.sel is None else self.matches[self.sel]

    def _textw(self, text):
        return self.text_width(text) + self.lrpad

    def _textw_clamp(self, text, limit):
        return min(min(self.text_width(text), limit) + self.lrpad, limit)

    def match(self):
        """Recompute the matches for the current text and select the first."""
        self.matches = match_items(self.items, self.text, self.options.case_insensitive)
        self.curr = self.sel = 0 if self.matches else None
        self.calc_offsets()

    def calc_offsets(self):
        """Find where the next and previous pages start."""
        if self.lines > 0:
            limit = self.lines * self.bar_height
        else:
            limit = self.width - (
                self.prompt_width + self.input_width + self._textw("<") + self._textw(">")
            )

        def span(index):
            if self.lines > 0:
                return self.bar_height
            return self._textw_clamp(self.matches[index].text, limit)

        total = 0
        nxt = self.curr
        while nxt is not None:
            total += span(nxt)
            if total > limit:
                break
            nxt = nxt + 1 if nxt + 1 < len(self.matches) else None
        self.next = nxt

        total = 0
        prv = self.curr
        while prv is not None and prv > 0:
            total += span(prv - 1)
            if total > limit:
                break
            prv -= 1
        self.prev = prv

    def insert(self, text):
        """Insert ``text`` at the cursor unless the buffer would overflow."""
        if _byte_len(self.text) + _byte_len(text) > BUFSIZ - 1:
            return
        self.text = self.text[: self.cursor] + text + self.text[self.cursor:]
        self.cursor += len(text)
        self.match()

    def _delete_before(self, count):
        start = self.cursor - count
        self.text = self.text[:start] + self.text[self.cursor:]
        self.cursor = start
        self.match()

    def delete_back(self):
        """Delete the character before the cursor; False if there is none."""
        if self.cursor == 0:
            return False
        self._delete_before(1)
        return True

    def delete_forward(self):
        """Delete the character under the cursor; False if at the end."""
        if self.cursor >= len(self.text):
            return False
        self.cursor += 1
        return self.delete_back()

    def kill_to_end(self):
        """Delete from the cursor to the end of the input."""
        self.text = self.text[: self.cursor]
        self.match()

    def kill_to_start(self):
        """Delete from the start of the input to the cursor."""
        self._delete_before(self.cursor)

    def delete_word(self):
        """Delete delimiters and then the word before the cursor."""
        delims = self.options.word_delimiters
        while self.cursor > 0 and self.text[self.cursor - 1] in delims:
            self._delete_before(1)
        while self.cursor > 0 and self.text[self.cursor - 1] not in delims:
            self._delete_before(1)

    def move_word_edge(self, direction):
        """Move to the start of this word (direction < 0) or its end."""
        delims = self.options.word_delimiters
        text = self.text
        if direction < 0:
            while self.cursor > 0 and text[self.cursor - 1] in delims:
                self.cursor -= 1
            while self.cursor > 0 and text[self.cursor - 1] not in delims:
                self.cursor -= 1
        else:
            while self.cursor < len(text) and text[self.cursor] in delims:
                self.cursor += 1
            while self.cursor < len(text) and text[self.cursor] not in delims:
                self.cursor += 1

    def _insert_typed(self, text):
        if text and not _is_control(text[0]):
            self.insert(text)

    def keypress(self, key, text="", ctrl=False, alt=False, shift=False):
        """Handle one key and return what the caller should do.

        ``key`` is a ``Key``, a one-character key name such as ``"a"``, or
        None for text composed by an input method. ``text`` is the string
        the key produces.
        """
        if key is None:
            self._insert_typed(text)
            return Outcome()

        if ctrl:
            if key in _CTRL_RETURN:
                key = Key.RETURN
                ctrl = False
            elif key in _CTRL_KEYS:
                key = _CTRL_KEYS[key]
            elif key == "k":
                self.kill_to_end()
                return Outcome()
            elif key == "u":
                self.kill_to_start()
                return Outcome()
            elif key == "w":
                self.delete_word()
                return Outcome()
            elif key in ("y", "Y"):
                return Outcome(paste="clipboard" if shift else "primary", redraw=False)
            elif key is Key.LEFT:
                self.move_word_edge(-1)
                return Outcome()
            elif key is Key.RIGHT:
                self.move_word_edge(+1)
                return Outcome()
            elif key is Key.RETURN:
                pass
            elif key == "[":
                return Outcome(exit_status=1, redraw=False)
            else:
                return Outcome(redraw=False)
        elif alt:
            if key == "b":
                self.move_word_edge(-1)
                return Outcome()
            if key == "f":
                self.move_word_edge(+1)
                return Outcome()
            if key in _ALT_KEYS:
                key = _ALT_KEYS[key]
            else:
                return Outcome(redraw=False)

        if not isinstance(key, Key):
            self._insert_typed(text)
            return Outcome()
        return self._named_key(key, ctrl, shift)

    def _named_key(self, key, ctrl, shift):
        quiet = Outcome(redraw=False)
        if key is Key.DELETE:
            if self.cursor >= len(self.text):
                return quiet
            self.cursor += 1
            key = Key.BACKSPACE
        if key is Key.BACKSPACE:
            if self.cursor == 0:
                return quiet
            self._delete_before(1)
        elif key is Key.END:
            self._end()
        elif key is Key.ESCAPE:
            return Outcome(exit_status=1, redraw=False)
        elif key is Key.HOME:
            if self.sel == (0 if self.matches else None):
                self.cursor = 0
            else:
                self.sel = self.curr = 0
                self.calc_offsets()
        elif key is Key.LEFT:
            if self.cursor > 0 and (not self.sel or self.lines > 0):
                self.cursor -= 1
            elif self.lines > 0:
                return quiet
            else:
                self._up()
        elif key is Key.UP:
            self._up()
        elif key is Key.NEXT:
            if self.next is None:
                return quiet
            self.sel = self.curr = self.next
            self.calc_offsets()
        elif key is Key.PRIOR:
            if self.prev is None:
                return quiet
            self.sel = self.curr = self.prev
            self.calc_offsets()
        elif key is Key.RETURN:
            chosen = self.selection
            output = chosen.text if chosen is not None and not shift else self.text
            if not ctrl:
                return Outcome(output=output, exit_status=0, redraw=False)
            if chosen is not None:
                chosen.out = True
            return Outcome(output=output)
        elif key is Key.RIGHT:
            if self.cursor < len(self.text):
                self.cursor += 1
            elif self.lines > 0:
                return quiet
            else:
                self._down()
        elif key is Key.DOWN:
            self._down()
        elif key is Key.TAB:
            chosen = self.selection
            if chosen is None:
                return quiet
            completed = chosen.text
            while _byte_len(completed) > BUFSIZ - 1:
                completed = completed[:-1]
            self.text = completed
            self.cursor = len(completed)
            self.match()
        return Outcome()

    def _end(self):
        if self.cursor < len(self.text):
            self.cursor = len(self.text)
            return
        if self.next is not None:
            self.curr = len(self.matches) - 1
            self.calc_offsets()
            self.curr = self.prev
            self.calc_offsets()
            while self.next is not None and self.curr + 1 < len(self.matches):
                self.curr += 1
                self.calc_offsets()
        self.sel = len(self.matches) - 1 if self.matches else None

    def _up(self):
        if self.sel:
            self.sel -= 1
            if self.sel + 1 == self.curr:
                self.curr = self.prev
                self.calc_offsets()

    def _down(self):
        if self.sel is not None and self.sel + 1 < len(self.matches):
            self.sel += 1
            if self.sel == self.next:
                self.curr = self.next
                self.calc_offsets()

    def paste(self, data):
        """Insert pasted data up to its first newline."""
        newline = data.find("\n")
        self.insert(data if newline < 0 else data[:newline])

    def visible(self):
        """The matches on the current page, in order."""
        if self.curr is None:
            return []
        end = self.next if self.next is not None else len(self.matches)
        return self.matches[self.curr:end]