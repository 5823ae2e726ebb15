"""Status text with inline drawing codes.

Codes are written between two ``^`` characters: ``c#rrggbb`` sets the
foreground, ``b#rrggbb`` the background, ``d`` restores the default colours,
``rX,Y,W,H`` draws a rectangle and ``fN`` moves the pen forward N pixels.
"""

from dataclasses import dataclass

__all__ = [
    "TextRun",
    "SetForeground",
    "SetBackground",
    "ResetColors",
    "Rect",
    "Advance",
    "parse_status",
    "status_width",
]


@dataclass(frozen=True)
class TextRun:
    text: str


@dataclass(frozen=True)
class SetForeground:
    color: str


@dataclass(frozen=True)
class SetBackground:
    color: str


@dataclass(frozen=True)
class ResetColors:
    pass


@dataclass(frozen=True)
class Rect:
    """A filled rectangle; ``x`` is relative to the current pen position."""

    x: int
    y: int
    w: int
    h: int


@dataclass(frozen=True)
class Advance:
    pixels: int


def _atoi(text, pos):
    """Parse a leading integer at ``pos`` the way C's atoi does."""
    n = len(text)
    while pos < n and text[pos] in " \t\n\v\f\r":
        pos += 1
    sign = 1
    if pos < n and text[pos] in "+-":
        if text[pos] == "-":
            sign = -1
        pos += 1
    start = pos
    while pos < n and text[pos].isascii() and text[pos].isdigit():
        pos += 1
    return sign * int(text[start:pos]) if pos > start else 0


def _next_comma(text, pos):
    pos += 1
    while pos < len(text) and text[pos] != ",":
        pos += 1
    return pos


def parse_status(text):
    """Split status text into drawing segments, in drawing order."""
    segments = []
    n = len(text)
    start = 0
    i = 0
    while i < n:
        if text[i] != "^":
            i += 1
            continue
        if i > start:
            segments.append(TextRun(text[start:i]))
        i += 1
        while i < n and text[i] != "^":
            code = text[i]
            if code == "c":
                segments.append(SetForeground(text[i + 1:i + 8]))
                i += 7
            elif code == "b":
                segments.append(SetBackground(text[i + 1:i + 8]))
                i += 7
            elif code == "d":
                segments.append(ResetColors())
            elif code == "r":
                i += 1
                rx = _atoi(text, i)
                i = _next_comma(text, i) + 1
                ry = _atoi(text, i)
                i = _next_comma(text, i) + 1
                rw = _atoi(text, i)
                i = _next_comma(text, i) + 1
                rh = _atoi(text, i)
                segments.append(Rect(rx, ry, rw, rh))
            elif code == "f":
                i += 1
                segments.append(Advance(_atoi(text, i)))
            i += 1
        start = i + 1
        i = start
    if start < n:
        segments.append(TextRun(text[start:]))
    return segments


def status_width(text, text_width):
    """Width in pixels of the status area, including 1px padding each side.

    ``text_width`` gives the unpadded width of a plain string. Only an
    ``f`` that opens a code counts towards the width.
    """
    width = 0
    in_code = False
    start = 0
    n = len(text)
    i = 0
    while i < n:
        if text[i] == "^":
            if not in_code:
                in_code = True
                width += text_width(text[start:i])
                i += 1
                if i < n and text[i] == "f":
                    i += 1
                    width += _atoi(text, i)
            else:
                in_code = False
                start = i + 1
        i += 1
    if not in_code:
        width += text_width(text[start:])
    return width + 2