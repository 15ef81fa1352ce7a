"""Screen widgets drawn onto a curses window."""

from __future__ import annotations

import curses
import textwrap
from dataclasses import dataclass
from enum import Enum, IntEnum, auto

CURSOR = "█"


@dataclass(frozen=True)
class Rect:
    """A rectangular screen region in character cells."""

    x: int
    y: int
    width: int
    height: int


class StatusType(Enum):
    """Kinds of status message, each shown in its own colour."""

    INFO = auto()
    SUCCESS = auto()
    ERROR = auto()
    LOADING = auto()
    HELP = auto()


class _Color(IntEnum):
    YELLOW = 1
    GREEN = 2
    RED = 3
    CYAN = 4
    DARK_GRAY = 5
    HIGHLIGHT = 6
    GAUGE_FILLED = 7
    GAUGE_EMPTY = 8


_BOLD_COLORS = {_Color.DARK_GRAY, _Color.HIGHLIGHT, _Color.GAUGE_FILLED, _Color.GAUGE_EMPTY}

_STATUS_COLORS = {
    StatusType.INFO: _Color.YELLOW,
    StatusType.SUCCESS: _Color.GREEN,
    StatusType.ERROR: _Color.RED,
    StatusType.LOADING: _Color.CYAN,
    StatusType.HELP: _Color.DARK_GRAY,
}


def _init_colors() -> None:
    """Register the colour pairs used by the widgets."""
    if not curses.has_colors():
        return
    curses.start_color()
    try:
        curses.use_default_colors()
        background = -1
    except curses.error:
        background = curses.COLOR_BLACK
    pairs = {
        _Color.YELLOW: (curses.COLOR_YELLOW, background),
        _Color.GREEN: (curses.COLOR_GREEN, background),
        _Color.RED: (curses.COLOR_RED, background),
        _Color.CYAN: (curses.COLOR_CYAN, background),
        _Color.DARK_GRAY: (curses.COLOR_BLACK, background),
        _Color.HIGHLIGHT: (curses.COLOR_WHITE, curses.COLOR_BLUE),
        _Color.GAUGE_FILLED: (curses.COLOR_BLACK, curses.COLOR_CYAN),
        _Color.GAUGE_EMPTY: (curses.COLOR_CYAN, curses.COLOR_BLACK),
    }
    for color, (foreground, back) in pairs.items():
        curses.init_pair(color, foreground, back)


def _attr(color: _Color) -> int:
    """Attribute for ``color``; plain when colours are not available."""
    try:
        value = curses.color_pair(color)
    except curses.error:
        value = 0
    if color in _BOLD_COLORS:
        value |= curses.A_BOLD
    return value


def _put(window, y: int, x: int, text: str, width: int, attr: int = 0) -> None:
    """Write at most ``width`` characters of ``text``, ignoring edge errors."""
    if width <= 0 or not text:
        return
    try:
        window.addnstr(y, x, text, width, attr)
    except curses.error:
        pass


def _inner(area: Rect) -> Rect:
    """The part of ``area`` inside a one-cell border."""
    return Rect(area.x + 1, area.y + 1, max(area.width - 2, 0), max(area.height - 2, 0))


def _draw_block(
    window,
    area: Rect,
    title: str | None = None,
    attr: int = 0,
    bottom_title: str | None = None,
) -> None:
    """Draw a bordered box with optional titles on its top and bottom edges."""
    if area.width < 2 or area.height < 2:
        return
    span = area.width - 2
    bottom = area.y + area.height - 1
    right = area.x + area.width - 1
    _put(window, area.y, area.x, "┌" + "─" * span + "┐", area.width, attr)
    for row in range(area.y + 1, bottom):
        _put(window, row, area.x, "│", 1, attr)
        _put(window, row, right, "│", 1, attr)
    _put(window, bottom, area.x, "└" + "─" * span + "┘", area.width, attr)
    if title:
        _put(window, area.y, area.x + 1, title, span, attr)
    if bottom_title:
        _put(window, bottom, area.x + 1, bottom_title, span, attr)


def _wrap(text: str, width: int) -> list[str]:
    lines: list[str] = []
    for paragraph in text.split("\n"):
        lines.extend(textwrap.wrap(paragraph.strip(), width) or [""])
    return lines


def _draw_paragraph(window, area: Rect, text: str, attr: int = 0, wrap: bool = False) -> None:
    """Draw text line by line into ``area``, clipping or wrapping it."""
    if area.width <= 0 or area.height <= 0:
        return
    lines = _wrap(text, area.width) if wrap else text.split("\n")
    for row, line in zip(range(area.y, area.y + area.height), lines):
        _put(window, row, area.x, line, area.width, attr)


def _draw_list(
    window,
    area: Rect,
    items: list[tuple[str, int]],
    selected: int | None,
    highlight_attr: int,
) -> None:
    """Draw list items, scrolled so that the selected one is visible."""
    if area.width <= 0 or area.height <= 0 or not items:
        return
    offset = 0
    if selected is not None:
        selected = min(selected, len(items) - 1)
        offset = max(0, selected - area.height + 1)
    rows = range(area.y, area.y + area.height)
    for row, (position, (text, attr)) in zip(rows, enumerate(items[offset:], start=offset)):
        if position == selected:
            _put(window, row, area.x, text.ljust(area.width), area.width, highlight_attr)
        else:
            _put(window, row, area.x, text, area.width, attr)


def _draw_gauge(
    window,
    area: Rect,
    ratio: float,
    label: str,
    filled_attr: int,
    empty_attr: int,
) -> None:
    """Draw a horizontal progress bar with a centred label."""
    if area.width <= 0 or area.height <= 0:
        return
    filled = int(area.width * min(max(ratio, 0.0), 1.0))
    label_row = area.y + area.height // 2
    for row in range(area.y, area.y + area.height):
        text = label[: area.width].center(area.width) if row == label_row else " " * area.width
        _put(window, row, area.x, text[:filled], filled, filled_attr)
        _put(window, row, area.x + filled, text[filled:], area.width - filled, empty_attr)


@dataclass
class SearchInput:
    """A bordered single-line text field."""

    value: str
    title: str = "Search"
    show_cursor: bool = True
    active: bool = True

    def text(self) -> str:
        """The displayed text, with a block cursor when enabled."""
        return self.value + CURSOR if self.show_cursor else self.value

    def render(self, window, area: Rect) -> None:
        """Draw the field into ``area``."""
        attr = _attr(_Color.YELLOW) if self.active else 0
        _draw_block(window, area, f" {self.title} ", attr)
        _draw_paragraph(window, _inner(area), self.text(), attr)


@dataclass
class StatusBar:
    """A coloured message line, optionally framed."""

    message: str
    status_type: StatusType
    show_border: bool = True

    def render(self, window, area: Rect) -> None:
        """Draw the message into ``area``."""
        attr = _attr(_STATUS_COLORS[self.status_type])
        if self.show_border:
            _draw_block(window, area, " Status ", attr)
            _draw_paragraph(window, _inner(area), self.message, attr)
        else:
            _draw_paragraph(window, area, self.message, attr)