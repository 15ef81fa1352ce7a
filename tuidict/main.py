"""Terminal front end: the event loop and its entry point."""

from __future__ import annotations

import argparse
import curses
import sys

from .components import _init_colors
from .events import App, Key
from .pages import draw
from .state import AppState

POLL_INTERVAL_MS = 100
ESCAPE_DELAY_MS = 25

_SPECIAL_KEYS = {
    curses.KEY_ENTER: Key.ENTER,
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_BACKSPACE: Key.BACKSPACE,
}

_CHAR_KEYS = {
    "\n": Key.ENTER,
    "\r": Key.ENTER,
    "\x1b": Key.ESC,
    "\t": Key.TAB,
    "\x7f": Key.BACKSPACE,
    "\x08": Key.BACKSPACE,
}


def key_from_curses(code: int | str) -> Key | None:
    """Translate a value from ``get_wch`` into a :class:`Key`, or None if unhandled."""
    if isinstance(code, int):
        if code in _SPECIAL_KEYS:
            return Key(_SPECIAL_KEYS[code])
        if not 0 <= code < curses.KEY_MIN:
            return None
        code = chr(code)
    if code in _CHAR_KEYS:
        return Key(_CHAR_KEYS[code])
    if len(code) != 1:
        return None
    if "\x01" <= code <= "\x1a":
        return Key(chr(ord(code) - 1 + ord("a")), ctrl=True)
    if code.isprintable():
        return Key(code)
    return None


def _prepare_terminal(screen) -> None:
    screen.keypad(True)
    screen.timeout(POLL_INTERVAL_MS)
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    try:
        _init_colors()
    except curses.error:
        pass
    if hasattr(curses, "set_escdelay"):
        try:
            curses.set_escdelay(ESCAPE_DELAY_MS)
        except curses.error:
            pass


def run(screen, app: App) -> None:
    """Draw and handle keys until the user quits, polling downloads while idle."""
    _prepare_terminal(screen)
    while not app.should_exit():
        draw(screen, app.state)
        screen.refresh()
        try:
            code = screen.get_wch()
        except curses.error:
            app.check_download_progress()
            continue
        key = key_from_curses(code)
        if key is None:
            app.check_download_progress()
        else:
            app.handle_key(key)


def main(argv: list[str] | None = None) -> int:
    """Start the dictionary browser."""
    parser = argparse.ArgumentParser(
        prog="tuidict", description="Look up words in offline dictionaries."
    )
    parser.parse_args(argv)
    try:
        state = AppState.create()
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    curses.wrapper(run, App(state))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())