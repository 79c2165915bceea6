"""Curses-backed terminal surface.

The terminal is put into cbreak mode with echo off, the cursor hidden and
input made non-blocking once, when the surface is entered, and restored when
it is left, whatever the reason.  Terminals only report key presses, so each
key is handed to the game as a release event.
"""

from __future__ import annotations

import curses
import logging
import os
from collections import deque
from typing import Deque, Dict, Optional, Sequence

from .config import DEFAULT_CONFIG, GameConfig
from .errors import TerminalError
from .input import KeyEvent
from .layout import required_width


LOGGER = logging.getLogger(__name__)

ESCAPE = 27

_CURSES_KEYS: Dict[int, str] = {
    ESCAPE: "escape",
    curses.KEY_LEFT: "left",
    curses.KEY_RIGHT: "right",
    curses.KEY_DOWN: "down",
    curses.KEY_UP: "up",
    curses.KEY_ENTER: "enter",
    curses.KEY_RESIZE: "resize",
    10: "enter",
    32: "space",
}


def translate_curses_key(key: int) -> Optional[str]:
    """Return the key code for a ``getch`` result, ``None`` for no key."""

    if key == -1:
        return None
    if key in _CURSES_KEYS:
        return _CURSES_KEYS[key]
    if 32 < key < 127:
        return chr(key).lower()
    return f"key{key}"


def _color(name: str) -> int:
    try:
        return getattr(curses, f"COLOR_{name.upper()}")
    except AttributeError:
        raise ValueError(f"Unknown terminal colour: {name!r}") from None


class CursesSurface:
    """Draw frames into the terminal and read keys from it."""

    def __init__(self, config: GameConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self._screen = None
        self._events: Deque[KeyEvent] = deque()

    def __enter__(self) -> "CursesSurface":
        # Without this curses waits up to a second to tell Esc from a sequence
        os.environ.setdefault("ESCDELAY", "25")
        try:
            colors = _color(self.config.foreground), _color(self.config.background)
        except ValueError as exc:
            raise TerminalError(str(exc)) from exc
        try:
            self._screen = curses.initscr()
            curses.noecho()
            curses.cbreak()
            self._screen.keypad(True)
            self._screen.nodelay(True)
            self._hide_cursor()
            if curses.has_colors():
                curses.start_color()
                curses.init_pair(1, *colors)
                self._screen.bkgd(" ", curses.color_pair(1))
            self._screen.clear()
        except curses.error as exc:
            self._restore()
            raise TerminalError(f"Could not set up the terminal: {exc}") from exc
        LOGGER.debug("Terminal surface acquired")
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self._restore()
        return False

    def _hide_cursor(self) -> None:
        try:
            curses.curs_set(0)
        except curses.error:
            LOGGER.debug("Terminal cannot hide the cursor")

    def _restore(self) -> None:
        if self._screen is None:
            return
        screen, self._screen = self._screen, None
        try:
            screen.keypad(False)
            curses.nocbreak()
            curses.echo()
            curses.curs_set(1)
        except curses.error as exc:
            LOGGER.warning("Terminal state only partially restored: %s", exc)
        finally:
            try:
                curses.endwin()
            except curses.error as exc:
                LOGGER.warning("Could not leave curses mode: %s", exc)
        LOGGER.debug("Terminal surface released")

    def _require_screen(self):
        if self._screen is None:
            raise TerminalError("Terminal surface used outside of its context")
        return self._screen

    # KeySource --------------------------------------------------------
    def pending(self) -> bool:
        if self._events:
            return True
        try:
            key = self._require_screen().getch()
        except curses.error as exc:
            raise TerminalError(f"Reading a key failed: {exc}") from exc
        code = translate_curses_key(key)
        if code is None:
            return False
        self._events.append(KeyEvent(code, released=True))
        return True

    def read(self) -> KeyEvent:
        if not self.pending():
            raise TerminalError("No key event pending")
        return self._events.popleft()

    # Output -----------------------------------------------------------
    def draw(self, lines: Sequence[str]) -> None:
        """Print ``lines`` from the top-left corner of the terminal.

        Raises:
            TerminalError: If the terminal is too small for the frame or a
                curses call fails.
        """

        screen = self._require_screen()
        rows, cols = screen.getmaxyx()
        needed_cols = required_width(lines)
        # The bottom-right cell cannot be written without scrolling
        if len(lines) > rows or needed_cols >= cols:
            raise TerminalError(
                f"Terminal too small: need {needed_cols + 1}x{len(lines)}, have {cols}x{rows}"
            )
        try:
            for row, line in enumerate(lines):
                screen.addstr(row, 0, line)
                screen.clrtoeol()
            screen.refresh()
        except curses.error as exc:
            raise TerminalError(f"Drawing the frame failed: {exc}") from exc
