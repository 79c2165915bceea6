"""pygame front-end drawing the text frame into a window.

Unlike a terminal, pygame reports both key presses and key releases, so this
surface hands the game the real release events.  Closing the window counts as
releasing the cancel key.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Optional, Sequence, Tuple

import pygame

from .config import DEFAULT_CONFIG, GameConfig
from .errors import TerminalError
from .input import KeyEvent
from .layout import required_width


# Point size of the monospace font
FONT_SIZE = 20
# Initial window size in characters, adjusted on the first frame
INITIAL_COLUMNS = 40
INITIAL_ROWS = 20

_PYGAME_KEYS: Dict[int, str] = {
    pygame.K_ESCAPE: "escape",
    pygame.K_LEFT: "left",
    pygame.K_RIGHT: "right",
    pygame.K_DOWN: "down",
    pygame.K_UP: "up",
    pygame.K_RETURN: "enter",
    pygame.K_SPACE: "space",
}


def translate_pygame_event(event: pygame.event.Event) -> Optional[KeyEvent]:
    """Return the :class:`KeyEvent` for ``event`` or ``None`` if it is not a key."""

    if event.type == pygame.QUIT:
        return KeyEvent("escape", released=True)
    if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
        return None
    code = _PYGAME_KEYS.get(event.key)
    if code is None:
        code = chr(event.key).lower() if 32 < event.key < 127 else f"key{event.key}"
    return KeyEvent(code, released=event.type == pygame.KEYUP)


class PygameSurface:
    """Window surface with the same contract as the terminal one."""

    def __init__(self, config: GameConfig = DEFAULT_CONFIG, font_size: int = FONT_SIZE) -> None:
        self.config = config
        self.font_size = font_size
        self._screen: Optional[pygame.Surface] = None
        self._font: Optional[pygame.font.Font] = None
        self._cell: Tuple[int, int] = (0, 0)
        self._events: Deque[KeyEvent] = deque()
        self._foreground = pygame.Color(config.foreground)
        self._background = pygame.Color(config.background)

    def __enter__(self) -> "PygameSurface":
        try:
            pygame.init()
            self._font = pygame.font.SysFont("monospace", self.font_size)
            self._cell = self._font.size("M")
            self._screen = pygame.display.set_mode(self._pixels(INITIAL_COLUMNS, INITIAL_ROWS))
            pygame.display.set_caption("blockfall")
            pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.KEYUP])
        except pygame.error as exc:
            pygame.quit()
            raise TerminalError(f"Could not open the window: {exc}") from exc
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self._screen = None
        self._font = None
        pygame.quit()
        return False

    def _pixels(self, columns: int, rows: int) -> Tuple[int, int]:
        char_w, char_h = self._cell
        return max(1, columns) * char_w, max(1, rows) * char_h

    # KeySource --------------------------------------------------------
    def pending(self) -> bool:
        if not self._events:
            try:
                events = pygame.event.get()
            except pygame.error as exc:
                raise TerminalError(f"Reading events failed: {exc}") from exc
            for event in events:
                key_event = translate_pygame_event(event)
                if key_event is not None:
                    self._events.append(key_event)
        return bool(self._events)

    def read(self) -> KeyEvent:
        if not self.pending():
            raise TerminalError("No key event pending")
        return self._events.popleft()

    # Output -----------------------------------------------------------
    def draw(self, lines: Sequence[str]) -> None:
        """Render ``lines`` top to bottom, growing the window if needed."""

        if self._screen is None or self._font is None:
            raise TerminalError("Window surface used outside of its context")
        try:
            size = self._pixels(required_width(lines), len(lines))
            if self._screen.get_size() != size:
                self._screen = pygame.display.set_mode(size)
            self._screen.fill(self._background)
            line_height = self._cell[1]
            for row, line in enumerate(lines):
                text = self._font.render(line, True, self._foreground, self._background)
                self._screen.blit(text, (0, row * line_height))
            pygame.display.flip()
        except pygame.error as exc:
            raise TerminalError(f"Drawing the frame failed: {exc}") from exc
