"""Keyboard input plumbing between a surface and the game state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Optional, Protocol


class Action(str, Enum):
    """Effects a key release can have on the game."""

    CANCEL = "cancel"
    SOFT_DROP = "soft_drop"
    SHIFT_LEFT = "shift_left"
    SHIFT_RIGHT = "shift_right"
    ROTATE_CCW = "rotate_ccw"
    ROTATE_CW = "rotate_cw"


# Key codes are lower-case names shared by every surface.
DEFAULT_KEYMAP: Dict[str, Action] = {
    "escape": Action.CANCEL,
    "down": Action.SOFT_DROP,
    "left": Action.SHIFT_LEFT,
    "right": Action.SHIFT_RIGHT,
    "q": Action.ROTATE_CCW,
    "e": Action.ROTATE_CW,
}


@dataclass(frozen=True)
class KeyEvent:
    code: str
    released: bool = True


class KeySource(Protocol):
    """Non-blocking source of key events."""

    def pending(self) -> bool:
        """Return ``True`` if :meth:`read` would return without waiting."""

    def read(self) -> KeyEvent:
        """Return the oldest pending event."""


def collect_released_keys(source: KeySource) -> List[str]:
    """Drain ``source`` and return the codes of the released keys.

    Every event pending at call time is consumed.  Press events are dropped;
    release events keep their order and duplicates are preserved.
    """

    events: List[KeyEvent] = []
    while source.pending():
        events.append(source.read())
    return [event.code for event in events if event.released]


def action_for(code: str, keymap: Optional[Mapping[str, Action]] = None) -> Optional[Action]:
    """Return the action bound to ``code`` or ``None`` if it is unbound."""

    return (DEFAULT_KEYMAP if keymap is None else keymap).get(code)
