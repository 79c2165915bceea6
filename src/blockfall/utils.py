"""Utility helpers for the game rules."""

from __future__ import annotations

from typing import Iterable, Tuple

from .board import Board
from .config import BASE_LOWERING_MS, LOWERING_STEP_MS, MIN_LOWERING_MS


def lowering_duration_ms(
    level: int,
    *,
    base: int = BASE_LOWERING_MS,
    step: int = LOWERING_STEP_MS,
    minimum: int = MIN_LOWERING_MS,
) -> int:
    """Return the gravity period in milliseconds for ``level``.

    The period shrinks by ``step`` per level and never drops below
    ``minimum``.
    """

    return max(base - step * level, minimum)


def collides(board: Board, blocks: Iterable[Tuple[int, int]]) -> bool:
    """Return ``True`` if any ``(row, col)`` in ``blocks`` is unusable.

    A block is unusable when it lies outside the board or on an occupied cell,
    which covers both walls and the floor.  Used to validate movement,
    rotation and gravity before they are applied.
    """

    return any(not board.is_empty(row, col) for row, col in blocks)
