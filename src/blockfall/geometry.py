"""Small geometry primitives shared by the board and the figures."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Board-relative anchor of a piece.

    ``x`` counts columns and ``y`` counts rows.  Either may be negative while a
    piece is being shifted around; the collision check decides whether such a
    position is usable.
    """

    x: int = 0
    y: int = 0

    def shifted(self, dx: int, dy: int) -> "Position":
        """Return a new position moved by ``dx`` columns and ``dy`` rows."""

        return Position(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Size:
    """Height and width of a rectangular area."""

    height: int
    width: int

    def __post_init__(self) -> None:
        if self.height < 0 or self.width < 0:
            raise ValueError(f"Size must be non-negative, got {self.height}x{self.width}")

    @property
    def area(self) -> int:
        return self.height * self.width
