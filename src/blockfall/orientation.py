"""Four-state rotation cycle of the active piece."""

from __future__ import annotations

from enum import IntEnum


class Orientation(IntEnum):
    """Facing of a piece.

    The values are the number of clockwise quarter turns away from the spawn
    orientation ``SOUTH``, so the clockwise order is
    ``SOUTH -> EAST -> NORTH -> WEST -> SOUTH``.
    """

    SOUTH = 0
    EAST = 1
    NORTH = 2
    WEST = 3

    @property
    def quarter_turns(self) -> int:
        return int(self)

    def clockwise(self) -> "Orientation":
        return Orientation((self + 1) % len(Orientation))

    def counter_clockwise(self) -> "Orientation":
        return Orientation((self - 1) % len(Orientation))

    def rotated(self, clockwise: bool) -> "Orientation":
        """Return the orientation after a single quarter turn."""

        return self.clockwise() if clockwise else self.counter_clockwise()
