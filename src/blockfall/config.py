"""Game-wide defaults.

None of these values is read from a file; :mod:`blockfall.__main__` lets the
command line override the ones that make sense to tweak.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from .board import HEIGHT, WIDTH
from .figure import FIGURES
from .geometry import Size
from .input import DEFAULT_KEYMAP, Action


# Frames per second the loop aims for
FPS = 60
# Gravity period at level 0 and the amount removed per level, in milliseconds
BASE_LOWERING_MS = 2500
LOWERING_STEP_MS = 10
# Gravity never gets faster than this
MIN_LOWERING_MS = 250
# Every figure fits in any orientation on a board at least this tall and wide
MIN_BOARD_SIDE = max(max(f.size.height, f.size.width) for f in FIGURES.values())


@dataclass(frozen=True)
class GameConfig:
    """Settings fixed for the lifetime of a round."""

    board_size: Size = Size(HEIGHT, WIDTH)
    fps: int = FPS
    base_lowering_ms: int = BASE_LOWERING_MS
    lowering_step_ms: int = LOWERING_STEP_MS
    min_lowering_ms: int = MIN_LOWERING_MS
    foreground: str = "green"
    background: str = "black"
    keymap: Mapping[str, Action] = field(
        default_factory=lambda: dict(DEFAULT_KEYMAP), hash=False, compare=True
    )

    def __post_init__(self) -> None:
        if self.fps <= 0:
            raise ValueError("fps must be positive")
        if min(self.board_size.height, self.board_size.width) < MIN_BOARD_SIDE:
            raise ValueError(
                f"Board must be at least {MIN_BOARD_SIDE}x{MIN_BOARD_SIDE}, got "
                f"{self.board_size.height}x{self.board_size.width}"
            )
        if self.min_lowering_ms < 0:
            raise ValueError("Minimum lowering duration cannot be negative")

    @property
    def frame_budget(self) -> float:
        """Return the time available for one frame in seconds."""

        return 1.0 / self.fps


DEFAULT_CONFIG = GameConfig()
