"""High level game state container and the per-frame update."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .board import Board
from .config import DEFAULT_CONFIG, GameConfig
from .figure import Figure, FigureType, oriented, random_figure_type
from .geometry import Position
from .input import Action, action_for
from .orientation import Orientation
from .utils import collides, lowering_duration_ms


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameUpdate:
    """Timing of the frame being processed, in seconds."""

    delta_time: float
    frame_start: float


@dataclass
class GameState:
    """Mutable state of a single round."""

    config: GameConfig = DEFAULT_CONFIG
    board: Board = field(default_factory=Board)
    current: FigureType = FigureType.O
    position: Position = field(default_factory=Position)
    orientation: Orientation = Orientation.SOUTH
    upcoming: FigureType = FigureType.O
    is_running: bool = True
    game_over: bool = False
    last_gravity_tick: float = 0.0
    round_start: float = 0.0
    lines_cleared: int = 0
    score: int = 0
    pieces: int = 0
    rng: random.Random = field(default_factory=random.Random)

    @classmethod
    def start(
        cls,
        config: GameConfig = DEFAULT_CONFIG,
        *,
        now: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ) -> "GameState":
        """Create a fresh round with an empty board and two random pieces.

        ``now`` anchors both the round clock and the gravity timer, so the
        first gravity tick happens one full period after the round starts.
        """

        now = time.perf_counter() if now is None else now
        rng = rng or random.Random()
        state = cls(
            config=config,
            board=Board(config.board_size),
            current=random_figure_type(rng),
            upcoming=random_figure_type(rng),
            last_gravity_tick=now,
            round_start=now,
            rng=rng,
        )
        state.position = state.spawn_position(state.current)
        LOGGER.info("Round started with %s, next %s", state.current.value, state.upcoming.value)
        state.end_if_blocked()
        return state

    @property
    def level(self) -> int:
        return self.lines_cleared + 1

    def lowering_duration_ms(self) -> int:
        return lowering_duration_ms(
            self.level,
            base=self.config.base_lowering_ms,
            step=self.config.lowering_step_ms,
            minimum=self.config.min_lowering_ms,
        )

    def stop(self) -> None:
        self.is_running = False

    # Piece geometry ---------------------------------------------------
    def figure(self) -> Figure:
        """Return the active shape in its current orientation."""

        return oriented(self.current, self.orientation)

    def spawn_position(self, figure_type: FigureType) -> Position:
        """Return the top-centre anchor for a freshly spawned piece."""

        shape = oriented(figure_type, Orientation.SOUTH)
        return Position((self.board.width - shape.size.width) // 2, 0)

    def blocks(
        self,
        position: Optional[Position] = None,
        orientation: Optional[Orientation] = None,
    ) -> List[Tuple[int, int]]:
        """Return the ``(row, col)`` board cells covered by the active piece.

        ``position`` and ``orientation`` default to the current ones and let
        callers probe a candidate placement.
        """

        position = self.position if position is None else position
        orientation = self.orientation if orientation is None else orientation
        shape = oriented(self.current, orientation)
        return [(position.y + dr, position.x + dc) for dr, dc in shape.offsets()]

    def fits(self, position: Position, orientation: Orientation) -> bool:
        return not collides(self.board, self.blocks(position, orientation))

    # Moves ------------------------------------------------------------
    def try_move(self, dx: int, dy: int) -> bool:
        """Shift the piece if the target is free; return whether it moved."""

        target = self.position.shifted(dx, dy)
        if not self.fits(target, self.orientation):
            return False
        self.position = target
        return True

    def try_rotate(self, clockwise: bool) -> bool:
        """Rotate the piece in place if the rotated shape fits."""

        target = self.orientation.rotated(clockwise)
        if not self.fits(self.position, target):
            return False
        self.orientation = target
        return True

    def apply_action(self, action: Action) -> None:
        if action is Action.CANCEL:
            self.stop()
        elif action is Action.SOFT_DROP:
            self.try_move(0, 1)
        elif action is Action.SHIFT_LEFT:
            self.try_move(-1, 0)
        elif action is Action.SHIFT_RIGHT:
            self.try_move(1, 0)
        elif action is Action.ROTATE_CCW:
            self.try_rotate(clockwise=False)
        elif action is Action.ROTATE_CW:
            self.try_rotate(clockwise=True)

    # Locking ----------------------------------------------------------
    def lock_and_continue(self) -> None:
        """Lock the active piece, clear rows and spawn the next piece."""

        self.board.lock_cells(self.blocks())
        self.pieces += 1

        cleared = self.board.clear_full_rows()
        if cleared:
            self.lines_cleared += cleared
            self.score += 100 * cleared * cleared
            LOGGER.info(
                "Cleared %d row(s). Score: %d, level: %d", cleared, self.score, self.level
            )
            LOGGER.debug("Board rows after clear: %s", self.board.row_masks())

        self.spawn_next()

    def spawn_next(self) -> None:
        """Promote the upcoming piece and draw a new one.

        If the promoted piece does not fit at its spawn position the round is
        over.
        """

        self.current = self.upcoming
        self.upcoming = random_figure_type(self.rng)
        self.orientation = Orientation.SOUTH
        self.position = self.spawn_position(self.current)
        self.end_if_blocked()

    def end_if_blocked(self) -> None:
        """End the round if the active piece overlaps a wall or a locked cell."""

        if not self.fits(self.position, self.orientation):
            LOGGER.info("Game over after %d pieces, score %d", self.pieces, self.score)
            self.game_over = True
            self.stop()

    def apply_gravity(self) -> None:
        """Move the piece down one row, locking it if it cannot move."""

        if not self.try_move(0, 1):
            self.lock_and_continue()

    # Frame update -----------------------------------------------------
    def update(self, frame: FrameUpdate, keys: Sequence[str]) -> None:
        """Advance the round by one frame.

        ``keys`` are the codes released since the previous frame, oldest
        first.  Each bound key takes effect immediately; unbound keys are
        ignored.  A cancel key stops the round and skips everything after it,
        including gravity.
        """

        if not self.is_running:
            return

        for code in keys:
            action = action_for(code, self.config.keymap)
            if action is None:
                continue
            self.apply_action(action)
            if not self.is_running:
                return

        elapsed_ms = (frame.frame_start - self.last_gravity_tick) * 1000.0
        if elapsed_ms > self.lowering_duration_ms():
            self.apply_gravity()
            self.last_gravity_tick = frame.frame_start
