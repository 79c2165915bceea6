"""Fixed-rate frame loop driving a round."""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional, Protocol, Sequence

from .game_state import FrameUpdate, GameState
from .input import KeySource, collect_released_keys
from .perf import FrameProfiler
from .render import DEFAULT_GLYPHS, Glyphs, render_frame


LOGGER = logging.getLogger(__name__)


class Surface(KeySource, Protocol):
    """Output surface that is also the source of key events."""

    def draw(self, lines: Sequence[str]) -> None:
        """Home the cursor and print ``lines`` top to bottom."""


def run(
    state: GameState,
    surface: Surface,
    *,
    fps: Optional[int] = None,
    clock: Callable[[], float] = time.perf_counter,
    sleep: Callable[[float], None] = time.sleep,
    glyphs: Glyphs = DEFAULT_GLYPHS,
    profiler: Optional[FrameProfiler] = None,
) -> int:
    """Run frames until ``state`` stops and return the number of frames.

    Each frame collects the released keys, updates the state, draws it and
    then sleeps for whatever is left of the frame budget.  A frame that runs
    over budget is followed immediately by the next one; frames are never
    skipped.  Surface errors propagate to the caller.
    """

    budget = 1.0 / (fps or state.config.fps)
    profiler = profiler or FrameProfiler(budget, clock=clock)
    frames = 0
    previous_start = clock()

    LOGGER.debug("Frame loop started, budget %.2fms", budget * 1000.0)
    while state.is_running:
        frame_start = clock()
        frame = FrameUpdate(delta_time=frame_start - previous_start, frame_start=frame_start)
        previous_start = frame_start

        with profiler.section("input"):
            keys: List[str] = collect_released_keys(surface)
        with profiler.section("update"):
            state.update(frame, keys)
        with profiler.section("render"):
            surface.draw(render_frame(state, frame_start, glyphs))
        frames += 1

        elapsed = clock() - frame_start
        profiler.frame_done(elapsed)
        if elapsed < budget:
            sleep(budget - elapsed)

    LOGGER.debug("Frame loop stopped after %d frames: %s", frames, profiler.format_summary())
    return frames
