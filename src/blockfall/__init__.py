"""Terminal falling-block puzzle game."""

from .board import Board
from .config import DEFAULT_CONFIG, GameConfig
from .errors import TerminalError
from .figure import FIGURES, Figure, FigureType, oriented, random_figure_type
from .game_state import FrameUpdate, GameState
from .geometry import Position, Size
from .input import Action, KeyEvent, collect_released_keys
from .layout import compose_columns, required_width
from .loop import run
from .orientation import Orientation
from .perf import FrameProfiler, PerfStat
from .render import Glyphs, render_frame
from .utils import collides, lowering_duration_ms

__all__ = [
    "Action",
    "Board",
    "DEFAULT_CONFIG",
    "FIGURES",
    "Figure",
    "FigureType",
    "FrameProfiler",
    "FrameUpdate",
    "GameConfig",
    "GameState",
    "Glyphs",
    "KeyEvent",
    "Orientation",
    "PerfStat",
    "Position",
    "Size",
    "TerminalError",
    "collect_released_keys",
    "collides",
    "compose_columns",
    "lowering_duration_ms",
    "oriented",
    "random_figure_type",
    "render_frame",
    "required_width",
    "run",
]
