"""Text rendering of a game state.

A frame is made of two blocks: the statistics panel on the left and the
playing field on the right.  Both are plain lists of strings; the output
surface only has to print them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .figure import FIGURES
from .game_state import GameState
from .layout import center_block, compose_columns, pad_block, required_width


@dataclass(frozen=True)
class Glyphs:
    """Two-character strings used to draw one board cell each."""

    empty: str = " ."
    filled: str = "[]"
    left_border: str = "<!"
    right_border: str = "!>"
    bottom_border: str = "=="
    bottom_closing: str = "\\/"
    closing_left: str = "  "
    closing_right: str = "  "
    preview_empty: str = "  "

    def __post_init__(self) -> None:
        for name, value in vars(self).items():
            if len(value) != 2:
                raise ValueError(f"Glyph {name!r} must be two characters, got {value!r}")


DEFAULT_GLYPHS = Glyphs()


def format_elapsed(seconds: float) -> str:
    """Return ``seconds`` as ``m:ss``."""

    total = max(0, int(seconds))
    return f"{total // 60}:{total % 60:02}"


def _label_lines(pairs: Sequence[Tuple[str, str]]) -> List[str]:
    label_width = max(len(label) for label, _ in pairs)
    value_width = max(len(value) for _, value in pairs)
    return [f"{label:<{label_width}} {value:<{value_width}}" for label, value in pairs]


def preview_lines(state: GameState, glyphs: Glyphs = DEFAULT_GLYPHS) -> List[str]:
    """Draw the upcoming piece in its spawn orientation."""

    figure = FIGURES[state.upcoming]
    return [
        "".join(glyphs.filled if cell else glyphs.preview_empty for cell in row)
        for row in figure.grid()
    ]


def stats_lines(state: GameState, now: float, glyphs: Glyphs = DEFAULT_GLYPHS) -> List[str]:
    """Return the statistics panel.

    The labels and values are aligned in two columns, followed by an empty
    line and the next-piece preview centred on the panel width.
    """

    lines = _label_lines([
        ("LEVEL:", str(state.level)),
        ("TIME:", format_elapsed(now - state.round_start)),
        ("SCORE:", str(state.score)),
        ("LINES:", str(state.lines_cleared)),
    ])
    preview = preview_lines(state, glyphs)
    width = max(required_width(lines), required_width(preview))
    lines.append(" " * width)
    lines.extend(center_block(preview, width))
    return pad_block(lines)


def board_lines(state: GameState, glyphs: Glyphs = DEFAULT_GLYPHS) -> List[str]:
    """Return the bordered playing field with the active piece drawn in."""

    board = state.board
    grid = board.rows().copy()
    if not state.game_over:
        for row, col in state.blocks():
            if board.contains(row, col):
                grid[row, col] = True

    lines = [
        glyphs.left_border
        + "".join(glyphs.filled if cell else glyphs.empty for cell in row)
        + glyphs.right_border
        for row in grid
    ]
    lines.append(glyphs.left_border + glyphs.bottom_border * board.width + glyphs.right_border)
    lines.append(glyphs.closing_left + glyphs.bottom_closing * board.width + glyphs.closing_right)
    return lines


def render_frame(state: GameState, now: float, glyphs: Glyphs = DEFAULT_GLYPHS) -> List[str]:
    """Return the full frame, statistics on the left and board on the right."""

    return compose_columns(stats_lines(state, now, glyphs), board_lines(state, glyphs))
