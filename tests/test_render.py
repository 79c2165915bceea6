import random

import pytest

from blockfall.figure import FigureType
from blockfall.game_state import GameState
from blockfall.render import (
    Glyphs,
    board_lines,
    format_elapsed,
    preview_lines,
    render_frame,
    stats_lines,
)


def make_state():
    state = GameState.start(now=0.0, rng=random.Random(3))
    state.current = FigureType.O
    state.upcoming = FigureType.T
    state.position = state.spawn_position(FigureType.O)
    return state


def test_format_elapsed():
    assert format_elapsed(0) == "0:00"
    assert format_elapsed(75.9) == "1:15"
    assert format_elapsed(-3) == "0:00"


def test_board_block_shape_and_borders():
    state = make_state()
    lines = board_lines(state)
    assert len(lines) == state.board.height + 2
    assert {len(line) for line in lines} == {24}
    assert lines[0] == "<!" + " ." * 4 + "[][]" + " ." * 4 + "!>"
    assert lines[2] == "<!" + " ." * 10 + "!>"
    assert lines[-2] == "<!" + "==" * 10 + "!>"
    assert lines[-1] == "  " + "\\/" * 10 + "  "


def test_board_block_shows_locked_cells():
    state = make_state()
    state.board.set_cell(14, 0)
    assert board_lines(state)[14].startswith("<![]")


def test_stats_block():
    state = make_state()
    state.score = 300
    lines = stats_lines(state, now=65.0)
    assert lines[0].startswith("LEVEL: 1")
    assert lines[1].startswith("TIME:  1:05")
    assert lines[2].startswith("SCORE: 300")
    assert lines[3].startswith("LINES: 0")
    assert lines[4].strip() == ""
    assert lines[5].strip() == "[][][]"
    assert lines[6].strip() == "[]"
    assert len({len(line) for line in lines}) == 1


def test_preview_uses_upcoming_piece():
    state = make_state()
    state.upcoming = FigureType.I
    assert preview_lines(state) == ["[]"] * 4


def test_frame_combines_blocks():
    state = make_state()
    stats = stats_lines(state, now=1.0)
    board = board_lines(state)
    frame = render_frame(state, now=1.0)
    assert len(frame) == max(len(stats), len(board))
    assert frame[0] == stats[0] + "  " + board[0]
    assert frame[-1] == " " * len(stats[0]) + "  " + board[-1]


def test_custom_glyphs():
    state = make_state()
    glyphs = Glyphs(empty="  ", filled="##")
    assert board_lines(state, glyphs)[0] == "<!" + "  " * 4 + "####" + "  " * 4 + "!>"
    with pytest.raises(ValueError):
        Glyphs(filled="#")
