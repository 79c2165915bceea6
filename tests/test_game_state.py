import random

from blockfall.board import Board
from blockfall.figure import FigureType
from blockfall.game_state import FrameUpdate, GameState
from blockfall.geometry import Position, Size
from blockfall.orientation import Orientation


def make_state(figure=FigureType.T, upcoming=FigureType.O):
    state = GameState.start(now=0.0, rng=random.Random(0))
    state.current = figure
    state.upcoming = upcoming
    state.orientation = Orientation.SOUTH
    state.position = state.spawn_position(figure)
    return state


def frame(at=0.016):
    return FrameUpdate(delta_time=0.016, frame_start=at)


def test_new_round():
    state = GameState.start(now=5.0, rng=random.Random(1))
    assert state.is_running
    assert not state.game_over
    assert state.board.size == Size(15, 10)
    assert not state.board.cells.any()
    assert state.orientation is Orientation.SOUTH
    assert state.round_start == state.last_gravity_tick == 5.0
    assert state.score == state.lines_cleared == 0
    assert state.position.y == 0


def test_spawn_is_centred():
    state = make_state(FigureType.T)
    assert state.position == Position(3, 0)
    assert state.blocks() == [(0, 3), (0, 4), (0, 5), (1, 4)]


def test_unknown_keys_change_nothing():
    state = make_state()
    before = (state.position, state.orientation)
    state.update(frame(), ["x", "f1", "space"])
    assert (state.position, state.orientation) == before
    assert state.is_running


def test_cancel_stops_processing_immediately():
    state = make_state()
    state.update(frame(at=10.0), ["left", "escape", "right", "down"])
    assert not state.is_running
    assert state.position == Position(2, 0)
    assert state.last_gravity_tick == 0.0


def test_keys_apply_in_order():
    state = make_state()
    state.update(frame(), ["left", "left", "right"])
    assert state.position == Position(2, 0)
    state.update(frame(), ["down", "down"])
    assert state.position == Position(2, 2)


def test_rotation_cycles_through_orientations():
    state = make_state()
    state.update(frame(), ["e", "e", "e"])
    assert state.orientation is Orientation.WEST
    state.update(frame(), ["e"])
    assert state.orientation is Orientation.SOUTH
    state.update(frame(), ["q"])
    assert state.orientation is Orientation.WEST


def test_rotation_rejected_when_shape_does_not_fit():
    state = make_state(FigureType.I)
    state.position = Position(9, 0)
    state.update(frame(), ["e"])
    assert state.orientation is Orientation.SOUTH


def test_shift_stops_at_walls():
    state = make_state()
    state.update(frame(), ["left"] * 6)
    assert state.position.x == 0
    state.update(frame(), ["right"] * 12)
    assert state.position.x == state.board.width - 3


def test_shift_blocked_by_occupied_cell():
    state = make_state()
    state.board.set_cell(0, 2)
    state.update(frame(), ["left"])
    assert state.position == Position(3, 0)


def test_gravity_waits_for_the_period():
    state = make_state()
    state.update(frame(at=2.4), [])
    assert state.position.y == 0
    state.update(frame(at=2.5), [])
    assert state.position.y == 1
    assert state.last_gravity_tick == 2.5
    state.update(frame(at=3.0), [])
    assert state.position.y == 1


def test_soft_drop_at_floor_does_not_lock():
    state = make_state(FigureType.O)
    state.position = Position(4, 13)
    state.update(frame(), ["down"])
    assert state.position == Position(4, 13)
    assert state.pieces == 0
    assert not state.board.cells.any()


def test_gravity_locks_piece_and_promotes_next():
    state = make_state(FigureType.O, upcoming=FigureType.I)
    state.position = Position(4, 13)
    state.update(frame(at=2.5), [])

    for row in (13, 14):
        for col in (4, 5):
            assert state.board.get_cell(row, col)
    assert state.pieces == 1
    assert state.current is FigureType.I
    assert state.orientation is Orientation.SOUTH
    assert state.position == Position(4, 0)
    assert isinstance(state.upcoming, FigureType)
    assert state.is_running


def test_full_row_is_cleared_and_scored():
    state = make_state(FigureType.O)
    for col in range(state.board.width):
        if col not in (4, 5):
            state.board.set_cell(14, col)
    state.position = Position(4, 13)
    state.apply_gravity()

    assert state.lines_cleared == 1
    assert state.score == 100
    assert state.level == 2
    assert state.board.row_masks()[14] == (1 << 4) | (1 << 5)
    assert state.board.row_masks()[13] == 0


def test_two_rows_score_more_than_twice_one():
    state = make_state(FigureType.O)
    for row in (13, 14):
        for col in range(state.board.width):
            if col not in (4, 5):
                state.board.set_cell(row, col)
    state.position = Position(4, 13)
    state.apply_gravity()
    assert state.lines_cleared == 2
    assert state.score == 400
    assert not state.board.cells.any()


def test_blocked_spawn_ends_the_round():
    state = make_state(upcoming=FigureType.O)
    state.board.set_cell(0, 4)
    state.spawn_next()
    assert state.game_over
    assert not state.is_running


def test_custom_board_size():
    state = make_state()
    state.board = Board(Size(6, 4))
    state.position = state.spawn_position(FigureType.T)
    assert state.position == Position(0, 0)


def test_blocked_first_piece_ends_the_round(monkeypatch):
    from blockfall import game_state

    def filled_board(size):
        board = Board(size)
        board.lock_cells([(0, col) for col in range(size.width)])
        return board

    monkeypatch.setattr(game_state, "Board", filled_board)
    state = GameState.start(now=0.0, rng=random.Random(0))
    assert state.game_over
    assert not state.is_running
    state.update(frame(at=10.0), [])
    assert state.pieces == 0


def test_line_clear_logs_board_rows(caplog):
    import logging

    state = make_state(FigureType.O)
    for col in range(state.board.width):
        if col not in (4, 5):
            state.board.set_cell(14, col)
    state.position = Position(4, 13)
    with caplog.at_level(logging.DEBUG, logger="blockfall.game_state"):
        state.apply_gravity()
    message = "".join(caplog.messages)
    assert "Cleared 1 row(s)" in message
    assert "Board rows after clear" in message
    assert "48" in message
