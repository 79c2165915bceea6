import random

import pytest

from blockfall.figure import (
    FIGURES,
    MAX_FIGURE_CELLS,
    Figure,
    FigureType,
    oriented,
    random_figure_type,
)
from blockfall.geometry import Size
from blockfall.orientation import Orientation


def test_catalogue_has_all_seven_shapes():
    assert set(FIGURES) == set(FigureType)


@pytest.mark.parametrize("figure_type", list(FigureType))
def test_cell_count_matches_bounding_box(figure_type):
    figure = FIGURES[figure_type]
    assert len(figure.cells) == figure.size.height * figure.size.width
    assert figure.size.area <= MAX_FIGURE_CELLS
    assert sum(figure.cells) == 4


@pytest.mark.parametrize(
    "size, cells",
    [
        (Size(2, 3), (1, 1, 1, 0, 1)),
        (Size(3, 3), (1,) * 9),
        (Size(1, 2), (1, 2)),
        (Size(2, 2), (0, 0, 0, 0)),
    ],
)
def test_invalid_figures_are_rejected(size, cells):
    with pytest.raises(ValueError):
        Figure(size, cells)


def test_from_rows_rejects_ragged_rows():
    with pytest.raises(ValueError):
        Figure.from_rows([[1, 1], [1]])


def test_mask_is_lsb_first():
    assert FIGURES[FigureType.T].mask == 0b10111
    assert FIGURES[FigureType.I].mask == 0b1111


def test_rotation_changes_shape_and_box():
    t_east = FIGURES[FigureType.T].rotated_cw()
    assert t_east.size == Size(3, 2)
    assert t_east.cells == (0, 1, 1, 1, 0, 1)

    i_east = oriented(FigureType.I, Orientation.EAST)
    assert i_east.size == Size(1, 4)
    assert i_east.offsets() == [(0, 0), (0, 1), (0, 2), (0, 3)]


@pytest.mark.parametrize("figure_type", list(FigureType))
def test_four_turns_restore_the_shape(figure_type):
    figure = FIGURES[figure_type]
    turned = figure
    for _ in range(4):
        turned = turned.rotated_cw()
    assert turned == figure
    assert oriented(figure_type, Orientation.SOUTH) is figure


def test_oriented_shapes_are_shared():
    assert oriented(FigureType.L, Orientation.WEST) is oriented(FigureType.L, Orientation.WEST)


def test_random_figure_type_covers_catalogue():
    rng = random.Random(0)
    seen = {random_figure_type(rng) for _ in range(500)}
    assert seen == set(FigureType)
    assert isinstance(random_figure_type(), FigureType)
