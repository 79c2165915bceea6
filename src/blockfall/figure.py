"""Catalogue of the seven falling-block shapes.

Each shape is stored as a tiny bit sequence over its bounding box, read in
row-major order.  The canonical shapes live in :data:`FIGURES` for the whole
lifetime of the process and are never mutated; pieces refer to them through
their :class:`FigureType` tag.  Rotated variants are derived on demand by
:func:`oriented` and cached, so every caller shares the same instances.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .geometry import Size
from .orientation import Orientation


# Largest bounding box a figure may use.
MAX_FIGURE_CELLS = 8


class FigureType(str, Enum):
    """Tag of one of the seven standard shapes."""

    I = "I"
    J = "J"
    L = "L"
    T = "T"
    S = "S"
    Z = "Z"
    O = "O"


@dataclass(frozen=True)
class Figure:
    """Immutable bitmask shape with its bounding box.

    Raises:
        ValueError: If ``cells`` does not hold exactly ``size.area`` bits, the
            box is larger than :data:`MAX_FIGURE_CELLS`, a value is not ``0``
            or ``1``, or no cell is occupied.
    """

    size: Size
    cells: Tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.cells) != self.size.area:
            raise ValueError(
                f"Figure has {len(self.cells)} cells but a "
                f"{self.size.height}x{self.size.width} bounding box"
            )
        if self.size.area > MAX_FIGURE_CELLS:
            raise ValueError(f"Figure bounding box exceeds {MAX_FIGURE_CELLS} cells")
        if any(bit not in (0, 1) for bit in self.cells):
            raise ValueError("Figure cells must be 0 or 1")
        if not any(self.cells):
            raise ValueError("Figure must occupy at least one cell")

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Figure":
        """Build a figure from a list of equally long rows of bits."""

        height = len(rows)
        width = len(rows[0]) if rows else 0
        if any(len(row) != width for row in rows):
            raise ValueError("Figure rows must all have the same width")
        cells = tuple(int(bit) for row in rows for bit in row)
        return cls(Size(height, width), cells)

    @property
    def mask(self) -> int:
        """Return the cells packed into an integer, cell ``0`` in bit ``0``."""

        value = 0
        for index, bit in enumerate(self.cells):
            value |= bit << index
        return value

    def grid(self) -> NDArray[np.bool_]:
        return np.array(self.cells, dtype=bool).reshape(self.size.height, self.size.width)

    def offsets(self) -> List[Tuple[int, int]]:
        """Return ``(row, col)`` offsets of the occupied cells."""

        width = self.size.width
        return [divmod(index, width) for index, bit in enumerate(self.cells) if bit]

    def rotated_cw(self) -> "Figure":
        """Return this figure turned 90 degrees clockwise.

        Transposing the bounding box and reversing each row is the same as
        ``np.rot90`` with ``k=-1``; height and width swap.
        """

        turned = np.rot90(self.grid(), k=-1)
        return Figure.from_rows(turned.astype(np.uint8).tolist())


FIGURES: Dict[FigureType, Figure] = {
    FigureType.I: Figure.from_rows([
        [1],
        [1],
        [1],
        [1],
    ]),
    FigureType.J: Figure.from_rows([
        [0, 1],
        [0, 1],
        [1, 1],
    ]),
    FigureType.L: Figure.from_rows([
        [1, 0],
        [1, 0],
        [1, 1],
    ]),
    FigureType.T: Figure.from_rows([
        [1, 1, 1],
        [0, 1, 0],
    ]),
    FigureType.S: Figure.from_rows([
        [0, 1, 1],
        [1, 1, 0],
    ]),
    FigureType.Z: Figure.from_rows([
        [1, 1, 0],
        [0, 1, 1],
    ]),
    FigureType.O: Figure.from_rows([
        [1, 1],
        [1, 1],
    ]),
}

_missing = set(FigureType) - set(FIGURES)
if _missing:
    raise RuntimeError(f"No shape defined for {sorted(t.value for t in _missing)}")


@lru_cache(maxsize=None)
def oriented(figure_type: FigureType, orientation: Orientation) -> Figure:
    """Return the shape of ``figure_type`` rotated into ``orientation``."""

    figure = FIGURES[figure_type]
    for _ in range(orientation.quarter_turns):
        figure = figure.rotated_cw()
    return figure


def random_figure_type(rng: Optional[random.Random] = None) -> FigureType:
    """Return a uniformly chosen figure type."""

    return (rng or random).choice(list(FigureType))
