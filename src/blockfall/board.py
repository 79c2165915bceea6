"""Bit-packed playing field."""

from __future__ import annotations

from typing import Iterable, List, Tuple

import numpy as np
from numpy.typing import NDArray

from .geometry import Size


# Dimensions of the default playing field.
HEIGHT = 15
WIDTH = 10

Cells = NDArray[np.bool_]


def create_empty_cells(size: Size) -> Cells:
    """Return a flat array of ``size.area`` clear bits."""

    return np.zeros(size.area, dtype=bool)


class Board:
    """Playing field where each cell is a single occupied/free bit.

    Cells are stored in one flat array; ``(row, col)`` lives at index
    ``row * width + col``.
    """

    def __init__(self, size: Size = Size(HEIGHT, WIDTH)) -> None:
        self.size = size
        self.cells: Cells = create_empty_cells(size)

    @property
    def height(self) -> int:
        return self.size.height

    @property
    def width(self) -> int:
        return self.size.width

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def index(self, row: int, col: int) -> int:
        """Return the linear index of ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if not self.contains(row, col):
            raise IndexError(f"Cell ({row}, {col}) out of bounds")
        return row * self.width + col

    def get_cell(self, row: int, col: int) -> bool:
        return bool(self.cells[self.index(row, col)])

    def set_cell(self, row: int, col: int, occupied: bool = True) -> None:
        self.cells[self.index(row, col)] = occupied

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the cell at ``(row, col)`` is free.

        Coordinates outside the board count as occupied, so a collision check
        rejects a piece crossing a wall or the floor without extra tests.
        """

        if self.contains(row, col):
            return not self.cells[row * self.width + col]
        return False

    def rows(self) -> Cells:
        """Return a read-only ``(height, width)`` view of the cells."""

        view = self.cells.reshape(self.height, self.width)
        view.flags.writeable = False
        return view

    def lock_cells(self, blocks: Iterable[Tuple[int, int]]) -> None:
        """Mark every ``(row, col)`` in ``blocks`` as occupied.

        Raises:
            IndexError: If any block lies outside the board.  Nothing is
                written in that case.
        """

        coordinates = np.asarray(list(blocks), dtype=np.int32)
        if coordinates.size == 0:
            return

        rows, cols = coordinates.T
        if (
            np.any(rows < 0)
            or np.any(rows >= self.height)
            or np.any(cols < 0)
            or np.any(cols >= self.width)
        ):
            raise IndexError("Block out of bounds")

        self.cells[rows * self.width + cols] = True

    def clear_full_rows(self) -> int:
        """Remove completed rows, shift the rows above down, return the count."""

        grid = self.cells.reshape(self.height, self.width)
        full_rows = np.all(grid, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = grid[~full_rows]
            new_rows = np.zeros((cleared, self.width), dtype=bool)
            self.cells = np.vstack((new_rows, remaining)).reshape(-1)
        return cleared

    def row_masks(self) -> List[int]:
        """Return one integer per row with bit ``c`` set for occupied column ``c``."""

        weights = 1 << np.arange(self.width, dtype=np.int64)
        grid = self.cells.reshape(self.height, self.width)
        return [int(mask) for mask in grid.astype(np.int64) @ weights]
