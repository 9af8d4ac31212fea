"""Grid — the spatial container for soil cells.

Cells are stored in a flat list with row-major addressing
(``row * cols + col``).  The grid provides bounds-checked access,
orthogonal neighbour queries, and NumPy snapshots of cell state for the
per-tick update.
"""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from numpy.random import Generator

from soilsim.grid.cell import Cell
from soilsim.simulation.errors import InvalidDimension, InvalidMoisture, OutOfBounds

_ORTHOGONAL = ((-1, 0), (1, 0), (0, -1), (0, 1))


def clamp_moisture(value: float) -> float:
    """Clamp a moisture value into ``[0, 1]``."""
    return max(0.0, min(1.0, float(value)))


@dataclass(frozen=True)
class Uniform:
    """Seed every cell with the same moisture value."""

    value: float


@dataclass(frozen=True)
class Random:
    """Seed every cell with an independent uniform draw from ``[0, 1]``."""


SeedMode = Union[Uniform, Random]


@dataclass
class Grid:
    """A ``rows x cols`` grid of cells.

    Attributes:
        rows: Number of rows (>= 1).
        cols: Number of columns (>= 1).
        cells: Flat row-major list of cells.
    """

    rows: int
    cols: int
    cells: list[Cell] = field(repr=False)

    @classmethod
    def create(
        cls,
        rows: int,
        cols: int,
        seed_mode: SeedMode,
        rng: Generator | None = None,
    ) -> Grid:
        """Build a new grid with seeded moisture.

        Args:
            rows: Number of rows.
            cols: Number of columns.
            seed_mode: ``Uniform(value)`` or ``Random()``.
            rng: Random source for ``Random`` seeding.  A fresh default
                generator is used when omitted.

        Returns:
            A grid whose cells all have both tap flags cleared.

        Raises:
            InvalidDimension: If ``rows`` or ``cols`` is below 1.
            InvalidMoisture: If a uniform value lies outside ``[0, 1]``.
        """
        if rows < 1 or cols < 1:
            msg = f"grid dimensions must be >= 1, got {rows}x{cols}"
            raise InvalidDimension(msg)

        if isinstance(seed_mode, Uniform):
            value = seed_mode.value
            if not math.isfinite(value) or not 0.0 <= value <= 1.0:
                msg = f"uniform moisture must lie in [0, 1], got {value!r}"
                raise InvalidMoisture(msg)
            cells = [Cell(moisture=float(value)) for _ in range(rows * cols)]
        else:
            if rng is None:
                rng = np.random.default_rng()
            draws = rng.uniform(0.0, 1.0, size=rows * cols)
            cells = [Cell(moisture=clamp_moisture(v)) for v in draws]

        return cls(rows=rows, cols=cols, cells=cells)

    @property
    def shape(self) -> tuple[int, int]:
        """Return ``(rows, cols)``."""
        return self.rows, self.cols

    def in_bounds(self, row: int, col: int) -> bool:
        """Return True if ``(row, col)`` addresses a cell."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def index(self, row: int, col: int) -> int:
        """Return the flat index for ``(row, col)``.

        Raises:
            OutOfBounds: If coordinates are out of bounds.
        """
        if not self.in_bounds(row, col):
            msg = f"({row}, {col}) out of bounds for {self.rows}x{self.cols}"
            raise OutOfBounds(msg)
        return row * self.cols + col

    def cell_at(self, row: int, col: int) -> Cell:
        """Return the cell at ``(row, col)``.

        Raises:
            OutOfBounds: If coordinates are out of bounds.
        """
        return self.cells[self.index(row, col)]

    def set_moisture(self, row: int, col: int, value: float) -> None:
        """Write a clamped moisture value into one cell."""
        self.cell_at(row, col).moisture = clamp_moisture(value)

    def neighbours(self, row: int, col: int) -> list[Cell]:
        """Return the existing orthogonal neighbours of a cell.

        Corner cells have 2, edge cells 3, interior cells 4.  There is
        no wraparound.
        """
        self.index(row, col)
        result: list[Cell] = []
        for dr, dc in _ORTHOGONAL:
            nr, nc = row + dr, col + dc
            if self.in_bounds(nr, nc):
                result.append(self.cells[nr * self.cols + nc])
        return result

    def rows_of_cells(self) -> list[list[Cell]]:
        """Return the cells grouped by row, for rendering."""
        return [
            self.cells[r * self.cols : (r + 1) * self.cols] for r in range(self.rows)
        ]

    def moisture_array(self) -> NDArray[np.float64]:
        """Return a ``(rows, cols)`` copy of every cell's moisture."""
        return np.array(
            [c.moisture for c in self.cells],
            dtype=np.float64,
        ).reshape(self.rows, self.cols)

    def tap_array(self) -> NDArray[np.bool_]:
        """Return a ``(rows, cols)`` copy of every cell's tap flag."""
        return np.array(
            [c.tap_active for c in self.cells],
            dtype=np.bool_,
        ).reshape(self.rows, self.cols)

    def override_array(self) -> NDArray[np.bool_]:
        """Return a ``(rows, cols)`` copy of every cell's override flag."""
        return np.array(
            [c.override_active for c in self.cells],
            dtype=np.bool_,
        ).reshape(self.rows, self.cols)

    def load(
        self,
        moisture: NDArray[np.float64],
        tap: NDArray[np.bool_],
    ) -> None:
        """Write moisture and tap arrays back into the cells.

        Moisture is clamped on the way in.
        """
        for cell, m, t in zip(self.cells, moisture.ravel(), tap.ravel(), strict=True):
            cell.moisture = clamp_moisture(m)
            cell.tap_active = bool(t)

    def copy(self) -> Grid:
        """Return an independent deep copy."""
        return copy.deepcopy(self)
