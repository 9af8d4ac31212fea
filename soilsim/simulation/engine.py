"""SimulationEngine — the soil-moisture tick loop.

Owns the grid, the simulation parameters, the tick clock and the
observed-cell history.  Each call to ``step`` advances the grid by one
tick in this order:

1. Snapshot the pre-tick grid into arrays
2. Decide irrigation per cell (threshold rule unless overridden)
3. Apply irrigation gain or evapotranspiration loss
4. Add orthogonal-neighbour diffusion from the snapshot
5. Clamp, write back, advance the clock, sample history

The engine never schedules itself; a driver calls ``step``.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from dataclasses import dataclass, field

import numpy as np
from numpy.random import Generator

from soilsim.grid.grid import Grid, SeedMode
from soilsim.grid.parameters import SimulationParameters
from soilsim.moisture.update import advance
from soilsim.simulation.config import SimulationConfig
from soilsim.simulation.errors import InvalidParameter, UninitializedGrid
from soilsim.simulation.history import MoistureHistory

logger = logging.getLogger(__name__)


@dataclass
class SimulationEngine:
    """Drives the simulation forward tick by tick.

    Attributes:
        config: Loaded simulation configuration.
        params: Current rates and threshold.
        time_step_size: Length of one tick (``Δt``).
        grid: The cell grid, None until ``initialize`` is called.
        history: Samples for the observed cell.
        rng: Random generator used for random seeding.
        tick: Current tick count.
    """

    config: SimulationConfig = field(default_factory=SimulationConfig)
    params: SimulationParameters = field(init=False)
    time_step_size: float = field(init=False)
    grid: Grid | None = field(init=False, default=None)
    history: MoistureHistory = field(init=False)
    rng: Generator = field(init=False)
    tick: int = 0
    _init_args: tuple[int, int, SeedMode] | None = field(
        init=False,
        default=None,
        repr=False,
    )

    def __post_init__(self) -> None:
        """Build parameters, history and RNG from config."""
        self.rng = np.random.default_rng(self.config.seed)
        self.params = self.config.to_parameters()
        self.set_time_step_size(self.config.time_step_size)
        self.history = MoistureHistory(max_length=self.config.history_length)

    @classmethod
    def from_config(cls, config: SimulationConfig) -> SimulationEngine:
        """Create an engine and initialize its grid from ``config``."""
        engine = cls(config=config)
        engine.initialize()
        return engine

    # -- Lifecycle -----------------------------------------------------------

    def initialize(
        self,
        rows: int | None = None,
        cols: int | None = None,
        seed_mode: SeedMode | None = None,
    ) -> None:
        """Create a fresh grid and reset the clock and history.

        Arguments left as None fall back to the config.

        Raises:
            InvalidDimension: If ``rows`` or ``cols`` is below 1.
            InvalidMoisture: If a uniform seed value is outside ``[0, 1]``.
        """
        rows = self.config.rows if rows is None else rows
        cols = self.config.cols if cols is None else cols
        seed_mode = self.config.seed_mode() if seed_mode is None else seed_mode

        self.grid = Grid.create(rows, cols, seed_mode, rng=self.rng)
        self._init_args = (rows, cols, seed_mode)
        self.tick = 0
        self.history.select(None)
        logger.info("Initialized %dx%d grid (%s)", rows, cols, seed_mode)

    def reset(self) -> None:
        """Rebuild the grid with the last ``initialize`` arguments.

        Raises:
            UninitializedGrid: If ``initialize`` was never called.
        """
        if self._init_args is None:
            msg = "reset() called before initialize()"
            raise UninitializedGrid(msg)
        self.initialize(*self._init_args)

    @property
    def is_initialized(self) -> bool:
        """Return True once a grid exists."""
        return self.grid is not None

    # -- Ticking -------------------------------------------------------------

    def step(self) -> None:
        """Advance the simulation by one tick.

        All neighbour reads use the pre-tick snapshot, so the update is
        synchronous regardless of cell order.

        Raises:
            UninitializedGrid: If ``initialize`` was never called.
        """
        grid = self._require_grid()

        moisture, tap = advance(
            grid.moisture_array(),
            grid.tap_array(),
            grid.override_array(),
            self.params,
            self.time_step_size,
        )
        grid.load(moisture, tap)
        self.tick += 1

        if self.history.selected is not None:
            row, col = self.history.selected
            self.history.record(self.tick, grid.cell_at(row, col).moisture)

        logger.debug("Tick %d: mean moisture %.4f", self.tick, float(moisture.mean()))

    def run(self, ticks: int) -> None:
        """Run the simulation for a fixed number of ticks.

        Args:
            ticks: Number of ticks to advance.
        """
        for _ in range(ticks):
            self.step()

    # -- Manual control ------------------------------------------------------

    def set_cell_moisture(self, row: int, col: int, value: float) -> None:
        """Write a clamped moisture value and claim manual override.

        Raises:
            OutOfBounds: If coordinates are out of bounds.
            UninitializedGrid: If ``initialize`` was never called.
        """
        grid = self._require_grid()
        cell = grid.cell_at(row, col)
        grid.set_moisture(row, col, value)
        cell.override_active = True
        logger.debug("Set moisture at (%d, %d) to %.4f", row, col, cell.moisture)

    def toggle_tap(self, row: int, col: int) -> None:
        """Flip a cell's tap and claim manual override.

        Raises:
            OutOfBounds: If coordinates are out of bounds.
            UninitializedGrid: If ``initialize`` was never called.
        """
        cell = self._require_grid().cell_at(row, col)
        cell.tap_active = not cell.tap_active
        cell.override_active = True
        logger.debug("Tap at (%d, %d) now %s", row, col, cell.tap_active)

    def clear_override(self, row: int, col: int) -> None:
        """Hand a cell's tap back to the threshold rule on the next tick.

        Moisture and tap are left as they are until then.

        Raises:
            OutOfBounds: If coordinates are out of bounds.
            UninitializedGrid: If ``initialize`` was never called.
        """
        cell = self._require_grid().cell_at(row, col)
        cell.override_active = False
        logger.debug("Cleared override at (%d, %d)", row, col)

    def observe(self, cell: tuple[int, int] | None) -> None:
        """Select the cell whose moisture history is sampled.

        Selecting a different cell clears the accumulated history.
        ``observe(None)`` drops the selection.

        Args:
            cell: ``(row, col)`` of the cell to observe, or None.

        Raises:
            OutOfBounds: If coordinates are out of bounds.
            UninitializedGrid: If ``initialize`` was never called.
        """
        grid = self._require_grid()
        if cell is None:
            self.history.select(None)
            return
        row, col = cell
        grid.index(row, col)
        self.history.select((row, col))

    # -- Parameters ----------------------------------------------------------

    def set_parameters(self, **changes: float) -> None:
        """Replace one or more simulation parameters.

        Args:
            **changes: New values keyed by ``SimulationParameters`` field.

        Raises:
            InvalidParameter: On an unknown name or an out-of-range value.
        """
        known = self.params.as_dict()
        unknown = set(changes) - set(known)
        if unknown:
            msg = f"unknown simulation parameters: {sorted(unknown)}"
            raise InvalidParameter(msg)
        self.params = dataclasses.replace(self.params, **changes)
        logger.debug("Parameters now %s", self.params)

    def set_time_step_size(self, dt: float) -> None:
        """Set ``Δt``.

        Raises:
            InvalidParameter: If ``dt`` is not finite and positive.
        """
        if not math.isfinite(dt) or dt <= 0:
            msg = f"time_step_size must be finite and > 0, got {dt!r}"
            raise InvalidParameter(msg)
        self.time_step_size = float(dt)

    # -- Views ---------------------------------------------------------------

    def snapshot(self) -> Grid:
        """Return an independent copy of the current grid.

        Raises:
            UninitializedGrid: If ``initialize`` was never called.
        """
        return self._require_grid().copy()

    def _require_grid(self) -> Grid:
        if self.grid is None:
            msg = "engine has no grid; call initialize() first"
            raise UninitializedGrid(msg)
        return self.grid
