"""Config — load simulation setup and display settings from YAML files.

Grid size, initial moisture, simulation rates, and display preferences
all live in YAML and are parsed into a typed dataclass here.  This keeps
the engine data-driven and easy to experiment with.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from soilsim.grid.grid import Random, SeedMode, Uniform
from soilsim.grid.parameters import SimulationParameters
from soilsim.simulation.errors import ConfigError

INITIAL_MOISTURE_MODES = ("uniform", "random")
UNITS_SYSTEMS = ("metric", "imperial")
MOISTURE_UNITS = ("percentage", "volumetric")
COLOR_SCHEMES = ("default", "blue", "grayscale")


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for random initial moisture.  None draws a fresh
            seed on every run.
        rows: Number of grid rows.
        cols: Number of grid columns.
        initial_moisture: ``"uniform"`` or ``"random"``.
        uniform_moisture: Starting moisture in percent (0-100), used
            when ``initial_moisture`` is ``"uniform"``.
        time_step_size: Length of one tick (hours).
        history_length: Samples kept for the observed cell.
        parameters: Rate/threshold overrides keyed by
            ``SimulationParameters`` field name.
        units_system: ``"metric"`` or ``"imperial"`` rate labels.
        moisture_unit: ``"percentage"`` or ``"volumetric"`` display.
        color_scheme: ``"default"``, ``"blue"`` or ``"grayscale"``.
        display_values_in_cells: Draw formatted moisture inside cells.
    """

    seed: int | None = None
    rows: int = 10
    cols: int = 10
    initial_moisture: str = "uniform"
    uniform_moisture: float = 50.0
    time_step_size: float = 1.0
    history_length: int = 20

    parameters: dict[str, float] = field(default_factory=dict)

    # Display settings
    units_system: str = "metric"
    moisture_unit: str = "percentage"
    color_scheme: str = "default"
    display_values_in_cells: bool = False

    def __post_init__(self) -> None:
        """Reject settings that are not recognised or out of range."""
        _check_choice("initial_moisture", self.initial_moisture, INITIAL_MOISTURE_MODES)
        _check_choice("units_system", self.units_system, UNITS_SYSTEMS)
        _check_choice("moisture_unit", self.moisture_unit, MOISTURE_UNITS)
        _check_choice("color_scheme", self.color_scheme, COLOR_SCHEMES)
        _check_int("rows", self.rows)
        _check_int("cols", self.cols)
        _check_int("history_length", self.history_length)
        value = self.uniform_moisture
        if (
            isinstance(value, bool)
            or not isinstance(value, (int, float))
            or not 0 <= value <= 100
        ):
            msg = f"uniform_moisture must be a percentage in [0, 100], got {value!r}"
            raise ConfigError(msg)

    def seed_mode(self) -> SeedMode:
        """Build the grid seed mode; uniform moisture is percent / 100."""
        if self.initial_moisture == "random":
            return Random()
        return Uniform(self.uniform_moisture / 100.0)

    def to_parameters(self) -> SimulationParameters:
        """Build validated simulation parameters from ``parameters``.

        Raises:
            ConfigError: If an unknown parameter name is present.
            InvalidParameter: If a value is out of range.
        """
        known = SimulationParameters().as_dict()
        unknown = set(self.parameters) - set(known)
        if unknown:
            msg = f"unknown simulation parameters: {sorted(unknown)}"
            raise ConfigError(msg)
        return SimulationParameters(
            **{name: float(value) for name, value in self.parameters.items()},
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ConfigError: If the file holds an unrecognised setting.
        """
        path = Path(path)
        with path.open("r") as f:
            data: dict[str, Any] = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            msg = f"{path}: top-level YAML must be a mapping"
            raise ConfigError(msg)

        return cls(
            seed=data.get("seed", cls.seed),
            rows=data.get("rows", cls.rows),
            cols=data.get("cols", cls.cols),
            initial_moisture=data.get("initial_moisture", cls.initial_moisture),
            uniform_moisture=data.get("uniform_moisture", cls.uniform_moisture),
            time_step_size=data.get("time_step_size", cls.time_step_size),
            history_length=data.get("history_length", cls.history_length),
            parameters=data.get("parameters") or {},
            units_system=data.get("units_system", cls.units_system),
            moisture_unit=data.get("moisture_unit", cls.moisture_unit),
            color_scheme=data.get("color_scheme", cls.color_scheme),
            display_values_in_cells=data.get(
                "display_values_in_cells",
                cls.display_values_in_cells,
            ),
        )


def _check_choice(name: str, value: str, choices: tuple[str, ...]) -> None:
    if value not in choices:
        msg = f"{name} must be one of {choices}, got {value!r}"
        raise ConfigError(msg)


def _check_int(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        msg = f"{name} must be an integer >= 1, got {value!r}"
        raise ConfigError(msg)
