"""SimulationParameters — global tunables shared by every cell."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields

from soilsim.simulation.errors import InvalidParameter


@dataclass(frozen=True)
class SimulationParameters:
    """Rates and threshold applied uniformly across the grid.

    Instances are immutable; the engine swaps in a new instance when the
    driver changes a value between ticks.

    Attributes:
        diffusion_coefficient: Fraction of the neighbour difference
            transferred per tick per neighbour.
        evapotranspiration_rate: Moisture lost per tick while the tap
            is off.
        irrigation_rate: Moisture gained per tick while the tap is on.
        moisture_threshold: Automatic irrigation turns on below this
            level (0.0-1.0).
    """

    diffusion_coefficient: float = 0.1
    evapotranspiration_rate: float = 0.02
    irrigation_rate: float = 0.05
    moisture_threshold: float = 0.2

    def __post_init__(self) -> None:
        """Reject non-finite, negative, or above-one threshold values."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not math.isfinite(value) or value < 0:
                msg = f"{f.name} must be finite and >= 0, got {value!r}"
                raise InvalidParameter(msg)
        if self.moisture_threshold > 1:
            msg = f"moisture_threshold must be <= 1, got {self.moisture_threshold!r}"
            raise InvalidParameter(msg)

    def as_dict(self) -> dict[str, float]:
        """Return the parameters keyed by field name."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
