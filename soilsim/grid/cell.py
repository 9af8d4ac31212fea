"""Cell — a single location in the soil grid.

A cell only carries its moisture and the two tap flags.  Neighbour
relationships are implicit in the grid's row-major layout.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Cell:
    """A single grid cell.

    Attributes:
        moisture: Normalised saturation (0.0-1.0).
        tap_active: Whether irrigation applies to this cell on the
            current tick.
        override_active: Whether a manual tap decision replaces the
            automatic threshold rule.
    """

    moisture: float = 0.5
    tap_active: bool = False
    override_active: bool = False
