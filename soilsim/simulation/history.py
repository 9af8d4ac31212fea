"""MoistureHistory — recent samples for the observed cell.

History belongs to the current selection, not to a cell: selecting a
different cell throws the previous samples away.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import NamedTuple


class MoistureSample(NamedTuple):
    """Moisture of the observed cell at the end of a tick."""

    tick: int
    moisture: float


@dataclass
class MoistureHistory:
    """Bounded, ordered sample sequence for one observed cell.

    Attributes:
        max_length: Number of most-recent samples retained.
        selected: ``(row, col)`` of the observed cell, or None.
    """

    max_length: int = 20
    selected: tuple[int, int] | None = None
    _samples: deque[MoistureSample] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Create the bounded sample buffer."""
        self._samples = deque(maxlen=self.max_length)

    def select(self, cell: tuple[int, int] | None) -> None:
        """Change the observed cell.

        Switching to a different cell (or to None) clears the samples;
        re-selecting the current cell keeps them.
        """
        if cell != self.selected:
            self._samples.clear()
        self.selected = cell

    def record(self, tick: int, moisture: float) -> None:
        """Append a sample, dropping the oldest when full."""
        self._samples.append(MoistureSample(tick=tick, moisture=moisture))

    def clear(self) -> None:
        """Drop all samples but keep the selection."""
        self._samples.clear()

    @property
    def samples(self) -> list[MoistureSample]:
        """Samples in increasing tick order."""
        return list(self._samples)

    def __len__(self) -> int:
        return len(self._samples)
