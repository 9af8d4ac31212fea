"""Per-tick moisture update on NumPy snapshots.

Every function here reads the *pre-tick* arrays and returns new arrays,
so no cell ever sees a neighbour's partially-updated value.  Separated
from the engine so the update rule can be tested and tuned on raw
arrays.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from soilsim.grid.parameters import SimulationParameters


def irrigation_decision(
    moisture: NDArray[np.float64],
    tap: NDArray[np.bool_],
    override: NDArray[np.bool_],
    threshold: float,
) -> NDArray[np.bool_]:
    """Decide which taps run this tick.

    Cells without an override turn their tap on when moisture is below
    ``threshold``.  Overridden cells keep their manually set tap.
    """
    return np.where(override, tap, moisture < threshold)


def local_flux(
    tap: NDArray[np.bool_],
    params: SimulationParameters,
    dt: float,
) -> NDArray[np.float64]:
    """Return the irrigation gain or evapotranspiration loss per cell."""
    return np.where(
        tap,
        params.irrigation_rate * dt,
        -params.evapotranspiration_rate * dt,
    )


def diffusion_delta(
    moisture: NDArray[np.float64],
    coefficient: float,
) -> NDArray[np.float64]:
    """Accumulate ``coefficient * (neighbour - self)`` over orthogonal neighbours.

    Missing neighbours at the boundary contribute nothing, so edge and
    corner cells receive less inbound diffusion than interior cells.

    Args:
        moisture: Pre-tick moisture, shape ``(rows, cols)``.
        coefficient: Diffusion coefficient.

    Returns:
        Per-cell moisture change before scaling by the time step.
    """
    delta = np.zeros_like(moisture)
    if coefficient <= 0:
        return delta

    delta[1:, :] += coefficient * (moisture[:-1, :] - moisture[1:, :])  # from above
    delta[:-1, :] += coefficient * (moisture[1:, :] - moisture[:-1, :])  # from below
    delta[:, 1:] += coefficient * (moisture[:, :-1] - moisture[:, 1:])  # from left
    delta[:, :-1] += coefficient * (moisture[:, 1:] - moisture[:, :-1])  # from right
    return delta


def advance(
    moisture: NDArray[np.float64],
    tap: NDArray[np.bool_],
    override: NDArray[np.bool_],
    params: SimulationParameters,
    dt: float = 1.0,
) -> tuple[NDArray[np.float64], NDArray[np.bool_]]:
    """Compute one full tick from a pre-tick snapshot.

    Order: irrigation decision, local flux, diffusion, clamp.

    Args:
        moisture: Pre-tick moisture, shape ``(rows, cols)``.
        tap: Pre-tick tap flags.
        override: Override flags.
        params: Simulation parameters.
        dt: Time-step size.

    Returns:
        ``(new_moisture, new_tap)``.
    """
    new_tap = irrigation_decision(moisture, tap, override, params.moisture_threshold)
    new_moisture = moisture + local_flux(new_tap, params, dt)
    new_moisture += diffusion_delta(moisture, params.diffusion_coefficient) * dt
    np.clip(new_moisture, 0.0, 1.0, out=new_moisture)
    return new_moisture, new_tap
