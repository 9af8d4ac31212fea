"""Tests for soilsim.moisture.update — the per-tick rule on raw arrays."""

import numpy as np
import pytest

from soilsim.grid.parameters import SimulationParameters
from soilsim.moisture.update import (
    advance,
    diffusion_delta,
    irrigation_decision,
    local_flux,
)


class TestIrrigationDecision:
    """Tests for the threshold rule and override precedence."""

    def test_threshold_turns_tap_on_below(self) -> None:
        moisture = np.array([[0.1, 0.3]])
        no = np.zeros((1, 2), dtype=bool)
        tap = irrigation_decision(moisture, no, no, threshold=0.2)
        assert tap.tolist() == [[True, False]]

    def test_equal_to_threshold_is_off(self) -> None:
        moisture = np.array([[0.2]])
        no = np.zeros((1, 1), dtype=bool)
        assert not irrigation_decision(moisture, no, no, threshold=0.2)[0, 0]

    def test_override_keeps_manual_tap(self) -> None:
        moisture = np.array([[0.9, 0.0]])
        tap = np.array([[True, False]])
        override = np.array([[True, True]])
        result = irrigation_decision(moisture, tap, override, threshold=0.5)
        assert result.tolist() == [[True, False]]


class TestLocalFlux:
    """Tests for irrigation gain and evapotranspiration loss."""

    def test_flux_scaled_by_dt(self) -> None:
        params = SimulationParameters(
            irrigation_rate=0.1,
            evapotranspiration_rate=0.05,
        )
        flux = local_flux(np.array([[True, False]]), params, dt=2.0)
        assert flux[0, 0] == pytest.approx(0.2)
        assert flux[0, 1] == pytest.approx(-0.1)


class TestDiffusionDelta:
    """Tests for orthogonal-neighbour diffusion."""

    def test_zero_coefficient(self) -> None:
        moisture = np.random.default_rng(1).uniform(size=(3, 3))
        assert np.all(diffusion_delta(moisture, 0.0) == 0.0)

    def test_pair_moves_symmetrically(self) -> None:
        delta = diffusion_delta(np.array([[0.25, 0.75]]), 0.25)
        assert delta[0, 0] == 0.125
        assert delta[0, 1] == -0.125

    def test_neighbour_counts(self) -> None:
        """A dry cell in a wet field gains D per existing neighbour."""
        d = 0.1
        for (r, c), expected in (((0, 0), 2), ((0, 2), 3), ((2, 2), 4)):
            moisture = np.ones((5, 5))
            moisture[r, c] = 0.0
            delta = diffusion_delta(moisture, d)
            assert delta[r, c] == pytest.approx(d * expected)

    def test_no_wraparound(self) -> None:
        moisture = np.zeros((1, 4))
        moisture[0, 0] = 1.0
        delta = diffusion_delta(moisture, 0.1)
        assert delta[0, 3] == 0.0
        assert delta[0, 1] == pytest.approx(0.1)

    def test_uniform_field_is_stationary(self) -> None:
        assert np.all(diffusion_delta(np.full((4, 6), 0.3), 0.2) == 0.0)


class TestAdvance:
    """Tests for the full tick on arrays."""

    def test_inputs_not_mutated(self) -> None:
        moisture = np.array([[0.1, 0.9], [0.5, 0.5]])
        tap = np.zeros((2, 2), dtype=bool)
        override = np.zeros((2, 2), dtype=bool)
        before = moisture.copy()
        advance(moisture, tap, override, SimulationParameters())
        assert np.array_equal(moisture, before)
        assert not tap.any()

    def test_result_clamped(self) -> None:
        params = SimulationParameters(
            diffusion_coefficient=1.0,
            evapotranspiration_rate=0.5,
            irrigation_rate=0.5,
            moisture_threshold=0.5,
        )
        moisture = np.array([[0.0, 1.0, 0.0], [1.0, 0.0, 1.0]])
        no = np.zeros_like(moisture, dtype=bool)
        result, _ = advance(moisture, no, no, params, dt=3.0)
        assert result.min() >= 0.0
        assert result.max() <= 1.0
