"""Tests for observed-cell history sampling."""

import pytest

from soilsim.simulation.engine import SimulationEngine
from soilsim.simulation.errors import OutOfBounds
from soilsim.simulation.history import MoistureHistory, MoistureSample


class TestMoistureHistory:
    """Tests for the bounded sample buffer on its own."""

    def test_bounded_to_max_length(self) -> None:
        history = MoistureHistory(max_length=3)
        history.select((0, 0))
        for tick in range(1, 6):
            history.record(tick, tick / 10)
        assert [s.tick for s in history.samples] == [3, 4, 5]

    def test_switching_selection_clears(self) -> None:
        history = MoistureHistory()
        history.select((0, 0))
        history.record(1, 0.5)
        history.select((1, 1))
        assert len(history) == 0
        assert history.selected == (1, 1)

    def test_reselecting_same_cell_keeps_samples(self) -> None:
        history = MoistureHistory()
        history.select((2, 2))
        history.record(1, 0.5)
        history.select((2, 2))
        assert history.samples == [MoistureSample(tick=1, moisture=0.5)]


class TestEngineHistory:
    """Tests for history sampled by SimulationEngine.step."""

    def test_no_samples_without_selection(self, engine: SimulationEngine) -> None:
        engine.run(ticks=3)
        assert engine.history.samples == []

    def test_samples_after_each_tick(self, engine: SimulationEngine) -> None:
        engine.observe((3, 3))
        engine.run(ticks=2)
        samples = engine.history.samples
        assert [s.tick for s in samples] == [1, 2]
        assert samples[-1].moisture == engine.grid.cell_at(3, 3).moisture

    def test_bounded_to_twenty(self, engine: SimulationEngine) -> None:
        engine.observe((0, 0))
        engine.run(ticks=25)
        samples = engine.history.samples
        assert len(samples) == 20
        assert [s.tick for s in samples] == list(range(6, 26))

    def test_switching_observed_cell_clears_history(
        self,
        engine: SimulationEngine,
    ) -> None:
        engine.observe((0, 0))
        engine.run(ticks=5)
        engine.observe((1, 1))
        assert engine.history.samples == []
        engine.step()
        assert [s.tick for s in engine.history.samples] == [6]

    def test_observe_none_clears(self, engine: SimulationEngine) -> None:
        engine.observe((0, 0))
        engine.run(ticks=2)
        engine.observe(None)
        assert engine.history.selected is None
        engine.step()
        assert engine.history.samples == []

    def test_observe_out_of_bounds(self, engine: SimulationEngine) -> None:
        with pytest.raises(OutOfBounds):
            engine.observe((10, 10))

    def test_observe_rejects_partial_coordinate(
        self,
        engine: SimulationEngine,
    ) -> None:
        engine.observe((0, 0))
        with pytest.raises((TypeError, ValueError)):
            engine.observe(3)  # type: ignore[arg-type]
        assert engine.history.selected == (0, 0)

    def test_reset_clears_history(self, engine: SimulationEngine) -> None:
        engine.observe((0, 0))
        engine.run(ticks=4)
        engine.reset()
        assert engine.history.selected is None
        assert engine.history.samples == []

    def test_custom_history_length(self) -> None:
        from soilsim.simulation.config import SimulationConfig

        engine = SimulationEngine.from_config(SimulationConfig(history_length=5))
        engine.observe((0, 0))
        engine.run(ticks=8)
        assert [s.tick for s in engine.history.samples] == [4, 5, 6, 7, 8]
