"""Tests for soilsim.display — unit formatting and colour maps."""

import pytest

from soilsim.display.colors import moisture_colour, text_colour
from soilsim.display.units import (
    PARAMETER_EXPLANATIONS,
    PARAMETER_FORMULAS,
    VOLUMETRIC_CAPACITY,
    format_moisture,
    format_parameter_name,
    from_display_value,
    legend_labels,
    parameter_label,
    parameter_unit,
    to_display_value,
)
from soilsim.grid.parameters import SimulationParameters


class TestMoistureUnits:
    """Tests for moisture conversion and formatting."""

    def test_format_percentage(self) -> None:
        assert format_moisture(0.423, "percentage") == "42.3%"

    def test_format_volumetric(self) -> None:
        assert VOLUMETRIC_CAPACITY == 0.5
        assert format_moisture(0.5, "volumetric") == "0.250 m³/m³"

    def test_display_values(self) -> None:
        assert to_display_value(0.25, "percentage") == 25.0
        assert to_display_value(0.25, "volumetric") == 0.125
        assert from_display_value(25.0, "percentage") == 0.25
        assert from_display_value(0.125, "volumetric") == 0.25

    def test_legend_labels(self) -> None:
        assert legend_labels("percentage") == ("0% (Dry)", "50%", "100% (Wet)")
        assert legend_labels("volumetric")[2] == "0.500 m³/m³ (Wet)"


class TestParameterLabels:
    """Tests for parameter names and unit labels."""

    @pytest.mark.parametrize(
        ("name", "units_system", "moisture_unit", "expected"),
        [
            ("diffusion_coefficient", "metric", "percentage", ""),
            ("evapotranspiration_rate", "metric", "percentage", "mm/h"),
            ("irrigation_rate", "imperial", "percentage", "in/h"),
            ("moisture_threshold", "metric", "percentage", "%"),
            ("moisture_threshold", "imperial", "volumetric", "m³/m³"),
        ],
    )
    def test_parameter_unit(
        self,
        name: str,
        units_system: str,
        moisture_unit: str,
        expected: str,
    ) -> None:
        assert parameter_unit(name, units_system, moisture_unit) == expected

    def test_format_parameter_name(self) -> None:
        assert format_parameter_name("evapotranspiration_rate") == (
            "Evapotranspiration Rate"
        )

    def test_parameter_label(self) -> None:
        assert parameter_label("irrigation_rate", "metric", "percentage") == (
            "Irrigation Rate (mm/h)"
        )
        assert parameter_label("diffusion_coefficient", "metric", "percentage") == (
            "Diffusion Coefficient"
        )

    def test_every_parameter_explained(self) -> None:
        names = set(SimulationParameters().as_dict()) | {"time_step_size"}
        assert set(PARAMETER_EXPLANATIONS) == names
        assert set(PARAMETER_FORMULAS) <= names

    def test_time_step_unit(self) -> None:
        assert parameter_label("time_step_size", "imperial", "percentage") == (
            "Time Step Size (h)"
        )


class TestColours:
    """Tests for the three colour schemes."""

    def test_default_dry_is_red_wet_is_blue(self) -> None:
        assert moisture_colour(0.0) == (255, 0, 0)
        assert moisture_colour(1.0) == (0, 0, 255)

    def test_blue_scheme(self) -> None:
        assert moisture_colour(0.0, "blue") == (255, 255, 255)
        assert moisture_colour(1.0, "blue") == (0, 0, 255)

    def test_grayscale_scheme(self) -> None:
        assert moisture_colour(0.0, "grayscale") == (255, 255, 255)
        assert moisture_colour(1.0, "grayscale") == (0, 0, 0)
        r, g, b = moisture_colour(0.5, "grayscale")
        assert r == g == b

    def test_text_colour(self) -> None:
        assert text_colour(0.8) == (255, 255, 255)
        assert text_colour(0.5) == (0, 0, 0)
