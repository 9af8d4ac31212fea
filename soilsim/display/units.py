"""Units — formatting engine values for people.

The engine always stores moisture as a normalised 0-1 float.  These
helpers convert it to the user's chosen moisture unit and label the
simulation parameters for the chosen units system.
"""

from __future__ import annotations

# Saturated volumetric water content assumed for display only.  It is
# a fixed presentation constant, not a soil property.
VOLUMETRIC_CAPACITY = 0.5

PARAMETER_EXPLANATIONS: dict[str, str] = {
    "diffusion_coefficient": (
        "Diffusion Coefficient (D): Controls the rate at which moisture moves "
        "between cells. Higher values mean faster diffusion."
    ),
    "evapotranspiration_rate": (
        "Evapotranspiration Rate (ET0): Represents the rate at which water is "
        "lost from the soil due to evaporation and plant transpiration."
    ),
    "irrigation_rate": (
        "Irrigation Rate: The amount of water added to the soil when "
        "irrigation is applied."
    ),
    "moisture_threshold": (
        "Moisture Threshold: The soil moisture level below which irrigation "
        "is triggered."
    ),
    "time_step_size": (
        "Time Step Size: The simulated time covered by one tick. Rates are "
        "multiplied by it."
    ),
}

PARAMETER_FORMULAS: dict[str, str] = {
    "diffusion_coefficient": "dθ = D * Σ(θ_neighbour - θ)",
    "evapotranspiration_rate": "dθ = -ET0 * Δt",
    "irrigation_rate": "dθ = Ir * Δt",
}


def to_display_value(moisture: float, unit: str) -> float:
    """Convert normalised moisture to percent or m³/m³."""
    if unit == "percentage":
        return moisture * 100.0
    return moisture * VOLUMETRIC_CAPACITY


def from_display_value(value: float, unit: str) -> float:
    """Convert a percent or m³/m³ entry back to normalised moisture.

    The result is not clamped; the engine clamps on write.
    """
    if unit == "percentage":
        return value / 100.0
    return value / VOLUMETRIC_CAPACITY


def format_moisture(moisture: float, unit: str) -> str:
    """Format moisture as ``"42.0%"`` or ``"0.210 m³/m³"``."""
    if unit == "percentage":
        return f"{moisture * 100:.1f}%"
    return f"{moisture * VOLUMETRIC_CAPACITY:.3f} m³/m³"


def parameter_unit(name: str, units_system: str, moisture_unit: str) -> str:
    """Return the unit label for a simulation parameter.

    The diffusion coefficient is unitless, so it (and any unknown name)
    gets an empty label.
    """
    if name in ("evapotranspiration_rate", "irrigation_rate"):
        return "mm/h" if units_system == "metric" else "in/h"
    if name == "moisture_threshold":
        return "%" if moisture_unit == "percentage" else "m³/m³"
    if name == "time_step_size":
        return "h"
    return ""


def format_parameter_name(name: str) -> str:
    """Turn ``"moisture_threshold"`` into ``"Moisture Threshold"``."""
    return " ".join(word.capitalize() for word in name.split("_"))


def parameter_label(name: str, units_system: str, moisture_unit: str) -> str:
    """Return the display name with its unit in parentheses, if any."""
    unit = parameter_unit(name, units_system, moisture_unit)
    label = format_parameter_name(name)
    return f"{label} ({unit})" if unit else label


def legend_labels(unit: str) -> tuple[str, str, str]:
    """Return the dry, middle and wet legend labels."""
    if unit == "percentage":
        return "0% (Dry)", "50%", "100% (Wet)"
    return "0.000 m³/m³ (Dry)", "0.250 m³/m³", "0.500 m³/m³ (Wet)"
