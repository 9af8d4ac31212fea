"""Colour maps from moisture to RGB for each colour scheme."""

from __future__ import annotations

import colorsys

_WHITE = (255, 255, 255)
_BLACK = (0, 0, 0)


def _hsl(hue: float, saturation: float, lightness: float) -> tuple[int, int, int]:
    """Convert HSL (degrees, percent, percent) to an 8-bit RGB tuple."""
    r, g, b = colorsys.hls_to_rgb(hue / 360.0, lightness / 100.0, saturation / 100.0)
    return round(r * 255), round(g * 255), round(b * 255)


def moisture_colour(moisture: float, scheme: str = "default") -> tuple[int, int, int]:
    """Map normalised moisture to a colour.

    - ``default``: hue 0 (red, dry) to 240 (blue, wet) at full
      saturation and 50% lightness.
    - ``blue``: hue 240, lightness 100% (dry) to 50% (wet).
    - ``grayscale``: lightness 100% (dry) to 0% (wet).

    Args:
        moisture: Value in ``[0, 1]``.
        scheme: Colour scheme name.

    Returns:
        ``(r, g, b)`` with components in 0-255.
    """
    if scheme == "blue":
        return _hsl(240.0, 100.0, 100.0 - moisture * 50.0)
    if scheme == "grayscale":
        return _hsl(0.0, 0.0, 100.0 - moisture * 100.0)
    return _hsl(moisture * 240.0, 100.0, 50.0)


def text_colour(moisture: float) -> tuple[int, int, int]:
    """Pick a readable text colour for a cell of this moisture."""
    return _WHITE if moisture > 0.5 else _BLACK
