"""Errors — the caller-input error taxonomy.

Every error here is locally recoverable: the caller fixes the argument
and retries.  Moisture values are clamped rather than rejected, so the
only moisture error is an invalid ``Uniform`` seed value.
"""

from __future__ import annotations


class SoilSimError(Exception):
    """Base class for all soilsim errors."""


class InvalidDimension(SoilSimError, ValueError):
    """Grid rows or columns below 1."""


class InvalidMoisture(SoilSimError, ValueError):
    """A seed moisture value outside ``[0, 1]``."""


class InvalidParameter(SoilSimError, ValueError):
    """A simulation parameter or time-step size out of range."""


class ConfigError(SoilSimError, ValueError):
    """A config file value that cannot be interpreted."""


class OutOfBounds(SoilSimError, IndexError):
    """Cell coordinates outside the grid."""


class UninitializedGrid(SoilSimError, RuntimeError):
    """An engine operation was called before ``initialize``."""
