"""
Correlation engine: observed (density, temperature) -> density at 15°C.

Table 53 only publishes values on a coarse grid (every 0.010 kg/L, every
5°C), so anything in between is estimated by bilinear interpolation:

    1. Bracket the observed density between two anchor rows (d1, d2)
    2. Bracket the observed temperature between two anchor columns (t1, t2)
    3. Interpolate along density at t1 and at t2
    4. Interpolate those two results along temperature
    5. Round to 4 decimals

Bracketing never leaves the grid: a value at or below the first anchor uses
the first two anchors, a value above the last anchor uses the last two. The
second case is what carries densities from 0.900 up to the 0.909 domain
limit (plain linear extrapolation along the top cell).

The engine is a pure function of its inputs and the grid it was built
with. Nothing is cached.
"""

import math
from typing import Sequence, Tuple

import numpy as np

from . import config
from .reference_grid import TABLE_53, ReferenceGrid


class DomainError(ValueError):
    """Observed density or temperature lies outside the table's range."""

    def __init__(self, message: str, axis: str = None, value=None):
        super().__init__(message)
        self.axis = axis
        self.value = value


def _bracket(anchors: Sequence[float], x: float) -> Tuple[int, float]:
    """
    Locate x between two anchors.

    Returns
    -------
    hi : index of the upper anchor (always >= 1, so ``hi - 1`` is the lower)
    ratio : position of x inside [anchors[hi-1], anchors[hi]]; 0 for a
            degenerate bracket
    """
    n = len(anchors)
    hi = int(np.searchsorted(anchors, x, side="left"))
    if hi >= n:
        hi = n - 1
    if hi == 0:
        hi = 1

    lo_val = anchors[hi - 1]
    hi_val = anchors[hi]
    if hi_val == lo_val:
        return hi, 0.0
    return hi, (x - lo_val) / (hi_val - lo_val)


def _as_number(value, axis: str) -> float:
    try:
        x = float(value)
    except (TypeError, ValueError):
        raise DomainError(f"{axis.capitalize()} must be numeric, got {value!r}.", axis, value) from None
    if not math.isfinite(x):
        raise DomainError(f"{axis.capitalize()} must be finite, got {value!r}.", axis, value)
    return x


class CorrelationEngine:
    """
    Bilinear Table 53 correlation over a ``ReferenceGrid``.

    Parameters
    ----------
    grid : the anchor table to interpolate (default: the built-in Table 53)
    """

    def __init__(self, grid: ReferenceGrid = None):
        if grid is None:
            grid = TABLE_53
        self.grid = grid
        self._densities = grid.density_anchors()
        self._temps = np.asarray(grid.temperature_anchors(), dtype=np.float64)
        self._values = grid.as_array()

    def validate(self, observed_density, observed_temperature) -> Tuple[float, float]:
        """
        Check both inputs against the fixed table domain.

        Raises
        ------
        DomainError : non-numeric, non-finite, or out-of-range input
        """
        d = _as_number(observed_density, "density")
        t = _as_number(observed_temperature, "temperature")

        if d < config.DENSITY_MIN or d > config.DENSITY_MAX:
            raise DomainError(
                f"Density is out of table range ({config.DENSITY_MIN:.3f} - "
                f"{config.DENSITY_MAX:.3f} kg/L): got {d}.",
                "density", d,
            )
        if t < config.TEMPERATURE_MIN or t > config.TEMPERATURE_MAX:
            raise DomainError(
                f"Temperature is out of table range ({config.TEMPERATURE_MIN:.1f}°C - "
                f"{config.TEMPERATURE_MAX:.1f}°C): got {t}.",
                "temperature", t,
            )
        return d, t

    def interpolate(self, observed_density: float, observed_temperature: float) -> float:
        """
        Unrounded bilinear blend at (density, temperature).

        No domain check: outside the grid this extrapolates linearly from
        the edge cell. Use ``correlate`` for anything user-facing.
        """
        d_hi, r_d = _bracket(self._densities, observed_density)
        t_hi, r_t = _bracket(self._temps, observed_temperature)

        q = self._values
        q11 = q[d_hi - 1, t_hi - 1]
        q21 = q[d_hi, t_hi - 1]
        q12 = q[d_hi - 1, t_hi]
        q22 = q[d_hi, t_hi]

        # density first, at both temperature bounds
        r1 = q11 + r_d * (q21 - q11)
        r2 = q12 + r_d * (q22 - q12)

        return float(r1 + r_t * (r2 - r1))

    def correlate(self, observed_density, observed_temperature) -> float:
        """
        Standard density at 15°C for an observed density and temperature.

        Parameters
        ----------
        observed_density : kg/L, within [0.690, 0.909]
        observed_temperature : °C, within [0.0, 50.0]

        Returns
        -------
        float : density at 15°C, rounded to 4 decimals with Python's
                ``round`` (nearest, ties to even on the binary value)

        Raises
        ------
        DomainError : input outside the table range
        """
        d, t = self.validate(observed_density, observed_temperature)
        return round(self.interpolate(d, t), config.RESULT_DECIMALS)

    def correction(self, observed_density, observed_temperature) -> float:
        """Standard minus observed density, rounded to 4 decimals."""
        d, t = self.validate(observed_density, observed_temperature)
        return round(self.correlate(d, t) - d, config.RESULT_DECIMALS)


default_engine = CorrelationEngine()


def correlate(observed_density, observed_temperature) -> float:
    """Single-query entry point on the built-in Table 53 grid."""
    return default_engine.correlate(observed_density, observed_temperature)
