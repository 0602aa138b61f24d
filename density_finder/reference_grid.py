"""
Reference grid for ASTM D 1250 / IP 200 Table 53.

Each row maps an anchor density (kg/L at 15°C) to the observed density the
same product shows at 0, 5, 10, ... 50°C. By definition of the table the
15°C column equals the anchor density itself.

Rows are keyed by the density in thousandths of kg/L (0.850 -> 850), so a
lookup never depends on how a float happens to be formatted.

Coverage notes:
    - 0.760 to 0.790 are absent; the engine bridges 0.750 -> 0.800
    - 0.690 (0-10°C) and 0.870 (0-25°C) were extrapolated from
      neighbouring slopes because the scanned source was unreadable there
"""

from typing import Dict, Sequence, Tuple

import numpy as np

from . import config


TEMPERATURE_ANCHORS: Tuple[float, ...] = tuple(float(t) for t in range(0, 55, 5))

# density (milli kg/L) -> values at TEMPERATURE_ANCHORS
TABLE_53_ROWS: Dict[int, Tuple[float, ...]] = {
    690: (0.6771, 0.6814, 0.6857, 0.6900, 0.6944, 0.6986, 0.7029, 0.7071, 0.7110, 0.7152, 0.7196),
    700: (0.6869, 0.6913, 0.6957, 0.7000, 0.7043, 0.7085, 0.7127, 0.7168, 0.7209, 0.7249, 0.7289),
    710: (0.6971, 0.7014, 0.7057, 0.7100, 0.7142, 0.7184, 0.7225, 0.7265, 0.7305, 0.7345, 0.7384),
    720: (0.7073, 0.7116, 0.7158, 0.7200, 0.7241, 0.7282, 0.7323, 0.7362, 0.7402, 0.7441, 0.7479),
    730: (0.7175, 0.7217, 0.7259, 0.7300, 0.7341, 0.7381, 0.7421, 0.7460, 0.7499, 0.7536, 0.7573),
    740: (0.7277, 0.7319, 0.7360, 0.7400, 0.7440, 0.7480, 0.7518, 0.7557, 0.7594, 0.7631, 0.7667),
    750: (0.7379, 0.7420, 0.7460, 0.7500, 0.7539, 0.7578, 0.7616, 0.7653, 0.7689, 0.7728, 0.7767),
    800: (0.7891, 0.7928, 0.7964, 0.8000, 0.8035, 0.8070, 0.8104, 0.8139, 0.8172, 0.8206, 0.8238),
    810: (0.7993, 0.8029, 0.8065, 0.8100, 0.8135, 0.8169, 0.8203, 0.8236, 0.8270, 0.8302, 0.8335),
    820: (0.8095, 0.8131, 0.8165, 0.8200, 0.8234, 0.8268, 0.8301, 0.8335, 0.8368, 0.8400, 0.8432),
    830: (0.8197, 0.8232, 0.8266, 0.8300, 0.8334, 0.8367, 0.8400, 0.8433, 0.8466, 0.8498, 0.8530),
    840: (0.8298, 0.8332, 0.8366, 0.8400, 0.8433, 0.8466, 0.8499, 0.8532, 0.8564, 0.8596, 0.8628),
    850: (0.8399, 0.8433, 0.8467, 0.8500, 0.8533, 0.8566, 0.8598, 0.8630, 0.8663, 0.8694, 0.8726),
    860: (0.8500, 0.8534, 0.8567, 0.8600, 0.8633, 0.8665, 0.8697, 0.8729, 0.8761, 0.8793, 0.8824),
    870: (0.8601, 0.8634, 0.8667, 0.8700, 0.8732, 0.8765, 0.8797, 0.8829, 0.8860, 0.8892, 0.8923),
    880: (0.8702, 0.8735, 0.8768, 0.8800, 0.8832, 0.8864, 0.8896, 0.8928, 0.8959, 0.8991, 0.9022),
    890: (0.8803, 0.8836, 0.8869, 0.8900, 0.8931, 0.8964, 0.8996, 0.9027, 0.9059, 0.9090, 0.9121),
    900: (0.8904, 0.8937, 0.8969, 0.9000, 0.9032, 0.9064, 0.9096, 0.9127, 0.9159, 0.9190, 0.9221),
}


class NotFoundError(LookupError):
    """Requested density is not one of the grid's anchors."""


def quantize_density(density: float) -> int:
    """Density in kg/L -> integer key in thousandths (0.8499999 -> 850)."""
    return int(round(float(density) * 10 ** config.DENSITY_DECIMALS))


class ReferenceGrid:
    """
    Immutable density x temperature anchor table.

    Parameters
    ----------
    rows : mapping of density key (milli kg/L) -> one value per temperature anchor
    temperature_anchors : ascending temperatures (°C) the row values refer to

    Raises
    ------
    ValueError : if the rows break the table invariants (row length,
                 ordering, or a reference column that disagrees with its key)
    """

    def __init__(
        self,
        rows: Dict[int, Sequence[float]],
        temperature_anchors: Sequence[float] = TEMPERATURE_ANCHORS,
    ):
        temps = tuple(float(t) for t in temperature_anchors)
        if len(temps) < 2 or any(b <= a for a, b in zip(temps, temps[1:])):
            raise ValueError("Temperature anchors must be strictly ascending (at least two).")
        if config.REFERENCE_TEMPERATURE not in temps:
            raise ValueError(
                f"Temperature anchors must include the {config.REFERENCE_TEMPERATURE}°C reference."
            )
        if len(rows) < 2:
            raise ValueError("Reference grid needs at least two density anchors.")

        ref_idx = temps.index(config.REFERENCE_TEMPERATURE)
        scale = 10 ** config.DENSITY_DECIMALS
        keys = sorted(rows)

        frozen = {}
        for key in keys:
            values = tuple(float(v) for v in rows[key])
            if len(values) != len(temps):
                raise ValueError(
                    f"Row {key / scale:.3f} has {len(values)} values, expected {len(temps)}."
                )
            if abs(values[ref_idx] - key / scale) > 1e-9:
                raise ValueError(
                    f"Row {key / scale:.3f} has {values[ref_idx]:.4f} at "
                    f"{config.REFERENCE_TEMPERATURE}°C; it must equal the anchor density."
                )
            frozen[key] = values

        self._rows = frozen
        self._keys = tuple(keys)
        self._temps = temps

        densities = np.array([key / scale for key in keys], dtype=np.float64)
        densities.setflags(write=False)
        self._densities = densities

        matrix = np.array([frozen[key] for key in keys], dtype=np.float64)
        matrix.setflags(write=False)
        self._matrix = matrix

    def density_anchors(self) -> np.ndarray:
        """Ascending anchor densities (read-only array)."""
        return self._densities

    def temperature_anchors(self) -> Tuple[float, ...]:
        return self._temps

    def row(self, density: float) -> Tuple[float, ...]:
        """
        Values at every temperature anchor for an exact anchor density.

        Raises
        ------
        NotFoundError : if ``density`` is not an anchor (0.001 resolution)
        """
        key = quantize_density(density)
        try:
            return self._rows[key]
        except KeyError:
            raise NotFoundError(
                f"{float(density):.3f} kg/L is not a density anchor of this grid."
            ) from None

    def as_array(self) -> np.ndarray:
        """(n_densities, n_temperatures) read-only matrix of table values."""
        return self._matrix

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, density) -> bool:
        return quantize_density(density) in self._rows

    def __repr__(self) -> str:
        d = self._densities
        return (
            f"ReferenceGrid({len(self)} densities {d[0]:.3f}-{d[-1]:.3f} kg/L, "
            f"{len(self._temps)} temperatures {self._temps[0]:.0f}-{self._temps[-1]:.0f}°C)"
        )


# default grid, built once at import and never mutated
TABLE_53 = ReferenceGrid(TABLE_53_ROWS)
