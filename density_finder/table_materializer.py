"""
Table materializer: the full Table 53 page layout, pre-computed.

The printed table is split into pages of 10 density columns (0.001 kg/L
apart) by 101 temperature rows (0.0 to 50.0°C every 0.5°C). This module
drives the correlation engine over every cell of every page once and keeps
the result as immutable ``TablePage`` objects for browsing and export.

Layout:
    page i, column j  ->  density 0.690 + i * 0.010 + j * 0.001
    row k             ->  temperature 0.0 + k * 0.5

31 pages reach 0.999 kg/L while the engine stops at 0.909, so the pages
from 0.910 upward cannot be computed. Those cells are shown as 0.0 and
recorded in ``TablePage.fallbacks``; each affected page logs a warning.
Pass ``strict=True`` to raise the underlying DomainError instead.
"""

import functools
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple, Sequence, Tuple

import numpy as np
import pandas as pd

from . import config
from .correlation import CorrelationEngine, DomainError, default_engine

log = logging.getLogger(__name__)


class TableRow(NamedTuple):
    temperature: float
    values: Tuple[float, ...]


@dataclass(frozen=True, eq=False)
class TablePage:
    """
    One page of the materialized table.

    Attributes
    ----------
    densities : column densities (kg/L), ascending
    temperatures : row temperatures (°C), ascending
    values : read-only (n_temperatures, n_densities) array of standard densities
    fallbacks : (density, temperature) of every cell filled with the fallback value
    """

    densities: Tuple[float, ...]
    temperatures: Tuple[float, ...]
    values: np.ndarray
    fallbacks: Tuple[Tuple[float, float], ...] = ()

    @property
    def density_range(self) -> Tuple[float, float]:
        return self.densities[0], self.densities[-1]

    @property
    def temp_range(self) -> Tuple[float, float]:
        return self.temperatures[0], self.temperatures[-1]

    @property
    def rows(self) -> Tuple[TableRow, ...]:
        return tuple(
            TableRow(t, tuple(float(v) for v in self.values[k]))
            for k, t in enumerate(self.temperatures)
        )

    def row_for(self, temperature: float, tol: float = 0.1) -> TableRow:
        """Row whose temperature is within ``tol`` of the request."""
        for k, t in enumerate(self.temperatures):
            if abs(t - temperature) < tol:
                return TableRow(t, tuple(float(v) for v in self.values[k]))
        raise KeyError(f"No row at {temperature}°C on page {self.density_range}.")

    @property
    def is_complete(self) -> bool:
        """True when no cell had to fall back."""
        return not self.fallbacks

    def to_frame(self) -> pd.DataFrame:
        """Page as a DataFrame: index = temperature, columns = density."""
        return pd.DataFrame(
            self.values.copy(),
            index=pd.Index(self.temperatures, name="temperature"),
            columns=pd.Index(self.densities, name="density"),
        )


class TableMaterializer:
    """
    Builds the paginated table from a correlation engine.

    Parameters
    ----------
    engine : engine to evaluate (default: the built-in Table 53 engine)
    strict : raise on cells the engine rejects instead of filling them
             (default: config.STRICT_MATERIALIZATION)
    n_pages : number of pages (default: config.N_PAGES)
    """

    def __init__(self, engine: CorrelationEngine = None, strict: bool = None, n_pages: int = None):
        if engine is None:
            engine = default_engine
        if strict is None:
            strict = config.STRICT_MATERIALIZATION
        if n_pages is None:
            n_pages = config.N_PAGES
        self.engine = engine
        self.strict = strict
        self.n_pages = n_pages

    def column_densities(self, page_index: int) -> Tuple[float, ...]:
        # integer thousandths first, so 0.690 + 0.001 * 7 never drifts
        start = config.FIRST_COLUMN_MILLI + page_index * config.PAGE_STEP_MILLI
        return tuple(
            (start + j * config.COLUMN_STEP_MILLI) / 1000.0
            for j in range(config.COLUMNS_PER_PAGE)
        )

    @staticmethod
    def row_temperatures() -> Tuple[float, ...]:
        span = config.TEMPERATURE_MAX - config.TEMPERATURE_MIN
        n_rows = int(round(span / config.TEMPERATURE_STEP)) + 1
        return tuple(config.TEMPERATURE_MIN + k * config.TEMPERATURE_STEP for k in range(n_rows))

    def build_page(self, page_index: int) -> TablePage:
        densities = self.column_densities(page_index)
        temperatures = self.row_temperatures()

        values = np.empty((len(temperatures), len(densities)), dtype=np.float64)
        fallbacks = []

        for k, t in enumerate(temperatures):
            for j, d in enumerate(densities):
                try:
                    values[k, j] = self.engine.correlate(d, t)
                except DomainError:
                    if self.strict:
                        raise
                    values[k, j] = config.FALLBACK_VALUE
                    fallbacks.append((d, t))

        if fallbacks:
            log.warning(
                "Page %d (%.3f-%.3f kg/L): %d of %d cells outside the correlation domain, "
                "shown as %s",
                page_index + 1, densities[0], densities[-1],
                len(fallbacks), values.size, config.FALLBACK_VALUE,
            )

        values.setflags(write=False)
        return TablePage(
            densities=densities,
            temperatures=temperatures,
            values=values,
            fallbacks=tuple(fallbacks),
        )

    def build(self) -> Tuple[TablePage, ...]:
        """Every page, in order."""
        pages = tuple(self.build_page(i) for i in range(self.n_pages))
        log.debug("Materialized %d pages", len(pages))
        return pages


@functools.lru_cache(maxsize=None)
def materialized_pages() -> Tuple[TablePage, ...]:
    """The default Table 53 pages, built on first call and shared afterwards."""
    return TableMaterializer().build()


def pages_to_frame(pages: Sequence[TablePage]) -> pd.DataFrame:
    """
    Flatten pages into one long DataFrame.

    Columns: page (1-based), temperature, density, standard_density, fallback
    """
    all_rows = []
    for number, page in enumerate(pages, start=1):
        missing = set(page.fallbacks)
        for k, t in enumerate(page.temperatures):
            for j, d in enumerate(page.densities):
                all_rows.append({
                    "page": number,
                    "temperature": t,
                    "density": d,
                    "standard_density": float(page.values[k, j]),
                    "fallback": (d, t) in missing,
                })
    return pd.DataFrame(all_rows)


def export_pages_csv(pages: Sequence[TablePage] = None, path=None) -> Path:
    """
    Write the materialized table to CSV.

    Parameters
    ----------
    pages : pages to export (default: materialized_pages())
    path : destination (default: config.DATA_DIR / config.TABLE_CSV_NAME)

    Returns
    -------
    Path : where the file was written
    """
    if pages is None:
        pages = materialized_pages()
    if path is None:
        path = config.DATA_DIR / config.TABLE_CSV_NAME
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    pages_to_frame(pages).to_csv(path, index=False, float_format="%.4f")
    return path
