"""
Plain-text rendering of materialized table pages.

Each page is reduced to the whole-5°C rows (11 of the 101) so the
whole table can be skimmed or pasted into a report. Page 1 also carries
the standard's header block and a worked example.
"""

from typing import NamedTuple, Sequence, Tuple

from . import config
from .correlation import CorrelationEngine, default_engine
from .table_materializer import TablePage, materialized_pages


class ExtractedPage(NamedTuple):
    page_number: int
    content: str


EXAMPLE_DENSITY = 0.690
EXAMPLE_TEMPERATURE = 25.0
NOTE_ANCHORS = (0.690, 0.800, 0.900)


def sample_temperatures() -> Tuple[float, ...]:
    n = int(round((config.TEMPERATURE_MAX - config.TEMPERATURE_MIN) / config.TEXT_SAMPLE_STEP)) + 1
    return tuple(config.TEMPERATURE_MIN + i * config.TEXT_SAMPLE_STEP for i in range(n))


def _fmt_value(v: float) -> str:
    # table convention: .6986 rather than 0.6986
    s = f"{v:.4f}"
    return s[1:] if s.startswith("0") else s


def _header_block(engine: CorrelationEngine) -> str:
    grid = engine.grid
    temps = grid.temperature_anchors()
    span = temps[-1] - temps[0]

    notes = []
    for d in NOTE_ANCHORS:
        row = grid.row(d)
        notes.append(f"- {d:.3f} Range: mean expansion approx {(row[-1] - row[0]) / span:.5f}/°C")

    result = engine.correlate(EXAMPLE_DENSITY, EXAMPLE_TEMPERATURE)
    corr = engine.correction(EXAMPLE_DENSITY, EXAMPLE_TEMPERATURE)

    return "\n".join([
        "ASTM-IP PETROLEUM MEASUREMENT TABLES",
        "ASTM Designation: D 1250 | IP Designation: 200",
        "",
        "TABLE 53",
        "REDUCTION OF OBSERVED DENSITY TO DENSITY AT 15°C",
        "",
        "Scope:",
        "This table provides values for reducing observed density to standard density at 15°C.",
        "Values between the published anchors are obtained by bilinear interpolation.",
        "",
        "CALIBRATION NOTES:",
        *notes,
        "",
        "EXAMPLE:",
        f"Observed Density: {EXAMPLE_DENSITY:.3f} @ {EXAMPLE_TEMPERATURE:.1f}°C",
        f"Correction: {corr:+.4f}",
        f"Density @ 15°C: {result:.4f}",
        "",
    ])


def render_page(page: TablePage, page_number: int, engine: CorrelationEngine = None) -> str:
    """
    Text block for one page.

    Parameters
    ----------
    page : materialized page to render
    page_number : 1-based number shown in the footer; page 1 gets the header block
    engine : engine used for the page-1 example (default: built-in Table 53)
    """
    if engine is None:
        engine = default_engine

    start_d, end_d = page.density_range
    start_t, end_t = page.temp_range

    headers = " | ".join(f"{d:.3f}" for d in page.densities)
    separator = "-" * (len(headers) + 12)

    row_lines = []
    for t in sample_temperatures():
        row = page.row_for(t)
        values = " | ".join(_fmt_value(v) for v in row.values)
        row_lines.append(f"{t:.1f}".ljust(4) + f" | {values}")

    lines = []
    if page_number == 1:
        lines.append(_header_block(engine))
    lines += [
        "TABLE 53 - CALIBRATED DIGITAL EXTRACTION",
        f"DENSITY RANGE: {start_d:.3f} TO {end_d:.3f}",
        f"TEMPERATURE RANGE: {start_t:.1f}°C TO {end_t:.1f}°C",
    ]
    if page.fallbacks:
        lines.append(
            f"NOTE: {len(page.fallbacks)} values outside the correlation range are shown as "
            f"{_fmt_value(config.FALLBACK_VALUE)}"
        )
    lines += [
        "",
        f"Temp | {headers}",
        separator,
        *row_lines,
        "",
        f"(End of Section {page_number})",
    ]
    return "\n".join(lines)


def render_pages(pages: Sequence[TablePage], engine: CorrelationEngine = None) -> Tuple[ExtractedPage, ...]:
    return tuple(
        ExtractedPage(number, render_page(page, number, engine))
        for number, page in enumerate(pages, start=1)
    )


def text_renderings() -> Tuple[ExtractedPage, ...]:
    """Text export of the default materialized pages, one entry per page."""
    return render_pages(materialized_pages())
