"""
Global configuration for the density finder.

Keeps all magic numbers in one place. The domain bounds are fixed by the
extent of the Table 53 reference grid and should not be edited; the page
layout and output settings can be tweaked freely.
"""

from pathlib import Path


# ── paths ────────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
OUTPUT_DIR = PROJECT_ROOT / "output"
TABLE_CSV_NAME = "table53.csv"


# ── correlation domain ───────────────────────────────────────────────────
# upper density bound sits past the last anchor (0.900); inputs up to 0.909
# extrapolate along the top bracket
DENSITY_MIN = 0.690             # kg/L
DENSITY_MAX = 0.909             # kg/L
TEMPERATURE_MIN = 0.0           # °C
TEMPERATURE_MAX = 50.0          # °C
REFERENCE_TEMPERATURE = 15.0    # °C, the "standard" column
RESULT_DECIMALS = 4             # ASTM tables publish 4 decimals
DENSITY_DECIMALS = 3            # anchor keys are quantized to 0.001 kg/L


# ── materialized table layout ────────────────────────────────────────────
N_PAGES = 31
COLUMNS_PER_PAGE = 10
COLUMN_STEP_MILLI = 1           # 0.001 kg/L between columns
PAGE_STEP_MILLI = 10            # 0.010 kg/L between page starts
FIRST_COLUMN_MILLI = 690        # 0.690 kg/L
TEMPERATURE_STEP = 0.5          # °C between table rows
TEXT_SAMPLE_STEP = 5.0          # °C between rows shown in the text export
FALLBACK_VALUE = 0.0            # shown for cells the engine rejects
STRICT_MATERIALIZATION = False  # True -> raise instead of falling back


# ── visualization ────────────────────────────────────────────────────────
DARK_BG = "#0c0c16"
TITLE_COLOR = "white"
DPI = 200                       # matplotlib export resolution
FIG_WIDTH = 12
FIG_HEIGHT = 7
COLORMAP = "RdBu_r"             # diverging: corrections change sign at 15°C
SURFACE_DENSITY_POINTS = 120    # chart resolution along density
SURFACE_TEMPERATURE_POINTS = 101
