"""
Charts of the Table 53 correction surface.

The interesting quantity is not the standard density itself (it is
within a few percent of the observed one everywhere) but the correction
standard - observed. It is zero along the 15°C line, negative below it
and positive above, and its slope changes with the product's density.

Two backends, same data:
    - matplotlib: static PNG heatmap with the zero contour and anchor rows
    - plotly: interactive HTML heatmap with hover values
"""

from typing import Tuple

import numpy as np

import matplotlib
matplotlib.use("Agg")  # non-interactive backend for server/CI environments
import matplotlib.pyplot as plt

import plotly.graph_objects as go

from . import config
from .correlation import CorrelationEngine, default_engine


def build_correction_surface(
    engine: CorrelationEngine = None,
    n_d: int = None,
    n_t: int = None,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Evaluate the correction on a regular (density, temperature) grid.

    Parameters
    ----------
    engine : engine to evaluate (default: built-in Table 53)
    n_d : points along density (default: config.SURFACE_DENSITY_POINTS)
    n_t : points along temperature (default: config.SURFACE_TEMPERATURE_POINTS)

    Returns
    -------
    D_grid : 1D densities spanning the domain (length n_d)
    T_grid : 1D temperatures spanning the domain (length n_t)
    C_mesh : 2D corrections in kg/L (n_t x n_d)
    """
    if engine is None:
        engine = default_engine
    if n_d is None:
        n_d = config.SURFACE_DENSITY_POINTS
    if n_t is None:
        n_t = config.SURFACE_TEMPERATURE_POINTS

    D_grid = np.linspace(config.DENSITY_MIN, config.DENSITY_MAX, n_d)
    T_grid = np.linspace(config.TEMPERATURE_MIN, config.TEMPERATURE_MAX, n_t)

    C_mesh = np.empty((n_t, n_d))
    for k, t in enumerate(T_grid):
        for j, d in enumerate(D_grid):
            C_mesh[k, j] = engine.correlate(d, t) - d

    return D_grid, T_grid, C_mesh


# ════════════════════════════════════════════════════════════════════════
#  MATPLOTLIB — HEATMAP (static PNG)
# ════════════════════════════════════════════════════════════════════════

def plot_correction_matplotlib(
    D_grid: np.ndarray,
    T_grid: np.ndarray,
    C_mesh: np.ndarray,
    engine: CorrelationEngine = None,
    output_path: str = None,
) -> str:
    """
    Render the correction surface as a high-res PNG.

    Parameters
    ----------
    D_grid, T_grid, C_mesh : arrays from build_correction_surface
    engine : used to mark the anchor densities (default: built-in Table 53)
    output_path : where to save (default: config.OUTPUT_DIR / "correction_surface.png")

    Returns
    -------
    str : the path written
    """
    if engine is None:
        engine = default_engine
    if output_path is None:
        config.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
        output_path = str(config.OUTPUT_DIR / "correction_surface.png")

    fig, ax = plt.subplots(figsize=(config.FIG_WIDTH, config.FIG_HEIGHT))
    fig.patch.set_facecolor(config.DARK_BG)
    ax.set_facecolor(config.DARK_BG)

    # symmetric color limits so 0 sits in the middle of the diverging map
    lim = float(np.max(np.abs(C_mesh))) * 1e4
    mesh = ax.pcolormesh(
        D_grid, T_grid, C_mesh * 1e4,
        cmap=config.COLORMAP, vmin=-lim, vmax=lim, shading="auto",
    )
    ax.contour(D_grid, T_grid, C_mesh, levels=[0.0], colors="white", linewidths=1.2)

    # anchor rows of the reference grid
    for d in engine.grid.density_anchors():
        ax.axvline(d, color="white", alpha=0.15, linewidth=0.8, linestyle="--")

    ax.set_xlabel("Observed density (kg/L)", fontsize=13, color="white")
    ax.set_ylabel("Observed temperature (°C)", fontsize=13, color="white")
    ax.set_title(
        "Table 53 — Correction to 15°C",
        fontsize=17, fontweight="bold", color="white",
    )
    ax.tick_params(colors="white", labelsize=10)
    for spine in ax.spines.values():
        spine.set_color("#333355")

    cbar = fig.colorbar(mesh, ax=ax, pad=0.02)
    cbar.set_label("Correction (×10⁻⁴ kg/L)", fontsize=11, color="white")
    cbar.ax.tick_params(colors="white", labelsize=9)

    plt.tight_layout()
    plt.savefig(output_path, dpi=config.DPI, bbox_inches="tight",
                facecolor=config.DARK_BG, edgecolor="none")
    plt.close(fig)
    return output_path


# ════════════════════════════════════════════════════════════════════════
#  PLOTLY — HEATMAP (interactive HTML)
# ════════════════════════════════════════════════════════════════════════

def plot_correction_plotly(
    D_grid: np.ndarray,
    T_grid: np.ndarray,
    C_mesh: np.ndarray,
    output_path: str = None,
) -> str:
    """
    Render the correction surface as interactive HTML.

    Hovering shows observed density, temperature, correction and the
    resulting density at 15°C.
    """
    if output_path is None:
        config.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
        output_path = str(config.OUTPUT_DIR / "correction_surface.html")

    standard = np.round(C_mesh + D_grid[np.newaxis, :], config.RESULT_DECIMALS)

    fig = go.Figure(data=[go.Heatmap(
        x=D_grid, y=T_grid, z=C_mesh,
        customdata=standard,
        colorscale="RdBu", reversescale=True, zmid=0.0,
        colorbar=dict(
            title=dict(text="Correction", font=dict(size=13, color="white")),
            thickness=18, tickformat=".4f",
            tickfont=dict(color="white", size=11),
        ),
        hovertemplate=(
            "Density: %{x:.3f} kg/L<br>Temp: %{y:.1f}°C<br>"
            "Correction: %{z:+.4f}<br>@15°C: %{customdata:.4f}<extra></extra>"
        ),
    )])

    fig.update_layout(
        title=dict(
            text="<b>Table 53 — Correction to 15°C</b>",
            font=dict(size=20, color="white"), x=0.5,
        ),
        xaxis=dict(
            title=dict(text="Observed density (kg/L)", font=dict(size=14, color="#ddd")),
            tickfont=dict(size=11, color="#ccc"),
            tickformat=".3f",
        ),
        yaxis=dict(
            title=dict(text="Observed temperature (°C)", font=dict(size=14, color="#ddd")),
            tickfont=dict(size=11, color="#ccc"),
        ),
        plot_bgcolor=config.DARK_BG,
        paper_bgcolor=config.DARK_BG,
        font=dict(color=config.TITLE_COLOR),
        width=1000, height=600,
        margin=dict(l=60, r=30, t=60, b=50),
    )

    fig.write_html(output_path)
    return output_path
