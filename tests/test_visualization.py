"""
Tests for the correction surface and its chart export.
"""

import pytest
import numpy as np

from density_finder.visualization import (
    build_correction_surface, plot_correction_matplotlib, plot_correction_plotly,
)


@pytest.fixture(scope="module")
def surface():
    return build_correction_surface(n_d=25, n_t=11)


class TestSurface:

    def test_output_shapes(self, surface):
        D_grid, T_grid, C_mesh = surface
        assert D_grid.shape == (25,)
        assert T_grid.shape == (11,)
        assert C_mesh.shape == (11, 25)

    def test_spans_domain(self, surface):
        D_grid, T_grid, _ = surface
        assert D_grid[0] == pytest.approx(0.690)
        assert D_grid[-1] == pytest.approx(0.909)
        assert T_grid[0] == 0.0
        assert T_grid[-1] == 50.0

    def test_zero_at_reference_temperature(self, surface):
        _, T_grid, C_mesh = surface
        k = int(np.argmin(np.abs(T_grid - 15.0)))
        # only the 4-decimal rounding of the result remains
        assert np.all(np.abs(C_mesh[k]) <= 5e-5 + 1e-12)

    def test_sign_either_side(self, surface):
        _, _, C_mesh = surface
        assert np.all(C_mesh[0] < 0)
        assert np.all(C_mesh[-1] > 0)


class TestCharts:

    def test_png_written(self, surface, tmp_path):
        out = tmp_path / "surface.png"
        path = plot_correction_matplotlib(*surface, output_path=str(out))
        assert path == str(out)
        assert out.exists()
        assert out.stat().st_size > 0

    def test_html_written(self, surface, tmp_path):
        out = tmp_path / "surface.html"
        plot_correction_plotly(*surface, output_path=str(out))
        assert out.exists()
        assert "plotly" in out.read_text(encoding="utf-8").lower()
