"""
Tests for the PNG plotting helpers.
"""

import numpy as np
import pytest

from csvanalysis.plotting import (
    clean_filename,
    plot_path,
    plot_regression,
    plot_time_data,
)


class TestCleanFilename:

    @pytest.mark.parametrize("title,expected", [
        ("Data", "data"),
        ("No Transformation", "no_transformation"),
        ("Linear 1/sqrt(y) vs x", "linear_1_over_sqrt_y_vs_x"),
        ("Polynomial Regression", "polynomial_regression"),
        ("y = a + b * sqrt(x)", "y__a__b__sqrt_x"),
        ("Température (°C)", "temprature__c"),
    ])
    def test_cases(self, title, expected):
        assert clean_filename(title) == expected

    def test_plot_path(self, tmp_path):
        assert plot_path("Linear Power", tmp_path) == tmp_path / "plot-linear_power.png"


class TestPlotRegression:

    def test_writes_png(self, tmp_path):
        x = np.linspace(0, 5, 10)
        path = plot_regression(
            x, 2 * x + 1, lambda v: 2 * v + 1, 0.99,
            title="Linear Test", output_dir=tmp_path,
        )
        assert path == tmp_path / "plot-linear_test.png"
        assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_data_only_when_r_squared_zero(self, tmp_path):
        x = np.arange(4.0)
        path = plot_regression(x, x, title="Data", output_dir=tmp_path)
        assert path.exists()

    def test_multiple_series(self, tmp_path):
        x = np.arange(4.0)
        path = plot_regression(x, [x, 2 * x, 3 * x, 4 * x], title="Many", output_dir=tmp_path)
        assert path.exists()

    def test_curve_with_nan(self, tmp_path):
        x = np.linspace(-1, 4, 6)
        path = plot_regression(x, x, np.sqrt, 0.5, title="Sqrt", output_dir=tmp_path)
        assert path.exists()

    def test_creates_output_dir(self, tmp_path):
        out = tmp_path / "nested" / "plots"
        path = plot_regression([0.0, 1.0], [0.0, 1.0], output_dir=out)
        assert path.parent == out and path.exists()


class TestPlotTimeData:

    def test_writes_png(self, tmp_path):
        t = 1_600_000_000 + np.arange(5) * 3600.0
        path = plot_time_data(t, np.arange(5.0), title="Hourly", output_dir=tmp_path)
        assert path == tmp_path / "plot-hourly.png"
        assert path.exists()
