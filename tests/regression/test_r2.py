"""
Tests for the regression-over-total R² formula.
"""

import numpy as np
import pytest

from csvanalysis.regression import r_squared


class TestRSquared:

    def test_perfect_identity_line(self):
        x = [0, 1, 2, 3, 4]
        assert abs(r_squared(x, x, lambda v: 0.0 + 1.0 * v) - 1.0) < 0.1

    def test_known_value(self):
        x = [0, 1, 2, 3, 4]
        y = [0, 0.9, 2, 3.1, 4]
        r2 = r_squared(x, y, lambda v: -0.04 + 1.02 * v)
        assert abs(r2 - 0.9985) < 1e-4

    def test_can_exceed_one(self):
        """Σ(f - ȳ)² / Σ(y - ȳ)², not 1 - SSres/SStot."""
        assert r_squared([0, 1, 2], [0, 1, 2], lambda v: 2 * v) == pytest.approx(5.5)

    def test_matches_textbook_for_least_squares_line(self, noisy_line_data):
        x, y = noisy_line_data
        b, a = np.polyfit(x, y, 1)
        fitted = a + b * x
        textbook = 1 - np.sum((y - fitted) ** 2) / np.sum((y - y.mean()) ** 2)
        assert r_squared(x, y, lambda v: a + b * v) == pytest.approx(textbook, rel=1e-9)

    def test_constant_y_is_nan(self):
        assert np.isnan(r_squared([1, 2, 3], [5, 5, 5], lambda v: 5 + 0 * v))

    def test_nan_propagates(self):
        assert np.isnan(r_squared([1, 2, 3], [1, np.nan, 3], lambda v: v))

    def test_returns_python_float(self):
        assert type(r_squared([1, 2], [1, 3], lambda v: v)) is float
