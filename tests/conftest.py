"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def identity_data():
    """x = y = 0..4, fitted exactly by the line y = x."""
    x = np.array([0.0, 1.0, 2.0, 3.0, 4.0])
    return x, x.copy()


@pytest.fixture
def noisy_line_data(rng):
    """y = 1.5 + 2x with small noise, 50 points."""
    x = np.linspace(0.0, 10.0, 50)
    y = 1.5 + 2.0 * x + rng.standard_normal(50) * 0.1
    return x, y


@pytest.fixture
def write_csv(tmp_path):
    """Factory writing text to a CSV file under tmp_path and returning its path."""
    def _write(text, name="data.csv"):
        path = tmp_path / name
        path.write_text(text)
        return path
    return _write
