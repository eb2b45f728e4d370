"""
Tests for the least-squares polynomial kernels.

Validates:
    - Moment matrix layout against a hand-computed degree-2 system
    - Exact identity-line recovery on the normal-equations path
    - Agreement of the normal-equations and inverse-matrix paths
    - Insufficient data and singular systems raise
    - Non-finite input gives NaN coefficients, not an exception
"""

import numpy as np
import pytest

from csvanalysis.core.compute.linalg import (
    inverse_matrix_solve_cpu,
    moment_system,
    normal_equations_solve_cpu,
    vandermonde,
)
from csvanalysis.core.exceptions import InsufficientDataError, SingularMatrixError

KERNELS = [normal_equations_solve_cpu, inverse_matrix_solve_cpu]


class TestMomentSystem:

    def test_degree_two_layout(self):
        x = np.array([1.0, 2.0, 3.0])
        y = np.array([2.0, 3.0, 5.0])
        system = moment_system(x, y, 2)
        expected_A = np.array([
            [3.0, 6.0, 14.0],
            [6.0, 14.0, 36.0],
            [14.0, 36.0, 98.0],
        ])
        expected_B = np.array([10.0, 23.0, 59.0])
        np.testing.assert_array_equal(system.A, expected_A)
        np.testing.assert_array_equal(system.B, expected_B)
        assert system.size == 3
        assert system.is_finite

    def test_symmetric(self, rng):
        x = rng.standard_normal(20)
        system = moment_system(x, rng.standard_normal(20), 4)
        np.testing.assert_array_equal(system.A, system.A.T)

    def test_non_finite_flagged(self):
        system = moment_system(np.array([1.0, np.nan]), np.array([1.0, 2.0]), 1)
        assert not system.is_finite

    def test_matches_vandermonde_gram(self, rng):
        x = rng.uniform(-2, 2, 15)
        y = rng.standard_normal(15)
        Z = vandermonde(x, 3)
        system = moment_system(x, y, 3)
        np.testing.assert_allclose(system.A, Z.T @ Z, rtol=1e-12)
        np.testing.assert_allclose(system.B, Z.T @ y, rtol=1e-12, atol=1e-12)


class TestNormalEquations:

    def test_identity_line_exact(self, identity_data):
        x, y = identity_data
        result = normal_equations_solve_cpu(x, y, 1)
        assert result.coefficients.tolist() == [0.0, 1.0]
        assert result.method == "normal_equations"

    @pytest.mark.parametrize("kernel", KERNELS)
    def test_recovers_line(self, kernel):
        x = np.array([-3.0, -1.0, 0.5, 2.0, 7.0])
        result = kernel(x, 4.0 - 0.25 * x, 1)
        np.testing.assert_allclose(result.coefficients, [4.0, -0.25], rtol=1e-9, atol=1e-9)

    @pytest.mark.parametrize("kernel", KERNELS)
    def test_matches_polyfit(self, kernel, rng):
        x = rng.uniform(0, 5, 40)
        y = 1.0 - 2.0 * x + 0.3 * x ** 2 + rng.standard_normal(40) * 0.05
        result = kernel(x, y, 2)
        expected = np.polyfit(x, y, 2)[::-1]
        np.testing.assert_allclose(result.coefficients, expected, rtol=1e-7)

    def test_paths_agree(self, rng):
        x = rng.uniform(-1, 1, 30)
        y = rng.standard_normal(30)
        ne = normal_equations_solve_cpu(x, y, 3)
        inv = inverse_matrix_solve_cpu(x, y, 3)
        np.testing.assert_allclose(ne.coefficients, inv.coefficients, rtol=1e-8, atol=1e-10)

    def test_degree_zero_is_mean(self):
        y = np.array([1.0, 2.0, 6.0])
        result = normal_equations_solve_cpu(np.array([5.0, 6.0, 7.0]), y, 0)
        np.testing.assert_allclose(result.coefficients, [3.0])


class TestFailures:

    @pytest.mark.parametrize("kernel", KERNELS)
    def test_insufficient_data(self, kernel):
        with pytest.raises(InsufficientDataError) as excinfo:
            kernel(np.array([1.0, 2.0]), np.array([1.0, 2.0]), 3)
        assert excinfo.value.n_observations == 2
        assert excinfo.value.required == 4

    @pytest.mark.parametrize("kernel", KERNELS)
    def test_all_x_equal_is_singular(self, kernel):
        with pytest.raises(SingularMatrixError) as excinfo:
            kernel(np.array([2.0, 2.0, 2.0]), np.array([1.0, 2.0, 3.0]), 1)
        assert excinfo.value.rank == 1
        assert excinfo.value.expected_rank == 2

    def test_too_few_distinct_for_degree(self):
        x = np.array([0.0, 0.0, 1.0, 1.0, 2.0])
        with pytest.raises(SingularMatrixError):
            normal_equations_solve_cpu(x, x, 3)

    @pytest.mark.parametrize("kernel", KERNELS)
    def test_non_finite_gives_nan(self, kernel):
        x = np.array([1.0, np.nan, 3.0])
        result = kernel(x, np.array([1.0, 2.0, 3.0]), 1)
        assert np.all(np.isnan(result.coefficients))
        assert result.coefficients.shape == (2,)
