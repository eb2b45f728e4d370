"""
Least-squares polynomial kernels.

Two formulations of the same problem, min_a ||y - Za||² where Z is the
increasing Vandermonde matrix of x:

    normal equations:  build the moment matrix A[i, j] = Σ x^(i+j) and the
                       vector B[i] = Σ y·x^i, then LU-solve A·a = B
    inverse matrix:    a = (Z'Z)⁻¹ Z'y

Neither path centres or rescales x. Both raise the same errors and agree
on well-conditioned input; the normal-equations path is the default.

When the inputs contain NaN or Inf (a transformation applied outside its
domain) the coefficients come back as NaN instead of raising.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import linalg as sp_linalg

from csvanalysis.core.exceptions import InsufficientDataError, SingularMatrixError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MomentSystem:
    """
    The (m+1)x(m+1) normal-equations system A·a = B.

    Attributes:
        A: Symmetric moment matrix, A[i, j] = Σ x^(i+j)
        B: Moment vector, B[i] = Σ y·x^i
    """
    A: NDArray[np.floating[Any]]
    B: NDArray[np.floating[Any]]

    @property
    def size(self) -> int:
        return self.A.shape[0]

    @property
    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.A)) and np.all(np.isfinite(self.B)))


@dataclass(frozen=True)
class PolynomialLSQResult:
    """
    Coefficients of a least-squares polynomial.

    Attributes:
        coefficients: a₀..aₘ, lowest degree first
        method: 'normal_equations' or 'inverse'
        warnings: LAPACK conditioning warnings raised during the solve
    """
    coefficients: NDArray[np.floating[Any]]
    method: str
    warnings: tuple[str, ...] = ()


def moment_system(
    x: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    degree: int,
) -> MomentSystem:
    """
    Build the normal equations for a polynomial of the given degree.

    For degree 2:

        (n)a₀   + (Σxᵢ)a₁  + (Σxᵢ²)a₂ = Σyᵢ
        (Σxᵢ)a₀ + (Σxᵢ²)a₁ + (Σxᵢ³)a₂ = Σxᵢyᵢ
        (Σxᵢ²)a₀ + (Σxᵢ³)a₁ + (Σxᵢ⁴)a₂ = Σxᵢ²yᵢ
    """
    size = degree + 1
    A = np.zeros((size, size), dtype=np.float64)
    B = np.zeros(size, dtype=np.float64)

    with np.errstate(all='ignore'):
        for i in range(size):
            for j in range(i + 1):
                total = np.sum(x ** (i + j))
                A[i, j] = total
                A[j, i] = total
            B[i] = np.sum(y * x ** i)

    return MomentSystem(A=A, B=B)


def vandermonde(x: NDArray[np.floating[Any]], degree: int) -> NDArray[np.floating[Any]]:
    """Increasing Vandermonde matrix Z with Z[l, j] = x_l^j, shape (n, degree+1)."""
    with np.errstate(all='ignore'):
        return np.vander(x, degree + 1, increasing=True)


def _check_system(x: NDArray[np.floating[Any]], degree: int, matrix_name: str) -> None:
    """Raise before building anything if the system cannot have a unique solution."""
    n = x.shape[0]
    required = degree + 1
    if n < required:
        raise InsufficientDataError(
            f"Not enough points for a degree {degree} polynomial: "
            f"got {n}, need at least {required}",
            n_observations=n,
            required=required,
        )

    # A Vandermonde matrix has rank min(distinct x, degree + 1). Only
    # meaningful for finite data; non-finite data propagates as NaN.
    if np.all(np.isfinite(x)):
        distinct = int(np.unique(x).size)
        if distinct < required:
            raise SingularMatrixError(
                f"{matrix_name} is singular: {distinct} distinct x values "
                f"cannot determine a degree {degree} polynomial "
                f"(need {required})",
                matrix_name=matrix_name,
                rank=distinct,
                expected_rank=required,
            )


def _nan_coefficients(degree: int, method: str) -> PolynomialLSQResult:
    return PolynomialLSQResult(
        coefficients=np.full(degree + 1, np.nan, dtype=np.float64),
        method=method,
    )


def normal_equations_solve_cpu(
    x: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    degree: int,
) -> PolynomialLSQResult:
    """
    Least-squares polynomial via the normal equations (dense LU).

    Args:
        x: Independent variable (n,)
        y: Dependent variable (n,)
        degree: Polynomial degree m >= 0

    Returns:
        PolynomialLSQResult with coefficients a₀..aₘ

    Raises:
        InsufficientDataError: If n < degree + 1
        SingularMatrixError: If the moment matrix is not invertible
    """
    _check_system(x, degree, 'moment matrix')

    system = moment_system(x, y, degree)
    logger.debug("normal equations: %dx%d moment matrix from %d points",
                 system.size, system.size, x.shape[0])

    if not system.is_finite:
        return _nan_coefficients(degree, 'normal_equations')

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter('always', sp_linalg.LinAlgWarning)
        try:
            coefficients = sp_linalg.solve(
                system.A, system.B, assume_a='gen', check_finite=False
            )
        except np.linalg.LinAlgError as e:
            raise SingularMatrixError(
                f"moment matrix is singular: {e}",
                matrix_name='moment matrix',
                expected_rank=degree + 1,
            ) from e

    return PolynomialLSQResult(
        coefficients=np.asarray(coefficients, dtype=np.float64),
        method='normal_equations',
        warnings=_warning_messages(caught),
    )


def inverse_matrix_solve_cpu(
    x: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    degree: int,
) -> PolynomialLSQResult:
    """
    Least-squares polynomial via a = (Z'Z)⁻¹ Z'y.

    Same contract as normal_equations_solve_cpu. Z'Z equals the moment
    matrix mathematically but is formed by a matrix product, so results
    differ in the last bits.
    """
    _check_system(x, degree, "Z'Z")

    Z = vandermonde(x, degree)
    with np.errstate(all='ignore'):
        ZtZ = Z.T @ Z
        Zty = Z.T @ y
    logger.debug("inverse matrix: Z is %dx%d", Z.shape[0], Z.shape[1])

    if not (np.all(np.isfinite(ZtZ)) and np.all(np.isfinite(Zty))):
        return _nan_coefficients(degree, 'inverse')

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter('always', sp_linalg.LinAlgWarning)
        try:
            ZtZ_inv = sp_linalg.inv(ZtZ, check_finite=False)
        except np.linalg.LinAlgError as e:
            raise SingularMatrixError(
                f"Z'Z is singular: {e}",
                matrix_name="Z'Z",
                expected_rank=degree + 1,
            ) from e

    return PolynomialLSQResult(
        coefficients=ZtZ_inv @ Zty,
        method='inverse',
        warnings=_warning_messages(caught),
    )


def _warning_messages(caught: list[warnings.WarningMessage]) -> tuple[str, ...]:
    return tuple(str(w.message) for w in caught)
