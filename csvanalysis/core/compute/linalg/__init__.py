"""
Linear algebra kernels for csvanalysis.

All functions follow these conventions:
    - CPU functions use NumPy/SciPy (LAPACK under the hood)
    - Each operation returns a structured result dataclass
    - Errors are raised immediately with clear messages

Submodules:
    normal_equations: moment-matrix and inverse-matrix polynomial least squares
"""

from csvanalysis.core.compute.linalg.normal_equations import (
    MomentSystem,
    PolynomialLSQResult,
    moment_system,
    vandermonde,
    normal_equations_solve_cpu,
    inverse_matrix_solve_cpu,
)

__all__ = [
    "MomentSystem",
    "PolynomialLSQResult",
    "moment_system",
    "vandermonde",
    "normal_equations_solve_cpu",
    "inverse_matrix_solve_cpu",
]
