"""
Single-variable regression.

Public API:
    fit_transformation(x, y, model) -> TransformationSolution
    fit_polynomial(x, y, degree) -> PolynomialSolution
    fit_all(x, y) -> {model: TransformationSolution | CsvAnalysisError}

Each entry point handles:
    - Input validation
    - Design construction
    - Backend selection
    - Result wrapping

Example:
    >>> from csvanalysis.regression import fit_transformation
    >>> sol = fit_transformation(x, y, 'exponential')
    >>> print(sol.a, sol.b, sol.r_squared)
    >>> print(sol.summary())
"""

from csvanalysis.regression.design import RegressionDesign
from csvanalysis.regression.solution import (
    TransformationSolution,
    TransformationParams,
    PolynomialSolution,
    PolynomialParams,
)
from csvanalysis.regression.transformations import (
    Transformation,
    TRANSFORMATIONS,
    available_transformations,
    resolve_transformation,
)
from csvanalysis.regression.solvers import fit_transformation, fit_polynomial, fit_all
from csvanalysis.regression._r2 import r_squared

__all__ = [
    "fit_transformation",
    "fit_polynomial",
    "fit_all",
    "r_squared",
    "RegressionDesign",
    "TransformationSolution",
    "TransformationParams",
    "PolynomialSolution",
    "PolynomialParams",
    "Transformation",
    "TRANSFORMATIONS",
    "available_transformations",
    "resolve_transformation",
]
