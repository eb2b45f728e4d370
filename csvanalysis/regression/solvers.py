"""
Solver dispatch for regression.

This module provides the public fitting functions and backend selection.
"""

import logging
from typing import Iterable, Literal

from numpy.typing import ArrayLike

from csvanalysis.core.exceptions import CsvAnalysisError
from csvanalysis.regression.design import RegressionDesign
from csvanalysis.regression.solution import PolynomialSolution, TransformationSolution
from csvanalysis.regression.transformations import (
    Transformation,
    available_transformations,
    resolve_transformation,
)
from csvanalysis.regression.backends.cpu import (
    CPUNormalEquationsBackend,
    CPUInverseMatrixBackend,
)

logger = logging.getLogger(__name__)

# Type alias for solve method selection
MethodChoice = Literal['normal_equations', 'inverse']


def fit_transformation(
    x: ArrayLike | RegressionDesign,
    y: ArrayLike | None = None,
    model: str | Transformation | None = 'none',
    *,
    method: MethodChoice = 'normal_equations',
) -> TransformationSolution:
    """
    Fit a two-parameter model by linearising it.

    The data are transformed so the model becomes Yt = At + Bt·Xt, a line
    is fitted by least squares, and (At, Bt) are mapped back to the model's
    own (a, b).

    Args:
        x: Independent variable, or a prebuilt RegressionDesign
        y: Dependent variable (omit when x is a RegressionDesign)
        model: Transformation name ('none', 'exponential', 'power',
            'ln_power', 'one_over_x', 'b_over_x', 'one_over_x2', 'sqrt'),
            a Transformation instance, or None for no transformation
        method: 'normal_equations' (default) or 'inverse'

    Returns:
        TransformationSolution with both coefficient pairs, R² in both
        spaces and the fitted functions

    Raises:
        ValidationError: If inputs are invalid
        InsufficientDataError: If fewer than 2 points
        SingularMatrixError: If all transformed x values are equal
        ValueError: Unknown model or method

    Example:
        >>> from csvanalysis.regression import fit_transformation
        >>> sol = fit_transformation([1, 2, 3, 4], [2, 8, 18, 32], 'power')
        >>> round(sol.a, 6), round(sol.b, 6)
        (2.0, 2.0)
    """
    design = _as_design(x, y)
    transformation = resolve_transformation(model)
    backend = _get_backend(method)
    result = backend.solve_transformation(design, transformation)
    return TransformationSolution(_result=result, _design=design)


def fit_polynomial(
    x: ArrayLike | RegressionDesign,
    y: ArrayLike | None = None,
    degree: int = 1,
    *,
    method: MethodChoice = 'normal_equations',
) -> PolynomialSolution:
    """
    Fit y = a₀ + a₁x + ... + aₘxᵐ by least squares.

    Args:
        x: Independent variable, or a prebuilt RegressionDesign
        y: Dependent variable (omit when x is a RegressionDesign)
        degree: Polynomial degree m >= 0
        method: 'normal_equations' (default) or 'inverse'

    Returns:
        PolynomialSolution with coefficients a₀..aₘ and R²

    Raises:
        ValidationError: If inputs or degree are invalid
        InsufficientDataError: If n < degree + 1
        SingularMatrixError: If fewer than degree + 1 distinct x values
        ValueError: Unknown method

    Example:
        >>> from csvanalysis.regression import fit_polynomial
        >>> sol = fit_polynomial([0, 1, 2, 3, 4], [0, 1, 2, 3, 4])
        >>> sol.coefficients
        array([0., 1.])
    """
    design = _as_design(x, y)
    backend = _get_backend(method)
    result = backend.solve_polynomial(design, degree)
    return PolynomialSolution(_result=result, _design=design)


def fit_all(
    x: ArrayLike | RegressionDesign,
    y: ArrayLike | None = None,
    models: Iterable[str | Transformation] | None = None,
    *,
    method: MethodChoice = 'normal_equations',
) -> dict[str, TransformationSolution | CsvAnalysisError]:
    """
    Fit every transformation to the same data.

    A model that cannot be fitted does not stop the others: its entry holds
    the exception instead of a solution.

    Args:
        x: Independent variable, or a prebuilt RegressionDesign
        y: Dependent variable (omit when x is a RegressionDesign)
        models: Transformations to fit; defaults to every registered one
            in reporting order
        method: 'normal_equations' (default) or 'inverse'

    Returns:
        Mapping of model key to TransformationSolution or CsvAnalysisError,
        in the order fitted

    Raises:
        ValidationError: If the data themselves are invalid
    """
    design = _as_design(x, y)
    backend = _get_backend(method)
    if models is None:
        models = available_transformations()

    results: dict[str, TransformationSolution | CsvAnalysisError] = {}
    for model in models:
        transformation = resolve_transformation(model)
        try:
            result = backend.solve_transformation(design, transformation)
        except CsvAnalysisError as e:
            logger.info("%s: fit failed: %s", transformation.key, e)
            results[transformation.key] = e
        else:
            results[transformation.key] = TransformationSolution(
                _result=result, _design=design
            )
    return results


def _as_design(
    x: ArrayLike | RegressionDesign, y: ArrayLike | None
) -> RegressionDesign:
    """Accept either a RegressionDesign or an (x, y) pair."""
    if isinstance(x, RegressionDesign):
        if y is not None:
            raise TypeError("y must be omitted when x is a RegressionDesign")
        return x
    if y is None:
        raise TypeError("y is required when x is not a RegressionDesign")
    return RegressionDesign.from_arrays(x, y)


def _get_backend(method: MethodChoice):
    """
    Select and instantiate the backend for a solve method.

    Raises:
        ValueError: If unknown method specified
    """
    if method == 'normal_equations':
        return CPUNormalEquationsBackend()
    elif method == 'inverse':
        return CPUInverseMatrixBackend()
    else:
        raise ValueError(
            f"Unknown method: {method!r}. Valid methods: 'normal_equations', 'inverse'"
        )
