"""
Exception hierarchy for csvanalysis.

All exceptions inherit from CsvAnalysisError to allow catching any
library-specific error. Batch drivers (fitting every transformation model,
the command line) catch CsvAnalysisError per model and keep going.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class CsvAnalysisError(Exception):
    """Base exception for all csvanalysis errors."""
    pass


class ValidationError(CsvAnalysisError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when x and y differ in length, when an array is not 1D, or when
    columns extracted from CSV files do not line up.
    """
    pass


class InsufficientDataError(ValidationError):
    """
    Not enough observations for the requested fit.

    A polynomial of degree m needs at least m + 1 points.

    Attributes:
        n_observations: Number of points supplied
        required: Minimum number of points needed
    """

    def __init__(
        self,
        message: str,
        n_observations: int | None = None,
        required: int | None = None,
    ):
        super().__init__(message)
        self.n_observations = n_observations
        self.required = required


class NumericalError(CsvAnalysisError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when the moment matrix of the normal equations (or Z'Z on the
    inverse-matrix path) cannot be inverted.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (degree + 1)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class NumericDomainWarning(RuntimeWarning):
    """
    A transformation produced NaN or Inf.

    Emitted for inputs outside a model's domain (log of a non-positive
    value, division by zero). Not an error: the values propagate through
    the fit and R² becomes NaN.
    """
    pass
