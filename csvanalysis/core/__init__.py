"""
Core infrastructure for csvanalysis.

This module provides shared abstractions and utilities used by the domain
submodules (regression, descriptive).

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    datasource: CSV and array column extraction
    compute: Timing and linear algebra kernels
"""

from csvanalysis.core.datasource import DataSource
from csvanalysis.core.result import Result
from csvanalysis.core.exceptions import (
    CsvAnalysisError,
    ValidationError,
    DimensionError,
    InsufficientDataError,
    NumericalError,
    SingularMatrixError,
    NumericDomainWarning,
)

__all__ = [
    "DataSource",
    # Result
    "Result",
    # Exceptions
    "CsvAnalysisError",
    "ValidationError",
    "DimensionError",
    "InsufficientDataError",
    "NumericalError",
    "SingularMatrixError",
    "NumericDomainWarning",
]
