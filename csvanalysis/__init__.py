"""
csvanalysis: regression and descriptive statistics for CSV columns.

Fits a straight line, seven linearisable two-parameter models and
polynomials of any degree to pairs of CSV columns, and summarises single
columns.

Submodules:
    regression: Transformation and polynomial least-squares fits
    descriptive: One-column summary statistics
    plotting: PNG plots of data and fitted curves
    cli: The csv-analysis command
"""

__version__ = "0.1.0"

from csvanalysis.core import DataSource
from csvanalysis import regression
from csvanalysis import descriptive
from csvanalysis.regression import fit_transformation, fit_polynomial, fit_all
from csvanalysis.descriptive import describe

__all__ = [
    "__version__",
    "DataSource",
    "regression",
    "descriptive",
    "fit_transformation",
    "fit_polynomial",
    "fit_all",
    "describe",
]
