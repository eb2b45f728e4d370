"""
Descriptive statistics module.

Public API:
    describe(data)  - Count, extremes, mean, spread, median, MAD and sum
                      of one numeric column
"""

from csvanalysis.descriptive.design import DescriptiveDesign
from csvanalysis.descriptive.solution import DescriptiveParams, DescriptiveSolution
from csvanalysis.descriptive.solvers import describe

__all__ = [
    "describe",
    "DescriptiveDesign",
    "DescriptiveParams",
    "DescriptiveSolution",
]
