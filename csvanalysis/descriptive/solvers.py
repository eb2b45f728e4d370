"""
Solver dispatch for descriptive statistics.

Provides describe() as the entry point.
"""

from __future__ import annotations

from numpy.typing import ArrayLike

from csvanalysis.core.exceptions import ValidationError
from csvanalysis.descriptive.design import DescriptiveDesign
from csvanalysis.descriptive.solution import DescriptiveSolution
from csvanalysis.descriptive.backends.cpu import CPUDescriptiveBackend


def _ensure_design(data: ArrayLike | DescriptiveDesign) -> DescriptiveDesign:
    """Convert raw array to DescriptiveDesign if needed."""
    if isinstance(data, DescriptiveDesign):
        return data
    return DescriptiveDesign.from_array(data)


def describe(
    data: ArrayLike | DescriptiveDesign,
    *,
    ddof: int = 0,
) -> DescriptiveSolution:
    """
    Summarise one numeric column.

    Computes: count, max, min, mean, standard deviation and its percentage
    of the mean, variance, median, median absolute deviation and its
    percentage of the median, and sum.

    Parameters
    ----------
    data : array-like or DescriptiveDesign
        1D numeric data, at least one finite value.
    ddof : int
        Delta degrees of freedom for variance and sd. 0 (default) is the
        population form; 1 gives the sample form.

    Returns
    -------
    DescriptiveSolution
    """
    if isinstance(ddof, bool) or not isinstance(ddof, int) or ddof < 0:
        raise ValidationError(f"ddof must be a non-negative integer, got {ddof!r}")

    design = _ensure_design(data)
    result = CPUDescriptiveBackend().solve(design, ddof=ddof)
    return DescriptiveSolution(_result=result, _design=design)
