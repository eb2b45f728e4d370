"""
Goodness of fit.

R² here is the regression sum of squares over the total sum of squares,

    R² = Σ(f(xᵢ) - ȳ)² / Σ(yᵢ - ȳ)²

not the textbook 1 - SSres/SStot. The two agree for a least-squares line
with intercept; for a transformed model evaluated in the original space,
or for any other f, this ratio can exceed 1. Constant y gives 0/0 = NaN
and NaN in either input gives NaN; neither raises.
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray


def r_squared(
    x: ArrayLike,
    y: ArrayLike,
    f: Callable[[NDArray[np.floating[Any]]], ArrayLike],
) -> float:
    """
    Coefficient of determination of f against the points (x, y).

    Args:
        x: Independent values
        y: Observed dependent values
        f: Fitted function, called once with the whole x array

    Returns:
        Σ(f(x) - ȳ)² / Σ(y - ȳ)², possibly NaN or Inf
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    with np.errstate(all='ignore'):
        mean = np.mean(y)
        fitted = np.asarray(f(x), dtype=np.float64)
        ss_reg = np.sum((fitted - mean) ** 2)
        ss_total = np.sum((y - mean) ** 2)
        return float(np.divide(ss_reg, ss_total))
