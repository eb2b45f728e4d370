"""
Regression Design.

Design wraps a paired (x, y) series for single-variable regression. It
knows it's building a regression; DataSource doesn't.

Validation happens once, here: both arrays 1D, numeric, finite and of
equal length. Values a transformation later turns into NaN or Inf are not
the design's concern.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from csvanalysis.core.datasource import DataSource, trim
from csvanalysis.core.validation import (
    check_array,
    check_finite,
    check_1d,
    check_consistent_length,
    check_min_samples,
)


@dataclass(frozen=True)
class RegressionDesign:
    """
    Paired observations for regression of y on x.

    Immutable after construction; the arrays are stored read-only.

    Construction:
        RegressionDesign.from_arrays(x, y)
        RegressionDesign.from_datasource(ds)                   # ds['x'], ds['y']
        RegressionDesign.from_datasource(ds, x='t', y='temp')  # named columns
        design.trimmed(start, end)                             # drop end points
    """
    _x: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _n: int
    _source: DataSource | None = None

    @classmethod
    def from_arrays(cls, x: ArrayLike, y: ArrayLike) -> RegressionDesign:
        """Build Design directly from array-likes."""
        return cls._build(check_array(x, 'x'), check_array(y, 'y'), source=None)

    @classmethod
    def from_datasource(
        cls,
        source: DataSource,
        *,
        x: str = 'x',
        y: str = 'y',
    ) -> RegressionDesign:
        """
        Build Design from two named DataSource arrays.

        Raises:
            KeyError: If either name is missing from the source
        """
        x_arr = check_array(source[x], x)
        y_arr = check_array(source[y], y)
        return cls._build(x_arr, y_arr, source=source)

    @classmethod
    def _build(
        cls,
        x: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
        source: DataSource | None,
    ) -> RegressionDesign:
        """Internal builder with validation."""
        check_1d(x, 'x')
        check_1d(y, 'y')
        check_consistent_length(x, y, names=('x', 'y'))
        check_min_samples(x, 1, 'x')
        check_finite(x, 'x')
        check_finite(y, 'y')

        x = x.copy()
        y = y.copy()
        x.flags.writeable = False
        y.flags.writeable = False

        return cls(_x=x, _y=y, _n=x.shape[0], _source=source)

    # === Properties ===

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        """Independent variable (n,)."""
        return self._x

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Dependent variable (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._n

    @property
    def source(self) -> DataSource | None:
        """Original DataSource, if available."""
        return self._source

    def trimmed(self, start: int = 0, end: int = 0) -> RegressionDesign:
        """
        Design without `start` leading and `end` trailing observations.

        Raises:
            ValidationError: Negative counts or more points than exist
            InsufficientDataError: Nothing left after trimming
        """
        if start == 0 and end == 0:
            return self
        x, y = trim(self._x, self._y, start, end)
        return self._build(x, y, source=self._source)

    def __repr__(self) -> str:
        return f"RegressionDesign(n={self._n})"
