"""
DescriptiveDesign: data wrapper for the one-column summary.

Wraps a single numeric column and validates it once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from csvanalysis.core.datasource import DataSource
from csvanalysis.core.validation import (
    check_array,
    check_1d,
    check_finite,
    check_min_samples,
)


@dataclass(frozen=True)
class DescriptiveDesign:
    """
    Design for descriptive statistics of one variable.

    Immutable after construction.

    Construction:
        DescriptiveDesign.from_array(values)
        DescriptiveDesign.from_datasource(ds, column='c')
    """
    _data: NDArray[np.floating[Any]]
    _n: int
    _name: str

    @classmethod
    def from_array(cls, data: ArrayLike, *, name: str = 'data') -> DescriptiveDesign:
        """
        Build DescriptiveDesign from a 1D array-like.

        A pandas Series is accepted; its name is used as the column name.
        """
        if hasattr(data, 'values') and getattr(data, 'name', None) is not None:
            name = str(data.name)
            data = data.values
        return cls._build(check_array(data, name), name)

    @classmethod
    def from_datasource(cls, source: DataSource, *, column: str) -> DescriptiveDesign:
        """Build DescriptiveDesign from one named DataSource column."""
        return cls._build(check_array(source[column], column), column)

    @classmethod
    def _build(cls, data: NDArray, name: str) -> DescriptiveDesign:
        """Internal builder with validation."""
        check_1d(data, name)
        check_min_samples(data, 1, name)
        check_finite(data, name)

        data = data.copy()
        data.flags.writeable = False
        return cls(_data=data, _n=data.shape[0], _name=name)

    @property
    def data(self) -> NDArray[np.floating[Any]]:
        """The column values (n,)."""
        return self._data

    @property
    def n(self) -> int:
        return self._n

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"DescriptiveDesign(name={self._name!r}, n={self._n})"
