"""
Descriptive statistics solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from csvanalysis.core.result import Result

if TYPE_CHECKING:
    from csvanalysis.descriptive.design import DescriptiveDesign


@dataclass(frozen=True)
class DescriptiveParams:
    """
    Parameter payload for the one-column summary.

    sd and variance use the divisor n - ddof. Relative spreads are in
    percent of the mean (sd) and of the median (MAD); they are NaN or Inf
    when the reference value is zero.
    """
    count: int
    max: float
    min: float
    mean: float
    sd: float
    sd_percent: float
    variance: float
    median: float
    mad: float
    mad_percent: float
    sum: float
    ddof: int


@dataclass(frozen=True)
class DescriptiveSolution:
    """
    User-facing descriptive statistics results.

    Wraps Result[DescriptiveParams] and provides convenient accessors.
    """
    _result: Result[DescriptiveParams]
    _design: 'DescriptiveDesign'

    @property
    def count(self) -> int:
        return self._result.params.count

    @property
    def max(self) -> float:
        return self._result.params.max

    @property
    def min(self) -> float:
        return self._result.params.min

    @property
    def mean(self) -> float:
        return self._result.params.mean

    @property
    def sd(self) -> float:
        """Standard deviation with divisor n - ddof."""
        return self._result.params.sd

    @property
    def sd_percent(self) -> float:
        """Coefficient of variation, sd·100/mean."""
        return self._result.params.sd_percent

    @property
    def variance(self) -> float:
        return self._result.params.variance

    @property
    def median(self) -> float:
        return self._result.params.median

    @property
    def mad(self) -> float:
        """Median absolute deviation, unscaled."""
        return self._result.params.mad

    @property
    def mad_percent(self) -> float:
        """MAD·100/median."""
        return self._result.params.mad_percent

    @property
    def sum(self) -> float:
        return self._result.params.sum

    @property
    def name(self) -> str:
        return self._design.name

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """One statistic per line."""
        lines = [
            f"Count: {self.count}",
            f"Max: {self.max:f}",
            f"Min: {self.min:f}",
            f"Mean: {self.mean:f}",
            f"Standard Deviation σ: {self.sd:f}, {self.sd_percent:f}%",
            f"Variance σ²: {self.variance:f}",
            f"Median: {self.median:f}",
            f"Median Absolute Deviation MAD: {self.mad:f}, {self.mad_percent:f}%",
            f"Sum: {self.sum:f}",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"DescriptiveSolution(name={self.name!r}, count={self.count}, "
            f"mean={self.mean:.6g}, sd={self.sd:.6g})"
        )
