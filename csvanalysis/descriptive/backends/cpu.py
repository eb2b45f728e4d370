"""
CPU backend for descriptive statistics.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from scipy import stats

from csvanalysis.core.result import Result
from csvanalysis.core.compute.timing import Timer
from csvanalysis.descriptive.design import DescriptiveDesign
from csvanalysis.descriptive.solution import DescriptiveParams


class CPUDescriptiveBackend:
    """CPU backend for descriptive statistics."""

    @property
    def name(self) -> str:
        return 'cpu_descriptive'

    def solve(self, design: DescriptiveDesign, *, ddof: int = 0) -> Result[DescriptiveParams]:
        timer = Timer()
        timer.start()

        data = design.data
        warnings_list: list[str] = []

        with timer.section('moments'):
            mean = float(np.mean(data))
            total = float(np.sum(data))
            if design.n > ddof:
                variance = float(np.var(data, ddof=ddof))
            else:
                variance = float('nan')
                warnings_list.append(
                    f"variance undefined for n={design.n} with ddof={ddof}"
                )
            sd = float(np.sqrt(variance))

        with timer.section('order_statistics'):
            median = float(np.median(data))
            mad = float(stats.median_abs_deviation(data, scale=1.0))

        with np.errstate(all='ignore'):
            sd_percent = float(np.divide(sd * 100, mean))
            mad_percent = float(np.divide(mad * 100, median))

        timer.stop()

        params = DescriptiveParams(
            count=design.n,
            max=float(np.max(data)),
            min=float(np.min(data)),
            mean=mean,
            sd=sd,
            sd_percent=sd_percent,
            variance=variance,
            median=median,
            mad=mad,
            mad_percent=mad_percent,
            sum=total,
            ddof=ddof,
        )
        info: dict[str, Any] = {'ddof': ddof, 'n_observations': design.n}

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
