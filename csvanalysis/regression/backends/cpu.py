"""
CPU backends for polynomial and transformation regression.

Both backends share one algorithm and differ only in the least-squares
kernel: the moment-matrix normal equations (the reference) or the explicit
(Z'Z)⁻¹ Z'y inverse.

A transformation fit is a degree-1 polynomial fit in the transformed
space followed by restoring the coefficients. Points a transformation maps
outside its domain are not dropped; they make the fit NaN and the result
carries a note saying so.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable

import numpy as np
from numpy.typing import NDArray

from csvanalysis.core.compute.timing import Timer
from csvanalysis.core.compute.linalg import (
    PolynomialLSQResult,
    normal_equations_solve_cpu,
    inverse_matrix_solve_cpu,
)
from csvanalysis.core.result import Result
from csvanalysis.core.validation import check_degree
from csvanalysis.regression._r2 import r_squared
from csvanalysis.regression.design import RegressionDesign
from csvanalysis.regression.solution import PolynomialParams, TransformationParams
from csvanalysis.regression.transformations import Transformation

logger = logging.getLogger(__name__)

Kernel = Callable[[NDArray, NDArray, int], PolynomialLSQResult]


class _CPUPolynomialBackend(ABC):
    """Shared solve logic; subclasses pick the kernel."""

    _method: str
    _kernel: Kernel

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name recorded on every Result."""

    @property
    def method(self) -> str:
        return self._method

    def solve_polynomial(
        self, design: RegressionDesign, degree: int
    ) -> Result[PolynomialParams]:
        """
        Fit y = a₀ + a₁x + ... + aₘxᵐ by least squares.

        Raises:
            InsufficientDataError: If n < degree + 1
            SingularMatrixError: If fewer than degree + 1 distinct x values
        """
        degree = check_degree(degree)
        timer = Timer()
        timer.start()

        x, y = design.x, design.y

        with timer.section('solve'):
            lsq = self._kernel(x, y, degree)
        coefficients = lsq.coefficients

        with timer.section('r_squared'):
            r2 = r_squared(
                x, y, lambda v: np.polynomial.polynomial.polyval(v, coefficients)
            )

        timer.stop()
        logger.debug("%s: degree %d fit of %d points, R²=%.6g",
                     self.name, degree, design.n, r2)

        params = PolynomialParams(
            degree=degree,
            coefficients=coefficients,
            r_squared=r2,
        )
        info: dict[str, Any] = {
            'method': self._method,
            'degree': degree,
            'n_observations': design.n,
        }
        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=lsq.warnings,
        )

    def solve_transformation(
        self, design: RegressionDesign, model: Transformation
    ) -> Result[TransformationParams]:
        """
        Fit a two-parameter model through its linearising transformation.

        Algorithm:
            1. Xt = transform_x(x), Yt = transform_y(y)
            2. Degree-1 least squares on (Xt, Yt) gives (At, Bt)
            3. a = restore_a(At), b = restore_b(Bt)
            4. R² in the transformed space and in the original space

        Raises:
            InsufficientDataError: If n < 2
            SingularMatrixError: If all finite Xt are equal
        """
        timer = Timer()
        timer.start()

        x, y = design.x, design.y
        notes: list[str] = []

        with timer.section('transform'):
            with np.errstate(all='ignore'):
                xt = np.asarray(model.transform_x(x), dtype=np.float64)
                yt = np.asarray(model.transform_y(y), dtype=np.float64)

        bad = int(np.count_nonzero(~(np.isfinite(xt) & np.isfinite(yt))))
        if bad:
            notes.append(
                f"{bad} of {design.n} points are non-finite after the "
                f"{model.key} transformation; results are NaN"
            )
            logger.debug("%s: %d non-finite transformed points", model.key, bad)

        with timer.section('solve'):
            lsq = self._kernel(xt, yt, 1)
        at, bt = (float(c) for c in lsq.coefficients)

        with timer.section('restore'):
            with np.errstate(all='ignore'):
                a = float(model.restore_a(at))
                b = float(model.restore_b(bt))

        with timer.section('r_squared'):
            r2_transformed = r_squared(xt, yt, lambda v: at + bt * v)
            r2 = r_squared(x, y, lambda v: model.fx(a, b, v))

        timer.stop()
        logger.debug("%s: %s a=%.6g b=%.6g R²t=%.6g R²=%.6g",
                     self.name, model.key, a, b, r2_transformed, r2)

        params = TransformationParams(
            model=model,
            xt=xt,
            yt=yt,
            at=at,
            bt=bt,
            a=a,
            b=b,
            r_squared_transformed=r2_transformed,
            r_squared=r2,
        )
        info: dict[str, Any] = {
            'method': self._method,
            'model': model.key,
            'n_observations': design.n,
            'n_non_finite': bad,
        }
        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(notes) + lsq.warnings,
        )


class CPUNormalEquationsBackend(_CPUPolynomialBackend):
    """
    Reference backend: LU solve of the moment-matrix normal equations.
    """

    _method = 'normal_equations'
    _kernel = staticmethod(normal_equations_solve_cpu)

    @property
    def name(self) -> str:
        return 'cpu_normal_equations'


class CPUInverseMatrixBackend(_CPUPolynomialBackend):
    """
    Alternative backend: explicit inverse of Z'Z.

    Mathematically identical to the normal-equations backend; kept for
    cross-checking.
    """

    _method = 'inverse'
    _kernel = staticmethod(inverse_matrix_solve_cpu)

    @property
    def name(self) -> str:
        return 'cpu_inverse'
