"""
Regression solution types.

Contains the parameter payloads and user-facing solution wrappers for
transformation fits and polynomial fits.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, TYPE_CHECKING
import numpy as np
from numpy.polynomial import polynomial as P
from numpy.typing import ArrayLike, NDArray

from csvanalysis.core.result import Result

if TYPE_CHECKING:
    from csvanalysis.regression.design import RegressionDesign
    from csvanalysis.regression.transformations import Transformation


@dataclass(frozen=True)
class TransformationParams:
    """
    Parameter payload for a linearised two-parameter fit.

    This is the immutable data computed by backends. (at, bt) are only
    meaningful in the transformed space, (a, b) only in the original one.
    """
    model: 'Transformation'
    xt: NDArray[np.floating[Any]]
    yt: NDArray[np.floating[Any]]
    at: float
    bt: float
    a: float
    b: float
    r_squared_transformed: float
    r_squared: float


@dataclass(frozen=True)
class PolynomialParams:
    """
    Parameter payload for a direct polynomial fit.

    coefficients holds a₀..aₘ, lowest degree first.
    """
    degree: int
    coefficients: NDArray[np.floating[Any]]
    r_squared: float


class _SolutionMixin:
    """Accessors shared by both solution types."""

    _result: Result[Any]
    _design: 'RegressionDesign'

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        return self._design.x

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        return self._design.y

    @property
    def n(self) -> int:
        return self._design.n

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

    def has_warning(self, substring: str) -> bool:
        return self._result.has_warning(substring)

    def _footer(self) -> list[str]:
        lines = [f"Backend: {self.backend_name}"]
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return lines


@dataclass(frozen=True)
class TransformationSolution(_SolutionMixin):
    """
    User-facing result of fitting one Transformation to one dataset.

    Exposes the original and transformed data, both coefficient pairs,
    R² in both spaces and the fitted functions for plotting.
    """
    _result: Result[TransformationParams]
    _design: 'RegressionDesign'

    @property
    def model(self) -> 'Transformation':
        return self._result.params.model

    @property
    def xt(self) -> NDArray[np.floating[Any]]:
        return self._result.params.xt

    @property
    def yt(self) -> NDArray[np.floating[Any]]:
        return self._result.params.yt

    @property
    def at(self) -> float:
        return self._result.params.at

    @property
    def bt(self) -> float:
        return self._result.params.bt

    @property
    def a(self) -> float:
        return self._result.params.a

    @property
    def b(self) -> float:
        return self._result.params.b

    @property
    def r_squared_transformed(self) -> float:
        """R² of At + Bt·Xt against (Xt, Yt)."""
        return self._result.params.r_squared_transformed

    @property
    def r_squared(self) -> float:
        """R² of fx(A, B, x) against the original (x, y)."""
        return self._result.params.r_squared

    def linear_function(self) -> Callable[[ArrayLike], Any]:
        """The fitted line in the transformed space: Xt → At + Bt·Xt."""
        at, bt = self.at, self.bt
        return lambda xt: np.add(at, np.multiply(bt, xt))

    def regression_function(self) -> Callable[[ArrayLike], Any]:
        """The fitted model in the original space: x → fx(A, B, x)."""
        model, a, b = self.model, self.a, self.b
        return lambda x: model.fx(a, b, x)

    def predict(self, x: ArrayLike) -> Any:
        """Evaluate the fitted model at x."""
        return self.model.fx(self.a, self.b, x)

    def interpolate(self, y: ArrayLike) -> Any:
        """x at which the fitted model reaches y."""
        return self.model.fy(self.a, self.b, y)

    def summary(self) -> str:
        """Text report of the fit."""
        lines = [
            f"Transformation: {self.model.name}",
            "=" * 60,
            f"Equation: {self.model.equation}",
            f"Linearised: {self.model.transformed_equation}",
            f"Observations: {self.n}",
            "",
            f"{'':<12} {'a':>16} {'b':>16} {'R-squared':>12}",
            "-" * 60,
            f"{'transformed':<12} {self.at:16.6g} {self.bt:16.6g} {self.r_squared_transformed:12.6f}",
            f"{'original':<12} {self.a:16.6g} {self.b:16.6g} {self.r_squared:12.6f}",
            "-" * 60,
        ]
        lines.extend(self._footer())
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"TransformationSolution(model={self.model.key!r}, n={self.n}, "
            f"a={self.a:.6g}, b={self.b:.6g}, r_squared={self.r_squared:.4f})"
        )


@dataclass(frozen=True)
class PolynomialSolution(_SolutionMixin):
    """
    User-facing result of a direct polynomial fit.
    """
    _result: Result[PolynomialParams]
    _design: 'RegressionDesign'

    @property
    def degree(self) -> int:
        return self._result.params.degree

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        """a₀..aₘ, lowest degree first."""
        return self._result.params.coefficients

    @property
    def r_squared(self) -> float:
        return self._result.params.r_squared

    def polynomial_function(self) -> Callable[[ArrayLike], Any]:
        """x → Σ aᵢ xⁱ."""
        coefficients = self.coefficients
        return lambda x: P.polyval(x, coefficients)

    def predict(self, x: ArrayLike) -> Any:
        """Evaluate the fitted polynomial at x."""
        return P.polyval(x, self.coefficients)

    @property
    def equation(self) -> str:
        """The fitted polynomial as text, e.g. 'y = 1 + 2x - 0.5x^2'."""
        terms = []
        for i, c in enumerate(self.coefficients):
            power = '' if i == 0 else ('x' if i == 1 else f'x^{i}')
            if not terms:
                terms.append(f"{c:g}{power}")
            else:
                sign = '-' if c < 0 else '+'
                terms.append(f"{sign} {abs(c):g}{power}")
        return "y = " + " ".join(terms)

    def summary(self) -> str:
        """Text report of the fit."""
        lines = [
            f"Polynomial Regression (degree {self.degree})",
            "=" * 60,
            f"Observations: {self.n}",
            f"R-squared: {self.r_squared:.6f}",
            f"Equation: {self.equation}",
            "",
            "Coefficients:",
            "-" * 60,
        ]
        for i, coef in enumerate(self.coefficients):
            lines.append(f"  a[{i}]: {coef:16.6g}")
        lines.append("-" * 60)
        lines.extend(self._footer())
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"PolynomialSolution(degree={self.degree}, n={self.n}, "
            f"r_squared={self.r_squared:.4f})"
        )
