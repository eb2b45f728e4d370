"""
Linear transformation models.

Each Transformation turns a two-parameter nonlinear model y = g(x; a, b)
into a straight line

    Yt = At + Bt·Xt

that simple linear regression can fit, and maps the fitted line back:

- transform_x(x) → Xt,  transform_y(y) → Yt
- restore_a(At) → a,    restore_b(Bt) → b
- fx(a, b, x) → y       the model in the original space
- fy(a, b, y) → x       fx solved for x, used for interpolation

Every function is a numpy ufunc expression: scalars in give scalars out,
arrays in give arrays out. Domains are documented but not enforced; input
outside a model's domain yields NaN or Inf rather than an exception.

Adding a model means subclassing Transformation and registering the class
in TRANSFORMATIONS. The solvers do not change.

    Key           Model              Linearised                 Domain
    none          y = a + bx         y = a + bx                 -
    exponential   y = aB^x           ln y = ln a + x ln B       y > 0
    power         y = ax^b           log y = log a + b log x    x > 0, y > 0
    ln_power      y = ln(ax^b)       y = ln a + b ln x          x > 0, a > 0
    one_over_x    y = 1/(a + bx)     1/y = a + bx               y != 0
    b_over_x      y = a + b/(1 + x)  y = a + b·1/(1 + x)        x != -1
    one_over_x2   y = 1/(a + bx)²    1/√y = a + bx              y > 0
    sqrt          y = a + b√x        y = a + b√x                x >= 0
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import numpy as np
from numpy.typing import ArrayLike, NDArray

Real = float | NDArray


def _as_real(v: ArrayLike) -> Real:
    """Pass-through transform: float64 array for sequences, float64 scalar otherwise."""
    if np.ndim(v):
        return np.asarray(v, dtype=np.float64)
    return np.float64(v)


class Transformation(ABC):
    """
    Abstract linearising transformation.

    Class attributes carry the reporting metadata; they play no part in
    the math.

    Attributes:
        key: Registry name, e.g. 'power'
        name: Display name
        equation: Original-space equation
        transformed_equation: Linearised equation
        title_label: Plot title for the transformed space
        x_label: Axis label for Xt
        y_label: Axis label for Yt
    """

    key: str
    name: str
    equation: str
    transformed_equation: str
    title_label: str
    x_label: str
    y_label: str

    @abstractmethod
    def fx(self, a: float, b: float, x: ArrayLike) -> Real:
        """y = g(x; a, b)."""
        ...

    @abstractmethod
    def fy(self, a: float, b: float, y: ArrayLike) -> Real:
        """x such that g(x; a, b) = y."""
        ...

    @abstractmethod
    def transform_x(self, x: ArrayLike) -> Real:
        """x → Xt."""
        ...

    @abstractmethod
    def transform_y(self, y: ArrayLike) -> Real:
        """y → Yt."""
        ...

    @abstractmethod
    def restore_a(self, at: float) -> float:
        """Fitted intercept At → a."""
        ...

    @abstractmethod
    def restore_b(self, bt: float) -> float:
        """Fitted slope Bt → b."""
        ...

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class Identity(Transformation):
    """No transformation: y = a + bx."""

    key = 'none'
    name = 'No Transformation'
    equation = 'y = a + bx'
    transformed_equation = 'y = a + bx'
    title_label = 'y vs x'
    x_label = 'x'
    y_label = 'y'

    def fx(self, a, b, x):
        return np.add(a, np.multiply(b, x))

    def fy(self, a, b, y):
        return np.divide(np.subtract(y, a), b)

    def transform_x(self, x):
        return _as_real(x)

    def transform_y(self, y):
        return _as_real(y)

    def restore_a(self, at):
        return at

    def restore_b(self, bt):
        return bt


class Exponential(Transformation):
    """
    y = ae^(bx) = aB^x, fitted as ln y = ln a + ln B · x.

    restore_b returns B (the base), not the rate ln B.
    """

    key = 'exponential'
    name = 'Exponential'
    equation = 'y = aB^x'
    transformed_equation = 'ln y = ln a + ln B * x'
    title_label = 'ln(y) vs x'
    x_label = 'x'
    y_label = 'ln(y)'

    def fx(self, a, b, x):
        return np.multiply(a, np.float_power(b, x))

    def fy(self, a, b, y):
        return np.divide(np.log(np.divide(y, a)), np.log(b))

    def transform_x(self, x):
        return _as_real(x)

    def transform_y(self, y):
        return np.log(y)

    def restore_a(self, at):
        return np.exp(at)

    def restore_b(self, bt):
        return np.exp(bt)


class Power(Transformation):
    """y = ax^b, fitted as log y = log a + b log x (base 10)."""

    key = 'power'
    name = 'Power'
    equation = 'y = ax^b'
    transformed_equation = 'log y = log a + b * log x'
    title_label = 'log(y) vs log(x)'
    x_label = 'log(x)'
    y_label = 'log(y)'

    def fx(self, a, b, x):
        return np.multiply(a, np.float_power(x, b))

    def fy(self, a, b, y):
        return np.float_power(np.divide(y, a), np.divide(1.0, b))

    def transform_x(self, x):
        return np.log10(x)

    def transform_y(self, y):
        return np.log10(y)

    def restore_a(self, at):
        return np.float_power(10.0, at)

    def restore_b(self, bt):
        return bt


class LnPower(Transformation):
    """y = ln(ax^b), fitted as y = ln a + b ln x."""

    key = 'ln_power'
    name = 'LnPower'
    equation = 'y = ln(ax^b)'
    transformed_equation = 'y = ln a + b ln x'
    title_label = 'y vs ln(x)'
    x_label = 'ln(x)'
    y_label = 'y'

    def fx(self, a, b, x):
        return np.add(np.log(a), np.multiply(b, np.log(x)))

    def fy(self, a, b, y):
        return np.float_power(np.divide(np.exp(y), a), np.divide(1.0, b))

    def transform_x(self, x):
        return np.log(x)

    def transform_y(self, y):
        return _as_real(y)

    def restore_a(self, at):
        return np.exp(at)

    def restore_b(self, bt):
        return bt


class OneOverX(Transformation):
    """y = 1/(a + bx), fitted as 1/y = a + bx."""

    key = 'one_over_x'
    name = 'OneOverX'
    equation = 'y = 1 / (a + bx)'
    transformed_equation = '1/y = a + bx'
    title_label = '1/y vs x'
    x_label = 'x'
    y_label = '1/y'

    def fx(self, a, b, x):
        return np.divide(1.0, np.add(a, np.multiply(b, x)))

    def fy(self, a, b, y):
        return np.divide(np.subtract(np.divide(1.0, y), a), b)

    def transform_x(self, x):
        return _as_real(x)

    def transform_y(self, y):
        return np.divide(1.0, y)

    def restore_a(self, at):
        return at

    def restore_b(self, bt):
        return bt


class BOverX(Transformation):
    """y = a + b/(1 + x), fitted as y = a + b · 1/(1 + x)."""

    key = 'b_over_x'
    name = 'BOverX'
    equation = 'y = a + b / (1 + x)'
    transformed_equation = 'y = a + b * 1 / (1 + x)'
    title_label = 'y vs 1/(1+x)'
    x_label = '1/(1+x)'
    y_label = 'y'

    def fx(self, a, b, x):
        return np.add(a, np.divide(b, np.add(1.0, x)))

    def fy(self, a, b, y):
        return np.subtract(np.divide(b, np.subtract(y, a)), 1.0)

    def transform_x(self, x):
        return np.divide(1.0, np.add(1.0, x))

    def transform_y(self, y):
        return _as_real(y)

    def restore_a(self, at):
        return at

    def restore_b(self, bt):
        return bt


class OneOverX2(Transformation):
    """y = 1/(a + bx)², fitted as 1/√y = a + bx."""

    key = 'one_over_x2'
    name = 'OneOverX2'
    equation = 'y = 1 / (a + bx)^2'
    transformed_equation = '1/sqrt(y) = a + bx'
    title_label = '1/sqrt(y) vs x'
    x_label = 'x'
    y_label = '1/sqrt(y)'

    def fx(self, a, b, x):
        return np.divide(1.0, np.square(np.add(a, np.multiply(b, x))))

    def fy(self, a, b, y):
        return np.divide(np.subtract(np.divide(1.0, np.sqrt(y)), a), b)

    def transform_x(self, x):
        return _as_real(x)

    def transform_y(self, y):
        return np.divide(1.0, np.sqrt(y))

    def restore_a(self, at):
        return at

    def restore_b(self, bt):
        return bt


class Sqrt(Transformation):
    """y = a + b√x, already linear in √x."""

    key = 'sqrt'
    name = 'Sqrt'
    equation = 'y = a + b * sqrt(x)'
    transformed_equation = 'y = a + b * sqrt(x)'
    title_label = 'y vs sqrt(x)'
    x_label = 'sqrt(x)'
    y_label = 'y'

    def fx(self, a, b, x):
        return np.add(a, np.multiply(b, np.sqrt(x)))

    def fy(self, a, b, y):
        return np.square(np.divide(np.subtract(y, a), b))

    def transform_x(self, x):
        return np.sqrt(x)

    def transform_y(self, y):
        return _as_real(y)

    def restore_a(self, at):
        return at

    def restore_b(self, bt):
        return bt


# =====================================================================
# Registry
# =====================================================================

# Identity first, then the nonlinear models in reporting order.
TRANSFORMATIONS: dict[str, type[Transformation]] = {
    cls.key: cls
    for cls in (
        Identity,
        Exponential,
        Power,
        LnPower,
        OneOverX,
        BOverX,
        OneOverX2,
        Sqrt,
    )
}


def available_transformations(*, include_identity: bool = True) -> tuple[str, ...]:
    """Registry keys in reporting order."""
    keys = tuple(TRANSFORMATIONS)
    if include_identity:
        return keys
    return tuple(k for k in keys if k != Identity.key)


def resolve_transformation(model: str | Transformation | None) -> Transformation:
    """
    Resolve a model argument to a Transformation instance.

    None means no transformation. Names are case-insensitive registry keys.

    Raises:
        ValueError: Unknown model name
        TypeError: Argument is neither a name nor a Transformation
    """
    if model is None:
        return Identity()
    if isinstance(model, Transformation):
        return model
    if isinstance(model, str):
        cls = TRANSFORMATIONS.get(model.lower())
        if cls is None:
            valid = ', '.join(TRANSFORMATIONS)
            raise ValueError(f"Unknown transformation: {model!r}. Valid transformations: {valid}")
        return cls()
    raise TypeError(f"model must be str or Transformation, got {type(model).__name__}")
