"""
PNG plots of data and fitted curves.

Plots are written with matplotlib's Agg backend to
<output_dir>/plot-<clean title>.png and the path is returned. Nothing is
shown on screen.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Callable

import matplotlib
matplotlib.use("Agg")
import matplotlib.dates as mdates
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from numpy.typing import ArrayLike

logger = logging.getLogger(__name__)

FIGSIZE = (8, 8)
CURVE_POINTS = 200
COLORS = ("red", "green", "blue")

_NON_WORD = re.compile(r"[^\d\w]", re.ASCII)


def clean_filename(title: str) -> str:
    """
    Turn a plot title into a file-name stem.

    Spaces and '(' become '_', ')' is dropped, '/' becomes '_over_', the
    result is lower-cased and anything but ASCII letters, digits and '_'
    is removed.

        >>> clean_filename("Linear 1/sqrt(y) vs x")
        'linear_1_over_sqrt_y_vs_x'
    """
    name = title.replace(" ", "_").replace("(", "_").replace(")", "")
    name = name.replace("/", "_over_").lower()
    return _NON_WORD.sub("", name)


def plot_path(title: str, output_dir: str | Path = ".") -> Path:
    """Where a plot with this title is written."""
    return Path(output_dir) / f"plot-{clean_filename(title)}.png"


def _series(ys: Any) -> list[np.ndarray]:
    """One y array or a sequence of them, as a list of arrays."""
    arr = np.asarray(ys, dtype=np.float64)
    if arr.ndim == 1:
        return [arr]
    return [np.asarray(y, dtype=np.float64) for y in ys]


def _save(fig, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        fig.tight_layout()
        fig.savefig(path)
    finally:
        plt.close(fig)
    logger.debug("wrote %s", path)
    return path


def plot_regression(
    x: ArrayLike,
    ys: ArrayLike,
    f: Callable[[np.ndarray], ArrayLike] | None = None,
    r_squared: float = 0.0,
    *,
    title: str = "Data",
    x_label: str = "X",
    y_label: str = "Y",
    data_label: str = "Data",
    output_dir: str | Path = ".",
) -> Path:
    """
    Plot data points and, when r_squared is nonzero, the fitted curve.

    Args:
        x: Shared x values
        ys: One y series or a sequence of series, each as long as x
        f: Fitted function, evaluated on a grid spanning x
        r_squared: Shown in the legend; 0 plots the data alone
        title: Plot title, also used for the file name
        x_label, y_label: Axis labels
        data_label: Legend prefix for the data series
        output_dir: Directory for the PNG

    Returns:
        Path of the written PNG
    """
    x = np.asarray(x, dtype=np.float64)
    fig, ax = plt.subplots(figsize=FIGSIZE)
    ax.set_title(title)
    ax.set_xlabel(x_label)
    ax.set_ylabel(y_label)

    for i, y in enumerate(_series(ys)):
        color = COLORS[i % len(COLORS)]
        ax.plot(x, y, marker="o", color=color, label=f"{data_label} {i}")

    if r_squared != 0 and f is not None:
        finite = x[np.isfinite(x)]
        if finite.size:
            grid = np.linspace(finite.min(), finite.max(), CURVE_POINTS)
            with np.errstate(all="ignore"):
                curve = np.asarray(f(grid), dtype=np.float64)
            ax.plot(grid, curve, color="black", label="Regression")
        ax.plot([], [], " ", label=f"R² {r_squared:.4f}")

    ax.legend(loc="upper left")
    return _save(fig, plot_path(title, output_dir))


def plot_time_data(
    t: ArrayLike,
    ys: ArrayLike,
    *,
    title: str = "Data",
    x_label: str = "",
    y_label: str = "",
    data_label: str = "Data",
    output_dir: str | Path = ".",
) -> Path:
    """
    Plot one or more series against Unix timestamps (seconds, UTC).

    Returns:
        Path of the written PNG
    """
    dates = pd.to_datetime(np.asarray(t, dtype=np.float64), unit="s", utc=True).to_pydatetime()
    fig, ax = plt.subplots(figsize=FIGSIZE)
    ax.set_title(title)
    ax.set_xlabel(x_label)
    ax.set_ylabel(y_label)

    for i, y in enumerate(_series(ys)):
        color = COLORS[i % len(COLORS)]
        ax.plot(dates, y, marker="o", color=color, label=f"{data_label} {i}")

    locator = mdates.AutoDateLocator()
    ax.xaxis.set_major_locator(locator)
    ax.xaxis.set_major_formatter(mdates.ConciseDateFormatter(locator))
    ax.legend(loc="upper left")
    return _save(fig, plot_path(title, output_dir))
