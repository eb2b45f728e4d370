"""
DataSource: the "I have data" abstraction.

DataSource doesn't know or care what consumes it (a regression, a
descriptive summary, a time plot). It only extracts named columns.

Usage:
    from csvanalysis import DataSource

    ds = DataSource.from_arrays(x=x, y=y)
    ds = DataSource.from_csv(["a.csv", "b.csv"], x=1, y=3)
    ds = DataSource.from_csv("a.csv", value=2, header=False, filter_zero=True)

    ds.keys()  # frozenset({'x', 'y'})
    x = ds['x']

CSV columns are 1-based, as they are on the command line. Columns from
several files are concatenated in file order. Cells that do not parse as
numbers are dropped from their own column, so extracted columns can end up
with different lengths; the regression design rejects that.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Sequence

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from csvanalysis.core.exceptions import DimensionError, ValidationError

logger = logging.getLogger(__name__)

PathLike = str | Path


@dataclass
class DataSource:
    """
    Universal data container. Domain-agnostic.

    Construct via factory classmethods, not directly.
    """
    _data: dict[str, Any]
    _metadata: dict[str, Any] = field(default_factory=dict)

    # === Array Access ===

    def keys(self) -> frozenset[str]:
        """Return the names of all available arrays."""
        return frozenset(self._data.keys())

    def __getitem__(self, key: str) -> Any:
        """
        Access a named array.

        Raises:
            KeyError: If key not found, with helpful message listing available keys
        """
        if key not in self._data:
            available = self.keys()
            raise KeyError(
                f"DataSource has no array '{key}'. Available: {available}"
            )
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return key in self._data

    # === Properties ===

    @property
    def n_observations(self) -> int:
        """Length of the longest array."""
        return self._metadata.get('n_observations', 0)

    @property
    def metadata(self) -> dict[str, Any]:
        return self._metadata.copy()

    # === Factory Methods ===

    @classmethod
    def from_arrays(cls, **named_arrays: Any) -> DataSource:
        """Construct from array-likes, converted to float64."""
        storage = {
            name: np.asarray(arr, dtype=np.float64)
            for name, arr in named_arrays.items()
        }
        n_obs = max((arr.shape[0] for arr in storage.values()), default=0)
        return cls(
            _data=storage,
            _metadata={'n_observations': n_obs, 'source': 'arrays'},
        )

    @classmethod
    def from_csv(
        cls,
        paths: PathLike | Sequence[PathLike],
        *,
        header: bool = True,
        filter_zero: bool = False,
        **columns: int,
    ) -> DataSource:
        """
        Construct from one or more CSV files.

        Args:
            paths: CSV file or files; columns are concatenated in order
            header: Whether each file starts with a header row
            filter_zero: Drop values equal to 0 from every column
            **columns: name -> 1-based column index, e.g. x=1, y=2

        Raises:
            ValidationError: Unreadable file or bad column index
            DimensionError: Columns of one file have different row counts
        """
        if not columns:
            raise ValidationError("from_csv: at least one column is required")

        paths = _as_path_list(paths)
        raw = read_columns(paths, list(columns.values()), header=header)

        storage: dict[str, NDArray[np.floating[Any]]] = {}
        for name, values in zip(columns, raw):
            arr = parse_floats(values, name=name)
            if filter_zero:
                arr = arr[arr != 0]
            storage[name] = arr

        n_obs = max(arr.shape[0] for arr in storage.values())
        return cls(
            _data=storage,
            _metadata={
                'n_observations': n_obs,
                'source': 'csv',
                'source_paths': [str(p) for p in paths],
                'columns': dict(columns),
                'header': header,
                'filter_zero': filter_zero,
            },
        )


def _as_path_list(paths: PathLike | Sequence[PathLike]) -> list[Path]:
    if isinstance(paths, (str, Path)):
        return [Path(paths)]
    result = [Path(p) for p in paths]
    if not result:
        raise ValidationError("no CSV files given")
    return result


def _row_width(path: Path) -> int:
    """Number of fields in the widest row."""
    with open(path, newline='') as fh:
        return max((len(row) for row in csv.reader(fh)), default=0)


def _read_frame(path: Path, nrows: int | None = None) -> pd.DataFrame:
    """
    Read a CSV file as raw strings, without interpreting any header.

    Rows may have different numbers of fields. The frame is as wide as the
    widest row and missing trailing cells are NaN.
    """
    try:
        width = _row_width(path)
        if width == 0:
            return pd.DataFrame()
        return pd.read_csv(
            path,
            header=None,
            names=list(range(width)),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            nrows=nrows,
        )
    except FileNotFoundError as e:
        raise ValidationError(f"{path}: no such file") from e
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except (pd.errors.ParserError, csv.Error) as e:
        raise ValidationError(f"{path}: cannot parse CSV: {e}") from e


def _check_column_index(column: int) -> None:
    if column <= 0:
        raise ValidationError(f"Column index error: {column} <= 0")


def read_columns(
    paths: PathLike | Sequence[PathLike],
    columns: Iterable[int],
    *,
    header: bool = True,
) -> list[list[str]]:
    """
    Extract raw string columns from CSV files.

    Args:
        paths: CSV file or files
        columns: 1-based column indices, in the order to return them
        header: Whether each file starts with a header row (dropped)

    Returns:
        One list of stripped cell strings per requested column

    Raises:
        ValidationError: Bad column index or unreadable file
        DimensionError: Requested columns of a file differ in length
    """
    columns = list(columns)
    for column in columns:
        _check_column_index(column)

    result: list[list[str]] = [[] for _ in columns]
    for path in _as_path_list(paths):
        frame = _read_frame(path)
        extracted = []
        for column in columns:
            if column > frame.shape[1]:
                extracted.append([])
                continue
            cells = frame.iloc[:, column - 1]
            # Short rows leave missing cells; they are not part of the column.
            cells = cells[cells.notna()].astype(str).str.strip().tolist()
            if header:
                cells = cells[1:]
            extracted.append(cells)

        first_length = len(extracted[0])
        for column, cells in zip(columns, extracted):
            if first_length == 0:
                logger.warning("Column %d is empty, file: %s", column, path)
                break
            if len(cells) != first_length:
                raise DimensionError(
                    f"{path}: column lengths do not match "
                    f"(column {columns[0]}={first_length}, column {column}={len(cells)})"
                )
        else:
            for i, cells in enumerate(extracted):
                result[i].extend(cells)

    return result


def parse_floats(values: Sequence[str], *, name: str = 'column') -> NDArray[np.floating[Any]]:
    """
    Convert cell strings to float64, dropping cells that are not numbers.

    Every dropped cell is logged at WARNING level.
    """
    series = pd.Series(list(values), dtype=object)
    parsed = pd.to_numeric(series, errors='coerce')
    bad = parsed.isna()
    for cell in series[bad]:
        logger.warning("%s: cannot parse %r as a number", name, cell)
    return parsed[~bad].to_numpy(dtype=np.float64)


def parse_timestamps(values: Sequence[str], fmt: str = 'ISO8601') -> NDArray[np.floating[Any]]:
    """
    Convert cell strings to Unix seconds using a strptime-style format.

    Naive timestamps are taken as UTC. Unparseable cells are dropped and
    logged at WARNING level.
    """
    series = pd.Series(list(values), dtype=object)
    parsed = pd.to_datetime(series, format=fmt, errors='coerce', utc=True)
    for cell in series[parsed.isna()]:
        logger.warning("time format %r: cannot parse %r", fmt, cell)
    parsed = parsed.dropna()
    epoch = pd.Timestamp('1970-01-01', tz='UTC')
    seconds = (parsed - epoch) / pd.Timedelta(seconds=1)
    return seconds.to_numpy(dtype=np.float64)


def read_rows(path: PathLike, rows: Iterable[int]) -> list[list[str]]:
    """
    Return the given 1-based rows of a CSV file as lists of cell strings.

    Rows past the end of the file come back empty.
    """
    rows = list(rows)
    for row in rows:
        if row <= 0:
            raise ValidationError(f"Row index error: {row} <= 0")

    frame = _read_frame(Path(path), nrows=max(rows, default=0))
    result = []
    for row in rows:
        if row > frame.shape[0]:
            result.append([])
            continue
        cells = frame.iloc[row - 1]
        result.append([str(c) for c in cells[cells.notna()]])
    return result


def trim(
    x: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    start: int = 0,
    end: int = 0,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Drop `start` leading and `end` trailing points from a paired series.

    Raises:
        ValidationError: Negative counts, or more points trimmed than exist
    """
    if start < 0 or end < 0:
        raise ValidationError(f"trim counts must be >= 0, got start={start}, end={end}")
    n = min(len(x), len(y))
    if start + end > n:
        raise ValidationError(
            f"cannot trim {start} + {end} points from a series of {n}"
        )
    stop = n - end
    return np.asarray(x)[start:stop], np.asarray(y)[start:stop]
