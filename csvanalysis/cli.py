"""
Command line interface.

Modes, picked by the options given:

    csv-analysis -c N FILE...                   summary of column N
    csv-analysis -x N -y M FILE...              regression report
    csv-analysis -x N -y M --xtime FMT FILE...  time plot + summary of M
    csv-analysis --show-header FILE...          print the first row(s)

Columns and rows are 1-based. Exit status is 0 on success and 1 on any
usage or data error; errors go to stderr prefixed with 'ERROR:'.
"""

from __future__ import annotations

import argparse
import logging
import sys
import warnings
from typing import Sequence

import numpy as np

from csvanalysis import __version__
from csvanalysis.core.datasource import (
    DataSource,
    parse_floats,
    parse_timestamps,
    read_columns,
    read_rows,
    trim,
)
from csvanalysis.core.exceptions import (
    CsvAnalysisError,
    DimensionError,
    NumericDomainWarning,
)
from csvanalysis.descriptive import DescriptiveDesign, describe
from csvanalysis.plotting import plot_regression, plot_time_data
from csvanalysis.regression import (
    PolynomialSolution,
    RegressionDesign,
    TransformationSolution,
    available_transformations,
    fit_all,
    fit_polynomial,
)

logger = logging.getLogger(__name__)


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"ERROR: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog='csv-analysis',
        description='Descriptive statistics and regression analysis of CSV columns',
    )
    parser.add_argument('files', nargs='*', metavar='FILE', help='CSV files, read in order')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--debug', action='store_true', help='Show debug output')

    data = parser.add_argument_group('CSV parsing')
    data.add_argument('--no-header', '--nh', action='store_true',
                      help='The CSV files have no header row')
    data.add_argument('--filter-zero', '--fz', action='store_true',
                      help='Ignore zero values')
    data.add_argument('--show-header', '-s', action='store_true',
                      help='Show the numbered header cells of each CSV file and exit')
    data.add_argument('--show-data', '--sd', action='store_true',
                      help='Show the numbered header and first data row cells and exit')

    columns = parser.add_argument_group('columns')
    columns.add_argument('--column', '-c', type=int, default=1,
                         help='Column for the descriptive summary (default: 1)')
    columns.add_argument('-x', type=int, dest='x_column', help='X column for regression')
    columns.add_argument('-y', type=int, dest='y_column', help='Y column for regression')
    columns.add_argument('--xtime', nargs='?', const='ISO8601', default=None, metavar='FORMAT',
                         help='Parse the X column as timestamps (strptime format, '
                              'default ISO 8601) and plot Y over time')

    regression = parser.add_argument_group('regression')
    regression.add_argument('--trim-start', '--ts', type=int, default=0,
                            help='Drop this many leading points')
    regression.add_argument('--trim-end', '--te', type=int, default=0,
                            help='Drop this many trailing points')
    regression.add_argument('--degree', type=int, default=1,
                            help='Polynomial regression degree (default: 1)')
    regression.add_argument('--review', action='store_true',
                            help='Also report the fits in the transformed space')
    regression.add_argument('--method', choices=('normal_equations', 'inverse'),
                            default='normal_equations',
                            help='Least-squares solve method')

    plots = parser.add_argument_group('plots')
    plots.add_argument('--plot', action='store_true', help='Write a PNG per fit')
    plots.add_argument('--plot-data', '-p', action='store_true',
                       help='Only plot the data and exit')
    plots.add_argument('--plot-title', '--pt', default='Data', help='Title of data plots')
    plots.add_argument('--plot-x-label', '--px', default='', help='X label of data plots')
    plots.add_argument('--plot-y-label', '--py', default='', help='Y label of data plots')
    plots.add_argument('--output-dir', '-o', default='.', help='Directory for PNG files')

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format='%(levelname)s: %(name)s: %(message)s',
    )
    logging.captureWarnings(True)
    try:
        return _run(parser, args)
    except CsvAnalysisError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    finally:
        logging.captureWarnings(False)


def _run(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    if not args.files:
        parser.error("missing file")
    logger.debug("files: %s", args.files)

    if args.show_header or args.show_data:
        return _show_rows(args)

    if (args.x_column is None) != (args.y_column is None):
        parser.error("-x and -y must be given together")

    if args.x_column is not None:
        if args.xtime is not None:
            return _time_plot(args)
        return _regression(args)

    if args.xtime is not None:
        parser.error("--xtime requires -x and -y")
    return _column_stats(args, args.column)


def _show_rows(args: argparse.Namespace) -> int:
    rows = [1, 2] if args.show_data else [1]
    for path in args.files:
        for number, row in zip(rows, read_rows(path, rows)):
            print("Header Row" if number == 1 else f"Row {number}")
            for column, cell in enumerate(row, start=1):
                print(f"{column}: {cell}")
    return 0


def _column_stats(args: argparse.Namespace, column: int) -> int:
    source = DataSource.from_csv(
        args.files,
        header=not args.no_header,
        filter_zero=args.filter_zero,
        value=column,
    )
    solution = describe(DescriptiveDesign.from_datasource(source, column='value'))
    print(solution.summary())
    return 0


def _time_plot(args: argparse.Namespace) -> int:
    header = not args.no_header
    (x_raw,) = read_columns(args.files, [args.x_column], header=header)
    (y_raw,) = read_columns(args.files, [args.y_column], header=header)
    t = parse_timestamps(x_raw, args.xtime)
    y = parse_floats(y_raw, name=f"column {args.y_column}")
    if args.filter_zero:
        y = y[y != 0]

    print(f"Column Y ({args.y_column}): {y}")
    print(f"Count: {len(t)}, Trim Start: {args.trim_start}, Trim End: {args.trim_end}")
    if len(t) != len(y):
        raise DimensionError(
            f"column lengths do not match (x={len(t)}, y={len(y)})"
        )

    t, y = trim(t, y, args.trim_start, args.trim_end)
    path = plot_time_data(
        t, y,
        title=args.plot_title,
        x_label=args.plot_x_label,
        y_label=args.plot_y_label,
        output_dir=args.output_dir,
    )
    print(f"Plot: {path}")
    return _column_stats(args, args.y_column)


def _regression(args: argparse.Namespace) -> int:
    source = DataSource.from_csv(
        args.files,
        header=not args.no_header,
        filter_zero=args.filter_zero,
        x=args.x_column,
        y=args.y_column,
    )
    x, y = source['x'], source['y']
    print(f"Column X ({args.x_column}): {x}")
    print(f"Column Y ({args.y_column}): {y}")
    print(f"Count: {len(x)}, Trim Start: {args.trim_start}, Trim End: {args.trim_end}")
    if len(x) != len(y):
        raise DimensionError(
            f"column lengths do not match (x={len(x)}, y={len(y)})"
        )

    design = RegressionDesign.from_datasource(source).trimmed(args.trim_start, args.trim_end)

    if args.plot_data:
        path = plot_regression(
            design.x, design.y, title='Data', x_label='X', y_label='Y', output_dir=args.output_dir,
        )
        print(f"Plot: {path}")
        return 0

    results = fit_all(design, models=available_transformations(), method=args.method)
    for key, outcome in results.items():
        if isinstance(outcome, CsvAnalysisError):
            print(f"ERROR: {key}: {outcome}", file=sys.stderr)
            continue
        _emit_warnings(outcome.warnings)
        if args.review and key != 'none':
            _report_linear(outcome, args)
        _report_transformation(outcome, args)

    solution = fit_polynomial(design, degree=args.degree, method=args.method)
    _emit_warnings(solution.warnings)
    _report_polynomial(solution, args)
    return 0


def _emit_warnings(notes: Sequence[str]) -> None:
    for note in notes:
        if 'non-finite' in note:
            warnings.warn(note, NumericDomainWarning, stacklevel=2)
        else:
            logger.warning(note)


def _report_linear(sol: TransformationSolution, args: argparse.Namespace) -> None:
    model = sol.model
    print(f"Linear   {model.name:<20} R²={sol.r_squared_transformed:.4f} "
          f"a={sol.at:10f} b={sol.bt:10f}")
    print(f"         {model.equation} -> {model.transformed_equation}")
    if args.plot:
        path = plot_regression(
            sol.xt, sol.yt, sol.linear_function(), sol.r_squared_transformed,
            title=f"Linear {model.name}",
            x_label=model.x_label,
            y_label=model.y_label,
            output_dir=args.output_dir,
        )
        print(f"Plot: {path}")


def _report_transformation(sol: TransformationSolution, args: argparse.Namespace) -> None:
    model = sol.model
    print(f"Equation {model.equation:<20} R²t={sol.r_squared_transformed:.4f} "
          f"R²={sol.r_squared:.4f} a={sol.a:10f} b={sol.b:10f}")
    if args.plot:
        path = plot_regression(
            sol.x, sol.y, sol.regression_function(), sol.r_squared,
            title=model.name,
            output_dir=args.output_dir,
        )
        print(f"Plot: {path}")


def _report_polynomial(sol: PolynomialSolution, args: argparse.Namespace) -> None:
    print(f"Polynomial degree {sol.degree} R²={sol.r_squared:.4f}")
    print(f"         {sol.equation}")
    logger.debug("coefficients: %s", np.array2string(sol.coefficients, precision=3))
    if args.plot:
        path = plot_regression(
            sol.x, sol.y, sol.polynomial_function(), sol.r_squared,
            title='Polynomial Regression',
            output_dir=args.output_dir,
        )
        print(f"Plot: {path}")
