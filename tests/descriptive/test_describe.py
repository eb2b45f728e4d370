"""
Tests for describe().

Validates the one-column summary against hand-computed values for a small
dataset, the ddof switch, and input validation.
"""

import numpy as np
import pandas as pd
import pytest

from csvanalysis.core.datasource import DataSource
from csvanalysis.core.exceptions import InsufficientDataError, ValidationError
from csvanalysis.descriptive import DescriptiveDesign, DescriptiveSolution, describe


DATA = [2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]


class TestDescribe:

    def test_returns_solution(self):
        assert isinstance(describe(DATA), DescriptiveSolution)

    def test_hand_computed_values(self):
        result = describe(DATA)
        assert result.count == 8
        assert result.max == 9.0
        assert result.min == 2.0
        assert result.mean == pytest.approx(5.0)
        assert result.sum == pytest.approx(40.0)
        assert result.median == pytest.approx(4.5)

    def test_population_spread_by_default(self):
        result = describe(DATA)
        assert result.variance == pytest.approx(4.0)
        assert result.sd == pytest.approx(2.0)
        assert result.sd_percent == pytest.approx(40.0)

    def test_sample_spread(self):
        result = describe(DATA, ddof=1)
        assert result.variance == pytest.approx(32.0 / 7.0)
        assert result.sd == pytest.approx(np.sqrt(32.0 / 7.0))

    def test_mad_unscaled(self):
        result = describe(DATA)
        assert result.mad == pytest.approx(0.5)
        assert result.mad_percent == pytest.approx(0.5 * 100 / 4.5)

    def test_zero_mean_gives_non_finite_percent(self):
        result = describe([-1.0, 1.0])
        assert not np.isfinite(result.sd_percent)

    def test_single_value(self):
        result = describe([3.0])
        assert result.variance == 0.0
        assert result.mad == 0.0

    def test_single_value_sample_variance_undefined(self):
        result = describe([3.0], ddof=1)
        assert np.isnan(result.variance)
        assert result.warnings

    def test_series_name_kept(self):
        result = describe(pd.Series(DATA, name="latency"))
        assert result.name == "latency"

    def test_summary_lines(self):
        text = describe(DATA).summary()
        assert "Count: 8" in text
        assert "Standard Deviation σ: 2.000000, 40.000000%" in text
        assert "Median Absolute Deviation MAD: 0.500000" in text
        assert "Sum: 40.000000" in text

    def test_timing_recorded(self):
        result = describe(DATA)
        assert result.backend_name == "cpu_descriptive"
        assert "total_seconds" in result.timing


class TestDescribeValidation:

    def test_empty(self):
        with pytest.raises(InsufficientDataError):
            describe([])

    def test_non_finite(self):
        with pytest.raises(ValidationError, match="non-finite"):
            describe([1.0, np.inf])

    def test_2d(self):
        with pytest.raises(ValidationError):
            describe(np.ones((2, 2)))

    @pytest.mark.parametrize("ddof", [-1, 1.5, True])
    def test_bad_ddof(self, ddof):
        with pytest.raises(ValidationError, match="ddof"):
            describe(DATA, ddof=ddof)

    def test_design_passthrough(self):
        design = DescriptiveDesign.from_array(DATA, name="v")
        assert describe(design).name == "v"

    def test_from_datasource(self):
        source = DataSource.from_arrays(latency=DATA)
        design = DescriptiveDesign.from_datasource(source, column="latency")
        result = describe(design)
        assert result.name == "latency"
        assert result.count == len(DATA)

    def test_from_datasource_missing_column(self):
        source = DataSource.from_arrays(latency=DATA)
        with pytest.raises(KeyError, match="Available"):
            DescriptiveDesign.from_datasource(source, column="throughput")
