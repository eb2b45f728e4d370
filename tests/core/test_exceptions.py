"""
Tests for the csvanalysis exception hierarchy.

Validates:
    - Inheritance chain (all errors catchable via CsvAnalysisError)
    - Diagnostic attributes on InsufficientDataError, SingularMatrixError
    - Default attribute values (None for optional attributes)
    - NumericDomainWarning is a RuntimeWarning, not an error
"""

import warnings

import pytest

from csvanalysis.core.exceptions import (
    CsvAnalysisError,
    DimensionError,
    InsufficientDataError,
    NumericalError,
    NumericDomainWarning,
    SingularMatrixError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every error is catchable via CsvAnalysisError."""

    def test_validation_error_is_csvanalysis_error(self):
        with pytest.raises(CsvAnalysisError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_insufficient_data_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise InsufficientDataError("too few points")

    def test_singular_matrix_error_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise SingularMatrixError("singular")

    def test_singular_matrix_error_is_csvanalysis_error(self):
        with pytest.raises(CsvAnalysisError):
            raise SingularMatrixError("singular")

    def test_numerical_error_is_not_validation_error(self):
        assert not issubclass(NumericalError, ValidationError)

    def test_domain_warning_is_runtime_warning(self):
        assert issubclass(NumericDomainWarning, RuntimeWarning)
        assert not issubclass(NumericDomainWarning, CsvAnalysisError)

    def test_domain_warning_can_be_filtered(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            warnings.warn("log of zero", NumericDomainWarning)
        assert caught[0].category is NumericDomainWarning


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestInsufficientDataError:

    def test_attributes(self):
        err = InsufficientDataError("need 4, got 2", n_observations=2, required=4)
        assert err.n_observations == 2
        assert err.required == 4
        assert str(err) == "need 4, got 2"

    def test_defaults_none(self):
        err = InsufficientDataError("too few")
        assert err.n_observations is None
        assert err.required is None


class TestSingularMatrixError:

    def test_all_attributes(self):
        err = SingularMatrixError(
            "moment matrix is singular",
            matrix_name="moment matrix",
            condition_number=1e17,
            rank=1,
            expected_rank=2,
        )
        assert err.matrix_name == "moment matrix"
        assert err.condition_number == 1e17
        assert err.rank == 1
        assert err.expected_rank == 2
        assert "singular" in str(err)

    def test_defaults_none(self):
        err = SingularMatrixError("singular")
        assert err.matrix_name is None
        assert err.condition_number is None
        assert err.rank is None
        assert err.expected_rank is None
