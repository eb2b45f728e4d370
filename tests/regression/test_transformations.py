"""
Tests for the transformation catalogue.

Validates:
    - Registry order and name resolution
    - fy inverts fx on each model's domain
    - transform/restore round trip the linearised coefficients
    - Out-of-domain input yields NaN rather than raising
"""

import numpy as np
import pytest

from csvanalysis.regression.transformations import (
    TRANSFORMATIONS,
    BOverX,
    Exponential,
    Identity,
    LnPower,
    OneOverX,
    OneOverX2,
    Power,
    Sqrt,
    Transformation,
    available_transformations,
    resolve_transformation,
)


# (model, a, b, x) with x inside the model's domain for that (a, b)
DOMAIN_CASES = [
    (Identity(), 1.5, -2.0, np.linspace(-5, 5, 11)),
    (Exponential(), 2.0, 1.5, np.linspace(0, 9, 10)),
    (Power(), 3.0, 0.5, np.linspace(1, 10, 10)),
    (LnPower(), 2.0, 1.5, np.linspace(1, 10, 10)),
    (OneOverX(), 1.0, 0.5, np.linspace(0, 9, 10)),
    (BOverX(), 2.0, 3.0, np.linspace(0, 9, 10)),
    (OneOverX2(), 1.0, 0.5, np.linspace(0, 9, 10)),
    (Sqrt(), 1.0, 2.0, np.linspace(0, 9, 10)),
]
IDS = [case[0].key for case in DOMAIN_CASES]


# ═══════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════


class TestRegistry:

    def test_reporting_order(self):
        assert available_transformations() == (
            "none", "exponential", "power", "ln_power",
            "one_over_x", "b_over_x", "one_over_x2", "sqrt",
        )

    def test_without_identity(self):
        keys = available_transformations(include_identity=False)
        assert "none" not in keys
        assert len(keys) == 7

    def test_keys_match_classes(self):
        for key, cls in TRANSFORMATIONS.items():
            assert cls.key == key
            assert issubclass(cls, Transformation)

    def test_metadata_present(self):
        for cls in TRANSFORMATIONS.values():
            for attr in ("name", "equation", "transformed_equation",
                         "title_label", "x_label", "y_label"):
                assert isinstance(getattr(cls, attr), str) and getattr(cls, attr)


class TestResolve:

    def test_none_is_identity(self):
        assert resolve_transformation(None) == Identity()

    def test_by_name_case_insensitive(self):
        assert resolve_transformation("Power") == Power()

    def test_instance_passthrough(self):
        model = Sqrt()
        assert resolve_transformation(model) is model

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown transformation"):
            resolve_transformation("cubic")

    def test_wrong_type(self):
        with pytest.raises(TypeError):
            resolve_transformation(3)

    def test_equality_by_type(self):
        assert Power() == Power()
        assert Power() != LnPower()
        assert len({Power(), Power(), Sqrt()}) == 2


# ═══════════════════════════════════════════════════════════════════════
# Model functions
# ═══════════════════════════════════════════════════════════════════════


class TestModelFunctions:

    @pytest.mark.parametrize("model,a,b,x", DOMAIN_CASES, ids=IDS)
    def test_fy_inverts_fx(self, model, a, b, x):
        y = model.fx(a, b, x)
        np.testing.assert_allclose(model.fy(a, b, y), x, rtol=1e-9, atol=1e-9)

    @pytest.mark.parametrize("model,a,b,x", DOMAIN_CASES, ids=IDS)
    def test_transformed_data_is_linear(self, model, a, b, x):
        """Yt = At + Bt·Xt holds exactly for data generated by the model."""
        y = model.fx(a, b, x)
        xt = model.transform_x(x)
        yt = model.transform_y(y)
        bt, at = np.polyfit(xt, yt, 1)
        np.testing.assert_allclose(model.restore_a(at), a, rtol=1e-8)
        np.testing.assert_allclose(model.restore_b(bt), b, rtol=1e-8)

    def test_scalar_in_scalar_out(self):
        for cls in TRANSFORMATIONS.values():
            model = cls()
            assert np.ndim(model.fx(1.0, 0.5, 2.0)) == 0
            assert np.ndim(model.transform_x(2.0)) == 0
            assert np.ndim(model.transform_y(2.0)) == 0

    def test_exponential_restores_base(self):
        model = Exponential()
        assert model.restore_b(np.log(3.0)) == pytest.approx(3.0)

    def test_power_uses_base_ten(self):
        model = Power()
        assert model.transform_x(100.0) == pytest.approx(2.0)
        assert model.restore_a(1.0) == pytest.approx(10.0)

    def test_integer_input_negative_exponent(self):
        np.testing.assert_allclose(Power().fx(1.0, -1.0, np.array([1, 2, 4])), [1.0, 0.5, 0.25])


class TestOutOfDomain:

    def test_log_of_negative_is_nan(self):
        with np.errstate(all="ignore"):
            assert np.isnan(Power().transform_x(-1.0))
            assert np.isnan(Exponential().transform_y(-2.0))

    def test_division_by_zero_is_inf(self):
        with np.errstate(all="ignore"):
            assert np.isinf(OneOverX().transform_y(0.0))
            assert np.isinf(BOverX().transform_x(-1.0))

    def test_sqrt_of_negative_is_nan(self):
        with np.errstate(all="ignore"):
            assert np.isnan(Sqrt().transform_x(-4.0))
