"""Test the power-law Lorentzian lineshape and its residual block."""

import numpy as np
import pytest

from chargefit.core.fitting.cost import PowerLorentzianCost
from chargefit.core.lineshapes import power_lorentzian, power_lorentzian_derivatives


def _numerical_jacobian(x, params, step=1e-6):
    jac = np.empty((x.size, 5))
    for i in range(5):
        up = np.array(params, dtype=float)
        down = np.array(params, dtype=float)
        up[i] += step
        down[i] -= step
        jac[:, i] = (power_lorentzian(x, *up) - power_lorentzian(x, *down)) / (2 * step)
    return jac


class TestPowerLorentzian:
    """Tests for power_lorentzian."""

    def test_peak_height(self):
        """Should be A + B at the center."""
        result = power_lorentzian(np.array([2.0]), 10.0, 2.0, 1.5, 1.7, 0.5)
        assert result[0] == pytest.approx(10.5)

    def test_half_maximum_for_unit_beta(self):
        """Should fall to A/2 + B at one half width for beta = 1."""
        result = power_lorentzian(np.array([-1.5, 1.5]), 10.0, 0.0, 1.5, 1.0, 0.5)
        np.testing.assert_allclose(result, [5.5, 5.5])

    def test_larger_beta_is_narrower(self):
        """Should decay faster for larger beta."""
        x = np.array([3.0])
        narrow = power_lorentzian(x, 1.0, 0.0, 1.0, 2.0, 0.0)
        wide = power_lorentzian(x, 1.0, 0.0, 1.0, 1.0, 0.0)
        assert narrow[0] < wide[0]

    def test_symmetry(self):
        """Should be symmetric around the center."""
        result = power_lorentzian(np.array([1.0, 5.0]), 3.0, 3.0, 0.8, 1.3, 0.0)
        assert result[0] == pytest.approx(result[1])

    def test_guards_keep_values_finite(self):
        """Should stay finite for zero width and zero exponent."""
        x = np.linspace(-2.0, 2.0, 5)
        assert np.all(np.isfinite(power_lorentzian(x, 1.0, 0.0, 0.0, 1.0, 0.0)))
        assert np.all(np.isfinite(power_lorentzian(x, 1.0, 0.0, 1.0, 0.0, 0.0)))

    def test_negative_gamma_same_as_positive(self):
        """Should depend on |gamma| only."""
        x = np.linspace(-3.0, 3.0, 7)
        np.testing.assert_allclose(
            power_lorentzian(x, 2.0, 0.1, -0.7, 1.2, 0.3),
            power_lorentzian(x, 2.0, 0.1, 0.7, 1.2, 0.3),
        )


class TestDerivatives:
    """Tests for the analytic derivatives."""

    @pytest.mark.parametrize(
        "params",
        [
            (10.0, 0.3, 1.5, 1.3, 0.5),
            (100.0, 5.0, 1.2, 1.0, 2.0),
            (3.0, -1.0, 0.6, 2.5, -0.2),
        ],
    )
    def test_match_finite_differences(self, params):
        """Should agree with central finite differences."""
        x = np.linspace(-3.0, 8.0, 23)
        analytic = power_lorentzian_derivatives(x, *params)
        numeric = _numerical_jacobian(x, params)
        np.testing.assert_allclose(analytic, numeric, rtol=1e-5, atol=1e-6)

    def test_shape(self):
        """Should return one column per parameter."""
        jac = power_lorentzian_derivatives(np.arange(7.0), 1.0, 3.0, 1.0, 1.0, 0.0)
        assert jac.shape == (7, 5)
        np.testing.assert_array_equal(jac[:, 4], 1.0)

    def test_negative_gamma_flips_width_derivative(self):
        """Should propagate the sign of gamma through |gamma|."""
        x = np.linspace(-2.0, 2.0, 5)
        pos = power_lorentzian_derivatives(x, 1.0, 0.0, 0.7, 1.0, 0.0)
        neg = power_lorentzian_derivatives(x, 1.0, 0.0, -0.7, 1.0, 0.0)
        np.testing.assert_allclose(neg[:, 2], -pos[:, 2])


class TestPowerLorentzianCost:
    """Tests for the residual block."""

    def test_residuals_are_weighted(self):
        """Should return (model - data) / sigma."""
        x = np.arange(5.0)
        params = np.array([4.0, 2.0, 1.0, 1.0, 1.0])
        data = power_lorentzian(x, *params) - 0.5
        cost = PowerLorentzianCost(x, data, sigma=0.25)

        np.testing.assert_allclose(cost.residuals(params), np.full(5, 2.0))

    def test_jacobian_is_weighted(self):
        """Should scale the derivatives by 1 / sigma."""
        x = np.arange(5.0)
        params = np.array([4.0, 2.0, 1.0, 1.0, 1.0])
        cost = PowerLorentzianCost(x, np.zeros(5), sigma=2.0)

        np.testing.assert_allclose(
            cost.jacobian(params), power_lorentzian_derivatives(x, *params) / 2.0
        )
