"""Goodness-of-fit statistics."""

from __future__ import annotations

from chargefit.core.constants import N_MODEL_PARAMS, PSEUDO_P_VALUE_SCALE


def compute_degrees_of_freedom(n_data: int, n_params: int = N_MODEL_PARAMS) -> int:
    """Compute degrees of freedom, minimum of 1 to avoid division by zero."""
    return max(1, n_data - n_params)


def compute_reduced_chi_squared(
    chi_squared: float,
    n_data: int,
    n_params: int = N_MODEL_PARAMS,
) -> float:
    """Compute reduced chi-squared (chi_squared / dof)."""
    return chi_squared / compute_degrees_of_freedom(n_data, n_params)


def reduced_chi_squared_from_cost(cost: float, n_data: int) -> float:
    """Reduced chi-square from a solver cost (half the sum of squared residuals)."""
    return compute_reduced_chi_squared(2.0 * cost, n_data)


def pseudo_p_value(reduced_chi_squared: float) -> float:
    """Crude fit-quality score in [0, 1].

    1 - min(1, chi2_red / 10) for a positive reduced chi-square, else 0. This
    is not a statistical p-value.
    """
    if reduced_chi_squared > 0:
        return 1.0 - min(1.0, reduced_chi_squared / PSEUDO_P_VALUE_SCALE)
    return 0.0
