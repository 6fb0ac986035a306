"""Pytest fixtures for chargefit tests."""

import pytest

import numpy as np

from chargefit.core.fitting.session import SolverSession
from chargefit.core.lineshapes import power_lorentzian

# Reference profile used across the suite
TRUE_PARAMS = {"amplitude": 100.0, "center": 5.0, "gamma": 1.2, "beta": 1.0, "baseline": 2.0}


@pytest.fixture
def true_params():
    """Parameters of the reference profile."""
    return dict(TRUE_PARAMS)


@pytest.fixture
def reference_profile():
    """Noise-free 20-point Lorentzian profile (A=100, m=5, gamma=1.2, beta=1, B=2)."""
    x = np.arange(20, dtype=float)
    y = power_lorentzian(x, **TRUE_PARAMS)
    return x, y


@pytest.fixture
def spiked_flat_profile():
    """Nearly flat profile with a single large spike at the end."""
    x = np.arange(10, dtype=float)
    y = np.array([1.0, 1.1, 0.9, 1.0, 1.05, 0.95, 1.0, 1.02, 0.98, 50.0])
    return x, y


def make_grid_event(center_x, center_y, amplitude=100.0, gamma=1.0, baseline=1.0, half_width=4):
    """Square grid of samples of a separable Lorentzian charge cloud.

    Every row and column through a grid node is an exact Lorentzian along
    its direction, so axis fits have an exact solution.
    """
    coords = np.arange(-half_width, half_width + 1, dtype=float)
    xx, yy = np.meshgrid(coords, coords)
    x = xx.ravel()
    y = yy.ravel()
    q = (
        amplitude
        / (1.0 + ((x - center_x) / gamma) ** 2)
        / (1.0 + ((y - center_y) / gamma) ** 2)
        + baseline
    )
    return x, y, q


@pytest.fixture
def grid_event():
    """Factory fixture for separable grid events."""
    return make_grid_event


@pytest.fixture
def session():
    """Fresh solver session, isolated from the process-wide default."""
    return SolverSession("test")
