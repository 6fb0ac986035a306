"""Tests for the bounded least-squares solver facade and covariance estimation."""

import numpy as np
import pytest

from chargefit.core.fitting.cost import PowerLorentzianCost
from chargefit.core.fitting.solver import (
    CovarianceAlgorithm,
    LinearSolver,
    SolverOptions,
    TerminationType,
    TrustRegion,
    compute_covariance,
    solve,
)
from chargefit.core.lineshapes import power_lorentzian

TRUE = np.array([100.0, 5.0, 1.2, 1.0, 2.0])
LOWER = np.array([1.0, 2.0, 0.05, 0.2, -50.0])
UPPER = np.array([150.0, 8.0, 4.0, 4.0, 50.0])


@pytest.fixture
def problem():
    x = np.arange(20, dtype=float)
    return PowerLorentzianCost(x, power_lorentzian(x, *TRUE))


class TestSolve:
    """Tests for solve."""

    @pytest.mark.parametrize(
        ("trust_region", "linear_solver"),
        [
            (TrustRegion.LEVENBERG_MARQUARDT, LinearSolver.DENSE_QR),
            (TrustRegion.DOGLEG, LinearSolver.DENSE_QR),
            (TrustRegion.LEVENBERG_MARQUARDT, LinearSolver.SPARSE_NORMAL_CHOLESKY),
        ],
    )
    def test_converges_on_exact_data(self, problem, trust_region, linear_solver) -> None:
        """Should recover the generating parameters from a nearby start."""
        options = SolverOptions(linear_solver=linear_solver, trust_region=trust_region)
        x0 = np.array([90.0, 5.3, 1.0, 1.0, 2.5])
        summary = solve(problem, x0, LOWER, UPPER, options)

        assert summary.termination is TerminationType.CONVERGENCE
        assert summary.converged
        np.testing.assert_allclose(summary.x, TRUE, rtol=1e-4, atol=1e-4)
        assert summary.jacobian is not None
        assert summary.jacobian.shape == (20, 5)

    def test_iteration_limit_is_no_convergence(self, problem) -> None:
        """Running out of evaluations should report NO_CONVERGENCE."""
        x0 = np.array([50.0, 6.0, 2.0, 1.0, 10.0])
        summary = solve(problem, x0, LOWER, UPPER, SolverOptions(max_iterations=1))

        assert summary.termination is TerminationType.NO_CONVERGENCE
        assert not summary.converged

    def test_non_positive_iterations_is_failure(self, problem) -> None:
        """An invalid iteration count should report FAILURE without raising."""
        x0 = np.array([90.0, 5.0, 1.0, 1.0, 2.0])
        summary = solve(problem, x0, LOWER, UPPER, SolverOptions(max_iterations=0))

        assert summary.termination is TerminationType.FAILURE
        np.testing.assert_array_equal(summary.x, x0)

    def test_infeasible_start_is_failure(self, problem) -> None:
        """A start outside the bounds should report FAILURE."""
        x0 = np.array([500.0, 5.0, 1.0, 1.0, 2.0])
        summary = solve(problem, x0, LOWER, UPPER, SolverOptions())

        assert summary.termination is TerminationType.FAILURE
        assert summary.message


class TestComputeCovariance:
    """Tests for compute_covariance."""

    @staticmethod
    def _jacobian() -> np.ndarray:
        return np.vstack([np.diag([1.0, 2.0, 3.0, 4.0, 5.0]), np.zeros((5, 5))])

    @pytest.mark.parametrize("algorithm", list(CovarianceAlgorithm))
    def test_full_rank_inverse(self, algorithm) -> None:
        """Should equal (J^T J)^-1 for a well-conditioned Jacobian."""
        covariance = compute_covariance(self._jacobian(), algorithm, 1e-14)

        np.testing.assert_allclose(np.diag(covariance), [1.0, 1 / 4, 1 / 9, 1 / 16, 1 / 25])

    def test_svd_drops_null_space(self) -> None:
        """Should drop the smallest singular directions."""
        covariance = compute_covariance(
            self._jacobian(), CovarianceAlgorithm.DENSE_SVD, 1e-14, null_space_rank=2
        )

        np.testing.assert_allclose(
            np.diag(covariance), [0.0, 0.0, 1 / 9, 1 / 16, 1 / 25], atol=1e-12
        )

    @pytest.mark.parametrize("algorithm", list(CovarianceAlgorithm))
    def test_rank_deficient_returns_none(self, algorithm) -> None:
        """Should report failure for a singular Jacobian."""
        jac = self._jacobian()
        jac[:, 2] = 0.0

        assert compute_covariance(jac, algorithm, 1e-14) is None

    def test_condition_threshold(self) -> None:
        """Should fail when the retained spectrum is too ill-conditioned."""
        jac = np.vstack([np.diag([1.0, 1e-4, 1.0, 1.0, 1.0]), np.zeros((5, 5))])

        assert compute_covariance(jac, CovarianceAlgorithm.DENSE_SVD, 1e-10) is not None
        assert compute_covariance(jac, CovarianceAlgorithm.DENSE_SVD, 1e-6) is None

    def test_missing_jacobian(self) -> None:
        """Should return None without a Jacobian."""
        assert compute_covariance(None, CovarianceAlgorithm.DENSE_SVD, 1e-14) is None

    def test_underdetermined_jacobian(self) -> None:
        """Should return None with fewer residuals than parameters."""
        assert compute_covariance(np.ones((3, 5)), CovarianceAlgorithm.SPARSE_QR, 1e-14) is None
