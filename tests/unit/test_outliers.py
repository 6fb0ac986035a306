"""Tests for MAD-based outlier rejection."""

import numpy as np
import pytest

from chargefit.core.algorithms.outliers import filter_profile_outliers, remove_outliers


class TestFilterProfileOutliers:
    """Tests for per-profile filtering."""

    def test_removes_spike(self, spiked_flat_profile) -> None:
        """A large spike should be dropped, then the widest survivors on re-clipping."""
        x, y = spiked_flat_profile
        fx, fy = filter_profile_outliers(x, y, sigma_threshold=2.5)

        assert 50.0 not in fy
        np.testing.assert_array_equal(fx, [0.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0])

    def test_clipping_repeats_until_stable(self) -> None:
        """Survivors of the first pass should be clipped again with updated statistics."""
        x = np.arange(8.0)
        y = np.array([1.0, 1.2, 1.4, 1.6, 2.0, 2.6, 4.0, 9.0])
        fx, fy = filter_profile_outliers(x, y, sigma_threshold=2.5)

        np.testing.assert_array_equal(fy, y[:6])
        gx, gy = filter_profile_outliers(fx, fy, sigma_threshold=2.5)
        np.testing.assert_array_equal(gx, fx)
        np.testing.assert_array_equal(gy, fy)

    @pytest.mark.parametrize("sigma_threshold", [2.5, 3.0, 4.0])
    def test_output_is_a_fixed_point(self, sigma_threshold) -> None:
        """Filtering already-filtered data should change nothing."""
        rng = np.random.default_rng(2024)
        for _ in range(200):
            n = int(rng.integers(5, 30))
            x = np.arange(n, dtype=float)
            y = rng.exponential(10.0, n)
            fx, fy = filter_profile_outliers(x, y, sigma_threshold)
            gx, gy = filter_profile_outliers(fx, fy, sigma_threshold)

            np.testing.assert_array_equal(gx, fx)
            np.testing.assert_array_equal(gy, fy)

    def test_short_profile_unchanged(self) -> None:
        """Profiles with fewer than 5 points should be returned as is."""
        x = np.arange(4.0)
        y = np.array([1.0, 1.0, 100.0, 1.0])
        fx, fy = filter_profile_outliers(x, y)

        np.testing.assert_array_equal(fx, x)
        np.testing.assert_array_equal(fy, y)

    def test_retries_with_lenient_multiplier(self) -> None:
        """Keeping fewer than half the points should trigger the k=4 pass."""
        x = np.arange(8.0)
        y = np.arange(1.0, 9.0)
        fx, _ = filter_profile_outliers(x, y, sigma_threshold=0.01)

        assert fx.size == 8

    def test_returns_original_when_too_few_survive(self) -> None:
        """Fewer than 5 survivors should give back the original data."""
        x = np.arange(6.0)
        y = np.array([0.0, 0.0, 0.0, 0.0, 1000.0, 100000.0])

        fx, _ = filter_profile_outliers(x, y, sigma_threshold=0.01)
        assert fx.size == 6

        fx, fy = filter_profile_outliers(x, y, sigma_threshold=2.5)
        assert fx.size == 5
        assert 100000.0 not in fy


class TestRemoveOutliers:
    """Tests for point-set outlier removal."""

    @staticmethod
    def _cloud() -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        charges = np.array([1.0 + 0.01 * i for i in range(17)] + [100.0, 120.0, 150.0])
        x = np.arange(20, dtype=float)
        return x, -x, charges

    def test_removes_spikes(self) -> None:
        """Large spikes should be removed and counted."""
        x, y, q = self._cloud()
        result = remove_outliers(x, y, q)

        assert result.success
        assert result.filtering_applied
        assert result.outliers_removed == 3
        assert result.charges.size == 17
        np.testing.assert_array_equal(result.x, x[:17])
        np.testing.assert_array_equal(result.y, y[:17])

    def test_disabled_returns_input(self) -> None:
        """Disabled removal should return the input untouched."""
        x, y, q = self._cloud()
        result = remove_outliers(x, y, q, enabled=False)

        assert result.success
        assert not result.filtering_applied
        assert result.outliers_removed == 0
        np.testing.assert_array_equal(result.charges, q)

    def test_short_input_unfiltered(self) -> None:
        """Fewer than 5 points should not be filtered."""
        result = remove_outliers([0.0, 1.0, 2.0], [0.0, 0.0, 0.0], [1.0, 1.0, 100.0])

        assert result.success
        assert not result.filtering_applied
        assert result.charges.size == 3

    def test_keeps_all_when_too_few_would_remain(self) -> None:
        """Removal leaving fewer than 5 points should be abandoned."""
        x = np.arange(6.0)
        q = np.array([0.0, 0.0, 0.0, 0.0, 1000.0, 100000.0])
        result = remove_outliers(x, x, q, sigma_threshold=0.01)

        assert result.success
        assert not result.filtering_applied
        assert result.charges.size == 6

    def test_mismatched_lengths(self) -> None:
        """Mismatched lengths should give an empty, unsuccessful result."""
        result = remove_outliers([0.0, 1.0], [0.0], [1.0, 2.0])

        assert not result.success
        assert result.x.size == 0
        assert result.charges.size == 0
