"""Tests for profiles and configuration models."""

import numpy as np
import pytest
from pydantic import ValidationError

from chargefit.core.domain import (
    ChargeFitConfig,
    FitConfig,
    Profile,
    charge_uncertainty,
)


class TestProfile:
    """Tests for Profile."""

    def test_from_pairs_sorts(self) -> None:
        """Pairs should be sorted by position."""
        profile = Profile.from_pairs([(2.0, 5.0), (0.0, 1.0), (1.0, 3.0)])

        np.testing.assert_array_equal(profile.positions, [0.0, 1.0, 2.0])
        np.testing.assert_array_equal(profile.charges, [1.0, 3.0, 5.0])
        assert len(profile) == 3
        assert profile.max_charge == 5.0

    def test_mismatched_lengths_raise(self) -> None:
        """Constructing from mismatched arrays should raise."""
        with pytest.raises(ValueError, match="differ in length"):
            Profile(np.arange(3.0), np.arange(2.0))

    def test_empty_profile(self) -> None:
        """An empty profile should have zero max charge."""
        assert Profile.from_pairs([]).max_charge == 0.0


class TestChargeUncertainty:
    """Tests for charge_uncertainty."""

    def test_disabled_is_unit_weight(self) -> None:
        """Disabled weighting should give sigma = 1."""
        assert charge_uncertainty(200.0, enabled=False, min_uncertainty=1e-20) == 1.0

    def test_enabled_is_five_percent(self) -> None:
        """Enabled weighting should give 5% of the max charge."""
        assert charge_uncertainty(200.0, enabled=True, min_uncertainty=1e-20) == pytest.approx(10.0)

    def test_floor(self) -> None:
        """The uncertainty should never drop below the floor."""
        assert charge_uncertainty(0.0, enabled=True, min_uncertainty=1e-6) == 1e-6


class TestFitConfig:
    """Tests for FitConfig."""

    def test_defaults(self) -> None:
        """Defaults should be unweighted, unfiltered, plain-loss fitting."""
        config = FitConfig()

        assert not config.enable_charge_uncertainties
        assert config.min_uncertainty == 1e-20
        assert not config.outlier_filtering
        assert config.outlier_sigma == 2.5
        assert not config.robust_loss

    def test_rejects_non_positive_floor(self) -> None:
        """min_uncertainty must be positive."""
        with pytest.raises(ValidationError):
            FitConfig(min_uncertainty=0.0)

    def test_rejects_unknown_keys(self) -> None:
        """Unknown options should be rejected."""
        with pytest.raises(ValidationError):
            ChargeFitConfig.model_validate({"fitting": {"tolerance": 1.0}})

    def test_frozen(self) -> None:
        """FitConfig should be immutable."""
        config = FitConfig()
        with pytest.raises(ValidationError):
            config.verbose = True
