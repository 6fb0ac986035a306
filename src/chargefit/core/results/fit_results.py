"""Fit result value objects.

Every result is frozen and fully populated by a single call. Failed fits
carry zeroed parameters and ``success=False``; nothing is raised for bad
data.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from chargefit.core.domain.profile import Profile


@dataclass(frozen=True, slots=True)
class FitResult:
    """Power-law Lorentzian fit of one profile.

    Attributes:
        amplitude, center, gamma, beta, baseline: Fitted parameters
        *_err: 1-sigma uncertainties of the fitted parameters
        chi2_reduced: 2 * final cost / dof
        dof: max(1, n_points - 5), counted on the accepted dataset so that it
            matches the residuals behind chi2_reduced. After outlier filtering
            this is smaller than the size of the full row or column.
        pseudo_p_value: 1 - min(1, chi2_reduced / 10), 0 when chi2_reduced <= 0
        success: Whether an accepted fit was found
        n_points: Size of the dataset the fit was accepted on
        dataset: Name of the accepted dataset variant
        configuration: Index of the accepted solver configuration
        estimate_method: Tier of the initial estimate (0 if none)
        error_source: "covariance" or "heuristic"
        stage: "two-stage" or "single-stage"
    """

    amplitude: float = 0.0
    center: float = 0.0
    gamma: float = 0.0
    beta: float = 0.0
    baseline: float = 0.0
    amplitude_err: float = 0.0
    center_err: float = 0.0
    gamma_err: float = 0.0
    beta_err: float = 0.0
    baseline_err: float = 0.0
    chi2_reduced: float = 0.0
    dof: int = 0
    pseudo_p_value: float = 0.0
    success: bool = False
    n_points: int = 0
    dataset: str = ""
    configuration: int = -1
    estimate_method: int = 0
    error_source: str = ""
    stage: str = ""

    @classmethod
    def failed(cls, n_points: int = 0) -> FitResult:
        return cls(n_points=n_points)

    @property
    def values(self) -> tuple[float, float, float, float, float]:
        return (self.amplitude, self.center, self.gamma, self.beta, self.baseline)

    @property
    def errors(self) -> tuple[float, float, float, float, float]:
        return (
            self.amplitude_err,
            self.center_err,
            self.gamma_err,
            self.beta_err,
            self.baseline_err,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class Aggregate2DResult:
    """Row (X) and column (Y) fits of one event."""

    x: FitResult = field(default_factory=FitResult)
    y: FitResult = field(default_factory=FitResult)
    x_profile: Profile | None = None
    y_profile: Profile | None = None
    row_key: float | None = None
    column_key: float | None = None
    x_charge_uncertainty: float = 0.0
    y_charge_uncertainty: float = 0.0

    @property
    def success(self) -> bool:
        return self.x.success and self.y.success

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "x": self.x.to_dict(),
            "y": self.y.to_dict(),
            "x_profile": self.x_profile.to_dict() if self.x_profile else None,
            "y_profile": self.y_profile.to_dict() if self.y_profile else None,
            "row_key": self.row_key,
            "column_key": self.column_key,
            "x_charge_uncertainty": self.x_charge_uncertainty,
            "y_charge_uncertainty": self.y_charge_uncertainty,
        }


DIAGONAL_FITS = ("main_x", "main_y", "secondary_x", "secondary_y")


@dataclass(frozen=True, slots=True)
class DiagonalResult:
    """Fits along the main and secondary diagonals.

    Each diagonal is fitted twice (X and Y direction) on the same projected
    data.
    """

    main_x: FitResult = field(default_factory=FitResult)
    main_y: FitResult = field(default_factory=FitResult)
    secondary_x: FitResult = field(default_factory=FitResult)
    secondary_y: FitResult = field(default_factory=FitResult)
    main_profile: Profile | None = None
    secondary_profile: Profile | None = None

    @property
    def success(self) -> bool:
        return all(getattr(self, name).success for name in DIAGONAL_FITS)

    def fits(self) -> dict[str, FitResult]:
        return {name: getattr(self, name) for name in DIAGONAL_FITS}

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"success": self.success}
        data.update({name: fit.to_dict() for name, fit in self.fits().items()})
        data["main_profile"] = self.main_profile.to_dict() if self.main_profile else None
        data["secondary_profile"] = (
            self.secondary_profile.to_dict() if self.secondary_profile else None
        )
        return data
