"""High-level fitting service facade.

This service provides the primary API for fitting operations.
CLI and other adapters should import only from this module.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from chargefit.core.algorithms.outliers import OutlierRemovalResult, remove_outliers
from chargefit.core.domain.config import FitConfig
from chargefit.core.fitting.session import SolverSession
from chargefit.core.results.fit_results import Aggregate2DResult, DiagonalResult
from chargefit.core.shared.reporter import Reporter, resolve_reporter
from chargefit.core.shared.typing import ArrayLike
from chargefit.services.fit.axes import fit_2d_power_lorentzian
from chargefit.services.fit.diagonals import fit_diagonal_power_lorentzian


@dataclass(frozen=True)
class EventFitResult:
    """Result of fitting one event.

    Attributes:
        axes: Row/column fits
        diagonals: Diagonal fits, None when not requested
        n_points: Number of input samples
    """

    axes: Aggregate2DResult
    diagonals: DiagonalResult | None
    n_points: int

    @property
    def success(self) -> bool:
        return self.axes.success and (self.diagonals is None or self.diagonals.success)

    def summary(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "n_points": self.n_points,
            "success": self.success,
            "axes": self.axes.to_dict(),
        }
        if self.diagonals is not None:
            data["diagonals"] = self.diagonals.to_dict()
        return data


class FitService:
    """Service for charge-distribution fitting operations.

    Example:
        service = FitService(FitConfig(enable_charge_uncertainties=True))
        result = service.fit_event(x, y, q, center_x=0.0, center_y=0.0, pixel_spacing=1.0)
        print(result.axes.x.center, result.axes.y.center)
    """

    def __init__(
        self,
        config: FitConfig | None = None,
        *,
        session: SolverSession | None = None,
        reporter: Reporter | None = None,
    ) -> None:
        """Initialize the fit service.

        Args:
            config: Fit configuration (defaults if not provided)
            session: Solver session shared by every fit of this service
            reporter: Reporter for status messages (default: logging when
                ``config.verbose``, else silent)
        """
        self.config = config or FitConfig()
        self._session = session
        self._reporter = resolve_reporter(reporter, self.config.verbose, "chargefit.service")

    @property
    def reporter(self) -> Reporter:
        return self._reporter

    def remove_outliers(
        self, x: ArrayLike, y: ArrayLike, charges: ArrayLike
    ) -> OutlierRemovalResult:
        """Point-set outlier removal with the configured threshold."""
        return remove_outliers(
            x,
            y,
            charges,
            enabled=True,
            sigma_threshold=self.config.outlier_sigma,
            reporter=self._reporter,
        )

    def fit_axes(
        self,
        x: ArrayLike,
        y: ArrayLike,
        charges: ArrayLike,
        center_x: float,
        center_y: float,
        pixel_spacing: float,
    ) -> Aggregate2DResult:
        """Fit the row and column through the center estimate."""
        return fit_2d_power_lorentzian(
            x,
            y,
            charges,
            center_x,
            center_y,
            pixel_spacing,
            config=self.config,
            session=self._session,
            reporter=self._reporter,
        )

    def fit_diagonals(
        self,
        x: ArrayLike,
        y: ArrayLike,
        charges: ArrayLike,
        center_x: float,
        center_y: float,
        pixel_spacing: float,
    ) -> DiagonalResult:
        """Fit both diagonals through the center estimate."""
        return fit_diagonal_power_lorentzian(
            x,
            y,
            charges,
            center_x,
            center_y,
            pixel_spacing,
            config=self.config,
            session=self._session,
            reporter=self._reporter,
        )

    def fit_event(
        self,
        x: ArrayLike,
        y: ArrayLike,
        charges: ArrayLike,
        center_x: float,
        center_y: float,
        pixel_spacing: float,
        *,
        diagonals: bool = True,
    ) -> EventFitResult:
        """Fit rows/columns and, optionally, diagonals of one event."""
        n_points = int(np.asarray(charges).size)
        self._reporter.action(f"Fitting event with {n_points} points")
        axes = self.fit_axes(x, y, charges, center_x, center_y, pixel_spacing)
        diagonal_result = (
            self.fit_diagonals(x, y, charges, center_x, center_y, pixel_spacing)
            if diagonals
            else None
        )
        result = EventFitResult(axes=axes, diagonals=diagonal_result, n_points=n_points)
        if result.success:
            self._reporter.success("Event fitted")
        else:
            self._reporter.warning("Event fit incomplete")
        return result


__all__ = ["EventFitResult", "FitService"]
