"""One-dimensional charge profiles."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from chargefit.core.constants import CHARGE_UNCERTAINTY_FRACTION
from chargefit.core.shared.typing import FloatArray


@dataclass(frozen=True, slots=True)
class Profile:
    """Ordered (position, charge) samples along one direction."""

    positions: FloatArray
    charges: FloatArray

    def __post_init__(self) -> None:
        positions = np.asarray(self.positions, dtype=float).ravel()
        charges = np.asarray(self.charges, dtype=float).ravel()
        if positions.shape != charges.shape:
            msg = f"positions ({positions.size}) and charges ({charges.size}) differ in length"
            raise ValueError(msg)
        object.__setattr__(self, "positions", positions)
        object.__setattr__(self, "charges", charges)

    @classmethod
    def from_pairs(cls, pairs: list[tuple[float, float]]) -> Profile:
        """Build a profile from (position, charge) pairs, sorted by position."""
        ordered = sorted(pairs)
        return cls(
            np.array([p for p, _ in ordered], dtype=float),
            np.array([q for _, q in ordered], dtype=float),
        )

    def __len__(self) -> int:
        return int(self.positions.size)

    @property
    def max_charge(self) -> float:
        return float(np.max(self.charges)) if len(self) else 0.0

    def to_dict(self) -> dict[str, list[float]]:
        return {"positions": self.positions.tolist(), "charges": self.charges.tolist()}


def charge_uncertainty(max_charge: float, *, enabled: bool, min_uncertainty: float) -> float:
    """Scalar residual weight shared by every sample of one profile.

    Returns 1 (unweighted least squares) when weighting is disabled, else 5%
    of the largest charge, floored at ``min_uncertainty``.
    """
    if not enabled:
        return 1.0
    return max(CHARGE_UNCERTAINTY_FRACTION * max_charge, min_uncertainty)
