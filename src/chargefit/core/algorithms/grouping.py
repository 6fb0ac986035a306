"""Grouping of 2-D point samples into 1-D profiles.

Rows and columns are built by first-match clustering: each point joins the
first existing line, scanning keys in ascending order, whose key lies
strictly within the tolerance of the point's coordinate. Otherwise it starts
a new line keyed by its own coordinate. Keys never move once created.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field

import numpy as np

from chargefit.core.constants import DIAGONAL_TOLERANCE, LINE_GROUPING_TOLERANCE, MIN_FIT_POINTS
from chargefit.core.domain.profile import Profile
from chargefit.core.shared.typing import ArrayLike


@dataclass(slots=True)
class LineGroups:
    """Lines of (position, charge) samples keyed by their cross coordinate."""

    tolerance: float
    keys: list[float] = field(default_factory=list)
    samples: dict[float, list[tuple[float, float]]] = field(default_factory=dict)

    def add(self, key: float, position: float, charge: float) -> None:
        for existing in self.keys:
            if abs(key - existing) < self.tolerance:
                self.samples[existing].append((position, charge))
                return
        bisect.insort(self.keys, key)
        self.samples[key] = [(position, charge)]

    def __len__(self) -> int:
        return len(self.keys)

    def profile(self, key: float) -> Profile:
        """Samples of one line, sorted by position."""
        return Profile.from_pairs(self.samples[key])


def group_lines(
    x: ArrayLike,
    y: ArrayLike,
    charges: ArrayLike,
    pixel_spacing: float,
) -> tuple[LineGroups, LineGroups]:
    """Cluster positive-charge points into rows (keyed by y) and columns (keyed by x)."""
    tolerance = LINE_GROUPING_TOLERANCE * pixel_spacing
    rows = LineGroups(tolerance)
    columns = LineGroups(tolerance)
    for xi, yi, qi in zip(
        np.asarray(x, dtype=float), np.asarray(y, dtype=float), np.asarray(charges, dtype=float)
    ):
        if not qi > 0:
            continue
        rows.add(float(yi), float(xi), float(qi))
        columns.add(float(xi), float(yi), float(qi))
    return rows, columns


def select_line(lines: LineGroups, target: float) -> float | None:
    """Key of the line with at least 5 samples closest to ``target``.

    Ties go to the lower key. Returns None when no line is long enough.
    """
    best_key = None
    best_distance = np.inf
    for key in lines.keys:
        if len(lines.samples[key]) < MIN_FIT_POINTS:
            continue
        distance = abs(key - target)
        if distance < best_distance:
            best_key, best_distance = key, distance
    return best_key


@dataclass(frozen=True, slots=True)
class DiagonalProfiles:
    """Projections of a point set onto the two diagonals through a center."""

    main: Profile
    secondary: Profile


def split_diagonals(
    x: ArrayLike,
    y: ArrayLike,
    charges: ArrayLike,
    center_x: float,
    center_y: float,
    pixel_spacing: float,
) -> DiagonalProfiles:
    """Project positive-charge points near either diagonal onto it.

    With dx = x - center_x and dy = y - center_y, a point is on the main
    diagonal when |dx - dy| < 0.5 * pitch (coordinate (dx + dy) / 2) and on the
    secondary diagonal when |dx + dy| < 0.5 * pitch (coordinate (dx - dy) / 2).
    A point may belong to both.
    """
    tolerance = DIAGONAL_TOLERANCE * pixel_spacing
    main: list[tuple[float, float]] = []
    secondary: list[tuple[float, float]] = []
    for xi, yi, qi in zip(
        np.asarray(x, dtype=float), np.asarray(y, dtype=float), np.asarray(charges, dtype=float)
    ):
        if not qi > 0:
            continue
        dx = float(xi) - center_x
        dy = float(yi) - center_y
        if abs(dx - dy) < tolerance:
            main.append(((dx + dy) / 2.0, float(qi)))
        if abs(dx + dy) < tolerance:
            secondary.append(((dx - dy) / 2.0, float(qi)))
    return DiagonalProfiles(Profile.from_pairs(main), Profile.from_pairs(secondary))
