"""Loading of (x, y, charge) point samples."""

from __future__ import annotations

from pathlib import Path

import numpy as np

from chargefit.core.shared.exceptions import DataIOError
from chargefit.core.shared.typing import FloatArray


def load_points(path: Path) -> tuple[FloatArray, FloatArray, FloatArray]:
    """Read a three-column text/CSV file of x, y, charge.

    Lines starting with ``#`` are comments. Files with a ``.csv`` suffix are
    comma separated, other files whitespace separated.

    Raises:
        DataIOError: If the file is missing, unreadable or not three columns.
    """
    if not path.exists():
        msg = f"Points file not found: {path}"
        raise DataIOError(msg)

    delimiter = "," if path.suffix.lower() == ".csv" else None
    try:
        data = np.loadtxt(path, delimiter=delimiter, comments="#", ndmin=2, dtype=float)
    except (OSError, ValueError) as exc:
        msg = f"Cannot read points from {path}: {exc}"
        raise DataIOError(msg) from exc

    if data.shape[1] != 3:
        msg = f"{path}: expected 3 columns (x, y, charge), got {data.shape[1]}"
        raise DataIOError(msg)
    return data[:, 0].copy(), data[:, 1].copy(), data[:, 2].copy()
