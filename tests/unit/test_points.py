"""Test loading of point samples."""

import numpy as np
import pytest

from chargefit.core.shared.exceptions import DataIOError
from chargefit.io.points import load_points


class TestLoadPoints:
    """Tests for load_points."""

    def test_csv(self, tmp_path):
        """Should read comma-separated files with comments."""
        path = tmp_path / "points.csv"
        path.write_text("# x,y,q\n0,0,1.5\n1,0,2.5\n")
        x, y, q = load_points(path)

        np.testing.assert_array_equal(x, [0.0, 1.0])
        np.testing.assert_array_equal(y, [0.0, 0.0])
        np.testing.assert_array_equal(q, [1.5, 2.5])

    def test_whitespace(self, tmp_path):
        """Should read whitespace-separated text files."""
        path = tmp_path / "points.txt"
        path.write_text("0 0 1\n")
        x, _, q = load_points(path)

        assert x.shape == (1,)
        assert q[0] == 1.0

    def test_missing_file(self, tmp_path):
        """Should raise DataIOError for a missing file."""
        with pytest.raises(DataIOError, match="not found"):
            load_points(tmp_path / "missing.csv")

    def test_wrong_column_count(self, tmp_path):
        """Should raise DataIOError unless there are three columns."""
        path = tmp_path / "points.csv"
        path.write_text("0,1\n2,3\n")
        with pytest.raises(DataIOError, match="3 columns"):
            load_points(path)

    def test_unparseable(self, tmp_path):
        """Should raise DataIOError for non-numeric content."""
        path = tmp_path / "points.csv"
        path.write_text("a,b,c\n")
        with pytest.raises(DataIOError):
            load_points(path)
