"""Tests for grouping point samples into rows, columns and diagonals."""

import numpy as np

from chargefit.core.algorithms.grouping import LineGroups, group_lines, select_line, split_diagonals


class TestLineGroups:
    """Tests for first-match line clustering."""

    def test_joins_within_tolerance(self) -> None:
        """Points closer than the tolerance should share the first key."""
        lines = LineGroups(0.1)
        for key in (0.0, 0.05, 0.09, 0.15):
            lines.add(key, key, 1.0)

        assert lines.keys == [0.0, 0.15]
        assert len(lines.samples[0.0]) == 3

    def test_first_match_scans_ascending_keys(self) -> None:
        """A point within tolerance of two keys should join the lower one."""
        lines = LineGroups(0.1)
        lines.add(0.18, 0.0, 1.0)
        lines.add(0.0, 1.0, 1.0)
        lines.add(0.09, 2.0, 1.0)

        assert lines.keys == [0.0, 0.18]
        assert len(lines.samples[0.0]) == 2
        assert len(lines.samples[0.18]) == 1

    def test_keys_never_move(self) -> None:
        """Joining points should not shift the key."""
        lines = LineGroups(0.1)
        lines.add(1.0, 0.0, 1.0)
        lines.add(1.08, 1.0, 1.0)

        assert lines.keys == [1.0]

    def test_profile_sorted_by_position(self) -> None:
        """Profiles should be ordered by position."""
        lines = LineGroups(0.1)
        for position, charge in ((3.0, 30.0), (1.0, 10.0), (2.0, 20.0)):
            lines.add(0.0, position, charge)

        profile = lines.profile(0.0)
        np.testing.assert_array_equal(profile.positions, [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(profile.charges, [10.0, 20.0, 30.0])


class TestGroupLines:
    """Tests for group_lines."""

    def test_rows_and_columns(self, grid_event) -> None:
        """A 9x9 grid should give 9 rows and 9 columns of 9 samples."""
        x, y, q = grid_event(0.0, 0.0)
        rows, columns = group_lines(x, y, q, pixel_spacing=1.0)

        assert len(rows) == 9
        assert len(columns) == 9
        assert all(len(samples) == 9 for samples in rows.samples.values())

    def test_skips_non_positive_charges(self) -> None:
        """Points with charge <= 0 should be ignored."""
        rows, columns = group_lines([0.0, 1.0, 2.0], [0.0, 0.0, 0.0], [1.0, 0.0, -1.0], 1.0)

        assert rows.samples[0.0] == [(0.0, 1.0)]
        assert columns.keys == [0.0]

    def test_tolerance_scales_with_pitch(self) -> None:
        """The merge tolerance should be 0.1 pitch."""
        rows, _ = group_lines([0.0, 1.0], [0.0, 0.5], [1.0, 1.0], pixel_spacing=10.0)

        assert rows.keys == [0.0]


class TestSelectLine:
    """Tests for select_line."""

    @staticmethod
    def _lines(counts: dict[float, int]) -> LineGroups:
        lines = LineGroups(0.1)
        for key, count in counts.items():
            for i in range(count):
                lines.add(key, float(i), 1.0)
        return lines

    def test_closest_line(self) -> None:
        """The closest line with at least 5 samples should be chosen."""
        lines = self._lines({-2.0: 5, 0.0: 4, 1.0: 6})

        assert select_line(lines, 0.2) == 1.0

    def test_ties_go_to_lower_key(self) -> None:
        """Equidistant lines should resolve to the lower key."""
        lines = self._lines({-1.0: 5, 1.0: 5})

        assert select_line(lines, 0.0) == -1.0

    def test_none_when_all_lines_short(self) -> None:
        """No line with 5 samples should give None."""
        lines = self._lines({0.0: 4, 1.0: 3})

        assert select_line(lines, 0.0) is None


class TestSplitDiagonals:
    """Tests for diagonal projection."""

    def test_projection_coordinates(self, grid_event) -> None:
        """Diagonal coordinates should be (dx + dy) / 2 and (dx - dy) / 2."""
        x, y, q = grid_event(0.0, 0.0, half_width=3)
        diagonals = split_diagonals(x, y, q, 0.0, 0.0, 1.0)

        np.testing.assert_array_equal(diagonals.main.positions, np.arange(-3.0, 4.0))
        np.testing.assert_array_equal(diagonals.secondary.positions, np.arange(-3.0, 4.0))

    def test_center_point_in_both(self) -> None:
        """A point on both diagonals should appear in both profiles."""
        diagonals = split_diagonals(
            [0.0, 1.0, 1.0], [0.0, 1.0, -1.0], [5.0, 2.0, 3.0], 0.0, 0.0, 1.0
        )

        assert len(diagonals.main) == 2
        assert len(diagonals.secondary) == 2
        assert 5.0 in diagonals.main.charges
        assert 5.0 in diagonals.secondary.charges

    def test_offset_center(self) -> None:
        """Coordinates should be measured from the center estimate."""
        diagonals = split_diagonals([2.0, 3.0], [1.0, 2.0], [1.0, 1.0], 2.0, 1.0, 1.0)

        np.testing.assert_array_equal(diagonals.main.positions, [0.0, 1.0])
        assert len(diagonals.secondary) == 1
