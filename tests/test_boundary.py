"""Tests for structural table boundary detection."""

from unittest.mock import patch

import pytest

from sheetsift.extract import BoundaryDetector, DetectionThresholds, detect_bounds
from sheetsift.grid import ForcedBounds, ListGrid, TableBounds


def _wide_row(prefix: str, width: int = 9) -> list[str]:
    return [f"{prefix}{i}" for i in range(width)]


def _data_row(width: int = 9) -> list[str]:
    return [str(i * 10) for i in range(width)]


@pytest.fixture
def detector(default_thresholds) -> BoundaryDetector:
    return BoundaryDetector(default_thresholds)


class TestHeaderCandidate:
    """Tests for the header candidate scan."""

    def test_densest_text_row_wins(self, detector):
        """Test the densest mostly-text row is picked."""
        grid = ListGrid(
            [
                ["Contact", "Phone", "Email", "Fax", "Web"],
                _wide_row("h"),
                _data_row(),
            ]
        )

        assert detector.find_header_candidate(grid) == (1, 9)

    def test_ties_go_to_first_row(self, detector):
        """Test the earliest of equally dense candidates wins."""
        grid = ListGrid([_wide_row("a", 6), _wide_row("b", 6)])

        assert detector.find_header_candidate(grid) == (0, 6)

    def test_numeric_rows_are_not_candidates(self, detector):
        """Test rows with more than one number are skipped."""
        grid = ListGrid([["a", "b", "c", "1", "2", "3"]])

        assert detector.find_header_candidate(grid) == (None, 0)

    def test_one_number_is_tolerated(self, detector):
        """Test a header may hold a single numeric cell (e.g. a year)."""
        grid = ListGrid([["Region", "Product", "2024", "Plan", "Actual"]])

        assert detector.find_header_candidate(grid) == (0, 5)

    def test_sparse_rows_are_not_candidates(self, detector):
        """Test rows below the minimum filled cell count are skipped."""
        grid = ListGrid([["a", "b", "c", "d", "", ""]])

        assert detector.find_header_candidate(grid) == (None, 0)


class TestDetect:
    """Tests for full boundary detection."""

    def test_title_table_and_footer(self, detector, noisy_report_grid):
        """Test a contact line, a five-column table and a sparse total row."""
        assert detector.detect(noisy_report_grid) == TableBounds(start=1, end=3)

    def test_footer_row_stops_table(self, detector):
        """Test a sparse summary row ends the table and excludes what follows."""
        grid = ListGrid(
            [
                _wide_row("h"),
                _data_row(),
                _data_row(),
                ["Total", "90", ""],
                _data_row(),
            ]
        )

        assert detector.detect(grid).as_tuple() == (0, 2)

    def test_blank_row_stops_table(self, detector):
        """Test a blank row terminates the table."""
        grid = ListGrid(
            [
                _wide_row("h"),
                _data_row(),
                ["", "", ""],
                _data_row(),
            ]
        )

        assert detector.detect(grid).as_tuple() == (0, 1)

    def test_noise_rows_are_tolerated(self, detector):
        """Test rows between the stop and extend limits neither end nor extend the table."""
        noise = ["a", "b", "c", "", "", "", "", "", ""]
        grid = ListGrid(
            [
                _wide_row("h"),
                _data_row(),
                noise,
                _data_row(),
                noise,
            ]
        )

        report = detector.detect_with_report(grid)

        assert report.bounds.as_tuple() == (0, 3)
        assert report.header_candidate == 0
        assert report.expected_cols == 9

    def test_table_runs_to_last_row(self, detector):
        """Test a table without footer extends to the end of the grid."""
        grid = ListGrid([["Title"], _wide_row("h"), _data_row(), _data_row()])

        assert detector.detect(grid).as_tuple() == (1, 3)

    def test_no_candidate_falls_back_to_first_data_row(self, detector):
        """Test the fallback span when no header candidate exists."""
        grid = ListGrid([["", ""], ["x", "1"], ["y", "2"], [""]])

        report = detector.detect_with_report(grid)

        assert report.bounds.as_tuple() == (1, 3)
        assert report.header_candidate is None

    def test_grid_without_data(self, detector):
        """Test a grid of blank rows yields (0, 0)."""
        grid = ListGrid([["", " "], []])

        assert detector.detect(grid).as_tuple() == (0, 0)

    def test_empty_grid(self, detector):
        """Test an empty grid yields (0, 0)."""
        assert detector.detect(ListGrid([])).as_tuple() == (0, 0)

    def test_bounds_always_valid(self, detector):
        """Test detected bounds stay inside the grid for assorted shapes."""
        grids = [
            [["a"]],
            [_wide_row("h")],
            [_data_row(), _data_row()],
            [[], _wide_row("h"), [], _data_row()],
            [["Total"], _wide_row("h", 5), ["1", "2", "3", "4", "5"], ["x"]],
        ]
        for rows in grids:
            bounds = detector.detect(ListGrid(rows))
            assert 0 <= bounds.start <= bounds.end < len(rows)

    def test_custom_thresholds(self):
        """Test that thresholds change the outcome."""
        grid = ListGrid([["a", "b", "c"], ["1", "2", "3"]])

        assert detect_bounds(grid, thresholds=DetectionThresholds(min_header_cells=5)).as_tuple() == (0, 1)
        loose = DetectionThresholds(min_header_cells=3, max_header_numeric=0)
        assert detect_bounds(grid, thresholds=loose).as_tuple() == (0, 1)

        strict_extend = DetectionThresholds(min_header_cells=3, extend_divisor=1, footer_stop_divisor=1)
        grid = ListGrid([["a", "b", "c"], ["1", "2", ""], ["4", "5", "6"]])
        assert detect_bounds(grid, thresholds=strict_extend).as_tuple() == (0, 0)

    def test_blank_row_stops_table_when_extend_limit_is_zero(self):
        """Test a blank row ends the table even when any row would extend it."""
        thresholds = DetectionThresholds(
            min_header_cells=5, max_header_numeric=1, footer_stop_divisor=3, extend_divisor=6
        )
        grid = ListGrid(
            [
                ["a", "b", "c", "d", "e"],
                ["1", "2", "3", "4", "5"],
                [""] * 5,
                ["6", "7", "8", "9", "10"],
                [""] * 5,
            ]
        )

        assert thresholds.extend_limit(5) == 0
        assert detect_bounds(grid, thresholds=thresholds).as_tuple() == (0, 1)

    def test_blank_row_stops_single_column_table(self):
        """Test a one-cell header with a zero footer limit still stops at a blank row."""
        thresholds = DetectionThresholds(
            min_header_cells=1, max_header_numeric=1, footer_stop_divisor=3, extend_divisor=2
        )
        grid = ListGrid([["Title"], [""], ["noise"], [""]])

        assert detect_bounds(grid, thresholds=thresholds).as_tuple() == (0, 0)


class TestForcedBounds:
    """Tests for caller-forced bounds."""

    def test_valid_forced_bounds_skip_detection(self, detector, noisy_report_grid):
        """Test forced bounds are returned verbatim without running heuristics."""
        with patch.object(BoundaryDetector, "find_header_candidate") as candidate:
            report = detector.detect_with_report(noisy_report_grid, ForcedBounds(start=0, end=4))

        candidate.assert_not_called()
        assert report.bounds.as_tuple() == (0, 4)
        assert report.forced is True
        assert report.forced_rejected is False

    @pytest.mark.parametrize(
        "start,end",
        [(-1, 2), (3, 2), (0, 5), (7, 9)],
    )
    def test_invalid_forced_bounds_fall_back(self, detector, noisy_report_grid, start, end):
        """Test invalid forced bounds are reported and detection runs instead."""
        report = detector.detect_with_report(noisy_report_grid, ForcedBounds(start=start, end=end))

        assert report.bounds.as_tuple() == (1, 3)
        assert report.forced is False
        assert report.forced_rejected is True
        assert len(report.warnings) == 1
        assert "invalid" in report.warnings[0]

    def test_forced_bounds_on_empty_grid_rejected(self, detector):
        """Test that any forced span is invalid on an empty grid."""
        report = detector.detect_with_report(ListGrid([]), ForcedBounds(start=0, end=0))

        assert report.forced_rejected is True
        assert report.bounds.as_tuple() == (0, 0)

    def test_from_optional_requires_both(self):
        """Test forced bounds are only built when both ends are given."""
        assert ForcedBounds.from_optional(1, None) is None
        assert ForcedBounds.from_optional(None, 2) is None
        assert ForcedBounds.from_optional(1, 2) == ForcedBounds(start=1, end=2)
