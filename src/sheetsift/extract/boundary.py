"""Structural detection of table boundaries inside a noisy grid."""

import logging
from typing import Optional

from ..errors import InvalidForcedBoundsError
from ..grid.cells import count_non_empty, count_numeric, has_data
from ..grid.models import CellGrid, ForcedBounds, TableBounds
from .models import BoundaryReport, DetectionThresholds

logger = logging.getLogger(__name__)


class BoundaryDetector:
    """
    Infers where tabular data starts and ends using only cell density and
    numeric content.

    The header row is the densest mostly-text row. The table then extends
    downward over rows that keep a comparable number of filled cells and
    stops at the first blank row or at a sparse footer/summary row.
    """

    def __init__(self, thresholds: Optional[DetectionThresholds] = None):
        self.thresholds = thresholds or DetectionThresholds()

    def detect(self, grid: CellGrid, forced: Optional[ForcedBounds] = None) -> TableBounds:
        """Return the inclusive (start, end) span of the table."""
        return self.detect_with_report(grid, forced).bounds

    def detect_with_report(
        self, grid: CellGrid, forced: Optional[ForcedBounds] = None
    ) -> BoundaryReport:
        """
        Detect table bounds and describe how they were found.

        Valid forced bounds are returned verbatim without running any
        heuristic. Invalid forced bounds are reported as a warning and
        detection falls back to inference.
        """
        row_count = grid.row_count()
        warnings: list[str] = []

        if forced is not None:
            try:
                bounds = forced.validate_for(row_count)
            except InvalidForcedBoundsError as e:
                logger.warning(f"{e}; falling back to automatic detection")
                warnings.append(str(e))
            else:
                logger.info(f"Using manual boundaries: rows {bounds.start + 1} to {bounds.end + 1}")
                return BoundaryReport(bounds=bounds, forced=True, reason="forced")

        report = self._infer(grid, row_count)
        report.forced_rejected = bool(warnings)
        report.warnings = warnings
        return report

    def find_header_candidate(self, grid: CellGrid) -> tuple[Optional[int], int]:
        """
        Find the row most likely to hold column headers.

        A candidate has at least ``min_header_cells`` filled cells and at
        most ``max_header_numeric`` numeric ones. The densest candidate wins;
        ties go to the earliest row.

        Returns:
            (row index or None, filled cell count of that row)
        """
        header_row = None
        max_non_empty = 0

        for index in range(grid.row_count()):
            row = grid.row(index)
            non_empty = count_non_empty(row)
            if non_empty < self.thresholds.min_header_cells or non_empty <= max_non_empty:
                continue
            if count_numeric(row) > self.thresholds.max_header_numeric:
                continue
            header_row = index
            max_non_empty = non_empty

        return header_row, max_non_empty

    def find_table_end(self, grid: CellGrid, header_row: int, expected_cols: int) -> int:
        """Walk down from the header and return the last row that belongs to the table."""
        footer_limit = self.thresholds.footer_limit(expected_cols)
        extend_limit = self.thresholds.extend_limit(expected_cols)
        last_good_row = header_row

        for index in range(header_row + 1, grid.row_count()):
            non_empty = count_non_empty(grid.row(index))

            if non_empty == 0:
                logger.debug(f"Stopping at row {index + 1} - blank row")
                break

            if non_empty < footer_limit:
                logger.debug(
                    f"Stopping at row {index + 1} - footer detected "
                    f"({non_empty} cols vs expected {expected_cols})"
                )
                break

            if non_empty >= extend_limit:
                last_good_row = index

        return last_good_row

    def _infer(self, grid: CellGrid, row_count: int) -> BoundaryReport:
        if row_count == 0:
            return BoundaryReport(bounds=TableBounds(start=0, end=0), reason="empty grid")

        header_row, expected_cols = self.find_header_candidate(grid)

        if header_row is None:
            for index in range(row_count):
                if has_data(grid.row(index)):
                    logger.info(f"No header candidate, using rows {index + 1} to {row_count}")
                    return BoundaryReport(
                        bounds=TableBounds(start=index, end=row_count - 1),
                        reason="no header candidate, first row with data to last row",
                    )
            return BoundaryReport(bounds=TableBounds(start=0, end=0), reason="grid has no data")

        logger.info(f"Found header row at {header_row + 1} with {expected_cols} non-empty cells")
        end = self.find_table_end(grid, header_row, expected_cols)
        logger.info(f"Detected table boundaries: start row {header_row + 1}, end row {end + 1}")

        return BoundaryReport(
            bounds=TableBounds(start=header_row, end=end),
            header_candidate=header_row,
            expected_cols=expected_cols,
            reason="header candidate",
        )


def detect_bounds(
    grid: CellGrid,
    forced: Optional[ForcedBounds] = None,
    thresholds: Optional[DetectionThresholds] = None,
) -> TableBounds:
    """Detect table bounds with the given (or default) thresholds."""
    return BoundaryDetector(thresholds).detect(grid, forced)
