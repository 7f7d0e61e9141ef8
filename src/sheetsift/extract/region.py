"""Table region extraction: resolve the region, then stream projected rows."""

import logging
from typing import Iterator, Optional, Sequence

from ..errors import ExtractionError
from ..grid.cells import cell_at, clean_cell_data
from ..grid.models import CellGrid, ColumnIndexSet, TableBounds, iter_rows
from .boundary import BoundaryDetector
from .filter import RowFilter
from .header import HeaderResolver
from .models import (
    ExtractionOutcome,
    ExtractionResult,
    HeaderDriven,
    Mode,
    OutputOptions,
    StructuralOnly,
)

logger = logging.getLogger(__name__)


def project_row(row: Sequence[str], indexes: Sequence[int]) -> list[str]:
    """Pick ``indexes`` out of ``row`` in order; missing cells become blank."""
    return [cell_at(row, index) for index in indexes]


class RegionExtractor:
    """
    Produces the bounded, column-projected, row-filtered table of a grid.

    Region resolution runs eagerly inside ``extract`` so that failures are
    raised before any row is produced; the rows themselves are generated
    lazily, one at a time.
    """

    def __init__(self, options: Optional[OutputOptions] = None):
        self.options = options or OutputOptions()

    def extract(self, grid: CellGrid, mode: Mode) -> ExtractionResult:
        """
        Extract the table region of ``grid``.

        Args:
            grid: Source grid
            mode: HeaderDriven(alias_map, required_fields) or StructuralOnly(forced_bounds)

        Returns:
            ExtractionResult whose ``rows`` iterator yields the output rows

        Raises:
            RequiredFieldsNotResolvableError: header-driven mode, bad field set
            MissingHeadersError: header-driven mode, no qualifying header row
        """
        if isinstance(mode, HeaderDriven):
            return self._extract_by_headers(grid, mode)
        if isinstance(mode, StructuralOnly):
            return self._extract_by_structure(grid, mode)
        raise TypeError(f"Unsupported extraction mode: {type(mode).__name__}")

    def try_extract(self, grid: CellGrid, mode: Mode) -> ExtractionOutcome:
        """Like ``extract`` but returns failures as an outcome value."""
        try:
            result = self.extract(grid, mode)
        except ExtractionError as e:
            logger.info(f"Extraction failed ({e.kind}): {e}")
            return ExtractionOutcome(success=False, error=e)
        return ExtractionOutcome(success=True, result=result)

    def _extract_by_headers(self, grid: CellGrid, mode: HeaderDriven) -> ExtractionResult:
        resolution = HeaderResolver.from_mode(mode).resolve(grid)
        return ExtractionResult(
            mode=mode.extraction_mode,
            rows=self._emit_projected(grid, resolution.header_row, resolution.columns),
            header_row=resolution.header_row,
            columns=resolution.columns,
        )

    def _extract_by_structure(self, grid: CellGrid, mode: StructuralOnly) -> ExtractionResult:
        report = BoundaryDetector(mode.thresholds).detect_with_report(grid, mode.forced_bounds)
        return ExtractionResult(
            mode=mode.extraction_mode,
            rows=self._emit_slice(grid, report.bounds),
            bounds=report.bounds,
            warnings=list(report.warnings),
        )

    def _emit_projected(
        self, grid: CellGrid, header_row: int, columns: ColumnIndexSet
    ) -> Iterator[list[str]]:
        keep = RowFilter(columns.required_indexes)
        indexes = columns.matter_indexes

        yield self._finish(project_row(grid.row(header_row), indexes))

        skipped = 0
        for _, row in iter_rows(grid, start=header_row + 1):
            if not keep(row):
                skipped += 1
                continue
            yield self._finish(project_row(row, indexes))

        logger.debug(f"Skipped {skipped} rows with blank required cells")

    def _emit_slice(self, grid: CellGrid, bounds: TableBounds) -> Iterator[list[str]]:
        if grid.row_count() == 0:
            return
        for _, row in iter_rows(grid, bounds.start, bounds.end):
            yield self._finish(list(row))

    def _finish(self, cells: list[str]) -> list[str]:
        if self.options.clean_line_breaks:
            return [clean_cell_data(cell) for cell in cells]
        return cells


def extract(grid: CellGrid, mode: Mode, options: Optional[OutputOptions] = None) -> ExtractionResult:
    """Extract the table region of ``grid`` with a one-off extractor."""
    return RegionExtractor(options).extract(grid, mode)


def try_extract(
    grid: CellGrid, mode: Mode, options: Optional[OutputOptions] = None
) -> ExtractionOutcome:
    return RegionExtractor(options).try_extract(grid, mode)
