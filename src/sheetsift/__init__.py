"""SheetSift - locate and extract data tables from spreadsheet grids."""

from .errors import (
    EmptyWorkbookError,
    ExtractionError,
    InvalidForcedBoundsError,
    MissingHeadersError,
    RequiredFieldsNotResolvableError,
    UnsupportedFormatError,
)
from .extract import (
    BoundaryDetector,
    HeaderDriven,
    HeaderResolver,
    OutputOptions,
    RegionExtractor,
    RowFilter,
    StructuralOnly,
    extract,
    try_extract,
)
from .grid import ForcedBounds, ListGrid, TableBounds, open_grid, open_workbook

__version__ = "0.1.0"

__all__ = [
    "BoundaryDetector",
    "HeaderDriven",
    "HeaderResolver",
    "OutputOptions",
    "RegionExtractor",
    "RowFilter",
    "StructuralOnly",
    "extract",
    "try_extract",
    "ForcedBounds",
    "ListGrid",
    "TableBounds",
    "open_grid",
    "open_workbook",
    "ExtractionError",
    "EmptyWorkbookError",
    "InvalidForcedBoundsError",
    "MissingHeadersError",
    "RequiredFieldsNotResolvableError",
    "UnsupportedFormatError",
]
