"""Header resolution, boundary detection and region extraction."""

from .boundary import BoundaryDetector, detect_bounds
from .export import export_all_sheets, parse_separator, sheet_file_name, write_rows
from .filter import RowFilter, is_valid_row
from .header import HeaderResolver, resolve_header
from .models import (
    DEFAULT_SEPARATOR,
    BoundaryReport,
    DetectionThresholds,
    ExtractionMode,
    ExtractionOutcome,
    ExtractionResult,
    HeaderDriven,
    HeaderResolution,
    OutputOptions,
    StructuralOnly,
)
from .region import RegionExtractor, extract, project_row, try_extract

__all__ = [
    "BoundaryDetector",
    "detect_bounds",
    "HeaderResolver",
    "resolve_header",
    "RowFilter",
    "is_valid_row",
    "RegionExtractor",
    "extract",
    "try_extract",
    "project_row",
    "parse_separator",
    "write_rows",
    "export_all_sheets",
    "sheet_file_name",
    "DEFAULT_SEPARATOR",
    "BoundaryReport",
    "DetectionThresholds",
    "ExtractionMode",
    "ExtractionOutcome",
    "ExtractionResult",
    "HeaderDriven",
    "HeaderResolution",
    "OutputOptions",
    "StructuralOnly",
]
