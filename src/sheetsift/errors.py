"""Exceptions raised while reading grids and extracting tables."""

from typing import Iterable


class ExtractionError(Exception):
    """Base class for expected extraction failures."""

    kind = "extraction_error"


class RequiredFieldsNotResolvableError(ExtractionError):
    """Raised when a required field has no alias mapping to it."""

    kind = "required_fields_not_resolvable"

    def __init__(self, missing_fields: Iterable[str]):
        self.missing_fields = sorted(missing_fields)
        super().__init__(
            "All required fields must be reachable through the alias map; "
            f"no alias resolves to: {', '.join(self.missing_fields)}"
        )


class MissingHeadersError(ExtractionError):
    """Raised when no row of the grid carries every required field."""

    kind = "missing_headers"


class InvalidForcedBoundsError(ExtractionError):
    """Raised when forced bounds fall outside the grid or are out of order."""

    kind = "invalid_forced_bounds"

    def __init__(self, start: int, end: int, row_count: int):
        self.start = start
        self.end = end
        self.row_count = row_count
        super().__init__(
            f"Forced bounds ({start}, {end}) are invalid for a grid of {row_count} rows"
        )


class UnsupportedFormatError(ExtractionError):
    """Raised when no grid reader accepts the input file."""

    kind = "unsupported_format"


class EmptyWorkbookError(ExtractionError):
    """Raised when a workbook contains no sheets."""

    kind = "empty_workbook"
