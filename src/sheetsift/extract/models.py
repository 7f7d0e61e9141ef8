"""Data models for table extraction."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Union

from pydantic import BaseModel, Field, field_validator

from ..config import settings
from ..errors import ExtractionError
from ..grid.models import ColumnIndexSet, ForcedBounds, TableBounds

DEFAULT_SEPARATOR = ","


class ExtractionMode(str, Enum):
    """How the table region is located."""

    HEADER_DRIVEN = "header_driven"  # alias map + required fields
    STRUCTURAL = "structural"  # density / numeric heuristics


class DetectionThresholds(BaseModel):
    """Tuning constants for structural boundary detection."""

    min_header_cells: int = Field(default_factory=lambda: settings.min_header_cells, ge=1)
    max_header_numeric: int = Field(default_factory=lambda: settings.max_header_numeric, ge=0)
    footer_stop_divisor: int = Field(default_factory=lambda: settings.footer_stop_divisor, gt=0)
    extend_divisor: int = Field(default_factory=lambda: settings.extend_divisor, gt=0)

    def footer_limit(self, expected_cols: int) -> int:
        """Rows with fewer filled cells than this (but some) end the table."""
        return expected_cols // self.footer_stop_divisor

    def extend_limit(self, expected_cols: int) -> int:
        """Rows with at least this many filled cells belong to the table."""
        return expected_cols // self.extend_divisor


class OutputOptions(BaseModel):
    """Per-call output settings. Cells are emitted verbatim unless cleaning is requested."""

    separator: str = DEFAULT_SEPARATOR
    clean_line_breaks: bool = False

    @classmethod
    def from_settings(cls) -> "OutputOptions":
        return cls(
            separator=settings.csv_separator or DEFAULT_SEPARATOR,
            clean_line_breaks=settings.clean_line_breaks,
        )


class HeaderDriven(BaseModel):
    """Locate the table by matching header cells against known aliases."""

    alias_map: dict[str, str]
    required_fields: frozenset[str] = Field(default_factory=frozenset)

    @field_validator("alias_map")
    @classmethod
    def _lowercase_aliases(cls, value: dict[str, str]) -> dict[str, str]:
        aliases = {}
        for alias, canonical in value.items():
            alias = alias.strip().lower()
            if not alias:
                raise ValueError("aliases must not be blank")
            aliases[alias] = canonical
        return aliases

    @property
    def extraction_mode(self) -> ExtractionMode:
        return ExtractionMode.HEADER_DRIVEN

    def unresolvable_fields(self) -> set[str]:
        """Required fields that no alias maps to."""
        return set(self.required_fields) - set(self.alias_map.values())


class StructuralOnly(BaseModel):
    """Locate the table from cell density alone, unless bounds are forced."""

    forced_bounds: Optional[ForcedBounds] = None
    thresholds: DetectionThresholds = Field(default_factory=DetectionThresholds)

    @property
    def extraction_mode(self) -> ExtractionMode:
        return ExtractionMode.STRUCTURAL


Mode = Union[HeaderDriven, StructuralOnly]


class HeaderResolution(BaseModel):
    """Result of resolving the header row of a grid."""

    header_row: int
    header: list[str]
    columns: ColumnIndexSet

    @property
    def matter_indexes(self) -> list[int]:
        return self.columns.matter_indexes

    @property
    def required_indexes(self) -> list[int]:
        return self.columns.required_indexes


class BoundaryReport(BaseModel):
    """Bounds plus the evidence that produced them."""

    bounds: TableBounds
    header_candidate: Optional[int] = None  # Row picked in the candidate scan
    expected_cols: int = 0
    forced: bool = False  # Forced bounds were applied
    forced_rejected: bool = False  # Forced bounds were supplied but invalid
    reason: str = ""
    warnings: list[str] = Field(default_factory=list)


@dataclass
class ExtractionResult:
    """Output of an extraction call; ``rows`` is a lazy single-pass iterator."""

    mode: ExtractionMode
    rows: Iterator[list[str]]
    bounds: Optional[TableBounds] = None
    header_row: Optional[int] = None
    columns: Optional[ColumnIndexSet] = None
    warnings: list[str] = field(default_factory=list)


@dataclass
class ExtractionOutcome:
    """Explicit success/failure value returned by ``try_extract``."""

    success: bool
    result: Optional[ExtractionResult] = None
    error: Optional[ExtractionError] = None

    @property
    def error_kind(self) -> Optional[str]:
        return self.error.kind if self.error is not None else None

    @property
    def message(self) -> str:
        return str(self.error) if self.error is not None else ""
