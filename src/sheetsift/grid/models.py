"""Data models for in-memory cell grids."""

from typing import Iterator, Optional, Protocol, Sequence, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..errors import InvalidForcedBoundsError


@runtime_checkable
class CellGrid(Protocol):
    """Random-access view over a fully materialised sheet of text cells."""

    def row_count(self) -> int:
        ...

    def row(self, index: int) -> Sequence[str]:
        ...


class ListGrid:
    """A CellGrid backed by a list of rows."""

    def __init__(self, rows: Sequence[Sequence[str]], name: Optional[str] = None):
        self._rows = rows
        self.name = name

    def row_count(self) -> int:
        return len(self._rows)

    def row(self, index: int) -> Sequence[str]:
        return self._rows[index]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Sequence[str]]:
        return iter(self._rows)

    def __repr__(self) -> str:
        return f"ListGrid(name={self.name!r}, rows={len(self._rows)})"


def iter_rows(grid: CellGrid, start: int = 0, end: Optional[int] = None) -> Iterator[tuple[int, Sequence[str]]]:
    """Yield ``(index, row)`` pairs for ``start <= index <= end`` (inclusive)."""
    last = grid.row_count() - 1 if end is None else end
    for index in range(start, last + 1):
        yield index, grid.row(index)


class TableBounds(BaseModel):
    """Inclusive row span of a detected or forced data table."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> "TableBounds":
        if self.end < self.start:
            raise ValueError(f"end ({self.end}) must not precede start ({self.start})")
        return self

    def as_tuple(self) -> tuple[int, int]:
        return self.start, self.end


class ForcedBounds(BaseModel):
    """Caller-supplied table span that bypasses structural detection."""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int

    def validate_for(self, row_count: int) -> TableBounds:
        """
        Check the bounds against a grid size.

        Raises:
            InvalidForcedBoundsError: if the span is out of order or out of range
        """
        if self.start < 0 or self.end < self.start or self.end >= row_count:
            raise InvalidForcedBoundsError(self.start, self.end, row_count)
        return TableBounds(start=self.start, end=self.end)

    @classmethod
    def from_optional(cls, start: Optional[int], end: Optional[int]) -> Optional["ForcedBounds"]:
        """Build forced bounds only when both ends are supplied."""
        if start is None or end is None:
            return None
        return cls(start=start, end=end)


class ColumnIndexSet(BaseModel):
    """Columns resolved from a header row."""

    # Every non-blank header column, in column order
    matter_indexes: list[int] = Field(default_factory=list)
    # Columns bound to required fields, in binding order
    required_indexes: list[int] = Field(default_factory=list)
    # Canonical field -> column that satisfied it
    field_columns: dict[str, int] = Field(default_factory=dict)
