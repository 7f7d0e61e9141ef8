"""Header row resolution driven by an alias map."""

import logging
from typing import Iterable, Optional, Sequence

from ..errors import MissingHeadersError, RequiredFieldsNotResolvableError
from ..grid.cells import is_blank
from ..grid.models import CellGrid, ColumnIndexSet
from .models import HeaderDriven, HeaderResolution

logger = logging.getLogger(__name__)


class HeaderResolver:
    """Finds the header row and the columns that carry the caller's fields."""

    def __init__(self, alias_map: dict[str, str], required_fields: Iterable[str] = ()):
        """
        Initialize the resolver.

        Args:
            alias_map: Lowercase substring alias -> canonical field name
            required_fields: Canonical fields that must all be located

        Raises:
            RequiredFieldsNotResolvableError: if a required field has no alias
        """
        self.mode = HeaderDriven(alias_map=alias_map, required_fields=frozenset(required_fields))

        missing = self.mode.unresolvable_fields()
        if missing:
            raise RequiredFieldsNotResolvableError(missing)

    @classmethod
    def from_mode(cls, mode: HeaderDriven) -> "HeaderResolver":
        return cls(mode.alias_map, mode.required_fields)

    @property
    def alias_map(self) -> dict[str, str]:
        return self.mode.alias_map

    @property
    def required_fields(self) -> frozenset[str]:
        return self.mode.required_fields

    def resolve(self, grid: CellGrid) -> HeaderResolution:
        """
        Scan the grid top to bottom for the first row that satisfies every
        required field.

        Returns:
            HeaderResolution with the header row index, its cells and the
            resolved matter/required columns

        Raises:
            MissingHeadersError: if no row qualifies (including an empty grid)
        """
        row_count = grid.row_count()
        if row_count == 0:
            raise MissingHeadersError("Grid is empty, no header row to resolve")

        for index in range(row_count):
            row = grid.row(index)
            bindings = self.match_row(row)
            if bindings is None:
                continue

            columns = ColumnIndexSet(
                matter_indexes=self.matter_columns(row),
                required_indexes=list(bindings.values()),
                field_columns=bindings,
            )
            logger.info(
                f"Found header row at {index + 1} with {len(columns.matter_indexes)} "
                f"kept columns and {len(columns.required_indexes)} required"
            )
            return HeaderResolution(header_row=index, header=list(row), columns=columns)

        wanted = ", ".join(sorted(self.required_fields))
        raise MissingHeadersError(f"No row contains all required headers ({wanted})")

    def match_row(self, row: Sequence[str]) -> Optional[dict[str, int]]:
        """
        Bind required fields to columns of a single row.

        Each field is bound to the first column (left to right) whose text
        contains one of its aliases. Returns the field -> column bindings
        when every required field is bound, otherwise None.
        """
        outstanding = set(self.required_fields)
        bindings: dict[str, int] = {}

        for column, cell in enumerate(row):
            if not outstanding:
                break
            if is_blank(cell):
                continue

            text = cell.strip().lower()
            for alias, canonical in self.alias_map.items():
                if canonical in outstanding and alias in text:
                    bindings[canonical] = column
                    outstanding.discard(canonical)

        if outstanding:
            return None
        return bindings

    @staticmethod
    def matter_columns(row: Sequence[str]) -> list[int]:
        """Every column whose header cell is non-blank."""
        return [column for column, cell in enumerate(row) if not is_blank(cell)]


def resolve_header(
    grid: CellGrid, alias_map: dict[str, str], required_fields: Iterable[str]
) -> HeaderResolution:
    """Resolve the header row of ``grid`` in one call."""
    return HeaderResolver(alias_map, required_fields).resolve(grid)
