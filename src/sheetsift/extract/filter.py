"""Row validity checks for header-driven extraction."""

from typing import Iterable, Iterator, Sequence

from ..grid.cells import cell_at, is_blank


def is_valid_row(row: Sequence[str], required_indexes: Iterable[int]) -> bool:
    """A row is valid when every required column holds a non-blank cell."""
    return all(not is_blank(cell_at(row, index)) for index in required_indexes)


class RowFilter:
    """Keeps rows that carry data in all required columns."""

    def __init__(self, required_indexes: Iterable[int]):
        self.required_indexes = tuple(required_indexes)

    def __call__(self, row: Sequence[str]) -> bool:
        return is_valid_row(row, self.required_indexes)

    def filter(self, rows: Iterable[Sequence[str]]) -> Iterator[Sequence[str]]:
        return (row for row in rows if self(row))
