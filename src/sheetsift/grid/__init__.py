"""In-memory cell grids and the readers that produce them."""

from .cells import (
    cell_at,
    clean_cell_data,
    count_non_empty,
    count_numeric,
    has_data,
    is_blank,
    looks_like_number,
)
from .models import CellGrid, ColumnIndexSet, ForcedBounds, ListGrid, TableBounds, iter_rows
from .readers import CsvGridReader, XlsxGridReader, list_sheets, open_grid, open_workbook

__all__ = [
    "CellGrid",
    "ListGrid",
    "TableBounds",
    "ForcedBounds",
    "ColumnIndexSet",
    "iter_rows",
    "cell_at",
    "clean_cell_data",
    "count_non_empty",
    "count_numeric",
    "has_data",
    "is_blank",
    "looks_like_number",
    "CsvGridReader",
    "XlsxGridReader",
    "list_sheets",
    "open_grid",
    "open_workbook",
]
