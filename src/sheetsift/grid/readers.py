"""Format readers that turn spreadsheet files into ListGrids."""

import codecs
import csv
import logging
import zipfile
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Optional, Protocol, Union

from openpyxl import load_workbook

from ..errors import EmptyWorkbookError, UnsupportedFormatError
from .models import ListGrid

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def stringify_cell(value: Any) -> str:
    """Render a reader value as cell text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


class GridReader(Protocol):
    """A reader for one family of spreadsheet formats."""

    extensions: tuple[str, ...]

    def may_be_supported(self, path: Path) -> bool:
        ...

    def sheet_names(self, path: Path) -> list[str]:
        ...

    def read(
        self, path: Path, sheet: Optional[str] = None, sheet_index: Optional[int] = None
    ) -> ListGrid:
        ...

    def read_all(self, path: Path) -> list[ListGrid]:
        ...


class CsvGridReader:
    """Reads delimited text files as a single sheet."""

    extensions = (".csv", ".tsv", ".txt")
    DELIMITERS = ",;\t|"
    SNIFF_BYTES = 64 * 1024

    def may_be_supported(self, path: Path) -> bool:
        """Accept files with a delimited-text extension whose head decodes as UTF-8 text."""
        if path.suffix.lower() not in self.extensions:
            return False

        with open(path, "rb") as handle:
            head = handle.read(self.SNIFF_BYTES)
        if b"\x00" in head:
            return False
        try:
            codecs.getincrementaldecoder("utf-8-sig")().decode(head, final=False)
        except UnicodeDecodeError:
            return False
        return True

    def sheet_names(self, path: Path) -> list[str]:
        return [path.stem]

    def read(
        self, path: Path, sheet: Optional[str] = None, sheet_index: Optional[int] = None
    ) -> ListGrid:
        if sheet is not None and sheet != path.stem:
            logger.warning(f"Delimited file {path.name} has a single sheet, ignoring '{sheet}'")
        if sheet_index not in (None, 0):
            raise KeyError(f"Sheet index {sheet_index} out of range for {path.name} (1 sheet)")

        with open(path, newline="", encoding="utf-8-sig") as handle:
            sample = handle.read(self.SNIFF_BYTES)
            handle.seek(0)
            dialect = self._sniff(sample, path)
            rows = [list(record) for record in csv.reader(handle, dialect)]

        logger.debug(f"Read {len(rows)} rows from {path.name}")
        return ListGrid(rows, name=path.stem)

    def read_all(self, path: Path) -> list[ListGrid]:
        return [self.read(path)]

    def _sniff(self, sample: str, path: Path):
        if path.suffix.lower() == ".tsv":
            return csv.excel_tab
        try:
            return csv.Sniffer().sniff(sample, delimiters=self.DELIMITERS)
        except csv.Error:
            return csv.excel


class XlsxGridReader:
    """Reads Office Open XML workbooks through openpyxl."""

    extensions = (".xlsx", ".xlsm")

    def may_be_supported(self, path: Path) -> bool:
        return path.suffix.lower() in self.extensions and zipfile.is_zipfile(path)

    def sheet_names(self, path: Path) -> list[str]:
        workbook = load_workbook(path, read_only=True, data_only=True)
        try:
            return list(workbook.sheetnames)
        finally:
            workbook.close()

    def read(
        self, path: Path, sheet: Optional[str] = None, sheet_index: Optional[int] = None
    ) -> ListGrid:
        workbook = load_workbook(path, read_only=True, data_only=True)
        try:
            names = workbook.sheetnames
            if not names:
                raise EmptyWorkbookError(f"No sheets found in {path.name}")

            if sheet is not None:
                if sheet not in names:
                    raise KeyError(f"Sheet '{sheet}' not found in {path.name}")
                name = sheet
            elif sheet_index is not None:
                if not 0 <= sheet_index < len(names):
                    raise KeyError(
                        f"Sheet index {sheet_index} out of range for {path.name} ({len(names)} sheets)"
                    )
                name = names[sheet_index]
            else:
                name = names[0]

            grid = self._load_sheet(workbook[name], name)
        finally:
            workbook.close()

        logger.debug(f"Read {grid.row_count()} rows from {path.name}!{name}")
        return grid

    def read_all(self, path: Path) -> list[ListGrid]:
        """Read every worksheet in workbook order."""
        workbook = load_workbook(path, read_only=True, data_only=True)
        try:
            grids = [self._load_sheet(workbook[name], name) for name in workbook.sheetnames]
        finally:
            workbook.close()

        logger.debug(f"Read {len(grids)} sheets from {path.name}")
        return grids

    @staticmethod
    def _load_sheet(worksheet, name: str) -> ListGrid:
        rows = [
            [stringify_cell(value) for value in values]
            for values in worksheet.iter_rows(values_only=True)
        ]
        return ListGrid(rows, name=name)


SUPPORTED_READERS: list[GridReader] = [
    XlsxGridReader(),
    CsvGridReader(),
]


def find_reader(path: PathLike) -> GridReader:
    """
    Return the first reader that accepts ``path``.

    Raises:
        FileNotFoundError: if ``path`` is not an existing file
        UnsupportedFormatError: if no reader accepts the file
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"No such file: {path}")

    for reader in SUPPORTED_READERS:
        if reader.may_be_supported(path):
            return reader

    supported = ", ".join(ext for reader in SUPPORTED_READERS for ext in reader.extensions)
    raise UnsupportedFormatError(
        f"File type not supported: {path.name}. Supported formats: {supported}"
    )


def list_sheets(path: PathLike) -> list[str]:
    """List the sheet names of a spreadsheet file."""
    path = Path(path)
    names = find_reader(path).sheet_names(path)
    if not names:
        raise EmptyWorkbookError(f"No sheets found in {path.name}")
    return names


def open_grid(
    path: PathLike, sheet: Optional[str] = None, sheet_index: Optional[int] = None
) -> ListGrid:
    """
    Read one sheet of a spreadsheet file into memory.

    The sheet is picked by ``sheet`` name or by 0-based ``sheet_index``;
    the first sheet is read when neither is given.
    """
    if sheet is not None and sheet_index is not None:
        raise ValueError("Select a sheet by name or by index, not both")
    path = Path(path)
    return find_reader(path).read(path, sheet=sheet, sheet_index=sheet_index)


def open_workbook(path: PathLike) -> list[ListGrid]:
    """Read every sheet of a spreadsheet file, in workbook order."""
    path = Path(path)
    grids = find_reader(path).read_all(path)
    if not grids:
        raise EmptyWorkbookError(f"No sheets found in {path.name}")
    return grids
