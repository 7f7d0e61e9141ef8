"""Delimited-text output for extracted rows."""

import csv
import logging
import re
from pathlib import Path
from typing import Iterable, Optional, Sequence, TextIO, Union

from ..errors import ExtractionError
from ..grid.readers import open_workbook
from .models import DEFAULT_SEPARATOR, Mode, OutputOptions
from .region import RegionExtractor

logger = logging.getLogger(__name__)

SEPARATOR_NAMES = {
    "comma": ",",
    "semicolon": ";",
    "tab": "\t",
    "pipe": "|",
}

UNSAFE_FILE_NAME_CHARS = re.compile(r"[ /\\]")


def parse_separator(value: str) -> str:
    """Resolve a separator given by name ("tab") or as a single character."""
    if value.lower() in SEPARATOR_NAMES:
        return SEPARATOR_NAMES[value.lower()]
    if value == "\\t":
        return "\t"
    if len(value) != 1:
        raise ValueError(f"Separator must be a single character or one of {sorted(SEPARATOR_NAMES)}")
    return value


def write_rows(
    rows: Iterable[Sequence[str]], stream: TextIO, separator: str = DEFAULT_SEPARATOR
) -> int:
    """Write rows to ``stream`` and return how many were written."""
    writer = csv.writer(stream, delimiter=separator, lineterminator="\n")
    count = 0
    for row in rows:
        writer.writerow(row)
        count += 1
    return count


def sheet_file_name(stem: str, index: int, sheet_name: str) -> str:
    """Name the output file of the sheet at 0-based ``index``: ``<stem>_sheet_<n>_<name>.csv``."""
    name = f"{stem}_sheet_{index + 1}_{sheet_name}.csv"
    return UNSAFE_FILE_NAME_CHARS.sub("_", name)


def export_all_sheets(
    path: Union[str, Path],
    output_dir: Union[str, Path],
    mode: Mode,
    options: Optional[OutputOptions] = None,
) -> list[Path]:
    """
    Extract the table of every sheet in ``path`` into its own file.

    A sheet whose extraction fails is logged and skipped; the remaining
    sheets are still written.

    Returns:
        Paths of the files written, in sheet order
    """
    path = Path(path)
    output_dir = Path(output_dir)
    options = options or OutputOptions()
    extractor = RegionExtractor(options)

    grids = open_workbook(path)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for index, grid in enumerate(grids):
        sheet_name = grid.name or str(index + 1)
        try:
            result = extractor.extract(grid, mode)
        except ExtractionError as e:
            logger.warning(f"Skipping sheet {index + 1} ({sheet_name}): {e}")
            continue

        target = output_dir / sheet_file_name(path.stem, index, sheet_name)
        with open(target, "w", newline="", encoding="utf-8") as handle:
            count = write_rows(result.rows, handle, options.separator)
        logger.info(f"Wrote sheet {index + 1} ({sheet_name}): {count} rows to {target}")
        written.append(target)

    return written
