"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest
from openpyxl import Workbook

from sheetsift.extract import DetectionThresholds
from sheetsift.grid import ListGrid


@pytest.fixture
def price_aliases() -> dict[str, str]:
    """Alias map used across header resolution tests."""
    return {"make": "brand", "price usd": "price"}


@pytest.fixture
def price_list_grid() -> ListGrid:
    """A price list with a title block above the header row."""
    return ListGrid(
        [
            ["ACME Corp price list", "", ""],
            ["Valid from 2024-01-01"],
            ["Make", "Description", "Price USD"],
            ["Ford", "Pickup", "30,000"],
            ["Kia", "Hatchback", ""],
            ["BMW", "", "52 000"],
            ["Fiat"],
        ],
        name="Prices",
    )


@pytest.fixture
def noisy_report_grid() -> ListGrid:
    """A report with a contact block, a five-column table and a footer."""
    return ListGrid(
        [
            ["Co Name"],
            ["A", "B", "C", "D", "E"],
            ["1", "x", "2", "y", "3"],
            ["1", "x", "2", "y", "3"],
            ["Total", "", "", "", ""],
        ]
    )


@pytest.fixture
def default_thresholds() -> DetectionThresholds:
    """Thresholds pinned to the documented defaults, independent of the environment."""
    return DetectionThresholds(
        min_header_cells=5,
        max_header_numeric=1,
        footer_stop_divisor=3,
        extend_divisor=2,
    )


@pytest.fixture
def xlsx_file(tmp_path: Path) -> Path:
    """Create a two-sheet workbook on disk."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Stock"
    sheet.append(["Supplier: ACME"])
    sheet.append([None])
    sheet.append(["Code", "Name", "Qty", "Price", "Warehouse"])
    sheet.append(["A-1", "Bolt", 10, 1.5, "North"])
    sheet.append(["A-2", "Nut", 20.0, 0.25, "South"])
    sheet.append(["Total", None, None, None, None])

    other = workbook.create_sheet("Notes")
    other.append(["nothing to see"])

    path = tmp_path / "stock.xlsx"
    workbook.save(path)
    return path


@pytest.fixture
def csv_file(tmp_path: Path) -> Path:
    """Create a semicolon-separated file on disk."""
    path = tmp_path / "report.csv"
    path.write_text(
        "Report generated by system;;;;\n"
        "Code;Name;Qty;Price;Warehouse\n"
        "A-1;Bolt;10;1.5;North\n"
        "A-2;Nut;20;0.25;South\n"
        "Total;;;;\n",
        encoding="utf-8",
    )
    return path
