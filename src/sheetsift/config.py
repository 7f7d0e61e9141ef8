"""Configuration management for SheetSift."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _parse_bool(name: str, default: str) -> bool:
    """Parse a boolean flag from an environment variable."""
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _parse_separator() -> str:
    """Parse the output separator, allowing escaped tabs."""
    value = os.getenv("SHEETSIFT_CSV_SEPARATOR", ",")
    if value in ("\\t", "tab"):
        return "\t"
    return value or ","


class Settings(BaseModel):
    """Application settings."""

    # Structural detection: a header candidate needs at least this many filled cells
    min_header_cells: int = int(os.getenv("SHEETSIFT_MIN_HEADER_CELLS", "5"))
    # ...and at most this many numeric cells
    max_header_numeric: int = int(os.getenv("SHEETSIFT_MAX_HEADER_NUMERIC", "1"))

    # Extent scan: stop below expected/footer_stop_divisor, extend at expected/extend_divisor
    footer_stop_divisor: int = int(os.getenv("SHEETSIFT_FOOTER_STOP_DIVISOR", "3"))
    extend_divisor: int = int(os.getenv("SHEETSIFT_EXTEND_DIVISOR", "2"))

    # Output settings
    csv_separator: str = _parse_separator()
    clean_line_breaks: bool = _parse_bool("SHEETSIFT_CLEAN_LINE_BREAKS", "true")

    # Logging (only applied by the CLI)
    log_level: str = os.getenv("SHEETSIFT_LOG_LEVEL", "INFO")


settings = Settings()
