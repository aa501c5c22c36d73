"""Data ingestion loaders for inventory movement workbooks."""

from .movements import normalise_row, normalise_rows, read_movement_rows
from .utils import normalise_date, safe_float

__all__ = [
    "read_movement_rows",
    "normalise_row",
    "normalise_rows",
    "normalise_date",
    "safe_float",
]
