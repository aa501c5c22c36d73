"""Errors raised by the inventory dashboard backend.

Only file-level defects are raised. Field-level defects (bad dates, bad
quantities, unknown process labels) resolve to sentinels and show up in the
data-quality audit instead.
"""


class InventoryError(Exception):
    """Base exception for the inventory dashboard backend."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class IngestionError(InventoryError):
    """Raised when a movements workbook cannot be read at all."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"Could not load {source}: {message}")
        self.source = source
