"""
Dataset and filter state for one dashboard user.

InventorySession holds the current movements fact table and the active
QueryState. Loading a new workbook replaces both in one step: the new
records are fully built before anything is swapped in, and the query is
reset so no selection can refer to values of the previous file. A failed
load leaves the previous dataset and query as they were.
"""

import logging
from pathlib import Path
from typing import Any

import pandas as pd

from .dashboard import get_dashboard_views
from .filters import QueryState, apply_filters, get_filter_options, normalize_query
from .loaders.movements import MovementSource, read_movement_rows
from .transforms import build_fact_movements

logger = logging.getLogger(__name__)


def load_movements(source: MovementSource) -> pd.DataFrame:
    """Read a movements workbook and return the classified fact table."""
    return build_fact_movements(read_movement_rows(source))


class InventorySession:
    """Current movements and the active query for one dashboard user."""

    def __init__(self) -> None:
        self._records = build_fact_movements([])
        self._query = QueryState()
        self.source: str | None = None

    @property
    def records(self) -> pd.DataFrame:
        """Full fact table, unfiltered."""
        return self._records

    @property
    def query(self) -> QueryState:
        """Active filter selection."""
        return self._query

    def load(self, source: MovementSource, name: str | None = None) -> int:
        """Replace the dataset with the contents of a workbook.

        Raises IngestionError (and keeps the current state) if the workbook
        cannot be read. Returns the number of movements loaded.
        """
        records = load_movements(source)
        self._install(records, name or (str(source) if isinstance(source, (str, Path)) else None))
        return len(records)

    def load_rows(self, raw_rows: list[dict[str, Any]], name: str | None = None) -> int:
        """Replace the dataset with already-parsed raw rows."""
        records = build_fact_movements(raw_rows)
        self._install(records, name)
        return len(records)

    def _install(self, records: pd.DataFrame, name: str | None) -> None:
        self._records = records
        self._query = QueryState()
        self.source = name
        logger.info("Session dataset replaced (%d movements, filters reset)", len(records))

    def set_query(self, query: QueryState | dict | None) -> QueryState:
        """Replace the active query; plain dicts go through normalize_query."""
        if not isinstance(query, QueryState):
            query = normalize_query(query)
        self._query = query
        return query

    def reset_query(self) -> None:
        """Clear every filter."""
        self._query = QueryState()

    def filtered(self) -> pd.DataFrame:
        """Movements matching the active query."""
        return apply_filters(self._records, self._query)

    def filter_options(self) -> dict[str, list[str]]:
        """Picker values available in the loaded dataset."""
        return get_filter_options(self._records)

    def views(self) -> dict:
        """All dashboard views for the current filters, plus row counts."""
        filtered = self.filtered()
        views = get_dashboard_views(filtered)
        views["total_rows"] = len(self._records)
        views["filtered_rows"] = len(filtered)
        return views
