"""
Inventory Movements — Stock Dashboard Backend

Analytics backend for turning a spreadsheet of inventory movements
(receipts, deliveries, returns, legalizations) into dashboard-ready views.

To connect to Streamlit/Dash:
    Create an InventorySession, call session.load(uploaded_bytes) on each
    upload, session.set_query({...}) whenever a filter widget changes, and
    render session.views(): plain dicts and DataFrames for KPI cards, the
    material ledger, manager ranking, daily table, audit and Pareto chart.

To recognise a new process label:
    Add a (keyword, process) pair to config.PROCESS_RULES. Order matters:
    the first keyword contained in the label wins.

To read a differently named column:
    Change the COL_* constants in config.
"""

from .errors import IngestionError, InventoryError
from .filters import QueryState, normalize_query
from .session import InventorySession, load_movements

__all__ = [
    "IngestionError",
    "InventoryError",
    "InventorySession",
    "QueryState",
    "load_movements",
    "normalize_query",
]
