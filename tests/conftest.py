from __future__ import annotations

import sys
from pathlib import Path

import openpyxl
import pytest

HERE = Path(__file__).resolve().parent
ROOT = HERE.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from inventory_dashboard.transforms import build_fact_movements  # noqa: E402


@pytest.fixture
def make_records():
    """Build a movements fact table from raw row dicts."""

    def _make(rows):
        return build_fact_movements(rows)

    return _make


@pytest.fixture
def write_workbook(tmp_path):
    """Write rows (first item = header) to an .xlsx file and return its path."""

    def _write(rows, name="movimientos.xlsx", extra_sheets=None):
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "Movimientos"
        for row in rows:
            ws.append(row)
        for title, sheet_rows in (extra_sheets or {}).items():
            extra = wb.create_sheet(title)
            for row in sheet_rows:
                extra.append(row)
        path = tmp_path / name
        wb.save(path)
        return path

    return _write
