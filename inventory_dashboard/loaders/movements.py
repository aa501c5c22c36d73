"""
Loader for the inventory movements workbook.

Only the first sheet is read. Row 1 carries the headers (trimmed); every
following non-blank row is one movement. Expected headers:
    Fecha, Proceso, Cantidad, Entrada, Salida, Codigo Material, Items,
    Nombre Recibe, Nombre Entrega

Any of them may be absent; missing cells become None and are resolved to
defaults by normalise_row().
"""

import io
import logging
from pathlib import Path
from typing import Any, BinaryIO

import openpyxl
import pandas as pd

from ..config import (
    COL_DATE,
    COL_MATERIAL_CODE,
    COL_MATERIAL_NAME,
    COL_PROCESS,
    COL_QUANTITY,
    COL_RECEIVER,
    COL_SENDER,
    MISSING_CODE,
    MISSING_NAME,
    QUANTITY_COLUMNS,
)
from ..errors import IngestionError
from .utils import clean_headers, clean_text, is_missing, normalise_date, safe_float

logger = logging.getLogger(__name__)

MovementSource = str | Path | bytes | bytearray | BinaryIO


def _describe(source: MovementSource) -> str:
    if isinstance(source, (str, Path)):
        return str(source)
    if isinstance(source, (bytes, bytearray)):
        return f"<{len(source)} bytes>"
    return getattr(source, "name", None) or "<stream>"


def read_movement_rows(source: MovementSource) -> list[dict[str, Any]]:
    """Read the first sheet of a movements workbook into raw rows.

    Parameters
    ----------
    source : Path to an .xlsx file, its raw bytes, or a binary file object.

    Returns
    -------
    List of dicts keyed by trimmed header. Cells without a value are None.
    Fully blank rows and columns without a header are skipped.

    Raises
    ------
    IngestionError if the payload is not a readable workbook.
    """
    label = _describe(source)
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    elif isinstance(source, Path):
        source = str(source)

    try:
        wb = openpyxl.load_workbook(source, read_only=True, data_only=True)
    except Exception as exc:
        logger.exception("Failed to open movements workbook: %s", label)
        raise IngestionError(label, str(exc) or type(exc).__name__) from exc

    try:
        if not wb.worksheets:
            raise IngestionError(label, "workbook has no sheets")
        ws = wb.worksheets[0]
        rows = _sheet_to_rows(ws)
    except IngestionError:
        raise
    except Exception as exc:
        logger.exception("Failed to read first sheet of %s", label)
        raise IngestionError(label, str(exc) or type(exc).__name__) from exc
    finally:
        wb.close()

    logger.info("Loaded %d movement rows from %s", len(rows), label)
    return rows


def _sheet_to_rows(ws) -> list[dict[str, Any]]:
    values = ws.iter_rows(values_only=True)
    header_row = next(values, None)
    if header_row is None:
        logger.warning("Sheet '%s' is empty", ws.title)
        return []

    headers = clean_headers(header_row)
    rows = []
    for cells in values:
        if all(cell is None for cell in cells):
            continue
        row = {name: None for name in headers if name is not None}
        for name, cell in zip(headers, cells):
            if name is not None:
                row[name] = cell
        rows.append(row)
    return rows


def normalise_row(raw: dict[str, Any]) -> dict[str, Any]:
    """Turn one raw row into a typed partial movement record.

    Never raises on bad data: unparsable dates become None, unparsable or
    absent quantities become 0, missing material identity gets sentinels.
    Process and period are left to the classifier.
    """
    record: dict[str, Any] = {
        "date": normalise_date(raw.get(COL_DATE)),
        "process_raw": clean_text(raw.get(COL_PROCESS)),
        "quantity_missing": is_missing(raw.get(COL_QUANTITY)),
    }

    for source_col, column in QUANTITY_COLUMNS.items():
        value = safe_float(raw.get(source_col))
        record[column] = value if value is not None else 0.0

    record["material_code"] = clean_text(raw.get(COL_MATERIAL_CODE)) or MISSING_CODE
    record["material_name"] = clean_text(raw.get(COL_MATERIAL_NAME)) or MISSING_NAME
    record["receiver_name"] = clean_text(raw.get(COL_RECEIVER))
    record["sender_name"] = clean_text(raw.get(COL_SENDER))
    return record


def normalise_rows(raw_rows: list[dict[str, Any]]) -> pd.DataFrame:
    """Normalise raw rows into a DataFrame (one row per movement).

    Returns
    -------
    DataFrame with columns:
        date, process_raw, quantity_missing, quantity, entry_quantity,
        exit_quantity, material_code, material_name, receiver_name, sender_name
    """
    columns = [
        "date", "process_raw", "quantity_missing",
        *QUANTITY_COLUMNS.values(),
        "material_code", "material_name", "receiver_name", "sender_name",
    ]
    df = pd.DataFrame([normalise_row(raw) for raw in raw_rows], columns=columns)
    df["date"] = pd.to_datetime(df["date"])
    df["quantity_missing"] = df["quantity_missing"].astype(bool)
    for column in QUANTITY_COLUMNS.values():
        df[column] = df[column].astype(float)

    invalid_dates = int(df["date"].isna().sum())
    if invalid_dates:
        logger.warning("%d of %d rows have a missing or invalid date", invalid_dates, len(df))
    logger.info("Normalised %d movement rows", len(df))
    return df
