"""
Simulated data generator for the inventory movements dashboard.

Generates raw sheet rows the way they tend to arrive from the field:
process labels typed in several ways, dates as real dates, day-first
strings or spreadsheet serials, and the occasional empty or garbage cell.
All values are synthetic.
"""

from datetime import datetime

import numpy as np
import pandas as pd

from .config import (
    COL_DATE,
    COL_ENTRY,
    COL_EXIT,
    COL_MATERIAL_CODE,
    COL_MATERIAL_NAME,
    COL_PROCESS,
    COL_QUANTITY,
    COL_RECEIVER,
    COL_SENDER,
    EXCEL_EPOCH_SERIAL,
)

# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
_MATERIALS = [
    ("10001", "Medidor monofasico"),
    ("10002", "Cable concentrico 2x8"),
    ("10003", "Sello de seguridad"),
    ("10004", "Caja para medidor"),
    ("10005", "Conector de perforacion"),
    ("10006", "Acometida 6mm"),
    ("10007", "Cinta aislante"),
    ("10008", "Grapa de retencion"),
]

_MANAGERS = ["Ana Torres", "Luis Pardo", "Marta Rojas", "Jorge Diaz", "Paula Gil"]

# label variants per process, plus noise that must classify as Sin Proceso
_LABELS = {
    "entry": ["Entrada", "ENTRADA ALMACEN", "entrada por compra"],
    "exit": ["Salida", "Salida de almacen", "SALIDA A GESTOR"],
    "return": ["Devolucion", "DEVOLUCION GESTOR", "devolución"],
    "legalized": ["Legalizado", "LEGALIZACION", "legalizado obra"],
    "unknown": ["Traslado", "", None],
}

# relative weights of each process in generated data
_PROCESS_WEIGHTS = {
    "entry": 0.30,
    "exit": 0.35,
    "return": 0.10,
    "legalized": 0.20,
    "unknown": 0.05,
}


def _encode_date(day: pd.Timestamp, rng: np.random.Generator):
    """Encode a day in one of the formats seen in real sheets."""
    roll = rng.random()
    if roll < 0.50:
        return datetime(day.year, day.month, day.day)
    if roll < 0.70:
        return day.strftime("%d/%m/%Y")
    if roll < 0.80:
        return day.strftime("%d-%m-%Y")
    if roll < 0.90:
        return float((day - pd.Timestamp("1970-01-01")).days + EXCEL_EPOCH_SERIAL)
    if roll < 0.95:
        return None
    return "sin fecha"


def _encode_quantity(qty: int, rng: np.random.Generator):
    roll = rng.random()
    if roll < 0.80:
        return qty
    if roll < 0.92:
        return str(qty)
    if roll < 0.97:
        return None
    return "n/a"


def generate_movement_rows(
    n_rows: int = 300,
    start_date: str = "2024-01-01",
    n_days: int = 90,
    seed: int = 42,
) -> list[dict]:
    """Generate simulated raw movement rows.

    Parameters
    ----------
    n_rows : Number of rows.
    start_date : First day movements can fall on.
    n_days : Length of the date window.
    seed : Seed for the random generator, for reproducible output.

    Returns
    -------
    List of dicts keyed by the source sheet headers (Fecha, Proceso, ...).
    """
    rng = np.random.default_rng(seed)
    days = pd.date_range(start_date, periods=n_days, freq="D")
    kinds = list(_PROCESS_WEIGHTS)
    weights = np.array(list(_PROCESS_WEIGHTS.values()))

    rows = []
    for _ in range(n_rows):
        kind = kinds[rng.choice(len(kinds), p=weights / weights.sum())]
        labels = _LABELS[kind]
        label = labels[rng.integers(len(labels))]
        code, name = _MATERIALS[rng.integers(len(_MATERIALS))]
        manager = _MANAGERS[rng.integers(len(_MANAGERS))]
        qty = int(rng.integers(1, 120))
        day = days[rng.integers(len(days))]

        row = {
            COL_DATE: _encode_date(day, rng),
            COL_PROCESS: label,
            COL_QUANTITY: _encode_quantity(qty, rng),
            COL_ENTRY: qty if kind == "entry" else None,
            COL_EXIT: qty if kind == "exit" else None,
            COL_MATERIAL_CODE: code if rng.random() > 0.02 else None,
            COL_MATERIAL_NAME: name if rng.random() > 0.02 else None,
            COL_RECEIVER: manager if kind == "exit" else None,
            COL_SENDER: manager if kind in ("legalized", "return") else None,
        }
        rows.append(row)

    return rows
