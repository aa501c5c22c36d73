"""
KPI computation functions — pure functions with no side effects.

Provides the headline stock totals and the stock distribution donut
derived from them.
"""

import logging

import pandas as pd

from .config import (
    PROCESS_ENTRY,
    PROCESS_EXIT,
    PROCESS_LEGALIZED,
    PROCESS_RETURN,
    STOCK_DISTRIBUTION_SEGMENTS,
)

logger = logging.getLogger(__name__)


def warehouse_stock(received: float, returns: float, distributed: float) -> float:
    """Material still held centrally: received + returned - delivered."""
    return received + returns - distributed


def field_stock(distributed: float, returns: float, legalizations: float) -> float:
    """Material out with managers: delivered - returned - legalized."""
    return distributed - returns - legalizations


def calc_kpis(records: pd.DataFrame) -> dict:
    """Return the headline totals for a set of movements.

    Returns
    -------
    Dict with structure:
    {
        "Material_Recibido": ...,     # sum of Entrada
        "Material_Distribuido": ...,  # sum of Salida
        "Devoluciones": ...,          # sum of Devolucion
        "Legalizaciones": ...,        # sum of Legalizado
        "Stock_Almacen": ...,
        "Stock_Calle": ...,
        "Total_Movimientos": ...,     # row count, all processes
    }

    Stock values are not clamped: inconsistent data shows up as negatives.
    """
    totals = records.groupby("process")["quantity"].sum() if not records.empty else pd.Series(dtype=float)

    received = float(totals.get(PROCESS_ENTRY, 0.0))
    distributed = float(totals.get(PROCESS_EXIT, 0.0))
    returns = float(totals.get(PROCESS_RETURN, 0.0))
    legalizations = float(totals.get(PROCESS_LEGALIZED, 0.0))

    kpis = {
        "Material_Recibido": received,
        "Material_Distribuido": distributed,
        "Devoluciones": returns,
        "Legalizaciones": legalizations,
        "Stock_Almacen": warehouse_stock(received, returns, distributed),
        "Stock_Calle": field_stock(distributed, returns, legalizations),
        "Total_Movimientos": int(len(records)),
    }

    if kpis["Stock_Almacen"] < 0 or kpis["Stock_Calle"] < 0:
        logger.warning(
            "Negative stock balance (almacen=%s, calle=%s); source data is inconsistent",
            kpis["Stock_Almacen"], kpis["Stock_Calle"],
        )
    return kpis


def calc_process_distribution(kpis: dict) -> list[dict]:
    """Donut segments for where the material is: only positive segments."""
    segments = []
    for name, (kpi_key, color) in STOCK_DISTRIBUTION_SEGMENTS.items():
        value = kpis.get(kpi_key, 0.0)
        if value > 0:
            segments.append({"name": name, "value": value, "color": color})
    return segments
