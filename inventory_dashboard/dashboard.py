"""
Dashboard-ready output functions.

These are the primary entry points for a Streamlit/Dash front end.
Each function takes the (filtered) movements fact table and returns plain
dicts or DataFrames suitable for rendering cards, charts, and tables.
None of them modify their input.
"""

import logging

import pandas as pd

from .audit import analyze_data_quality, calc_pareto
from .config import (
    EXPORT_COLUMNS,
    PROCESS_ENTRY,
    PROCESS_EXIT,
    PROCESS_KINDS,
    PROCESS_LEGALIZED,
    PROCESS_RETURN,
    TOP_STOCK_N,
)
from .kpis import calc_kpis, calc_process_distribution, field_stock, warehouse_stock

logger = logging.getLogger(__name__)

# Process kind -> material ledger column
_LEDGER_COLUMNS = {
    PROCESS_ENTRY: "Ingresado",
    PROCESS_EXIT: "Entregado",
    PROCESS_RETURN: "Devoluciones",
    PROCESS_LEGALIZED: "Legalizaciones",
}

SUMMARY_COLUMNS = [
    "Codigo", "Material",
    "Ingresado", "Entregado", "Devoluciones", "Legalizaciones",
    "Stock_Almacen", "Stock_Calle",
]

MANAGER_COLUMNS = ["Gestor", "Entregado", "Legalizado"]


def calc_material_summary(records: pd.DataFrame) -> pd.DataFrame:
    """Material ledger: one row per (material code, material name).

    Rows keep the order in which each material first appears.

    Returns
    -------
    DataFrame with columns:
        Codigo, Material, Ingresado, Entregado, Devoluciones,
        Legalizaciones, Stock_Almacen, Stock_Calle
    """
    if records.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    frame = records[["material_code", "material_name"]].copy()
    for process, column in _LEDGER_COLUMNS.items():
        frame[column] = records["quantity"].where(records["process"] == process, 0.0)

    summary = frame.groupby(["material_code", "material_name"], sort=False, as_index=False)[
        list(_LEDGER_COLUMNS.values())
    ].sum()
    summary = summary.rename(columns={"material_code": "Codigo", "material_name": "Material"})

    summary["Stock_Almacen"] = warehouse_stock(
        summary["Ingresado"], summary["Devoluciones"], summary["Entregado"]
    )
    summary["Stock_Calle"] = field_stock(
        summary["Entregado"], summary["Devoluciones"], summary["Legalizaciones"]
    )

    logger.info("Built material summary with %d rows", len(summary))
    return summary[SUMMARY_COLUMNS].reset_index(drop=True)


def calc_manager_distribution(records: pd.DataFrame) -> pd.DataFrame:
    """Delivered and legalized totals per manager (gestor).

    Salida quantities count as delivered to the receiver; Legalizado
    quantities count as legalized by the sender. Managers with nothing
    delivered or legalized are dropped. Sorted by Entregado descending,
    ties keep first-appearance order.
    """
    if records.empty:
        return pd.DataFrame(columns=MANAGER_COLUMNS)

    is_exit = records["process"] == PROCESS_EXIT
    is_legalized = records["process"] == PROCESS_LEGALIZED

    frame = pd.DataFrame({
        "Gestor": records["receiver_name"].where(is_exit, records["sender_name"].where(is_legalized)),
        "Entregado": records["quantity"].where(is_exit, 0.0),
        "Legalizado": records["quantity"].where(is_legalized, 0.0),
    })
    frame = frame[frame["Gestor"].notna()]
    if frame.empty:
        return pd.DataFrame(columns=MANAGER_COLUMNS)

    result = frame.groupby("Gestor", sort=False, as_index=False)[["Entregado", "Legalizado"]].sum()
    result = result[(result["Entregado"] != 0) | (result["Legalizado"] != 0)]
    result = result.sort_values("Entregado", ascending=False, kind="stable")
    return result[MANAGER_COLUMNS].reset_index(drop=True)


def get_daily_breakdown(records: pd.DataFrame) -> pd.DataFrame:
    """Per-day quantity totals by process kind, oldest day first.

    Records without a valid date are left out of this view only.

    Returns
    -------
    DataFrame with a 'date' column (YYYY-MM-DD) plus one column per process
    kind present in the data; a kind with no movement on a day shows 0.
    """
    dated = records[records["date"].notna()] if not records.empty else records
    if dated.empty:
        return pd.DataFrame(columns=["date"])

    table = dated.assign(day=dated["date"].dt.strftime("%Y-%m-%d")).pivot_table(
        index="day",
        columns="process",
        values="quantity",
        aggfunc="sum",
        fill_value=0.0,
    )
    ordered = [p for p in PROCESS_KINDS if p in table.columns]
    table = table[ordered].sort_index()
    table.columns.name = None

    result = table.reset_index().rename(columns={"day": "date"})
    logger.info("Built daily breakdown with %d days", len(result))
    return result


def get_top_stock(summary: pd.DataFrame, n: int = TOP_STOCK_N) -> pd.DataFrame:
    """Top n materials by warehouse stock."""
    if summary.empty:
        return summary.copy()
    return summary.sort_values("Stock_Almacen", ascending=False, kind="stable").head(n).reset_index(drop=True)


def build_export_rows(summary: pd.DataFrame, stock_only: bool = False) -> list[dict]:
    """Flatten the material summary for the report-table exporter.

    Keys are the export labels in EXPORT_COLUMNS, in sheet order. With
    stock_only=True only materials with positive warehouse stock are kept.
    """
    if summary.empty:
        return []
    rows = summary[summary["Stock_Almacen"] > 0] if stock_only else summary
    export = rows[list(EXPORT_COLUMNS)].rename(columns=EXPORT_COLUMNS)
    return export.to_dict(orient="records")


def get_dashboard_views(records: pd.DataFrame) -> dict:
    """Every derived view for one (filtered) set of movements.

    Returns
    -------
    Dict with keys: kpis, process_distribution, material_summary,
    top_stock, manager_distribution, daily_breakdown, quality, pareto.
    """
    kpis = calc_kpis(records)
    summary = calc_material_summary(records)
    return {
        "kpis": kpis,
        "process_distribution": calc_process_distribution(kpis),
        "material_summary": summary,
        "top_stock": get_top_stock(summary),
        "manager_distribution": calc_manager_distribution(records),
        "daily_breakdown": get_daily_breakdown(records),
        "quality": analyze_data_quality(records),
        "pareto": calc_pareto(records),
    }
