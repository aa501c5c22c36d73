"""
Data-quality audit and Pareto ranking of material movement volume.
"""

import logging

import numpy as np
import pandas as pd

from .config import PARETO_TOP_N

logger = logging.getLogger(__name__)

PARETO_COLUMNS = ["name", "value", "cum_percentage"]


def analyze_data_quality(records: pd.DataFrame) -> dict:
    """Integrity counters for a set of movements.

    Returns
    -------
    Dict with structure:
    {
        "total_rows": ...,
        "unique_dates": ...,    # distinct calendar days with a valid date
        "process_counts": {"Entrada": ..., "Sin Proceso": ..., ...},
        "null_dates": ...,      # rows whose date was missing or unparsable
        "null_cantidad": ...,   # rows whose Cantidad cell was empty
    }
    """
    if records.empty:
        return {
            "total_rows": 0,
            "unique_dates": 0,
            "process_counts": {},
            "null_dates": 0,
            "null_cantidad": 0,
        }

    dates = records["date"]
    counts = records.groupby("process", sort=False).size()

    quality = {
        "total_rows": int(len(records)),
        "unique_dates": int(dates.dropna().dt.normalize().nunique()),
        "process_counts": {str(k): int(v) for k, v in counts.items()},
        "null_dates": int(dates.isna().sum()),
        "null_cantidad": int(records["quantity_missing"].sum()),
    }

    if quality["null_dates"] or quality["null_cantidad"]:
        logger.info(
            "Quality audit: %d rows without date, %d without quantity (of %d)",
            quality["null_dates"], quality["null_cantidad"], quality["total_rows"],
        )
    return quality


def calc_pareto(records: pd.DataFrame, top_n: int = PARETO_TOP_N) -> pd.DataFrame:
    """Rank materials by total moved quantity (all processes count).

    Keeps the top_n materials and adds each one's cumulative share of the
    grand total (over all materials, not just the top_n), rounded to a whole
    percent. With non-negative quantities the share never decreases down
    the ranking and only reaches 100 when every material fits in top_n.

    Returns
    -------
    DataFrame with columns: name, value, cum_percentage
    """
    if records.empty:
        return pd.DataFrame(columns=PARETO_COLUMNS)

    totals = (
        records.groupby("material_name", sort=False)["quantity"]
        .sum()
        .reset_index()
        .rename(columns={"material_name": "name", "quantity": "value"})
        .sort_values("value", ascending=False, kind="stable")
        .reset_index(drop=True)
    )

    grand_total = float(totals["value"].sum())
    top = totals.head(top_n).copy()

    if grand_total == 0:
        logger.warning("Pareto grand total is zero; cumulative shares set to 0")
        top["cum_percentage"] = 0
    else:
        share = top["value"].cumsum() / grand_total * 100
        # Round half up, as a spreadsheet would
        top["cum_percentage"] = np.floor(share + 0.5).astype(int)

    return top[PARETO_COLUMNS]
