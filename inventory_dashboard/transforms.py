"""
Data transforms: classify normalised movements into the canonical
movements fact table.
"""

import logging
from typing import Any

import numpy as np
import pandas as pd

from .config import MISSING_PERIOD, MOVEMENT_COLUMNS, PROCESS_RULES, PROCESS_UNKNOWN
from .loaders import normalise_rows

logger = logging.getLogger(__name__)


def classify_process(label: Any) -> str:
    """Map a free-text process label to one of the five process kinds.

    The label is upper-cased and trimmed, then checked against PROCESS_RULES
    in order; the first keyword it contains decides the kind.
    """
    text = "" if label is None else str(label).upper().strip()
    for keyword, process in PROCESS_RULES:
        if keyword in text:
            return process
    return PROCESS_UNKNOWN


def classify_processes(labels: pd.Series) -> pd.Series:
    """Vectorised classify_process(); np.select keeps first-match order."""
    text = labels.fillna("").astype(str).str.upper().str.strip()
    conditions = [text.str.contains(keyword, regex=False).to_numpy(dtype=bool) for keyword, _ in PROCESS_RULES]
    choices = [process for _, process in PROCESS_RULES]
    return pd.Series(
        np.select(conditions, choices, default=PROCESS_UNKNOWN),
        index=labels.index,
        dtype=object,
    )


def derive_period(ts: pd.Timestamp | None) -> str:
    """Return the YYYYMM period of a date, or 'N/A' when it is missing."""
    if ts is None or pd.isna(ts):
        return MISSING_PERIOD
    return f"{ts.year:04d}{ts.month:02d}"


def build_fact_movements(raw_rows: list[dict[str, Any]]) -> pd.DataFrame:
    """Build the movements fact table from raw sheet rows.

    Parameters
    ----------
    raw_rows : From read_movement_rows(), or any list of header -> value dicts.

    Returns
    -------
    fact_movements DataFrame with columns:
        date, process, process_raw, quantity, quantity_missing,
        entry_quantity, exit_quantity, material_code, material_name,
        receiver_name, sender_name, period
    """
    df = normalise_rows(raw_rows)
    df["process"] = classify_processes(df["process_raw"])
    df["period"] = pd.Series(
        [derive_period(ts) for ts in df["date"]],
        index=df.index,
        dtype=object,
    )
    df = df[MOVEMENT_COLUMNS]

    unclassified = int((df["process"] == PROCESS_UNKNOWN).sum())
    if unclassified:
        logger.warning("%d rows have an unrecognised process label", unclassified)
    logger.info("Built fact_movements with %d rows", len(df))
    return df
