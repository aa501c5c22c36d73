"""
Filter evaluation over the movements fact table.

QueryState is the UI-agnostic filter value object: a UI builds one through
normalize_query() from whatever its widgets hold and passes it to
apply_filters(). Criteria combine with AND across dimensions and OR within
each allow-list; an empty QueryState leaves the records untouched.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

import pandas as pd

from .config import MISSING_PERIOD

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryState:
    date_from: pd.Timestamp | None = None
    date_to: pd.Timestamp | None = None
    processes: tuple[str, ...] = field(default_factory=tuple)
    materials: tuple[str, ...] = field(default_factory=tuple)
    managers: tuple[str, ...] = field(default_factory=tuple)
    periods: tuple[str, ...] = field(default_factory=tuple)

    def is_empty(self) -> bool:
        return (
            self.date_from is None
            and self.date_to is None
            and not self.processes
            and not self.materials
            and not self.managers
            and not self.periods
        )


def _as_day(value: Any) -> pd.Timestamp | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        ts = pd.Timestamp(value)
    except (ValueError, TypeError, OverflowError):
        logger.warning("Ignoring unparseable filter date: %r", value)
        return None
    if pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts.normalize()


def _as_str_tuple(values: Iterable[Any] | None) -> tuple[str, ...]:
    if not values:
        return ()
    if isinstance(values, str):
        values = [values]
    out: list[str] = []
    for v in values:
        if v is None:
            continue
        s = str(v).strip()
        if s and s not in out:
            out.append(s)
    return tuple(out)


def normalize_query(raw: dict | None) -> QueryState:
    """Build a QueryState from plain UI input.

    Accepted keys: date_from, date_to (ISO strings, dates or None) and
    processes, materials, managers, periods (iterables of strings).
    Unknown keys are ignored; unparseable dates are dropped with a warning.
    """
    raw = raw or {}
    return QueryState(
        date_from=_as_day(raw.get("date_from")),
        date_to=_as_day(raw.get("date_to")),
        processes=_as_str_tuple(raw.get("processes")),
        materials=_as_str_tuple(raw.get("materials")),
        managers=_as_str_tuple(raw.get("managers")),
        periods=_as_str_tuple(raw.get("periods")),
    )


def apply_filters(records: pd.DataFrame, query: QueryState) -> pd.DataFrame:
    """Return the movements matching every criterion in query.

    - periods, processes, materials (by material name): membership.
    - managers: the record's receiver or sender is in the selection.
    - date_from / date_to: inclusive, date_to through 23:59:59.999.
      Records without a date are not excluded by the date range.
    """
    if records.empty or query.is_empty():
        return records.copy()

    mask = pd.Series(True, index=records.index)

    if query.periods:
        mask &= records["period"].isin(query.periods)

    dates = records["date"]
    if query.date_from is not None:
        mask &= dates.isna() | (dates >= query.date_from)
    if query.date_to is not None:
        end_of_day = query.date_to.normalize() + pd.Timedelta(days=1) - pd.Timedelta(milliseconds=1)
        mask &= dates.isna() | (dates <= end_of_day)

    if query.processes:
        mask &= records["process"].isin(query.processes)

    if query.materials:
        mask &= records["material_name"].isin(query.materials)

    if query.managers:
        mask &= records["receiver_name"].isin(query.managers) | records["sender_name"].isin(query.managers)

    result = records[mask].copy()
    logger.debug("Filtered %d movements down to %d", len(records), len(result))
    return result


def get_filter_options(records: pd.DataFrame) -> dict[str, list[str]]:
    """Distinct values for the filter pickers.

    Periods are newest first and exclude 'N/A'; managers are the union of
    receivers and senders.
    """
    if records.empty:
        return {"processes": [], "materials": [], "managers": [], "periods": []}

    processes = sorted(records["process"].dropna().unique().tolist())
    materials = sorted(records["material_name"].dropna().unique().tolist())
    periods = sorted(
        (p for p in records["period"].unique().tolist() if p != MISSING_PERIOD),
        reverse=True,
    )
    managers = sorted(
        set(records["receiver_name"].dropna().tolist())
        | set(records["sender_name"].dropna().tolist())
    )
    return {
        "processes": processes,
        "materials": materials,
        "managers": managers,
        "periods": periods,
    }
