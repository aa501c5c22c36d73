"""
Shared utilities for data ingestion: date normalisation, numeric coercion,
text and header cleaning.
"""

import logging
import math
import re
from datetime import date
from typing import Any

import numpy as np
import pandas as pd

from ..config import EXCEL_EPOCH_SERIAL, MIDDAY_HOUR, SECONDS_PER_DAY

logger = logging.getLogger(__name__)

# d/m/yyyy or d-m-yyyy anywhere in the string
_DMY_PATTERN = re.compile(r"(\d{1,2})[/\-](\d{1,2})[/\-](\d{4})")

# leading number of a cell such as "10 unidades"
_LEADING_NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

_UNIX_EPOCH = pd.Timestamp("1970-01-01")


def pin_to_midday(ts: pd.Timestamp) -> pd.Timestamp:
    """Drop time-of-day and timezone, keeping the calendar date at 12:00."""
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts.normalize() + pd.Timedelta(hours=MIDDAY_HOUR)


def _parse_date_string(text: str) -> pd.Timestamp | None:
    text = text.strip()
    if not text:
        return None

    match = _DMY_PATTERN.search(text)
    if match:
        day, month, year = (int(part) for part in match.groups())
        try:
            return pd.Timestamp(year=year, month=month, day=day)
        except ValueError:
            logger.debug("Invalid day/month in date value: %s", text)
            return None

    # pandas reads keywords like "today" and "now" as the current time
    if not any(ch.isdigit() for ch in text):
        logger.debug("Could not parse date value: %s", text)
        return None

    try:
        return pd.Timestamp(text)
    except (ValueError, TypeError, OverflowError):
        logger.debug("Could not parse date value: %s", text)
        return None


def _from_serial(serial: float) -> pd.Timestamp | None:
    if not math.isfinite(serial):
        return None
    millis = round((serial - EXCEL_EPOCH_SERIAL) * SECONDS_PER_DAY * 1000)
    try:
        return _UNIX_EPOCH + pd.Timedelta(milliseconds=millis)
    except (ValueError, OverflowError):
        logger.debug("Could not convert serial number %s to date", serial)
        return None


def normalise_date(val: Any) -> pd.Timestamp | None:
    """Convert a spreadsheet date cell to a midday pd.Timestamp.

    Strategies, in order:
    - date/datetime/Timestamp values are accepted as-is;
    - strings with d/m/yyyy or d-m-yyyy are read day-first, always;
    - any other string goes through the generic pandas parser;
    - numbers are spreadsheet serials (25569 = 1970-01-01).

    Returns None for anything that does not yield a valid date.
    """
    if val is None or isinstance(val, bool):
        return None

    ts = None
    if isinstance(val, (date, np.datetime64)):
        try:
            ts = pd.Timestamp(val)
        except (ValueError, OverflowError):
            logger.debug("Date out of range: %s", val)
            return None
    elif isinstance(val, str):
        ts = _parse_date_string(val)
    elif isinstance(val, (int, float, np.number)):
        ts = _from_serial(float(val))

    if ts is None or pd.isna(ts):
        return None
    return pin_to_midday(ts)


def safe_float(val: Any) -> float | None:
    """Coerce a value to float, returning None for non-numeric values.

    Text with a leading number and a trailing unit ("10 unidades") keeps
    the number.
    """
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, str):
        val = val.strip()
        if val.startswith("=") or not val:
            return None
        try:
            result = float(val)
        except ValueError:
            match = _LEADING_NUMBER.match(val)
            if match is None:
                return None
            result = float(match.group(0))
    else:
        try:
            result = float(val)
        except (ValueError, TypeError):
            return None
    if not math.isfinite(result):
        return None
    return result


def is_missing(val: Any) -> bool:
    """True for an empty cell (None or NaN), before any coercion."""
    if val is None:
        return True
    return isinstance(val, float) and math.isnan(val)


def clean_text(val: Any) -> str | None:
    """Strip a text cell; empty cells and blank strings become None."""
    if is_missing(val):
        return None
    if isinstance(val, float) and val.is_integer():
        # Codes typed as numbers come back from Excel as floats
        val = int(val)
    text = str(val).strip()
    return text or None


def clean_headers(header_row) -> list[str | None]:
    """Trim header cells; blank headers become None, duplicates get a suffix."""
    headers: list[str | None] = []
    seen: dict[str, int] = {}
    for cell in header_row:
        name = clean_text(cell)
        if name is None:
            headers.append(None)
            continue
        if name in seen:
            seen[name] += 1
            name = f"{name}_{seen[name]}"
        else:
            seen[name] = 0
        headers.append(name)
    return headers
