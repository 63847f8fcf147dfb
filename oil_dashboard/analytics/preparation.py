"""Data preparation logic for the maintenance record feed."""

from __future__ import annotations

import re
from dataclasses import asdict
from typing import Iterable

import numpy as np
import pandas as pd

from ..data_loader import MaintenanceRecord, coerce_date
from .metrics import ConsumptionUnit, NOT_APPLICABLE, instant_consumption

_NON_ALNUM = re.compile(r"[^0-9a-zA-Z]+")
_MULTI_UNDERSCORE = re.compile(r"_+")

RECORD_COLUMNS = ["id", "date", "odometer", "distance", "oil"]
NUMERIC_COLUMNS = ["odometer", "distance", "oil"]

COLUMN_ALIASES = {
    "id": "id",
    "date": "date",
    "reading_date": "date",
    "odometer": "odometer",
    "odometer_km": "odometer",
    "mileage": "odometer",
    "distance": "distance",
    "distance_km": "distance",
    "km": "distance",
    "oil": "oil",
    "oil_ml": "oil",
    "oil_added": "oil",
    "oil_added_ml": "oil",
}


def _canonicalise(column: str) -> str:
    """Convert column headers to snake_case strings."""
    clean = _NON_ALNUM.sub("_", str(column).strip().lower())
    clean = _MULTI_UNDERSCORE.sub("_", clean).strip("_")
    return clean


def _build_rename_map(columns: Iterable[str]) -> dict[str, str]:
    rename_map: dict[str, str] = {}
    for column in columns:
        canonical = _canonicalise(column)
        rename_map[column] = COLUMN_ALIASES.get(canonical, canonical)
    return rename_map


def _parse_datetime(series: pd.Series) -> pd.Series:
    # written calendar date; tz offsets are dropped, not converted
    dates = series.map(lambda value: None if value is pd.NaT else coerce_date(value))
    return pd.to_datetime(dates, errors="coerce").dt.normalize()


def _consumption_value(oil: object, distance: object, unit: ConsumptionUnit) -> float:
    value = instant_consumption(oil, distance, unit)
    return np.nan if value == NOT_APPLICABLE else float(value)


def records_to_frame(records: Iterable[MaintenanceRecord]) -> pd.DataFrame:
    """Build a raw frame (one row per record, arrival order preserved)."""
    rows = [asdict(record) for record in records]
    if not rows:
        return pd.DataFrame(columns=RECORD_COLUMNS)
    frame = pd.DataFrame(rows, columns=RECORD_COLUMNS)
    frame["date"] = pd.to_datetime(frame["date"], errors="coerce")
    return frame


def prepare_record_dataframe(
    df: pd.DataFrame,
    *,
    unit: ConsumptionUnit = ConsumptionUnit.ML_PER_100KM,
) -> pd.DataFrame:
    """
    Return a normalized copy of the record feed ready for analytics.

    The function standardises column names, parses ``date``, coerces the numeric
    columns (unparseable values become ``NaN``) and sorts ascending by date with
    ties kept in arrival order. Derived columns:
      * ``arrival_order`` position of the row in the incoming frame
      * ``consumption`` per-record consumption in ``unit`` (``NaN`` when not applicable)
    """
    rename_map = _build_rename_map(df.columns)
    working = df.rename(columns=rename_map).copy()

    for column in RECORD_COLUMNS:
        if column not in working.columns:
            working[column] = np.nan if column != "date" else pd.NaT

    working["date"] = _parse_datetime(working["date"])
    for column in NUMERIC_COLUMNS:
        working[column] = pd.to_numeric(working[column], errors="coerce").astype(float)

    working["arrival_order"] = np.arange(len(working))
    working = working.sort_values(["date", "arrival_order"], kind="mergesort", na_position="last")

    working["consumption"] = [
        _consumption_value(oil, distance, unit)
        for oil, distance in zip(working["oil"], working["distance"])
    ]
    working["consumption"] = working["consumption"].astype(float)

    return working.reset_index(drop=True)
