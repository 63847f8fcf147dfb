"""Derived consumption and efficiency metrics for maintenance records.

All functions are pure. Frame arguments are expected to carry ``date``,
``distance`` and ``oil`` columns (see :func:`prepare_record_dataframe`);
missing columns or values count as zero. Rates that cannot be computed are
reported as :data:`NOT_APPLICABLE` instead of ``inf``/``NaN``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np
import pandas as pd

from ..data_loader import coerce_number

NOT_APPLICABLE = "N/A"


class ConsumptionUnit(str, Enum):
    ML_PER_100KM = "ml/100km"
    L_PER_1000KM = "L/1000km"


@dataclass(frozen=True, slots=True)
class AggregateTotals:
    total_distance: float
    total_oil_ml: float


def _rate(oil_ml: float, distance_km: float, unit: ConsumptionUnit) -> float:
    # ml per km is numerically the same as L per 1000 km
    per_km = oil_ml / distance_km
    if unit is ConsumptionUnit.ML_PER_100KM:
        return per_km * 100.0
    return per_km


def _numeric_column(df: pd.DataFrame, column: str) -> pd.Series:
    series = df.get(column)
    if series is None:
        return pd.Series(0.0, index=df.index, dtype="float")
    return pd.to_numeric(series, errors="coerce").fillna(0.0).astype(float)


def _ascending(df: pd.DataFrame) -> pd.DataFrame:
    if df.empty or "date" not in df.columns:
        return df
    keys = ["date", "arrival_order"] if "arrival_order" in df.columns else ["date"]
    return df.sort_values(keys, kind="mergesort", na_position="last")


def instant_consumption(
    oil: object,
    distance: object,
    unit: ConsumptionUnit = ConsumptionUnit.ML_PER_100KM,
) -> float | str:
    """Consumption for a single reading, rounded to two decimals."""
    oil_value = coerce_number(oil)
    distance_value = coerce_number(distance)
    if oil_value is None or distance_value is None or distance_value <= 0:
        return NOT_APPLICABLE
    return round(_rate(oil_value, distance_value, unit), 2)


def aggregate_totals(df: pd.DataFrame) -> AggregateTotals:
    if df.empty:
        return AggregateTotals(total_distance=0.0, total_oil_ml=0.0)
    return AggregateTotals(
        total_distance=float(_numeric_column(df, "distance").sum()),
        total_oil_ml=float(_numeric_column(df, "oil").sum()),
    )


def monitoring_period_days(df: pd.DataFrame) -> int:
    """Whole days between the first and last dated record, never less than one."""
    if df.empty or "date" not in df.columns:
        return 1
    dates = pd.to_datetime(df["date"], errors="coerce").dropna()
    if dates.empty:
        return 1
    span = (dates.max() - dates.min()).days
    return max(int(span), 1)


def daily_distance(df: pd.DataFrame) -> float:
    return aggregate_totals(df).total_distance / monitoring_period_days(df)


def overall_efficiency(df: pd.DataFrame) -> float | str:
    """Kilometres travelled per litre of oil added."""
    totals = aggregate_totals(df)
    if totals.total_oil_ml <= 0:
        return NOT_APPLICABLE
    return totals.total_distance / (totals.total_oil_ml / 1000.0)


def overall_consumption(
    df: pd.DataFrame,
    unit: ConsumptionUnit = ConsumptionUnit.L_PER_1000KM,
) -> float | str:
    totals = aggregate_totals(df)
    if totals.total_distance <= 0:
        return NOT_APPLICABLE
    return _rate(totals.total_oil_ml, totals.total_distance, unit)


def running_efficiency_trend(df: pd.DataFrame) -> pd.DataFrame:
    """
    Return the records in ascending order with cumulative totals and running efficiency.

    ``running_efficiency`` at row *i* is the cumulative distance over rows ``0..i``
    divided by the cumulative oil (in litres) over the same rows. It is ``NaN``
    while no oil has been recorded yet.
    """
    columns = ["cumulative_distance", "cumulative_oil_ml", "running_efficiency"]
    if df.empty:
        return df.reindex(columns=[*df.columns, *columns])

    working = _ascending(df).copy()
    cumulative_distance = _numeric_column(working, "distance").cumsum()
    cumulative_oil = _numeric_column(working, "oil").cumsum()

    working["cumulative_distance"] = cumulative_distance
    working["cumulative_oil_ml"] = cumulative_oil
    working["running_efficiency"] = cumulative_distance / (cumulative_oil.where(cumulative_oil > 0) / 1000.0)
    working["running_efficiency"] = working["running_efficiency"].replace([np.inf, -np.inf], np.nan)
    return working.reset_index(drop=True)


def latest_record(df: pd.DataFrame) -> pd.Series | None:
    """
    Most recent dated record, or ``None`` for an empty frame.

    Undated records sort last but never count as the latest reading unless no
    record carries a date.
    """
    if df.empty:
        return None
    ordered = _ascending(df)
    if "date" in ordered.columns:
        dated = ordered[pd.to_datetime(ordered["date"], errors="coerce").notna()]
        if not dated.empty:
            return dated.iloc[-1]
    return ordered.iloc[-1]
