"""Breakdown tables for the oil consumption dashboard."""

from __future__ import annotations

import pandas as pd

from .metrics import ConsumptionUnit, instant_consumption
from .summaries import format_metric_value

RECORD_TABLE_COLUMNS = ["Date", "Odometer (km)", "Distance (km)", "Oil Added (ml)", "Consumption"]
MONTHLY_COLUMNS = ["Month", "Records", "Distance (km)", "Oil Added (ml)", "Consumption"]


def build_record_table(
    df: pd.DataFrame,
    *,
    descending: bool = True,
    unit: ConsumptionUnit = ConsumptionUnit.ML_PER_100KM,
) -> pd.DataFrame:
    """
    Return the historical records formatted for display.

    ``df`` must already be in ascending order (see ``prepare_record_dataframe``);
    ``descending`` only reverses the rows for presentation.
    """
    columns = [*RECORD_TABLE_COLUMNS[:-1], f"Consumption ({unit.value})"]
    if df.empty:
        return pd.DataFrame(columns=columns)

    rows = df.iloc[::-1] if descending else df
    table = pd.DataFrame(
        {
            columns[0]: [format_metric_value(_timestamp(value)) for value in rows.get("date", [])],
            columns[1]: [format_metric_value(value) for value in rows["odometer"]],
            columns[2]: [format_metric_value(value) for value in rows["distance"]],
            columns[3]: [format_metric_value(value) for value in rows["oil"]],
            columns[4]: [
                format_metric_value(instant_consumption(oil, distance, unit))
                for oil, distance in zip(rows["oil"], rows["distance"])
            ],
        }
    )
    return table.reset_index(drop=True)


def build_monthly_breakdown(df: pd.DataFrame, *, unit: ConsumptionUnit = ConsumptionUnit.ML_PER_100KM) -> pd.DataFrame:
    """Aggregate distance and oil added per calendar month, formatted for display."""
    columns = [*MONTHLY_COLUMNS[:-1], f"Consumption ({unit.value})"]
    if df.empty or "date" not in df.columns:
        return pd.DataFrame(columns=columns)

    working = df.dropna(subset=["date"]).copy()
    if working.empty:
        return pd.DataFrame(columns=columns)

    working["month"] = working["date"].dt.to_period("M").dt.to_timestamp()
    grouped = (
        working.groupby("month")
        .agg(
            records=("date", "size"),
            distance=("distance", lambda s: s.fillna(0).sum()),
            oil=("oil", lambda s: s.fillna(0).sum()),
        )
        .reset_index()
        .sort_values("month")
    )

    grouped["consumption"] = [
        format_metric_value(instant_consumption(oil, distance, unit))
        for oil, distance in zip(grouped["oil"], grouped["distance"])
    ]

    result = grouped.rename(
        columns={
            "month": "Month",
            "records": "Records",
            "distance": "Distance (km)",
            "oil": "Oil Added (ml)",
            "consumption": columns[-1],
        }
    )
    result["Records"] = result["Records"].astype(int)
    result["Month"] = result["Month"].dt.strftime("%b %Y")
    return result[columns].reset_index(drop=True)


def _timestamp(value: object) -> pd.Timestamp | None:
    if value is None or pd.isna(value):
        return None
    return pd.Timestamp(value)
