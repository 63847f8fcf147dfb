"""Headline metrics for the oil consumption dashboard."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

import numpy as np
import pandas as pd

from .metrics import (
    NOT_APPLICABLE,
    ConsumptionUnit,
    aggregate_totals,
    daily_distance,
    instant_consumption,
    latest_record,
    monitoring_period_days,
    overall_consumption,
    overall_efficiency,
)


@dataclass(slots=True)
class DashboardSummary:
    """Lightweight container for headline analytics."""

    record_count: int
    total_distance: float
    total_oil_ml: float
    monitoring_period_days: int
    daily_distance: float
    overall_efficiency: float | str
    overall_consumption: float | str
    consumption_unit: ConsumptionUnit
    first_date: pd.Timestamp | None
    latest_date: pd.Timestamp | None
    latest_odometer: float | None
    latest_oil_ml: float | None
    latest_consumption: float | str
    report_date: pd.Timestamp


def _optional_number(value: object) -> float | None:
    if value is None or pd.isna(value):
        return None
    return float(value)


def _optional_timestamp(value: object) -> pd.Timestamp | None:
    if value is None or pd.isna(value):
        return None
    return pd.Timestamp(value)


def build_summary(
    df: pd.DataFrame,
    *,
    unit: ConsumptionUnit = ConsumptionUnit.ML_PER_100KM,
) -> DashboardSummary:
    """Generate headline KPIs from the prepared record dataframe."""
    report_date = pd.Timestamp.now().normalize()
    totals = aggregate_totals(df)
    latest = latest_record(df)

    if latest is None:
        return DashboardSummary(
            record_count=0,
            total_distance=0.0,
            total_oil_ml=0.0,
            monitoring_period_days=1,
            daily_distance=0.0,
            overall_efficiency=NOT_APPLICABLE,
            overall_consumption=NOT_APPLICABLE,
            consumption_unit=unit,
            first_date=None,
            latest_date=None,
            latest_odometer=None,
            latest_oil_ml=None,
            latest_consumption=NOT_APPLICABLE,
            report_date=report_date,
        )

    dates = pd.to_datetime(df.get("date", pd.Series(dtype="datetime64[ns]")), errors="coerce").dropna()

    return DashboardSummary(
        record_count=int(len(df)),
        total_distance=totals.total_distance,
        total_oil_ml=totals.total_oil_ml,
        monitoring_period_days=monitoring_period_days(df),
        daily_distance=daily_distance(df),
        overall_efficiency=overall_efficiency(df),
        overall_consumption=overall_consumption(df),
        consumption_unit=unit,
        first_date=dates.min() if not dates.empty else None,
        latest_date=_optional_timestamp(latest.get("date")),
        latest_odometer=_optional_number(latest.get("odometer")),
        latest_oil_ml=_optional_number(latest.get("oil")),
        latest_consumption=instant_consumption(latest.get("oil"), latest.get("distance"), unit),
        report_date=report_date,
    )


def summary_to_frame(summary: DashboardSummary) -> pd.DataFrame:
    """Convert summary metrics into a two-column Metric/Value table."""
    unit = summary.consumption_unit.value
    metrics: List[tuple[str, object, str]] = [
        ("Records", summary.record_count, ""),
        ("First reading", summary.first_date, ""),
        ("Latest reading", summary.latest_date, ""),
        ("Latest odometer", summary.latest_odometer, "km"),
        ("Last oil added", summary.latest_oil_ml, "ml"),
        ("Latest consumption", summary.latest_consumption, unit),
        ("Total distance", summary.total_distance, "km"),
        ("Total oil added", summary.total_oil_ml, "ml"),
        ("Monitoring period", summary.monitoring_period_days, "days"),
        ("Daily distance", summary.daily_distance, "km/day"),
        ("Overall efficiency", summary.overall_efficiency, "km/L"),
        ("Overall consumption", summary.overall_consumption, ConsumptionUnit.L_PER_1000KM.value),
    ]

    rows: List[Dict[str, object]] = []
    for label, value, suffix in metrics:
        rows.append({"Metric": label, "Value": format_metric_value(value, suffix)})

    rows.append({"Metric": "Report generated", "Value": summary.report_date.strftime("%Y-%m-%d")})
    return pd.DataFrame(rows)


def format_metric_value(value: object, suffix: str = "") -> str:
    """Render a metric for display; unavailable values become ``N/A``."""
    if value is None or value is pd.NaT or (isinstance(value, str) and value == NOT_APPLICABLE):
        return NOT_APPLICABLE
    if isinstance(value, pd.Timestamp):
        return value.strftime("%d %b %Y")
    if isinstance(value, (float, np.floating)):
        if not np.isfinite(value):
            return NOT_APPLICABLE
        text = f"{value:,.0f}" if float(value).is_integer() else f"{value:,.2f}"
    elif isinstance(value, (int, np.integer)):
        text = f"{int(value):,}"
    else:
        text = str(value)
    return f"{text} {suffix}".strip()
