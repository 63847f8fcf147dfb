"""Time-series utilities for oil consumption."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd
import statsmodels.api as sm

from .metrics import ConsumptionUnit

_COLUMNS = ["period", "distance", "oil_ml", "consumption", "trend"]


@dataclass(slots=True)
class TimeSeriesResult:
    frame: pd.DataFrame
    model_summary: str | None
    slope: float | None


def _empty_result() -> TimeSeriesResult:
    return TimeSeriesResult(frame=pd.DataFrame(columns=_COLUMNS), model_summary=None, slope=None)


def build_consumption_time_series(
    df: pd.DataFrame,
    freq: str = "MS",
    *,
    unit: ConsumptionUnit = ConsumptionUnit.ML_PER_100KM,
) -> TimeSeriesResult:
    """Return per-period distance, oil and consumption plus a trend estimate via OLS."""
    if df.empty or "date" not in df.columns:
        return _empty_result()

    indexed = df.dropna(subset=["date"]).copy()
    if indexed.empty:
        return _empty_result()

    indexed["date"] = pd.to_datetime(indexed["date"])
    indexed = indexed.set_index("date").sort_index()

    totals = indexed[["distance", "oil"]].fillna(0.0).resample(freq).sum()
    if totals.empty:
        return _empty_result()

    frame = totals.reset_index().rename(columns={"date": "period", "oil": "oil_ml"})
    per_km = frame["oil_ml"] / frame["distance"].where(frame["distance"] > 0)
    frame["consumption"] = per_km * 100.0 if unit is ConsumptionUnit.ML_PER_100KM else per_km

    model_summary = None
    slope = None
    frame["trend"] = np.nan
    valid = frame["consumption"].notna().to_numpy()
    if valid.sum() >= 3:
        x = np.arange(len(frame), dtype=float)
        model = sm.OLS(frame.loc[valid, "consumption"].to_numpy(), sm.add_constant(x[valid])).fit()
        frame["trend"] = model.predict(sm.add_constant(x))
        model_summary = model.summary().as_text()
        params = np.asarray(model.params)
        slope = float(params[1]) if len(params) > 1 else None

    return TimeSeriesResult(frame=frame[_COLUMNS], model_summary=model_summary, slope=slope)
