"""Plotly and Matplotlib visualisations for the oil consumption dashboard."""

from __future__ import annotations

from typing import Tuple

import numpy as np
import pandas as pd
import plotly.express as px
import statsmodels.api as sm
from matplotlib import pyplot as plt
import seaborn as sns

from .metrics import ConsumptionUnit

sns.set_theme(style="whitegrid")
_BLUE = "#2563eb"
_GREEN = "#059669"
_PURPLE = "#8884d8"
_ORANGE = "#FF9F43"


def _empty_figure(message: str):
    fig = px.scatter()
    fig.add_annotation(text=message, showarrow=False)
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(height=320, margin=dict(l=10, r=10, t=40, b=10))
    return fig


def _dated(df: pd.DataFrame, *columns: str) -> pd.DataFrame:
    if df.empty or {"date", *columns} - set(df.columns):
        return df.iloc[0:0]
    return df.dropna(subset=["date", *columns])


def build_oil_added_chart(df: pd.DataFrame):
    """Oil added per reading over time."""
    data = _dated(df, "oil")
    if data.empty:
        return _empty_figure("No oil records available.")
    fig = px.line(
        data,
        x="date",
        y="oil",
        markers=True,
        labels={"date": "Date", "oil": "Oil added (ml)"},
        title="Oil consumption trend",
    )
    fig.update_traces(line_color=_PURPLE, name="Oil Added (ml)")
    fig.update_layout(height=400)
    return fig


def build_running_efficiency_chart(trend: pd.DataFrame):
    """Cumulative km per litre as readings accumulate."""
    data = _dated(trend, "running_efficiency")
    if data.empty:
        return _empty_figure("Not enough oil data for an efficiency trend.")
    fig = px.line(
        data,
        x="date",
        y="running_efficiency",
        markers=True,
        labels={"date": "Date", "running_efficiency": "Efficiency (km/L)"},
        title="Running efficiency",
    )
    fig.update_traces(line_color=_GREEN)
    fig.update_layout(height=400)
    return fig


def build_consumption_chart(df: pd.DataFrame, *, unit: ConsumptionUnit = ConsumptionUnit.ML_PER_100KM):
    """Per-reading consumption as bars."""
    data = _dated(df, "consumption")
    if data.empty:
        return _empty_figure("No consumption measurements available.")
    fig = px.bar(
        data,
        x="date",
        y="consumption",
        labels={"date": "Date", "consumption": f"Consumption ({unit.value})"},
        title="Consumption per reading",
    )
    fig.update_traces(marker_color=_BLUE)
    fig.update_layout(height=400)
    return fig


def build_odometer_chart(df: pd.DataFrame) -> Tuple[object, str | None]:
    """Return the odometer progression (Plotly) plus an OLS summary of km per day."""
    data = _dated(df, "odometer")
    if data.empty:
        return _empty_figure("No odometer readings available."), None

    working = data.copy()
    working["day"] = (working["date"] - working["date"].min()).dt.days.astype(float)

    fig = px.scatter(
        working,
        x="date",
        y="odometer",
        labels={"date": "Date", "odometer": "Odometer (km)"},
        title="Odometer progression",
    )
    fig.update_layout(height=420)

    summary_text = None
    if len(working) >= 3 and working["day"].nunique() > 1:
        X = sm.add_constant(working["day"])
        model = sm.OLS(working["odometer"], X).fit()
        working["regression"] = model.predict(X)
        fig.add_trace(px.line(working.sort_values("date"), x="date", y="regression").data[0])
        fig.data[-1].name = "OLS fit"
        fig.data[-1].line.color = _ORANGE
        summary_text = model.summary().as_text()

    return fig, summary_text


def build_consumption_time_series_chart(ts_frame: pd.DataFrame, *, unit: ConsumptionUnit = ConsumptionUnit.ML_PER_100KM):
    """Plot per-period consumption with an optional trend line."""
    if ts_frame.empty or "consumption" not in ts_frame.columns or ts_frame["consumption"].isna().all():
        return _empty_figure("Insufficient data for time-series analysis.")

    fig = px.line(
        ts_frame,
        x="period",
        y="consumption",
        markers=True,
        title="Monthly consumption trend",
        labels={"period": "Month", "consumption": f"Consumption ({unit.value})"},
    )
    if "trend" in ts_frame.columns and ts_frame["trend"].notna().any():
        fig.add_trace(px.line(ts_frame, x="period", y="trend").data[0])
        fig.data[-1].name = "Trend (OLS)"
        fig.data[-1].line.color = "#FF6B6B"
    fig.update_layout(height=420, legend_title_text="")
    return fig


def create_consumption_distribution_plot(df: pd.DataFrame, *, unit: ConsumptionUnit = ConsumptionUnit.ML_PER_100KM):
    """Return a Matplotlib histogram of per-reading consumption."""
    fig, ax = plt.subplots(figsize=(6, 4))
    series = df["consumption"].dropna() if "consumption" in df.columns else pd.Series(dtype="float")
    series = series[np.isfinite(series)]
    if series.empty:
        ax.text(0.5, 0.5, "No consumption measurements available.", ha="center", va="center")
        ax.axis("off")
        return fig

    sns.histplot(series, bins=min(20, max(len(series), 1)), color=_PURPLE, ax=ax)
    ax.axvline(series.median(), color="#475467", linestyle="--", linewidth=1, label="Median")
    ax.set_title("Distribution of consumption per reading")
    ax.set_xlabel(f"Consumption ({unit.value})")
    ax.set_ylabel("Readings")
    ax.legend()
    fig.tight_layout()
    return fig
