"""Analytics helpers for the oil consumption dashboard."""

from .metrics import (
    NOT_APPLICABLE,
    AggregateTotals,
    ConsumptionUnit,
    aggregate_totals,
    daily_distance,
    instant_consumption,
    latest_record,
    monitoring_period_days,
    overall_consumption,
    overall_efficiency,
    running_efficiency_trend,
)
from .preparation import prepare_record_dataframe, records_to_frame
from .summaries import DashboardSummary, build_summary, summary_to_frame, format_metric_value
from .breakdowns import build_record_table, build_monthly_breakdown
from .visuals import (
    build_oil_added_chart,
    build_running_efficiency_chart,
    build_consumption_chart,
    build_odometer_chart,
    build_consumption_time_series_chart,
    create_consumption_distribution_plot,
)
from .timeseries import build_consumption_time_series

__all__ = [
    "NOT_APPLICABLE",
    "AggregateTotals",
    "ConsumptionUnit",
    "aggregate_totals",
    "daily_distance",
    "instant_consumption",
    "latest_record",
    "monitoring_period_days",
    "overall_consumption",
    "overall_efficiency",
    "running_efficiency_trend",
    "prepare_record_dataframe",
    "records_to_frame",
    "DashboardSummary",
    "build_summary",
    "summary_to_frame",
    "format_metric_value",
    "build_record_table",
    "build_monthly_breakdown",
    "build_oil_added_chart",
    "build_running_efficiency_chart",
    "build_consumption_chart",
    "build_odometer_chart",
    "build_consumption_time_series_chart",
    "create_consumption_distribution_plot",
    "build_consumption_time_series",
]
