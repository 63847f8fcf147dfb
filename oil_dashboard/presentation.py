"""View models for the dashboard summary cards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .analytics.metrics import ConsumptionUnit
from .analytics.summaries import DashboardSummary, format_metric_value


@dataclass(frozen=True, slots=True)
class SummaryCard:
    title: str
    value: str
    caption: str


def build_summary_cards(summary: DashboardSummary) -> List[SummaryCard]:
    """Cards shown above the charts; unavailable figures read ``N/A``."""
    unit = summary.consumption_unit.value
    latest_caption = (
        f"Reading of {format_metric_value(summary.latest_date)}"
        if summary.latest_date is not None
        else "No readings yet"
    )
    return [
        SummaryCard("Latest Reading", format_metric_value(summary.latest_odometer, "km"), latest_caption),
        SummaryCard("Last Oil Added", format_metric_value(summary.latest_oil_ml, "ml"), "Volume added"),
        SummaryCard("Consumption Rate", format_metric_value(summary.latest_consumption, unit), "Latest measurement"),
        SummaryCard("Total Distance", format_metric_value(summary.total_distance, "km"), "All records"),
        SummaryCard("Total Oil Added", format_metric_value(summary.total_oil_ml, "ml"), "All records"),
        SummaryCard("Efficiency", format_metric_value(summary.overall_efficiency, "km/L"), "Distance per litre"),
        SummaryCard(
            "Average Consumption",
            format_metric_value(summary.overall_consumption, ConsumptionUnit.L_PER_1000KM.value),
            "Across the monitoring period",
        ),
        SummaryCard(
            "Daily Distance",
            format_metric_value(summary.daily_distance, "km/day"),
            f"Over {format_metric_value(summary.monitoring_period_days, 'days')}",
        ),
    ]
