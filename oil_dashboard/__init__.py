"""Oil consumption dashboard package."""

from .data_loader import (
    DataSourceError,
    LoadResult,
    LoadStatus,
    MaintenanceRecord,
    fetch_records,
    load_records,
    normalize_payload,
)
from .analytics.preparation import prepare_record_dataframe, records_to_frame
from .analytics.summaries import DashboardSummary, build_summary
from .config import DashboardSettings, load_settings

__all__ = [
    "DataSourceError",
    "LoadResult",
    "LoadStatus",
    "MaintenanceRecord",
    "fetch_records",
    "load_records",
    "normalize_payload",
    "prepare_record_dataframe",
    "records_to_frame",
    "DashboardSummary",
    "build_summary",
    "DashboardSettings",
    "load_settings",
]
