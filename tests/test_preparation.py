from __future__ import annotations

import datetime as dt
import math

import pandas as pd

from oil_dashboard.analytics.metrics import ConsumptionUnit
from oil_dashboard.analytics.preparation import prepare_record_dataframe, records_to_frame
from oil_dashboard.data_loader import MaintenanceRecord


def _sample_raw_frame() -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "ID": 7,
                "Reading Date": "2024-03-05T08:30:00.000Z",
                "Mileage": "2100",
                "Distance (km)": 400,
                "Oil Added (ml)": 300,
            },
            {
                "ID": 6,
                "Reading Date": "2024-02-01",
                "Mileage": 1700,
                "Distance (km)": 0,
                "Oil Added (ml)": 150,
            },
        ]
    )


def test_prepare_record_dataframe_normalizes_columns_and_order():
    prepared = prepare_record_dataframe(_sample_raw_frame())
    assert {"id", "date", "odometer", "distance", "oil", "arrival_order", "consumption"}.issubset(prepared.columns)

    assert list(prepared["id"]) == [6, 7]
    assert prepared.loc[1, "date"] == pd.Timestamp("2024-03-05")
    assert prepared.loc[1, "odometer"] == 2100.0
    assert prepared.loc[1, "consumption"] == 75.0
    assert math.isnan(prepared.loc[0, "consumption"])


def test_prepare_record_dataframe_respects_unit():
    prepared = prepare_record_dataframe(_sample_raw_frame(), unit=ConsumptionUnit.L_PER_1000KM)
    assert prepared.loc[1, "consumption"] == 0.75


def test_records_to_frame_round_trips_through_preparation():
    records = [
        MaintenanceRecord(id=1, date=dt.date(2024, 1, 1), odometer=1000.0, distance=None, oil=None),
        MaintenanceRecord(id=2, date=None, odometer=None, distance=50.0, oil=20.0),
    ]
    frame = records_to_frame(records)
    assert list(frame.columns) == ["id", "date", "odometer", "distance", "oil"]

    prepared = prepare_record_dataframe(frame)
    assert list(prepared["id"]) == [1, 2]
    assert pd.isna(prepared.loc[1, "date"])
    assert prepared.loc[1, "consumption"] == 40.0


def test_prepare_handles_empty_input():
    prepared = prepare_record_dataframe(records_to_frame([]))
    assert prepared.empty
    assert {"date", "distance", "oil", "consumption"}.issubset(prepared.columns)


def test_prepare_record_dataframe_keeps_written_calendar_date():
    raw = pd.DataFrame(
        [
            {"id": 1, "date": "2024-03-05T23:30:00-05:00", "odometer": 100, "distance": 10, "oil": 5},
            {"id": 2, "date": "2024-03-06T00:30:00+02:00", "odometer": 110, "distance": 10, "oil": 5},
        ]
    )
    prepared = prepare_record_dataframe(raw)
    assert list(prepared["date"]) == [pd.Timestamp("2024-03-05"), pd.Timestamp("2024-03-06")]
