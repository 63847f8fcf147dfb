from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest

from oil_dashboard.analytics.metrics import (
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
from oil_dashboard.analytics.preparation import prepare_record_dataframe


def _two_readings() -> pd.DataFrame:
    raw = pd.DataFrame(
        [
            {"id": 1, "date": "2024-01-01", "odometer": 1000, "distance": 0, "oil": 0},
            {"id": 2, "date": "2024-01-11", "odometer": 1500, "distance": 500, "oil": 2500},
        ]
    )
    return prepare_record_dataframe(raw)


def _history() -> pd.DataFrame:
    raw = pd.DataFrame(
        [
            {"id": 4, "date": "2024-03-20", "odometer": 2300, "distance": 300, "oil": 250},
            {"id": 1, "date": "2024-01-01", "odometer": 1000, "distance": 0, "oil": 0},
            {"id": 3, "date": "2024-02-15", "odometer": 2000, "distance": 500, "oil": 500},
            {"id": 2, "date": "2024-01-20", "odometer": 1500, "distance": 500, "oil": None},
        ]
    )
    return prepare_record_dataframe(raw)


def test_instant_consumption_defaults_to_ml_per_100km():
    assert instant_consumption(2500, 500) == 500.0
    assert instant_consumption(250, 300) == 83.33


def test_instant_consumption_in_litres_per_1000km():
    assert instant_consumption(2500, 500, ConsumptionUnit.L_PER_1000KM) == 5.0


@pytest.mark.parametrize("distance", [0, None, float("nan"), -10, "not a number"])
def test_instant_consumption_without_usable_distance_is_not_applicable(distance):
    assert instant_consumption(500, distance) == NOT_APPLICABLE


def test_instant_consumption_without_oil_is_not_applicable():
    assert instant_consumption(None, 500) == NOT_APPLICABLE


def test_empty_records_produce_safe_defaults():
    empty = prepare_record_dataframe(pd.DataFrame())
    assert aggregate_totals(empty) == AggregateTotals(total_distance=0.0, total_oil_ml=0.0)
    assert aggregate_totals(pd.DataFrame()) == AggregateTotals(total_distance=0.0, total_oil_ml=0.0)
    assert monitoring_period_days(empty) == 1
    assert daily_distance(empty) == 0.0
    assert overall_efficiency(empty) == NOT_APPLICABLE
    assert overall_consumption(empty) == NOT_APPLICABLE
    assert latest_record(empty) is None
    assert running_efficiency_trend(empty).empty


def test_two_reading_example():
    records = _two_readings()
    assert aggregate_totals(records) == AggregateTotals(total_distance=500.0, total_oil_ml=2500.0)
    assert monitoring_period_days(records) == 10
    assert daily_distance(records) == 50.0
    assert overall_efficiency(records) == 200.0
    assert overall_consumption(records) == 5.0
    assert overall_consumption(records, ConsumptionUnit.ML_PER_100KM) == 500.0


def test_single_record_period_is_one_day():
    single = prepare_record_dataframe(
        pd.DataFrame([{"id": 1, "date": "2024-05-01", "odometer": 900, "distance": 120, "oil": 0}])
    )
    assert monitoring_period_days(single) == 1
    assert daily_distance(single) == 120.0
    assert overall_efficiency(single) == NOT_APPLICABLE


def test_missing_values_count_as_zero():
    records = _history()
    totals = aggregate_totals(records)
    assert totals.total_distance == 1300.0
    assert totals.total_oil_ml == 750.0


def test_running_efficiency_matches_direct_recomputation():
    records = _history()
    trend = running_efficiency_trend(records)

    assert list(trend["id"]) == [1, 2, 3, 4]
    distances = records["distance"].fillna(0).tolist()
    oils = records["oil"].fillna(0).tolist()
    for index, row in trend.iterrows():
        cumulative_distance = sum(distances[: index + 1])
        cumulative_oil = sum(oils[: index + 1])
        assert row["cumulative_distance"] == cumulative_distance
        assert row["cumulative_oil_ml"] == cumulative_oil
        if cumulative_oil == 0:
            assert math.isnan(row["running_efficiency"])
        else:
            assert row["running_efficiency"] == pytest.approx(cumulative_distance / (cumulative_oil / 1000))


def test_running_efficiency_never_contains_infinity():
    trend = running_efficiency_trend(_history())
    assert not np.isinf(trend["running_efficiency"]).any()


def test_latest_record_is_last_in_ascending_order():
    latest = latest_record(_history())
    assert latest["id"] == 4
    assert latest["odometer"] == 2300


def test_latest_record_ties_keep_arrival_order():
    raw = pd.DataFrame(
        [
            {"id": "a", "date": "2024-06-01", "odometer": 100, "distance": 10, "oil": 5},
            {"id": "b", "date": "2024-06-01", "odometer": 110, "distance": 10, "oil": 5},
        ]
    )
    assert latest_record(prepare_record_dataframe(raw))["id"] == "b"


def test_latest_record_skips_undated_rows():
    raw = pd.DataFrame(
        [
            {"id": 1, "date": "2024-01-01", "odometer": 1000, "distance": 0, "oil": 0},
            {"id": 2, "date": "2024-03-01", "odometer": 3000, "distance": 2000, "oil": 400},
            {"id": 3, "date": None, "odometer": 5, "distance": 5, "oil": 0},
        ]
    )
    prepared = prepare_record_dataframe(raw)
    assert list(prepared["id"]) == [1, 2, 3]
    assert latest_record(prepared)["id"] == 2


def test_latest_record_falls_back_to_undated_rows():
    raw = pd.DataFrame([{"id": 9, "date": None, "odometer": 40, "distance": 5, "oil": 1}])
    assert latest_record(prepare_record_dataframe(raw))["id"] == 9
