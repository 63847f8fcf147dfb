from __future__ import annotations

import pytest

from oil_dashboard.analytics.metrics import ConsumptionUnit
from oil_dashboard.config import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    ConfigurationError,
    DashboardSettings,
    load_settings,
    parse_consumption_unit,
)


def test_defaults_when_environment_is_empty():
    settings = load_settings({})
    assert settings == DashboardSettings()
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.timeout == DEFAULT_TIMEOUT_SECONDS
    assert settings.consumption_unit is ConsumptionUnit.ML_PER_100KM


def test_environment_overrides():
    settings = load_settings(
        {
            "OIL_API_URL": "https://records.example.test/",
            "OIL_API_TIMEOUT": "2.5",
            "OIL_CONSUMPTION_UNIT": "l/1000km",
        }
    )
    assert settings.base_url == "https://records.example.test"
    assert settings.timeout == 2.5
    assert settings.consumption_unit is ConsumptionUnit.L_PER_1000KM


@pytest.mark.parametrize(
    "environ",
    [
        {"OIL_API_URL": "ftp://records.example.test"},
        {"OIL_API_TIMEOUT": "soon"},
        {"OIL_API_TIMEOUT": "0"},
        {"OIL_CONSUMPTION_UNIT": "mpg"},
    ],
)
def test_invalid_settings_raise(environ):
    with pytest.raises(ConfigurationError):
        load_settings(environ)


def test_parse_consumption_unit_accepts_enum_names():
    assert parse_consumption_unit("ML_PER_100KM") is ConsumptionUnit.ML_PER_100KM
    assert parse_consumption_unit(ConsumptionUnit.L_PER_1000KM) is ConsumptionUnit.L_PER_1000KM
