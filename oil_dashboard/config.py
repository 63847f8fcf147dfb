"""Runtime configuration for the oil consumption dashboard."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from .analytics.metrics import ConsumptionUnit

ENV_BASE_URL = "OIL_API_URL"
ENV_TIMEOUT = "OIL_API_TIMEOUT"
ENV_CONSUMPTION_UNIT = "OIL_CONSUMPTION_UNIT"

DEFAULT_BASE_URL = "http://localhost:1337"
DEFAULT_TIMEOUT_SECONDS = 10.0


class ConfigurationError(ValueError):
    """Raised when an environment setting cannot be interpreted."""


@dataclass(frozen=True, slots=True)
class DashboardSettings:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    consumption_unit: ConsumptionUnit = ConsumptionUnit.ML_PER_100KM


def parse_consumption_unit(value: str | ConsumptionUnit) -> ConsumptionUnit:
    """Accept either the enum or its label (case-insensitive)."""
    if isinstance(value, ConsumptionUnit):
        return value
    label = str(value).strip().lower()
    for unit in ConsumptionUnit:
        if unit.value.lower() == label or unit.name.lower() == label:
            return unit
    choices = ", ".join(unit.value for unit in ConsumptionUnit)
    raise ConfigurationError(f"Unknown consumption unit {value!r}; expected one of: {choices}")


def load_settings(environ: Mapping[str, str] | None = None) -> DashboardSettings:
    """
    Build settings from environment variables.

    ``OIL_API_URL`` is the API base URL (the ``/api/oils`` path is appended by the
    loader), ``OIL_API_TIMEOUT`` the request timeout in seconds and
    ``OIL_CONSUMPTION_UNIT`` the per-record consumption unit.
    """
    env = os.environ if environ is None else environ

    base_url = (env.get(ENV_BASE_URL) or DEFAULT_BASE_URL).strip().rstrip("/")
    if not base_url.startswith(("http://", "https://")):
        raise ConfigurationError(f"{ENV_BASE_URL} must be an http(s) URL, got {base_url!r}")

    raw_timeout = env.get(ENV_TIMEOUT)
    timeout = DEFAULT_TIMEOUT_SECONDS
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError(f"{ENV_TIMEOUT} must be a number, got {raw_timeout!r}") from exc
        if timeout <= 0:
            raise ConfigurationError(f"{ENV_TIMEOUT} must be positive, got {timeout}")

    raw_unit = env.get(ENV_CONSUMPTION_UNIT)
    unit = parse_consumption_unit(raw_unit) if raw_unit else ConsumptionUnit.ML_PER_100KM

    return DashboardSettings(base_url=base_url, timeout=timeout, consumption_unit=unit)
