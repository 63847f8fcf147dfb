"""Fetch and normalize maintenance records from the content API."""

from __future__ import annotations

import datetime as dt
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping

import pandas as pd
import requests

_LOGGER = logging.getLogger(__name__)

OILS_ENDPOINT = "/api/oils?populate=*"


class DataSourceError(RuntimeError):
    """The content API could not be reached or returned an unusable payload."""


@dataclass(frozen=True, slots=True)
class MaintenanceRecord:
    id: Any
    date: dt.date | None
    odometer: float | None
    distance: float | None
    oil: float | None


class LoadStatus(str, Enum):
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Outcome of one load attempt, handed by value to the renderer."""

    status: LoadStatus
    records: tuple[MaintenanceRecord, ...] = field(default_factory=tuple)
    error: str | None = None

    @classmethod
    def loading(cls) -> "LoadResult":
        return cls(status=LoadStatus.LOADING)

    @classmethod
    def loaded(cls, records: Iterable[MaintenanceRecord]) -> "LoadResult":
        return cls(status=LoadStatus.LOADED, records=tuple(records))

    @classmethod
    def failed(cls, error: str) -> "LoadResult":
        return cls(status=LoadStatus.FAILED, error=error)

    @property
    def is_loaded(self) -> bool:
        return self.status is LoadStatus.LOADED

    @property
    def is_failed(self) -> bool:
        return self.status is LoadStatus.FAILED


def build_records_url(base_url: str) -> str:
    return base_url.rstrip("/") + OILS_ENDPOINT


def coerce_number(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def coerce_date(value: object) -> dt.date | None:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    parsed = pd.to_datetime(value.strip(), errors="coerce")
    if pd.isna(parsed):
        return None
    # calendar date as written, offsets are not converted
    return parsed.date()


def _flatten_item(item: object, position: int) -> Mapping[str, Any]:
    if not isinstance(item, Mapping):
        raise DataSourceError(f"Record #{position} is not an object: {item!r}")
    attributes = item.get("attributes")
    if isinstance(attributes, Mapping):
        return {"id": item.get("id"), **attributes}
    return item


def normalize_payload(payload: object) -> list[MaintenanceRecord]:
    """
    Convert an API response body into records sorted ascending by date.

    Both the flat shape ``{"data": [{id, date, ...}]}`` and the nested shape
    ``{"data": [{id, attributes: {date, ...}}]}`` are accepted. Records sharing a
    date keep their arrival order; undated records sort last.
    """
    if not isinstance(payload, Mapping):
        raise DataSourceError("Response body is not a JSON object.")
    items = payload.get("data")
    if items is None:
        raise DataSourceError("Response body has no 'data' field.")
    if not isinstance(items, list):
        raise DataSourceError("Response 'data' field is not a list.")

    records: list[MaintenanceRecord] = []
    for position, item in enumerate(items):
        flat = _flatten_item(item, position)
        records.append(
            MaintenanceRecord(
                id=flat.get("id"),
                date=coerce_date(flat.get("date")),
                odometer=coerce_number(flat.get("odometer")),
                distance=coerce_number(flat.get("distance")),
                oil=coerce_number(flat.get("oil")),
            )
        )

    return sorted(records, key=lambda record: (record.date is None, record.date or dt.date.min))


def fetch_records(
    base_url: str,
    *,
    session: requests.Session | None = None,
    timeout: float = 10.0,
) -> list[MaintenanceRecord]:
    """
    Retrieve the maintenance records once.

    Raises
    ------
    DataSourceError
        On connection errors, non-2xx responses, undecodable JSON or an
        unexpected payload shape.
    """
    url = build_records_url(base_url)
    client = session or requests
    _LOGGER.debug("Fetching maintenance records from %s", url)
    try:
        response = client.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise DataSourceError(f"Error calling oil records API: {exc}") from exc

    try:
        payload = response.json()
    except ValueError as exc:
        raise DataSourceError(f"Oil records API returned invalid JSON: {exc}") from exc

    records = normalize_payload(payload)
    _LOGGER.debug("Received %d maintenance records", len(records))
    return records


def load_records(
    base_url: str,
    *,
    session: requests.Session | None = None,
    timeout: float = 10.0,
) -> LoadResult:
    """Fetch records and wrap the outcome; failures are logged once and never raised."""
    try:
        records = fetch_records(base_url, session=session, timeout=timeout)
    except DataSourceError as exc:
        _LOGGER.error("Loading maintenance records failed: %s", exc)
        return LoadResult.failed(str(exc))
    return LoadResult.loaded(records)
