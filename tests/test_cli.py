from __future__ import annotations

import requests

import cli
from oil_dashboard import data_loader

PAYLOAD = {
    "data": [
        {"id": 1, "date": "2024-01-01", "odometer": 1000, "distance": 0, "oil": 0},
        {"id": 2, "date": "2024-01-11", "odometer": 1500, "distance": 500, "oil": 2500},
    ]
}


class _FakeResponse:
    def raise_for_status(self) -> None:
        return None

    def json(self):
        return PAYLOAD


def _clear_env(monkeypatch) -> None:
    for name in ("OIL_API_URL", "OIL_API_TIMEOUT", "OIL_CONSUMPTION_UNIT"):
        monkeypatch.delenv(name, raising=False)


def test_cli_returns_one_when_records_cannot_be_loaded(monkeypatch, tmp_path):
    _clear_env(monkeypatch)

    def _refuse(url, timeout):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(data_loader.requests, "get", _refuse)
    excel, pdf = tmp_path / "report.xlsx", tmp_path / "report.pdf"
    assert cli.main(["--base-url", "http://example.test", "--excel", str(excel), "--pdf", str(pdf)]) == 1
    assert not excel.exists()
    assert not pdf.exists()


def test_cli_rejects_unknown_unit(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    assert cli.main(["--unit", "gallons", "--excel", str(tmp_path / "r.xlsx")]) == 2


def test_cli_writes_excel_and_pdf(monkeypatch, tmp_path, capsys):
    _clear_env(monkeypatch)
    calls = []

    def _get(url, timeout):
        calls.append(url)
        return _FakeResponse()

    monkeypatch.setattr(data_loader.requests, "get", _get)
    excel, pdf = tmp_path / "report.xlsx", tmp_path / "report.pdf"
    assert cli.main(["--base-url", "http://example.test/", "--excel", str(excel), "--pdf", str(pdf)]) == 0

    assert calls == ["http://example.test/api/oils?populate=*"]
    assert excel.read_bytes()[:2] == b"PK"
    assert pdf.read_bytes().startswith(b"%PDF")
    assert "Total distance" in capsys.readouterr().out
