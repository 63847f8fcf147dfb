"""Command-line entrypoint for generating oil consumption reports."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from oil_dashboard import load_records, load_settings, prepare_record_dataframe, records_to_frame
from oil_dashboard.analytics import build_summary, summary_to_frame
from oil_dashboard.config import ConfigurationError, parse_consumption_unit
from oil_dashboard.reporting import export_excel_report, build_pdf_report

_LOGGER = logging.getLogger("oil_dashboard.cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate oil consumption analytics from the records API.")
    parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help="API base URL (defaults to $OIL_API_URL or http://localhost:1337).",
    )
    parser.add_argument(
        "--unit",
        type=str,
        default=None,
        help="Per-record consumption unit: 'ml/100km' or 'L/1000km' (defaults to $OIL_CONSUMPTION_UNIT).",
    )
    parser.add_argument(
        "--excel",
        type=Path,
        default=Path("oil_consumption.xlsx"),
        help="Destination path for the Excel analytics workbook.",
    )
    parser.add_argument(
        "--pdf",
        type=Path,
        default=Path("oil_consumption.pdf"),
        help="Destination path for the PDF summary report.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings()
        unit = parse_consumption_unit(args.unit) if args.unit else settings.consumption_unit
    except ConfigurationError as exc:
        _LOGGER.error("Invalid configuration: %s", exc)
        return 2

    base_url = args.base_url or settings.base_url
    result = load_records(base_url, timeout=settings.timeout)
    if result.is_failed:
        return 1

    prepared = prepare_record_dataframe(records_to_frame(result.records), unit=unit)
    summary = build_summary(prepared, unit=unit)
    print(summary_to_frame(summary).to_string(index=False))

    export_excel_report(prepared, summary, path=args.excel)

    try:
        pdf_bytes = build_pdf_report(prepared, summary)
    except ImportError as exc:
        _LOGGER.warning("PDF export skipped: %s", exc)
    else:
        args.pdf.write_bytes(pdf_bytes)

    print(f"Analytics generated:\n - Excel: {args.excel}\n - PDF: {args.pdf if args.pdf.exists() else 'skipped'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
