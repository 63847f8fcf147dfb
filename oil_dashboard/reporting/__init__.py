"""Reporting utilities for exporting the oil consumption analysis."""

from .exporters import export_excel_report, build_pdf_report, build_summary_pdf

__all__ = ["export_excel_report", "build_pdf_report", "build_summary_pdf"]
