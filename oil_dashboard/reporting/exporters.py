"""Export helpers for the oil consumption analytics."""

from __future__ import annotations

import io
from pathlib import Path

import pandas as pd

from ..analytics.breakdowns import build_monthly_breakdown, build_record_table
from ..analytics.metrics import running_efficiency_trend
from ..analytics.summaries import DashboardSummary, summary_to_frame

try:  # Optional dependency for PDF output
    from reportlab.lib import colors
    from reportlab.lib.pagesizes import A4
    from reportlab.lib.styles import getSampleStyleSheet
    from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

    _REPORTLAB_AVAILABLE = True
except ImportError:  # pragma: no cover - optional dependency
    _REPORTLAB_AVAILABLE = False

_TREND_COLUMNS = ["date", "odometer", "distance", "oil", "cumulative_distance", "cumulative_oil_ml", "running_efficiency"]


def export_excel_report(
    prepared_df: pd.DataFrame,
    summary: DashboardSummary,
    *,
    path: str | Path | None = None,
) -> bytes | Path:
    """
    Build an Excel workbook containing the records and headline analytics.

    If ``path`` is provided, the workbook is written to disk and the path is returned.
    Otherwise the bytes object is returned for download workflows.
    """
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="xlsxwriter") as writer:  # type: ignore[arg-type]
        summary_to_frame(summary).to_excel(writer, sheet_name="Summary", index=False)
        build_record_table(prepared_df, unit=summary.consumption_unit).to_excel(
            writer, sheet_name="Records", index=False
        )

        trend = running_efficiency_trend(prepared_df)
        if not trend.empty:
            trend.reindex(columns=_TREND_COLUMNS).to_excel(writer, sheet_name="Running Efficiency", index=False)

        monthly = build_monthly_breakdown(prepared_df, unit=summary.consumption_unit)
        if not monthly.empty:
            monthly.to_excel(writer, sheet_name="Monthly", index=False)

    buffer.seek(0)
    if path is None:
        return buffer.getvalue()

    target = Path(path)
    target.write_bytes(buffer.read())
    return target


def build_summary_pdf(summary_table: pd.DataFrame) -> bytes:
    """Render only the headline metrics table to PDF."""
    if not _REPORTLAB_AVAILABLE:  # pragma: no cover - optional dependency
        raise ImportError("ReportLab is required for PDF export. Install it via `pip install reportlab`.")

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, leftMargin=36, rightMargin=36, topMargin=42, bottomMargin=36)
    styles = getSampleStyleSheet()
    doc.build([Paragraph("Oil Consumption Summary", styles["Title"]), Spacer(1, 12), _table(summary_table)])
    buffer.seek(0)
    return buffer.getvalue()


def build_pdf_report(prepared_df: pd.DataFrame, summary: DashboardSummary) -> bytes:
    """Create a lightweight PDF report summarising key metrics."""
    if not _REPORTLAB_AVAILABLE:  # pragma: no cover - optional dependency
        raise ImportError("ReportLab is required for PDF export. Install it via `pip install reportlab`.")

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=36,
        rightMargin=36,
        topMargin=42,
        bottomMargin=36,
    )
    styles = getSampleStyleSheet()
    story = [Paragraph("Car Oil Consumption Report", styles["Title"]), Spacer(1, 12)]

    story.extend(
        [
            Paragraph("Headline Metrics", styles["Heading2"]),
            _table(summary_to_frame(summary)),
            Spacer(1, 12),
        ]
    )

    monthly = build_monthly_breakdown(prepared_df, unit=summary.consumption_unit)
    if not monthly.empty:
        story.extend([Paragraph("Monthly Breakdown", styles["Heading2"]), _table(monthly), Spacer(1, 12)])

    records = build_record_table(prepared_df, unit=summary.consumption_unit).head(30)
    if not records.empty:
        story.extend([Paragraph("Latest Records", styles["Heading2"]), _table(records), Spacer(1, 12)])

    doc.build(story)
    buffer.seek(0)
    return buffer.getvalue()


def _table(df: pd.DataFrame) -> Table:
    values = [df.columns.tolist()] + df.astype(str).values.tolist()
    tbl = Table(values, hAlign="LEFT")
    tbl.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#002b55")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("ALIGN", (0, 0), (-1, -1), "LEFT"),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
                ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
            ]
        )
    )
    return tbl
