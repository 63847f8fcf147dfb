"""Streamlit dashboard for car oil consumption."""

from __future__ import annotations

from html import escape
from typing import Sequence

import streamlit as st

from oil_dashboard import LoadResult, load_records, load_settings, prepare_record_dataframe, records_to_frame
from oil_dashboard.analytics import (
    build_summary,
    summary_to_frame,
    build_record_table,
    build_monthly_breakdown,
    build_consumption_time_series,
    running_efficiency_trend,
)
from oil_dashboard.analytics.visuals import (
    build_oil_added_chart,
    build_running_efficiency_chart,
    build_consumption_chart,
    build_odometer_chart,
    build_consumption_time_series_chart,
    create_consumption_distribution_plot,
)
from oil_dashboard.config import DashboardSettings
from oil_dashboard.presentation import SummaryCard, build_summary_cards
from oil_dashboard.reporting import export_excel_report, build_pdf_report, build_summary_pdf

st.set_page_config(page_title="Car Oil Consumption Dashboard", layout="wide")
st.title("🛢️ Car Oil Consumption Dashboard")

_RESULT_KEY = "oil_load_result"

_CARD_STYLE = """
<style>
.oil-card {
    border-radius: 18px;
    background: #ffffff;
    padding: 18px 22px;
    box-shadow: 0 35px 80px rgba(15, 23, 42, 0.08);
    margin-bottom: 1rem;
}
.oil-card h4 {
    margin: 0 0 6px 0;
    font-size: 13px;
    text-transform: uppercase;
    letter-spacing: 0.08em;
    color: #475467;
}
.oil-card .value {
    font-size: 28px;
    font-weight: 700;
    color: #175cd3;
}
.oil-card .caption {
    font-size: 13px;
    color: #98a2b3;
}
</style>
"""


def _download_bytes(data: bytes, *, file_name: str, mime: str, label: str, key: str) -> None:
    st.download_button(
        label,
        data=data,
        file_name=file_name,
        mime=mime,
        use_container_width=True,
        key=key,
    )


def _render_cards(cards: Sequence[SummaryCard], *, per_row: int = 4) -> None:
    st.markdown(_CARD_STYLE, unsafe_allow_html=True)
    for start in range(0, len(cards), per_row):
        columns = st.columns(per_row)
        for column, card in zip(columns, cards[start : start + per_row]):
            with column:
                st.markdown(
                    "<div class='oil-card'>"
                    f"<h4>{escape(card.title)}</h4>"
                    f"<div class='value'>{escape(card.value)}</div>"
                    f"<div class='caption'>{escape(card.caption)}</div>"
                    "</div>",
                    unsafe_allow_html=True,
                )


def _current_result(settings: DashboardSettings) -> LoadResult:
    """Fetch once per browser session; later reruns reuse the stored result."""
    result = st.session_state.get(_RESULT_KEY)
    if result is None:
        st.session_state[_RESULT_KEY] = LoadResult.loading()
        with st.spinner("Loading maintenance records..."):
            result = load_records(settings.base_url, timeout=settings.timeout)
        st.session_state[_RESULT_KEY] = result
    return result


def render_dashboard(result: LoadResult, settings: DashboardSettings) -> None:
    unit = settings.consumption_unit

    if result.is_failed:
        st.error(f"Could not load maintenance records: {result.error}")
        if st.button("Retry", key="retry_load"):
            st.session_state.pop(_RESULT_KEY, None)
            st.rerun()
    elif not result.is_loaded:
        st.info("Loading maintenance records...")

    prepared = prepare_record_dataframe(records_to_frame(result.records), unit=unit)
    summary = build_summary(prepared, unit=unit)

    _render_cards(build_summary_cards(summary))

    trend = running_efficiency_trend(prepared)
    st.plotly_chart(build_oil_added_chart(prepared), use_container_width=True)

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(build_running_efficiency_chart(trend), use_container_width=True)
    with col2:
        st.plotly_chart(build_consumption_chart(prepared, unit=unit), use_container_width=True)

    st.subheader("Odometer progression")
    odometer_fig, odometer_summary = build_odometer_chart(prepared)
    st.plotly_chart(odometer_fig, use_container_width=True)
    if odometer_summary:
        with st.expander("Odometer OLS summary"):
            st.code(odometer_summary)

    st.subheader("Time-series trend (monthly)")
    ts_result = build_consumption_time_series(prepared, unit=unit)
    st.plotly_chart(build_consumption_time_series_chart(ts_result.frame, unit=unit), use_container_width=True)
    if ts_result.model_summary:
        if ts_result.slope is not None:
            st.caption(f"OLS slope: {ts_result.slope:.2f} {unit.value} per month")
        with st.expander("Time-series regression details"):
            st.code(ts_result.model_summary)

    st.subheader("Distribution of consumption")
    st.pyplot(create_consumption_distribution_plot(prepared, unit=unit), clear_figure=True)

    st.subheader("Detailed records")
    tabs = st.tabs(["Records", "Monthly", "Summary"])
    with tabs[0]:
        st.dataframe(build_record_table(prepared, unit=unit), use_container_width=True, hide_index=True)
    with tabs[1]:
        st.dataframe(build_monthly_breakdown(prepared, unit=unit), use_container_width=True, hide_index=True)
    with tabs[2]:
        summary_table = summary_to_frame(summary)
        st.dataframe(summary_table, use_container_width=True, hide_index=True)
        try:
            summary_pdf = build_summary_pdf(summary_table)
        except ImportError as exc:
            st.warning(str(exc))
        else:
            _download_bytes(
                summary_pdf,
                file_name="summary_metrics.pdf",
                mime="application/pdf",
                label="Download PDF summary",
                key="summary_pdf_dl",
            )

    if prepared.empty:
        return

    st.subheader("Downloads")
    _download_bytes(
        export_excel_report(prepared, summary),
        file_name="oil_consumption.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        label="📊 Download Excel workbook",
        key="download_excel",
    )
    try:
        pdf_bytes = build_pdf_report(prepared, summary)
    except ImportError as exc:
        st.warning(str(exc))
    else:
        _download_bytes(
            pdf_bytes,
            file_name="oil_consumption.pdf",
            mime="application/pdf",
            label="📄 Download PDF summary",
            key="download_pdf",
        )


def main() -> None:
    settings = load_settings()
    with st.sidebar:
        st.header("Data source")
        st.caption(f"API: `{settings.base_url}`")
        st.caption(f"Consumption unit: {settings.consumption_unit.value}")
        if st.button("Reload records", use_container_width=True):
            st.session_state.pop(_RESULT_KEY, None)

    render_dashboard(_current_result(settings), settings)


if __name__ == "__main__":
    main()
