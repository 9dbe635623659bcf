"""Streamlit front-end for the NAV investment simulator."""
from __future__ import annotations

from datetime import date
from decimal import Decimal

import pandas as pd
import streamlit as st

from nav_simulator import ProjectFutureUseCase, SimulateHistoricalUseCase, TrailingReturnsUseCase, ValuationSeries
from nav_simulator.application.dto import HistoricalRequest, InvestmentType, ProjectionRequest
from nav_simulator.application.use_cases import default_start_month
from nav_simulator.domain.returns import PeriodReturnAnalyzer, Window
from nav_simulator.errors import NavSimulatorError
from nav_simulator.infrastructure.repositories.file_repositories import repository_for
from nav_simulator.presentation.report import (
    breakdown_to_dataframe,
    records_to_dataframe,
    render_csv,
    render_html,
)


st.set_page_config(page_title="NAV Simulator", layout="wide")
st.title("Mutual Fund Investment Simulator")

TYPE_LABELS = {
    InvestmentType.SIP: "Monthly SIP",
    InvestmentType.STEP_UP: "Step-up SIP",
    InvestmentType.ONE_TIME: "One-time",
}
MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


if "fund" not in st.session_state:
    st.session_state["fund"] = None

feed_file = st.file_uploader("Upload fund NAV feed", type=["json", "xlsx", "csv"])
if feed_file is not None:
    try:
        st.session_state["fund"] = repository_for(feed_file.read(), filename=feed_file.name).load_fund_details()
    except ValueError as exc:
        st.error(f"Could not read feed: {exc}")
        st.session_state["fund"] = None

fund = st.session_state.get("fund")
if not fund:
    st.info("Upload a fund details JSON or a date/nav sheet to begin.")
    st.stop()

series = ValuationSeries(fund.records)
st.subheader(fund.meta.scheme_name or "Fund")
if fund.rejected:
    st.caption(f"{len(fund.rejected)} malformed rows were skipped")
latest = series.latest()
if latest is not None:
    st.metric("Latest NAV", f"{latest.value}", help=f"NAV as of {latest.nav_date.isoformat()}")

today = date.today()
period = st.radio("Period", [w.value for w in Window], index=3, horizontal=True)
returns = TrailingReturnsUseCase(series).execute(today)
selected_return = returns[Window(period)]
if selected_return is not None:
    st.metric(f"{period} return", f"{selected_return.change_percent:.2f}%")
chart_records = PeriodReturnAnalyzer().window_records(series, period, today)
st.line_chart(records_to_dataframe(chart_records).set_index("date"))

past_tab, future_tab = st.tabs(["Past Analysis", "SIP Calculator"])

with past_tab:
    if not series:
        st.warning("The uploaded feed has no usable NAV rows, so past performance cannot be simulated.")
    else:
        investment_type = st.radio(
            "Investment type", list(TYPE_LABELS), format_func=TYPE_LABELS.get, horizontal=True, key="past_type"
        )
        amount = st.number_input("Amount", min_value=100, value=5000, step=500, key="past_amount")
        step_up = 10
        if investment_type is InvestmentType.STEP_UP:
            step_up = st.number_input("Yearly increase (%)", min_value=1, max_value=50, value=10, key="past_step_up")

        months_by_year = series.months_by_year()
        default = default_start_month(series, today)
        years = list(months_by_year)
        year = st.selectbox("From year", years, index=years.index(default[0]) if default else 0)
        months = months_by_year[year]
        month_index = months.index(default[1]) if default and default[0] == year and default[1] in months else 0
        month = st.selectbox("From month", months, index=month_index, format_func=lambda m: MONTH_NAMES[m - 1])

        try:
            result = SimulateHistoricalUseCase(series).execute(
                HistoricalRequest(
                    investment_type=investment_type,
                    amount=Decimal(str(amount)),
                    start_year=year,
                    start_month=month,
                    step_up_percent=Decimal(str(step_up)),
                    as_of=today,
                )
            )
        except NavSimulatorError as exc:
            st.error(str(exc))
        else:
            col1, col2, col3 = st.columns(3)
            col1.metric("Invested", f"{result.total_invested:.2f}")
            col2.metric("Current value", f"{result.current_value:.2f}")
            col3.metric("Returns", f"{result.returns:.2f}", f"{result.returns_percentage:.2f}%")
            st.dataframe(breakdown_to_dataframe(result.yearly_breakdown))
            csv_col, html_col = st.columns(2)
            csv_col.download_button(
                "Download breakdown CSV",
                data=render_csv(result.yearly_breakdown),
                file_name="yearly_breakdown.csv",
                mime="text/csv",
            )
            html_col.download_button(
                "Download breakdown HTML",
                data=render_html(result).encode("utf-8"),
                file_name="yearly_breakdown.html",
                mime="text/html",
            )

with future_tab:
    future_type = st.radio(
        "Investment type", list(TYPE_LABELS), format_func=TYPE_LABELS.get, horizontal=True, key="future_type"
    )
    future_amount = st.number_input("Amount", min_value=100, value=5000, step=500, key="future_amount")
    horizon = st.slider("Years", min_value=1, max_value=40, value=10)
    expected_return = st.slider("Expected annual return (%)", min_value=1, max_value=30, value=12)
    future_step_up = st.slider("Yearly increase (%)", min_value=0, max_value=50, value=10)

    try:
        projection = ProjectFutureUseCase().execute(
            ProjectionRequest(
                investment_type=future_type,
                amount=Decimal(str(future_amount)),
                years=horizon,
                annual_return=Decimal(str(expected_return)),
                step_up_percent=Decimal(str(future_step_up)),
            )
        )
    except NavSimulatorError as exc:
        st.error(str(exc))
    else:
        summary = pd.DataFrame(
            [
                {"metric": "Total invested", "amount": f"{projection.total_invested:.2f}"},
                {"metric": "Future value", "amount": f"{projection.future_value:.2f}"},
                {"metric": "Returns", "amount": f"{projection.returns:.2f}"},
                {"metric": "Returns %", "amount": f"{projection.returns_percentage:.2f}"},
            ]
        )
        st.table(summary)
