"""
Planning Engine Dashboard
=========================

Thin presentation layer over the engine. Upload the backend payloads:
  1. P&L summary          → calibrated assumptions + data review
  2. Driver forecast      → Base / Upside / Downside scenarios
  3. ML forecast or model comparison (optional) → reconciliation report
  4. Dashboard KPIs (optional)  → next fiscal year preview

All numbers are computed by the engine packages; this file only loads JSON
and displays results.

Run: streamlit run app/streamlit_app.py
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import altair as alt
import pandas as pd
import streamlit as st

# ---------------------------------------------------------------------------
# Make project root importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from calibration.calibrator import calibrate_with_diagnostics
from calibration.history import growth_series, seasonal_profile, summarize_history
from calibration.preview import preview_assumptions
from core.config import EngineConfig
from core.utils import to_major_units, to_minor_units
from data_prep.loader import (
    kpis_from_payload,
    records_from_summary,
    series_from_forecast_result,
    series_from_ml_result,
)
from data_prep.validators import MalformedRecordError, validate_records
from engine.runway import net_burn, runway, runway_progress_pct
from models.registry import UnknownModelError, select_best_model
from reconcile.reconciler import reconcile
from scenarios.projector import project

CONFIG = EngineConfig()


# ---------------------------------------------------------------------------
# Cached engine calls
# ---------------------------------------------------------------------------
@st.cache_data(show_spinner="Reading P&L summary...")
def _load_records(raw: bytes):
    return records_from_summary(json.loads(raw))


@st.cache_data(show_spinner="Reading dashboard KPIs...")
def _load_kpis(raw: bytes):
    return kpis_from_payload(json.loads(raw))


@st.cache_data(show_spinner="Reading driver forecast...")
def _load_driver_series(raw: bytes):
    return series_from_forecast_result(json.loads(raw))


@st.cache_data(show_spinner="Reading statistical forecast...")
def _load_model_series(raw: bytes):
    """Accept either a single ML forecast result or a model comparison."""
    payload = json.loads(raw)
    if "models" in payload:
        model, series, mape = select_best_model(payload)
        return model.value, series, mape
    series, mape = series_from_ml_result(payload)
    return payload.get("model", "model"), series, mape


def _fmt_money(cents):
    return f"${to_major_units(cents):,.0f}"


def _plot_multi_line(df, *, x, ys, title, y_title, height=280):
    if len(df) == 0 or any(y not in df.columns for y in ys):
        return
    d = df[[x] + ys].copy()
    d[x] = pd.to_datetime(d[x], errors="coerce")
    long = d.melt(id_vars=[x], value_vars=ys, var_name="series", value_name="value")
    chart = (
        alt.Chart(long).mark_line()
        .encode(
            x=alt.X(f"{x}:T", title="Month"),
            y=alt.Y("value:Q", title=y_title, axis=alt.Axis(format=",.0f")),
            color=alt.Color("series:N", title="Series"),
        )
        .properties(title=title, height=height)
    )
    st.altair_chart(chart, use_container_width=True)


# ═══════════════════════════════════════════════════════════════════════════
# SIDEBAR — Payloads
# ═══════════════════════════════════════════════════════════════════════════
st.set_page_config(page_title="Planning Engine", layout="wide")
st.title("Assumptions, Scenarios & Reconciliation")

with st.sidebar:
    st.header("Backend Payloads")
    pl_file = st.file_uploader("P&L summary (JSON)", type=["json"])
    driver_file = st.file_uploader("Driver forecast result (JSON)", type=["json"])
    model_file = st.file_uploader("ML forecast / model comparison (JSON)", type=["json"])
    kpi_file = st.file_uploader("Dashboard KPIs (JSON, optional)", type=["json"])
    cash = st.number_input("Cash on hand ($)", min_value=0.0, value=0.0, step=1000.0)

if pl_file is None:
    st.info("Upload a P&L summary to begin.")
    st.stop()

try:
    records = _load_records(pl_file.getvalue())
except MalformedRecordError as exc:
    st.error("P&L summary failed validation:\n" + exc.result.summary())
    st.stop()

# ═══════════════════════════════════════════════════════════════════════════
# DATA REVIEW
# ═══════════════════════════════════════════════════════════════════════════
st.subheader("Data Review")
summary = summarize_history(records, config=CONFIG)
c1, c2, c3, c4 = st.columns(4)
c1.metric("Months", summary.months)
c2.metric("Total Revenue", _fmt_money(summary.total_revenue))
c3.metric("Total Expenses", _fmt_money(summary.total_expenses))
c4.metric("Net Income", _fmt_money(summary.total_net_income))

vr = validate_records(records, config=CONFIG)
if vr.warnings:
    st.warning(vr.summary())

profile = seasonal_profile(records)
if len(profile):
    st.markdown("**Seasonal profile (average revenue by month)**")
    st.bar_chart(profile.set_index("month")["avg_revenue"])
_plot_multi_line(
    growth_series(records),
    x="period",
    ys=["growth_rate_pct"],
    title="Month-over-month revenue growth (%)",
    y_title="Growth (%)",
)

# ═══════════════════════════════════════════════════════════════════════════
# ASSUMPTIONS
# ═══════════════════════════════════════════════════════════════════════════
st.subheader("Calibrated Assumptions")
calibration = calibrate_with_diagnostics(records, config=CONFIG)
if calibration.insufficient_history:
    st.info("Fewer than two months of history; showing default assumptions.")
st.dataframe(calibration.assumptions.summary(), use_container_width=True, hide_index=True)
if calibration.clamped_fields:
    st.caption("Clamped into bounds: " + ", ".join(calibration.clamped_fields))

burn = net_burn(records[-1]) if records else 0
months = runway(to_minor_units(cash), burn) if cash > 0 else None
r1, r2 = st.columns(2)
r1.metric("Cash Runway", f"{months:.1f} months" if months is not None else "N/A")
r2.progress(int(runway_progress_pct(months, CONFIG.runway_target_months)))

if kpi_file is not None:
    try:
        kpis = _load_kpis(kpi_file.getvalue())
    except MalformedRecordError as exc:
        st.error("Dashboard KPIs failed validation:\n" + exc.result.summary())
    else:
        preview = preview_assumptions(
            calibration.assumptions,
            monthly_revenue=kpis.total_revenue,
            net_burn=kpis.net_burn,
        )
        st.markdown("**Next fiscal year at these assumptions**")
        p1, p2, p3, p4 = st.columns(4)
        p1.metric("Revenue", _fmt_money(preview.projected_revenue))
        p2.metric("COGS", _fmt_money(preview.projected_cogs))
        p3.metric("Opex", _fmt_money(preview.projected_opex))
        p4.metric("EBITDA", _fmt_money(preview.projected_ebitda), f"{preview.ebitda_margin:.1%} margin")

# ═══════════════════════════════════════════════════════════════════════════
# SCENARIOS
# ═══════════════════════════════════════════════════════════════════════════
if driver_file is None:
    st.info("Upload a driver forecast result to project scenarios.")
    st.stop()

try:
    baseline = _load_driver_series(driver_file.getvalue())
except MalformedRecordError as exc:
    st.error("Driver forecast failed validation:\n" + exc.result.summary())
    st.stop()
except ValueError as exc:
    st.error(f"Driver forecast could not be used: {exc}")
    st.stop()
bundle = project(baseline)

st.subheader("Scenarios")
st.dataframe(bundle.to_dataframe(), use_container_width=True, hide_index=True)
s = bundle.summary()
d1, d2 = st.columns(2)
d1.metric("Upside vs Base", _fmt_money(s["upside_delta"]))
d2.metric("Downside vs Base", _fmt_money(s["downside_delta"]))
_plot_multi_line(
    bundle.comparison(),
    x="period",
    ys=["base_net", "upside_net", "downside_net"],
    title="Net income by scenario",
    y_title="Net income (cents)",
)

# ═══════════════════════════════════════════════════════════════════════════
# RECONCILIATION
# ═══════════════════════════════════════════════════════════════════════════
if model_file is None:
    st.stop()

try:
    model_name, model_series, mape = _load_model_series(model_file.getvalue())
except (MalformedRecordError, UnknownModelError) as exc:
    st.error(f"Statistical forecast could not be used: {exc}")
    st.stop()

report = reconcile(baseline, model_series, {"mape": mape} if mape is not None else None, config=CONFIG)

st.subheader(f"Reconciliation vs {model_name}")
st.dataframe(report.to_dataframe(), use_container_width=True, hide_index=True)
for insight in report.details:
    if insight.kind.value == "warning":
        st.warning(insight.message)
    elif insight.kind.value == "success":
        st.success(insight.message)
    else:
        st.info(insight.message)

overlay = pd.DataFrame({
    "period": [str(p.period) for p in baseline.head(report.compared_periods)],
    "driver": [p.revenue for p in baseline.head(report.compared_periods)],
    "model": [p.revenue for p in model_series.head(report.compared_periods)],
})
_plot_multi_line(
    overlay,
    x="period",
    ys=["driver", "model"],
    title="Revenue: driver-based vs statistical",
    y_title="Revenue (cents)",
)
