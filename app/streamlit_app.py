"""
Money Model — Unit Economics & Growth Dashboard
===============================================

Tabs:
  1. Inputs:       Pick an industry preset, then edit acquisition costs and offers
  2. Results:      Customers-paid-for ratio, key metrics, insights
  3. Waterfall:    Per-customer profit built up from CAC and each offer
  4. Costs:        Optional itemized cost entry that overrides category totals
  5. Projections:  Reinvested-profit growth over 1-36 months

Run: streamlit run app/streamlit_app.py
"""

from __future__ import annotations

import logging
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

from core.config import MAX_PROJECTION_MONTHS, ProjectionConfig
from core.logging_config import configure_logging
from core.schema import FUNNEL_INPUT_FIELDS, FunnelInputs

from data_prep.presets import DEFAULT_PRESET, INDUSTRY_PRESETS, get_preset
from data_prep.cost_items import CATEGORY_TO_INPUT_FIELD, COST_CATEGORIES, CostLedger
from data_prep.validators import validate_inputs, validate_projection_config

from engine.unit_economics import calculate_unit_economics
from engine.projection import run_growth_projection, projection_to_dataframe

from pm.metrics import summarize_projection, waterfall_table
from pm.decisions import generate_health_report
from pm.report import build_csv_report, report_filename

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Form layout: (section title, [(field, label, step)])
# ---------------------------------------------------------------------------
INPUT_SECTIONS = [
    ("Customer Acquisition Costs", [
        ("ad_spend", "Ad Spend ($)", 10.0),
        ("sales_costs", "Sales Costs ($)", 10.0),
        ("overhead_allocation", "Overhead Allocation ($)", 10.0),
    ]),
    ("Attraction Offer", [
        ("attraction_offer_revenue", "Revenue ($)", 10.0),
        ("attraction_offer_costs", "Costs ($)", 10.0),
    ]),
    ("Upsell", [
        ("upsell_revenue", "Revenue ($)", 10.0),
        ("upsell_costs", "Costs ($)", 10.0),
        ("upsell_take_rate", "Take Rate (%)", 1.0),
    ]),
    ("Downsell", [
        ("downsell_revenue", "Revenue ($)", 10.0),
        ("downsell_costs", "Costs ($)", 10.0),
        ("downsell_take_rate", "Take Rate (%)", 1.0),
    ]),
    ("Continuity", [
        ("continuity_first_payment", "First Payment ($)", 10.0),
        ("continuity_costs", "Costs ($)", 10.0),
        ("continuity_take_rate", "Take Rate (%)", 1.0),
    ]),
]

CATEGORY_TITLES = {
    "sales": "Sales Costs",
    "attraction": "Attraction Offer Costs",
    "upsell": "Upsell Costs",
    "downsell": "Downsell Costs",
    "continuity": "Continuity Costs",
    "overhead": "Overhead",
}


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------
def _fmt_money(val):
    """Whole-dollar amount with commas."""
    return f"${val:,.0f}"


def _fmt_compact(val):
    """$1.2M / $35K / $900 style, for headline cards."""
    if abs(val) >= 1_000_000:
        return f"${val / 1_000_000:.1f}M"
    if abs(val) >= 1_000:
        return f"${val / 1_000:.0f}K"
    return f"${val:.0f}"


# ---------------------------------------------------------------------------
# Chart helpers
# ---------------------------------------------------------------------------
def _plot_waterfall(wf: pd.DataFrame, *, healthy: bool, height=320):
    d = wf.copy()
    d["low"] = d[["start", "end"]].min(axis=1)
    d["high"] = d[["start", "end"]].max(axis=1)
    d["colour"] = [
        ("#10b981" if healthy else "#ef4444") if step == "Net Profit"
        else ("#3b82f6" if value >= 0 else "#ef4444")
        for step, value in zip(d["step"], d["value"])
    ]
    chart = (
        alt.Chart(d).mark_bar()
        .encode(
            x=alt.X("step:N", sort=list(d["step"]), title=None),
            y=alt.Y("low:Q", title="Per customer ($)", axis=alt.Axis(format=",.0f")),
            y2="high:Q",
            color=alt.Color("colour:N", scale=None),
            tooltip=["step", alt.Tooltip("value:Q", format=",.2f")],
        )
        .properties(title="Profit Waterfall (per customer)", height=height)
    )
    st.altair_chart(chart, use_container_width=True)


def _plot_multi_line(df, *, x, ys, title, y_title, height=280):
    if len(df) == 0 or any(y not in df.columns for y in ys):
        return
    long = df[[x] + ys].melt(id_vars=[x], value_vars=ys, var_name="series", value_name="value")
    chart = (
        alt.Chart(long).mark_line(point=True)
        .encode(
            x=alt.X(f"{x}:Q", title="Month"),
            y=alt.Y("value:Q", title=y_title, axis=alt.Axis(format=",.0f")),
            color=alt.Color("series:N", title="Series"),
        )
        .properties(title=title, height=height)
    )
    st.altair_chart(chart, use_container_width=True)


def _plot_stacked_bars(df, *, x, ys, title, y_title, height=280):
    long = df[[x] + ys].melt(id_vars=[x], value_vars=ys, var_name="stream", value_name="value")
    chart = (
        alt.Chart(long).mark_bar()
        .encode(
            x=alt.X(f"{x}:O", title="Month"),
            y=alt.Y("value:Q", title=y_title, stack="zero", axis=alt.Axis(format=",.0f")),
            color=alt.Color("stream:N", title="Stream"),
        )
        .properties(title=title, height=height)
    )
    st.altair_chart(chart, use_container_width=True)


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------
def _load_preset_into_state(key: str) -> None:
    preset = get_preset(key)
    for name, value in preset.inputs.to_dict().items():
        st.session_state[f"in_{name}"] = float(value)
    st.session_state["preset"] = key
    logger.info("Loaded preset %s", key)


def _init_state() -> None:
    if "preset" not in st.session_state:
        _load_preset_into_state(DEFAULT_PRESET)
    if "cost_ledger" not in st.session_state:
        st.session_state["cost_ledger"] = CostLedger()
    st.session_state.setdefault("use_itemized_costs", False)


def _current_inputs() -> FunnelInputs:
    inputs = FunnelInputs(**{name: float(st.session_state[f"in_{name}"]) for name in FUNNEL_INPUT_FIELDS})
    if st.session_state["use_itemized_costs"]:
        inputs = st.session_state["cost_ledger"].apply_to(inputs)
    return inputs


# ---------------------------------------------------------------------------
# Tabs
# ---------------------------------------------------------------------------
def _render_inputs_tab() -> None:
    itemized = st.session_state["use_itemized_costs"]
    overridden = set(CATEGORY_TO_INPUT_FIELD.values()) if itemized else set()
    if itemized:
        st.info("Itemized costs are on: cost fields below come from the Costs tab.")

    for title, rows in INPUT_SECTIONS:
        st.markdown(f"**{title}**")
        cols = st.columns(len(rows))
        for col, (name, label, step) in zip(cols, rows):
            col.number_input(
                label, key=f"in_{name}", step=step, format="%.2f",
                disabled=name in overridden,
            )


def _render_results_tab(result, health) -> None:
    colour = "green" if result.is_healthy else "red"
    st.markdown(f"### Customers Paid For: :{colour}[{result.customers_funded_ratio:.2f}]")
    st.caption("Target: 2.0+ customers (You pay for 1, profit pays for 2 more)")
    if result.is_healthy:
        st.success("Healthy! Your business model can scale profitably.")
    else:
        st.error("Needs improvement. Optimize your offers to reach 2.0+")

    k1, k2, k3, k4 = st.columns(4)
    k1.metric("30-Day Profit", _fmt_money(result.profit_period))
    k2.metric("Cash Multiplier", f"{result.cash_multiplier:.2f}x")
    k3.metric("Total CAC", _fmt_money(result.total_cac))
    k4.metric("Profit Margin", f"{result.profit_margin_pct:.1f}%")

    left, right = st.columns(2)
    with left:
        st.markdown("**Revenue Breakdown (30 Days)**")
        st.dataframe(pd.DataFrame([
            {"Line": "Total Revenue", "Amount": result.revenue_period},
            {"Line": "Product Costs", "Amount": -result.costs_period},
            {"Line": "Customer Acquisition", "Amount": -result.total_cac},
            {"Line": "Net Profit", "Amount": result.profit_period},
        ]), use_container_width=True, hide_index=True)
    with right:
        st.markdown("**Profit by Offer Type**")
        st.dataframe(pd.DataFrame([
            {"Offer": "Attraction Offer", "Profit": result.attraction_profit},
            {"Offer": "Upsells", "Profit": result.upsell_profit},
            {"Offer": "Downsells", "Profit": result.downsell_profit},
            {"Offer": "Continuity", "Profit": result.continuity_profit},
        ]), use_container_width=True, hide_index=True)

    st.markdown("**Key Insights**")
    st.markdown(health.insights_markdown())
    for flag in health.flags:
        st.warning(flag)


def _render_costs_tab() -> None:
    ledger: CostLedger = st.session_state["cost_ledger"]
    st.toggle("Use itemized costs", key="use_itemized_costs")

    for category in COST_CATEGORIES:
        with st.expander(f"{CATEGORY_TITLES[category]}: {_fmt_money(ledger.category_total(category))}"):
            for item in ledger.items(category):
                with st.form(f"edit_{item.id}"):
                    c1, c2, c3, c4 = st.columns([3, 2, 1, 1])
                    name = c1.text_input("Name", value=item.name, help=item.description)
                    amount = c2.number_input("Amount ($)", value=float(item.amount), step=10.0)
                    save = c3.form_submit_button("Save")
                    remove = c4.form_submit_button("Remove")
                if remove:
                    ledger.remove_item(category, item.id)
                    st.rerun()
                elif save:
                    try:
                        ledger.update_item(category, item.id, name=name, amount=amount)
                    except ValueError as e:
                        st.error(str(e))
                    else:
                        st.rerun()

            with st.form(f"add_{category}", clear_on_submit=True):
                c1, c2, c3 = st.columns([3, 2, 3])
                name = c1.text_input("Name")
                amount = c2.number_input("Amount ($)", min_value=0.0, step=10.0)
                description = c3.text_input("Description (optional)")
                if st.form_submit_button("Add item"):
                    try:
                        ledger.add_item(category, name, amount, description or None)
                    except ValueError as e:
                        st.error(str(e))
                    else:
                        st.rerun()

    df = ledger.to_dataframe()
    if len(df) > 0:
        st.dataframe(df.drop(columns=["id"]), use_container_width=True, hide_index=True)


def _render_projections_tab(inputs, result) -> None:
    c1, c2, c3 = st.columns(3)
    initial = c1.number_input("Initial Customers to Acquire", min_value=1, value=10, step=1)
    months = c2.number_input(
        "Projection Period (Months)", min_value=1, max_value=MAX_PROJECTION_MONTHS, value=12, step=1
    )
    reinvest = c3.slider("Profit Reinvestment Rate (%)", min_value=0, max_value=100, value=100)

    config = ProjectionConfig(
        initial_customers=int(initial),
        projection_months=int(months),
        reinvestment_rate_pct=float(reinvest),
    )
    vr = validate_projection_config(config)
    if not vr.is_valid:
        logger.warning("Projection controls rejected: %s", vr.errors)
        st.error(vr.summary())
        return

    records = run_growth_projection(inputs, result, config)
    summary = summarize_projection(records)
    df = projection_to_dataframe(records)

    k1, k2, k3, k4 = st.columns(4)
    k1.metric("Total Customers", f"{summary.total_customers:,}", help=f"After {summary.periods} months")
    k2.metric("Cumulative Profit", _fmt_compact(summary.cumulative_profit))
    k3.metric("Avg Monthly Growth", f"{summary.avg_monthly_growth_pct:.1f}%")
    k4.metric("Growth Multiple", f"{summary.growth_multiple:.2f}x")

    _plot_multi_line(df, x="period", ys=["new_customers", "total_customers"],
                     title="Customer Growth", y_title="Customers")
    left, right = st.columns(2)
    with left:
        _plot_stacked_bars(
            df, x="period",
            ys=["revenue_attraction", "revenue_upsell", "revenue_downsell", "revenue_continuity"],
            title="Revenue by Stream", y_title="Revenue ($)",
        )
    with right:
        _plot_multi_line(df, x="period", ys=["profit", "cumulative_profit"],
                         title="Profit", y_title="Profit ($)")

    with st.expander("Projection table", expanded=False):
        st.dataframe(df, use_container_width=True, hide_index=True)


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------
def render() -> None:
    configure_logging()
    st.set_page_config(page_title="Money Model Calculator", layout="wide")
    _init_state()

    head_left, head_mid, head_right = st.columns([3, 2, 1])
    head_left.title("Money Model Calculator")
    preset_key = head_mid.selectbox(
        "Industry template",
        options=list(INDUSTRY_PRESETS),
        index=list(INDUSTRY_PRESETS).index(st.session_state["preset"]),
        format_func=lambda k: INDUSTRY_PRESETS[k].name,
    )
    if preset_key != st.session_state["preset"]:
        _load_preset_into_state(preset_key)
        st.rerun()
    st.caption(INDUSTRY_PRESETS[preset_key].description)

    inputs = _current_inputs()
    vr = validate_inputs(inputs)
    if not vr.is_valid:
        logger.warning("Inputs rejected: %s", vr.errors)
        st.error("Input validation failed:\n" + vr.summary())
        return
    for w in vr.warnings:
        st.warning(w)

    result = calculate_unit_economics(inputs)
    health = generate_health_report(result)

    head_right.download_button(
        "Export CSV",
        data=build_csv_report(inputs, result),
        file_name=report_filename(),
        mime="text/csv",
    )

    tab_inputs, tab_results, tab_chart, tab_costs, tab_proj = st.tabs(
        ["Inputs", "Results", "Waterfall", "Costs", "Projections"]
    )
    with tab_inputs:
        _render_inputs_tab()
    with tab_results:
        _render_results_tab(result, health)
    with tab_chart:
        _plot_waterfall(waterfall_table(result), healthy=result.is_healthy)
    with tab_costs:
        _render_costs_tab()
    with tab_proj:
        _render_projections_tab(inputs, result)


def main() -> None:
    """Console-script entry point: hand this file to `streamlit run`."""
    from streamlit.web import cli as stcli

    sys.argv = ["streamlit", "run", str(Path(__file__).resolve())]
    sys.exit(stcli.main())


if __name__ == "__main__":
    render()
