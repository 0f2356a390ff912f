from __future__ import annotations

import math
from dataclasses import replace

from hypothesis import given, settings, strategies as st

from core.config import ProjectionConfig
from core.schema import FUNNEL_INPUT_FIELDS, TAKE_RATE_FIELDS, FunnelInputs
from engine.projection import run_growth_projection
from engine.unit_economics import calculate_unit_economics


def _signed(low: float, high: float):
    # zero or at least 0.01 in magnitude; denormal denominators would overflow a ratio
    return st.one_of(
        st.just(0.0),
        st.floats(min_value=0.01, max_value=high),
        st.floats(min_value=low, max_value=-0.01),
    )


money = _signed(-1e6, 1e6)
take_rate = _signed(-50.0, 200.0)
unit_rate = st.floats(min_value=0.0, max_value=100.0, allow_nan=False, allow_infinity=False)


@st.composite
def funnel_inputs(draw, cac=money):
    values = {}
    for name in FUNNEL_INPUT_FIELDS:
        if name in TAKE_RATE_FIELDS:
            values[name] = draw(take_rate)
        elif name in ("ad_spend", "sales_costs", "overhead_allocation"):
            values[name] = draw(cac)
        else:
            values[name] = draw(money)
    return FunnelInputs(**values)


@given(inputs=funnel_inputs())
def test_calculator_is_total_and_finite(inputs: FunnelInputs) -> None:
    r = calculate_unit_economics(inputs)
    for name, value in r.to_dict().items():
        if name != "is_healthy":
            assert math.isfinite(value), name


@given(inputs=funnel_inputs())
def test_calculator_is_deterministic(inputs: FunnelInputs) -> None:
    assert calculate_unit_economics(inputs) == calculate_unit_economics(inputs)


@given(inputs=funnel_inputs())
def test_offer_profits_sum_to_gross_profit(inputs: FunnelInputs) -> None:
    r = calculate_unit_economics(inputs)
    offers = r.attraction_profit + r.upsell_profit + r.downsell_profit + r.continuity_profit
    assert math.isclose(offers, r.revenue_period - r.costs_period, rel_tol=1e-9, abs_tol=1e-6)
    assert math.isclose(
        r.profit_period, r.revenue_period - r.costs_period - r.total_cac, rel_tol=1e-9, abs_tol=1e-6
    )


@given(inputs=funnel_inputs(cac=st.just(0.0)))
def test_zero_cac_zeroes_ratios(inputs: FunnelInputs) -> None:
    r = calculate_unit_economics(inputs)
    assert r.customers_funded_ratio == 0
    assert r.cash_multiplier == 0
    assert r.is_healthy is False


@given(inputs=funnel_inputs())
def test_healthy_flag_matches_threshold(inputs: FunnelInputs) -> None:
    r = calculate_unit_economics(inputs)
    assert r.is_healthy == (r.customers_funded_ratio >= 2)


@given(
    cost=st.floats(min_value=0.0, max_value=1e5, allow_nan=False),
    margin=st.floats(min_value=0.0, max_value=1e5, allow_nan=False),
    low=unit_rate,
    high=unit_rate,
    stream=st.sampled_from(["upsell", "downsell", "continuity"]),
)
def test_raising_take_rate_never_lowers_stream_profit(cost, margin, low, high, stream) -> None:
    low, high = sorted((low, high))
    revenue_field = "continuity_first_payment" if stream == "continuity" else f"{stream}_revenue"
    base = FunnelInputs(**{revenue_field: cost + margin, f"{stream}_costs": cost})

    p_low = getattr(calculate_unit_economics(replace(base, **{f"{stream}_take_rate": low})), f"{stream}_profit")
    p_high = getattr(calculate_unit_economics(replace(base, **{f"{stream}_take_rate": high})), f"{stream}_profit")
    assert p_high >= p_low - 1e-9 * max(1.0, cost + margin)


@settings(max_examples=50)
@given(
    inputs=funnel_inputs(cac=st.just(0.0)),
    initial=st.integers(min_value=1, max_value=1000),
    months=st.integers(min_value=1, max_value=36),
    reinvest=unit_rate,
)
def test_zero_cac_projection_acquires_nobody(inputs, initial, months, reinvest) -> None:
    result = calculate_unit_economics(inputs)
    records = run_growth_projection(inputs, result, ProjectionConfig(initial, months, reinvest))

    assert len(records) == months
    assert all(r.new_customers == 0 for r in records)


@settings(max_examples=50)
@given(
    inputs=funnel_inputs(cac=st.floats(min_value=1.0, max_value=1e4, allow_nan=False)),
    initial=st.integers(min_value=1, max_value=1000),
    months=st.integers(min_value=1, max_value=36),
    reinvest=unit_rate,
)
def test_projection_shape_and_bookkeeping(inputs, initial, months, reinvest) -> None:
    result = calculate_unit_economics(inputs)
    records = run_growth_projection(inputs, result, ProjectionConfig(initial, months, reinvest))

    assert [r.period for r in records] == list(range(1, months + 1))
    # positive CAC: the seed budget buys the starting cohort (floor may drop one on rounding)
    assert records[0].new_customers in (initial - 1, initial)
    cumulative = 0
    for r in records:
        assert r.new_customers >= 0
        cumulative += r.new_customers
        assert r.total_customers_cumulative == cumulative
        assert r.funded_ratio_snapshot == result.customers_funded_ratio
        assert isinstance(r.new_customers, int)
