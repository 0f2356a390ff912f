from __future__ import annotations

import pytest

from core.config import ProjectionConfig
from engine.projection import run_growth_projection
from pm.metrics import avg_monthly_growth_pct, summarize_projection, waterfall_table


def test_summary_of_gym_projection(gym_inputs, gym_result) -> None:
    records = run_growth_projection(gym_inputs, gym_result, ProjectionConfig(projection_months=3))
    summary = summarize_projection(records)

    assert summary.periods == 3
    assert summary.total_customers == records[-1].total_customers_cumulative == 29
    assert summary.cumulative_profit == pytest.approx(records[-1].cumulative_profit)
    assert summary.growth_multiple == gym_result.customers_funded_ratio
    # 10 → 29 customers over two steps
    assert summary.avg_monthly_growth_pct == pytest.approx(((29 / 10) ** 0.5 - 1) * 100)


def test_growth_is_zero_for_single_period(gym_inputs, gym_result) -> None:
    records = run_growth_projection(gym_inputs, gym_result, ProjectionConfig(projection_months=1))
    assert avg_monthly_growth_pct(records) == 0.0


def test_growth_is_zero_without_first_customers(gym_inputs) -> None:
    from dataclasses import replace
    from engine.unit_economics import calculate_unit_economics

    free = replace(gym_inputs, ad_spend=0, sales_costs=0, overhead_allocation=0)
    records = run_growth_projection(free, calculate_unit_economics(free), ProjectionConfig())
    assert avg_monthly_growth_pct(records) == 0.0


def test_empty_summary() -> None:
    summary = summarize_projection([])
    assert summary.periods == 0
    assert summary.total_customers == 0


def test_waterfall_walks_to_net_profit(gym_result) -> None:
    wf = waterfall_table(gym_result)

    assert wf["step"].tolist() == ["CAC", "Attraction", "Upsell", "Downsell", "Continuity", "Net Profit"]
    assert wf.loc[0, "start"] == 0
    assert wf.loc[0, "end"] == -350
    assert wf.loc[4, "end"] == pytest.approx(gym_result.profit_period)
    assert wf.loc[5, "value"] == pytest.approx(gym_result.profit_period)
    assert wf.loc[5, "start"] == 0
