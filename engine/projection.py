"""
Growth projection — compounds the unit economics over consecutive periods.

Each period:
  1. new customers      = floor(budget / total_cac)     [0 when total_cac == 0]
  2. cumulative base   += new customers
  3. revenue            = new × (attraction + weighted upsell + weighted downsell)
                          + cumulative × weighted continuity
  4. costs              = new × total_cac  +  new × costs_period
  5. profit             = revenue - costs
  6. next budget        = max(0, profit × reinvestment_rate_pct / 100)

Period 1's budget is initial_customers × total_cac (seed capital sized to the
starting cohort).

Continuity revenue is collected from the whole cumulative base, but fulfillment
is charged only on new customers at the single-period costs_period, so the
continuity cost is never scaled by the active base. The asymmetry is kept
as-is; see test_projection.py::test_continuity_cost_not_scaled_by_active_base.

Deterministic and side-effect free. The controls are not range-checked here
(see data_prep.validators.validate_projection_config).
"""

from __future__ import annotations

import logging
import math
from typing import List

import pandas as pd

from core.config import ProjectionConfig
from core.schema import (
    PROJECTION_COLUMNS,
    CostsBySource,
    FunnelInputs,
    ProjectionRecord,
    RevenueByStream,
    UnitEconomicsResult,
)
from core.utils import apply_take_rate

logger = logging.getLogger(__name__)


def customers_affordable(budget: float, cac: float) -> int:
    """Whole customers a budget buys at a given CAC; 0 for a zero CAC."""
    if cac == 0:
        return 0
    quotient = budget / cac
    if not math.isfinite(quotient):
        return 0
    return math.floor(quotient)


def run_growth_projection(
    inputs: FunnelInputs,
    result: UnitEconomicsResult,
    config: ProjectionConfig,
) -> List[ProjectionRecord]:
    """
    Simulate config.projection_months periods of reinvested acquisition.

    Parameters
    ----------
    inputs : FunnelInputs
        The same inputs `result` was computed from.
    result : UnitEconomicsResult
        Output of engine.unit_economics.calculate_unit_economics(inputs).
    config : ProjectionConfig
        initial_customers, projection_months, reinvestment_rate_pct

    Returns
    -------
    One ProjectionRecord per period, ordered by period starting at 1.
    """
    cac = result.total_cac
    reinvest_fraction = config.reinvestment_rate_pct / 100

    # per-customer weighted revenue
    upsell_each = apply_take_rate(inputs.upsell_revenue, inputs.upsell_take_rate)
    downsell_each = apply_take_rate(inputs.downsell_revenue, inputs.downsell_take_rate)
    continuity_each = apply_take_rate(inputs.continuity_first_payment, inputs.continuity_take_rate)

    cumulative_customers = 0
    cumulative_profit = 0.0
    available_for_acquisition = config.initial_customers * cac

    logger.debug(
        "projection: months=%d initial=%d reinvest=%.1f%% seed=%.2f",
        config.projection_months, config.initial_customers,
        config.reinvestment_rate_pct, available_for_acquisition,
    )

    records: List[ProjectionRecord] = []
    for period in range(1, config.projection_months + 1):
        new_customers = customers_affordable(available_for_acquisition, cac)
        cumulative_customers += new_customers

        revenue = RevenueByStream(
            attraction=new_customers * inputs.attraction_offer_revenue,
            upsell=new_customers * upsell_each,
            downsell=new_customers * downsell_each,
            # whole base pays continuity every period
            continuity=cumulative_customers * continuity_each,
        )
        costs = CostsBySource(
            acquisition=new_customers * cac,
            # new customers only, at the single-period cost per customer
            fulfillment=new_customers * result.costs_period,
        )

        profit = revenue.total - costs.total
        cumulative_profit += profit
        available_for_acquisition = max(0.0, profit * reinvest_fraction)

        records.append(
            ProjectionRecord(
                period=period,
                new_customers=new_customers,
                total_customers_cumulative=cumulative_customers,
                revenue_by_stream=revenue,
                costs_by_source=costs,
                profit=profit,
                cumulative_profit=cumulative_profit,
                funded_ratio_snapshot=result.customers_funded_ratio,
            )
        )

    return records


def projection_to_dataframe(records: List[ProjectionRecord]) -> pd.DataFrame:
    """One row per period, columns per core.schema.PROJECTION_COLUMNS."""
    return pd.DataFrame([r.to_row() for r in records], columns=list(PROJECTION_COLUMNS))
