"""
Single-period unit economics — one customer, acquisition through day 30.

Formula:
    total_cac          = ad_spend + sales_costs + overhead_allocation
    weighted(x)        = x × (take_rate / 100)     [attraction: take rate fixed at 100%]
    revenue_period     = Σ weighted offer revenue
    costs_period       = Σ weighted offer costs
    profit_period      = revenue_period - costs_period - total_cac
    funded_ratio       = profit_period / total_cac       (0 when total_cac <= 0)
    cash_multiplier    = revenue_period / total_cac      (0 when total_cac <= 0)
    profit_margin_pct  = profit_period / revenue_period × 100   (0 when revenue <= 0)
    is_healthy         = funded_ratio >= 2

Total function: never raises for numeric input, never returns inf/NaN from
a zero denominator. No Streamlit imports. Pure Python.
"""

from __future__ import annotations

import logging
from typing import Tuple

from core.schema import HEALTHY_FUNDED_RATIO, FunnelInputs, OfferLine, UnitEconomicsResult
from core.utils import apply_take_rate, guarded_ratio

logger = logging.getLogger(__name__)


def total_cac(inputs: FunnelInputs) -> float:
    return inputs.ad_spend + inputs.sales_costs + inputs.overhead_allocation


def offer_lines(inputs: FunnelInputs) -> Tuple[OfferLine, OfferLine, OfferLine, OfferLine]:
    """Per-stream weighted revenue and cost, in attraction/upsell/downsell/continuity order."""
    return (
        OfferLine(
            "attraction",
            revenue=inputs.attraction_offer_revenue,
            cost=inputs.attraction_offer_costs,
        ),
        OfferLine(
            "upsell",
            revenue=apply_take_rate(inputs.upsell_revenue, inputs.upsell_take_rate),
            cost=apply_take_rate(inputs.upsell_costs, inputs.upsell_take_rate),
        ),
        OfferLine(
            "downsell",
            revenue=apply_take_rate(inputs.downsell_revenue, inputs.downsell_take_rate),
            cost=apply_take_rate(inputs.downsell_costs, inputs.downsell_take_rate),
        ),
        OfferLine(
            "continuity",
            revenue=apply_take_rate(inputs.continuity_first_payment, inputs.continuity_take_rate),
            cost=apply_take_rate(inputs.continuity_costs, inputs.continuity_take_rate),
        ),
    )


def calculate_unit_economics(inputs: FunnelInputs) -> UnitEconomicsResult:
    """
    Compute the single-period unit economics for one set of funnel inputs.

    Args:
        inputs : Funnel costs, revenues and take rates (percent).

    Returns:
        UnitEconomicsResult: a fresh immutable result; callers replace the
        previous one whenever the inputs change.
    """
    cac = total_cac(inputs)
    attraction, upsell, downsell, continuity = offer_lines(inputs)

    revenue_period = attraction.revenue + upsell.revenue + downsell.revenue + continuity.revenue
    costs_period = attraction.cost + upsell.cost + downsell.cost + continuity.cost
    profit_period = revenue_period - costs_period - cac

    funded_ratio = guarded_ratio(profit_period, cac)
    cash_multiplier = guarded_ratio(revenue_period, cac)
    profit_margin_pct = guarded_ratio(profit_period, revenue_period) * 100

    logger.debug(
        "unit economics: cac=%.2f revenue=%.2f costs=%.2f profit=%.2f ratio=%.4f",
        cac, revenue_period, costs_period, profit_period, funded_ratio,
    )

    return UnitEconomicsResult(
        total_cac=cac,
        revenue_period=revenue_period,
        costs_period=costs_period,
        profit_period=profit_period,
        customers_funded_ratio=funded_ratio,
        is_healthy=funded_ratio >= HEALTHY_FUNDED_RATIO,
        cash_multiplier=cash_multiplier,
        profit_margin_pct=profit_margin_pct,
        attraction_profit=attraction.profit,
        upsell_profit=upsell.profit,
        downsell_profit=downsell.profit,
        continuity_profit=continuity.profit,
    )
