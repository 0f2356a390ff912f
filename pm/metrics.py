"""
Summary metrics over a growth projection, plus the per-customer profit
waterfall shown next to the unit-economics cards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np
import pandas as pd

from core.schema import ProjectionRecord, UnitEconomicsResult


@dataclass(frozen=True)
class ProjectionSummary:
    periods: int
    total_customers: int
    cumulative_profit: float
    avg_monthly_growth_pct: float

    # static funded ratio of the unit economics the projection ran on
    growth_multiple: float


def avg_monthly_growth_pct(records: List[ProjectionRecord]) -> float:
    """
    Compound per-period growth of the cumulative customer base, first to last
    period: ((last / first) ** (1 / (n - 1)) - 1) × 100.

    0.0 for fewer than two periods or an empty first period.
    """
    if len(records) < 2:
        return 0.0
    first = records[0].total_customers_cumulative
    last = records[-1].total_customers_cumulative
    if first <= 0:
        return 0.0
    return float((np.power(last / first, 1.0 / (len(records) - 1)) - 1.0) * 100.0)


def summarize_projection(records: List[ProjectionRecord]) -> ProjectionSummary:
    if not records:
        return ProjectionSummary(
            periods=0,
            total_customers=0,
            cumulative_profit=0.0,
            avg_monthly_growth_pct=0.0,
            growth_multiple=0.0,
        )

    last = records[-1]
    return ProjectionSummary(
        periods=len(records),
        total_customers=last.total_customers_cumulative,
        cumulative_profit=last.cumulative_profit,
        avg_monthly_growth_pct=avg_monthly_growth_pct(records),
        growth_multiple=last.funded_ratio_snapshot,
    )


def waterfall_table(result: UnitEconomicsResult) -> pd.DataFrame:
    """
    CAC out, then each offer's profit in, ending at net profit.

    Columns: step, value, start, end. `start`/`end` are the running totals a
    waterfall bar spans; the final "Net Profit" bar spans 0 → profit_period.
    """
    steps = [
        ("CAC", -result.total_cac),
        ("Attraction", result.attraction_profit),
        ("Upsell", result.upsell_profit),
        ("Downsell", result.downsell_profit),
        ("Continuity", result.continuity_profit),
    ]
    values = np.array([v for _, v in steps], dtype=float)
    ends = np.cumsum(values)
    starts = ends - values

    df = pd.DataFrame(
        {
            "step": [name for name, _ in steps],
            "value": values,
            "start": starts,
            "end": ends,
        }
    )
    net = pd.DataFrame(
        [{"step": "Net Profit", "value": result.profit_period, "start": 0.0, "end": result.profit_period}]
    )
    return pd.concat([df, net], ignore_index=True)
