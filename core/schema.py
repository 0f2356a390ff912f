"""
Value types shared by the engine, the data-prep layer and the PM outputs.

Every type here is a frozen dataclass: results are replaced wholesale on
recomputation, never mutated in place.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Dict, Mapping, Tuple

# Funded-ratio target: the profit of one customer pays for two more.
HEALTHY_FUNDED_RATIO = 2.0

# Canonical input names, in form order.
FUNNEL_INPUT_FIELDS: Tuple[str, ...] = (
    "ad_spend",
    "sales_costs",
    "overhead_allocation",
    "attraction_offer_revenue",
    "attraction_offer_costs",
    "upsell_revenue",
    "upsell_costs",
    "upsell_take_rate",
    "downsell_revenue",
    "downsell_costs",
    "downsell_take_rate",
    "continuity_first_payment",
    "continuity_costs",
    "continuity_take_rate",
)

# camelCase keys as written by the browser form and preset exports.
CAMEL_CASE_ALIASES: Dict[str, str] = {
    "adSpend": "ad_spend",
    "salesCosts": "sales_costs",
    "overheadAllocation": "overhead_allocation",
    "attractionOfferRevenue": "attraction_offer_revenue",
    "attractionOfferCosts": "attraction_offer_costs",
    "upsellRevenue": "upsell_revenue",
    "upsellCosts": "upsell_costs",
    "upsellTakeRate": "upsell_take_rate",
    "downsellRevenue": "downsell_revenue",
    "downsellCosts": "downsell_costs",
    "downsellTakeRate": "downsell_take_rate",
    "continuityFirstPayment": "continuity_first_payment",
    "continuityCosts": "continuity_costs",
    "continuityTakeRate": "continuity_take_rate",
}

TAKE_RATE_FIELDS: Tuple[str, ...] = (
    "upsell_take_rate",
    "downsell_take_rate",
    "continuity_take_rate",
)

OFFER_STREAMS: Tuple[str, ...] = ("attraction", "upsell", "downsell", "continuity")

PROJECTION_COLUMNS: Tuple[str, ...] = (
    "period",
    "new_customers",
    "total_customers",
    "revenue_attraction",
    "revenue_upsell",
    "revenue_downsell",
    "revenue_continuity",
    "revenue_total",
    "costs_acquisition",
    "costs_fulfillment",
    "costs_total",
    "profit",
    "cumulative_profit",
    "funded_ratio",
)


@dataclass(frozen=True)
class FunnelInputs:
    """
    One acquisition cycle's numbers for a single customer.

    Money fields are per customer; take rates are percentages (0-100
    intended, not enforced). The attraction offer is always bought.
    """

    # customer acquisition
    ad_spend: float = 0.0
    sales_costs: float = 0.0
    overhead_allocation: float = 0.0

    # attraction offer (implicit 100% take rate)
    attraction_offer_revenue: float = 0.0
    attraction_offer_costs: float = 0.0

    upsell_revenue: float = 0.0
    upsell_costs: float = 0.0
    upsell_take_rate: float = 0.0

    downsell_revenue: float = 0.0
    downsell_costs: float = 0.0
    downsell_take_rate: float = 0.0

    continuity_first_payment: float = 0.0
    continuity_costs: float = 0.0
    continuity_take_rate: float = 0.0

    @classmethod
    def from_mapping(cls, values: Mapping[str, object]) -> "FunnelInputs":
        """
        Build inputs from a form-like mapping.

        Keys may be snake_case or the camelCase form names; missing keys
        default to 0. Unknown keys, non-numeric values and non-finite values
        (a blank CSV cell reads as NaN) raise ValueError.
        """
        known = set(FUNNEL_INPUT_FIELDS)
        kwargs: Dict[str, float] = {}
        unknown = []
        for key, raw in values.items():
            name = CAMEL_CASE_ALIASES.get(key, key)
            if name not in known:
                unknown.append(key)
                continue
            try:
                kwargs[name] = float(raw)
            except (TypeError, ValueError):
                raise ValueError(f"Input {key!r} is not numeric: {raw!r}") from None
            if not math.isfinite(kwargs[name]):
                raise ValueError(f"Input {key!r} is not a finite number: {raw!r}")
        if unknown:
            raise ValueError(f"Unknown input fields: {unknown}")
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class OfferLine:
    """Take-rate-weighted revenue and cost of one offer stream, per customer."""

    stream: str
    revenue: float
    cost: float

    @property
    def profit(self) -> float:
        return self.revenue - self.cost


@dataclass(frozen=True)
class UnitEconomicsResult:
    total_cac: float
    revenue_period: float
    costs_period: float
    profit_period: float

    # profit_period / total_cac, the "golden ratio"
    customers_funded_ratio: float
    is_healthy: bool
    cash_multiplier: float
    profit_margin_pct: float

    attraction_profit: float
    upsell_profit: float
    downsell_profit: float
    continuity_profit: float

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class RevenueByStream:
    attraction: float
    upsell: float
    downsell: float
    continuity: float

    @property
    def total(self) -> float:
        return self.attraction + self.upsell + self.downsell + self.continuity


@dataclass(frozen=True)
class CostsBySource:
    acquisition: float
    fulfillment: float

    @property
    def total(self) -> float:
        return self.acquisition + self.fulfillment


@dataclass(frozen=True)
class ProjectionRecord:
    period: int
    new_customers: int
    total_customers_cumulative: int
    revenue_by_stream: RevenueByStream
    costs_by_source: CostsBySource
    profit: float
    cumulative_profit: float

    # static customers_funded_ratio, copied in; not derived from this period
    funded_ratio_snapshot: float

    def to_row(self) -> Dict[str, object]:
        rev = self.revenue_by_stream
        costs = self.costs_by_source
        return {
            "period": self.period,
            "new_customers": self.new_customers,
            "total_customers": self.total_customers_cumulative,
            "revenue_attraction": rev.attraction,
            "revenue_upsell": rev.upsell,
            "revenue_downsell": rev.downsell,
            "revenue_continuity": rev.continuity,
            "revenue_total": rev.total,
            "costs_acquisition": costs.acquisition,
            "costs_fulfillment": costs.fulfillment,
            "costs_total": costs.total,
            "profit": self.profit,
            "cumulative_profit": self.cumulative_profit,
            "funded_ratio": self.funded_ratio_snapshot,
        }

