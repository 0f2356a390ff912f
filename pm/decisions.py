"""
Model health — turns a UnitEconomicsResult into a verdict a business owner
can act on.

Verdict ladder (customers_funded_ratio):
    >= 2.0 → HEALTHY        profit of one customer pays for two more
    >= 1.0 → BREAKING_EVEN  pays for itself, doesn't scale
     < 1.0 → LOSING_MONEY

Margin band (profit_margin_pct): strong >= 30, moderate >= 15, low otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import pandas as pd

from core.schema import HEALTHY_FUNDED_RATIO, UnitEconomicsResult

BREAK_EVEN_FUNDED_RATIO = 1.0
STRONG_MARGIN_PCT = 30.0
MODERATE_MARGIN_PCT = 15.0

_VERDICT_INSIGHTS = {
    "HEALTHY": (
        "Your model is scalable! Each customer generates enough profit to "
        "acquire 2+ more customers."
    ),
    "BREAKING_EVEN": (
        "You're breaking even but not scaling. Improve offers to reach 2.0+ ratio."
    ),
    "LOSING_MONEY": (
        "You're losing money on each customer. Review your CAC and pricing strategy."
    ),
}

_MARGIN_INSIGHTS = {
    "strong": "Strong profit margin indicates healthy pricing and cost structure.",
    "moderate": "Moderate profit margin. Consider optimizing costs or increasing prices.",
    "low": "Low profit margin. Focus on reducing costs or increasing average order value.",
}


@dataclass
class HealthReport:
    verdict: str
    funded_ratio: float
    cash_multiplier: float
    profit_margin_pct: float
    margin_band: str
    insights: List[str] = field(default_factory=list)
    flags: List[str] = field(default_factory=list)

    @property
    def label(self) -> str:
        return "Healthy" if self.verdict == "HEALTHY" else "Needs Improvement"

    def insights_markdown(self) -> str:
        """Insights as a markdown bullet list, with `$` escaped (markdown reads `$...$` as math)."""
        return "\n".join("- " + line.replace("$", "\\$") for line in self.insights)

    def to_dataframe(self) -> pd.DataFrame:
        rows = [
            {"Metric": "Verdict", "Value": self.verdict},
            {"Metric": "Customers Paid For", "Value": f"{self.funded_ratio:.2f}"},
            {"Metric": "Cash Multiplier", "Value": f"{self.cash_multiplier:.2f}x"},
            {"Metric": "Profit Margin", "Value": f"{self.profit_margin_pct:.1f}%"},
            {"Metric": "Margin Band", "Value": self.margin_band},
        ]
        if self.flags:
            rows.append({"Metric": "FLAGS", "Value": " | ".join(self.flags)})
        return pd.DataFrame(rows)


def classify_margin(profit_margin_pct: float) -> str:
    if profit_margin_pct >= STRONG_MARGIN_PCT:
        return "strong"
    if profit_margin_pct >= MODERATE_MARGIN_PCT:
        return "moderate"
    return "low"


def generate_health_report(result: UnitEconomicsResult) -> HealthReport:
    ratio = result.customers_funded_ratio
    if ratio >= HEALTHY_FUNDED_RATIO:
        verdict = "HEALTHY"
    elif ratio >= BREAK_EVEN_FUNDED_RATIO:
        verdict = "BREAKING_EVEN"
    else:
        verdict = "LOSING_MONEY"

    band = classify_margin(result.profit_margin_pct)
    insights = [
        _VERDICT_INSIGHTS[verdict],
        (
            f"Your cash multiplier is {result.cash_multiplier:.2f}x, meaning you generate "
            f"${result.cash_multiplier:.2f} for every $1 spent on customer acquisition."
        ),
        _MARGIN_INSIGHTS[band],
    ]

    flags = []
    if result.total_cac <= 0:
        flags.append("NO_CAC: acquisition cost is zero or negative; ratios reported as 0")
    for stream in ("attraction", "upsell", "downsell", "continuity"):
        profit = getattr(result, f"{stream}_profit")
        if profit < 0:
            flags.append(f"NEGATIVE_{stream.upper()}: {stream} offer loses {abs(profit):,.2f} per customer")

    return HealthReport(
        verdict=verdict,
        funded_ratio=ratio,
        cash_multiplier=result.cash_multiplier,
        profit_margin_pct=result.profit_margin_pct,
        margin_band=band,
        insights=insights,
        flags=flags,
    )
