"""
Industry presets — named example funnels used to seed the input form.

The engine never sees a preset; it only receives the FunnelInputs inside one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import pandas as pd

from core.schema import FunnelInputs


@dataclass(frozen=True)
class IndustryPreset:
    key: str
    name: str
    description: str
    inputs: FunnelInputs


DEFAULT_PRESET = "gym"

INDUSTRY_PRESETS: Dict[str, IndustryPreset] = {
    "gym": IndustryPreset(
        key="gym",
        name="Gym (Hormozi's Example)",
        description="Based on Alex Hormozi's gym model from $100M Offers",
        inputs=FunnelInputs(
            ad_spend=200, sales_costs=100, overhead_allocation=50,
            attraction_offer_revenue=600, attraction_offer_costs=100,
            upsell_revenue=300, upsell_costs=50, upsell_take_rate=50,
            downsell_revenue=150, downsell_costs=25, downsell_take_rate=30,
            continuity_first_payment=99, continuity_costs=10, continuity_take_rate=40,
        ),
    ),
    "saas": IndustryPreset(
        key="saas",
        name="SaaS Business",
        description="Typical B2B SaaS with free trial to paid conversion",
        inputs=FunnelInputs(
            ad_spend=500, sales_costs=200, overhead_allocation=100,
            attraction_offer_revenue=99, attraction_offer_costs=20,   # first month at discount
            upsell_revenue=199, upsell_costs=30, upsell_take_rate=25,  # premium plan
            downsell_revenue=49, downsell_costs=10, downsell_take_rate=20,  # basic plan
            continuity_first_payment=149, continuity_costs=25, continuity_take_rate=70,
        ),
    ),
    "ecommerce": IndustryPreset(
        key="ecommerce",
        name="E-commerce Store",
        description="Physical product e-commerce with upsells",
        inputs=FunnelInputs(
            ad_spend=30, sales_costs=10, overhead_allocation=10,
            attraction_offer_revenue=49, attraction_offer_costs=20,
            upsell_revenue=29, upsell_costs=10, upsell_take_rate=40,
            downsell_revenue=19, downsell_costs=8, downsell_take_rate=15,
            continuity_first_payment=39, continuity_costs=15, continuity_take_rate=20,  # subscription box
        ),
    ),
    "course": IndustryPreset(
        key="course",
        name="Online Course",
        description="Info product with high margins",
        inputs=FunnelInputs(
            ad_spend=150, sales_costs=50, overhead_allocation=30,
            attraction_offer_revenue=497, attraction_offer_costs=30,
            upsell_revenue=297, upsell_costs=10, upsell_take_rate=35,
            downsell_revenue=97, downsell_costs=5, downsell_take_rate=25,
            continuity_first_payment=47, continuity_costs=5, continuity_take_rate=30,
        ),
    ),
    "agency": IndustryPreset(
        key="agency",
        name="Marketing Agency",
        description="Service business with retainer model",
        inputs=FunnelInputs(
            ad_spend=300, sales_costs=500, overhead_allocation=200,  # B2B sales is expensive
            attraction_offer_revenue=1500, attraction_offer_costs=300,
            upsell_revenue=500, upsell_costs=100, upsell_take_rate=60,
            downsell_revenue=500, downsell_costs=100, downsell_take_rate=20,
            continuity_first_payment=2000, continuity_costs=800, continuity_take_rate=80,
        ),
    ),
    "consulting": IndustryPreset(
        key="consulting",
        name="Consulting Business",
        description="High-ticket consulting with implementation",
        inputs=FunnelInputs(
            ad_spend=500, sales_costs=300, overhead_allocation=100,
            attraction_offer_revenue=2000, attraction_offer_costs=200,
            upsell_revenue=5000, upsell_costs=1000, upsell_take_rate=30,
            downsell_revenue=997, downsell_costs=50, downsell_take_rate=40,
            continuity_first_payment=497, continuity_costs=50, continuity_take_rate=25,
        ),
    ),
    "coaching": IndustryPreset(
        key="coaching",
        name="Coaching Program",
        description="Personal or business coaching",
        inputs=FunnelInputs(
            ad_spend=200, sales_costs=100, overhead_allocation=50,
            attraction_offer_revenue=297, attraction_offer_costs=30,
            upsell_revenue=1997, upsell_costs=200, upsell_take_rate=25,
            downsell_revenue=97, downsell_costs=10, downsell_take_rate=35,
            continuity_first_payment=297, continuity_costs=30, continuity_take_rate=50,
        ),
    ),
    "blank": IndustryPreset(
        key="blank",
        name="Start from Scratch",
        description="Empty template to input your own numbers",
        inputs=FunnelInputs(),
    ),
}


def get_preset(key: str) -> IndustryPreset:
    """
    Return a named industry preset.

    Parameters
    ----------
    key : str
        One of: "gym", "saas", "ecommerce", "course", "agency",
        "consulting", "coaching", "blank"
    """
    if key not in INDUSTRY_PRESETS:
        raise KeyError(
            f"Unknown preset '{key}'. "
            f"Available: {list(INDUSTRY_PRESETS.keys())}"
        )
    return INDUSTRY_PRESETS[key]


def list_presets() -> pd.DataFrame:
    return pd.DataFrame(
        [{"key": p.key, "name": p.name, "description": p.description} for p in INDUSTRY_PRESETS.values()]
    )
