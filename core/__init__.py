"""
Core package — schema definitions, configuration, and shared utilities.
No business logic lives here.
"""

from .schema import (
    FUNNEL_INPUT_FIELDS,
    HEALTHY_FUNDED_RATIO,
    PROJECTION_COLUMNS,
    FunnelInputs,
    UnitEconomicsResult,
    OfferLine,
    RevenueByStream,
    CostsBySource,
    ProjectionRecord,
)
from .config import ProjectionConfig
from .utils import guarded_ratio, apply_take_rate
from .logging_config import configure_logging

__all__ = [
    "FUNNEL_INPUT_FIELDS",
    "HEALTHY_FUNDED_RATIO",
    "PROJECTION_COLUMNS",
    "FunnelInputs",
    "UnitEconomicsResult",
    "OfferLine",
    "RevenueByStream",
    "CostsBySource",
    "ProjectionRecord",
    "ProjectionConfig",
    "guarded_ratio",
    "apply_take_rate",
    "configure_logging",
]
