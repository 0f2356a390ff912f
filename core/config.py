"""
Projection configuration.
Simulation controls for the growth projection. Range checks live in
data_prep/validators.py; the simulator itself trusts whatever it is given.
"""

from __future__ import annotations

from dataclasses import dataclass

MIN_INITIAL_CUSTOMERS = 1
MIN_PROJECTION_MONTHS = 1
MAX_PROJECTION_MONTHS = 36
MIN_REINVESTMENT_RATE_PCT = 0.0
MAX_REINVESTMENT_RATE_PCT = 100.0

# environment variable read by core.logging_config.configure_logging()
LOG_LEVEL_ENV = "MONEY_MODEL_LOG_LEVEL"


@dataclass(frozen=True)
class ProjectionConfig:
    # starting cohort; also sizes the initial capital injection (cohort * CAC)
    initial_customers: int = 10
    projection_months: int = 12

    # share of each period's (positive) profit spent on next period's acquisition
    reinvestment_rate_pct: float = 100.0
