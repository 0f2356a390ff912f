"""
Sanity checks for funnel inputs and projection controls, run before they
reach the engine.

The engine accepts anything numeric; these checks are what keep obviously
broken numbers out of the dashboard:
- Non-finite values (blocking)
- Negative money amounts (informational)
- Take rates outside 0-100% (informational)
- Projection controls outside their documented ranges (blocking)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from core.config import (
    MAX_PROJECTION_MONTHS,
    MAX_REINVESTMENT_RATE_PCT,
    MIN_INITIAL_CUSTOMERS,
    MIN_PROJECTION_MONTHS,
    MIN_REINVESTMENT_RATE_PCT,
    ProjectionConfig,
)
from core.schema import FUNNEL_INPUT_FIELDS, TAKE_RATE_FIELDS, FunnelInputs
from core.utils import is_finite_number


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for one input set."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def validate_inputs(inputs: FunnelInputs) -> ValidationResult:
    result = ValidationResult()

    for name in FUNNEL_INPUT_FIELDS:
        value = getattr(inputs, name)
        if not is_finite_number(value):
            result.errors.append(f"{name} is not a finite number ({value!r}).")
            continue

        if name in TAKE_RATE_FIELDS:
            if value < 0 or value > 100:
                result.warnings.append(
                    f"{name} = {value} is outside 0-100; take rates are percentages."
                )
        elif value < 0:
            result.warnings.append(f"{name} is negative ({value}).")

    return result


def _is_whole(value) -> bool:
    return is_finite_number(value) and float(value).is_integer()


def validate_projection_config(config: ProjectionConfig) -> ValidationResult:
    result = ValidationResult()

    if not _is_whole(config.initial_customers):
        result.errors.append(
            f"initial_customers must be a whole number (got {config.initial_customers!r})."
        )
    elif config.initial_customers < MIN_INITIAL_CUSTOMERS:
        result.errors.append(
            f"initial_customers must be at least {MIN_INITIAL_CUSTOMERS} "
            f"(got {config.initial_customers})."
        )

    if not _is_whole(config.projection_months):
        result.errors.append(
            f"projection_months must be a whole number (got {config.projection_months!r})."
        )
    elif not MIN_PROJECTION_MONTHS <= config.projection_months <= MAX_PROJECTION_MONTHS:
        result.errors.append(
            f"projection_months must be between {MIN_PROJECTION_MONTHS} and "
            f"{MAX_PROJECTION_MONTHS} (got {config.projection_months})."
        )

    rate = config.reinvestment_rate_pct
    if not is_finite_number(rate):
        result.errors.append(f"reinvestment_rate_pct is not a finite number ({rate!r}).")
    elif not MIN_REINVESTMENT_RATE_PCT <= rate <= MAX_REINVESTMENT_RATE_PCT:
        result.errors.append(
            f"reinvestment_rate_pct must be between {MIN_REINVESTMENT_RATE_PCT:g} and "
            f"{MAX_REINVESTMENT_RATE_PCT:g} (got {rate})."
        )

    return result
