"""
Data preparation — everything that assembles a FunnelInputs value before it
reaches the engine: loading, presets, cost line items, validation.
"""

from .loader import load_inputs_csv
from .presets import DEFAULT_PRESET, INDUSTRY_PRESETS, IndustryPreset, get_preset, list_presets
from .cost_items import CATEGORY_TO_INPUT_FIELD, COST_CATEGORIES, CostItem, CostLedger
from .validators import ValidationResult, validate_inputs, validate_projection_config

__all__ = [
    "load_inputs_csv",
    "DEFAULT_PRESET",
    "INDUSTRY_PRESETS",
    "IndustryPreset",
    "get_preset",
    "list_presets",
    "CATEGORY_TO_INPUT_FIELD",
    "COST_CATEGORIES",
    "CostItem",
    "CostLedger",
    "ValidationResult",
    "validate_inputs",
    "validate_projection_config",
]
