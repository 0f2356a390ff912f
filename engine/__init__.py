"""
Calculation engine — single-period unit economics + multi-period growth projection.
"""

from .unit_economics import calculate_unit_economics, offer_lines, total_cac
from .projection import run_growth_projection, projection_to_dataframe

__all__ = [
    "calculate_unit_economics",
    "offer_lines",
    "total_cac",
    "run_growth_projection",
    "projection_to_dataframe",
]
