"""
Roofing cost estimator.

Pure Python math. No database, no HTTP, no clock.
Given roof squares, a material selection, and labor/additional inputs,
produce an itemized bill of materials and a grand total.
"""

from .engine import (
    CostBreakdown,
    EstimateInput,
    LineItem,
    MATERIAL_ITEM_KEYS,
    calculate_total,
    ceil_units,
    compute_breakdown,
    round_half_up,
)
from .errors import EstimatorError, InvalidInputError, UnknownMaterialError
from .materials import MATERIAL_CATALOG, MaterialType, find_material, price_bounds
from .policy import DEFAULT_POLICY, PricingPolicy, policy_from_settings

__all__ = [
    "CostBreakdown",
    "DEFAULT_POLICY",
    "EstimateInput",
    "EstimatorError",
    "InvalidInputError",
    "LineItem",
    "MATERIAL_CATALOG",
    "MATERIAL_ITEM_KEYS",
    "MaterialType",
    "PricingPolicy",
    "UnknownMaterialError",
    "calculate_total",
    "ceil_units",
    "compute_breakdown",
    "find_material",
    "policy_from_settings",
    "price_bounds",
    "round_half_up",
]
