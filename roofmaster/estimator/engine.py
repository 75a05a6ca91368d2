"""
Cost breakdown engine.

Input: EstimateInput (roof squares, material, price override, labor, extras)
Output: CostBreakdown: one LineItem per material component plus labor,
additional costs, and the grand total.

Every quantity is a whole purchasable unit (ceil) except nails, which are
sold by the pound. All money rounds half-up to whole dollars.
"""

import logging
import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_CEILING, ROUND_HALF_UP
from typing import Optional

from .errors import InvalidInputError
from .materials import MATERIAL_CATALOG, find_material
from .policy import DEFAULT_POLICY, PricingPolicy

logger = logging.getLogger(__name__)

# Rendering order for documents and UIs
MATERIAL_ITEM_KEYS = (
    "shingles",
    "waste",
    "underlayment",
    "ice_shield",
    "drip_edge",
    "starter_strip",
    "ridge_cap",
    "flashing",
    "vents",
    "nails",
)

# Wire names per line item: (quantity, unit cost, line total)
WIRE_FIELDS = {
    "shingles": ("shingleBundles", "shingleCostPerBundle", "shingleTotal"),
    "waste": ("wasteBundles", "wasteCostPerBundle", "wasteTotal"),
    "underlayment": ("underlaymentRolls", "underlaymentCostPerRoll", "underlaymentTotal"),
    "ice_shield": ("iceShieldRolls", "iceShieldCostPerRoll", "iceShieldTotal"),
    "drip_edge": ("dripEdgePieces", "dripEdgeCostPerPiece", "dripEdgeTotal"),
    "starter_strip": ("starterStripPieces", "starterCostPerPiece", "starterTotal"),
    "ridge_cap": ("ridgeCapBundles", "ridgeCapCostPerBundle", "ridgeCapTotal"),
    "flashing": ("flashingPieces", "flashingCostPerPiece", "flashingTotal"),
    "vents": ("ventCount", "ventCostEach", "ventTotal"),
    "nails": ("nailPounds", "nailCostPerPound", "nailTotal"),
}

# Purchase unit per line item
ITEM_UNITS = {
    "shingles": "bundles",
    "waste": "bundles",
    "underlayment": "rolls",
    "ice_shield": "rolls",
    "drip_edge": "pieces",
    "starter_strip": "pieces",
    "ridge_cap": "bundles",
    "flashing": "pieces",
    "vents": "units",
    "nails": "lbs",
}

# attribute name -> wire name, used in error messages
INPUT_WIRE_NAMES = {
    "roof_squares": "roofSquares",
    "selected_material_id": "selectedMaterialId",
    "price_per_square_override": "pricePerSquareOverride",
    "labor_rate": "laborRate",
    "labor_hours": "laborHours",
    "additional_costs": "additionalCosts",
}

# Float products like 20 * 0.15 land a hair above 3.0. Keeping 12 significant
# digits strips that noise without pulling tiny positive values to zero.
_SIGNIFICANT_DIGITS = 12


def _clean(value) -> Decimal:
    if isinstance(value, int):
        return Decimal(value)
    return Decimal(format(float(value), f".{_SIGNIFICANT_DIGITS}g"))


def round_half_up(value) -> int:
    """Round to the nearest whole currency unit, .5 rounds up."""
    return int(_clean(value).to_integral_value(rounding=ROUND_HALF_UP))


def ceil_units(value) -> int:
    """Whole purchasable units. You can't buy 0.4 of a roll."""
    return int(_clean(value).to_integral_value(rounding=ROUND_CEILING))


def _plain(value):
    """40.0 -> 40 for display; leaves fractional values alone."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


@dataclass(frozen=True)
class EstimateInput:
    roof_squares: float
    selected_material_id: str
    labor_rate: float = 0.0
    labor_hours: float = 0.0
    additional_costs: float = 0.0
    price_per_square_override: Optional[float] = None

    @classmethod
    def from_dict(cls, data: dict) -> "EstimateInput":
        """Accepts either wire (camelCase) or attribute (snake_case) keys."""
        values = {}
        for attr, wire in INPUT_WIRE_NAMES.items():
            if wire in data:
                values[attr] = data[wire]
            elif attr in data:
                values[attr] = data[attr]
        for required in ("roof_squares", "selected_material_id"):
            if values.get(required) is None:
                raise InvalidInputError(INPUT_WIRE_NAMES[required], None, "is required")
        for optional in ("labor_rate", "labor_hours", "additional_costs"):
            if values.get(optional) is None:
                values.pop(optional, None)
        return cls(**values)


@dataclass(frozen=True)
class LineItem:
    key: str
    quantity: float
    unit: str
    unit_cost: float
    line_total: int


@dataclass(frozen=True)
class CostBreakdown:
    material_id: str
    bundles_per_square: int
    price_per_square: float
    roof_squares: float
    items: tuple
    waste_squares: int
    perimeter_ft: float
    ridge_length_ft: float
    labor_rate: float
    labor_hours: float
    labor_total: int
    additional_costs: int
    materials_total: int
    grand_total: int

    def item(self, key: str) -> LineItem:
        for line in self.items:
            if line.key == key:
                return line
        raise KeyError(key)

    def to_dict(self) -> dict:
        """Canonical wire form. Legacy names live in presentation.legacy_fields()."""
        data = {
            "selectedMaterial": self.material_id,
            "roofSquares": _plain(self.roof_squares),
            "pricePerSquare": _plain(self.price_per_square),
            "bundlesPerSquare": self.bundles_per_square,
        }
        for line in self.items:
            qty_key, cost_key, total_key = WIRE_FIELDS[line.key]
            data[qty_key] = _plain(line.quantity)
            data[cost_key] = _plain(line.unit_cost)
            data[total_key] = line.line_total
        data.update({
            "wasteSquares": self.waste_squares,
            "perimeterFt": round(self.perimeter_ft, 2),
            "ridgeLengthFt": round(self.ridge_length_ft, 2),
            "laborRate": _plain(self.labor_rate),
            "laborHours": _plain(self.labor_hours),
            "laborTotal": self.labor_total,
            "additionalCosts": self.additional_costs,
            "materialsTotal": self.materials_total,
            "grandTotal": self.grand_total,
        })
        return data


def _check_number(attr: str, value, allow_zero: bool = True):
    field = INPUT_WIRE_NAMES[attr]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(field, value, "must be a number")
    if not math.isfinite(value):
        raise InvalidInputError(field, value, "must be finite")
    if value < 0:
        raise InvalidInputError(field, value, "must not be negative")
    if not allow_zero and value == 0:
        raise InvalidInputError(field, value, "must be greater than zero")


def _validate(estimate_input: EstimateInput):
    _check_number("roof_squares", estimate_input.roof_squares, allow_zero=False)
    if estimate_input.price_per_square_override is not None:
        _check_number("price_per_square_override",
                      estimate_input.price_per_square_override, allow_zero=False)
    _check_number("labor_rate", estimate_input.labor_rate)
    _check_number("labor_hours", estimate_input.labor_hours)
    _check_number("additional_costs", estimate_input.additional_costs)


def _line(key: str, quantity, unit_cost) -> LineItem:
    return LineItem(
        key=key,
        quantity=quantity,
        unit=ITEM_UNITS[key],
        unit_cost=unit_cost,
        line_total=round_half_up(quantity * unit_cost),
    )


def compute_breakdown(
    estimate_input: EstimateInput,
    catalog=MATERIAL_CATALOG,
    policy: PricingPolicy = DEFAULT_POLICY,
) -> CostBreakdown:
    """
    Itemize a roofing job.

    Raises InvalidInputError for bad numbers and UnknownMaterialError when the
    material id is not in the catalog. Never returns a partial breakdown.
    """
    _validate(estimate_input)
    material = find_material(estimate_input.selected_material_id, catalog)

    squares = estimate_input.roof_squares
    if estimate_input.price_per_square_override is not None:
        price = estimate_input.price_per_square_override
    else:
        price = material.base_price_per_square
    bundles_per_square = material.bundles_per_square

    # --- 1. Shingles / panels ---
    shingle_bundles = max(policy.min_shingle_bundles, round_half_up(squares * bundles_per_square))
    cost_per_bundle = round_half_up(price * policy.primary_covering_fraction / bundles_per_square)

    # --- 2. Waste: ceil in squares first, then convert to bundles ---
    waste_squares = ceil_units(squares * policy.waste_factor)
    waste_bundles = waste_squares * bundles_per_square

    # --- 3-4. Rolled goods ---
    underlayment_rolls = ceil_units(squares / policy.underlayment_squares_per_roll)
    ice_shield_rolls = ceil_units(squares * policy.ice_shield_fraction)

    # --- 5. Perimeter trim ---
    side_ft = math.sqrt(squares * policy.sq_ft_per_square)
    perimeter_ft = side_ft * policy.perimeter_sides
    drip_edge_pieces = ceil_units(perimeter_ft / policy.drip_edge_piece_length_ft)
    starter_strip_pieces = drip_edge_pieces

    # --- 6. Ridge cap ---
    ridge_length_ft = side_ft * policy.ridge_length_factor
    ridge_cap_bundles = ceil_units(ridge_length_ft / policy.ridge_cap_ft_per_bundle)

    # --- 7-9. Flashing, vents, nails ---
    flashing_pieces = ceil_units(squares * policy.flashing_pieces_per_square)
    vent_count = ceil_units(squares / policy.squares_per_vent)
    nail_pounds = squares * policy.nail_pounds_per_square

    items = (
        _line("shingles", shingle_bundles, cost_per_bundle),
        _line("waste", waste_bundles, cost_per_bundle),
        _line("underlayment", underlayment_rolls, policy.underlayment_cost_per_roll),
        _line("ice_shield", ice_shield_rolls, policy.ice_shield_cost_per_roll),
        _line("drip_edge", drip_edge_pieces, policy.drip_edge_cost_per_piece),
        _line("starter_strip", starter_strip_pieces, policy.starter_strip_cost_per_piece),
        _line("ridge_cap", ridge_cap_bundles, policy.ridge_cap_cost_per_bundle),
        _line("flashing", flashing_pieces, policy.flashing_cost_per_piece),
        _line("vents", vent_count, policy.vent_cost_each),
        _line("nails", nail_pounds, policy.nail_cost_per_pound),
    )

    # --- 10-12. Labor, extras, totals ---
    labor_total = round_half_up(estimate_input.labor_rate * estimate_input.labor_hours)
    additional = round_half_up(estimate_input.additional_costs)
    materials_total = sum(line.line_total for line in items)
    grand_total = materials_total + labor_total + additional

    logger.debug(
        "Estimate for %s x %s squares: materials=%d labor=%d total=%d",
        material.id, squares, materials_total, labor_total, grand_total,
    )

    return CostBreakdown(
        material_id=material.id,
        bundles_per_square=bundles_per_square,
        price_per_square=price,
        roof_squares=squares,
        items=items,
        waste_squares=waste_squares,
        perimeter_ft=perimeter_ft,
        ridge_length_ft=ridge_length_ft,
        labor_rate=estimate_input.labor_rate,
        labor_hours=estimate_input.labor_hours,
        labor_total=labor_total,
        additional_costs=additional,
        materials_total=materials_total,
        grand_total=grand_total,
    )


def calculate_total(breakdown: CostBreakdown) -> int:
    """Sum of every line total plus labor and additional costs."""
    return (
        sum(line.line_total for line in breakdown.items)
        + breakdown.labor_total
        + breakdown.additional_costs
    )
