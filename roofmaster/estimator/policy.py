"""
Pricing policy: the per-component constants behind every estimate.

These are business numbers, not physics. Supplier pricing changes regionally
and over time, so they live here instead of inline in the algorithm.
Override with dataclasses.replace() or via POLICY_* settings.
"""

from dataclasses import dataclass, fields, replace


@dataclass(frozen=True)
class PricingPolicy:
    # Share of the per-square price that goes to the primary covering
    primary_covering_fraction: float = 0.62
    min_shingle_bundles: int = 1

    # Waste: 12% overage, computed in squares then converted to bundles
    waste_factor: float = 0.12

    sq_ft_per_square: float = 100.0

    # Underlayment: one roll per 3 squares
    underlayment_squares_per_roll: float = 3.0
    underlayment_cost_per_roll: float = 45.0

    # Ice & water shield: eaves/valleys, ~15% of the roof
    ice_shield_fraction: float = 0.15
    ice_shield_cost_per_roll: float = 85.0

    # Perimeter assumes a square footprint: sqrt(area) * 4
    perimeter_sides: float = 4.0
    drip_edge_piece_length_ft: float = 10.0
    drip_edge_cost_per_piece: float = 8.0
    starter_strip_cost_per_piece: float = 12.0

    # Ridge: sqrt(area) * 0.4, one bundle per 25 lf
    ridge_length_factor: float = 0.4
    ridge_cap_ft_per_bundle: float = 25.0
    ridge_cap_cost_per_bundle: float = 55.0

    # Step and chimney flashing
    flashing_pieces_per_square: float = 0.3
    flashing_cost_per_piece: float = 15.0

    # One vent per 150 sq ft
    squares_per_vent: float = 1.5
    vent_cost_each: float = 25.0

    nail_pounds_per_square: float = 2.0
    nail_cost_per_pound: float = 3.0

    # Price adjuster range offered to users. Not enforced by the estimator.
    price_override_min_ratio: float = 0.5
    price_override_max_ratio: float = 2.0

    def replace(self, **changes) -> "PricingPolicy":
        return replace(self, **changes)


DEFAULT_POLICY = PricingPolicy()


def policy_from_settings(settings, base: PricingPolicy = DEFAULT_POLICY) -> PricingPolicy:
    """
    Build a policy from POLICY_<FIELD> settings attributes.
    Unset (None) attributes keep the base value.
    """
    overrides = {}
    for f in fields(PricingPolicy):
        value = getattr(settings, f"POLICY_{f.name.upper()}", None)
        if value is not None:
            overrides[f.name] = value
    if not overrides:
        return base
    return replace(base, **overrides)
