"""
Roofing material catalog.

Static, immutable, loaded once at import. `category` only picks the
coverage factor: dimensional products (architectural shingles, standing seam)
pack 4 bundles per square, everything else 3.
"""

from dataclasses import dataclass

from .errors import InvalidInputError, UnknownMaterialError
from .policy import DEFAULT_POLICY, PricingPolicy

BUNDLES_PER_SQUARE = {
    "standard": 3,
    "dimensional": 4,
}


@dataclass(frozen=True)
class MaterialType:
    id: str
    name: str
    base_price_per_square: float
    category: str = "standard"
    display_name: str = ""
    description: str = ""

    @property
    def bundles_per_square(self) -> int:
        return BUNDLES_PER_SQUARE[self.category]

    def to_dict(self, policy: PricingPolicy = DEFAULT_POLICY) -> dict:
        low, high = price_bounds(self, policy)
        return {
            "id": self.id,
            "name": self.name,
            "displayName": self.display_name or self.name,
            "description": self.description,
            "category": self.category,
            "basePricePerSquare": self.base_price_per_square,
            "bundlesPerSquare": self.bundles_per_square,
            "minPricePerSquare": low,
            "maxPricePerSquare": high,
        }


MATERIAL_CATALOG = (
    MaterialType(
        id="three-tab",
        name="Three Tab",
        base_price_per_square=450,
        category="standard",
        display_name="Three Tab Shingles",
        description="Standard asphalt shingles",
    ),
    MaterialType(
        id="architectural",
        name="Architectural",
        base_price_per_square=500,
        category="dimensional",
        display_name="Architectural Shingles",
        description="Dimensional shingles with depth",
    ),
    MaterialType(
        id="metal-pbr",
        name="Metal PBR",
        base_price_per_square=800,
        category="standard",
        display_name="Metal PBR Panels",
        description="Purlin bearing rib metal panels",
    ),
    MaterialType(
        id="standing-seam",
        name="Standing Seam",
        base_price_per_square=1000,
        category="dimensional",
        display_name="Standing Seam Metal",
        description="Premium metal roofing",
    ),
)


def find_material(material_id, catalog=MATERIAL_CATALOG) -> MaterialType:
    """Resolve a material id to exactly one catalog entry."""
    matches = [m for m in catalog if m.id == material_id]
    if not matches:
        raise UnknownMaterialError(material_id, [m.id for m in catalog])
    if len(matches) > 1:
        raise InvalidInputError(
            "selectedMaterialId", material_id,
            f"matches {len(matches)} catalog entries",
        )
    return matches[0]


def display_name(material_id, catalog=MATERIAL_CATALOG) -> str:
    """Document-facing name; unknown ids pass through unchanged."""
    for m in catalog:
        if m.id == material_id:
            return m.display_name or m.name
    return material_id or "Standard Materials"


def price_bounds(material: MaterialType, policy: PricingPolicy = DEFAULT_POLICY) -> tuple:
    """Slider range for the price adjuster: 0.5x to 2x base by default."""
    base = material.base_price_per_square
    return (base * policy.price_override_min_ratio, base * policy.price_override_max_ratio)
