"""
Display labels, ordering, and the legacy field names older clients still read.

The app screens and the estimate document must show the same rows in the
same order, so both go through breakdown_rows().
"""

from .engine import (
    ITEM_UNITS,
    MATERIAL_ITEM_KEYS,
    WIRE_FIELDS,
    CostBreakdown,
    LineItem,
    round_half_up,
)

LINE_ITEM_LABELS = {
    "shingles": "Shingles/Panels",
    "waste": "Waste Factor (12%)",
    "underlayment": "Underlayment",
    "ice_shield": "Ice & Water Shield",
    "drip_edge": "Drip Edge",
    "starter_strip": "Starter Strip",
    "ridge_cap": "Ridge Cap",
    "flashing": "Flashing",
    "vents": "Roof Vents",
    "nails": "Nails/Fasteners",
    "labor": "Labor",
    "additional": "Additional Costs",
}

UNIT_ABBREVIATIONS = {
    "bundles": "bundles",
    "rolls": "rolls",
    "pieces": "pcs",
    "units": "units",
    "lbs": "lbs",
}

# Old snapshot keys -> line item key. Saved projects from earlier app
# versions only carry these totals.
LEGACY_TOTAL_KEYS = {
    "shingles": "shingles",
    "waste": "waste",
    "underlayment": "underlayment",
    "flashing": "flashing",
    "nails": "nails",
    "venting": "vents",
    "ridgeCap": "ridge_cap",
}


def format_currency(amount) -> str:
    """Whole dollars like $1,234, the way estimates are quoted."""
    try:
        return f"${round_half_up(float(amount)):,}"
    except (ValueError, TypeError):
        return "$0"


def _qty(value) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value:,}" if isinstance(value, int) else f"{value:g}"


def detail_text(line: LineItem) -> str:
    """e.g. "60 bundles x $93". Waste shows as extra bundles."""
    unit = UNIT_ABBREVIATIONS.get(line.unit, line.unit)
    if line.key == "waste":
        return f"{_qty(line.quantity)} {unit} extra"
    return f"{_qty(line.quantity)} {unit} x {format_currency(line.unit_cost)}"


def legacy_fields(breakdown: CostBreakdown) -> dict:
    """Flat totals under the names the first mobile release stored."""
    legacy = {name: breakdown.item(key).line_total for name, key in LEGACY_TOTAL_KEYS.items()}
    legacy["labor"] = breakdown.labor_total
    legacy["additional"] = breakdown.additional_costs
    return legacy


def snapshot(breakdown: CostBreakdown) -> dict:
    """What gets stored on a project: canonical fields plus legacy aliases."""
    data = breakdown.to_dict()
    data.update(legacy_fields(breakdown))
    return data


def _amount(value):
    try:
        return float(value)
    except (ValueError, TypeError):
        return 0.0


def breakdown_rows(stored: dict, labor_rate=None, labor_hours=None) -> list:
    """
    Ordered (label, detail, amount) rows from a stored snapshot.

    Reads canonical fields when present, falls back to legacy totals.
    Components missing from an old snapshot are skipped, not zero-filled.
    """
    stored = stored or {}
    rows = []
    legacy_by_key = {key: name for name, key in LEGACY_TOTAL_KEYS.items()}

    for key in MATERIAL_ITEM_KEYS:
        qty_key, cost_key, total_key = WIRE_FIELDS[key]
        if total_key in stored:
            detail = ""
            if qty_key in stored:
                line = LineItem(
                    key=key,
                    quantity=stored.get(qty_key),
                    unit=ITEM_UNITS[key],
                    unit_cost=stored.get(cost_key, 0),
                    line_total=0,
                )
                try:
                    detail = detail_text(line)
                except (ValueError, TypeError):
                    detail = ""
            rows.append((LINE_ITEM_LABELS[key], detail, _amount(stored[total_key])))
        elif legacy_by_key.get(key) in stored:
            rows.append((LINE_ITEM_LABELS[key], "", _amount(stored[legacy_by_key[key]])))

    rate = stored.get("laborRate", labor_rate) or 0
    hours = stored.get("laborHours", labor_hours) or 0
    labor = stored.get("laborTotal", stored.get("labor"))
    if labor is not None:
        rows.append((
            LINE_ITEM_LABELS["labor"],
            f"{_qty(_amount(hours))} hrs x {format_currency(rate)}/hr",
            _amount(labor),
        ))
    additional = stored.get("additionalCosts", stored.get("additional"))
    if additional is not None:
        rows.append((LINE_ITEM_LABELS["additional"], "", _amount(additional)))
    return rows
