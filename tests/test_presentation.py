"""
Presentation tests: labels, legacy field names, document rows.

The app and the PDF read the same rows, including from snapshots saved by
older app versions that only carry flat totals.
"""

from roofmaster.estimator import EstimateInput, MATERIAL_ITEM_KEYS, compute_breakdown
from roofmaster.estimator.engine import ITEM_UNITS
from roofmaster.estimator.materials import display_name
from roofmaster.estimator.presentation import (
    breakdown_rows,
    detail_text,
    format_currency,
    legacy_fields,
    snapshot,
)


def _breakdown():
    return compute_breakdown(EstimateInput.from_dict({
        "roofSquares": 20,
        "selectedMaterialId": "three-tab",
        "laborRate": 50,
        "laborHours": 40,
        "additionalCosts": 200,
    }))


def test_format_currency():
    assert format_currency(10162) == "$10,162"
    assert format_currency(92.5) == "$93"
    assert format_currency(0) == "$0"
    assert format_currency("not a number") == "$0"
    assert format_currency(None) == "$0"


def test_detail_text():
    b = _breakdown()
    assert detail_text(b.item("shingles")) == "60 bundles x $93"
    assert detail_text(b.item("waste")) == "9 bundles extra"
    assert detail_text(b.item("drip_edge")) == "18 pcs x $8"
    assert detail_text(b.item("nails")) == "40 lbs x $3"


def test_legacy_fields_mirror_canonical_totals():
    b = _breakdown()
    legacy = legacy_fields(b)
    assert legacy["shingles"] == 5580
    assert legacy["waste"] == 837
    assert legacy["venting"] == 350
    assert legacy["ridgeCap"] == 55
    assert legacy["labor"] == 2000
    assert legacy["additional"] == 200


def test_snapshot_has_both_name_sets():
    data = snapshot(_breakdown())
    assert data["shingleTotal"] == data["shingles"]
    assert data["ventTotal"] == data["venting"]
    assert data["grandTotal"] == 10162


def test_rows_in_display_order():
    rows = breakdown_rows(snapshot(_breakdown()))
    labels = [label for label, _, _ in rows]
    assert labels == [
        "Shingles/Panels",
        "Waste Factor (12%)",
        "Underlayment",
        "Ice & Water Shield",
        "Drip Edge",
        "Starter Strip",
        "Ridge Cap",
        "Flashing",
        "Roof Vents",
        "Nails/Fasteners",
        "Labor",
        "Additional Costs",
    ]
    assert sum(amount for _, _, amount in rows) == 10162
    assert rows[-2][1] == "40 hrs x $50/hr"


def test_stored_row_details_match_live_items():
    b = _breakdown()
    details = {label: detail for label, detail, _ in breakdown_rows(snapshot(b))}
    assert details["Drip Edge"] == detail_text(b.item("drip_edge"))
    assert details["Underlayment"] == detail_text(b.item("underlayment"))
    for key in MATERIAL_ITEM_KEYS:
        assert b.item(key).unit == ITEM_UNITS[key]


def test_rows_from_legacy_snapshot():
    """Old snapshots: flat totals only, no quantities, missing components skipped."""
    old = {
        "shingles": 5580,
        "waste": 837,
        "underlayment": 315,
        "flashing": 90,
        "nails": 120,
        "venting": 350,
        "ridgeCap": 55,
        "labor": 2000,
        "additional": 200,
    }
    rows = breakdown_rows(old, labor_rate=50, labor_hours=40)
    labels = [label for label, _, _ in rows]
    assert "Ice & Water Shield" not in labels
    assert "Drip Edge" not in labels
    assert labels[0] == "Shingles/Panels"
    assert dict((label, amount) for label, _, amount in rows)["Roof Vents"] == 350
    assert rows[-2][1] == "40 hrs x $50/hr"


def test_bad_stored_amount_renders_as_zero():
    rows = breakdown_rows({"shingles": "oops"})
    assert rows == [("Shingles/Panels", "", 0.0)]


def test_empty_snapshot_has_no_rows():
    assert breakdown_rows(None) == []
    assert breakdown_rows({}) == []


def test_display_names():
    assert display_name("three-tab") == "Three Tab Shingles"
    assert display_name("standing-seam") == "Standing Seam Metal"
    assert display_name("cedar-shake") == "cedar-shake"
    assert display_name(None) == "Standard Materials"
