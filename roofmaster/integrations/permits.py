"""
Permit history lookups against the Shovels API.

Shovels searches by geography, not street address, so the address is
narrowed to a ZIP code (or state) and the results are filtered down to
roofing work.
"""

import logging
import re
from datetime import date
from typing import Optional

from .http import build_url, request_json

logger = logging.getLogger(__name__)

SEARCH_URL = "https://api.shovels.ai/v2/permits/search"
LOOKBACK_YEARS = 5
PAGE_SIZE = 50
MAX_RESULTS = 10
FALLBACK_RESULTS = 5

ROOFING_KEYWORDS = ("roof", "shingle", "reroof", "re-roof", "roofing", "solar", "gutter")

_ZIP_RE = re.compile(r"\b(\d{5})\b")
_STATE_RE = re.compile(r"\b([A-Z]{2})\b")


def extract_geo_id(address: str) -> str:
    """5-digit ZIP if present, else a 2-letter state code, else "US"."""
    match = _ZIP_RE.search(address)
    if match:
        return match.group(1)
    match = _STATE_RE.search(address)
    if match:
        return match.group(1)
    return "US"


def map_permit_status(raw: Optional[str]) -> str:
    if not raw:
        return "pending"
    s = raw.lower()
    if any(word in s for word in ("issued", "approved", "final", "complete")):
        return "approved"
    if any(word in s for word in ("expired", "closed", "cancelled")):
        return "expired"
    return "pending"


def search_window(today: Optional[date] = None) -> tuple:
    """(permit_from, permit_to) ISO dates covering the lookback period."""
    today = today or date.today()
    try:
        start = today.replace(year=today.year - LOOKBACK_YEARS)
    except ValueError:
        # Feb 29 in a non-leap target year
        start = today.replace(year=today.year - LOOKBACK_YEARS, day=28)
    return start.isoformat(), today.isoformat()


def is_roofing_permit(permit: dict) -> bool:
    haystacks = (
        (permit.get("work_type") or permit.get("type") or "").lower(),
        (permit.get("description") or permit.get("work_description") or "").lower(),
        (permit.get("permit_type") or "").lower(),
    )
    return any(keyword in text for keyword in ROOFING_KEYWORDS for text in haystacks)


def format_permit_address(permit: dict, fallback: str) -> str:
    raw = permit.get("address")
    if isinstance(raw, dict):
        street = raw.get("street")
        if raw.get("street_no") and street:
            street = f"{raw['street_no']} {street}"
        parts = [p for p in (street, raw.get("city"), raw.get("state")) if p]
        return ", ".join(parts) or fallback
    if isinstance(raw, str):
        return raw
    return permit.get("full_address") or fallback


def normalize_permit(permit: dict, index: int, searched_address: str) -> dict:
    contractor = permit.get("contractor") or {}
    contractor_name = permit.get("contractor_name") or contractor.get("name")

    normalized = {
        "id": str(permit.get("id") or permit.get("permit_number") or index),
        "address": format_permit_address(permit, searched_address),
        "permitType": permit.get("work_type") or permit.get("type") or permit.get("description") or "Roofing",
        "status": map_permit_status(permit.get("status")),
        "issueDate": (permit.get("issue_date") or permit.get("filed_date")
                      or permit.get("permit_date") or date.today().isoformat()),
        "expiryDate": permit.get("expiry_date") or permit.get("final_date"),
        "contractor": None,
        "value": permit.get("value") or permit.get("job_value") or permit.get("valuation"),
        "description": permit.get("description") or permit.get("work_description"),
    }
    if contractor_name:
        normalized["contractor"] = {
            "name": contractor_name,
            "phone": permit.get("contractor_phone") or contractor.get("phone"),
            "email": permit.get("contractor_email") or contractor.get("email"),
        }
    return normalized


def select_permits(items: list, searched_address: str) -> list:
    """Roofing permits first; if none match, show a few of whatever came back."""
    roofing = [p for p in items if isinstance(p, dict) and is_roofing_permit(p)]
    chosen = roofing if roofing else [p for p in items if isinstance(p, dict)][:FALLBACK_RESULTS]
    return [
        normalize_permit(permit, index, searched_address)
        for index, permit in enumerate(chosen[:MAX_RESULTS])
    ]


def search_permits(address: str, api_key: str, today: Optional[date] = None) -> list:
    permit_from, permit_to = search_window(today)
    url = build_url(SEARCH_URL, {
        "geo_id": extract_geo_id(address),
        "permit_from": permit_from,
        "permit_to": permit_to,
        "page": 1,
        "size": PAGE_SIZE,
    })
    data = request_json("shovels", url, headers={"X-API-Key": api_key})

    items = data.get("items") or data.get("data") or data.get("results") or []
    if not isinstance(items, list):
        logger.warning("Unexpected Shovels payload shape: %s", type(items).__name__)
        return []

    permits = select_permits(items, address)
    logger.info("Permit search for %r returned %d of %d items", address, len(permits), len(items))
    return permits
