"""
Satellite roof measurement lookups.

POST /api/roof-measurements {address}: area, squares and pitch from Google Solar.
"""

import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from ..config import settings
from ..integrations import IntegrationError
from ..integrations import solar
from ..schemas import AddressRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["measurements"])


@router.post("/roof-measurements")
def roof_measurements(request: AddressRequest):
    if not request.address or not request.address.strip():
        raise HTTPException(status_code=400, detail="Address is required")

    api_key = settings.google_api_key
    if not api_key:
        return JSONResponse(
            status_code=500,
            content={
                "error": "Google API key not configured. Please add GOOGLE_SOLAR_API_KEY.",
                "configured": False,
            },
        )

    try:
        result = solar.measure_roof(request.address, api_key)
    except IntegrationError as e:
        if e.status_code == 404:
            raise HTTPException(status_code=404, detail="Could not get roof measurements for this location")
        logger.warning("Roof measurement failed for %r: %s", request.address, e)
        raise HTTPException(status_code=502, detail="Roof measurement service unavailable")

    if result is None:
        raise HTTPException(status_code=404, detail="Could not find address")

    return {"success": True, **result}
