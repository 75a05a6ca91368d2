import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from ..config import settings
from ..integrations import IntegrationError
from ..integrations.permits import search_permits
from ..schemas import AddressRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["permits"])


@router.post("/permits")
def permit_history(request: AddressRequest):
    """Recent roofing permits near an address. Unconfigured is not an error."""
    if not request.address or not request.address.strip():
        raise HTTPException(status_code=400, detail="Address is required")

    if not settings.SHOVELS_API_KEY:
        return {
            "success": True,
            "configured": False,
            "permits": [],
            "count": 0,
            "message": "Permit search is not configured",
        }

    try:
        permits = search_permits(request.address, settings.SHOVELS_API_KEY)
    except IntegrationError as e:
        logger.warning("Permit search failed for %r: %s", request.address, e)
        return JSONResponse(
            status_code=502,
            content={
                "success": False,
                "configured": True,
                "error": "Failed to search permits. Please try again.",
                "permits": [],
            },
        )

    return {
        "success": True,
        "configured": True,
        "permits": permits,
        "count": len(permits),
    }
