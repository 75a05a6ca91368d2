"""
Stateless estimate endpoint: inputs in, itemized breakdown out.

The body is handed to the estimator as-is so its validation (and the
offending field name) reaches the client unchanged.
"""

import logging

from fastapi import APIRouter, Body, HTTPException, status

from ..config import settings
from ..estimator import (
    EstimateInput,
    InvalidInputError,
    UnknownMaterialError,
    compute_breakdown,
    policy_from_settings,
)
from ..estimator.presentation import snapshot

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/estimates", tags=["estimates"])


def estimator_http_error(e: Exception) -> HTTPException:
    """Translate estimator errors into the API's error shape."""
    if isinstance(e, UnknownMaterialError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error": str(e),
                "field": "selectedMaterialId",
                "available": list(e.available or []),
            },
        )
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={"error": str(e), "field": e.field},
    )


def run_estimate(data: dict) -> dict:
    """Parse, price and snapshot. Raises HTTPException on estimator errors."""
    try:
        estimate_input = EstimateInput.from_dict(data)
        breakdown = compute_breakdown(estimate_input, policy=policy_from_settings(settings))
    except (InvalidInputError, UnknownMaterialError) as e:
        logger.info("Estimate rejected: %s", e)
        raise estimator_http_error(e)
    return snapshot(breakdown)


@router.post("")
def create_estimate(payload: dict = Body(...)):
    """
    Price a roof.

    Body: roofSquares, selectedMaterialId, and optionally laborRate,
    laborHours, additionalCosts, pricePerSquareOverride.
    """
    return run_estimate(payload)
