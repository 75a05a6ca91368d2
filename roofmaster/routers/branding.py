"""Company branding shown on estimate documents: name and logo URI."""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from .. import models
from ..auth import get_current_user
from ..database import get_db
from ..pdf_generator import is_valid_logo_uri
from ..schemas import BrandingUpdate

router = APIRouter(prefix="/branding", tags=["branding"])

MAX_COMPANY_NAME = 100
# 2 MB file, base64-encoded is ~1.37x larger
MAX_LOGO_LENGTH = int(2 * 1024 * 1024 * 1.4)


def _branding(user: models.User) -> dict:
    return {
        "companyName": user.company_name or "",
        "companyLogo": user.company_logo,
    }


@router.get("")
def get_branding(current_user: models.User = Depends(get_current_user)):
    return {"success": True, "branding": _branding(current_user)}


@router.put("")
def update_branding(
    update: BrandingUpdate,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Replace the caller's branding. Empty values clear the field.

    Logos must be data:image/, https:// or file:// URIs under ~2 MB.
    """
    if update.company_name and len(update.company_name) > MAX_COMPANY_NAME:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Company name must be {MAX_COMPANY_NAME} characters or less",
        )

    if update.company_logo:
        if len(update.company_logo) > MAX_LOGO_LENGTH:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Logo file is too large (max 2MB)",
            )
        if not is_valid_logo_uri(update.company_logo):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid logo URI format",
            )

    current_user.company_name = update.company_name or None
    current_user.company_logo = update.company_logo or None
    current_user.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(current_user)
    return {"success": True, "branding": _branding(current_user)}
