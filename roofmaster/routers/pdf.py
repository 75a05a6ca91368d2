"""
Estimate document endpoints.

POST /api/generate-pdf: render a project snapshot the app sends (no account needed).
GET /api/projects/{project_id}/pdf: render a saved project.

The saved-project download supports auth via:
1. Authorization: Bearer <token> header (standard)
2. ?token=<jwt> query param (for direct download links / share sheets)
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from .. import models
from ..auth import security, user_from_token
from ..database import get_db
from ..pdf_generator import generate_estimate_pdf
from ..schemas import DocumentRequest
from .projects import get_owned_project, project_to_response

router = APIRouter(tags=["pdf"])


def _pdf_response(pdf_bytes: bytes, project_id) -> Response:
    filename = f"RoofMaster360_Estimate_{project_id or 'draft'}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/generate-pdf")
def generate_pdf(request: DocumentRequest):
    """
    Render the project the client has on screen.

    Branding is optional; without it the document carries the default
    company name.
    """
    if not request.project:
        raise HTTPException(status_code=400, detail="Project data is required")

    branding = request.branding.model_dump(by_alias=True) if request.branding else {}
    pdf_bytes = generate_estimate_pdf(request.project, branding)
    return _pdf_response(pdf_bytes, request.project.get("id"))


@router.get("/projects/{project_id}/pdf")
def download_project_pdf(
    project_id: str,
    token: Optional[str] = Query(None),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
):
    """
    Render a saved project with the owner's branding.

    Auth: Bearer header OR ?token= query param.
    Returns: application/pdf
    """
    raw_token = credentials.credentials if credentials else token
    if not raw_token:
        raise HTTPException(status_code=401, detail="Authentication required. Pass ?token= parameter.")
    current_user: models.User = user_from_token(raw_token, db)

    project = get_owned_project(project_id, current_user, db)
    branding = {
        "companyName": current_user.company_name,
        "logoUri": current_user.company_logo,
    }
    pdf_bytes = generate_estimate_pdf(project_to_response(project), branding)
    return _pdf_response(pdf_bytes, project.id)
