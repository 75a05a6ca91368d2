"""
Project CRUD plus pricing a saved project.

Every project belongs to one contractor; other users get 403, not 404, so
the app can tell a bad link from a bad id.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from .. import models
from ..auth import get_current_user
from ..database import get_db
from ..estimator.geometry import roof_area_from_dimensions, squares_from_area
from ..schemas import ProjectCreate, ProjectEstimateRequest, ProjectUpdate
from .estimates import run_estimate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])

_GEOMETRY_FIELDS = ("length", "width", "pitch")


def project_to_response(project: models.Project) -> dict:
    return {
        "id": project.id,
        "userId": project.user_id,
        "address": project.address,
        "length": project.length or 0,
        "width": project.width or 0,
        "pitch": project.pitch or 0,
        "roofArea": project.roof_area or 0,
        "roofSquares": project.roof_squares,
        "selectedMaterial": project.selected_material,
        "materialPricePerSquare": project.material_price_per_square,
        "microBreakdown": project.micro_breakdown,
        "laborRate": project.labor_rate or 0,
        "laborHours": project.labor_hours or 0,
        "additionalCosts": project.additional_costs or 0,
        "estimateTotal": project.estimate_total or 0,
        "status": project.status,
        "createdAt": project.created_at.isoformat() if project.created_at else None,
        "updatedAt": project.updated_at.isoformat() if project.updated_at else None,
    }


def get_owned_project(project_id: str, user: models.User, db: Session) -> models.Project:
    project = db.query(models.Project).filter(models.Project.id == project_id).first()
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    if project.user_id != user.id:
        raise HTTPException(status_code=403, detail="Not authorized to access this project")
    return project


def _fill_geometry(project: models.Project, area_given: bool, squares_given: bool):
    """Derive roof area and squares from plan dimensions when the client didn't send them."""
    if not area_given and (project.length or 0) > 0 and (project.width or 0) > 0:
        project.roof_area = roof_area_from_dimensions(project.length, project.width, project.pitch or 0)
    if not squares_given and (project.roof_area or 0) > 0:
        project.roof_squares = squares_from_area(project.roof_area)


@router.get("")
def list_projects(
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    projects = (
        db.query(models.Project)
        .filter(models.Project.user_id == current_user.id)
        .order_by(models.Project.created_at.desc())
        .all()
    )
    return {"success": True, "projects": [project_to_response(p) for p in projects]}


@router.post("", status_code=201)
def create_project(
    data: ProjectCreate,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not data.address.strip():
        raise HTTPException(status_code=400, detail="Address is required")

    values = data.model_dump(exclude_unset=True)
    project = models.Project(user_id=current_user.id, **values)
    _fill_geometry(
        project,
        area_given=values.get("roof_area") is not None,
        squares_given=values.get("roof_squares") is not None,
    )
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("Project %s created for user %s", project.id, current_user.id)
    return {"success": True, "project": project_to_response(project)}


@router.get("/{project_id}")
def get_project(
    project_id: str,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    project = get_owned_project(project_id, current_user, db)
    return {"success": True, "project": project_to_response(project)}


@router.put("/{project_id}")
def update_project(
    project_id: str,
    update: ProjectUpdate,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    project = get_owned_project(project_id, current_user, db)

    update_data = update.model_dump(exclude_unset=True)
    if "address" in update_data and not (update_data["address"] or "").strip():
        raise HTTPException(status_code=400, detail="Address is required")

    for field, value in update_data.items():
        setattr(project, field, value)

    if any(f in update_data for f in _GEOMETRY_FIELDS) or "roof_area" in update_data:
        _fill_geometry(
            project,
            area_given="roof_area" in update_data,
            squares_given="roof_squares" in update_data,
        )

    project.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(project)
    return {"success": True, "project": project_to_response(project)}


@router.delete("/{project_id}")
def delete_project(
    project_id: str,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    project = get_owned_project(project_id, current_user, db)
    db.delete(project)
    db.commit()
    return {"success": True}


@router.post("/{project_id}/estimate")
def estimate_project(
    project_id: str,
    request: ProjectEstimateRequest,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Price a saved project and store the snapshot on it.

    Squares come from the project (stored squares, else derived from its
    roof area). Body values override the project's saved pricing inputs. A
    saved price per square is reused only while the material is unchanged.
    """
    project = get_owned_project(project_id, current_user, db)
    body = request.model_dump(exclude_unset=True)

    squares = project.roof_squares
    if not squares and (project.roof_area or 0) > 0:
        squares = squares_from_area(project.roof_area)

    material_id = body.get("selected_material", project.selected_material)
    if "material_price_per_square" in body:
        price = body["material_price_per_square"]
    elif material_id == project.selected_material:
        # A saved price belongs to the saved material only
        price = project.material_price_per_square or None
    else:
        price = None
    estimate_data = {
        "roofSquares": squares,
        "selectedMaterialId": material_id,
        "pricePerSquareOverride": price,
        "laborRate": body.get("labor_rate", project.labor_rate),
        "laborHours": body.get("labor_hours", project.labor_hours),
        "additionalCosts": body.get("additional_costs", project.additional_costs),
    }
    result = run_estimate(estimate_data)

    project.roof_squares = result["roofSquares"]
    project.selected_material = result["selectedMaterial"]
    project.material_price_per_square = result["pricePerSquare"]
    project.labor_rate = result["laborRate"]
    project.labor_hours = result["laborHours"]
    project.additional_costs = result["additionalCosts"]
    project.micro_breakdown = result
    project.estimate_total = result["grandTotal"]
    project.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(project)

    logger.info("Project %s priced at %s", project.id, result["grandTotal"])
    return {"success": True, "project": project_to_response(project), "breakdown": result}
