from fastapi import APIRouter

from ..config import settings
from ..estimator import MATERIAL_CATALOG, policy_from_settings

router = APIRouter(prefix="/materials", tags=["materials"])


@router.get("")
def list_materials():
    """Catalog with per-square base prices and the adjuster's price range."""
    policy = policy_from_settings(settings)
    return {
        "success": True,
        "materials": [material.to_dict(policy) for material in MATERIAL_CATALOG],
    }
