"""
Request bodies. The mobile client speaks camelCase; fields are snake_case
here and accept either form.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional, List


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)



class ProjectBase(CamelModel):
    address: Optional[str] = None
    length: Optional[float] = None
    width: Optional[float] = None
    pitch: Optional[float] = None
    roof_area: Optional[float] = None
    roof_squares: Optional[float] = None
    selected_material: Optional[str] = None
    material_price_per_square: Optional[float] = None
    micro_breakdown: Optional[dict] = None
    labor_rate: Optional[float] = None
    labor_hours: Optional[float] = None
    additional_costs: Optional[float] = None
    estimate_total: Optional[float] = None
    status: Optional[str] = None


class ProjectCreate(ProjectBase):
    address: str


class ProjectUpdate(ProjectBase):
    pass


class ProjectEstimateRequest(CamelModel):
    """Price a saved project. Squares come from the project itself."""
    selected_material: Optional[str] = None
    material_price_per_square: Optional[float] = None
    labor_rate: Optional[float] = None
    labor_hours: Optional[float] = None
    additional_costs: Optional[float] = None


class BrandingUpdate(CamelModel):
    company_name: Optional[str] = None
    company_logo: Optional[str] = None


class Branding(CamelModel):
    company_name: Optional[str] = None
    logo_uri: Optional[str] = None
    company_logo: Optional[str] = None


class DocumentRequest(BaseModel):
    """Body of /generate-pdf: a project snapshot plus optional branding."""
    project: Optional[dict] = None
    branding: Optional[Branding] = None


class AddressRequest(BaseModel):
    address: Optional[str] = None


class ChatMessage(BaseModel):
    role: str
    content: str


class AssistantRequest(CamelModel):
    message: Optional[str] = None
    context: Optional[str] = None
    conversation_history: List[ChatMessage] = []


class SpeechRequest(BaseModel):
    audio: Optional[str] = None
