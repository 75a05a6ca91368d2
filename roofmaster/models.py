from sqlalchemy import Column, Integer, String, Float, DateTime, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from .database import Base
import enum
import uuid


class ProjectStatus(str, enum.Enum):
    DRAFT = "draft"
    COMPLETED = "completed"


class User(Base):
    """Contractor accounts. Branding fields feed the estimate document header."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, nullable=False)
    email = Column(String, unique=True, nullable=False)
    password_hash = Column(String, nullable=False)
    subscription_status = Column(String, default="free")  # 'free' | 'active' | 'pro'
    ai_requests_used = Column(Integer, default=0)
    company_name = Column(String, nullable=True)
    company_logo = Column(Text, nullable=True)  # data: URI or https:// URL
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    auth_tokens = relationship("AuthToken", back_populates="user", cascade="all, delete-orphan")
    projects = relationship("Project", back_populates="user", cascade="all, delete-orphan")


class AuthToken(Base):
    """JWT refresh token storage. Access tokens are stateless."""
    __tablename__ = "auth_tokens"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    token_hash = Column(String, nullable=False)
    token_type = Column(String, default="refresh")
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="auth_tokens")


class Project(Base):
    """A roof job. micro_breakdown is the estimator snapshot at save time."""
    __tablename__ = "projects"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    address = Column(Text, nullable=False)
    # Geometry
    length = Column(Float, default=0.0)
    width = Column(Float, default=0.0)
    pitch = Column(Float, default=0.0)
    roof_area = Column(Float, default=0.0)
    roof_squares = Column(Float, nullable=True)
    # Pricing inputs
    selected_material = Column(String, nullable=True)
    material_price_per_square = Column(Float, nullable=True)
    labor_rate = Column(Float, default=0.0)
    labor_hours = Column(Float, default=0.0)
    additional_costs = Column(Float, default=0.0)
    # Outputs
    micro_breakdown = Column(JSON, nullable=True)
    estimate_total = Column(Float, default=0.0)
    status = Column(String, default=ProjectStatus.DRAFT.value)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="projects")
