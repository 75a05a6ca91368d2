"""
Auth endpoints: register, login, refresh, me.

Accounts are contractor logins. Access tokens are stateless JWTs; refresh
tokens are stored hashed so they can be revoked.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from .. import models
from ..auth import (
    create_access_token,
    get_current_user,
    hash_password,
    issue_tokens,
    redeem_refresh_token,
    verify_password,
)
from ..database import get_db
from ..schemas import CamelModel

router = APIRouter(prefix="/auth", tags=["auth"])


# --- Request schemas ---

class RegisterRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class RefreshRequest(CamelModel):
    refresh_token: str


def user_to_response(user: models.User) -> dict:
    """Convert User model to response dict; password_hash is never exposed."""
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "subscriptionStatus": user.subscription_status or "free",
        "aiRequestsUsed": user.ai_requests_used or 0,
        "companyName": user.company_name or "",
        "companyLogo": user.company_logo,
        "createdAt": user.created_at.isoformat() if user.created_at else None,
    }


# --- Endpoints ---

@router.post("/register")
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """Create a new account. Email and username must both be unused."""
    if not request.username or not request.email or not request.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username, email, and password are required",
        )

    if db.query(models.User).filter(models.User.email == request.email).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )
    if db.query(models.User).filter(models.User.username == request.username).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already taken",
        )

    user = models.User(
        username=request.username,
        email=request.email,
        password_hash=hash_password(request.password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    tokens = issue_tokens(db, user)
    return {"success": True, **tokens, "user": user_to_response(user)}


@router.post("/login")
def login(request: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate with email + password. Returns access + refresh tokens."""
    if not request.email or not request.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password are required",
        )

    user = db.query(models.User).filter(models.User.email == request.email).first()
    if not user or not verify_password(request.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    tokens = issue_tokens(db, user)
    return {"success": True, **tokens, "user": user_to_response(user)}


@router.post("/refresh")
def refresh(request: RefreshRequest, db: Session = Depends(get_db)):
    """Exchange a valid refresh token for a new access token."""
    user = redeem_refresh_token(db, request.refresh_token)

    # New access token only; the refresh token stays valid until it expires
    new_access = create_access_token(user.id)
    return {
        "token": new_access,
        "access_token": new_access,
        "token_type": "bearer",
        "user_id": user.id,
    }


@router.get("/me")
def me(current_user: models.User = Depends(get_current_user)):
    """Return the current authenticated user's profile."""
    return {"success": True, "user": user_to_response(current_user)}
