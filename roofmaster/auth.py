"""
JWT token creation/validation and password hashing utilities.

Libraries: python-jose[cryptography] for JWT, passlib[bcrypt] for passwords.

Access tokens are stateless and long-lived so the mobile app stays signed in
on a job site. Refresh tokens are stored as SHA-256 hashes and must be on
record to be redeemed.
"""

import hashlib
import uuid
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from .config import settings
from .database import get_db
from . import models

ACCESS = "access"
REFRESH = "refresh"

# --- Password hashing ---

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


# --- JWT tokens ---

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def _get_jwt_secret() -> str:
    """Get JWT secret, failing loudly if not configured."""
    secret = settings.JWT_SECRET
    if not secret:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="JWT_SECRET not configured. Set it in environment variables.",
        )
    return secret


def _encode(user_id: int, token_type: str, lifetime: timedelta, **claims) -> str:
    payload = {
        "sub": str(user_id),
        "exp": datetime.utcnow() + lifetime,
        "type": token_type,
        **claims,
    }
    return jwt.encode(payload, _get_jwt_secret(), algorithm=settings.JWT_ALGORITHM)


def create_access_token(user_id: int) -> str:
    return _encode(user_id, ACCESS, timedelta(minutes=settings.JWT_ACCESS_EXPIRE_MINUTES))


def create_refresh_token(user_id: int) -> str:
    """Raw token is returned to the client; only its hash is stored."""
    return _encode(
        user_id, REFRESH, timedelta(days=settings.JWT_REFRESH_EXPIRE_DAYS),
        jti=str(uuid.uuid4()),
    )


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def decode_token(token: str, expected_type: Optional[str] = None) -> dict:
    """Decode and validate a JWT. Raises 401 on bad signature, expiry, or wrong type."""
    try:
        payload = jwt.decode(token, _get_jwt_secret(), algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise _unauthorized("Invalid or expired token")

    if expected_type and payload.get("type") != expected_type:
        raise _unauthorized(f"Invalid token type, expected {expected_type} token")
    if not payload.get("sub"):
        raise _unauthorized("Invalid token payload")
    return payload


def _load_user(db: Session, payload: dict) -> models.User:
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token payload")
    user = db.query(models.User).filter(models.User.id == user_id).first()
    if not user:
        raise _unauthorized("User not found")
    return user


def issue_tokens(db: Session, user: models.User) -> dict:
    """Access + refresh pair for a freshly authenticated user."""
    access_token = create_access_token(user.id)
    refresh_token = create_refresh_token(user.id)
    db.add(models.AuthToken(
        user_id=user.id,
        token_hash=hash_token(refresh_token),
        token_type=REFRESH,
        expires_at=datetime.utcnow() + timedelta(days=settings.JWT_REFRESH_EXPIRE_DAYS),
    ))
    db.commit()
    return {
        "token": access_token,
        "access_token": access_token,
        "refresh_token": refresh_token,
        "token_type": "bearer",
        "user_id": user.id,
    }


def redeem_refresh_token(db: Session, token: str) -> models.User:
    """The user a stored, unexpired refresh token belongs to."""
    payload = decode_token(token, expected_type=REFRESH)

    stored = db.query(models.AuthToken).filter(
        models.AuthToken.token_hash == hash_token(token),
        models.AuthToken.token_type == REFRESH,
    ).first()
    if not stored:
        raise _unauthorized("Refresh token not found, it may have been revoked")
    if stored.expires_at < datetime.utcnow():
        raise _unauthorized("Refresh token expired")

    return _load_user(db, payload)


def user_from_token(token: str, db: Session) -> models.User:
    """Resolve an access token to a User. Raises 401 on any problem."""
    return _load_user(db, decode_token(token, expected_type=ACCESS))


# --- FastAPI dependencies ---

def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> models.User:
    if credentials is None:
        raise _unauthorized("Authentication required")
    return user_from_token(credentials.credentials, db)


def get_optional_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> Optional[models.User]:
    """Like get_current_user, but anonymous or stale callers get None instead of 401."""
    if credentials is None:
        return None
    try:
        return user_from_token(credentials.credentials, db)
    except HTTPException as e:
        if e.status_code != status.HTTP_401_UNAUTHORIZED:
            raise
        return None
