"""Session authentication for API endpoints"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import ValidationError
import structlog

from app.config import settings
from app.schemas.auth import Session, TokenPayload

logger = structlog.get_logger()

# Bearer scheme, missing credentials are answered below with 401
bearer_scheme = HTTPBearer(auto_error=False)


def create_session_token(session: Session, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT carrying the session claims"""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {
        "sub": str(session.account_id),
        "profile_id": str(session.profile_id),
        "email": session.email,
        "restaurant_id": str(session.restaurant_id) if session.restaurant_id else None,
        "exp": expire,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> Session:
    """Validate a token and build its session, raises JWTError or ValidationError"""
    payload = TokenPayload(
        **jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    )
    return Session(
        account_id=UUID(payload.sub),
        profile_id=UUID(payload.profile_id),
        email=payload.email,
        restaurant_id=UUID(payload.restaurant_id) if payload.restaurant_id else None,
    )


async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Session:
    """Get the authenticated session from the bearer token"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None or not credentials.credentials:
        logger.info("Authorization is required")
        raise credentials_exception

    try:
        return decode_session_token(credentials.credentials)
    except (JWTError, ValidationError, ValueError):
        logger.info("Invalid session token")
        raise credentials_exception
