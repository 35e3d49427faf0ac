# backend/drivedesk/api/dependencies/auth.py
"""
Authentication dependencies.

Access tokens are issued by the hosted auth provider and verified here with
the shared HS256 secret. The ``sub`` claim is the instructor's user id; the
matching profile row is created the first time it is seen.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import jwt
from sqlalchemy.orm import Session

from ...core.config import settings
from ...core.exceptions import UnauthorizedException
from ...models.profile import Profile
from ...services.profile_service import ProfileService
from .database import get_db

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def decode_access_token(token: str) -> str:
    """
    Verify an access token and return its subject.

    Raises:
        UnauthorizedException: If the token is invalid, expired or has no subject
    """
    try:
        payload = jwt.decode(
            token,
            settings.auth_jwt_secret.get_secret_value(),
            algorithms=[settings.auth_jwt_algorithm],
            audience=settings.auth_jwt_audience,
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedException("Access token has expired", code="TOKEN_EXPIRED")
    except jwt.PyJWTError as exc:
        logger.debug("Rejected access token: %s", exc)
        raise UnauthorizedException("Could not validate credentials", code="INVALID_TOKEN")

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise UnauthorizedException("Could not validate credentials", code="INVALID_TOKEN")
    return subject


def get_token_subject(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """User id from the bearer token; 401 when missing or invalid."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException(
            "Not authenticated", code="NOT_AUTHENTICATED"
        ).to_http_exception()
    try:
        return decode_access_token(credentials.credentials)
    except UnauthorizedException as exc:
        raise exc.to_http_exception()


def get_current_profile(
    user_id: str = Depends(get_token_subject),
    db: Session = Depends(get_db),
) -> Profile:
    """The caller's profile, created on first access."""
    return ProfileService(db).get_or_create(user_id)


def get_current_user_id(profile: Profile = Depends(get_current_profile)) -> str:
    """Id of the calling instructor, whose profile row is guaranteed to exist."""
    return profile.id


def require_admin(profile: Profile = Depends(get_current_profile)) -> Profile:
    """Dependency that ensures the caller has administrator privileges."""
    if not profile.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return profile
