# backend/app/api/dependencies/auth.py
"""
Authentication dependencies.

Every booking route sits behind ``get_current_user_id``: the bearer token must
be a valid JWT signed with the application secret AND be registered in the
sessions table. The resolved user id is the token's ``userId`` claim.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import PyJWTError
from sqlalchemy.orm import Session

from ...auth import decode_access_token
from ...repositories.session_repository import SessionRepository
from .database import get_db

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_session_repository(db: Session = Depends(get_db)) -> SessionRepository:
    """Provide a SessionRepository bound to the request session."""
    return SessionRepository(db)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session_repository: SessionRepository = Depends(get_session_repository),
) -> int:
    """
    Resolve the authenticated user id from the Authorization header.

    Raises:
        HTTPException: 401 when the header is missing, the token is invalid,
            or no session exists for the token
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Not authenticated")

    token = credentials.credentials
    try:
        payload = decode_access_token(token)
    except PyJWTError as e:
        logger.info(f"JWT validation error: {str(e)}")
        raise _unauthorized("Could not validate credentials")

    user_id = payload.get("userId")
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        logger.warning("Token payload missing integer 'userId' claim")
        raise _unauthorized("Could not validate credentials")

    session = session_repository.get_by_token(token)
    if session is None:
        logger.info("No session for presented token", extra={"user_id": user_id})
        raise _unauthorized("Session not found")

    return user_id
