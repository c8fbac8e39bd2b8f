from datetime import datetime, timedelta, timezone
import logging
from typing import Any, Dict, Optional, cast

import jwt
from sqlalchemy.orm import Session

from .core.config import settings
from .repositories.factory import RepositoryFactory

logger = logging.getLogger(__name__)


def _secret_value(secret_obj: Any) -> str:
    getter = getattr(secret_obj, "get_secret_value", None)
    if callable(getter):
        return cast(str, getter())
    return cast(str, secret_obj)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and verify a JWT access token.

    Raises:
        jwt.PyJWTError: If the signature, expiry or structure is invalid
    """
    payload_raw = jwt.decode(
        token,
        _secret_value(settings.secret_key),
        algorithms=[settings.algorithm],
    )
    return cast(Dict[str, Any], payload_raw)


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        user_id: The user the token authenticates (``userId`` claim)
        expires_delta: Optional expiration time delta

    Returns:
        str: The encoded JWT token
    """
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.access_token_expire_minutes
        )

    to_encode = {"userId": user_id, "exp": expire}
    encoded_jwt = cast(
        str,
        jwt.encode(
            to_encode,
            _secret_value(settings.secret_key),
            algorithm=settings.algorithm,
        ),
    )
    logger.debug(f"Created access token for user: {user_id}")
    return encoded_jwt


def issue_session_token(db: Session, user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a token and register it as a session for the user.

    Only tokens with a session row pass the authentication gate. The session
    is flushed, not committed; the caller owns the transaction.
    """
    token = create_access_token(user_id, expires_delta)
    RepositoryFactory.create_session_repository(db).create(user_id=user_id, token=token)
    return token
