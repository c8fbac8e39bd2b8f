# backend/app/repositories/session_repository.py
"""Session Repository: looks up issued bearer tokens for the auth gate."""

from typing import Optional

from sqlalchemy.orm import Session

from ..models.user import UserSession
from .base_repository import BaseRepository


class SessionRepository(BaseRepository[UserSession]):
    def __init__(self, db: Session):
        super().__init__(db, UserSession)

    def get_by_token(self, token: str) -> Optional[UserSession]:
        """Return the session row that owns ``token``, if any."""
        return self.find_one_by(token=token)
