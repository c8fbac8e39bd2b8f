# backend/app/repositories/enrollment_repository.py
"""Enrollment Repository: resolves a user's event registration."""

from typing import Optional

from sqlalchemy.orm import Session

from ..domain.booking_views import EnrollmentView
from ..models.enrollment import Enrollment
from .base_repository import BaseRepository


class EnrollmentRepository(BaseRepository[Enrollment]):
    def __init__(self, db: Session):
        super().__init__(db, Enrollment)

    def get_by_user_id(self, user_id: int) -> Optional[EnrollmentView]:
        enrollment = self.find_one_by(user_id=user_id)
        return EnrollmentView.from_model(enrollment) if enrollment else None
