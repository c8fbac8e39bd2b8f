# backend/app/models/enrollment.py
"""Enrollment model: a user's registration for the event."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from ..database import Base
from ._timestamps import TimestampMixin


class Enrollment(TimestampMixin, Base):
    """Registration record; a user has at most one."""

    __tablename__ = "enrollments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    cpf = Column(String(11), nullable=False)
    birthday = Column(DateTime(timezone=True), nullable=False)
    phone = Column(String(32), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)

    user = relationship("User", back_populates="enrollment")
    ticket = relationship("Ticket", back_populates="enrollment", uselist=False)
