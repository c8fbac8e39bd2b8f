# backend/app/models/user.py
"""
User and session models.

Users are created by the account flow (out of scope for this service); the
booking API only reads them. Sessions bind an issued bearer token to a user
and back the authentication gate.
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ..database import Base
from ._timestamps import TimestampMixin


class User(TimestampMixin, Base):
    """Registered account."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)

    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")
    enrollment = relationship("Enrollment", back_populates="user", uselist=False)
    bookings = relationship("Booking", back_populates="user")

    def __repr__(self) -> str:
        return f"<User {self.id} {self.email}>"


class UserSession(TimestampMixin, Base):
    """An issued bearer token that is still valid for the user."""

    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    token = Column(Text, nullable=False)

    user = relationship("User", back_populates="sessions")
