# backend/app/models/booking.py
"""
Booking model: a user's reservation of a hotel room.

Bookings are created when a user reserves a room and mutated only by
reassigning the room. They are never deleted by the booking API.
"""

from sqlalchemy import Column, ForeignKey, Integer
from sqlalchemy.orm import relationship

from ..database import Base
from ._timestamps import TimestampMixin


class Booking(TimestampMixin, Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False, index=True)

    user = relationship("User", back_populates="bookings")
    room = relationship("Room", back_populates="bookings")

    def __repr__(self) -> str:
        return f"<Booking {self.id} user={self.user_id} room={self.room_id}>"
