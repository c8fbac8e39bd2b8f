# backend/app/models/hotel.py
"""Hotel and room models."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from ..database import Base
from ._timestamps import TimestampMixin


class Hotel(TimestampMixin, Base):
    __tablename__ = "hotels"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    image = Column(String(1024), nullable=False, default="")

    rooms = relationship("Room", back_populates="hotel", order_by="Room.id")


class Room(TimestampMixin, Base):
    """
    A bookable unit inside a hotel.

    The number of bookings pointing at a room must never exceed ``capacity``;
    the booking service enforces this under a row lock on the room.
    """

    __tablename__ = "rooms"
    __table_args__ = (CheckConstraint("capacity >= 0", name="ck_rooms_capacity_non_negative"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    capacity = Column(Integer, nullable=False)
    hotel_id = Column(Integer, ForeignKey("hotels.id"), nullable=False, index=True)

    hotel = relationship("Hotel", back_populates="rooms")
    bookings = relationship("Booking", back_populates="room", order_by="Booking.id")
