# backend/app/models/ticket.py
"""
Ticket and ticket type models.

A ticket belongs to one enrollment and carries a payment status. Its ticket
type decides whether attendance is remote and whether a hotel is included.
"""

from enum import Enum

from sqlalchemy import Boolean, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from ..database import Base
from ._timestamps import TimestampMixin


class TicketStatus(str, Enum):
    """Payment status of a ticket."""

    RESERVED = "RESERVED"
    PAID = "PAID"


class TicketType(TimestampMixin, Base):
    """Catalog entry for a kind of ticket."""

    __tablename__ = "ticket_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    is_remote = Column(Boolean, nullable=False, default=False)
    includes_hotel = Column(Boolean, nullable=False, default=False)

    tickets = relationship("Ticket", back_populates="ticket_type")


class Ticket(TimestampMixin, Base):
    """Purchase record tied to an enrollment."""

    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ticket_type_id = Column(Integer, ForeignKey("ticket_types.id"), nullable=False)
    enrollment_id = Column(Integer, ForeignKey("enrollments.id"), nullable=False, unique=True)
    status = Column(String(20), nullable=False, default=TicketStatus.RESERVED.value)

    ticket_type = relationship("TicketType", back_populates="tickets")
    enrollment = relationship("Enrollment", back_populates="ticket")
