# backend/app/repositories/ticket_repository.py
"""
Ticket Repository for the EventHub booking API

Resolves the ticket owned by an enrollment and the ticket type that decides
hotel eligibility.
"""

from typing import Optional

from sqlalchemy.orm import Session

from ..domain.booking_views import TicketTypeView, TicketView
from ..models.ticket import Ticket, TicketType
from .base_repository import BaseRepository


class TicketRepository(BaseRepository[Ticket]):
    """Repository for tickets and their types."""

    def __init__(self, db: Session):
        super().__init__(db, Ticket)

    def get_by_enrollment_id(self, enrollment_id: int) -> Optional[TicketView]:
        ticket = self.find_one_by(enrollment_id=enrollment_id)
        return TicketView.from_model(ticket) if ticket else None

    def get_ticket_type_by_id(self, ticket_type_id: int) -> Optional[TicketTypeView]:
        ticket_type = self.db.get(TicketType, ticket_type_id)
        return TicketTypeView.from_model(ticket_type) if ticket_type else None
