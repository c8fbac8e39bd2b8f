# backend/app/repositories/room_repository.py
"""
Room Repository for the EventHub booking API

Reads a room together with the bookings currently pointing at it.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..domain.booking_views import RoomView, RoomWithBookingsView
from ..models.booking import Booking
from ..models.hotel import Room
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class RoomRepository(BaseRepository[Room]):
    """Repository for room occupancy lookups."""

    def __init__(self, db: Session):
        super().__init__(db, Room)

    def get_room_by_id(
        self, room_id: int, for_update: bool = False
    ) -> Optional[RoomWithBookingsView]:
        """
        Get a room and the ids of its bookings.

        Args:
            room_id: Room primary key
            for_update: Lock the room row so the occupancy read stays valid
                until the caller's transaction ends

        Returns:
            Room with booking ids, or None if the room does not exist
        """
        # Lock only the room row; bookings are read afterwards so the
        # count reflects every writer that committed before we got the lock.
        room = self.get_by_id(room_id, load_relationships=False, for_update=for_update)
        if room is None:
            return None

        try:
            rows = (
                self.db.query(Booking.id)
                .filter(Booking.room_id == room_id)
                .order_by(Booking.id.asc())
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading bookings for room {room_id}: {str(e)}")
            raise RepositoryException(f"Failed to load room bookings: {str(e)}")

        return RoomWithBookingsView(
            room=RoomView.from_model(room),
            booking_ids=tuple(row[0] for row in rows),
        )
