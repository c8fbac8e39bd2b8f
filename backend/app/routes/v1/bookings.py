# backend/app/routes/v1/bookings.py
"""
Hotel booking routes

Mounted under /booking behind the bearer-token gate.
All business logic delegated to BookingService.

Endpoints:
    GET / - The user's booking with its room
    POST / - Reserve a room
    PUT /{booking_id} - Move an existing booking to another room
"""

import asyncio
import logging
from typing import NoReturn

from fastapi import APIRouter, Body, Depends, HTTPException, Path, status

from ...api.dependencies import get_booking_service, get_current_user_id
from ...core.exceptions import DomainException
from ...schemas.booking import BookingIdResponse, BookingRequest, BookingWithRoomResponse
from ...services.booking_service import BookingService

logger = logging.getLogger(__name__)

# No prefix here, will be added when mounting in main.py
router = APIRouter(tags=["booking"])


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    if hasattr(exc, "to_http_exception"):
        raise exc.to_http_exception()
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.get(
    "",
    response_model=BookingWithRoomResponse,
    responses={
        403: {"description": "Enrollment has no ticket"},
        404: {"description": "No enrollment or no booking"},
    },
)
async def get_booking(
    user_id: int = Depends(get_current_user_id),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingWithRoomResponse:
    """Get the authenticated user's booking and the room it holds."""
    try:
        booking = await asyncio.to_thread(booking_service.get_booking, user_id)
        return BookingWithRoomResponse.from_booking(booking)
    except DomainException as e:
        handle_domain_exception(e)


@router.post(
    "",
    response_model=BookingIdResponse,
    status_code=status.HTTP_200_OK,
    responses={
        403: {"description": "Ticket missing, unpaid or without hotel; room full"},
        404: {"description": "No enrollment or room not found"},
    },
)
async def post_booking(
    booking_data: BookingRequest = Body(...),
    user_id: int = Depends(get_current_user_id),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingIdResponse:
    """Reserve a room for the authenticated user."""
    try:
        booking = await asyncio.to_thread(
            booking_service.post_booking, user_id, booking_data.room_id
        )
        return BookingIdResponse.from_booking(booking)
    except DomainException as e:
        handle_domain_exception(e)


@router.put(
    "/{booking_id}",
    response_model=BookingIdResponse,
    responses={
        403: {"description": "Not eligible, room full, or booking not owned by user"},
        404: {"description": "No enrollment or room not found"},
    },
)
async def put_booking(
    booking_id: int = Path(..., description="Booking to move"),
    booking_data: BookingRequest = Body(...),
    user_id: int = Depends(get_current_user_id),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingIdResponse:
    """Move one of the authenticated user's bookings to another room."""
    try:
        booking = await asyncio.to_thread(
            booking_service.update_booking, user_id, booking_data.room_id, booking_id
        )
        return BookingIdResponse.from_booking(booking)
    except DomainException as e:
        handle_domain_exception(e)
