"""Application-wide constants for the EventHub booking API."""

from __future__ import annotations

BRAND_NAME = "EventHub"

API_TITLE = f"{BRAND_NAME} Hotel Booking API"
API_DESCRIPTION = "View, create and change hotel room reservations for ticket holders."
API_VERSION = "1.0.0"

# Route prefixes
BOOKING_PREFIX = "/booking"
