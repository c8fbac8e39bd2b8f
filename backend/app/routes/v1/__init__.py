# backend/app/routes/v1/__init__.py
"""
API v1 Routes
"""

from . import bookings, health, prometheus

__all__ = [
    "bookings",
    "health",
    "prometheus",
]
