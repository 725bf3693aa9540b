"""Booking workflow: availability, appointments and their status changes"""

from .router import router

__all__ = ["router"]
