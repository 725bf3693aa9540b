"""Admin domain schemas"""

from typing import Optional

from pydantic import BaseModel

from ..appointments.schemas import AppointmentResponse


class AdminAppointmentResponse(AppointmentResponse):
    """Appointment as seen by an admin, with the booking client"""

    userName: Optional[str] = None
    userEmail: Optional[str] = None


class AdminAppointmentUpdate(BaseModel):
    """Status change and/or move to a new slot"""

    status: Optional[str] = None
    date: Optional[str] = None  # YYYY-MM-DD
    time: Optional[str] = None  # HH:MM
