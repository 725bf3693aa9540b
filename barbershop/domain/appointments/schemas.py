"""Appointment domain schemas - Pydantic models for validation"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel


class BookingCreate(BaseModel):
    """Schema for booking an appointment

    Fields are optional so that a missing field is reported by the booking
    workflow as incomplete input rather than as a schema error.
    """

    serviceId: Optional[int] = None
    date: Optional[str] = None  # YYYY-MM-DD
    time: Optional[str] = None  # HH:MM


class RescheduleRequest(BaseModel):
    """Schema for moving an appointment to a new slot"""

    date: Optional[str] = None
    time: Optional[str] = None


class AppointmentResponse(BaseModel):
    """Schema for appointment response"""

    id: int
    userId: int
    serviceId: int
    serviceName: Optional[str] = None
    date: dt.date
    time: str
    endTime: Optional[str] = None
    status: str
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class AvailableSlotsResponse(BaseModel):
    """Schema for the free slots of a date"""

    date: dt.date
    slots: list[str]


class ActionResult(BaseModel):
    success: bool
    message: str
    appointment: Optional[AppointmentResponse] = None
