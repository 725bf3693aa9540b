"""Appointment router - FastAPI endpoints for booking and managing appointments"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import (
    ActionResult,
    AppointmentResponse,
    AvailableSlotsResponse,
    BookingCreate,
    RescheduleRequest,
)
from .service import AppointmentService, to_appointment_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


@router.get("/slots", response_model=AvailableSlotsResponse)
async def get_available_slots(
    date: str = Query(..., description="Date as YYYY-MM-DD"),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Get the free time slots for a date (public)"""
    day, slots = service.get_available_slots(date)
    return AvailableSlotsResponse(date=day, slots=slots)


@router.get("", response_model=list[AppointmentResponse])
async def list_my_appointments(
    current_user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Get all appointments of the current user, most recent first"""
    return [to_appointment_response(a) for a in service.list_user_appointments(current_user)]


@router.post("", response_model=ActionResult, status_code=201)
async def book_appointment(
    data: BookingCreate,
    current_user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Book an appointment for the current user"""
    appointment = service.book_appointment(data, current_user)
    return ActionResult(
        success=True,
        message="Appointment booked successfully!",
        appointment=to_appointment_response(appointment),
    )


@router.post("/{appointment_id}/cancel", response_model=ActionResult)
async def cancel_appointment(
    appointment_id: int,
    current_user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Cancel one of the current user's appointments"""
    appointment = service.cancel_appointment(appointment_id, current_user)
    return ActionResult(
        success=True,
        message="Appointment canceled.",
        appointment=to_appointment_response(appointment),
    )


@router.patch("/{appointment_id}", response_model=ActionResult)
async def reschedule_appointment(
    appointment_id: int,
    data: RescheduleRequest,
    current_user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Move one of the current user's appointments to a new date and time"""
    appointment = service.reschedule_appointment(appointment_id, data, current_user)
    return ActionResult(
        success=True,
        message="Appointment updated successfully!",
        appointment=to_appointment_response(appointment),
    )
