"""Admin service - Appointment oversight for the shop owner"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Appointment, AppointmentStatus, User
from ..appointments.repository import AppointmentRepository
from ..appointments.schemas import RescheduleRequest
from ..appointments.service import OPERATION_FAILED, AppointmentService, to_appointment_response
from .schemas import AdminAppointmentResponse, AdminAppointmentUpdate

logger = logging.getLogger(__name__)


def to_admin_appointment_response(appointment: Appointment) -> AdminAppointmentResponse:
    base = to_appointment_response(appointment)
    user = appointment.user
    return AdminAppointmentResponse(
        **base.model_dump(),
        userName=user.name if user is not None else None,
        userEmail=user.email if user is not None else None,
    )


def _parse_status(value: str) -> AppointmentStatus:
    try:
        return AppointmentStatus.parse(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown status '{value}'") from None


class AdminService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()
        self.appointments = AppointmentService(db)

    def list_appointments(
        self, status: Optional[str] = None, day: Optional[str] = None
    ) -> list[Appointment]:
        """All appointments, optionally filtered by status and date"""
        status_filter = _parse_status(status) if status else None
        day_filter = self.appointments.parse_day(day) if day else None
        try:
            return self.repo.find(self.db, status=status_filter, day=day_filter)
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to list appointments: {e}")
            raise HTTPException(status_code=500, detail=OPERATION_FAILED) from e

    def update_appointment(
        self, appointment_id: int, data: AdminAppointmentUpdate, admin: User
    ) -> Appointment:
        """
        Move an appointment and/or change its status.

        A move goes through the same checks as a client reschedule; a status
        change must be allowed by the transition table. When both are given
        they are written together in one commit.
        """
        if not data.status and not data.date and not data.time:
            raise HTTPException(status_code=400, detail="Nothing to update")

        target = _parse_status(data.status) if data.status else None

        if data.date or data.time:
            appointment = self.appointments.reschedule_appointment(
                appointment_id,
                RescheduleRequest(date=data.date, time=data.time),
                admin,
                status=target,
            )
        else:
            appointment = self.appointments.get_owned_appointment(appointment_id, admin)
            try:
                appointment = self.appointments.change_status(appointment, target)
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"❌ Failed to update appointment {appointment_id}: {e}")
                raise HTTPException(status_code=500, detail=OPERATION_FAILED) from e

        logger.info(f"🛠️ Appointment {appointment_id} updated by admin {admin.id}")
        return appointment
