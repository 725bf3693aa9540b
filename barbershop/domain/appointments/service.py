"""Appointment service - Booking workflow for appointments"""

import logging
from datetime import date, datetime
from typing import Callable, Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...config import BOOKING_HORIZON_DAYS
from ...models import Appointment, AppointmentStatus, User
from .availability import (
    available_slots,
    booking_horizon,
    calculate_end_time,
    is_bookable_label,
    is_slot_past,
    parse_slot_date,
    parse_slot_time,
)
from .repository import AppointmentRepository
from .schemas import AppointmentResponse, BookingCreate, RescheduleRequest

logger = logging.getLogger(__name__)

INCOMPLETE_INPUT = "Incomplete input: service, date and time are required"
PAST_SLOT = "Past-slot booking rejected"
SLOT_TAKEN = "Slot already taken"
OPERATION_FAILED = "Operation failed"

# Allowed status changes; canceled and completed are terminal
STATUS_TRANSITIONS = {
    AppointmentStatus.SCHEDULED: {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELED},
    AppointmentStatus.COMPLETED: set(),
    AppointmentStatus.CANCELED: set(),
}


def to_appointment_response(appointment: Appointment) -> AppointmentResponse:
    """Build the API view of an appointment, resolving service name and end time"""
    service = appointment.service
    end_time = None
    if service is not None and service.duration is not None:
        end_time = calculate_end_time(appointment.time, service.duration)

    return AppointmentResponse(
        id=appointment.id,
        userId=appointment.user_id,
        serviceId=appointment.service_id,
        serviceName=service.name if service is not None else None,
        date=appointment.date,
        time=appointment.time,
        endTime=end_time,
        status=AppointmentStatus(appointment.status).value,
        created_at=appointment.created_at,
    )


class AppointmentService:
    """Service layer for the booking workflow

    The acting user is always passed in explicitly by the caller.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = datetime.now):
        self.db = db
        self.repo = AppointmentRepository()
        self.clock = clock

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    def get_available_slots(self, day: str) -> tuple[date, list[str]]:
        """Get the free slots for a date"""
        parsed_day = self.parse_day(day)
        try:
            booked = self.repo.get_booked_times(self.db, parsed_day)
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to load booked times for {parsed_day}: {e}")
            raise HTTPException(status_code=500, detail=OPERATION_FAILED) from e

        return parsed_day, available_slots(parsed_day, booked, self.clock())

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def parse_day(self, value: str) -> date:
        try:
            return parse_slot_date(value)
        except (TypeError, ValueError):
            raise HTTPException(
                status_code=400, detail="Invalid date format. Expected YYYY-MM-DD"
            ) from None

    def _parse_slot(self, day_value: str, time_value: str) -> tuple[date, str]:
        day = self.parse_day(day_value)
        try:
            label = parse_slot_time(time_value).strftime("%H:%M")
        except (TypeError, ValueError):
            raise HTTPException(
                status_code=400, detail="Invalid time format. Expected HH:MM"
            ) from None

        if not is_bookable_label(label):
            raise HTTPException(status_code=400, detail=f"{label} is not a bookable time slot")
        return day, label

    def validate_slot(
        self,
        day_value: Optional[str],
        time_value: Optional[str],
        exclude_id: Optional[int] = None,
    ) -> tuple[date, str]:
        """
        Validate a requested slot and return it parsed.

        Checks, in order: format, past slot, booking horizon, collision with a
        non-canceled appointment (other than exclude_id).
        """
        day, label = self._parse_slot(day_value, time_value)
        now = self.clock()

        if is_slot_past(day, label, now):
            logger.warning(f"⚠️ Rejected past-slot booking for {day} {label}")
            raise HTTPException(status_code=400, detail=PAST_SLOT)

        last_day = booking_horizon(now.date(), BOOKING_HORIZON_DAYS)
        if day > last_day:
            raise HTTPException(
                status_code=400,
                detail=f"Bookings are only accepted up to {last_day.isoformat()}",
            )

        if self.repo.is_slot_taken(self.db, day, label, exclude_id=exclude_id):
            logger.warning(f"⚠️ Slot {day} {label} already taken")
            raise HTTPException(status_code=409, detail=SLOT_TAKEN)

        return day, label

    def get_owned_appointment(self, appointment_id: int, user: User) -> Appointment:
        appointment = self.repo.get_by_id(self.db, appointment_id)
        if not appointment or (appointment.user_id != user.id and not user.is_admin):
            raise HTTPException(status_code=404, detail="Appointment not found")
        return appointment

    # ------------------------------------------------------------------
    # Workflow
    # ------------------------------------------------------------------

    def book_appointment(self, data: BookingCreate, user: Optional[User]) -> Appointment:
        """Create a scheduled appointment for the user"""
        if user is None or not data.serviceId or not data.date or not data.time:
            raise HTTPException(status_code=400, detail=INCOMPLETE_INPUT)

        try:
            day, label = self._parse_slot(data.date, data.time)

            service = self.repo.get_service(self.db, data.serviceId)
            if not service:
                raise HTTPException(status_code=404, detail="Service not found")

            self.validate_slot(data.date, data.time)

            appointment = self.repo.create(
                self.db,
                user_id=user.id,
                service_id=service.id,
                date=day,
                time=label,
                status=AppointmentStatus.SCHEDULED,
            )
            logger.info(
                f"📅 Appointment {appointment.id} booked: user={user.id} service={service.id} {day} {label}"
            )
            return appointment
        except HTTPException:
            raise
        except IntegrityError as e:
            # Another request took the slot between our check and the insert
            self.db.rollback()
            logger.warning(f"⚠️ Concurrent booking rejected for {data.date} {data.time}")
            raise HTTPException(status_code=409, detail=SLOT_TAKEN) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to book appointment: {e}")
            raise HTTPException(status_code=500, detail=OPERATION_FAILED) from e

    def cancel_appointment(self, appointment_id: int, user: User) -> Appointment:
        """Cancel a scheduled appointment; canceling twice is a no-op"""
        try:
            appointment = self.get_owned_appointment(appointment_id, user)
            return self.change_status(appointment, AppointmentStatus.CANCELED)
        except HTTPException:
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to cancel appointment {appointment_id}: {e}")
            raise HTTPException(status_code=500, detail=OPERATION_FAILED) from e

    def check_transition(self, appointment: Appointment, target: AppointmentStatus) -> bool:
        """
        Check a status change against the transition table.

        Returns False when the appointment already has the target status.
        """
        current = AppointmentStatus(appointment.status)
        if current == target:
            return False

        if target not in STATUS_TRANSITIONS[current]:
            raise HTTPException(
                status_code=400,
                detail=f"Cannot change a {current.value} appointment to {target.value}",
            )
        return True

    def change_status(self, appointment: Appointment, target: AppointmentStatus) -> Appointment:
        """Apply a status transition"""
        current = AppointmentStatus(appointment.status)
        if not self.check_transition(appointment, target):
            logger.info(f"Appointment {appointment.id} already {current.value}, nothing to do")
            return appointment

        appointment = self.repo.update(self.db, appointment, status=target)
        logger.info(f"🔄 Appointment {appointment.id}: {current.value} -> {target.value}")
        return appointment

    def reschedule_appointment(
        self,
        appointment_id: int,
        data: RescheduleRequest,
        user: User,
        status: Optional[AppointmentStatus] = None,
    ) -> Appointment:
        """
        Move a scheduled, still-future appointment to another free, future slot.

        An optional status change is checked up front and written in the same
        commit as the move.
        """
        try:
            appointment = self.get_owned_appointment(appointment_id, user)

            if AppointmentStatus(appointment.status) != AppointmentStatus.SCHEDULED:
                raise HTTPException(
                    status_code=400, detail="Only scheduled appointments can be rescheduled"
                )
            if is_slot_past(appointment.date, appointment.time, self.clock()):
                raise HTTPException(
                    status_code=400, detail="Past appointments cannot be rescheduled"
                )
            if status is not None:
                self.check_transition(appointment, status)
            if not data.date or not data.time:
                raise HTTPException(
                    status_code=400, detail="Incomplete input: date and time are required"
                )

            day, label = self.validate_slot(data.date, data.time, exclude_id=appointment.id)

            appointment = self.repo.update(
                self.db, appointment, date=day, time=label, status=status
            )
            logger.info(f"🔁 Appointment {appointment.id} rescheduled to {day} {label}")
            return appointment
        except HTTPException:
            raise
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Concurrent reschedule rejected for {data.date} {data.time}")
            raise HTTPException(status_code=409, detail=SLOT_TAKEN) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to reschedule appointment {appointment_id}: {e}")
            raise HTTPException(status_code=500, detail=OPERATION_FAILED) from e

    def list_user_appointments(self, user: User) -> list[Appointment]:
        """All appointments of a user including history, most recent first"""
        try:
            return self.repo.find(self.db, user_id=user.id)
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to list appointments for user {user.id}: {e}")
            raise HTTPException(status_code=500, detail=OPERATION_FAILED) from e
