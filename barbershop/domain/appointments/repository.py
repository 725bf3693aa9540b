"""Appointment repository - Database operations for appointments"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Appointment, AppointmentStatus, Service


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def find(
        db: Session,
        user_id: Optional[int] = None,
        status: Optional[AppointmentStatus] = None,
        day: Optional[date] = None,
    ) -> list[Appointment]:
        """Find appointments, most recent first"""
        query = db.query(Appointment).options(
            joinedload(Appointment.service), joinedload(Appointment.user)
        )

        if user_id is not None:
            query = query.filter(Appointment.user_id == user_id)
        if status is not None:
            query = query.filter(Appointment.status == status)
        if day is not None:
            query = query.filter(Appointment.date == day)

        return query.order_by(Appointment.date.desc(), Appointment.time.desc()).all()

    @staticmethod
    def get_by_id(db: Session, appointment_id: int) -> Optional[Appointment]:
        """Get an appointment by ID"""
        return (
            db.query(Appointment)
            .options(joinedload(Appointment.service))
            .filter(Appointment.id == appointment_id)
            .first()
        )

    @staticmethod
    def get_booked_times(db: Session, day: date, exclude_id: Optional[int] = None) -> list[str]:
        """Get slot labels held by non-canceled appointments on a date"""
        query = db.query(Appointment.time).filter(
            Appointment.date == day,
            Appointment.status != AppointmentStatus.CANCELED,
        )
        if exclude_id is not None:
            query = query.filter(Appointment.id != exclude_id)

        return [row.time for row in query.all()]

    @staticmethod
    def is_slot_taken(
        db: Session, day: date, time_label: str, exclude_id: Optional[int] = None
    ) -> bool:
        """Check whether a non-canceled appointment holds the slot"""
        query = db.query(Appointment.id).filter(
            Appointment.date == day,
            Appointment.time == time_label,
            Appointment.status != AppointmentStatus.CANCELED,
        )
        if exclude_id is not None:
            query = query.filter(Appointment.id != exclude_id)

        return query.first() is not None

    @staticmethod
    def create(db: Session, commit: bool = True, **fields) -> Appointment:
        """Create a new appointment"""
        appointment = Appointment(**fields)
        db.add(appointment)
        if commit:
            db.commit()
            db.refresh(appointment)
        else:
            db.flush()
        return appointment

    @staticmethod
    def update(db: Session, appointment: Appointment, **updates) -> Appointment:
        """Update an appointment with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(appointment, key):
                setattr(appointment, key, value)

        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def get_service(db: Session, service_id: int) -> Optional[Service]:
        """Get the service being booked"""
        return db.query(Service).filter(Service.id == service_id).first()

