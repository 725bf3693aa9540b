"""Admin router - User and appointment management for admins"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import require_admin
from ...database import get_db
from ...models import User
from ..users.schemas import AdminUserUpdate, UserResponse
from ..users.service import UserService, to_user_response
from .schemas import AdminAppointmentResponse, AdminAppointmentUpdate
from .service import AdminService, to_admin_appointment_response

router = APIRouter(prefix="/admin", tags=["Admin"])


def get_admin_service(db: Session = Depends(get_db)) -> AdminService:
    """Dependency injection for AdminService"""
    return AdminService(db)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


# ============================================================================
# USERS
# ============================================================================


@router.get("/users", response_model=list[UserResponse])
async def list_users(
    _: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    return [to_user_response(u) for u in service.get_users()]


@router.patch("/users/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    data: AdminUserUpdate,
    _: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    """Update name, phone, address or role of any user"""
    return to_user_response(service.admin_update_user(user_id, data))


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: int,
    current_admin: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    """Delete a user without appointment history"""
    return service.admin_delete_user(user_id, current_admin)


# ============================================================================
# APPOINTMENTS
# ============================================================================


@router.get("/appointments", response_model=list[AdminAppointmentResponse])
async def list_appointments(
    status: Optional[str] = Query(None, description="scheduled, completed or canceled"),
    date: Optional[str] = Query(None, description="Date as YYYY-MM-DD"),
    _: User = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
):
    """Get all appointments, most recent first"""
    return [to_admin_appointment_response(a) for a in service.list_appointments(status, date)]


@router.patch("/appointments/{appointment_id}", response_model=AdminAppointmentResponse)
async def update_appointment(
    appointment_id: int,
    data: AdminAppointmentUpdate,
    current_admin: User = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
):
    """Change an appointment's status or move it to another slot"""
    appointment = service.update_appointment(appointment_id, data, current_admin)
    return to_admin_appointment_response(appointment)
