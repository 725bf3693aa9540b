"""User domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_email, validate_phone


class Address(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None


class SignupRequest(BaseModel):
    """Schema for registering a new client account

    Presence and password confirmation are checked by the service so the
    client gets a single readable message.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    confirmPassword: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v):
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone_format(cls, v):
        return validate_phone(v)


class LoginRequest(BaseModel):
    email: str
    password: str


class ProfileUpdate(BaseModel):
    """Schema for a user editing their own profile"""

    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[Address] = None

    @field_validator("phone")
    @classmethod
    def validate_phone_format(cls, v):
        return validate_phone(v)


class AdminUserUpdate(ProfileUpdate):
    """Schema for an admin editing any user"""

    role: Optional[str] = None

    @field_validator("role")
    @classmethod
    def validate_role(cls, v):
        if v is not None and v not in ("client", "admin"):
            raise ValueError("Role must be 'client' or 'admin'")
        return v


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    role: str
    address: Optional[Address] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
