"""User service - Accounts, authentication and profiles"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import User
from ...security_utils import hash_password, verify_password
from .repository import UserRepository
from .schemas import AdminUserUpdate, ProfileUpdate, SignupRequest, UserResponse

logger = logging.getLogger(__name__)


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        phone=user.phone,
        role=user.role,
        address=user.address,
        created_at=user.created_at,
    )


def _profile_updates(data: ProfileUpdate) -> dict:
    updates = {}
    if data.name is not None:
        if not data.name.strip():
            raise HTTPException(status_code=400, detail="Name cannot be empty")
        updates["name"] = data.name.strip()
    if data.phone is not None:
        updates["phone"] = data.phone
    if data.address is not None:
        updates["address"] = data.address.model_dump()
    return updates


class UserService:
    """Service layer for user accounts"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def signup(self, data: SignupRequest) -> User:
        """Register a new client account"""
        required = (data.name, data.email, data.phone, data.password, data.confirmPassword)
        if not all(required):
            raise HTTPException(status_code=400, detail="Please fill in all required fields.")
        if data.password != data.confirmPassword:
            raise HTTPException(status_code=400, detail="Passwords do not match.")

        if self.repo.get_user_by_email(self.db, data.email):
            raise HTTPException(
                status_code=409, detail="An account with this email already exists."
            )

        try:
            user = self.repo.create_user(
                self.db,
                name=data.name.strip(),
                email=data.email,
                phone=data.phone,
                password_hash=hash_password(data.password),
                role="client",
            )
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(
                status_code=409, detail="An account with this email already exists."
            ) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to create user: {e}")
            raise HTTPException(status_code=500, detail="An unexpected error occurred.") from e

        logger.info(f"👤 New client account {user.id}")
        return user

    def authenticate(self, email: str, password: str) -> User:
        """Check credentials and return the user"""
        user = self.repo.get_user_by_email(self.db, email)
        if not user or not verify_password(password, user.password_hash):
            logger.warning("❌ Failed login attempt")
            raise HTTPException(status_code=401, detail="Invalid credentials.")
        return user

    def update_profile(self, user: User, data: ProfileUpdate) -> User:
        """Update the current user's own profile"""
        try:
            return self.repo.update_user(self.db, user, **_profile_updates(data))
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to update profile for user {user.id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to update profile") from e

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    def get_users(self) -> list[User]:
        return self.repo.get_users(self.db)

    def get_user(self, user_id: int) -> User:
        user = self.repo.get_user_by_id(self.db, user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return user

    def admin_update_user(self, user_id: int, data: AdminUserUpdate) -> User:
        user = self.get_user(user_id)
        updates = _profile_updates(data)
        if data.role is not None:
            updates["role"] = data.role
        try:
            user = self.repo.update_user(self.db, user, **updates)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to update user {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Operation failed") from e
        logger.info(f"🛠️ User {user_id} updated by admin")
        return user

    def admin_delete_user(self, user_id: int, acting_admin: User) -> dict:
        """Delete an account that has no appointment history"""
        user = self.get_user(user_id)
        if user.id == acting_admin.id:
            raise HTTPException(status_code=400, detail="You cannot delete your own account")
        if self.repo.has_appointments(self.db, user.id):
            raise HTTPException(
                status_code=409,
                detail="User has appointment history and cannot be deleted",
            )
        self.repo.delete_user(self.db, user)
        logger.info(f"🗑️ User {user_id} deleted by admin {acting_admin.id}")
        return {"success": True, "message": "User deleted."}
