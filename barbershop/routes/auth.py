import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ..config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ENVIRONMENT,
    LOGIN_RATE_LIMIT,
    LOGIN_RATE_WINDOW_SECONDS,
    SESSION_COOKIE_NAME,
)
from ..database import get_db
from ..domain.users.schemas import LoginRequest, LoginResponse, SignupRequest, UserResponse
from ..domain.users.service import UserService, to_user_response
from ..rate_limiter import create_rate_limiter
from ..security_utils import create_jwt_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

rate_limit_login = create_rate_limiter(
    limit=LOGIN_RATE_LIMIT, window_seconds=LOGIN_RATE_WINDOW_SECONDS, key_prefix="login"
)


@router.post("/signup", response_model=UserResponse, status_code=201)
async def signup(
    data: SignupRequest,
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit_login),
):
    """Register a new client account"""
    user = UserService(db).signup(data)
    return to_user_response(user)


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit_login),
):
    """
    Log in with email and password.
    The session token is returned and also set as an http-only cookie.
    """
    user = UserService(db).authenticate(data.email, data.password)
    token = create_jwt_token({"sub": str(user.id), "name": user.name, "role": user.role})

    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=ENVIRONMENT == "production",
        samesite="lax",
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        path="/",
    )
    logger.info(f"🔑 User {user.id} logged in")
    return LoginResponse(access_token=token, user=to_user_response(user))


@router.post("/logout")
async def logout(response: Response):
    """Clear the session cookie"""
    response.delete_cookie(key=SESSION_COOKIE_NAME, path="/")
    return {"success": True, "message": "Logged out."}
