import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .config import SESSION_COOKIE_NAME
from .database import get_db
from .models import User
from .security_utils import verify_jwt_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _extract_token(
    request: Request, credentials: Optional[HTTPAuthorizationCredentials]
) -> Optional[str]:
    """Bearer header wins over the session cookie"""
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(SESSION_COOKIE_NAME)


def _resolve_user(token: Optional[str], db: Session) -> Optional[User]:
    if not token:
        return None

    payload = verify_jwt_token(token)
    if not payload or "sub" not in payload:
        return None

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        logger.warning("❌ Session token has a malformed subject")
        return None

    return db.query(User).filter(User.id == user_id).first()


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the authenticated user from the session token"""
    token = _extract_token(request, credentials)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    user = _resolve_user(token, db)
    if not user:
        logger.warning(f"❌ Invalid or expired session for {request.url.path}")
        raise HTTPException(status_code=401, detail="Invalid or expired session")

    return user


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Only allow users with the admin role"""
    if not current_user.is_admin:
        logger.warning(f"🚫 User {current_user.id} attempted an admin action")
        raise HTTPException(status_code=403, detail="Admin access required")
    return current_user
