"""
Request identity resolution

The session lookup uses the same database session the route handler gets,
so one request talks to one store client.
"""
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from punchlines.core.database import get_db
from punchlines.core.logging_config import LoggingConfig
from punchlines.models.user import User
from punchlines.services.auth_service import AuthService

logger = LoggingConfig.get_logger(__name__)

SESSION_COOKIE = "session_token"

# HTTP Bearer security scheme
security = HTTPBearer(auto_error=False)


def get_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None
) -> Optional[str]:
    """Token from the Authorization header, falling back to the session cookie"""
    if credentials:
        return credentials.credentials
    return request.cookies.get(SESSION_COOKIE)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """
    Get current user from request (from token or cookie)

    Returns:
        User object if authenticated, None otherwise
    """
    token = get_session_token(request, credentials)
    if not token:
        return None

    try:
        user = AuthService(db).validate_session(token)
    except SQLAlchemyError as e:
        logger.warning(f"Failed to validate session: {e}")
        db.rollback()
        return None

    if user is not None:
        LoggingConfig.set_context(user_id=str(user.id))
    return user


async def get_current_user_required(
    user: Optional[User] = Depends(get_current_user),
) -> User:
    """
    Require authentication: return User or raise 401
    """
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
