"""
Authentication API routes
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel, EmailStr, Field
from sqlalchemy.orm import Session

from punchlines.core.auth import (SESSION_COOKIE, get_current_user_required,
                                  get_session_token, security)
from punchlines.core.config import get_settings
from punchlines.core.database import get_db
from punchlines.core.logging_config import LoggingConfig
from punchlines.models.user import User
from punchlines.services.auth_service import AuthService

logger = LoggingConfig.get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


class CredentialsRequest(BaseModel):
    """Registration / login request"""
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)


class UserResponse(BaseModel):
    """User response model"""
    id: str
    email: str
    created_at: str
    last_login: Optional[str] = None


class LoginResponse(BaseModel):
    """Login response model"""
    token: str
    user: UserResponse
    expires_at: str


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        email=user.email,
        created_at=user.created_at.isoformat(),
        last_login=user.last_login.isoformat() if user.last_login else None
    )


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(request: CredentialsRequest, db: Session = Depends(get_db)):
    """Register a new user"""
    try:
        user = AuthService(db).register_user(email=request.email, password=request.password)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _user_response(user)


@router.post("/login", response_model=LoginResponse)
async def login(request: CredentialsRequest, response: Response, db: Session = Depends(get_db)):
    """Login and create a session"""
    auth_service = AuthService(db)

    user = auth_service.authenticate(request.email, request.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    session = auth_service.create_session(user.id)

    settings = get_settings()
    response.set_cookie(
        key=SESSION_COOKIE,
        value=session.token,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        max_age=settings.session_duration_hours * 60 * 60
    )

    return LoginResponse(
        token=session.token,
        user=_user_response(user),
        expires_at=session.expires_at.isoformat()
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    request: Request,
    response: Response,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
):
    """Logout and invalidate session"""
    token = get_session_token(request, credentials)
    if token:
        AuthService(db).logout(token)

    response.delete_cookie(key=SESSION_COOKIE)
    return None


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(user: User = Depends(get_current_user_required)):
    """Get current user information"""
    return _user_response(user)
