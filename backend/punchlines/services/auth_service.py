"""
Authentication service for user management and sessions
"""
import secrets
from datetime import timedelta
from typing import Optional
from uuid import UUID

import bcrypt
from sqlalchemy.orm import Session

from punchlines.core.config import get_settings
from punchlines.core.logging_config import LoggingConfig
from punchlines.models.user import Session as UserSession
from punchlines.models.user import User
from punchlines.utils.datetime_utils import utc_now

logger = LoggingConfig.get_logger(__name__)


class AuthService:
    """Service for user authentication and session management"""

    def __init__(self, db: Session):
        self.db = db
        self.session_duration_hours = get_settings().session_duration_hours

    def register_user(self, email: str, password: str) -> User:
        """
        Register a new user

        Args:
            email: Email address (stored lower-cased)
            password: Plain text password

        Returns:
            Created User object

        Raises:
            ValueError: If the email is already registered
        """
        email = email.strip().lower()
        if self.db.query(User).filter(User.email == email).first():
            raise ValueError(f"Email '{email}' already exists")

        user = User(
            email=email,
            password_hash=self._hash_password(password),
            is_active=True
        )

        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        logger.info(f"Registered new user: {user.id}")
        return user

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """
        Authenticate a user by email and password

        Returns:
            User object if authentication successful, None otherwise
        """
        email = email.strip().lower()
        user = self.db.query(User).filter(User.email == email).first()

        if not user:
            logger.warning("Authentication failed: unknown email")
            return None

        if not user.is_active:
            logger.warning(f"Authentication failed: user {user.id} is inactive")
            return None

        if not self._verify_password(password, user.password_hash):
            logger.warning(f"Authentication failed: invalid password for user {user.id}")
            return None

        user.last_login = utc_now()
        self.db.commit()

        logger.info(f"User {user.id} authenticated successfully")
        return user

    def create_session(self, user_id: UUID, duration_hours: Optional[int] = None) -> UserSession:
        """
        Create a new session for a user

        Args:
            user_id: User ID
            duration_hours: Session duration in hours (default from settings)

        Returns:
            Created Session object
        """
        duration = duration_hours or self.session_duration_hours
        session = UserSession(
            user_id=user_id,
            token=secrets.token_urlsafe(32),
            expires_at=utc_now() + timedelta(hours=duration)
        )

        self.db.add(session)
        self.db.commit()
        self.db.refresh(session)

        logger.info(f"Created session for user {user_id}")
        return session

    def validate_session(self, token: str) -> Optional[User]:
        """
        Resolve a session token to its user

        Expired sessions are deleted on sight.

        Returns:
            User object if session is valid, None otherwise
        """
        session = self.db.query(UserSession).filter(UserSession.token == token).first()
        if not session:
            return None

        if session.expires_at < utc_now():
            logger.info(f"Session {session.id} expired")
            self.db.delete(session)
            self.db.commit()
            return None

        session.last_activity = utc_now()
        self.db.commit()

        user = self.db.query(User).filter(User.id == session.user_id).first()
        if not user or not user.is_active:
            return None

        return user

    def logout(self, token: str) -> bool:
        """
        Invalidate a session

        Returns:
            True if session was found and deleted, False otherwise
        """
        session = self.db.query(UserSession).filter(UserSession.token == token).first()
        if not session:
            return False

        self.db.delete(session)
        self.db.commit()
        logger.info(f"Session {session.id} invalidated")
        return True

    def cleanup_expired_sessions(self) -> int:
        """Remove all expired sessions, returning how many were deleted"""
        count = self.db.query(UserSession).filter(
            UserSession.expires_at < utc_now()
        ).delete(synchronize_session=False)
        self.db.commit()
        if count:
            logger.info(f"Cleaned up {count} expired sessions")
        return count

    def _hash_password(self, password: str) -> str:
        """Hash a password using bcrypt"""
        return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')

    def _verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash"""
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
