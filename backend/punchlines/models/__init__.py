"""
SQLAlchemy models
"""
from punchlines.core.database import Base
from punchlines.models.joke import GeneratedJoke, SavedJoke  # noqa: F401
from punchlines.models.user import Session, User  # noqa: F401

__all__ = ["Base", "User", "Session", "GeneratedJoke", "SavedJoke"]
