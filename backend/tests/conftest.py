"""
Pytest configuration and fixtures
"""
import os
import sys
from pathlib import Path
from typing import List, Optional

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

# Settings are cached on first use, so the test environment goes in first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_FILE_ENABLED"] = "false"
os.environ["LOG_FORMAT"] = "text"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("GENERATION_API_KEY", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from punchlines.core.database import Base, get_db, get_engine, get_session_local
from punchlines.core.generation_client import (GenerationError,
                                               GenerationResponse,
                                               get_generation_client)
from punchlines.models import GeneratedJoke, User
from punchlines.services.auth_service import AuthService


class FakeGenerationClient:
    """Stands in for the provider; records prompts it was asked for"""

    def __init__(self, results: Optional[List[str]] = None, error: Optional[Exception] = None):
        self.results = results if results is not None else ["p0", "p1", "p2"]
        self.error = error
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> GenerationResponse:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return GenerationResponse(model="fake-model", results=list(self.results))


@pytest.fixture(scope="function")
def db() -> Session:
    """Fresh in-memory schema per test"""
    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    session = get_session_local()()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def generation_client() -> FakeGenerationClient:
    return FakeGenerationClient()


@pytest.fixture(scope="function")
def client(db: Session, generation_client: FakeGenerationClient):
    """Create test client with database and provider overrides"""
    from punchlines.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_generation_client] = lambda: generation_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _make_user(db: Session, email: str) -> User:
    return AuthService(db).register_user(email=email, password="correct-horse")


@pytest.fixture(scope="function")
def user(db: Session) -> User:
    return _make_user(db, "alice@example.com")


@pytest.fixture(scope="function")
def other_user(db: Session) -> User:
    return _make_user(db, "bob@example.com")


def auth_headers(db: Session, user: User) -> dict:
    """Bearer header for a fresh session of ``user``"""
    session = AuthService(db).create_session(user.id)
    return {"Authorization": f"Bearer {session.token}"}


@pytest.fixture(scope="function")
def user_headers(db: Session, user: User) -> dict:
    return auth_headers(db, user)


@pytest.fixture(scope="function")
def other_user_headers(db: Session, other_user: User) -> dict:
    return auth_headers(db, other_user)


@pytest.fixture(scope="function")
def generated_joke(db: Session, user: User) -> GeneratedJoke:
    """A joke owned by ``user`` with two candidates"""
    joke = GeneratedJoke(user_id=user.id, setup="S", results=["p0", "p1"])
    db.add(joke)
    db.commit()
    db.refresh(joke)
    return joke


@pytest.fixture(scope="function")
def make_auth_headers(db: Session):
    """Factory for bearer headers of any user"""
    return lambda u: auth_headers(db, u)
