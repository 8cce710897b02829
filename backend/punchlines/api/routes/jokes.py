"""
Saved joke API routes
"""
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from punchlines.api.request_utils import parse_body
from punchlines.core.auth import get_current_user
from punchlines.core.database import get_db
from punchlines.core.errors import InvalidInput, Unauthenticated
from punchlines.core.logging_config import LoggingConfig
from punchlines.models.user import User
from punchlines.services.joke_service import JokeService

logger = LoggingConfig.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["jokes"])


class SavePunchlineRequest(BaseModel):
    """Save-punchline request body"""
    model_config = ConfigDict(populate_by_name=True)

    # Left untyped so a wrong-typed index reaches the punchline lookup
    id: Optional[Any] = None
    punchline_index: Optional[Any] = Field(default=None, alias="punchlineIndex")


@router.post("/save-punchline")
async def save_punchline(
    request: Request,
    user: Optional[User] = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Copy one candidate punchline of the caller's generated joke into their list"""
    body = await parse_body(request, SavePunchlineRequest)
    if body is None:
        raise InvalidInput()

    saved = JokeService(db).save_punchline(user, body.id, body.punchline_index)
    return {"status": "success", "data": saved.to_dict()}


@router.get("/saved-jokes")
async def list_saved_jokes(
    user: Optional[User] = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """The caller's saved jokes, newest first"""
    if user is None:
        raise Unauthenticated(status_code=401)

    jokes = JokeService(db).list_saved_jokes(user)
    return {"status": "success", "data": [joke.to_dict() for joke in jokes]}
