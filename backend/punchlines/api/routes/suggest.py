"""
Punchline generation API route
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from punchlines.api.request_utils import parse_body
from punchlines.core.auth import get_current_user
from punchlines.core.database import get_db
from punchlines.core.errors import GenerationFailure, InvalidInput
from punchlines.core.generation_client import (GenerationClient,
                                               GenerationError,
                                               get_generation_client)
from punchlines.core.logging_config import LoggingConfig
from punchlines.models.user import User
from punchlines.services.joke_service import JokeService

logger = LoggingConfig.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["suggest"])


class SuggestRequest(BaseModel):
    """Suggest request body"""
    prompt: Optional[str] = None


@router.post("/suggest")
async def suggest(
    request: Request,
    user: Optional[User] = Depends(get_current_user),
    db: Session = Depends(get_db),
    client: GenerationClient = Depends(get_generation_client),
):
    """Generate punchline candidates for a setup"""
    body = await parse_body(request, SuggestRequest)
    prompt = (body.prompt or "").strip() if body else ""
    if not prompt:
        raise InvalidInput("Invalid prompt")

    try:
        generation = await client.generate(prompt)
    except GenerationError as e:
        logger.error(f"Generation failed: {e}")
        raise GenerationFailure() from e

    results = [text.strip() for text in generation.results if text.strip()]

    joke_id = None
    if user is not None:
        try:
            joke_id = str(JokeService(db).record_generation(user, prompt, results).id)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to record generated joke: {e}", exc_info=True)

    return {"status": "success", "results": results, "id": joke_id}
