"""
Service for generated and saved jokes
"""
from typing import Any, List, Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from punchlines.core.errors import (IndexOutOfRange, InvalidInput,
                                    NotFoundOrForbidden, PersistenceFailure,
                                    PunchlineError, Unauthenticated)
from punchlines.core.logging_config import LoggingConfig
from punchlines.core.metrics import generated_jokes_total, saved_jokes_total
from punchlines.models.joke import GeneratedJoke, SavedJoke
from punchlines.models.user import User

logger = LoggingConfig.get_logger(__name__)


def parse_joke_id(value: Any) -> Optional[UUID]:
    """Joke identifier as a UUID, or None when it cannot name any record"""
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        try:
            return UUID(value.strip())
        except ValueError:
            return None
    return None


def select_punchline(results: Any, index: Any) -> Optional[str]:
    """
    Candidate at ``index``, or None when absent

    ``results`` must be a list and ``index`` a non-negative int inside it;
    anything else, including a non-string element, is absent.
    """
    if not isinstance(results, list):
        return None
    if isinstance(index, bool) or not isinstance(index, int):
        return None
    if index < 0 or index >= len(results):
        return None
    punchline = results[index]
    if not isinstance(punchline, str):
        return None
    return punchline


class JokeService:
    """Joke persistence bound to one request's database session"""

    def __init__(self, db: Session):
        self.db = db

    def record_generation(self, user: User, setup: str, results: Sequence[str]) -> GeneratedJoke:
        """Store a setup and its candidates for a signed-in user"""
        joke = GeneratedJoke(user_id=user.id, setup=setup, results=list(results))
        self.db.add(joke)
        self.db.commit()
        self.db.refresh(joke)
        generated_jokes_total.inc()
        logger.info(f"Recorded generated joke {joke.id} for user {user.id}")
        return joke

    def get_owned_joke(self, joke_id: Any, user: User) -> Optional[GeneratedJoke]:
        """The generated joke with this id if ``user`` owns it"""
        parsed_id = parse_joke_id(joke_id)
        if parsed_id is None:
            return None
        joke = self.db.query(GeneratedJoke).filter(GeneratedJoke.id == parsed_id).first()
        if joke is None or joke.user_id != user.id:
            return None
        return joke

    def save_punchline(
        self,
        user: Optional[User],
        joke_id: Any,
        punchline_index: Any,
    ) -> SavedJoke:
        """
        Save one candidate of a generated joke to the user's list

        Checks run in order and the first failure wins: inputs present,
        caller signed in, joke exists and is owned by the caller, index
        addresses a punchline. Nothing is written unless all pass. Repeating
        a request saves a second copy.

        Raises:
            InvalidInput: ``joke_id`` or ``punchline_index`` is missing
            Unauthenticated: no caller identity
            NotFoundOrForbidden: no such joke, or it belongs to someone else
            IndexOutOfRange: no punchline at ``punchline_index``
            PersistenceFailure: the insert failed
        """
        try:
            if joke_id is None or punchline_index is None:
                raise InvalidInput()
            if user is None:
                raise Unauthenticated()

            joke = self.get_owned_joke(joke_id, user)
            if joke is None:
                raise NotFoundOrForbidden()

            punchline = select_punchline(joke.results, punchline_index)
            if punchline is None:
                raise IndexOutOfRange()

            saved = self._insert_saved_joke(joke, user, punchline)
        except PunchlineError as e:
            saved_jokes_total.labels(outcome=e.reason).inc()
            raise

        saved_jokes_total.labels(outcome="success").inc()
        return saved

    def _insert_saved_joke(self, joke: GeneratedJoke, user: User, punchline: str) -> SavedJoke:
        saved = SavedJoke(
            gen_joke_id=joke.id,
            user_id=user.id,
            setup=joke.setup,
            punchline=punchline,
        )
        try:
            self.db.add(saved)
            self.db.commit()
            self.db.refresh(saved)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                f"Error saving joke: {e}",
                exc_info=True,
                extra={"gen_joke_id": str(joke.id)}
            )
            raise PersistenceFailure() from e

        logger.info(f"Saved punchline from joke {joke.id} as {saved.id}")
        return saved

    def list_saved_jokes(self, user: User) -> List[SavedJoke]:
        """The user's saved jokes, newest first"""
        return (
            self.db.query(SavedJoke)
            .filter(SavedJoke.user_id == user.id)
            .order_by(SavedJoke.created_at.desc())
            .all()
        )
