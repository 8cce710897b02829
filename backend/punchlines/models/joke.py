"""
Generated and saved joke models
"""
from uuid import uuid4

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Text, Uuid

from punchlines.core.database import Base
from punchlines.utils.datetime_utils import utc_now


class GeneratedJoke(Base):
    """A setup and the candidate punchlines the model produced for it"""
    __tablename__ = "generated_jokes"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    setup = Column(Text, nullable=False)
    # Ordered list of candidate punchline strings
    results = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    def to_dict(self):
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "setup": self.setup,
            "results": self.results,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<GeneratedJoke(id={self.id}, user_id={self.user_id})>"


class SavedJoke(Base):
    """A punchline the user picked, copied out of its generated joke"""
    __tablename__ = "saved_jokes"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    gen_joke_id = Column(Uuid(as_uuid=True), ForeignKey("generated_jokes.id"), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    setup = Column(Text, nullable=False)
    punchline = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False, index=True)

    def to_dict(self):
        return {
            "id": str(self.id),
            "gen_joke_id": str(self.gen_joke_id),
            "user_id": str(self.user_id),
            "setup": self.setup,
            "punchline": self.punchline,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<SavedJoke(id={self.id}, gen_joke_id={self.gen_joke_id})>"
