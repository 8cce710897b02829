"""
Error taxonomy for the joke endpoints

Every error is terminal for the request. The ``reason`` is the short string
sent back to the caller inside the error envelope; details stay in the logs.
"""
from typing import Any, Dict


class PunchlineError(Exception):
    """Base error carrying the caller-facing reason and HTTP status"""

    reason: str = "Unknown"
    status_code: int = 500

    def __init__(self, reason: str = None, status_code: int = None):
        if reason is not None:
            self.reason = reason
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.reason)

    def to_dict(self) -> Dict[str, Any]:
        """Error envelope"""
        return {"status": "error", "reason": self.reason}


class InvalidInput(PunchlineError):
    reason = "Invalid inputs"
    status_code = 400


class Unauthenticated(PunchlineError):
    reason = "Must be signed in"


class NotFoundOrForbidden(PunchlineError):
    """Joke missing or owned by someone else; deliberately indistinguishable"""
    reason = "Invalid joke"


class IndexOutOfRange(PunchlineError):
    reason = "No punchline"


class PersistenceFailure(PunchlineError):
    reason = "Error saving joke"


class GenerationFailure(PunchlineError):
    reason = "Error generating punchlines"
