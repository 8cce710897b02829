"""
HTTP client for the punchlines API

``PromptSession`` mirrors what the prompt page does: it keeps the latest
suggestion request as a tri-state value (not started, loading, loaded) and
collapses every client-side failure into an error result with reason
"unknown".
"""
from dataclasses import dataclass
from enum import Enum
from typing import Generic, List, Optional, TypeVar

import httpx
from pydantic import BaseModel

from punchlines.core.logging_config import LoggingConfig

logger = LoggingConfig.get_logger(__name__)

T = TypeVar("T")

UNKNOWN_REASON = "unknown"


class AsyncState(str, Enum):
    """Lifecycle of an async value"""
    NOT_STARTED = "not_started"
    LOADING = "loading"
    LOADED = "loaded"


@dataclass(frozen=True)
class AsyncValue(Generic[T]):
    """A value that may not have been requested, be in flight, or be loaded"""
    state: AsyncState
    value: Optional[T] = None

    @classmethod
    def not_started(cls) -> "AsyncValue[T]":
        return cls(AsyncState.NOT_STARTED)

    @classmethod
    def loading(cls) -> "AsyncValue[T]":
        return cls(AsyncState.LOADING)

    @classmethod
    def loaded(cls, value: T) -> "AsyncValue[T]":
        return cls(AsyncState.LOADED, value)

    @property
    def is_not_started(self) -> bool:
        return self.state == AsyncState.NOT_STARTED

    @property
    def is_loading(self) -> bool:
        return self.state == AsyncState.LOADING

    @property
    def is_loaded(self) -> bool:
        return self.state == AsyncState.LOADED


class SuggestResponse(BaseModel):
    """Envelope returned by /api/suggest"""
    status: str
    results: List[str] = []
    id: Optional[str] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @classmethod
    def error(cls, reason: str = UNKNOWN_REASON) -> "SuggestResponse":
        return cls(status="error", reason=reason)


class SaveResponse(BaseModel):
    """Envelope returned by /api/save-punchline"""
    status: str
    data: Optional[dict] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


class PromptSession:
    """
    Client-side state for one prompt box

    Each ``submit`` issues exactly one request; a second submit while the
    first is in flight is not cancelled or de-duplicated.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        session_token: Optional[str] = None,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session_token = session_token
        self.timeout = timeout
        self._transport = transport
        self.results: AsyncValue[SuggestResponse] = AsyncValue.not_started()

    def _client(self) -> httpx.AsyncClient:
        cookies = {"session_token": self.session_token} if self.session_token else None
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            cookies=cookies,
            transport=self._transport,
        )

    async def submit(self, prompt: str) -> AsyncValue[SuggestResponse]:
        """Request punchlines for ``prompt`` and store the loaded result"""
        self.results = AsyncValue.loading()
        try:
            async with self._client() as client:
                response = await client.post("/api/suggest", json={"prompt": prompt})
            # Error envelopes come back with 4xx/5xx; the body still counts
            data = SuggestResponse.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:  # includes pydantic.ValidationError
            logger.warning(f"Suggest request failed: {type(e).__name__}: {e}")
            data = SuggestResponse.error()

        if data.status == "error" and not data.reason:
            data = SuggestResponse.error()

        self.results = AsyncValue.loaded(data)
        return self.results

    async def save(self, joke_id: str, punchline_index: int) -> SaveResponse:
        """Save one candidate of a generated joke"""
        try:
            async with self._client() as client:
                response = await client.post(
                    "/api/save-punchline",
                    json={"id": joke_id, "punchlineIndex": punchline_index},
                )
            return SaveResponse.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Save request failed: {type(e).__name__}: {e}")
            return SaveResponse(status="error", reason=UNKNOWN_REASON)
