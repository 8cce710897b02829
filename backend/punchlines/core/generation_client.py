"""
Client for an OpenAI-compatible completions API

The model is expected to be fine-tuned on "setup -> punchline" pairs, so a
request is just the setup plus the training separator, sampled ``n`` times.
"""
import time
from typing import List, Optional

import httpx
from pydantic import BaseModel

from punchlines.core.config import Settings, get_settings
from punchlines.core.logging_config import LoggingConfig
from punchlines.core.metrics import (generation_request_duration_seconds,
                                     generation_requests_total)

logger = LoggingConfig.get_logger(__name__)


class GenerationResponse(BaseModel):
    """Candidates returned by the provider, in provider order"""
    model: str
    results: List[str]


class GenerationError(Exception):
    """Raised when the provider cannot produce candidates"""
    pass


class GenerationClient:
    """
    Client for the text generation provider

    One instance per process is fine; each call opens its own HTTP client.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._settings = settings
        # Injected in tests (httpx.MockTransport)
        self._transport = transport

    @property
    def settings(self) -> Settings:
        """Lazy load settings"""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.settings.generation_api_key:
            headers["Authorization"] = f"Bearer {self.settings.generation_api_key}"
        return headers

    def build_payload(self, prompt: str) -> dict:
        """Completion request body for a joke setup"""
        settings = self.settings
        payload = {
            "model": settings.generation_model,
            "prompt": f"{prompt}{settings.generation_prompt_suffix}",
            "n": settings.generation_num_results,
            "max_tokens": settings.generation_max_tokens,
            "temperature": settings.generation_temperature,
        }
        stop = settings.generation_stop_list
        if stop:
            payload["stop"] = stop
        return payload

    @staticmethod
    def parse_choices(data) -> List[str]:
        """
        Extract completion texts from a provider response

        Raises:
            GenerationError: If the body has no usable ``choices`` list
        """
        if not isinstance(data, dict):
            raise GenerationError("Unexpected response body")
        choices = data.get("choices")
        if not isinstance(choices, list):
            raise GenerationError("Response has no choices")

        # Keep provider order; "index" is authoritative when present
        if all(isinstance(c, dict) and isinstance(c.get("index"), int) for c in choices):
            choices = sorted(choices, key=lambda c: c["index"])

        results = []
        for choice in choices:
            text = choice.get("text") if isinstance(choice, dict) else None
            if isinstance(text, str):
                results.append(text)
        return results

    async def generate(self, prompt: str) -> GenerationResponse:
        """
        Generate candidate punchlines for a setup

        Args:
            prompt: Joke setup

        Returns:
            GenerationResponse with raw candidate texts

        Raises:
            GenerationError: On transport failure, HTTP error status or a
                malformed body. No retries are attempted.
        """
        model = self.settings.generation_model
        start_time = time.time()

        try:
            async with httpx.AsyncClient(
                base_url=self.settings.generation_api_url.rstrip("/"),
                timeout=self.settings.generation_timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    "/completions",
                    json=self.build_payload(prompt),
                    headers=self._headers(),
                )
            if response.status_code >= 400:
                raise GenerationError(
                    f"Provider HTTP {response.status_code}: {response.text[:200]}"
                )
            try:
                data = response.json()
            except ValueError as e:
                raise GenerationError(f"Provider returned non-JSON body: {e}") from e
            results = self.parse_choices(data)
        except httpx.HTTPError as e:
            generation_requests_total.labels(model=model, status="error").inc()
            raise GenerationError(f"Provider request failed: {type(e).__name__}: {e}") from e
        except GenerationError:
            generation_requests_total.labels(model=model, status="error").inc()
            raise
        finally:
            generation_request_duration_seconds.labels(model=model).observe(time.time() - start_time)

        generation_requests_total.labels(model=model, status="success").inc()
        logger.debug(f"Generated {len(results)} candidates with {model}")
        return GenerationResponse(model=model, results=results)


_client: Optional[GenerationClient] = None


def get_generation_client() -> GenerationClient:
    """Dependency returning the process-wide generation client"""
    global _client
    if _client is None:
        _client = GenerationClient()
    return _client
