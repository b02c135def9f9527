"""Async client for the Grok chat-completions API.

Both operations send ``stream: true`` and read the answer back through
:func:`grok_search.llm.stream.decode_stream`.  The whole request is retried
on failure, so every attempt starts a fresh stream.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from grok_search.config import DEFAULT_MODEL
from grok_search.errors import UpstreamError

from .prompts import (
    FETCH_SYSTEM_PROMPT,
    SEARCH_SYSTEM_PROMPT,
    build_fetch_message,
    build_search_message,
)
from .retry import RetryPolicy, is_retriable_error, retry_with_backoff
from .stream import decode_stream

_logger = logging.getLogger(__name__)

# Retry configuration
_MAX_ATTEMPTS = 3
_INITIAL_DELAY = 1.0  # seconds -- exponential: 1, 2, 4 ... capped at 10
_MAX_DELAY = 10.0
_BACKOFF_MULTIPLIER = 2.0


def _log_retry(attempt: int, error: Exception) -> None:
    _logger.info(
        "Retry attempt %d: %s%s",
        attempt, error, "" if is_retriable_error(error) else " (not transient)",
    )


DEFAULT_RETRY_POLICY = RetryPolicy(
    max_attempts=_MAX_ATTEMPTS,
    initial_delay=_INITIAL_DELAY,
    max_delay=_MAX_DELAY,
    backoff_multiplier=_BACKOFF_MULTIPLIER,
    on_retry=_log_retry,
)


class GrokSearchProvider:
    """Search and fetch through an OpenAI-compatible streaming endpoint.

    Parameters
    ----------
    api_url:
        Base URL, e.g. ``https://api.x.ai/v1``.
    api_key:
        Bearer token.
    model:
        Model used for subsequent calls; see :meth:`switch_model`.
    client:
        Optional pre-built ``httpx.AsyncClient``.  The provider only closes
        clients it created itself.
    retry_policy:
        Policy applied to every request.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        model: str = DEFAULT_MODEL,
        client: httpx.AsyncClient | None = None,
        timeout: float = 120,
        retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self._api_key = api_key
        self._model = model
        self.retry_policy = retry_policy
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=30, read=60),
        )

    async def __aenter__(self) -> GrokSearchProvider:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    # ------------------------------------------------------------------
    # Model selection
    # ------------------------------------------------------------------

    @property
    def model(self) -> str:
        return self._model

    def switch_model(self, model: str) -> None:
        """Use *model* for calls started after this point."""
        self._model = model

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def build_search_payload(
        self,
        query: str,
        platform: str = "",
        min_results: int = 3,
        max_results: int | None = 10,
    ) -> dict[str, Any]:
        return self._payload(
            SEARCH_SYSTEM_PROMPT,
            build_search_message(query, platform, min_results, max_results),
        )

    def build_fetch_payload(self, url: str) -> dict[str, Any]:
        return self._payload(FETCH_SYSTEM_PROMPT, build_fetch_message(url))

    async def search(
        self,
        query: str,
        platform: str = "",
        min_results: int = 3,
        max_results: int | None = 10,
    ) -> str:
        """Run a web search and return the model's answer text."""
        payload = self.build_search_payload(query, platform, min_results, max_results)
        _logger.debug("search prompt: %s", payload["messages"][1]["content"])
        return await retry_with_backoff(
            lambda: self._execute_stream(payload), self.retry_policy,
        )

    async def fetch(self, url: str) -> str:
        """Fetch *url* and return its content as Markdown."""
        payload = self.build_fetch_payload(url)
        _logger.debug("fetch prompt: %s", payload["messages"][1]["content"])
        return await retry_with_backoff(
            lambda: self._execute_stream(payload), self.retry_policy,
        )

    async def probe_models(self) -> dict[str, Any]:
        """Check connectivity with ``GET /models``.  Never raises on I/O errors."""
        start = time.monotonic()
        try:
            resp = await self._client.get(
                f"{self.api_url}/models",
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
        except httpx.HTTPError as e:
            return {"success": False, "error": str(e) or type(e).__name__}
        latency = round((time.monotonic() - start) * 1000)

        if not resp.is_success:
            return {"success": False, "error": f"HTTP {resp.status_code}"}
        try:
            data = resp.json()
        except ValueError:
            return {"success": False, "error": "invalid JSON response"}
        models = data.get("data") if isinstance(data, dict) else None
        return {
            "success": True,
            "response_time": latency,
            "model_count": len(models) if isinstance(models, list) else 0,
        }

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _payload(self, system_prompt: str, user_content: str) -> dict[str, Any]:
        return {
            "model": self._model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content},
            ],
            "stream": True,
        }

    async def _execute_stream(self, payload: dict[str, Any]) -> str:
        """Send one streaming request and decode it into text."""
        async with self._client.stream(
            "POST",
            f"{self.api_url}/chat/completions",
            headers=self._headers,
            json=payload,
        ) as resp:
            if not resp.is_success:
                body = (await resp.aread()).decode("utf-8", errors="replace")
                raise UpstreamError(resp.status_code, body)
            return await decode_stream(resp.aiter_bytes())

    async def close(self) -> None:
        """Close the underlying HTTP client if this provider created it."""
        if self._owns_client:
            await self._client.aclose()
