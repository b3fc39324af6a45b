"""Primary text provider: Gemini ``generateContent`` over HTTP."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from ..config.constants import Timeouts
from .errors import (
    MalformedResponseError,
    PaymentRequiredError,
    ProviderNotConfiguredError,
    ProviderResponseError,
    QuotaExhaustedError,
)
from .params import GenerationParams

logger = structlog.get_logger()

PROVIDER = "gemini"


def _extract_text(data: Any) -> str | None:
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) and text.strip() else None


class GeminiProvider:
    """HTTP client for the Gemini REST API. The key is supplied per call."""

    name = PROVIDER

    def __init__(
        self,
        model: str = "gemini-2.0-flash-exp",
        base_url: str = "https://generativelanguage.googleapis.com",
    ) -> None:
        self.model = model
        self.base_url = base_url.rstrip("/")
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(Timeouts.PROVIDER_REQUEST, connect=Timeouts.PROVIDER_CONNECT),
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def complete(self, prompt: str, params: GenerationParams, api_key: str) -> str:
        """Run one completion and return the raw model text.

        Raises:
            QuotaExhaustedError: on HTTP 429
            PaymentRequiredError: on HTTP 402
            ProviderResponseError: on other non-2xx or transport errors
            MalformedResponseError: when the text field is missing
        """
        if not api_key:
            raise ProviderNotConfiguredError("Gemini API key is not configured", provider=PROVIDER)

        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": params.temperature,
                "topK": params.top_k,
                "topP": params.top_p,
                "maxOutputTokens": params.max_output_tokens,
            },
        }

        client = await self._get_client()
        try:
            resp = await client.post(
                f"/v1beta/models/{self.model}:generateContent",
                params={"key": api_key},
                json=body,
            )
        except httpx.HTTPError as e:
            raise ProviderResponseError(f"Gemini request failed: {e}", provider=PROVIDER) from e

        if resp.status_code == httpx.codes.TOO_MANY_REQUESTS:
            raise QuotaExhaustedError("Gemini quota exhausted", provider=PROVIDER, status_code=429)
        if resp.status_code == httpx.codes.PAYMENT_REQUIRED:
            raise PaymentRequiredError("Gemini payment required", provider=PROVIDER, status_code=402)
        if resp.is_error:
            logger.warning(
                "gemini_http_error",
                status_code=resp.status_code,
                body=resp.text[:500],
            )
            raise ProviderResponseError(
                f"Gemini returned HTTP {resp.status_code}",
                provider=PROVIDER,
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedResponseError("Gemini returned non-JSON body", provider=PROVIDER) from e

        text = _extract_text(data)
        if text is None:
            logger.warning("gemini_missing_content", body=str(data)[:500])
            raise MalformedResponseError("Gemini response has no candidate text", provider=PROVIDER)
        return text
