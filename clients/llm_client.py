"""Provider-agnostic LLM client supporting OpenAI-compatible and Anthropic APIs.

Detects the provider from LLM_API_BASE and formats requests accordingly.
The default base points at Groq's OpenAI-compatible endpoint.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from config import Settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful assistant that creates concise, insightful summaries of "
    "GitHub activity. Focus on patterns, trends, and key highlights. Use emojis "
    "to make summaries engaging."
)

FALLBACK_SUMMARY = "Unable to generate summary at this time."


class LLMClientError(Exception):
    """Raised when the LLM API call fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SummaryBackend(Protocol):
    async def generate(self, prompt: str) -> str: ...


def _is_anthropic(api_base: str) -> bool:
    return "anthropic.com" in api_base


class LLMClient:
    """Calls either the Anthropic Messages API or an OpenAI-compatible endpoint."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_base = settings.llm_api_base.rstrip("/")
        self._api_key = settings.llm_api_key
        self._model = settings.llm_model
        self._timeout = settings.llm_timeout
        self._max_tokens = settings.llm_max_tokens
        self._temperature = settings.llm_temperature
        self._is_anthropic = _is_anthropic(self._api_base)
        self._transport = transport

    async def generate(self, prompt: str) -> str:
        """Send *prompt* to the LLM and return the completion text."""
        if not self._api_key or not self._api_key.strip():
            raise LLMClientError("LLM API key is not configured")
        if self._is_anthropic:
            return await self._call_anthropic(prompt)
        return await self._call_openai(prompt)

    async def _call_openai(self, prompt: str) -> str:
        payload = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
        }
        headers = {"Authorization": f"Bearer {self._api_key.strip()}"}

        data = await self._post(f"{self._api_base}/chat/completions", payload, headers)
        choices = data.get("choices") or []
        if not choices:
            logger.warning("LLM API returned no choices in response")
            return FALLBACK_SUMMARY
        return choices[0]["message"]["content"].strip()

    async def _call_anthropic(self, prompt: str) -> str:
        payload = {
            "model": self._model,
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
            "system": SYSTEM_PROMPT,
            "messages": [
                {"role": "user", "content": prompt},
            ],
        }
        headers = {
            "x-api-key": self._api_key.strip(),
            "anthropic-version": "2023-06-01",
            "content-type": "application/json",
        }

        data = await self._post(f"{self._api_base}/v1/messages", payload, headers)
        content = data.get("content") or []
        if not content:
            logger.warning("Anthropic API returned no content in response")
            return FALLBACK_SUMMARY
        return content[0]["text"].strip()

    async def _post(
        self, url: str, payload: dict[str, Any], headers: dict[str, str]
    ) -> dict[str, Any]:
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            resp = await client.post(url, json=payload, headers=headers)

        if resp.status_code != 200:
            raise LLMClientError(
                f"LLM API returned {resp.status_code}: {resp.text[:500]}",
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as exc:
            logger.error("LLM returned invalid JSON: %s", resp.text[:200])
            raise LLMClientError(f"LLM returned invalid JSON: {exc}") from exc
