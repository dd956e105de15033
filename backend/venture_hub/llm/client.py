"""OpenAI / Azure OpenAI chat completions client.

This module provides:
- strip_json_fences / parse_json_response: tolerate markdown-fenced JSON output
- _create_completion: one SDK call with bounded tenacity retry on transient errors
- LLMClient: generate_response, generate_structured_response, stream_response
"""

import json
from collections.abc import AsyncIterator
from functools import lru_cache
from typing import Any

import openai
import structlog
from openai import AsyncAzureOpenAI, AsyncOpenAI
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from venture_hub.core.config import Settings, get_settings
from venture_hub.core.exceptions import (
    LLMNotConfiguredError,
    LLMPermanentError,
    LLMTransientError,
)

logger = structlog.get_logger(__name__)

# Timeouts, dropped connections, 429 and 5xx. APITimeoutError subclasses APIConnectionError.
TRANSIENT_ERRORS = (
    openai.APIConnectionError,
    openai.RateLimitError,
    openai.InternalServerError,
)


def strip_json_fences(content: str) -> str:
    """Remove markdown code fences wrapping JSON output."""
    content = content.strip()
    if content.startswith("```"):
        first_newline = content.find("\n")
        if first_newline != -1:
            content = content[first_newline + 1 :]
        if content.endswith("```"):
            content = content[:-3].rstrip()
    return content


def parse_json_response(content: str) -> dict:
    """Parse a JSON object from LLM output, stripping fences first.

    Raises:
        LLMPermanentError: if the output is not a JSON object.
    """
    try:
        parsed = json.loads(strip_json_fences(content))
    except json.JSONDecodeError as exc:
        raise LLMPermanentError(f"Malformed JSON from model: {exc}") from exc
    if not isinstance(parsed, dict):
        raise LLMPermanentError(f"Expected a JSON object from model, got {type(parsed).__name__}")
    return parsed


@retry(
    retry=retry_if_exception_type(TRANSIENT_ERRORS),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=8),
    reraise=True,
    before_sleep=lambda rs: logger.warning(
        "llm_transient_error_retrying",
        attempt=rs.attempt_number,
        error_type=type(rs.outcome.exception()).__name__,
        sleep_seconds=rs.next_action.sleep,
    ),
)
async def _create_completion(client: Any, **kwargs: Any) -> Any:
    """Invoke chat.completions.create() with retry on transient provider errors.

    Only TRANSIENT_ERRORS are retried. Everything else propagates immediately.
    """
    return await client.chat.completions.create(**kwargs)


def build_messages(system: str, user: str, history: list[dict] | None = None) -> list[dict]:
    messages = [{"role": "system", "content": system}]
    for turn in history or []:
        role = turn.get("role")
        content = turn.get("content")
        if role in ("user", "assistant") and content:
            messages.append({"role": role, "content": content})
    messages.append({"role": "user", "content": user})
    return messages


class LLMClient:
    """Chat completions against Azure OpenAI when configured, otherwise OpenAI.

    The SDK's own retries are disabled; retry policy lives in ``_create_completion``.
    """

    def __init__(self, settings: Settings | None = None, client: Any = None, retry_wait: Any = None):
        self.settings = settings or get_settings()
        self._client = client
        self._retry_wait = retry_wait

    @property
    def configured(self) -> bool:
        return self._client is not None or self.settings.llm_configured

    @property
    def provider(self) -> str:
        return "azure" if self.settings.use_azure else "openai"

    @property
    def model(self) -> str:
        if self.settings.use_azure:
            return self.settings.azure_openai_deployment
        return self.settings.ai_model

    def _get_client(self) -> Any:
        if self._client is not None:
            return self._client
        if not self.settings.llm_configured:
            raise LLMNotConfiguredError()

        if self.settings.use_azure:
            self._client = AsyncAzureOpenAI(
                api_key=self.settings.azure_openai_api_key,
                azure_endpoint=self.settings.azure_openai_endpoint,
                azure_deployment=self.settings.azure_openai_deployment,
                api_version=self.settings.azure_openai_api_version,
                timeout=self.settings.llm_timeout_seconds,
                max_retries=0,
            )
        else:
            self._client = AsyncOpenAI(
                api_key=self.settings.openai_api_key,
                timeout=self.settings.llm_timeout_seconds,
                max_retries=0,
            )
        logger.info("llm_client_initialized", provider=self.provider, model=self.model)
        return self._client

    async def _complete(self, **kwargs: Any) -> Any:
        client = self._get_client()
        overrides: dict[str, Any] = {"stop": stop_after_attempt(self.settings.llm_max_attempts)}
        if self._retry_wait is not None:
            overrides["wait"] = self._retry_wait

        try:
            return await _create_completion.retry_with(**overrides)(client, model=self.model, **kwargs)
        except TRANSIENT_ERRORS as exc:
            logger.error(
                "llm_transient_error_exhausted",
                provider=self.provider,
                attempts=self.settings.llm_max_attempts,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise LLMTransientError(
                f"LLM provider unavailable: {exc}", attempts=self.settings.llm_max_attempts
            ) from exc
        except openai.APIError as exc:
            logger.error(
                "llm_permanent_error",
                provider=self.provider,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise LLMPermanentError(f"LLM request rejected: {exc}") from exc

    async def generate_response(
        self,
        system: str,
        user: str,
        history: list[dict] | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        response = await self._complete(
            messages=build_messages(system, user, history),
            temperature=self.settings.llm_temperature if temperature is None else temperature,
            max_tokens=max_tokens or self.settings.llm_max_tokens,
        )
        return response.choices[0].message.content or ""

    async def generate_structured_response(
        self,
        system: str,
        user: str,
        history: list[dict] | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> dict:
        """Ask for a JSON object and parse it. Malformed output raises LLMPermanentError."""
        response = await self._complete(
            messages=build_messages(system, user, history),
            temperature=self.settings.llm_temperature if temperature is None else temperature,
            max_tokens=max_tokens or self.settings.llm_structured_max_tokens,
            response_format={"type": "json_object"},
        )
        return parse_json_response(response.choices[0].message.content or "")

    async def stream_response(
        self,
        system: str,
        user: str,
        history: list[dict] | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> AsyncIterator[str]:
        """Yield each non-empty content delta.

        Only opening the stream is retried; a failure mid-stream surfaces as
        LLMTransientError.
        """
        stream = await self._complete(
            messages=build_messages(system, user, history),
            temperature=self.settings.llm_temperature if temperature is None else temperature,
            max_tokens=max_tokens or self.settings.llm_max_tokens,
            stream=True,
        )
        try:
            async for chunk in stream:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta.content
                if delta:
                    yield delta
        except openai.APIError as exc:
            logger.error("llm_stream_interrupted", provider=self.provider, error=str(exc))
            raise LLMTransientError(f"LLM stream interrupted: {exc}") from exc


@lru_cache
def get_llm_client() -> LLMClient:
    return LLMClient()
