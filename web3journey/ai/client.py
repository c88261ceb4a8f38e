"""Thin LiteLLM wrapper used by the chat and code-review features."""

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from typing import Any
from uuid import UUID

import litellm

from web3journey.config.settings import get_settings

from .errors import AIProviderError, AIRateLimitOrQuotaError, AIRuntimeError, AITimeoutError


logger = logging.getLogger(__name__)


def _map_error(error: Exception) -> AIRuntimeError:
    if isinstance(error, AIRuntimeError):
        return error
    if isinstance(error, (asyncio.TimeoutError, litellm.Timeout)):
        return AITimeoutError(f"Model completion timed out: {error}")
    if isinstance(error, litellm.RateLimitError):
        return AIRateLimitOrQuotaError(f"Model provider rate limited the request: {error}")
    return AIProviderError(f"Model completion failed: {error}")


class LLMClient:
    """Completion requests against the configured model."""

    def __init__(self, model: str | None = None) -> None:
        self._model = model

    async def complete(
        self,
        messages: list[dict[str, Any]],
        temperature: float | None = None,
        max_tokens: int | None = None,
        user_id: str | UUID | None = None,
        stream: bool = False,
        model: str | None = None,
    ) -> Any:
        """Low-level completion method using LiteLLM directly."""
        settings = get_settings()
        kwargs: dict[str, Any] = {
            "model": model or self._model or settings.primary_llm_model,
            "messages": messages,
            "temperature": temperature if temperature is not None else settings.AI_TEMPERATURE_DEFAULT,
            "timeout": settings.AI_REQUEST_TIMEOUT,
        }
        # Only add max_tokens if explicitly provided - let model decide otherwise
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        if user_id:
            kwargs["user"] = str(user_id)
        if stream:
            kwargs["stream"] = True

        try:
            return await asyncio.wait_for(litellm.acompletion(**kwargs), timeout=settings.AI_REQUEST_TIMEOUT)
        except Exception as e:
            logger.exception("Error in model completion")
            raise _map_error(e) from e

    async def get_text(self, messages: list[dict[str, Any]], **kwargs: Any) -> str:
        """Completion text of a non-streaming request."""
        response = await self.complete(messages, **kwargs)
        try:
            return response.choices[0].message.content or ""
        except (AttributeError, IndexError) as e:
            msg = "Model returned no choices"
            raise AIProviderError(msg) from e

    async def stream_text(self, messages: list[dict[str, Any]], **kwargs: Any) -> AsyncIterator[str]:
        """Yield content deltas of a streaming request."""
        response = await self.complete(messages, stream=True, **kwargs)
        async for chunk in response:
            if chunk and hasattr(chunk, "choices") and chunk.choices:
                delta = chunk.choices[0].delta
                if hasattr(delta, "content") and delta.content:
                    yield delta.content


def extract_json_block(content: str) -> str | None:
    """Body of the first ```json fenced block, if any."""
    marker = "```json"
    lowered = content.lower()
    marker_index = lowered.find(marker)
    if marker_index == -1:
        return None
    block_start = marker_index + len(marker)
    block_end = content.find("```", block_start)
    if block_end == -1:
        return None
    block = content[block_start:block_end].strip()
    return block or None


def parse_json_content(content: str) -> dict[str, Any] | list[Any] | None:
    """Parse JSON from a model reply, or None when it is not JSON."""
    candidate = extract_json_block(content) or content.strip()
    if not candidate.startswith(("{", "[")):
        return None
    try:
        return json.loads(candidate)
    except json.JSONDecodeError:
        logger.warning("Failed to parse JSON content from model reply")
        return None
