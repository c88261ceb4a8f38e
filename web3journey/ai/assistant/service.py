"""Streaming chat with the Web3 learning assistant."""

import json
import logging
from collections.abc import AsyncGenerator
from uuid import UUID

from web3journey.ai.client import LLMClient
from web3journey.ai.errors import AIRuntimeError, AIRuntimeErrorCategory
from web3journey.ai.prompts import MODULE_CONTEXT_PROMPT, TOPIC_CONTEXT_PROMPT, WEB3_SYSTEM_PROMPT
from web3journey.config.settings import get_settings

from .schemas import ChatContext, ChatRequest


logger = logging.getLogger(__name__)

GENERIC_ERROR = AIRuntimeError.user_message


def build_system_prompt(context: ChatContext | None) -> str:
    prompt = WEB3_SYSTEM_PROMPT
    if context is None:
        return prompt
    if context.module_id:
        prompt += MODULE_CONTEXT_PROMPT.format(module_id=context.module_id)
    if context.topic_id:
        prompt += TOPIC_CONTEXT_PROMPT.format(topic_id=context.topic_id)
    return prompt


def build_messages(request: ChatRequest) -> list[dict[str, str]]:
    messages = [{"role": "system", "content": build_system_prompt(request.context)}]
    messages.extend({"role": m.role, "content": m.content} for m in request.messages)
    return messages


async def chat_with_assistant(
    request: ChatRequest,
    user_id: UUID | None = None,
    client: LLMClient | None = None,
) -> AsyncGenerator[str, None]:
    """
    Stream chat responses with optional module/topic context.

    Yields SSE-formatted JSON chunks with structure:
    - data: {"content": "text", "done": false}
    - data: {"content": "", "done": true}
    - data: {"error": "message", "done": true}
    """
    settings = get_settings()
    llm_client = client or LLMClient()
    try:
        async for delta in llm_client.stream_text(
            build_messages(request),
            temperature=settings.AI_TEMPERATURE_DEFAULT,
            max_tokens=settings.AI_CHAT_MAX_TOKENS,
            user_id=user_id,
            model=request.model,
        ):
            yield f"data: {json.dumps({'content': delta, 'done': False})}\n\n"

        yield f"data: {json.dumps({'content': '', 'done': True})}\n\n"

    except AIRuntimeError as e:
        if e.category == AIRuntimeErrorCategory.PROVIDER_FAILURE:
            logger.exception("Chat failed for user %s", user_id)
        else:
            logger.warning("Chat %s for user %s", e.category.value, user_id)
        yield f"data: {json.dumps({'error': e.user_message, 'done': True})}\n\n"
    except Exception:
        logger.exception("Chat failed for user %s", user_id)
        yield f"data: {json.dumps({'error': GENERIC_ERROR, 'done': True})}\n\n"
