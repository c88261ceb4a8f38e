"""Code review through the configured LLM."""

import logging
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError

from web3journey.ai.client import LLMClient, parse_json_content
from web3journey.ai.prompts import CODE_REVIEW_PROMPT, REVIEW_CONTEXT_PROMPT, REVIEW_USER_PROMPT

from .schemas import CodeReview, ReviewRequest


logger = logging.getLogger(__name__)


def build_review_messages(request: ReviewRequest) -> list[dict[str, str]]:
    system_prompt = CODE_REVIEW_PROMPT
    if request.context:
        system_prompt += REVIEW_CONTEXT_PROMPT.format(context=request.context)
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": REVIEW_USER_PROMPT.format(language=request.language, code=request.code)},
    ]


def parse_review(text: str) -> CodeReview:
    """Structured review from the model reply, or the raw-text fallback."""
    payload = parse_json_content(text)
    if not isinstance(payload, dict):
        return CodeReview.from_raw_text(text)
    try:
        return CodeReview.model_validate(payload)
    except PydanticValidationError:
        logger.warning("Review JSON did not match the expected shape, returning raw text")
        return CodeReview.from_raw_text(text)


async def review_code(
    request: ReviewRequest, user_id: UUID | None = None, client: LLMClient | None = None
) -> CodeReview:
    """Review code. Provider failures propagate; malformed replies do not."""
    llm_client = client or LLMClient()
    text = await llm_client.get_text(build_review_messages(request), user_id=user_id)
    return parse_review(text)
