"""Code review API endpoint."""

import logging

from fastapi import APIRouter, Request

from web3journey.ai.errors import AIRuntimeError
from web3journey.auth import OptionalUserId
from web3journey.middleware.error_handlers import ExternalServiceError
from web3journey.middleware.security import ai_rate_limit

from .schemas import CodeReview, ReviewRequest
from .service import review_code


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/ai", tags=["ai"])


@router.post("/review", response_model_by_alias=True)
@ai_rate_limit
async def review_endpoint(request: Request, body: ReviewRequest, user_id: OptionalUserId) -> CodeReview:
    """Review Solidity (or other) code and return a structured verdict."""
    try:
        return await review_code(body, user_id=user_id)
    except AIRuntimeError as e:
        logger.exception("Code review failed (%s)", e.category.value)
        raise ExternalServiceError("AI", "Failed to review code") from e
