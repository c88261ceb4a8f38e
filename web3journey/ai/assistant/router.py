"""Assistant API router - streaming chat endpoint."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from web3journey.auth import OptionalUserId
from web3journey.middleware.security import ai_rate_limit

from .schemas import ChatRequest
from .service import chat_with_assistant


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/ai", tags=["ai"])


@router.post("/chat")
@ai_rate_limit
async def chat_endpoint(request: Request, body: ChatRequest, user_id: OptionalUserId) -> StreamingResponse:
    """Stream chat responses from the AI assistant."""
    return StreamingResponse(
        chat_with_assistant(body, user_id=user_id),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        },
    )
