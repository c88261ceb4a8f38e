"""FastAPI authentication dependencies."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request

from web3journey.auth.config import get_user_id
from web3journey.auth.exceptions import MissingTokenError


async def _get_optional_user_id(request: Request) -> UUID | None:
    """Current user id, or None when the request carries no credentials."""
    user_id = await get_user_id(request)
    request.state.user_id = user_id
    return user_id


async def _get_user_id(user_id: Annotated[UUID | None, Depends(_get_optional_user_id)]) -> UUID:
    if user_id is None:
        raise MissingTokenError
    return user_id


# Usage: async def my_route(user_id: OptionalUserId) -> Response:
OptionalUserId = Annotated[UUID | None, Depends(_get_optional_user_id)]
UserId = Annotated[UUID, Depends(_get_user_id)]
