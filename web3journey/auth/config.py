"""Core user resolution.

Single-user mode always resolves to DEFAULT_USER_ID. Multi-user mode validates
a Supabase access token; a request without any token resolves to "no user" so
anonymous visitors can still read the catalog and get empty progress.
"""

import logging
from uuid import UUID

from fastapi import Request
from fastapi.concurrency import run_in_threadpool
from supabase import create_client

from web3journey.auth.exceptions import (
    InvalidTokenError,
    SupabaseConfigError,
    UnknownAuthProviderError,
)
from web3journey.config.settings import get_settings


logger = logging.getLogger(__name__)
settings = get_settings()

DEFAULT_USER_ID = UUID("00000000-0000-0000-0000-000000000001")

supabase = (
    create_client(settings.SUPABASE_URL, settings.SUPABASE_PUBLISHABLE_KEY)
    if settings.AUTH_PROVIDER == "supabase" and settings.SUPABASE_URL
    else None
)


def extract_token_from_request(request: Request) -> str | None:
    """Extract JWT token from request headers or cookies."""
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header.removeprefix("Bearer ")

    cookie_token = request.cookies.get("access_token")
    if cookie_token:
        return cookie_token.removeprefix("Bearer ")

    return None


async def validate_supabase_token(token: str) -> UUID:
    """Validate a Supabase token and return the user ID."""
    if not supabase:
        logger.error("Supabase client not initialized")
        raise SupabaseConfigError

    try:
        # supabase-py is sync; keep it off the event loop
        response = await run_in_threadpool(supabase.auth.get_user, token)
    except Exception as e:
        error_msg = str(e).lower()
        if "expired" in error_msg or "invalid claims" in error_msg:
            logger.debug("Token expired or has invalid claims")
        else:
            logger.exception("Unexpected token validation error")
        raise InvalidTokenError from e

    if response and response.user and response.user.id:
        return UUID(response.user.id)

    logger.warning("Token validation returned no user")
    raise InvalidTokenError


async def get_user_id(request: Request) -> UUID | None:
    """Resolve the current user, or None for an anonymous request."""
    if settings.AUTH_PROVIDER == "none":
        if settings.ENVIRONMENT == "production":
            logger.error("AUTH_PROVIDER='none' is not allowed in production!")
            msg = "Single-user mode (AUTH_PROVIDER='none') is not allowed in production."
            raise ValueError(msg)
        return DEFAULT_USER_ID

    if settings.AUTH_PROVIDER == "supabase":
        token = extract_token_from_request(request)
        if not token:
            return None
        return await validate_supabase_token(token)

    logger.error("Unknown auth provider: %s", settings.AUTH_PROVIDER)
    raise UnknownAuthProviderError(settings.AUTH_PROVIDER)
