"""Authentication module exports."""

from web3journey.auth.config import DEFAULT_USER_ID
from web3journey.auth.dependencies import OptionalUserId, UserId


__all__ = [
    "DEFAULT_USER_ID",
    "OptionalUserId",
    "UserId",
]
