"""Failures of the tutor and code reviewer's model calls."""

from __future__ import annotations

from enum import Enum


class AIRuntimeErrorCategory(str, Enum):
    RATE_LIMIT_OR_QUOTA = "rate_limit_or_quota"
    TIMEOUT = "timeout"
    PROVIDER_FAILURE = "provider_failure"


class AIRuntimeError(RuntimeError):
    """Raised by ``LLMClient``; ``user_message`` is safe to show a learner."""

    user_message = "Sorry, I'm having trouble responding right now. Please try again."

    def __init__(self, message: str, *, category: AIRuntimeErrorCategory) -> None:
        super().__init__(message)
        self.category = category


class AIRateLimitOrQuotaError(AIRuntimeError):
    user_message = "The assistant is busy. Please wait a moment and try again."

    def __init__(self, message: str) -> None:
        super().__init__(message, category=AIRuntimeErrorCategory.RATE_LIMIT_OR_QUOTA)


class AITimeoutError(AIRuntimeError):
    user_message = "The response took too long. Please try again."

    def __init__(self, message: str) -> None:
        super().__init__(message, category=AIRuntimeErrorCategory.TIMEOUT)


class AIProviderError(AIRuntimeError):
    def __init__(self, message: str) -> None:
        super().__init__(message, category=AIRuntimeErrorCategory.PROVIDER_FAILURE)
