"""Schemas for the learning assistant chat."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str = Field(..., min_length=1)


class ChatContext(BaseModel):
    """Where in the curriculum the user is asking from."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    module_id: str | None = None
    topic_id: str | None = None


class ChatRequest(BaseModel):
    messages: list[ChatMessage] = Field(..., min_length=1, max_length=100)
    context: ChatContext | None = None
    model: str | None = Field(None, description="Optional model override")
