"""Chat and conversation models."""

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ChatMessage(BaseModel):
    """A single chat turn. Immutable once created."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    role: Literal["user", "assistant"]
    content: str
    model: Optional[str] = None
    tokens_used: Optional[int] = Field(default=None, alias="tokensUsed")
    timestamp: datetime = Field(default_factory=_now)


class ChatRequest(BaseModel):
    """Body of POST /chat.

    ``message`` and ``model`` are optional here so that a missing field is
    reported by the dispatcher as a 400 rather than by schema validation.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = None
    model: Optional[str] = None
    conversation_history: List[ChatMessage] = Field(default_factory=list, alias="conversationHistory")

    @field_validator("conversation_history", mode="before")
    @classmethod
    def _null_history_is_empty(cls, value):
        return [] if value is None else value


class ChatResponse(BaseModel):
    """Successful chat reply."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    response: str
    model: str
    tokens_used: int = Field(alias="tokensUsed")
    timestamp: str
    fallback: Optional[bool] = None
    original_error: Optional[str] = Field(default=None, alias="originalError")


class ProviderDescriptor(BaseModel):
    """Entry of GET /models."""

    id: str
    name: str
    available: bool
    description: str


class HealthResponse(BaseModel):
    """Body of GET /health."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = "healthy"
    available_models: List[str] = Field(alias="availableModels")
    timestamp: str


class ErrorResponse(BaseModel):
    """Error body shared by 4xx and 5xx replies."""

    model_config = ConfigDict(populate_by_name=True)

    error: str
    details: Optional[str] = None
    fallback_error: Optional[str] = Field(default=None, alias="fallbackError")
    timestamp: str
