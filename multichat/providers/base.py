"""Provider abstraction shared by every adapter."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Type

import httpx

from ..errors import ProviderRequestFailed, ProviderUnavailable
from ..logging_config import get_logger, redact
from ..models.chat import ChatMessage

logger = get_logger(__name__)


class ProviderId(str, Enum):
    """Known providers."""
    GEMINI = "gemini"
    HUGGINGFACE = "huggingface"
    OPENAI = "openai"
    MISTRAL = "mistral"


@dataclass(frozen=True)
class ProviderReply:
    """Uniform adapter result."""

    text: str
    model: str
    tokens_used: int = 0


@dataclass(frozen=True)
class GenerationBudget:
    """Fixed sampling parameters sent with every request."""

    max_tokens: int = 150
    temperature: float = 0.7


class BaseProvider(ABC):
    """One provider's translation between the uniform chat shape and its API."""

    provider_id: ProviderId
    display_name: str
    label: str
    description: str

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: Optional[str],
        model: str,
        base_url: str,
        budget: GenerationBudget = GenerationBudget(),
    ) -> None:
        self.http_client = http_client
        self.api_key = api_key or None
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.budget = budget

    @property
    def available(self) -> bool:
        return self.api_key is not None

    async def invoke(self, message: str, history: Sequence[ChatMessage] = ()) -> ProviderReply:
        """Send one user message with its history and return the reply."""

        if not self.available:
            raise ProviderUnavailable(self.provider_id.value, f"{self.label} client not available")

        try:
            return await self._invoke(message, list(history))
        except ProviderRequestFailed:
            raise
        except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
            raise self._failure(f"unexpected response shape ({type(e).__name__}: {e})")

    @abstractmethod
    async def _invoke(self, message: str, history: List[ChatMessage]) -> ProviderReply:
        """Provider-specific request and response mapping."""

    async def _post_json(self, url: str, payload: Dict[str, Any], headers: Dict[str, str]) -> Any:
        """POST a JSON payload and return the decoded body, mapping failures."""

        try:
            response = await self.http_client.post(url, json=payload, headers=headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise self._failure(f"{e.response.status_code} {_error_detail(e.response)}")
        except httpx.TimeoutException:
            raise self._failure("request timed out")
        except httpx.HTTPError as e:
            raise self._failure(str(e) or type(e).__name__)
        except ValueError as e:
            raise self._failure(f"invalid JSON in response: {e}")

    def _failure(self, detail: str) -> ProviderRequestFailed:
        secrets = [self.api_key] if self.api_key else []
        message = redact(f"{self.label} API error: {detail}", secrets)
        logger.error(message)
        return ProviderRequestFailed(self.provider_id.value, message)

    def _bearer_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }


def _error_detail(response: httpx.Response) -> str:
    """Best-effort human-readable message from an error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str):
            return error
        if body.get("message"):
            return str(body["message"])
    return response.reason_phrase


def chat_completion_messages(message: str, history: Sequence[ChatMessage]) -> List[Dict[str, str]]:
    """History in chat-completions shape with the new user turn appended."""
    messages = [{"role": turn.role, "content": turn.content} for turn in history]
    messages.append({"role": "user", "content": message})
    return messages


class DisabledProvider(BaseProvider):
    """Stand-in for an adapter whose construction failed. Always unavailable."""

    def __init__(self, provider_cls: Type[BaseProvider], model: str, base_url: str) -> None:
        super().__init__(None, None, model, base_url)
        self.provider_id = provider_cls.provider_id
        self.display_name = provider_cls.display_name
        self.label = provider_cls.label
        self.description = provider_cls.description

    async def _invoke(self, message: str, history: List[ChatMessage]) -> ProviderReply:
        raise ProviderUnavailable(self.provider_id.value, f"{self.label} client not available")
