"""OpenAI chat completions adapter."""

from typing import Any, Dict, List

from .base import BaseProvider, ProviderId, ProviderReply, chat_completion_messages
from ..models.chat import ChatMessage


class OpenAIProvider(BaseProvider):
    provider_id = ProviderId.OPENAI
    display_name = "OpenAI GPT-4o Mini"
    label = "OpenAI"
    description = "OpenAI's efficient, cost-effective model"

    def build_payload(self, message: str, history: List[ChatMessage]) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": chat_completion_messages(message, history),
            "max_tokens": self.budget.max_tokens,
            "temperature": self.budget.temperature,
        }

    async def _invoke(self, message: str, history: List[ChatMessage]) -> ProviderReply:
        url = f"{self.base_url}/chat/completions"
        data = await self._post_json(url, self.build_payload(message, history), self._bearer_headers())

        content = data["choices"][0]["message"].get("content") or ""
        usage = data.get("usage") or {}

        return ProviderReply(
            text=content,
            model=self.model,
            tokens_used=int(usage.get("total_tokens") or 0),
        )
