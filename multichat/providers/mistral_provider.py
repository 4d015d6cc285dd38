"""Mistral AI chat completions adapter."""

from typing import Any, Dict, List

from .base import BaseProvider, ProviderId, ProviderReply, chat_completion_messages
from ..models.chat import ChatMessage


class MistralProvider(BaseProvider):
    provider_id = ProviderId.MISTRAL
    display_name = "Mistral Small"
    label = "Mistral"
    description = "Mistral's balanced performance model"

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

        choice = data["choices"][0]
        content = choice["message"].get("content") or ""
        # Mistral may return content as a list of typed chunks
        if isinstance(content, list):
            content = "".join(chunk.get("text", "") for chunk in content if isinstance(chunk, dict))
        usage = data.get("usage") or {}

        return ProviderReply(
            text=content,
            model=self.model,
            tokens_used=int(usage.get("total_tokens") or 0),
        )
