"""Hugging Face Inference API adapter (plain text generation)."""

from typing import Any, Dict, List

from .base import BaseProvider, ProviderId, ProviderReply
from ..models.chat import ChatMessage


def build_prompt(message: str, history: List[ChatMessage]) -> str:
    """Flatten the conversation into a User:/Assistant: transcript."""
    lines = [
        f"{'User' if turn.role == 'user' else 'Assistant'}: {turn.content}"
        for turn in history
    ]
    lines.append(f"User: {message}")
    lines.append("Assistant:")
    return "\n".join(lines)


class HuggingFaceProvider(BaseProvider):
    provider_id = ProviderId.HUGGINGFACE
    display_name = "Hugging Face DialoGPT"
    label = "Hugging Face"
    description = "Conversational AI model from Microsoft"

    def build_payload(self, message: str, history: List[ChatMessage]) -> Dict[str, Any]:
        return {
            "inputs": build_prompt(message, history),
            "parameters": {
                "max_new_tokens": self.budget.max_tokens,
                "temperature": self.budget.temperature,
                "return_full_text": False,
            },
        }

    async def _invoke(self, message: str, history: List[ChatMessage]) -> ProviderReply:
        url = f"{self.base_url}/{self.model}"
        data = await self._post_json(url, self.build_payload(message, history), self._bearer_headers())

        # The inference API answers with a list for batched inputs
        if isinstance(data, list):
            data = data[0] if data else {}
        if "error" in data:
            raise self._failure(str(data["error"]))

        text = data["generated_text"].strip()

        # No token count is reported; output length is the usage proxy
        return ProviderReply(text=text, model=self.model, tokens_used=len(text))
