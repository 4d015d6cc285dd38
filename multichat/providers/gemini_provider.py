"""Google Gemini adapter (generateContent REST API)."""

from typing import Any, Dict, List

from .base import BaseProvider, ProviderId, ProviderReply
from ..models.chat import ChatMessage

_ROLE_MAP = {"user": "user", "assistant": "model"}


class GeminiProvider(BaseProvider):
    provider_id = ProviderId.GEMINI
    display_name = "Google Gemini 1.5 Flash"
    label = "Gemini"
    description = "Google's fast, versatile AI model"

    def build_payload(self, message: str, history: List[ChatMessage]) -> Dict[str, Any]:
        contents = [
            {"role": _ROLE_MAP[turn.role], "parts": [{"text": turn.content}]}
            for turn in history
        ]
        contents.append({"role": "user", "parts": [{"text": message}]})
        return {
            "contents": contents,
            "generationConfig": {
                "maxOutputTokens": self.budget.max_tokens,
                "temperature": self.budget.temperature,
            },
        }

    async def _invoke(self, message: str, history: List[ChatMessage]) -> ProviderReply:
        url = f"{self.base_url}/models/{self.model}:generateContent"
        # Key goes in a header so it never shows up in URLs echoed by errors
        headers = {"x-goog-api-key": self.api_key, "Content-Type": "application/json"}
        data = await self._post_json(url, self.build_payload(message, history), headers)

        candidates = data.get("candidates") or []
        if not candidates:
            reason = (data.get("promptFeedback") or {}).get("blockReason", "no candidates returned")
            raise self._failure(f"empty response ({reason})")

        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts)
        usage = data.get("usageMetadata") or {}

        return ProviderReply(
            text=text,
            model=self.model,
            tokens_used=int(usage.get("totalTokenCount") or 0),
        )
