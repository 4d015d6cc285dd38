"""Shared fixtures: isolated settings, a fake provider API and scripted adapters."""

import asyncio
import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest
import pytest_asyncio

from multichat.config import Settings
from multichat.errors import ProviderRequestFailed
from multichat.providers import BaseProvider, ProviderId, ProviderRegistry, ProviderReply


def make_settings(**overrides) -> Settings:
    """Settings with no credentials unless given, independent of the environment."""
    values = {
        "gemini_api_key": None,
        "huggingface_api_key": None,
        "openai_api_key": None,
        "mistral_api_key": None,
        "provider_priority_raw": "gemini,huggingface,openai,mistral",
        "request_timeout": 5.0,
        "history_window": 10,
        "client_url": "http://localhost:5173",
        "disconnect_poll_interval": 0.05,
    }
    values.update(overrides)
    return Settings(**values)


GEMINI_OK = {
    "candidates": [{"content": {"role": "model", "parts": [{"text": "Hello from Gemini"}]}}],
    "usageMetadata": {"promptTokenCount": 4, "candidatesTokenCount": 5, "totalTokenCount": 9},
}
HUGGINGFACE_OK = [{"generated_text": "  Hello from DialoGPT  "}]
OPENAI_OK = {
    "choices": [{"message": {"role": "assistant", "content": "Hello from OpenAI"}}],
    "usage": {"prompt_tokens": 8, "completion_tokens": 4, "total_tokens": 12},
}
MISTRAL_OK = {
    "choices": [{"message": {"role": "assistant", "content": "Hello from Mistral"}}],
    "usage": {"prompt_tokens": 7, "completion_tokens": 4, "total_tokens": 11},
}

HOSTS = {
    "generativelanguage.googleapis.com": "gemini",
    "api-inference.huggingface.co": "huggingface",
    "api.openai.com": "openai",
    "api.mistral.ai": "mistral",
}


class FakeProviderAPI:
    """httpx MockTransport handler answering like the four provider APIs."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.responses: Dict[str, Tuple[int, Any]] = {}

    def fail(self, provider: str, status_code: int = 500, body: Optional[dict] = None) -> None:
        self.respond(provider, status_code, body or {"error": {"message": "upstream exploded"}})

    def respond(self, provider: str, status_code: int, body: Any) -> None:
        self.responses[provider] = (status_code, body)

    def calls_to(self, provider: str) -> List[httpx.Request]:
        return [r for r in self.requests if HOSTS.get(r.url.host) == provider]

    def payload(self, provider: str, index: int = -1) -> dict:
        return json.loads(self.calls_to(provider)[index].content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        provider = HOSTS.get(request.url.host)
        if provider in self.responses:
            status_code, body = self.responses[provider]
            return httpx.Response(status_code, json=body)
        body = {
            "gemini": GEMINI_OK,
            "huggingface": HUGGINGFACE_OK,
            "openai": OPENAI_OK,
            "mistral": MISTRAL_OK,
        }.get(provider)
        if body is None:
            return httpx.Response(404, json={"error": "unknown host"})
        return httpx.Response(200, json=body)


@pytest.fixture
def fake_api() -> FakeProviderAPI:
    return FakeProviderAPI()


@pytest_asyncio.fixture
async def http_client(fake_api):
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake_api))
    yield client
    await client.aclose()


class ScriptedProvider(BaseProvider):
    """Adapter whose outcome is set by the test."""

    def __init__(
        self,
        provider_id: ProviderId,
        api_key: Optional[str] = "test-key",
        error: Optional[str] = None,
        delay: float = 0.0,
    ) -> None:
        super().__init__(None, api_key, f"{provider_id.value}-model", "http://fake.invalid")
        self.provider_id = provider_id
        self.label = provider_id.value.capitalize()
        self.display_name = f"{self.label} test model"
        self.description = "scripted provider"
        self.error = error
        self.delay = delay
        self.calls: List[tuple] = []
        self.cancelled = False

    async def _invoke(self, message, history):
        self.calls.append((message, list(history)))
        if self.delay:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self.error:
            raise ProviderRequestFailed(self.provider_id.value, f"{self.label} API error: {self.error}")
        return ProviderReply(text=f"reply from {self.provider_id.value}", model=self.model, tokens_used=3)


@pytest.fixture
def scripted_registry() -> Callable[..., ProviderRegistry]:
    """Build a registry of ScriptedProviders; kwargs map provider name to ScriptedProvider kwargs.

    Providers not mentioned are unavailable.
    """

    def _build(priority=("gemini", "huggingface", "openai", "mistral"), **options) -> ProviderRegistry:
        providers = {}
        for provider_id in ProviderId:
            kwargs = options.get(provider_id.value)
            if kwargs is None:
                providers[provider_id] = ScriptedProvider(provider_id, api_key=None)
            else:
                providers[provider_id] = ScriptedProvider(provider_id, **kwargs)
        return ProviderRegistry(providers, [ProviderId(name) for name in priority])

    return _build
