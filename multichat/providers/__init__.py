"""LLM provider adapters and their registry."""

from .base import BaseProvider, DisabledProvider, GenerationBudget, ProviderId, ProviderReply
from .gemini_provider import GeminiProvider
from .huggingface_provider import HuggingFaceProvider
from .mistral_provider import MistralProvider
from .openai_provider import OpenAIProvider
from .registry import PROVIDER_CLASSES, ProviderRegistry, resolve_priority

__all__ = [
    "BaseProvider",
    "DisabledProvider",
    "GenerationBudget",
    "ProviderId",
    "ProviderReply",
    "GeminiProvider",
    "HuggingFaceProvider",
    "MistralProvider",
    "OpenAIProvider",
    "PROVIDER_CLASSES",
    "ProviderRegistry",
    "resolve_priority",
]
