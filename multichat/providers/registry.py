"""Provider registry, built once at startup and read-only afterwards."""

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Type

import httpx

from .base import BaseProvider, DisabledProvider, GenerationBudget, ProviderId
from .gemini_provider import GeminiProvider
from .huggingface_provider import HuggingFaceProvider
from .mistral_provider import MistralProvider
from .openai_provider import OpenAIProvider
from ..config import Settings
from ..logging_config import get_logger
from ..models.chat import ProviderDescriptor

logger = get_logger(__name__)


PROVIDER_CLASSES: Mapping[ProviderId, Type[BaseProvider]] = MappingProxyType({
    ProviderId.GEMINI: GeminiProvider,
    ProviderId.HUGGINGFACE: HuggingFaceProvider,
    ProviderId.OPENAI: OpenAIProvider,
    ProviderId.MISTRAL: MistralProvider,
})

_missing_adapters = set(ProviderId) - set(PROVIDER_CLASSES)
if _missing_adapters:
    raise RuntimeError(f"No adapter registered for: {sorted(p.value for p in _missing_adapters)}")


def resolve_priority(names: List[str]) -> List[ProviderId]:
    """Turn configured names into a full ordering of every known provider.

    Unknown names are dropped; providers not mentioned keep their default
    relative order after the configured ones.
    """
    order: List[ProviderId] = []
    for name in names:
        try:
            provider_id = ProviderId(name)
        except ValueError:
            logger.warning(f"Ignoring unknown provider '{name}' in priority list")
            continue
        if provider_id not in order:
            order.append(provider_id)
    order.extend(provider_id for provider_id in ProviderId if provider_id not in order)
    return order


class ProviderRegistry:
    """Maps provider identifiers to adapters in fallback-priority order."""

    def __init__(self, providers: Mapping[ProviderId, BaseProvider], priority: List[ProviderId]) -> None:
        missing = set(ProviderId) - set(providers)
        if missing:
            raise ValueError(f"Missing adapters for: {sorted(p.value for p in missing)}")
        self._providers = MappingProxyType(dict(providers))
        self._priority = tuple(priority)

    @classmethod
    def from_settings(cls, settings: Settings, http_client: httpx.AsyncClient) -> "ProviderRegistry":
        """Construct every adapter, marking those without credentials unavailable."""

        budget = GenerationBudget(max_tokens=settings.max_tokens, temperature=settings.temperature)
        keys = settings.api_keys
        providers: Dict[ProviderId, BaseProvider] = {}

        for provider_id, provider_cls in PROVIDER_CLASSES.items():
            name = provider_id.value
            api_key = keys.get(name)
            model = getattr(settings, f"{name}_model")
            base_url = getattr(settings, f"{name}_base_url")
            try:
                provider = provider_cls(http_client, api_key, model, base_url, budget)
            except Exception as e:
                logger.error(f"❌ Failed to initialize {provider_cls.label}: {type(e).__name__}")
                providers[provider_id] = DisabledProvider(provider_cls, model, base_url)
                continue

            if provider.available:
                logger.info(f"✅ {provider.label} client initialized")
            else:
                logger.info(f"{provider.label} not configured, skipping")
            providers[provider_id] = provider

        return cls(providers, resolve_priority(settings.provider_priority))

    @property
    def priority(self) -> List[ProviderId]:
        return list(self._priority)

    def get(self, provider_id: ProviderId) -> BaseProvider:
        return self._providers[provider_id]

    def resolve(self, name: str) -> Optional[ProviderId]:
        """Identifier for a request's model string, or None if unknown."""
        try:
            return ProviderId(name)
        except ValueError:
            return None

    def is_available(self, provider_id: ProviderId) -> bool:
        return self._providers[provider_id].available

    def available_ids(self) -> List[ProviderId]:
        return [provider_id for provider_id in self._priority if self.is_available(provider_id)]

    def fallback_for(self, requested: ProviderId) -> Optional[ProviderId]:
        """First available provider, by priority, other than the requested one."""
        for provider_id in self.available_ids():
            if provider_id is not requested:
                return provider_id
        return None

    def descriptors(self) -> List[ProviderDescriptor]:
        return [
            ProviderDescriptor(
                id=provider_id.value,
                name=self._providers[provider_id].display_name,
                available=self.is_available(provider_id),
                description=self._providers[provider_id].description,
            )
            for provider_id in self._priority
        ]
