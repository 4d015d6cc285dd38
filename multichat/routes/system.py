"""Health and model listing routes."""

from typing import List

from fastapi import APIRouter, Depends

from .deps import get_registry
from ..models.chat import HealthResponse, ProviderDescriptor
from ..providers import ProviderRegistry
from ..utils.responses import utc_timestamp

router = APIRouter(tags=["system"])


@router.get("/health", response_model=HealthResponse)
async def health(registry: ProviderRegistry = Depends(get_registry)) -> HealthResponse:
    """Report liveness and which providers have credentials."""
    return HealthResponse(
        status="healthy",
        available_models=[provider_id.value for provider_id in registry.available_ids()],
        timestamp=utc_timestamp(),
    )


@router.get("/models", response_model=List[ProviderDescriptor])
async def list_models(registry: ProviderRegistry = Depends(get_registry)) -> List[ProviderDescriptor]:
    """The four known providers with their availability."""
    return registry.descriptors()


__all__ = ["router"]
