"""Request dependencies backed by application state."""

from fastapi import Request

from ..dispatcher import ChatDispatcher
from ..providers import ProviderRegistry


def get_registry(request: Request) -> ProviderRegistry:
    return request.app.state.registry


def get_dispatcher(request: Request) -> ChatDispatcher:
    return request.app.state.dispatcher
