"""Chat dispatcher: primary provider attempt plus one fallback attempt."""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Optional, Sequence

from .errors import (
    AllProvidersFailed,
    InvalidRequest,
    ProviderError,
    ProviderRequestFailed,
    RequestCancelled,
    UnknownProvider,
)
from .logging_config import get_logger
from .models.chat import ChatMessage
from .providers import ProviderId, ProviderRegistry, ProviderReply

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChatOutcome:
    """Result of one chat request."""

    success: bool
    response: str
    model: str
    tokens_used: int
    provider: ProviderId
    fallback: bool = False
    original_error: Optional[str] = None


class ChatDispatcher:
    """Routes a chat request to its provider, falling back once on failure."""

    def __init__(self, registry: ProviderRegistry, timeout: Optional[float] = 30.0, history_window: int = 0) -> None:
        self.registry = registry
        self.timeout = timeout if timeout and timeout > 0 else None
        self.history_window = history_window

    async def execute(
        self,
        message: Optional[str],
        model: Optional[str],
        history: Sequence[ChatMessage] = (),
        cancel_event: Optional[asyncio.Event] = None,
    ) -> ChatOutcome:
        """Handle one chat request.

        Raises InvalidRequest or UnknownProvider before any provider is
        called, AllProvidersFailed once the primary and fallback attempts are
        exhausted, and RequestCancelled if ``cancel_event`` is set while a
        provider call is in flight.
        """

        if not message or not model:
            raise InvalidRequest("Message and model are required")

        requested = self.registry.resolve(model)
        if requested is None:
            raise UnknownProvider("Invalid model specified")

        history = self._window(history)

        try:
            reply = await self._invoke(requested, message, history, cancel_event)
            return self._outcome(requested, reply)
        except ProviderError as e:
            original_error = e.message
            logger.error(f"Chat error from {requested.value}: {original_error}")

        fallback = self.registry.fallback_for(requested)
        if fallback is None:
            logger.error("No fallback provider available")
            raise AllProvidersFailed(original_error)

        logger.info(f"Trying fallback model: {fallback.value}")
        try:
            reply = await self._invoke(fallback, message, history, cancel_event)
        except ProviderError as e:
            logger.error(f"Fallback also failed: {e.message}")
            raise AllProvidersFailed(original_error, e.message)

        return self._outcome(fallback, reply, original_error=original_error)

    def _window(self, history: Sequence[ChatMessage]) -> Sequence[ChatMessage]:
        if self.history_window > 0:
            return list(history)[-self.history_window:]
        return list(history)

    async def _invoke(
        self,
        provider_id: ProviderId,
        message: str,
        history: Sequence[ChatMessage],
        cancel_event: Optional[asyncio.Event],
    ) -> ProviderReply:
        if cancel_event is not None and cancel_event.is_set():
            raise RequestCancelled("Request cancelled by client")

        provider = self.registry.get(provider_id)
        call = asyncio.wait_for(provider.invoke(message, history), self.timeout)

        try:
            if cancel_event is None:
                return await call
            return await _race_cancel(call, cancel_event)
        except asyncio.TimeoutError:
            raise ProviderRequestFailed(
                provider_id.value,
                f"{provider.label} API error: no response within {self.timeout:g}s",
            )

    @staticmethod
    def _outcome(provider_id: ProviderId, reply: ProviderReply, original_error: Optional[str] = None) -> ChatOutcome:
        return ChatOutcome(
            success=True,
            response=reply.text,
            model=reply.model,
            tokens_used=reply.tokens_used,
            provider=provider_id,
            fallback=original_error is not None,
            original_error=original_error,
        )


async def _race_cancel(call: Awaitable[ProviderReply], cancel_event: asyncio.Event) -> ProviderReply:
    """Await ``call`` unless ``cancel_event`` fires first, in which case cancel it."""

    task = asyncio.ensure_future(call)
    waiter = asyncio.ensure_future(cancel_event.wait())
    try:
        done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()
        if not task.done():
            task.cancel()

    if task in done:
        return task.result()

    # Let the provider call unwind before reporting
    await asyncio.wait({task})
    logger.info("Provider call cancelled after client disconnect")
    raise RequestCancelled("Request cancelled by client")
