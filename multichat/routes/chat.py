"""Chat route: one message in, one provider reply out."""

import asyncio

from fastapi import APIRouter, Depends, Request

from .deps import get_dispatcher
from ..dispatcher import ChatDispatcher
from ..logging_config import get_logger
from ..models.chat import ChatRequest, ChatResponse
from ..utils.responses import utc_timestamp

logger = get_logger(__name__)

router = APIRouter(tags=["chat"])


async def _watch_disconnect(request: Request, cancel_event: asyncio.Event, interval: float) -> None:
    """Set ``cancel_event`` once the HTTP client goes away."""
    while not cancel_event.is_set():
        if await request.is_disconnected():
            logger.info("Client disconnected, cancelling chat request")
            cancel_event.set()
            return
        await asyncio.sleep(interval)


@router.post(
    "/chat",
    response_model=ChatResponse,
    response_model_exclude_none=True,
)
async def chat(
    body: ChatRequest,
    request: Request,
    dispatcher: ChatDispatcher = Depends(get_dispatcher),
) -> ChatResponse:
    """Send a message to the selected provider, falling back once on failure."""

    logger.info(f"Chat request for model '{body.model}' with {len(body.conversation_history)} history messages")

    cancel_event = asyncio.Event()
    interval = request.app.state.settings.disconnect_poll_interval
    watcher = asyncio.create_task(_watch_disconnect(request, cancel_event, interval))
    try:
        outcome = await dispatcher.execute(
            body.message,
            body.model,
            body.conversation_history,
            cancel_event=cancel_event,
        )
    finally:
        watcher.cancel()

    if outcome.fallback:
        logger.info(f"Answered by fallback provider {outcome.provider.value}")

    return ChatResponse(
        success=outcome.success,
        response=outcome.response,
        model=outcome.model,
        tokens_used=outcome.tokens_used,
        timestamp=utc_timestamp(),
        fallback=True if outcome.fallback else None,
        original_error=outcome.original_error,
    )


__all__ = ["router"]
