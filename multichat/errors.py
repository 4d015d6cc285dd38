"""Error taxonomy for chat dispatch."""

from typing import Optional

from fastapi import status


class ChatError(Exception):
    """Base class for errors surfaced to HTTP callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequest(ChatError):
    """Required request fields are missing."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnknownProvider(ChatError):
    """The requested provider identifier is not recognized."""

    status_code = status.HTTP_400_BAD_REQUEST


class ProviderError(ChatError):
    """A provider could not produce a reply. Triggers fallback."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(message)
        self.provider = provider


class ProviderUnavailable(ProviderError):
    """The provider has no configured credential."""


class ProviderRequestFailed(ProviderError):
    """Transport, HTTP or response-shape failure from a configured provider."""


class AllProvidersFailed(ChatError):
    """The requested provider and its fallback (if any) both failed."""

    def __init__(self, original_error: str, fallback_error: Optional[str] = None) -> None:
        super().__init__("Failed to get AI response")
        self.original_error = original_error
        self.fallback_error = fallback_error


class RequestCancelled(ChatError):
    """The caller went away while a provider call was in flight."""

    # nginx's "client closed request"
    status_code = 499
