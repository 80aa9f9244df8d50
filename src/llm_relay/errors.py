"""Error types surfaced to MCP clients.

Every message is meant to be shown to the caller as is, so provider errors
always carry the provider name.
"""


class RelayError(Exception):
    """Base class for errors raised by the relay."""


class InvalidRequestError(RelayError):
    """Tool input was missing or malformed; no provider was called."""


class ProviderError(RelayError):
    """A provider call failed."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(message)
        self.provider = provider


class ProviderAuthError(ProviderError):
    """The provider credential is missing or was rejected."""


class ProviderRateLimitError(ProviderError):
    """The provider refused the call because of rate limiting."""
