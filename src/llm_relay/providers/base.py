"""Common plumbing for provider adapters: credential check, deadline, error mapping."""

import asyncio
import logging
from typing import Any, Optional

from ..errors import ProviderAuthError, ProviderError, ProviderRateLimitError
from ..services.context import AssembledContext, MessageShape

logger = logging.getLogger(__name__)

NO_RESPONSE_PLACEHOLDER = "No response generated"

_AUTH_STATUSES = (401, 403)
_RATE_LIMIT_STATUS = 429


def _status_of(exc: BaseException) -> Optional[int]:
    """Return the HTTP-like status carried by an SDK exception, if any."""
    for attr in ("status_code", "code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return int(value)
    return None


def auth_error(provider: str, env_var: str) -> ProviderAuthError:
    return ProviderAuthError(
        provider,
        f"{provider} API key is invalid or missing. "
        f"Please set {env_var} environment variable.",
    )


def rate_limit_error(provider: str) -> ProviderRateLimitError:
    return ProviderRateLimitError(
        provider, f"{provider} API rate limit exceeded. Please try again later."
    )


def classify_error(provider: str, env_var: str, exc: BaseException) -> ProviderError:
    """Map an SDK exception onto auth / rate-limit / generic provider errors.

    The status code decides when there is one; the message is only consulted
    for auth and rate-limit hints otherwise.
    """
    status = _status_of(exc)
    message = str(getattr(exc, "message", None) or exc)
    lowered = message.lower()

    if status == _RATE_LIMIT_STATUS:
        return rate_limit_error(provider)
    if status in _AUTH_STATUSES:
        return auth_error(provider, env_var)
    if type(exc).__name__ in ("RateLimitError", "ResourceExhausted"):
        return rate_limit_error(provider)
    # Gemini reports a bad key as 400 INVALID_ARGUMENT, so key hints apply with any other status.
    if "api_key" in lowered or "api key" in lowered:
        return auth_error(provider, env_var)
    if status is None and ("rate limit" in lowered or "resource exhausted" in lowered):
        return rate_limit_error(provider)
    return ProviderError(provider, f"{provider} API error: {message}")


class ProviderAdapter:
    """Translates an assembled context into one provider call.

    Subclasses set the class attributes and implement ``_create`` and
    ``extract_text``. ``send`` returns the provider's native response
    unchanged; it never retries.
    """

    name: str = ""
    env_var: str = ""
    shape: MessageShape = MessageShape.ROLE_ANNOTATED

    def __init__(
        self,
        api_key: Optional[str],
        default_model: str,
        max_tokens: int = 4000,
        timeout_seconds: float = 120.0,
    ) -> None:
        self._api_key = api_key
        self.default_model = default_model
        self._max_tokens = max_tokens
        self._timeout = timeout_seconds

    async def send(self, context: AssembledContext, model: str, tools: Any = None) -> Any:
        """Call the provider once, with a deadline, and return its raw response."""
        if not self._api_key:
            raise auth_error(self.name, self.env_var)

        logger.info("Calling %s model=%s messages=%d", self.name, model, len(context.messages))
        try:
            return await asyncio.wait_for(
                self._create(context, model, tools), timeout=self._timeout
            )
        except asyncio.TimeoutError as e:
            raise ProviderError(
                self.name,
                f"{self.name} API request timed out after {self._timeout:.0f}s.",
            ) from e
        except ProviderError:
            raise
        except Exception as e:
            error = classify_error(self.name, self.env_var, e)
            logger.warning("%s call failed: %s", self.name, e)
            raise error from e

    async def _create(self, context: AssembledContext, model: str, tools: Any) -> Any:
        raise NotImplementedError

    def extract_text(self, raw: Any) -> str:
        """Return the answer text of ``raw`` or the no-response placeholder."""
        raise NotImplementedError


def text_or_placeholder(value: Any) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return NO_RESPONSE_PLACEHOLDER
