from typing import Any, Dict, Optional

from anthropic import AsyncAnthropic

from ..services.context import AssembledContext, MessageShape
from .base import NO_RESPONSE_PLACEHOLDER, ProviderAdapter, text_or_placeholder


class AnthropicAdapter(ProviderAdapter):
    """Anthropic Messages API; the preamble goes in ``system``, not in the messages."""

    name = "Anthropic"
    env_var = "ANTHROPIC_API_KEY"
    shape = MessageShape.SIDE_CHANNEL

    def __init__(
        self,
        api_key: Optional[str],
        default_model: str,
        max_tokens: int = 4000,
        timeout_seconds: float = 120.0,
        client: Optional[AsyncAnthropic] = None,
    ) -> None:
        super().__init__(api_key, default_model, max_tokens, timeout_seconds)
        self._client = client

    @property
    def client(self) -> AsyncAnthropic:
        if self._client is None:
            self._client = AsyncAnthropic(api_key=self._api_key)
        return self._client

    async def _create(self, context: AssembledContext, model: str, tools: Any) -> Any:
        kwargs: Dict[str, Any] = {
            "model": model,
            "max_tokens": self._max_tokens,
            "messages": context.messages,
        }
        if context.system:
            kwargs["system"] = context.system
        if tools is not None:
            kwargs["tools"] = tools
        return await self.client.messages.create(**kwargs)

    def extract_text(self, raw: Any) -> str:
        blocks = getattr(raw, "content", None)
        if not isinstance(blocks, (list, tuple)):
            return NO_RESPONSE_PLACEHOLDER
        for block in blocks:
            if getattr(block, "type", None) == "text":
                return text_or_placeholder(getattr(block, "text", None))
        return NO_RESPONSE_PLACEHOLDER
