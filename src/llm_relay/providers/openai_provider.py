"""OpenAI chat completions adapter; OpenRouter reuses it with another base URL."""

from typing import Any, Dict, Optional

from openai import AsyncOpenAI

from ..services.context import AssembledContext, MessageShape
from .base import NO_RESPONSE_PLACEHOLDER, ProviderAdapter, text_or_placeholder


class OpenAIAdapter(ProviderAdapter):
    name = "OpenAI"
    env_var = "OPENAI_API_KEY"
    shape = MessageShape.ROLE_ANNOTATED
    # Reasoning models reject ``max_tokens``.
    max_tokens_param = "max_completion_tokens"

    def __init__(
        self,
        api_key: Optional[str],
        default_model: str,
        max_tokens: int = 4000,
        timeout_seconds: float = 120.0,
        base_url: Optional[str] = None,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        super().__init__(api_key, default_model, max_tokens, timeout_seconds)
        self._base_url = base_url
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        """Create the SDK client on first use."""
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key, base_url=self._base_url)
        return self._client

    async def _create(self, context: AssembledContext, model: str, tools: Any) -> Any:
        kwargs: Dict[str, Any] = {
            "model": model,
            "messages": context.messages,
            self.max_tokens_param: self._max_tokens,
        }
        if tools is not None:
            kwargs["tools"] = tools
        return await self.client.chat.completions.create(**kwargs)

    def extract_text(self, raw: Any) -> str:
        try:
            content = raw.choices[0].message.content
        except (AttributeError, IndexError, TypeError):
            return NO_RESPONSE_PLACEHOLDER
        return text_or_placeholder(content)


class OpenRouterAdapter(OpenAIAdapter):
    """OpenRouter speaks the OpenAI chat completions protocol."""

    name = "OpenRouter"
    env_var = "OPENROUTER_API_KEY"
    max_tokens_param = "max_tokens"
