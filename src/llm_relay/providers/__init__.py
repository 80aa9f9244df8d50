"""Provider adapters and the tool-name registry that wires them up."""

from typing import Dict

from ..settings import Settings
from .anthropic_provider import AnthropicAdapter
from .base import NO_RESPONSE_PLACEHOLDER, ProviderAdapter, classify_error
from .gemini_provider import GeminiAdapter
from .openai_provider import OpenAIAdapter, OpenRouterAdapter


def build_adapters(settings: Settings) -> Dict[str, ProviderAdapter]:
    """Return one adapter per ``ask_*`` tool, keyed by tool name."""
    common = {
        "max_tokens": settings.max_tokens,
        "timeout_seconds": settings.request_timeout_seconds,
    }
    return {
        "ask_gpt": OpenAIAdapter(settings.openai_api_key, settings.gpt_model, **common),
        "ask_claude": AnthropicAdapter(
            settings.anthropic_api_key, settings.claude_model, **common
        ),
        "ask_gemini": GeminiAdapter(settings.google_api_key, settings.gemini_model, **common),
        "ask_openrouter": OpenRouterAdapter(
            settings.openrouter_api_key,
            settings.openrouter_model,
            base_url=settings.openrouter_base_url,
            **common,
        ),
        # DeepSeek models are reached through OpenRouter.
        "ask_deepseek": OpenRouterAdapter(
            settings.openrouter_api_key,
            settings.deepseek_model,
            base_url=settings.openrouter_base_url,
            **common,
        ),
    }


__all__ = [
    "NO_RESPONSE_PLACEHOLDER",
    "AnthropicAdapter",
    "GeminiAdapter",
    "OpenAIAdapter",
    "OpenRouterAdapter",
    "ProviderAdapter",
    "build_adapters",
    "classify_error",
]
