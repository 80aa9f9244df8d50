from typing import Any, Dict, List, Optional, Tuple

import google.generativeai as genai

from ..services.context import AssembledContext, MessageShape
from .base import NO_RESPONSE_PLACEHOLDER, ProviderAdapter, text_or_placeholder


def to_gemini_contents(
    context: AssembledContext,
) -> Tuple[Optional[str], List[Dict[str, Any]]]:
    """Split system entries off into a system instruction and wrap the rest as parts.

    Gemini only accepts ``user`` and ``model`` roles in ``contents``.
    """
    system_parts: List[str] = []
    if context.system:
        system_parts.append(context.system)

    contents: List[Dict[str, Any]] = []
    for message in context.messages:
        if message["role"] == "system":
            system_parts.append(message["content"])
            continue
        contents.append({"role": message["role"], "parts": [{"text": message["content"]}]})

    system_instruction = "\n\n".join(system_parts) if system_parts else None
    return system_instruction, contents


class GeminiAdapter(ProviderAdapter):
    name = "Google"
    env_var = "GOOGLE_API_KEY"
    shape = MessageShape.ROLE_RELABELED

    def __init__(
        self,
        api_key: Optional[str],
        default_model: str,
        max_tokens: int = 4000,
        timeout_seconds: float = 120.0,
    ) -> None:
        super().__init__(api_key, default_model, max_tokens, timeout_seconds)
        self._configured = False

    def _model(self, model: str, system_instruction: Optional[str]) -> Any:
        if not self._configured:
            genai.configure(api_key=self._api_key)
            self._configured = True
        return genai.GenerativeModel(model_name=model, system_instruction=system_instruction)

    async def _create(self, context: AssembledContext, model: str, tools: Any) -> Any:
        system_instruction, contents = to_gemini_contents(context)
        kwargs: Dict[str, Any] = {
            "generation_config": {"max_output_tokens": self._max_tokens},
        }
        if tools is not None:
            kwargs["tools"] = tools
        return await self._model(model, system_instruction).generate_content_async(
            contents, **kwargs
        )

    def extract_text(self, raw: Any) -> str:
        # ``.text`` raises ValueError when the candidate has no text parts.
        try:
            text = raw.text
        except (ValueError, AttributeError, IndexError):
            return NO_RESPONSE_PLACEHOLDER
        return text_or_placeholder(text)
