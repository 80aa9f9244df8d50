import json
import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from .errors import InvalidRequestError, ProviderError
from .models import AskRequest, ClearRequest, NormalizedResult
from .providers import ProviderAdapter, build_adapters
from .services.context import assemble
from .services.normalizer import normalize
from .services.session_store import ConversationStore, resolve_session_id
from .settings import get_settings

logger = logging.getLogger(__name__)


def continuation_hint(session_id: str) -> str:
    return f"\n\n[session_id: {session_id}] Pass this session_id to continue the conversation."


def build_envelope(result: NormalizedResult, session_id: str) -> Dict[str, Any]:
    """Build the tool result: answer text, optional tool-call block, session id."""
    envelope: Dict[str, Any] = {
        "content": [
            {"type": "text", "text": result.answer + continuation_hint(session_id)}
        ],
        "session_id": session_id,
    }
    if result.tool_call is not None:
        tool_call = result.tool_call.to_dict()
        envelope["content"].append(
            {
                "type": "text",
                "text": json.dumps({"tool_call": tool_call}, indent=2, default=str),
            }
        )
        envelope["tool_call"] = tool_call
    return envelope


class RelayService:
    """Routes ask/clear tool calls through sessions, providers and the normalizer."""

    def __init__(
        self,
        store: ConversationStore,
        adapters: Mapping[str, ProviderAdapter],
        system_prompt: str,
    ) -> None:
        self._store = store
        self._adapters = dict(adapters)
        self._system_prompt = system_prompt

    @property
    def store(self) -> ConversationStore:
        return self._store

    @property
    def tool_names(self) -> list[str]:
        return list(self._adapters)

    def _adapter(self, tool_name: str) -> ProviderAdapter:
        try:
            return self._adapters[tool_name]
        except KeyError:
            raise InvalidRequestError(f"Unknown tool: {tool_name}") from None

    async def ask(self, tool_name: str, arguments: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Answer one question through the adapter registered for ``tool_name``.

        Args:
            tool_name: One of the ``ask_*`` tool names.
            arguments: Raw tool arguments (question, model, tools, session_id).

        Returns:
            Dict[str, Any]: The result envelope with ``content`` and ``session_id``,
                plus ``tool_call`` when the provider asked for one.
        """
        adapter = self._adapter(tool_name)
        try:
            request = AskRequest.model_validate(arguments or {})
        except ValidationError as e:
            raise InvalidRequestError(f"Invalid arguments: {e}") from e

        session_id = resolve_session_id(request.session_id)
        model = request.model or adapter.default_model
        # Read-only: a failed call must not leave an empty session behind.
        history = self._store.history(session_id)
        context = assemble(history, request.question, self._system_prompt, adapter.shape)

        logger.info(
            "%s session_id=%s model=%s history=%d", tool_name, session_id, model, len(history)
        )
        try:
            raw = await adapter.send(context, model, request.tools)
        except ProviderError as e:
            logger.warning("%s failed for session_id=%s: %s", tool_name, session_id, e)
            raise

        result = normalize(raw, adapter.extract_text(raw))
        self._store.append(session_id, "user", request.question)
        self._store.append(session_id, "assistant", result.answer)
        if result.tool_call is not None:
            logger.info(
                "Session %s: tool call %s (%s)",
                session_id,
                result.tool_call.name,
                result.tool_call.source,
            )
        return build_envelope(result, session_id)

    def clear(self, arguments: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Forget a session's history. The sentinel id clears the ``default`` session."""
        try:
            request = ClearRequest.model_validate(arguments or {})
        except ValidationError as e:
            raise InvalidRequestError(f"Invalid arguments: {e}") from e

        session_id = resolve_session_id(request.session_id, create_if_default=False)
        self._store.clear(session_id)
        return {
            "content": [{"type": "text", "text": f"Conversation {session_id} cleared."}],
            "session_id": session_id,
        }


def create_relay_service() -> RelayService:
    """Build a service from the application settings."""
    settings = get_settings()
    return RelayService(
        store=ConversationStore(history_limit=settings.history_limit),
        adapters=build_adapters(settings),
        system_prompt=settings.system_prompt,
    )


_SERVICE: RelayService | None = None


def get_relay_service() -> RelayService:
    """Return the process-wide service, creating it on first use."""
    global _SERVICE
    if _SERVICE is None:
        _SERVICE = create_relay_service()
    return _SERVICE


__all__ = [
    "RelayService",
    "build_envelope",
    "continuation_hint",
    "create_relay_service",
    "get_relay_service",
]
