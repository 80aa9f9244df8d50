"""Session state, context assembly and response normalization."""

from .context import AssembledContext, MessageShape, assemble
from .normalizer import extract_tool_call, normalize
from .session_store import ConversationStore, generate_session_id, resolve_session_id

__all__ = [
    "AssembledContext",
    "ConversationStore",
    "MessageShape",
    "assemble",
    "extract_tool_call",
    "generate_session_id",
    "normalize",
    "resolve_session_id",
]
