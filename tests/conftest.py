import sys
from pathlib import Path

import pytest


_root = Path(__file__).resolve().parents[1]
_src = _root / "src"
if _src.exists() and str(_src) not in sys.path:
    sys.path.insert(0, str(_src))


from llm_relay.services.session_store import ConversationStore  # noqa: E402


@pytest.fixture
def store() -> ConversationStore:
    """Fresh in-memory store with the default 20-turn limit."""
    return ConversationStore()
