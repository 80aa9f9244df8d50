from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel

DEFAULT_SESSION_ID = "default"

Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class Turn:
    """One role-tagged message in a session's history."""

    role: Role
    content: str


@dataclass(frozen=True)
class ToolCall:
    """Provider-agnostic description of a tool invocation found in a response.

    ``source`` names the response shape that matched, ``args`` is ``None`` when
    the provider sent arguments that could not be parsed, and ``raw`` keeps the
    provider fragment untouched.
    """

    source: str
    name: Optional[str]
    args: Any
    raw: Any

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "name": self.name,
            "args": self.args,
            "raw": self.raw,
        }


@dataclass(frozen=True)
class NormalizedResult:
    """Answer text plus the tool call extracted from a provider response, if any."""

    answer: str
    tool_call: Optional[ToolCall] = None


class AskRequest(BaseModel):
    """Validated input of the ``ask_*`` tools."""

    question: str
    model: Optional[str] = None
    tools: Any = None
    session_id: str = DEFAULT_SESSION_ID


class ClearRequest(BaseModel):
    """Validated input of the ``clear_conversation`` tool."""

    session_id: str = DEFAULT_SESSION_ID
