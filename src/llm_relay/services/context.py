"""Builds the message list sent to a provider from stored history."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

from ..models import Turn


class MessageShape(str, Enum):
    """How a provider expects the system preamble and roles to be laid out."""

    ROLE_ANNOTATED = "role_annotated"
    SIDE_CHANNEL = "side_channel"
    ROLE_RELABELED = "role_relabeled"


RELABELED_ROLES: Dict[str, str] = {"assistant": "model", "user": "user"}


@dataclass(frozen=True)
class AssembledContext:
    """Provider-ready messages plus the preamble when it travels separately."""

    messages: List[Dict[str, str]]
    system: Optional[str] = None


def assemble(
    history: Sequence[Turn],
    question: str,
    system_prompt: str,
    shape: MessageShape,
) -> AssembledContext:
    """Merge history, the new question and the preamble into ``shape``.

    Always builds new dicts; ``history`` is left untouched.
    """
    turns = [{"role": turn.role, "content": turn.content} for turn in history]
    turns.append({"role": "user", "content": question})

    if shape is MessageShape.SIDE_CHANNEL:
        return AssembledContext(messages=turns, system=system_prompt)

    if shape is MessageShape.ROLE_RELABELED:
        turns = [
            {"role": RELABELED_ROLES.get(t["role"], t["role"]), "content": t["content"]}
            for t in turns
        ]

    messages = [{"role": "system", "content": system_prompt}] + turns
    return AssembledContext(messages=messages)
