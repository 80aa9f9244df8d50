"""Extracts a canonical tool call from differently shaped provider responses.

Known shapes are tried in a fixed order and the first match wins. A response
with no recognised shape yields ``None``; nothing in here raises on odd input.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple

from ..models import NormalizedResult, ToolCall

logger = logging.getLogger(__name__)


def _as_mapping(raw: Any) -> Optional[Mapping[str, Any]]:
    """Turn a dict or SDK response object into a plain mapping."""
    if isinstance(raw, Mapping):
        return raw
    try:
        if hasattr(raw, "model_dump"):
            dumped = raw.model_dump()
        elif hasattr(raw, "to_dict"):
            dumped = raw.to_dict()
        else:
            return None
    except (TypeError, ValueError, AttributeError) as e:
        logger.debug("Could not convert %s to a mapping: %s", type(raw).__name__, e)
        return None
    return dumped if isinstance(dumped, Mapping) else None


def _get(obj: Any, key: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key)
    return None


def _first(seq: Any) -> Any:
    if isinstance(seq, (list, tuple)) and seq:
        return seq[0]
    return None


def _coalesce(*values: Any) -> Any:
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def parse_args(value: Any) -> Any:
    """Parse tool arguments: objects pass through, JSON strings are decoded.

    Returns None for unparsable strings and for any other type.
    """
    if value is None:
        return None
    if isinstance(value, (Mapping, list)):
        return value
    if isinstance(value, str):
        try:
            return json.loads(value)
        except (ValueError, RecursionError):
            return None
    return None


def _message_of(response: Mapping[str, Any]) -> Any:
    choices = response.get("choices")
    if choices is not None:
        return _get(_first(choices), "message")
    # Native Anthropic messages carry ``content`` at the top level.
    if "content" in response:
        return response
    return None


def _mapping_or_none(value: Any) -> Optional[Mapping[str, Any]]:
    return value if isinstance(value, Mapping) else None


def _find_function_call(response: Mapping[str, Any], message: Any) -> Any:
    return _mapping_or_none(_get(message, "function_call"))


def _find_tool_call(response: Mapping[str, Any], message: Any) -> Any:
    return _mapping_or_none(_get(message, "tool_call"))


def _find_metadata_tool_call(response: Mapping[str, Any], message: Any) -> Any:
    return _mapping_or_none(_get(_get(message, "metadata"), "tool_call"))


def _find_tool_calls_entry(response: Mapping[str, Any], message: Any) -> Any:
    return _mapping_or_none(_first(_get(message, "tool_calls")))


def _find_tool_use_block(response: Mapping[str, Any], message: Any) -> Any:
    content = _get(message, "content")
    if not isinstance(content, (list, tuple)):
        return None
    for block in content:
        if _get(block, "type") == "tool_use":
            return block
    return None


def _find_gemini_function_call(response: Mapping[str, Any], message: Any) -> Any:
    candidate = _first(response.get("candidates"))
    parts = _get(_get(candidate, "content"), "parts")
    if not isinstance(parts, (list, tuple)):
        return None
    for part in parts:
        fc = _mapping_or_none(_get(part, "function_call"))
        if fc is not None:
            return fc
    return None


def _from_function_call(fc: Mapping[str, Any]) -> Tuple[Any, Any]:
    return fc.get("name"), parse_args(fc.get("arguments"))


def _from_tool_call(tc: Mapping[str, Any]) -> Tuple[Any, Any]:
    return tc.get("name"), parse_args(_coalesce(tc.get("arguments"), tc.get("args"), tc))


def _from_tool_calls_entry(tc: Mapping[str, Any]) -> Tuple[Any, Any]:
    fn = _mapping_or_none(tc.get("function"))
    if fn is None:
        return _from_tool_call(tc)
    name = _coalesce(fn.get("name"), tc.get("name"))
    return name, parse_args(_coalesce(fn.get("arguments"), fn.get("args"), fn))


def _from_tool_use_block(block: Mapping[str, Any]) -> Tuple[Any, Any]:
    return block.get("name"), parse_args(block.get("input"))


def _from_gemini_function_call(fc: Mapping[str, Any]) -> Tuple[Any, Any]:
    return fc.get("name"), parse_args(_coalesce(fc.get("args"), fc.get("arguments")))


@dataclass(frozen=True)
class ToolCallShape:
    """One recognised tool-call layout.

    ``find`` receives the whole response and its message (if any) and returns
    the fragment holding the call, or None. ``read`` turns that fragment into
    ``(name, args)``.
    """

    tag: str
    find: Callable[[Mapping[str, Any], Any], Any]
    read: Callable[[Mapping[str, Any]], Tuple[Any, Any]]


# Order matters: the first shape that matches is used.
TOOL_CALL_SHAPES: Sequence[ToolCallShape] = (
    ToolCallShape("function_call", _find_function_call, _from_function_call),
    ToolCallShape("tool_call", _find_tool_call, _from_tool_call),
    ToolCallShape("metadata.tool_call", _find_metadata_tool_call, _from_tool_call),
    ToolCallShape("tool_calls[0]", _find_tool_calls_entry, _from_tool_calls_entry),
    ToolCallShape("anthropic.tool_use", _find_tool_use_block, _from_tool_use_block),
    ToolCallShape("gemini.function_call", _find_gemini_function_call, _from_gemini_function_call),
)


def extract_tool_call(raw_response: Any) -> Optional[ToolCall]:
    """Return the tool call carried by ``raw_response``, or None if there is none."""
    response = _as_mapping(raw_response)
    if response is None:
        return None

    message = _message_of(response)
    for shape in TOOL_CALL_SHAPES:
        fragment = shape.find(response, message)
        if fragment is None:
            continue
        name, args = shape.read(fragment)
        logger.debug("Tool call matched shape %s: %s", shape.tag, name)
        return ToolCall(
            source=shape.tag,
            name=name if isinstance(name, str) else None,
            args=args,
            raw=fragment,
        )
    return None


def normalize(raw_response: Any, answer: str) -> NormalizedResult:
    """Pair the answer text with whatever tool call the response carries."""
    return NormalizedResult(answer=answer, tool_call=extract_tool_call(raw_response))
