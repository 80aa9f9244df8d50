"""LLM relay MCP server: ask several model providers through one stdio server."""

import logging
from logging.handlers import RotatingFileHandler
from typing import Any

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, TextContent

from .models import DEFAULT_SESSION_ID
from .service import get_relay_service
from .settings import get_settings


def setup_server_logging() -> logging.Logger:
    """Configure and return the package logger.

    Console output goes to stderr; stdout carries the MCP protocol.
    """
    settings = get_settings()
    logs_dir = settings.log_dir
    logs_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("llm_relay")
    if logger.handlers:
        return logger

    logger.setLevel(settings.log_level)
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    fh = RotatingFileHandler(logs_dir / "server.log", maxBytes=5_000_000, backupCount=3)
    fh.setFormatter(fmt)
    logger.addHandler(fh)

    return logger


mcp = FastMCP("llm-relay")


def to_call_tool_result(envelope: dict[str, Any]) -> CallToolResult:
    """Send the envelope's text blocks as content and the whole envelope as structured content."""
    return CallToolResult(
        content=[TextContent(type="text", text=block["text"]) for block in envelope["content"]],
        structuredContent=envelope,
    )


async def _ask(
    tool_name: str,
    question: str,
    model: str | None,
    tools: Any,
    session_id: str,
) -> dict[str, Any]:
    return await get_relay_service().ask(
        tool_name,
        {"question": question, "model": model, "tools": tools, "session_id": session_id},
    )


@mcp.tool()
async def ask_gpt(
    question: str,
    model: str | None = None,
    tools: Any = None,
    session_id: str = DEFAULT_SESSION_ID,
) -> CallToolResult:
    """Ask OpenAI models. Use o-series for reasoning (o3, o4-mini), GPT-4.1-series for dev tasks.

    Omit session_id to start a new conversation; pass back the returned
    session_id to continue one.
    """
    return to_call_tool_result(await _ask("ask_gpt", question, model, tools, session_id))


@mcp.tool()
async def ask_claude(
    question: str,
    model: str | None = None,
    tools: Any = None,
    session_id: str = DEFAULT_SESSION_ID,
) -> CallToolResult:
    """Ask Anthropic models. claude-sonnet-4-20250514 (default) for balanced performance."""
    return to_call_tool_result(await _ask("ask_claude", question, model, tools, session_id))


@mcp.tool()
async def ask_gemini(
    question: str,
    model: str | None = None,
    tools: Any = None,
    session_id: str = DEFAULT_SESSION_ID,
) -> CallToolResult:
    """Ask Google models. 2.5 Pro for complex problems, 2.5 Flash for price/performance."""
    return to_call_tool_result(await _ask("ask_gemini", question, model, tools, session_id))


@mcp.tool()
async def ask_openrouter(
    question: str,
    model: str | None = None,
    tools: Any = None,
    session_id: str = DEFAULT_SESSION_ID,
) -> CallToolResult:
    """Ask any model available on OpenRouter (e.g. qwen/qwen3-235b-a22b-07-25)."""
    return to_call_tool_result(await _ask("ask_openrouter", question, model, tools, session_id))


@mcp.tool()
async def ask_deepseek(
    question: str,
    model: str | None = None,
    tools: Any = None,
    session_id: str = DEFAULT_SESSION_ID,
) -> CallToolResult:
    """Ask DeepSeek models through OpenRouter (e.g. deepseek/deepseek-chat-v3.1)."""
    return to_call_tool_result(await _ask("ask_deepseek", question, model, tools, session_id))


@mcp.tool()
def clear_conversation(session_id: str = DEFAULT_SESSION_ID) -> CallToolResult:
    """Clear the conversation history of a session."""
    return to_call_tool_result(get_relay_service().clear({"session_id": session_id}))


def main() -> None:
    logger = setup_server_logging()
    service = get_relay_service()
    logger.info("LLM relay MCP server running on stdio (tools: %s)", ", ".join(service.tool_names))
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
