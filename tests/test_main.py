import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from llm_relay import main
from llm_relay.settings import Settings


@pytest.fixture
def relay_service() -> MagicMock:
    """Mock RelayService returned by get_relay_service."""
    service = MagicMock()
    service.ask = AsyncMock(
        return_value={
            "content": [{"type": "text", "text": "answer [session_id: abc]"}],
            "session_id": "abc",
        }
    )
    service.clear = MagicMock(
        return_value={
            "content": [{"type": "text", "text": "Conversation default cleared."}],
            "session_id": "default",
        }
    )
    with patch("llm_relay.main.get_relay_service", return_value=service):
        yield service


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "tool, tool_name",
    [
        (main.ask_gpt, "ask_gpt"),
        (main.ask_claude, "ask_claude"),
        (main.ask_gemini, "ask_gemini"),
        (main.ask_openrouter, "ask_openrouter"),
        (main.ask_deepseek, "ask_deepseek"),
    ],
)
async def test_ask_tools_delegate(relay_service: MagicMock, tool, tool_name: str) -> None:
    """Each ask tool passes its arguments to the service under its own name."""
    result = await tool("hello?", session_id="abc")
    assert result.structuredContent["session_id"] == "abc"
    assert [block.text for block in result.content] == ["answer [session_id: abc]"]
    relay_service.ask.assert_awaited_once_with(
        tool_name,
        {"question": "hello?", "model": None, "tools": None, "session_id": "abc"},
    )


def test_clear_conversation_delegates(relay_service: MagicMock) -> None:
    """clear_conversation uses the sentinel by default."""
    result = main.clear_conversation()
    assert result.structuredContent["session_id"] == "default"
    assert result.content[0].text == "Conversation default cleared."
    relay_service.clear.assert_called_once_with({"session_id": "default"})


def test_envelope_blocks_become_top_level_content() -> None:
    """Answer and tool-call blocks are separate text contents; the envelope rides along."""
    envelope = {
        "content": [
            {"type": "text", "text": "answer"},
            {"type": "text", "text": '{"tool_call": {"name": "f"}}'},
        ],
        "session_id": "abc",
        "tool_call": {"name": "f"},
    }
    result = main.to_call_tool_result(envelope)
    assert [block.type for block in result.content] == ["text", "text"]
    assert result.content[0].text == "answer"
    assert result.content[1].text == '{"tool_call": {"name": "f"}}'
    assert result.structuredContent == envelope
    assert not result.isError


def test_setup_server_logging_writes_to_log_dir(tmp_path) -> None:
    """Logging gets a console handler and a rotating file under log_dir."""
    logger = logging.getLogger("llm_relay")
    saved = list(logger.handlers)
    logger.handlers.clear()
    try:
        with patch("llm_relay.main.get_settings", return_value=Settings(log_dir=tmp_path)):
            configured = main.setup_server_logging()
        assert configured is logger
        assert len(logger.handlers) == 2
        assert (tmp_path / "server.log").exists()
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers[:] = saved
