"""MCP server that relays questions to several LLM providers with short-lived sessions."""

from .service import RelayService, create_relay_service, get_relay_service

__all__ = ["RelayService", "create_relay_service", "get_relay_service"]
