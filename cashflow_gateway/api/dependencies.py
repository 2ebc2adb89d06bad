"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from cashflow_gateway.infrastructure.clients.chat import ChatClient
from cashflow_gateway.infrastructure.clients.renderer import RendererClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_chat_client() -> ChatClient:
    """Provide language model client instance"""
    return ChatClient()


def get_renderer_client() -> RendererClient:
    """Provide PDF renderer client instance"""
    return RendererClient()
