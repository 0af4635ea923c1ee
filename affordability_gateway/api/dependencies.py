"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from affordability_gateway.infrastructure.clients.mono import MonoClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_mono_client() -> MonoClient:
    """Provide Mono API client instance"""
    return MonoClient()
