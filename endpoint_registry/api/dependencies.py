"""FastAPI dependencies resolving per-app collaborators from app.state."""

from fastapi import Request

from endpoint_registry.core.repository_protocols import EndpointRepository


def get_endpoint_repository(request: Request) -> EndpointRepository:
    """The store created by create_app(); overridable in tests."""
    return request.app.state.endpoint_store


def describe_client(request: Request) -> str:
    if request.client is None:
        return "unknown"
    return f"{request.client.host}:{request.client.port}"
