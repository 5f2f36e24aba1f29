"""Endpoint Routes - list, fetch and create-or-replace endpoint records.

Invariants:
    - Every path below /endpoints/ reaches the single-resource handlers, so a
      malformed identifier answers 400 instead of 404
    - POST answers 201 (created) or 204 (updated) with an empty body
    - Methods other than GET/POST answer 405 (api/error_handlers.py)
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status

from endpoint_registry.api.dependencies import describe_client, get_endpoint_repository
from endpoint_registry.core.domain_types import SaveOutcome
from endpoint_registry.core.repository_protocols import EndpointRepository
from endpoint_registry.services.endpoint_service import (
    fetch_endpoint, list_endpoints, save_endpoint,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/endpoints", tags=["endpoints"])

_STATUS_BY_OUTCOME = {
    SaveOutcome.CREATED: status.HTTP_201_CREATED,
    SaveOutcome.UPDATED: status.HTTP_204_NO_CONTENT,
}


def _log_request(request: Request) -> None:
    logger.info(
        f"{request.method} {request.url.path} from {describe_client(request)}",
        extra={"method": request.method, "path": request.url.path},
    )


@router.get("")
async def get_endpoints(
    request: Request, repo: EndpointRepository = Depends(get_endpoint_repository),
):
    """List every stored endpoint record."""
    _log_request(request)
    endpoints = await list_endpoints(repo)
    return [endpoint.to_payload() for endpoint in endpoints]


@router.get("/{identifier:path}")
async def get_endpoint(
    request: Request, repo: EndpointRepository = Depends(get_endpoint_repository),
):
    """Fetch one endpoint record."""
    _log_request(request)
    endpoint = await fetch_endpoint(repo, request.url.path)
    return endpoint.to_payload()


@router.post("/{identifier:path}")
async def post_endpoint(
    request: Request, repo: EndpointRepository = Depends(get_endpoint_repository),
):
    """Create or replace one endpoint record."""
    _log_request(request)
    body = await request.body()
    outcome = await save_endpoint(repo, request.url.path, body)
    return Response(status_code=_STATUS_BY_OUTCOME[outcome])
