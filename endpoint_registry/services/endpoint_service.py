"""Endpoint Service - fetch, list and create-or-replace endpoint records.

Invariants:
    - The record is written under the body identifier's key
    - An existing record is only replaced when the path identifier equals the
      body identifier; a mismatch raises before any write
    - A record that does not exist yet is created regardless of the path identifier

Design Decisions:
    - Check-then-set is NOT atomic. Two concurrent creations of the same new
      identifier can both report CREATED and the later HSET wins. This weak
      consistency is accepted; no WATCH/MULTI or conditional write is used.
"""

import logging

from endpoint_registry.core.domain_types import SaveOutcome
from endpoint_registry.core.errors import ErrorContext, IdentifierMismatchError
from endpoint_registry.core.identifiers import extract_identifier
from endpoint_registry.core.repository_protocols import EndpointRepository
from endpoint_registry.schemas.endpoint import Endpoint

logger = logging.getLogger(__name__)


async def fetch_endpoint(repo: EndpointRepository, path: str) -> Endpoint:
    """Resolve /endpoints/<id> to its stored record."""
    identifier = extract_identifier(path)
    return await repo.get(identifier)


async def list_endpoints(repo: EndpointRepository) -> list[Endpoint]:
    return await repo.list_all()


async def save_endpoint(
    repo: EndpointRepository, path: str, body: str | bytes,
) -> SaveOutcome:
    """Create or replace the record carried in body.

    Raises InvalidIdentifierError, MalformedPayloadError,
    IdentifierMismatchError or StoreUnavailableError.
    """
    path_identifier = extract_identifier(path)
    endpoint = Endpoint.from_json(body)

    if await repo.exists(endpoint.identifier):
        if path_identifier != endpoint.identifier:
            raise IdentifierMismatchError(
                path_identifier, endpoint.identifier,
                ErrorContext(identifier=endpoint.identifier),
            )
        outcome = SaveOutcome.UPDATED
    else:
        outcome = SaveOutcome.CREATED

    await repo.put(endpoint)
    logger.info(
        f"endpoint {endpoint.identifier} {outcome.value}",
        extra={"identifier": endpoint.identifier},
    )
    return outcome
