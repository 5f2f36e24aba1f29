"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Store IO is accessed through Protocol types
    - Implementations provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do network IO; the services await them
"""

from typing import AsyncIterator, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from endpoint_registry.schemas.endpoint import Endpoint


class EndpointRepository(Protocol):
    """Contract for endpoint record persistence, implemented by the shell."""
    async def exists(self, identifier: str) -> bool: ...
    async def get(self, identifier: str) -> "Endpoint": ...
    async def put(self, endpoint: "Endpoint") -> None: ...
    def iter_all(self) -> AsyncIterator["Endpoint"]: ...
    async def list_all(self) -> list["Endpoint"]: ...
    async def health_check(self) -> bool: ...
