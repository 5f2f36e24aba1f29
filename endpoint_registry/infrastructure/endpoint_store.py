"""Endpoint Store - Valkey/Redis adapter holding one hash per endpoint record.

Invariants:
    - Every record lives under the single key "endpoint:" + identifier
    - put() is one HSET carrying all six fields; it overwrites unconditionally
    - All redis-py exceptions mapped to StoreUnavailableError (core/errors.py)
    - list_all() returns every record or raises; never a partial listing
    - The client must be created with decode_responses=True (str, not bytes)

Design Decisions:
    - SCAN over KEYS for enumeration: incremental on large keyspaces; keys
      reported twice by SCAN are read once
    - No in-process cache: the store is the single source of truth
"""

import logging
from typing import AsyncIterator

import redis.asyncio as redis
from redis.exceptions import RedisError

from endpoint_registry.core.domain_types import ENDPOINT_KEY_PREFIX, StoreKey, store_key
from endpoint_registry.core.errors import (
    CorruptRecordError, ErrorContext, ResourceNotFoundError, StoreUnavailableError,
)
from endpoint_registry.schemas.endpoint import Endpoint

logger = logging.getLogger(__name__)


class EndpointStore:
    """Reads and writes endpoint records in a Valkey/Redis database."""

    def __init__(self, client: redis.Redis, key_prefix: str = ENDPOINT_KEY_PREFIX):
        self.client = client
        self.key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "EndpointStore":
        """Build a store with its own connection pool (db index taken from the URL path)."""
        client = redis.Redis.from_url(url, decode_responses=True, **kwargs)
        return cls(client)

    def key(self, identifier: str) -> StoreKey:
        return store_key(identifier, self.key_prefix)

    async def exists(self, identifier: str) -> bool:
        """True iff any field is stored under the identifier's key."""
        key = self.key(identifier)
        try:
            return await self.client.hlen(key) > 0
        except RedisError as e:
            raise _unavailable(e, "hlen", key, identifier)

    async def get(self, identifier: str) -> Endpoint:
        """Read one record. Raises ResourceNotFoundError or CorruptRecordError."""
        key = self.key(identifier)
        fields = await self._hgetall(key, identifier)
        if not fields:
            raise ResourceNotFoundError(
                "Endpoint", identifier,
                ErrorContext(identifier=identifier, store_key=key),
            )
        return _decode(fields, key)

    async def put(self, endpoint: Endpoint) -> None:
        """Write all fields of the record in one HSET."""
        key = self.key(endpoint.identifier)
        try:
            await self.client.hset(key, mapping=endpoint.to_fields())
        except RedisError as e:
            raise _unavailable(e, "hset", key, endpoint.identifier)

    async def iter_all(self) -> AsyncIterator[Endpoint]:
        """Yield every stored record in store enumeration order."""
        pattern = f"{self.key_prefix}*"
        keys = self.client.scan_iter(match=pattern)
        seen: set[str] = set()
        while True:
            try:
                key = await anext(keys)
            except StopAsyncIteration:
                return
            except RedisError as e:
                raise _unavailable(e, "scan", pattern)
            if key in seen:
                continue
            seen.add(key)
            fields = await self._hgetall(StoreKey(key))
            if not fields:
                logger.debug(f"{key} vanished during listing, skipped")
                continue
            yield _decode(fields, StoreKey(key))

    async def list_all(self) -> list[Endpoint]:
        """Materialize every stored record; any failure aborts the listing."""
        return [endpoint async for endpoint in self.iter_all()]

    async def health_check(self) -> bool:
        """Check store connectivity (for readiness probes)."""
        try:
            return bool(await self.client.ping())
        except RedisError as e:
            logger.error(f"Store health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.aclose()

    async def _hgetall(self, key: StoreKey, identifier: str | None = None) -> dict[str, str]:
        try:
            return await self.client.hgetall(key)
        except RedisError as e:
            raise _unavailable(e, "hgetall", key, identifier)


def _decode(fields: dict[str, str], key: StoreKey) -> Endpoint:
    try:
        return Endpoint.from_fields(fields)
    except CorruptRecordError as e:
        e.context.store_key = key
        raise


def _unavailable(
    exc: RedisError, operation: str, key: str, identifier: str | None = None,
) -> StoreUnavailableError:
    logger.error(f"{operation} {key}: {exc}", extra={"store_key": key})
    return StoreUnavailableError(
        str(exc), operation,
        ErrorContext(identifier=identifier, store_key=key),
    )
