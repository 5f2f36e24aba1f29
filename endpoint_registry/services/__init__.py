"""Service Layer - orchestration between the API routes and the store.

Invariants:
    - Services depend on EndpointRepository, never on a concrete client
    - No service holds in-process state between requests
"""
