"""Infrastructure Layer - store client and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Every store call maps client exceptions to StoreUnavailableError
"""
