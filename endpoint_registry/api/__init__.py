"""API Layer - FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Failures answer with a status code and an empty body

Design Decisions:
    - Thin routes delegate to services
"""
