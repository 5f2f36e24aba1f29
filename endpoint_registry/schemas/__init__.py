"""Pydantic Schemas - the endpoint record and its wire/store mappings.

Invariants:
    - Schemas validate at the system boundary (request bodies, stored hashes)
    - Field names are shared by the JSON payload and the stored hash
"""
