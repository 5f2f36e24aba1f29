"""Endpoint Registry - configuration records for monitored endpoints, kept in Valkey.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
