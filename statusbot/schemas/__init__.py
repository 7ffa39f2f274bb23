"""Pydantic Schemas: Slack webhook payloads validated at the HTTP boundary.

Invariants:
    - Schemas validate at system boundary (slash commands, event callbacks)

Design Decisions:
    - Separate from models: schemas are wire contracts, models are persistence
"""
