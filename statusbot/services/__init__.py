"""Services Layer: action execution and event ingestion.

Invariants:
    - Services talk to storage only through core/repository_protocols.py
    - Action dispatch uses an explicit mapping (no auto-discovery)
"""
