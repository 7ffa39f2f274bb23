"""API Layer: FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Slack-facing endpoints answer 200 for every recoverable failure
"""
