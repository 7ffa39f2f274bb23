"""StatusBot Application Package: team status tracking over Slack webhooks.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
