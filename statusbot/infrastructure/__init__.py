"""Infrastructure Layer: database sessions, SQL repositories, Slack client, logging.

Invariants:
    - All external calls wrapped with timeout and error mapping
    - SQLAlchemy and httpx exceptions never escape; they are mapped to core/errors.py
"""
