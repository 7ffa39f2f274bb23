"""Core Layer: pure command grammar, block formatting, and storage contracts.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/, or db/
    - All functions are pure and synchronous

Design Decisions:
    - Functional core separated from imperative shell: parsing and formatting are
      testable without a database or an HTTP client
"""
