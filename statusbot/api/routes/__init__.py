"""Route Modules: one file per endpoint group.

Invariants:
    - Each module defines its own APIRouter
    - Routes never contain business logic (delegate to core/ and services/)
"""
