"""Route Modules — one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Project and task routes depend on get_current_user; health routes do not

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
