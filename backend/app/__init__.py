"""Planboard API Package — owner-scoped projects, members, tasks and aggregates.

Invariants:
    - Package root contains no executable code (no import side-effects)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
