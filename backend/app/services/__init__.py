"""Services Layer — owner-scoped project and task operations over an AsyncSession.

Invariants:
    - Every query is filtered by the caller's user_id
    - Services commit their own writes; routes never touch the session

Design Decisions:
    - One service class per aggregate root (Project), built per request
"""
