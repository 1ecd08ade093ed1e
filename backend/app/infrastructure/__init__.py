"""Infrastructure Layer — database engine, bearer-token auth and logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Driver errors are mapped to DatabaseError before leaving this layer

Design Decisions:
    - One module per external concern (database, auth, observability)
"""
